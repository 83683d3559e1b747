# tests/test_parser.py
"""
Tests for the toy-language parser: source text → AST nodes.
"""

import pytest

from toyflow.ast_nodes import (
    Assignment, BinaryExpression, BinOp, Constant, IfStatement,
    PriorityExpression, Program, Variable, WhileStatement,
)
from toylang.errors import ToylangError, ToySyntaxError
from toylang.parser import parse, parse_file
from tests.conftest import NESTED_DEAD_SRC, NEVER_IF_SRC


def _value(src):
    """Right-hand side of the first statement of *src*."""
    return parse(src).statements[0].value


class TestParseStatements:

    def test_assignment(self):
        prog = parse("a = 1")
        assert isinstance(prog, Program)
        (stmt,) = prog.statements
        assert isinstance(stmt, Assignment)
        assert stmt.target == Variable("a")
        assert stmt.value == Constant(1)

    def test_if_block(self):
        prog = parse(NEVER_IF_SRC)
        stmt = prog.statements[1]
        assert isinstance(stmt, IfStatement)
        assert stmt.condition == BinaryExpression(Variable("a"), BinOp.GT, Constant(10))
        assert len(stmt.body) == 1

    def test_nested_blocks(self):
        prog = parse(NESTED_DEAD_SRC)
        outer = prog.statements[1]
        assert isinstance(outer.body[1], IfStatement)
        assert isinstance(outer.body[2], WhileStatement)
        assert len(prog.statements) == 3

    def test_one_line_program(self):
        prog = parse("a = 5 if a > 10 b = 1 end")
        assert len(prog.statements) == 2
        assert prog.statements[1].body[0].target == Variable("b")

    def test_source_is_kept(self):
        assert parse(NEVER_IF_SRC).source == NEVER_IF_SRC

    def test_every_statement_has_a_unique_id(self):
        prog = parse(NESTED_DEAD_SRC)
        ids = [stmt.node_id for stmt in prog.walk()]
        assert len(ids) == len(set(ids)) == 8


class TestParseExpressions:

    def test_multiplication_binds_tighter(self):
        assert _value("a = 1 + 2 * 3") == BinaryExpression(
            Constant(1), BinOp.ADD,
            BinaryExpression(Constant(2), BinOp.MUL, Constant(3)),
        )

    def test_comparison_binds_loosest(self):
        assert _value("a = b < c + 1") == BinaryExpression(
            Variable("b"), BinOp.LT,
            BinaryExpression(Variable("c"), BinOp.ADD, Constant(1)),
        )

    def test_left_associative(self):
        assert _value("a = 8 - 3 - 1") == BinaryExpression(
            BinaryExpression(Constant(8), BinOp.SUB, Constant(3)),
            BinOp.SUB, Constant(1),
        )
        assert _value("a = 8 / 2 * 3") == BinaryExpression(
            BinaryExpression(Constant(8), BinOp.DIV, Constant(2)),
            BinOp.MUL, Constant(3),
        )

    def test_parentheses_become_priority_nodes(self):
        assert _value("a = (1 + 2) * 3") == BinaryExpression(
            PriorityExpression(BinaryExpression(Constant(1), BinOp.ADD, Constant(2))),
            BinOp.MUL, Constant(3),
        )


class TestParseLocations:

    def test_lines_and_columns(self):
        prog = parse(NEVER_IF_SRC, filename="demo.toy")
        stmt = prog.statements[1]
        assert (stmt.loc.file, stmt.loc.line, stmt.loc.col) == ("demo.toy", 2, 1)
        inner = stmt.body[0]
        assert (inner.loc.line, inner.loc.col) == (3, 3)

    def test_leading_whitespace(self):
        stmt = parse("\n\n   a = 1").statements[0]
        assert (stmt.loc.line, stmt.loc.col) == (3, 4)


class TestParseErrors:

    def test_empty_input(self):
        with pytest.raises(ToySyntaxError) as info:
            parse("")
        assert "end of input" in info.value.message

    def test_whitespace_only(self):
        with pytest.raises(ToySyntaxError):
            parse("  \n\t ")

    def test_multi_letter_name(self):
        with pytest.raises(ToySyntaxError) as info:
            parse("a = 1\nb = 2\nab = 3", filename="bad.toy")
        err = info.value
        assert err.span.line == 3
        assert err.span.column == 1
        assert err.got == "ab"
        assert err.to_gcc_format().startswith("bad.toy:3:1: error:")

    def test_missing_end(self):
        with pytest.raises(ToySyntaxError):
            parse("a = 1\nif a > 0\n  b = 2\n")

    def test_stray_end(self):
        with pytest.raises(ToylangError):
            parse("a = 1\nend")

    def test_unknown_operator(self):
        with pytest.raises(ToySyntaxError):
            parse("a = 1 % 2")


class TestParseFile:

    def test_parse_file(self, source_file):
        path = source_file(NEVER_IF_SRC)
        prog = parse_file(str(path))
        assert prog.statements[0].loc.file == str(path)
        assert len(prog.statements) == 2
