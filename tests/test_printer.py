# tests/test_printer.py

from toyflow.ast_nodes import BinaryExpression, BinOp, Constant, Variable
from toylang.parser import parse
from toylang.printer import format_expression, format_program, format_statement
from tests.conftest import NESTED_DEAD_SRC, NEVER_IF_SRC


class TestFormatting:

    def test_expression(self):
        expr = BinaryExpression(Variable("a"), BinOp.ADD, Constant(1))
        assert format_expression(expr) == "a + 1"

    def test_parentheses_preserved(self):
        prog = parse("a = (1 + b) * 3")
        assert format_statement(prog.statements[0]) == "a = (1 + b) * 3"

    def test_header_only(self):
        stmt = parse(NEVER_IF_SRC).statements[1]
        assert format_statement(stmt, header_only=True) == "if a > 10"
        assert format_statement(stmt) == "if a > 10\n  b = 1\nend"

    def test_program_round_trip(self):
        assert format_program(parse(NESTED_DEAD_SRC)) == NESTED_DEAD_SRC

    def test_reformat_is_stable(self):
        text = format_program(parse("a=1 while a<3 a=a+1 end"))
        assert text == "a = 1\nwhile a < 3\n  a = a + 1\nend\n"
        assert format_program(parse(text)) == text
