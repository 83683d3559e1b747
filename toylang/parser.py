# toylang/parser.py
"""
Toy language parser: source text → ``toyflow`` AST.

The grammar lives in ``toylang.grammar``; this module turns the
parsimonious parse tree into AST nodes and converts parse failures into
``ToySyntaxError``.
"""

from __future__ import annotations

import logging
import re
from typing import Any

from parsimonious.exceptions import IncompleteParseError, ParseError
from parsimonious.nodes import Node, NodeVisitor

from toyflow.ast_nodes import (
    Assignment,
    BinaryExpression,
    BinOp,
    Constant,
    Expression,
    IfStatement,
    Loc,
    PriorityExpression,
    Program,
    Variable,
    WhileStatement,
)
from toylang.errors import SourceSpan, ToySyntaxError
from toylang.grammar import TOYLANG_GRAMMAR

logger = logging.getLogger(__name__)

_STATEMENT_HINT = "statements are 'x = expr', 'if expr ... end' or 'while expr ... end'"
_WORD = re.compile(r"\S+")


class ToyASTBuilder(NodeVisitor):
    """Transforms the parsimonious parse tree into AST nodes."""

    def __init__(self, filename: str = "<string>") -> None:
        self.filename = filename

    def generic_visit(self, node, visited_children):
        """Default: pass children through; leaves yield the node itself."""
        return visited_children or node

    def _loc(self, node: Node) -> Loc:
        span = SourceSpan.from_offset(node.full_text, node.start, self.filename)
        return Loc(file=self.filename, line=span.line, col=span.column)

    # ─────────────────────────────────────────────────────────────
    # Statements
    # ─────────────────────────────────────────────────────────────

    def visit_program(self, node, visited_children):
        _, statements = visited_children
        return Program(statements=tuple(statements), source=node.full_text)

    def visit_statement(self, node, visited_children):
        return visited_children[0]

    def visit_assignment(self, node, visited_children):
        target, _, value = visited_children
        return Assignment(target=target, value=value, loc=self._loc(node))

    def visit_if_stmt(self, node, visited_children):
        _, condition, body, _ = visited_children
        return IfStatement(condition=condition, body=tuple(body), loc=self._loc(node))

    def visit_while_stmt(self, node, visited_children):
        _, condition, body, _ = visited_children
        return WhileStatement(condition=condition, body=tuple(body), loc=self._loc(node))

    # ─────────────────────────────────────────────────────────────
    # Expressions
    # ─────────────────────────────────────────────────────────────

    @staticmethod
    def _fold_left(first: Expression, rest: Any) -> Expression:
        # rest: one [operator, operand] pair per repetition
        expr = first
        for op, operand in rest:
            expr = BinaryExpression(expr, op, operand)
        return expr

    def visit_expr(self, node, visited_children):
        first, rest = visited_children
        return self._fold_left(first, rest)

    visit_additive = visit_expr
    visit_term = visit_expr

    def visit_factor(self, node, visited_children):
        return visited_children[0]

    def visit_group(self, node, visited_children):
        _, inner, _ = visited_children
        return PriorityExpression(inner)

    # ─────────────────────────────────────────────────────────────
    # Tokens
    # ─────────────────────────────────────────────────────────────

    def visit_name(self, node, visited_children):
        token, _ = visited_children
        return Variable(token.text)

    def visit_number(self, node, visited_children):
        token, _ = visited_children
        return Constant(int(token.text))

    def visit_compare_op(self, node, visited_children):
        token, _ = visited_children
        return BinOp.from_symbol(token.text)

    visit_add_op = visit_compare_op
    visit_mul_op = visit_compare_op


def _syntax_error(exc: ParseError, source: str, filename: str) -> ToySyntaxError:
    pos = exc.pos if exc.pos is not None else 0
    span = SourceSpan.from_offset(source, pos, filename)
    match = _WORD.search(source, pos)
    if match is None:
        return ToySyntaxError("unexpected end of input", span=span, hint=_STATEMENT_HINT)
    got = match.group(0)
    if isinstance(exc, IncompleteParseError):
        message = f"unexpected {got!r} after the last complete statement"
    else:
        message = f"unexpected {got!r}"
    return ToySyntaxError(
        message,
        span=SourceSpan.from_offset(source, match.start(), filename),
        got=got,
        hint=_STATEMENT_HINT,
    )


def parse(source: str, filename: str = "<string>") -> Program:
    """
    Parse *source* into a ``Program``.

    Raises
    ------
    ToySyntaxError
        If *source* is not a valid program.
    """
    try:
        tree = TOYLANG_GRAMMAR.parse(source)
    except ParseError as exc:
        error = _syntax_error(exc, source, filename)
        logger.debug("parse failed: %s", error)
        raise error from exc
    program = ToyASTBuilder(filename).visit(tree)
    logger.debug("parsed %s: %d top-level statement(s)", filename, len(program.statements))
    return program


def parse_file(path: str) -> Program:
    """Read and parse the program stored at *path*."""
    with open(path, "r", encoding="utf-8") as handle:
        return parse(handle.read(), filename=str(path))


__all__ = [
    "ToyASTBuilder",
    "parse",
    "parse_file",
]
