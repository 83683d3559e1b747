# toylang/printer.py
"""
Render AST nodes back to toy-language source.

The output re-parses to a structurally identical program: binary
operators print as ``left op right``, and parentheses appear exactly
where the tree holds a ``PriorityExpression``.
"""

from __future__ import annotations

from typing import List

from toyflow.ast_nodes import (
    Assignment,
    BinaryExpression,
    Constant,
    Expression,
    IfStatement,
    PriorityExpression,
    Program,
    Statement,
    Variable,
    WhileStatement,
)

INDENT = "  "


def format_expression(expr: Expression) -> str:
    if isinstance(expr, Variable):
        return expr.name
    if isinstance(expr, Constant):
        return str(expr.value)
    if isinstance(expr, BinaryExpression):
        return f"{format_expression(expr.left)} {expr.op.value} {format_expression(expr.right)}"
    if isinstance(expr, PriorityExpression):
        return f"({format_expression(expr.inner)})"
    raise TypeError(f"not an expression node: {expr!r}")


def _statement_lines(stmt: Statement, depth: int, header_only: bool) -> List[str]:
    pad = INDENT * depth
    if isinstance(stmt, Assignment):
        return [f"{pad}{stmt.target.name} = {format_expression(stmt.value)}"]
    if isinstance(stmt, (IfStatement, WhileStatement)):
        keyword = "if" if isinstance(stmt, IfStatement) else "while"
        lines = [f"{pad}{keyword} {format_expression(stmt.condition)}"]
        if header_only:
            return lines
        for inner in stmt.body:
            lines.extend(_statement_lines(inner, depth + 1, False))
        lines.append(f"{pad}end")
        return lines
    raise TypeError(f"not a statement node: {stmt!r}")


def format_statement(stmt: Statement, header_only: bool = False) -> str:
    """
    Render one statement.

    With *header_only*, an ``if`` / ``while`` renders as its first line
    only (``if a > 10``), which is what diagnostics show.
    """
    return "\n".join(_statement_lines(stmt, 0, header_only))


def format_program(program: Program) -> str:
    lines: List[str] = []
    for stmt in program.statements:
        lines.extend(_statement_lines(stmt, 0, False))
    return "\n".join(lines) + "\n"


__all__ = [
    "format_expression",
    "format_statement",
    "format_program",
]
