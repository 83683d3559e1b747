# toyflow/ast_helper.py
"""
Tree-walking helpers shared by the analyzers.

All helpers take a statement list (a program's top level or a body) and
look through every nesting level.  None of them evaluate conditions:
they describe what a body *contains*, not what it does.
"""

from __future__ import annotations

from typing import Iterable, Iterator, List, Set, Union

from toyflow.ast_nodes import (
    Assignment,
    IfStatement,
    Statement,
    WhileStatement,
)

Conditional = Union[IfStatement, WhileStatement]


def iter_statements(body: Iterable[Statement]) -> Iterator[Statement]:
    """Yield every statement of *body* in source (pre-)order."""
    for stmt in body:
        yield stmt
        if isinstance(stmt, (IfStatement, WhileStatement)):
            yield from iter_statements(stmt.body)


def write_names(body: Iterable[Statement]) -> Set[str]:
    """Names of all variables assigned anywhere inside *body*."""
    return {
        stmt.target.name
        for stmt in iter_statements(body)
        if isinstance(stmt, Assignment)
    }


def collect_assignments(body: Iterable[Statement]) -> List[Assignment]:
    """All assignments inside *body*, in source order."""
    return [stmt for stmt in iter_statements(body) if isinstance(stmt, Assignment)]


def iter_conditionals(body: Iterable[Statement]) -> Iterator[Conditional]:
    """Every ``if`` and ``while`` node inside *body*."""
    for stmt in iter_statements(body):
        if isinstance(stmt, (IfStatement, WhileStatement)):
            yield stmt


__all__ = [
    "Conditional",
    "iter_statements",
    "write_names",
    "collect_assignments",
    "iter_conditionals",
]
