# toyflow/ast_nodes.py
"""
AST node definitions and the partial evaluator.

Expressions are immutable values compared structurally.  Statements are
immutable too, but compare by identity: two textually identical ``if``
statements at different positions are different nodes, and each carries
a process-unique ``node_id`` that later passes use as a lookup key.
"""

from __future__ import annotations

import itertools
import operator
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Dict, FrozenSet, Iterator, Mapping, Optional, Tuple, Union

from toyflow.errors import FoldingError


# ── Source Location ──────────────────────────────────────────────

@dataclass(frozen=True)
class Loc:
    """Source location for diagnostics."""
    file: str = "<unknown>"
    line: int = 0
    col: int = 0

    def __str__(self):
        return f"{self.file}:{self.line}:{self.col}"


# ── Operators ────────────────────────────────────────────────────

class BinOp(Enum):
    LT = "<"
    GT = ">"
    ADD = "+"
    SUB = "-"
    MUL = "*"
    DIV = "/"

    @property
    def precedence(self) -> int:
        if self in (BinOp.LT, BinOp.GT):
            return 1
        if self in (BinOp.ADD, BinOp.SUB):
            return 2
        return 3

    @classmethod
    def from_symbol(cls, symbol: str) -> BinOp:
        return cls(symbol)


def _truncating_div(left: int, right: int) -> int:
    # Quotient rounds toward zero, not toward negative infinity.
    if right == 0:
        raise FoldingError(f"division by zero in {left} / {right}", f"{left} / {right}")
    quotient = abs(left) // abs(right)
    return quotient if (left >= 0) == (right >= 0) else -quotient


_FOLDERS: Dict[BinOp, Callable[[int, int], int]] = {
    BinOp.ADD: operator.add,
    BinOp.SUB: operator.sub,
    BinOp.MUL: operator.mul,
    BinOp.DIV: _truncating_div,
    BinOp.LT: lambda left, right: int(left < right),
    BinOp.GT: lambda left, right: int(left > right),
}


# ── Expressions ──────────────────────────────────────────────────

@dataclass(frozen=True)
class Variable:
    name: str


@dataclass(frozen=True)
class Constant:
    value: int


@dataclass(frozen=True)
class BinaryExpression:
    left: Expression
    op: BinOp
    right: Expression


@dataclass(frozen=True)
class PriorityExpression:
    """Parenthesised expression; kept only for display."""
    inner: Expression


Expression = Union[Variable, Constant, BinaryExpression, PriorityExpression]


# ── Statements ───────────────────────────────────────────────────

_node_ids = itertools.count(1)


def _next_node_id() -> int:
    return next(_node_ids)


@dataclass(frozen=True, eq=False)
class Assignment:
    target: Variable
    value: Expression
    loc: Loc = field(default_factory=Loc)
    node_id: int = field(default_factory=_next_node_id, init=False)


@dataclass(frozen=True, eq=False)
class IfStatement:
    condition: Expression
    body: StatementList
    loc: Loc = field(default_factory=Loc)
    node_id: int = field(default_factory=_next_node_id, init=False)


@dataclass(frozen=True, eq=False)
class WhileStatement:
    condition: Expression
    body: StatementList
    loc: Loc = field(default_factory=Loc)
    node_id: int = field(default_factory=_next_node_id, init=False)


Statement = Union[Assignment, IfStatement, WhileStatement]
StatementList = Tuple[Statement, ...]


@dataclass(eq=False)
class Program:
    """Root of a parsed program: one statement list plus an id index."""
    statements: StatementList
    source: str = ""
    _index: Optional[Dict[int, Statement]] = field(default=None, init=False, repr=False)

    def walk(self) -> Iterator[Statement]:
        """Yield every statement in pre-order, nested bodies included."""
        stack = list(reversed(self.statements))
        while stack:
            stmt = stack.pop()
            yield stmt
            if isinstance(stmt, (IfStatement, WhileStatement)):
                stack.extend(reversed(stmt.body))

    def statement_by_id(self, node_id: int) -> Statement:
        if self._index is None:
            self._index = {stmt.node_id: stmt for stmt in self.walk()}
        try:
            return self._index[node_id]
        except KeyError:
            raise KeyError(f"no statement with node id {node_id} in this program") from None


# ── Queries & partial evaluation ─────────────────────────────────

def get_names(expr: Expression) -> FrozenSet[str]:
    """Every variable name referenced anywhere in *expr*."""
    if isinstance(expr, Variable):
        return frozenset((expr.name,))
    if isinstance(expr, Constant):
        return frozenset()
    if isinstance(expr, BinaryExpression):
        return get_names(expr.left) | get_names(expr.right)
    if isinstance(expr, PriorityExpression):
        return get_names(expr.inner)
    raise TypeError(f"not an expression node: {expr!r}")


def evaluate(expr: Expression, bindings: Mapping[str, int]) -> Expression:
    """
    Partially evaluate *expr* under *bindings*.

    Bound variables are replaced by constants and every binary node whose
    operands both fold is folded.  Whatever cannot be resolved stays
    symbolic, with the resolved parts already folded in.  The input tree
    is never modified.

    Raises
    ------
    FoldingError
        If a division by a folded zero is encountered.
    """
    if isinstance(expr, Variable):
        if expr.name in bindings:
            return Constant(bindings[expr.name])
        return expr
    if isinstance(expr, Constant):
        return expr
    if isinstance(expr, BinaryExpression):
        left = evaluate(expr.left, bindings)
        right = evaluate(expr.right, bindings)
        if isinstance(left, Constant) and isinstance(right, Constant):
            return Constant(_FOLDERS[expr.op](left.value, right.value))
        return BinaryExpression(left, expr.op, right)
    if isinstance(expr, PriorityExpression):
        inner = evaluate(expr.inner, bindings)
        if isinstance(inner, Constant):
            return inner
        return PriorityExpression(inner)
    raise TypeError(f"not an expression node: {expr!r}")


__all__ = [
    "Loc",
    "BinOp",
    "Variable",
    "Constant",
    "BinaryExpression",
    "PriorityExpression",
    "Expression",
    "Assignment",
    "IfStatement",
    "WhileStatement",
    "Statement",
    "StatementList",
    "Program",
    "get_names",
    "evaluate",
]
