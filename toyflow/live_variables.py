# toyflow/live_variables.py
"""
Live variable analysis over the structured AST.

Direction:   BACKWARD
Confluence:  JOIN (may / union)
Lattice:     ℘(Name), the variables whose current value may still be read
Transfer:    live_in = uses(s) ∪ (live_out − defs(s))

The analysis walks each statement list last-to-first, threading a single
live set through the traversal.  An assignment whose target is not live
right after it is a dead store.

Loops
─────
A ``while`` body's live-out depends on its own live-in through the back
edge.  Rather than iterating to a fixpoint, the body is analysed twice:
the first pass only produces an approximate live-in for the next
iteration (its dead-store findings are thrown away), which is joined
with the state after the loop before the second, reported pass.
"""

from __future__ import annotations

import logging
from typing import List, Sequence, Set

from toyflow.ast_nodes import (
    Assignment,
    IfStatement,
    Program,
    Statement,
    WhileStatement,
    get_names,
)

logger = logging.getLogger(__name__)


class LiveVariableAnalyzer:
    """
    Backward dead-store finder.

    After ``analyse()``:
      - the return value lists dead stores in source order
      - ``live`` holds the variables live at program entry
    """

    def __init__(self) -> None:
        self.live: Set[str] = set()
        self.unused: List[Assignment] = []

    def _reset(self) -> None:
        self.live = set()
        self.unused = []

    def analyse(self, program: Program) -> List[Assignment]:
        self._reset()
        self.visit_list(program.statements)
        logger.info(
            "%s: %d dead store(s), live at entry: %s",
            type(self).__name__,
            len(self.unused),
            "".join(sorted(self.live)) or "-",
        )
        # Findings were collected walking backwards.
        return list(reversed(self.unused))

    # ── Dispatch ─────────────────────────────────────────────────────

    def visit_list(self, statements: Sequence[Statement]) -> None:
        for stmt in reversed(statements):
            self.visit(stmt)

    def visit(self, stmt: Statement) -> None:
        if isinstance(stmt, Assignment):
            self.visit_assignment(stmt)
        elif isinstance(stmt, IfStatement):
            self.visit_if(stmt)
        elif isinstance(stmt, WhileStatement):
            self.visit_while(stmt)
        else:
            raise TypeError(f"not a statement node: {stmt!r}")

    # ── Transfer functions ──────────────────────────────────────────

    def visit_assignment(self, stmt: Assignment) -> None:
        name = stmt.target.name
        if name in self.live:
            self.live.discard(name)
        else:
            self.unused.append(stmt)
        self.live |= get_names(stmt.value)

    def visit_if(self, stmt: IfStatement) -> None:
        live_after = set(self.live)
        self.visit_list(stmt.body)
        self.live |= get_names(stmt.condition)
        self.live |= live_after

    def visit_while(self, stmt: WhileStatement) -> None:
        live_after = set(self.live)
        mark = len(self.unused)

        self.visit_list(stmt.body)
        del self.unused[mark:]
        self.live |= live_after
        self.visit_list(stmt.body)

        self.live |= get_names(stmt.condition)
        self.live |= live_after


def run_live_variable_analysis(program: Program) -> List[Assignment]:
    """Dead stores of *program* according to plain liveness, in source order."""
    return LiveVariableAnalyzer().analyse(program)


__all__ = [
    "LiveVariableAnalyzer",
    "run_live_variable_analysis",
]
