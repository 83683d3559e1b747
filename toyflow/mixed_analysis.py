# toyflow/mixed_analysis.py
"""
Dead-store analysis sharpened by possible-value classification.

The possible-value analyzer runs first and classifies conditionals.
Liveness then runs with ``if`` / ``while`` dispatch consulting that
table by node id:

  NEVER    the body cannot execute; its condition is still read, and
           every assignment in it (at any depth) is a dead store
  ALWAYS   there is no skip path, so nothing live after the statement
           survives across it unless the body itself keeps it live
  (none)   plain liveness rule
"""

from __future__ import annotations

import logging
from typing import Dict, List, Optional

from toyflow.ast_helper import Conditional, collect_assignments
from toyflow.ast_nodes import Assignment, IfStatement, Program, WhileStatement, get_names
from toyflow.config import AnalysisConfig, resolve_config
from toyflow.live_variables import LiveVariableAnalyzer
from toyflow.possible_values import (
    Classification,
    PossibleValueAnalyzer,
    PossibleValueResult,
)

logger = logging.getLogger(__name__)


class MixedAnalyzer(LiveVariableAnalyzer):
    """Liveness that skips provably dead bodies and unconditional branches."""

    def __init__(self, config: Optional[AnalysisConfig] = None) -> None:
        super().__init__()
        self.config = resolve_config(config)
        self.value_result: Optional[PossibleValueResult] = None
        self._classification: Dict[int, Classification] = {}

    def analyse(self, program: Program) -> List[Assignment]:
        self.value_result = PossibleValueAnalyzer(self.config).analyse(program)
        self._classification = self.value_result.classification
        return super().analyse(program)

    def _skip_dead_body(self, stmt: Conditional) -> None:
        logger.debug("body at %s never executes", stmt.loc)
        self.live |= get_names(stmt.condition)
        # Appended backwards so the final reversal restores source order.
        self.unused.extend(reversed(collect_assignments(stmt.body)))

    def visit_if(self, stmt: IfStatement) -> None:
        verdict = self._classification.get(stmt.node_id)
        if verdict is Classification.NEVER:
            self._skip_dead_body(stmt)
        elif verdict is Classification.ALWAYS:
            self.visit_list(stmt.body)
            self.live |= get_names(stmt.condition)
        else:
            super().visit_if(stmt)

    def visit_while(self, stmt: WhileStatement) -> None:
        verdict = self._classification.get(stmt.node_id)
        if verdict is Classification.NEVER:
            self._skip_dead_body(stmt)
        elif verdict is Classification.ALWAYS:
            live_after = set(self.live)
            mark = len(self.unused)

            self.visit_list(stmt.body)
            del self.unused[mark:]
            self.live |= live_after
            self.visit_list(stmt.body)

            self.live |= get_names(stmt.condition)
        else:
            super().visit_while(stmt)


def run_mixed_analysis(
    program: Program,
    config: Optional[AnalysisConfig] = None,
) -> List[Assignment]:
    """Dead stores of *program*, including everything in never-taken bodies."""
    return MixedAnalyzer(config).analyse(program)


__all__ = [
    "MixedAnalyzer",
    "run_mixed_analysis",
]
