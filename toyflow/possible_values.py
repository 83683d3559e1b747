# toyflow/possible_values.py
"""
Possible-value analysis (bounded powerset abstract interpretation).

Direction:   FORWARD
Lattice:     Name → ℘(int), bounded by ``max_combination_count``;
             the empty set (or a missing key) means unconstrained (⊤)
Transfer:    x = e   strong update with { e[σ] | σ ∈ ×ᵢ values(vᵢ) }
Join:        per variable union; ⊤ absorbs, oversized unions become ⊤

Besides the value table, each ``if`` / ``while`` is classified as never
taken, always taken or indeterminate from the values its condition can
produce.

Bounded approximations
──────────────────────
  - Expressions are evaluated over the full cross product of the values
    of the variables they read.  An unconstrained operand, or a product
    larger than the cap, makes the result unconstrained.
  - Loops are unrolled symbolically, at most ``max_depth`` times.  Past
    that point (or when the condition is unconstrained) every variable
    the body writes is given up as unconstrained.  This is the loop's
    fixpoint escape hatch; no iterate-to-convergence is attempted.
  - Combinations that divide by zero are dropped from the result; if no
    combination survives the result is unconstrained.

Classification
──────────────
A conditional may be visited many times (once per unrolled iteration of
an enclosing loop, for instance).  Every visit records what was observed
there; the final verdict is NEVER or ALWAYS only when all observations
agree, so a node can never end up in both lists.  Loops record their
own verdict only at their outermost entry (depth 0): leaving a loop that
was entered is the normal way for it to end.
"""

from __future__ import annotations

import itertools
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, FrozenSet, List, Mapping, Optional, Sequence, Set

from toyflow.ast_helper import iter_conditionals, write_names
from toyflow.ast_nodes import (
    Assignment,
    Constant,
    Expression,
    IfStatement,
    Program,
    Statement,
    WhileStatement,
    evaluate,
    get_names,
)
from toyflow.config import AnalysisConfig, resolve_config
from toyflow.errors import FoldingError

logger = logging.getLogger(__name__)

ValueTable = Dict[str, Set[int]]


class Classification(Enum):
    NEVER = "never"
    ALWAYS = "always"


@dataclass
class PossibleValueResult:
    """Outcome of a possible-value run."""
    classification: Dict[int, Classification] = field(default_factory=dict)
    never_happens: List[Statement] = field(default_factory=list)
    always_happens: List[Statement] = field(default_factory=list)
    possible_values: Dict[str, FrozenSet[int]] = field(default_factory=dict)

    def classify(self, stmt: Statement) -> Optional[Classification]:
        """Verdict for *stmt*, or ``None`` when indeterminate."""
        return self.classification.get(stmt.node_id)


class PossibleValueAnalyzer:
    """
    Forward bounded value analysis.

    Branch exploration works on forked analyzers that own a private copy
    of the table; their results are joined back explicitly.
    """

    def __init__(
        self,
        config: Optional[AnalysisConfig] = None,
        values: Optional[Mapping[str, Set[int]]] = None,
    ) -> None:
        self.config = resolve_config(config)
        self.possible_values: ValueTable = {
            name: set(vals) for name, vals in (values or {}).items()
        }
        # node_id → outcomes seen on each visit; None marks indeterminate
        self._observed: Dict[int, Set[Optional[Classification]]] = {}
        self._nodes: Dict[int, Statement] = {}

    # ── Public API ───────────────────────────────────────────────────

    def analyse(self, program: Program) -> PossibleValueResult:
        self.visit_list(program.statements)
        result = self._result()
        logger.info(
            "PossibleValueAnalyzer: %d never, %d always, %d indeterminate",
            len(result.never_happens),
            len(result.always_happens),
            len(self._observed) - len(result.classification),
        )
        return result

    def _result(self) -> PossibleValueResult:
        result = PossibleValueResult(
            possible_values={
                name: frozenset(vals)
                for name, vals in sorted(self.possible_values.items())
                if vals
            }
        )
        for node_id, outcomes in self._observed.items():
            if len(outcomes) != 1:
                continue
            (verdict,) = outcomes
            if verdict is None:
                continue
            result.classification[node_id] = verdict
            if verdict is Classification.NEVER:
                result.never_happens.append(self._nodes[node_id])
            else:
                result.always_happens.append(self._nodes[node_id])
        return result

    # ── Bookkeeping ──────────────────────────────────────────────────

    def _observe(self, stmt: Statement, verdict: Optional[Classification]) -> None:
        self._nodes.setdefault(stmt.node_id, stmt)
        self._observed.setdefault(stmt.node_id, set()).add(verdict)

    def _fork(self) -> PossibleValueAnalyzer:
        return PossibleValueAnalyzer(self.config, self.possible_values)

    def _join(self, inner: PossibleValueAnalyzer) -> None:
        """Merge a fork that may or may not have run into this table."""
        cap = self.config.max_combination_count
        for name, inner_values in inner.possible_values.items():
            outer_values = self.possible_values.get(name)
            if not outer_values:
                continue
            if not inner_values:
                self.possible_values[name] = set()
                continue
            merged = outer_values | inner_values
            if len(merged) > cap:
                logger.debug("merge of %s exceeds %d values; unconstrained", name, cap)
                merged = set()
            self.possible_values[name] = merged

        for node_id, outcomes in inner._observed.items():
            self._nodes.setdefault(node_id, inner._nodes[node_id])
            self._observed.setdefault(node_id, set()).update(outcomes)

    # ── Expression evaluation ────────────────────────────────────────

    def eval_expr(self, expr: Expression) -> Set[int]:
        """
        All values *expr* can take under the current table.

        Returns an empty set when the result is unconstrained.
        """
        names = sorted(get_names(expr))
        cap = self.config.max_combination_count
        domains: List[List[int]] = []
        combination_count = 1
        for name in names:
            values = self.possible_values.get(name)
            if not values:
                return set()
            combination_count *= len(values)
            if combination_count > cap:
                logger.debug(
                    "more than %d combinations for %s; unconstrained", cap, "".join(names)
                )
                return set()
            domains.append(sorted(values))

        results: Set[int] = set()
        for combination in itertools.product(*domains):
            try:
                folded = evaluate(expr, dict(zip(names, combination)))
            except FoldingError as exc:
                logger.debug("dropping unevaluable combination: %s", exc)
                continue
            assert isinstance(folded, Constant)
            results.add(folded.value)
        return results

    @staticmethod
    def _verdict(values: Set[int]) -> Optional[Classification]:
        if not values:
            return None
        can_be_true = any(values)
        can_be_false = 0 in values
        if can_be_true and can_be_false:
            return None
        return Classification.ALWAYS if can_be_true else Classification.NEVER

    # ── Dispatch ─────────────────────────────────────────────────────

    def visit_list(self, statements: Sequence[Statement]) -> None:
        for stmt in statements:
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
        self.possible_values[stmt.target.name] = self.eval_expr(stmt.value)

    def visit_if(self, stmt: IfStatement) -> None:
        verdict = self._verdict(self.eval_expr(stmt.condition))
        self._observe(stmt, verdict)

        if verdict is Classification.NEVER:
            return
        if verdict is Classification.ALWAYS:
            self.visit_list(stmt.body)
            return

        inner = self._fork()
        inner.visit_list(stmt.body)
        self._join(inner)

    def visit_while(self, stmt: WhileStatement, depth: int = 0) -> None:
        values = self.eval_expr(stmt.condition)

        if not values or depth > self.config.max_depth:
            if depth > self.config.max_depth:
                logger.debug("loop at %s unrolled past depth %d", stmt.loc, self.config.max_depth)
            if depth == 0:
                self._observe(stmt, None)
            self._give_up(stmt)
            return

        verdict = self._verdict(values)

        if verdict is Classification.NEVER:
            if depth == 0:
                self._observe(stmt, verdict)
            return

        if verdict is Classification.ALWAYS:
            if depth == 0:
                self._observe(stmt, verdict)
            self.visit_list(stmt.body)
            self.visit_while(stmt, depth + 1)
            return

        if depth == 0:
            self._observe(stmt, None)
        inner = self._fork()
        inner.visit_list(stmt.body)
        inner.visit_while(stmt, depth + 1)
        self._join(inner)

    def _give_up(self, stmt: WhileStatement) -> None:
        """Loop escape hatch: forget everything the body may write."""
        for name in write_names(stmt.body):
            self.possible_values[name] = set()
        # The body may run again under values we no longer know.
        for nested in iter_conditionals(stmt.body):
            self._observe(nested, None)


def run_possible_value_analysis(
    program: Program,
    config: Optional[AnalysisConfig] = None,
) -> PossibleValueResult:
    """Classify every conditional of *program* and compute the final value table."""
    return PossibleValueAnalyzer(config).analyse(program)


__all__ = [
    "Classification",
    "PossibleValueResult",
    "PossibleValueAnalyzer",
    "ValueTable",
    "run_possible_value_analysis",
]
