# toyflow/analyses.py
"""
One-call runner for the analyses in this package.

    results = run_all_analyses(program)
    for stmt in results.mixed_dead_stores:
        ...
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, List, Optional, Set, Tuple

from toyflow.ast_nodes import Assignment, Program
from toyflow.config import AnalysisConfig, resolve_config
from toyflow.live_variables import run_live_variable_analysis
from toyflow.mixed_analysis import MixedAnalyzer
from toyflow.possible_values import PossibleValueResult, run_possible_value_analysis

ALL_ANALYSES = frozenset({"live", "values", "mixed"})


@dataclass
class AnalysisResults:
    """Collected results from running multiple analyses."""
    live_dead_stores: Optional[List[Assignment]] = None
    values: Optional[PossibleValueResult] = None
    mixed_dead_stores: Optional[List[Assignment]] = None

    @property
    def all_analyses(self) -> List[Tuple[str, Any]]:
        result = []
        for name in ("live_dead_stores", "values", "mixed_dead_stores"):
            val = getattr(self, name)
            if val is not None:
                result.append((name, val))
        return result


def run_all_analyses(
    program: Program,
    config: Optional[AnalysisConfig] = None,
    analyses: Optional[Set[str]] = None,
) -> AnalysisResults:
    """
    Run a suite of analyses on *program*.

    Parameters
    ----------
    program : parsed program
    config : optional bounds for the value analysis
    analyses : optional set of analysis names to run (default: all).
        Valid names: "live", "values", "mixed"; unknown names are ignored.

    Returns
    -------
    AnalysisResults with populated fields for requested analyses.
    """
    config = resolve_config(config)
    if analyses is None:
        analyses = set(ALL_ANALYSES)
    else:
        analyses = set(analyses) & ALL_ANALYSES

    results = AnalysisResults()

    if "live" in analyses:
        results.live_dead_stores = run_live_variable_analysis(program)

    if "mixed" in analyses:
        mixed = MixedAnalyzer(config)
        results.mixed_dead_stores = mixed.analyse(program)
        # The mixed pass already ran the value analysis.
        if "values" in analyses:
            results.values = mixed.value_result
    elif "values" in analyses:
        results.values = run_possible_value_analysis(program, config)

    return results


__all__ = [
    "ALL_ANALYSES",
    "AnalysisResults",
    "run_all_analyses",
]
