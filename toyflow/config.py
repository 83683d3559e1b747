# toyflow/config.py
"""Tuning knobs shared by the analyzers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

from toyflow.errors import ConfigurationError

MAX_COMBINATION_COUNT = 32
MAX_DEPTH = 32


@dataclass
class AnalysisConfig:
    """
    Bounds on the possible-value analysis.

    max_combination_count
        Largest cross product of variable values an expression is
        evaluated over; also the largest set a merge may produce.
        Anything bigger becomes unconstrained.
    max_depth
        How many times a ``while`` loop is symbolically unrolled before
        its written variables are given up as unconstrained.
    """
    max_combination_count: int = MAX_COMBINATION_COUNT
    max_depth: int = MAX_DEPTH

    def validate(self) -> List[str]:
        """Return a list of validation problems (empty if valid)."""
        problems: List[str] = []
        if self.max_combination_count <= 0:
            problems.append("max_combination_count must be positive")
        if self.max_depth < 0:
            problems.append("max_depth must be non-negative")
        return problems


def resolve_config(config: Optional[AnalysisConfig]) -> AnalysisConfig:
    """Return *config* (or the defaults), raising if it is invalid."""
    config = config if config is not None else AnalysisConfig()
    problems = config.validate()
    if problems:
        raise ConfigurationError(problems)
    return config


__all__ = [
    "MAX_COMBINATION_COUNT",
    "MAX_DEPTH",
    "AnalysisConfig",
    "resolve_config",
]
