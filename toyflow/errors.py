# toyflow/errors.py
"""
Error types raised by the analysis engine.

Hierarchy
─────────
    ToyflowError (base)
    ├── FoldingError        - division by zero while constant folding
    └── ConfigurationError  - invalid AnalysisConfig handed to an analyzer

``FoldingError`` is also an ``ArithmeticError`` so hosts that only care
about the arithmetic failure can catch the built-in class.  The
possible-value analyzer recovers from it locally; everything else
propagates to the caller.
"""

from __future__ import annotations

from typing import List, Optional


class ToyflowError(Exception):
    """Base exception for all analysis-engine errors."""


class FoldingError(ToyflowError, ArithmeticError):
    """Raised when constant folding hits an undefined operation."""

    def __init__(self, message: str, expression: Optional[str] = None) -> None:
        super().__init__(message)
        self.expression = expression


class ConfigurationError(ToyflowError, ValueError):
    """Raised when an analyzer is given an invalid configuration."""

    def __init__(self, problems: List[str]) -> None:
        self.problems = list(problems)
        super().__init__("invalid analysis configuration: " + "; ".join(self.problems))


__all__ = [
    "ToyflowError",
    "FoldingError",
    "ConfigurationError",
]
