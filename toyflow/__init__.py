"""
toyflow: Dead-Code Analysis Engine for the Toy Language
=======================================================

Static analyses over the AST of a small imperative language (integer
assignment, ``if``, ``while``, single-letter variables).  Nothing is
executed; every result is derived from the tree alone.

Core modules
------------
ast_nodes
    Expression / statement nodes and the partial evaluator.
ast_helper
    Collectors over statement lists (write names, assignments, ...).
config
    ``AnalysisConfig`` bounds for the value analysis.
live_variables
    Backward liveness; reports dead stores.
possible_values
    Forward bounded value analysis; classifies conditionals as never or
    always taken.
mixed_analysis
    Liveness sharpened by the value analysis' classification.
analyses
    ``run_all_analyses`` convenience runner.

Quick start
-----------
>>> from toylang import parse
>>> from toyflow import run_mixed_analysis
>>> program = parse("a = 5 if a > 10 b = 1 end")
>>> [stmt.target.name for stmt in run_mixed_analysis(program)]
['b']
"""

from __future__ import annotations

import importlib
import sys
from typing import TYPE_CHECKING, List

# ---------------------------------------------------------------------------
# Package metadata
# ---------------------------------------------------------------------------

__version__ = "0.1.0"
__author__ = "toyflow contributors"
__license__ = "MIT"
__all__: List[str] = []          # populated incrementally below


# ---------------------------------------------------------------------------
# Internal registry: (module_name, list_of_names_to_import)
# ---------------------------------------------------------------------------

_CORE_MODULES = {
    "errors": [
        "ToyflowError",
        "FoldingError",
        "ConfigurationError",
    ],
    "ast_nodes": [
        "Loc",
        "BinOp",
        "Variable",
        "Constant",
        "BinaryExpression",
        "PriorityExpression",
        "Assignment",
        "IfStatement",
        "WhileStatement",
        "Program",
        "get_names",
        "evaluate",
    ],
    "ast_helper": [
        "iter_statements",
        "write_names",
        "collect_assignments",
        "iter_conditionals",
    ],
    "config": [
        "AnalysisConfig",
        "MAX_COMBINATION_COUNT",
        "MAX_DEPTH",
    ],
    "live_variables": [
        "LiveVariableAnalyzer",
        "run_live_variable_analysis",
    ],
    "possible_values": [
        "Classification",
        "PossibleValueAnalyzer",
        "PossibleValueResult",
        "run_possible_value_analysis",
    ],
    "mixed_analysis": [
        "MixedAnalyzer",
        "run_mixed_analysis",
    ],
    "analyses": [
        "AnalysisResults",
        "run_all_analyses",
    ],
}


def _import_names(module_rel_name: str, names: List[str]) -> None:
    """Import *names* from a submodule and bind them in the package namespace.

    Parameters
    ----------
    module_rel_name:
        Module name relative to this package (e.g. ``"ast_nodes"``).
    names:
        Public symbols to re-export.
    """
    fq_name = f"{__name__}.{module_rel_name}"
    try:
        mod = importlib.import_module(fq_name)
    except ImportError as exc:
        raise ImportError(
            f"toyflow: required submodule '{module_rel_name}' "
            f"failed to import: {exc}"
        ) from exc

    current_module = sys.modules[__name__]
    for name in names:
        if not hasattr(mod, name):
            raise AttributeError(f"toyflow.{module_rel_name} does not export '{name}'")
        setattr(current_module, name, getattr(mod, name))
        __all__.append(name)

    setattr(current_module, module_rel_name, mod)
    if module_rel_name not in __all__:
        __all__.append(module_rel_name)


for _mod, _names in _CORE_MODULES.items():
    _import_names(_mod, _names)

del _mod, _names


def list_submodules() -> List[str]:
    """Return the names of all submodules in the package."""
    return sorted(_CORE_MODULES)


def package_info() -> dict:
    """Return a dict of metadata about the engine, for diagnostics."""
    return {
        "package": __name__,
        "version": __version__,
        "python": sys.version,
        "loaded_submodules": [
            m for m in list_submodules() if f"{__name__}.{m}" in sys.modules
        ],
        "all_exports": list(__all__),
    }


__all__ += ["list_submodules", "package_info", "__version__"]

if TYPE_CHECKING:
    from .errors import (
        ToyflowError as ToyflowError,
        FoldingError as FoldingError,
        ConfigurationError as ConfigurationError,
    )
    from .ast_nodes import (
        Loc as Loc,
        BinOp as BinOp,
        Variable as Variable,
        Constant as Constant,
        BinaryExpression as BinaryExpression,
        PriorityExpression as PriorityExpression,
        Assignment as Assignment,
        IfStatement as IfStatement,
        WhileStatement as WhileStatement,
        Program as Program,
        get_names as get_names,
        evaluate as evaluate,
    )
    from .ast_helper import (
        iter_statements as iter_statements,
        write_names as write_names,
        collect_assignments as collect_assignments,
        iter_conditionals as iter_conditionals,
    )
    from .config import (
        AnalysisConfig as AnalysisConfig,
        MAX_COMBINATION_COUNT as MAX_COMBINATION_COUNT,
        MAX_DEPTH as MAX_DEPTH,
    )
    from .live_variables import (
        LiveVariableAnalyzer as LiveVariableAnalyzer,
        run_live_variable_analysis as run_live_variable_analysis,
    )
    from .possible_values import (
        Classification as Classification,
        PossibleValueAnalyzer as PossibleValueAnalyzer,
        PossibleValueResult as PossibleValueResult,
        run_possible_value_analysis as run_possible_value_analysis,
    )
    from .mixed_analysis import (
        MixedAnalyzer as MixedAnalyzer,
        run_mixed_analysis as run_mixed_analysis,
    )
    from .analyses import (
        AnalysisResults as AnalysisResults,
        run_all_analyses as run_all_analyses,
    )
