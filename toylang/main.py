#!/usr/bin/env python3
"""toylang/main.py: CLI entry-point for the toy-language dead-code analyzer.

Usage examples
--------------
    # Report dead stores, sharpened by value analysis (the default mode)
    python -m toylang analyze program.toy

    # Plain liveness only
    python -m toylang analyze program.toy --mode live

    # Which conditionals are never / always taken, and the final values
    python -m toylang analyze program.toy --mode values -f json

    # Parse a program and pretty-print it (front-end debugging aid)
    python -m toylang parse program.toy

    # Show version and exit
    python -m toylang --version

Exit codes
----------
    0   Success, nothing to report.
    1   Dead stores (or never-taken conditionals) were reported.
    2   Infrastructure failure (missing file, syntax error, bad option).

The module doubles as ``python -m toylang`` via the companion
``toylang/__main__.py`` which simply calls :func:`main`.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
import textwrap
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Sequence, TextIO

from toyflow import AnalysisConfig, run_all_analyses
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
from toyflow.config import MAX_COMBINATION_COUNT, MAX_DEPTH
from toylang import __version__
from toylang.errors import ToylangError
from toylang.parser import parse
from toylang.printer import format_program, format_statement

_log = logging.getLogger("toylang")

# Exit codes ----------------------------------------------------------------

EXIT_OK: int = 0
EXIT_FINDINGS: int = 1
EXIT_INFRA: int = 2

_HANDLER_TAG = "_toylang_cli"


# ===========================================================================
# Utility helpers
# ===========================================================================

def _configure_logging(verbosity: int) -> None:
    """Set up the ``toylang`` and ``toyflow`` loggers.

    Parameters
    ----------
    verbosity:
        0 → WARNING, 1 → INFO, 2+ → DEBUG.
    """
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        logging.Formatter(
            fmt="%(asctime)s [%(levelname)-5.5s] %(name)s: %(message)s",
            datefmt="%H:%M:%S",
        )
    )
    setattr(handler, _HANDLER_TAG, True)
    for name in ("toylang", "toyflow"):
        logger = logging.getLogger(name)
        logger.setLevel(level)
        # Repeated calls (tests, embedding) must not stack handlers.
        for old in [h for h in logger.handlers if getattr(h, _HANDLER_TAG, False)]:
            logger.removeHandler(old)
        logger.addHandler(handler)


def _resolve_path(raw: str, label: str = "file") -> Path:
    """Resolve *raw* to an absolute ``Path``, raising on missing files."""
    p = Path(raw).expanduser().resolve()
    if not p.is_file():
        _log.error("%s not found: %s", label, p)
        raise SystemExit(EXIT_INFRA)
    return p


def _open_output(dest: Optional[str]) -> TextIO:
    """Return a writable text stream.

    *dest* ``None`` or ``"-"`` → ``sys.stdout``; otherwise open the path
    for writing (creating parent directories as needed).
    """
    if dest is None or dest == "-":
        return sys.stdout
    p = Path(dest).expanduser().resolve()
    p.parent.mkdir(parents=True, exist_ok=True)
    return open(p, "w", encoding="utf-8")


def _load_program(raw_path: str) -> Program:
    """Read and parse a source file, exiting with EXIT_INFRA on failure."""
    src_path = _resolve_path(raw_path, "source file")
    source = src_path.read_text(encoding="utf-8")
    try:
        return parse(source, filename=raw_path)
    except ToylangError as exc:
        _log.error("%s", exc.to_gcc_format())
        raise SystemExit(EXIT_INFRA)


# ===========================================================================
# Findings and serialisation
# ===========================================================================

@dataclass
class Finding:
    """One reported statement."""
    kind: str
    stmt: Statement

    def to_gcc_format(self) -> str:
        loc = self.stmt.loc
        return f"{loc.file}:{loc.line}:{loc.col}: {self.kind}: " + format_statement(
            self.stmt, header_only=True
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "kind": self.kind,
            "node_id": self.stmt.node_id,
            "line": self.stmt.loc.line,
            "column": self.stmt.loc.col,
            "text": format_statement(self.stmt, header_only=True),
        }


def _expression_to_dict(expr: Expression) -> Dict[str, Any]:
    if isinstance(expr, Variable):
        return {"type": "Variable", "name": expr.name}
    if isinstance(expr, Constant):
        return {"type": "Constant", "value": expr.value}
    if isinstance(expr, BinaryExpression):
        return {
            "type": "BinaryExpression",
            "op": expr.op.value,
            "left": _expression_to_dict(expr.left),
            "right": _expression_to_dict(expr.right),
        }
    if isinstance(expr, PriorityExpression):
        return {"type": "PriorityExpression", "inner": _expression_to_dict(expr.inner)}
    raise TypeError(f"not an expression node: {expr!r}")


def _statement_to_dict(stmt: Statement) -> Dict[str, Any]:
    data: Dict[str, Any] = {
        "type": type(stmt).__name__,
        "node_id": stmt.node_id,
        "line": stmt.loc.line,
        "column": stmt.loc.col,
    }
    if isinstance(stmt, Assignment):
        data["target"] = stmt.target.name
        data["value"] = _expression_to_dict(stmt.value)
    elif isinstance(stmt, (IfStatement, WhileStatement)):
        data["condition"] = _expression_to_dict(stmt.condition)
        data["body"] = [_statement_to_dict(inner) for inner in stmt.body]
    else:
        raise TypeError(f"not a statement node: {stmt!r}")
    return data


def _format_value_set(values: Iterable[int]) -> str:
    return "{" + ", ".join(str(v) for v in sorted(values)) + "}"


# ===========================================================================
# Sub-command implementations
# ===========================================================================

# ---------------------------------------------------------------------------
# analyze
# ---------------------------------------------------------------------------

def cmd_analyze(args: argparse.Namespace) -> int:
    """Run the requested analysis on one source file and report findings."""
    config = AnalysisConfig(
        max_combination_count=args.max_combinations,
        max_depth=args.max_depth,
    )
    problems = config.validate()
    if problems:
        for problem in problems:
            _log.error("invalid option: %s", problem)
        return EXIT_INFRA

    program = _load_program(args.source_file)

    wanted = {"mixed", "values"} if args.mode == "mixed" else {args.mode}
    start = time.monotonic()
    results = run_all_analyses(program, config, wanted)
    _log.info("Analysis completed in %.3fs", time.monotonic() - start)

    findings: List[Finding] = []
    if args.mode == "mixed":
        findings = [Finding("dead store", s) for s in results.mixed_dead_stores or []]
    elif args.mode == "live":
        findings = [Finding("dead store", s) for s in results.live_dead_stores or []]

    values = results.values
    classified: List[Finding] = []
    if values is not None and args.mode == "values":
        classified = [Finding("never taken", s) for s in values.never_happens]
        classified += [Finding("always taken", s) for s in values.always_happens]
        classified.sort(key=lambda f: (f.stmt.loc.line, f.stmt.loc.col))

    out = _open_output(args.output)
    try:
        if args.format == "json":
            report: Dict[str, Any] = {
                "file": args.source_file,
                "mode": args.mode,
                "dead_stores": [f.to_dict() for f in findings],
            }
            if values is not None:
                report["classification"] = [
                    Finding(verdict.value, program.statement_by_id(node_id)).to_dict()
                    for node_id, verdict in values.classification.items()
                ]
                report["possible_values"] = {
                    name: sorted(vals) for name, vals in values.possible_values.items()
                }
            out.write(json.dumps(report, indent=2) + "\n")
        elif args.format == "plain":
            if args.mode == "values":
                for f in classified:
                    if f.kind == "never taken":
                        out.write(format_statement(f.stmt) + "\n")
            for f in findings:
                out.write(format_statement(f.stmt) + "\n")
        else:
            for f in findings + classified:
                out.write(f.to_gcc_format() + "\n")
            if args.mode == "values" and values is not None:
                table = ", ".join(
                    f"{name} = {_format_value_set(vals)}"
                    for name, vals in values.possible_values.items()
                )
                out.write(f"{args.source_file}: note: possible values: {table or '(none)'}\n")
    finally:
        if out is not sys.stdout:
            out.close()

    if findings:
        return EXIT_FINDINGS
    if values is not None and args.mode == "values" and values.never_happens:
        return EXIT_FINDINGS
    return EXIT_OK


# ---------------------------------------------------------------------------
# parse (debugging / AST dump)
# ---------------------------------------------------------------------------

def cmd_parse(args: argparse.Namespace) -> int:
    """Parse a source file and pretty-print it.

    Useful for debugging the front-end without running any analysis.
    """
    program = _load_program(args.source_file)

    out = _open_output(args.output)
    try:
        if args.format == "json":
            data = [_statement_to_dict(stmt) for stmt in program.statements]
            out.write(json.dumps(data, indent=2) + "\n")
        else:
            out.write(format_program(program))
    finally:
        if out is not sys.stdout:
            out.close()
    return EXIT_OK


# ===========================================================================
# Argument parser construction
# ===========================================================================

def _build_parser() -> argparse.ArgumentParser:
    """Construct the full CLI argument parser with subcommands."""

    parser = argparse.ArgumentParser(
        prog="toylang",
        description=(
            "Dead-code analyzer for the toy language.\n\n"
            "Finds dead stores and never/always-taken conditionals\n"
            "without running the program."
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=textwrap.dedent("""\
            examples:
              toylang analyze program.toy
              toylang analyze program.toy --mode values -f json
              toylang parse   program.toy
        """),
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="count",
        default=0,
        help="Increase verbosity (-v info, -vv debug).",
    )

    subparsers = parser.add_subparsers(
        dest="command",
        title="commands",
        metavar="<command>",
    )

    def _add_output_arg(p: argparse.ArgumentParser) -> None:
        p.add_argument(
            "-o", "--output",
            default=None,
            metavar="FILE",
            help='Output file ("-" or omit for stdout).',
        )

    # --- analyze -----------------------------------------------------------
    p_analyze = subparsers.add_parser(
        "analyze",
        aliases=["analyse"],
        help="Report dead code in a source file.",
        description=(
            "Parse a toy-language program and report dead stores "
            "and statically decided conditionals."
        ),
    )
    p_analyze.add_argument(
        "source_file",
        metavar="SOURCE",
        help="Toy-language source file.",
    )
    p_analyze.add_argument(
        "-m", "--mode",
        choices=["mixed", "live", "values"],
        default="mixed",
        help="Analysis to run (default: mixed).",
    )
    p_analyze.add_argument(
        "-f", "--format",
        choices=["gcc", "plain", "json"],
        default="gcc",
        help="Output format (default: gcc).",
    )
    _add_output_arg(p_analyze)
    g = p_analyze.add_argument_group("analysis bounds")
    g.add_argument(
        "--max-combinations",
        type=int,
        default=MAX_COMBINATION_COUNT,
        metavar="N",
        help=f"Largest value cross product evaluated (default: {MAX_COMBINATION_COUNT}).",
    )
    g.add_argument(
        "--max-depth",
        type=int,
        default=MAX_DEPTH,
        metavar="N",
        help=f"Loop unrolling depth before giving up (default: {MAX_DEPTH}).",
    )
    p_analyze.set_defaults(func=cmd_analyze)

    # --- parse -------------------------------------------------------------
    p_parse = subparsers.add_parser(
        "parse",
        help="Parse a source file and pretty-print it.",
        description="Parse a toy-language program and print it back.",
    )
    p_parse.add_argument(
        "source_file",
        metavar="SOURCE",
        help="Toy-language source file.",
    )
    p_parse.add_argument(
        "-f", "--format",
        choices=["text", "json"],
        default="text",
        help="Output format (default: text).",
    )
    _add_output_arg(p_parse)
    p_parse.set_defaults(func=cmd_parse)

    return parser


# ===========================================================================
# Main entry point
# ===========================================================================

def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the toylang CLI.

    Parameters
    ----------
    argv:
        Command-line arguments.  ``None`` → ``sys.argv[1:]``.

    Returns
    -------
    int
        Exit code (see module docstring for semantics).
    """
    parser = _build_parser()
    try:
        args = parser.parse_args(argv)
    except SystemExit as exc:
        # argparse exits 2 on bad usage and 0 for --help / --version
        return exc.code if isinstance(exc.code, int) else EXIT_INFRA

    _configure_logging(args.verbose)

    if not hasattr(args, "func"):
        parser.print_help(sys.stderr)
        return EXIT_INFRA

    try:
        return args.func(args)
    except KeyboardInterrupt:
        _log.info("Interrupted by user.")
        return 130  # Standard UNIX convention for SIGINT
    except SystemExit as exc:
        return exc.code if isinstance(exc.code, int) else EXIT_INFRA
    except Exception as exc:
        _log.error("Unhandled exception: %s", exc, exc_info=True)
        return EXIT_INFRA


if __name__ == "__main__":
    raise SystemExit(main())
