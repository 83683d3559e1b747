"""
toylang: front-end and command line for the toy language
=========================================================

Public API::

    from toylang import parse, format_program

    program = parse("a = 1 b = a a = 2")
    print(format_program(program))

The analyses themselves live in the ``toyflow`` package; ``toylang``
turns source text into its AST, renders nodes back to text, and wires
both into the ``toylang`` command (``python -m toylang``).
"""

__version__ = "0.1.0"

from toylang.errors import SourceSpan, ToylangError, ToySyntaxError
from toylang.parser import parse, parse_file
from toylang.printer import format_expression, format_program, format_statement

__all__ = [
    "SourceSpan",
    "ToylangError",
    "ToySyntaxError",
    "parse",
    "parse_file",
    "format_expression",
    "format_program",
    "format_statement",
]
