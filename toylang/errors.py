# toylang/errors.py
"""
Front-end error types.

    ToylangError (base)
    └── ToySyntaxError   - source text that does not match the grammar

Every error carries a ``SourceSpan`` and renders itself in the GCC
style (``file:line:col: error: message``) so editors can jump to it.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class SourceSpan:
    """A position in a source file (1-based line and column)."""

    file: str = ""
    line: int = 0
    column: int = 0

    @classmethod
    def from_offset(cls, text: str, offset: int, file: str = "") -> SourceSpan:
        """Build a span from a character offset into *text*."""
        offset = max(0, min(offset, len(text)))
        line = text.count("\n", 0, offset) + 1
        column = offset - (text.rfind("\n", 0, offset) + 1) + 1
        return cls(file=file, line=line, column=column)

    def __str__(self) -> str:
        return f"{self.file or '<input>'}:{self.line}:{self.column}"


class ToylangError(Exception):
    """Base exception for all front-end errors."""

    def __init__(
        self,
        message: str,
        span: Optional[SourceSpan] = None,
        hint: str = "",
    ) -> None:
        super().__init__(message)
        self.message = message
        self.span = span or SourceSpan()
        self.hint = hint

    def to_gcc_format(self) -> str:
        """Format as a GCC-style error message."""
        text = f"{self.span}: error: {self.message}"
        if self.hint:
            text += f"\n  hint: {self.hint}"
        return text

    def __str__(self) -> str:
        return self.to_gcc_format()


class ToySyntaxError(ToylangError):
    """Source text could not be parsed."""

    def __init__(
        self,
        message: str,
        span: Optional[SourceSpan] = None,
        got: str = "",
        hint: str = "",
    ) -> None:
        super().__init__(message, span=span, hint=hint)
        self.got = got


__all__ = [
    "SourceSpan",
    "ToylangError",
    "ToySyntaxError",
]
