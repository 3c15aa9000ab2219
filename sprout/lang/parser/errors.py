"""Compiler error types for Sprout.

Every error raised while compiling Sprout source derives from
``SproutError`` and knows where it happened. Rendered with ``str()`` an
error reads::

    File: app.sprout | Line 3:9 | [SYNTAX_ERROR] Expected 'to'
      Expected: 'to'
      Found: operator '='
      Suggestion: Use 'to' instead of '=' in set and bind statements
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Iterator, List, Optional


@dataclass
class SproutError(Exception):
    """Base class for all Sprout compiler errors."""

    message: str
    path: Optional[str] = None
    line: Optional[int] = None
    column: Optional[int] = None
    code: str = "SPROUT_ERROR"

    def location(self) -> Optional[str]:
        """``Line 3:9``, ``Line 3`` or None when the position is unknown."""
        if self.line is None:
            return None
        if self.column is None:
            return f"Line {self.line}"
        return f"Line {self.line}:{self.column}"

    def details(self) -> Iterator[str]:
        """Extra lines printed under the headline; none for the base class."""
        return iter(())

    def __str__(self) -> str:
        headline = [f"File: {self.path}"] if self.path else []
        location = self.location()
        if location:
            headline.append(location)
        headline.append(f"[{self.code}] {self.message}")

        text = " | ".join(headline)
        extra = list(self.details())
        if extra:
            text += "\n  " + "\n  ".join(extra)
        return text


@dataclass
class LexError(SproutError):
    """Malformed character stream: unterminated string or unknown character."""

    code: str = "LEX_ERROR"


@dataclass
class SproutSyntaxError(SproutError):
    """Token stream that does not match the grammar."""

    expected: List[str] = field(default_factory=list)
    found: Optional[str] = None
    suggestion: Optional[str] = None
    code: str = "SYNTAX_ERROR"

    def details(self) -> Iterator[str]:
        if len(self.expected) == 1:
            yield f"Expected: {self.expected[0]}"
        elif self.expected:
            yield f"Expected one of: {', '.join(self.expected)}"
        if self.found:
            yield f"Found: {self.found}"
        if self.suggestion:
            yield f"Suggestion: {self.suggestion}"


@dataclass
class CodeGenerationError(SproutError):
    """Internal invariant violation inside the code generator."""

    code: str = "CODEGEN_ERROR"


def create_lex_error(
    message: str,
    *,
    path: Optional[str] = None,
    line: Optional[int] = None,
    column: Optional[int] = None,
) -> LexError:
    return LexError(message=message, path=path, line=line, column=column)


def create_syntax_error(
    message: str,
    *,
    path: Optional[str] = None,
    line: Optional[int] = None,
    column: Optional[int] = None,
    expected: Optional[List[str]] = None,
    found: Optional[str] = None,
    suggestion: Optional[str] = None,
) -> SproutSyntaxError:
    """Build a syntax error; ``expected`` lists human-readable token descriptions."""
    return SproutSyntaxError(
        message=message,
        path=path,
        line=line,
        column=column,
        expected=list(expected or []),
        found=found,
        suggestion=suggestion,
    )


__all__ = [
    "SproutError",
    "LexError",
    "SproutSyntaxError",
    "CodeGenerationError",
    "create_lex_error",
    "create_syntax_error",
]
