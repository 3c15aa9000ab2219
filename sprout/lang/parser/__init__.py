"""Sprout parser package.

Public API:
    parse_program(source, path) -> Program
    parse_tokens(tokens, path) -> Program
    SproutParser - The parser class

Error types:
    SproutError, LexError, SproutSyntaxError
"""

from typing import Sequence

from sprout.ast import Program

from .grammar.lexer import Token, tokenize
from .parse import SproutParser
from .errors import (
    CodeGenerationError,
    LexError,
    SproutError,
    SproutSyntaxError,
)


def parse_program(source: str, path: str = "") -> Program:
    """
    Parse Sprout source code into a Program AST.

    Args:
        source: Sprout source code to parse
        path: Optional file path for error reporting

    Returns:
        Program AST node

    Raises:
        LexError: If the source cannot be tokenized
        SproutSyntaxError: If the token stream does not match the grammar

    Example:
        ```python
        program = parse_program('listen "#add" click {\\n  n = n + 1\\n}')
        print(type(program.body[0]).__name__)  # "ListenStatement"
        ```
    """
    return parse_tokens(tokenize(source, path), path=path)


def parse_tokens(tokens: Sequence[Token], path: str = "") -> Program:
    """Parse an already tokenized source into a Program AST."""
    return SproutParser(tokens, path=path).parse()


__all__ = [
    "parse_program",
    "parse_tokens",
    "SproutParser",
    "SproutError",
    "LexError",
    "SproutSyntaxError",
    "CodeGenerationError",
]
