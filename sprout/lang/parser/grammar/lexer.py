"""Lexical analyzer (tokenizer) for the Sprout language.

Converts source text into a flat stream of tokens for parsing.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum, auto
from typing import List, Optional
import logging

from ..errors import LexError, create_lex_error

logger = logging.getLogger(__name__)


class TokenType(Enum):
    """Token types for the Sprout language.

    Keywords are not token types: verbs such as ``listen`` or ``set`` are
    plain identifiers that the parser recognises by value.
    """

    IDENTIFIER = auto()
    NUMBER = auto()
    STRING = auto()
    OPERATOR = auto()
    PUNCTUATION = auto()
    NEWLINE = auto()
    EOF = auto()


@dataclass(frozen=True)
class Token:
    """A single token with position information."""

    type: TokenType
    value: str
    line: int
    column: int

    def __repr__(self) -> str:
        return f"Token({self.type.name}, {self.value!r}, {self.line}:{self.column})"


WHITESPACE = frozenset({" ", "\t", "\r"})
QUOTES = frozenset({'"', "'"})
PUNCTUATION_CHARS = frozenset({"(", ")", "{", "}", "[", "]", ",", ".", ":"})
SINGLE_CHAR_OPERATORS = frozenset({"+", "-", "*", "/", "%", "!", "=", "<", ">", "?"})
PAIRED_OPERATORS = frozenset({"==", "!=", ">=", "<=", "&&", "||"})
ARROW = "->"


def is_digit(char: str) -> bool:
    return "0" <= char <= "9"


def is_identifier_start(char: str) -> bool:
    return char.isascii() and (char.isalpha() or char in "_#")


def is_identifier_part(char: str) -> bool:
    return char.isascii() and (char.isalnum() or char in "_#.-")


class Lexer:
    """Tokenizer for Sprout source code."""

    def __init__(self, source: str, path: str = ""):
        """Initialize lexer with source code."""
        self.source = source
        self.path = path
        self.pos = 0
        self.line = 1
        self.column = 1
        self.tokens: List[Token] = []

    def error(self, message: str, line: Optional[int] = None, column: Optional[int] = None) -> LexError:
        """Create a lexer error, at the current position unless one is given."""
        return create_lex_error(
            message,
            path=self.path or None,
            line=self.line if line is None else line,
            column=self.column if column is None else column,
        )

    def peek(self, offset: int = 0) -> Optional[str]:
        """Peek at character without consuming."""
        pos = self.pos + offset
        if pos < len(self.source):
            return self.source[pos]
        return None

    def advance(self) -> Optional[str]:
        """Consume and return current character."""
        if self.pos >= len(self.source):
            return None

        char = self.source[self.pos]
        self.pos += 1

        if char == "\n":
            self.line += 1
            self.column = 1
        else:
            self.column += 1

        return char

    def add_token(self, token_type: TokenType, value: str, line: int, column: int) -> None:
        """Add a token starting at the given position."""
        self.tokens.append(Token(type=token_type, value=value, line=line, column=column))

    def read_string(self) -> str:
        """Read a string literal, keeping quotes and escapes verbatim."""
        start_line, start_column = self.line, self.column
        quote = self.advance()
        chars = [quote]

        while True:
            char = self.peek()
            if char is None:
                raise self.error("Unterminated string literal", start_line, start_column)
            if char == "\\":
                chars.append(self.advance())
                escaped = self.advance()
                if escaped is None:
                    raise self.error("Unterminated string literal", start_line, start_column)
                chars.append(escaped)
                continue
            chars.append(self.advance())
            if char == quote:
                break

        return "".join(chars)

    def read_number(self) -> str:
        """Read a numeric literal with an optional single decimal point."""
        chars = []

        while self.peek() is not None and is_digit(self.peek()):
            chars.append(self.advance())

        if self.peek() == ".":
            chars.append(self.advance())
            while self.peek() is not None and is_digit(self.peek()):
                chars.append(self.advance())

        return "".join(chars)

    def read_identifier(self) -> str:
        """Read an identifier, including selector characters."""
        chars = []
        while self.peek() is not None and is_identifier_part(self.peek()):
            chars.append(self.advance())
        return "".join(chars)

    def tokenize(self) -> List[Token]:
        """Tokenize the entire source."""
        while self.pos < len(self.source):
            char = self.peek()
            line, column = self.line, self.column

            if char == "\n":
                self.advance()
                self.add_token(TokenType.NEWLINE, "\n", line, column)
                continue

            if char in WHITESPACE:
                self.advance()
                continue

            if char in QUOTES:
                self.add_token(TokenType.STRING, self.read_string(), line, column)
                continue

            if is_digit(char):
                self.add_token(TokenType.NUMBER, self.read_number(), line, column)
                continue

            if is_identifier_start(char):
                self.add_token(TokenType.IDENTIFIER, self.read_identifier(), line, column)
                continue

            two_char = char + (self.peek(1) or "")
            if two_char == ARROW or two_char in PAIRED_OPERATORS:
                self.advance()
                self.advance()
                self.add_token(TokenType.OPERATOR, two_char, line, column)
                continue

            if char in PUNCTUATION_CHARS:
                self.advance()
                self.add_token(TokenType.PUNCTUATION, char, line, column)
                continue

            if char in SINGLE_CHAR_OPERATORS:
                self.advance()
                self.add_token(TokenType.OPERATOR, char, line, column)
                continue

            raise self.error(f"Unexpected character {char!r}")

        self.add_token(TokenType.EOF, "", self.line, self.column)
        logger.debug("Tokenized %s into %d tokens", self.path or "<source>", len(self.tokens))
        return self.tokens


def tokenize(source: str, path: str = "") -> List[Token]:
    """Tokenize Sprout source code."""
    lexer = Lexer(source, path)
    return lexer.tokenize()


__all__ = ["Token", "TokenType", "Lexer", "tokenize"]
