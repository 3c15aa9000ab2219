"""Recursive descent parser for the Sprout language.

This is the single parser for Sprout. It consumes the flat token list
produced by the lexer and builds a ``Program`` AST; the first mismatch
aborts with a ``SproutSyntaxError``.
"""

from __future__ import annotations
from typing import List, Optional, Sequence
import logging

from sprout.ast import Program, Statement
from sprout.lang.keywords import suggest_keyword

from .grammar.lexer import Token, TokenType, tokenize
from .errors import SproutSyntaxError, create_syntax_error
from .statements import StatementParsingMixin
from .expressions import ExpressionParsingMixin

logger = logging.getLogger(__name__)


_TOKEN_DESCRIPTIONS = {
    TokenType.IDENTIFIER: "identifier",
    TokenType.NUMBER: "number",
    TokenType.STRING: "string",
    TokenType.OPERATOR: "operator",
    TokenType.PUNCTUATION: "punctuation",
    TokenType.NEWLINE: "newline",
    TokenType.EOF: "end of input",
}


def describe_token(token: Token) -> str:
    """Human-readable description of a token for error messages."""
    if token.type in (TokenType.NEWLINE, TokenType.EOF):
        return _TOKEN_DESCRIPTIONS[token.type]
    return f"{_TOKEN_DESCRIPTIONS[token.type]} '{token.value}'"


class SproutParser(StatementParsingMixin, ExpressionParsingMixin):
    """
    Recursive descent parser for Sprout.

    Statements are dispatched on their leading verb; expressions use
    precedence climbing, one method per precedence level.
    """

    def __init__(self, tokens: Sequence[Token], *, path: str = ""):
        """Initialize parser with an already tokenized source."""
        if not tokens or tokens[-1].type != TokenType.EOF:
            raise ValueError("Token stream must end with an EOF token")
        self.tokens: List[Token] = list(tokens)
        self.path = path
        self.pos = 0

    @classmethod
    def from_source(cls, source: str, *, path: str = "") -> "SproutParser":
        """Tokenize source and build a parser over it."""
        return cls(tokenize(source, path), path=path)

    # ====================================================================
    # Token Management
    # ====================================================================

    def peek(self, offset: int = 0) -> Token:
        """Peek at token without consuming; never runs past EOF."""
        pos = min(self.pos + offset, len(self.tokens) - 1)
        return self.tokens[pos]

    def current(self) -> Token:
        """Get current token."""
        return self.peek(0)

    def advance(self) -> Token:
        """Consume and return current token."""
        token = self.current()
        if token.type == TokenType.EOF:
            raise self.error("Unexpected end of input", token)
        self.pos += 1
        return token

    def match(self, *types: TokenType) -> bool:
        """Check if current token matches any of the given types."""
        return self.current().type in types

    def check(self, token_type: TokenType, value: str) -> bool:
        """Check if current token has the given type and value."""
        token = self.current()
        return token.type == token_type and token.value == value

    def check_keyword(self, word: str) -> bool:
        return self.check(TokenType.IDENTIFIER, word)

    def check_operator(self, op: str) -> bool:
        return self.check(TokenType.OPERATOR, op)

    def check_punctuation(self, char: str) -> bool:
        return self.check(TokenType.PUNCTUATION, char)

    def expect(self, *types: TokenType) -> Token:
        """Expect one of the given token types and consume it."""
        token = self.current()
        if token.type not in types:
            expected = [_TOKEN_DESCRIPTIONS[t] for t in types]
            raise self.unexpected(token, expected, f"Expected {' or '.join(expected)}")
        return self.advance()

    def expect_value(self, token_type: TokenType, value: str, label: Optional[str] = None) -> Token:
        """Expect a token with an exact type and value and consume it."""
        token = self.current()
        if token.type != token_type or token.value != value:
            label = label or f"'{value}'"
            raise self.unexpected(token, [label], f"Expected {label}")
        return self.advance()

    def expect_keyword(self, word: str) -> Token:
        return self.expect_value(TokenType.IDENTIFIER, word)

    def expect_operator(self, op: str) -> Token:
        return self.expect_value(TokenType.OPERATOR, op, f"operator '{op}'")

    def expect_punctuation(self, char: str) -> Token:
        return self.expect_value(TokenType.PUNCTUATION, char)

    def expect_identifier(self) -> str:
        """Consume an identifier token and return its name."""
        return self.expect(TokenType.IDENTIFIER).value

    def consume_if_punctuation(self, char: str) -> bool:
        """Consume the punctuation token if it is current."""
        if self.check_punctuation(char):
            self.advance()
            return True
        return False

    def skip_newlines(self) -> None:
        """Skip any newline tokens."""
        while self.match(TokenType.NEWLINE):
            self.advance()

    def next_significant(self) -> Token:
        """Return the first token at or after the current one that is not a newline."""
        offset = 0
        while self.peek(offset).type == TokenType.NEWLINE:
            offset += 1
        return self.peek(offset)

    # ====================================================================
    # Errors
    # ====================================================================

    def error(self, message: str, token: Optional[Token] = None, suggestion: Optional[str] = None) -> SproutSyntaxError:
        """Create a syntax error at a token, the current one by default."""
        token = token or self.current()
        return create_syntax_error(
            message,
            path=self.path or None,
            line=token.line,
            column=token.column,
            suggestion=suggestion,
        )

    def unexpected(self, token: Token, expected: List[str], message: str) -> SproutSyntaxError:
        """Create an error for a token that does not fit the production."""
        if token.type == TokenType.EOF:
            message = "Unexpected end of input"
        return create_syntax_error(
            message,
            path=self.path or None,
            line=token.line,
            column=token.column,
            expected=expected,
            found=describe_token(token),
            suggestion=self._suggest_token_fix(token, expected),
        )

    def _suggest_token_fix(self, token: Token, expected: List[str]) -> Optional[str]:
        """Suggest a fix for unexpected token."""
        if "'}'" in expected and token.type == TokenType.EOF:
            return "A block opened with '{' is never closed"

        if "string" in expected and token.type == TokenType.IDENTIFIER:
            return f"Did you mean \"{token.value}\"?"

        if "'to'" in expected and token.type == TokenType.OPERATOR and token.value == "=":
            return "Use 'to' instead of '=' in set and bind statements"

        if len(expected) == 1 and expected[0].startswith("'") and token.type == TokenType.IDENTIFIER:
            keyword = expected[0].strip("'")
            if suggest_keyword(token.value, [keyword]) == keyword:
                return f"Did you mean '{keyword}'?"

        return None

    # ====================================================================
    # High-Level Parsing
    # ====================================================================

    def parse(self) -> Program:
        """
        Parse entire program.

        Grammar:
            Program = { NEWLINE } , { Statement , { NEWLINE } } , EOF ;
        """
        body: List[Statement] = []

        self.skip_newlines()
        while not self.match(TokenType.EOF):
            body.append(self.parse_statement())
            self.skip_newlines()

        logger.debug("Parsed %d top-level statements", len(body))
        return Program(body=body, path=self.path)


__all__ = ["SproutParser", "describe_token"]
