"""Lexical grammar for the Sprout language."""

from .lexer import Lexer, Token, TokenType, tokenize

__all__ = ["Lexer", "Token", "TokenType", "tokenize"]
