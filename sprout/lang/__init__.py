"""Sprout language front end: lexer, parser and keyword tables."""

from .keywords import (
    CONTEXTUAL_KEYWORDS,
    STATEMENT_KEYWORDS,
    TOGGLE_MODES,
    suggest_keyword,
)

LANGUAGE_VERSION = "0.1"

__all__ = [
    "LANGUAGE_VERSION",
    "STATEMENT_KEYWORDS",
    "CONTEXTUAL_KEYWORDS",
    "TOGGLE_MODES",
    "suggest_keyword",
]
