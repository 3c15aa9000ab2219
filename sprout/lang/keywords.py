"""Keyword tables for the Sprout language and typo suggestions."""

import difflib
from typing import Iterable, Optional

# Identifiers that start a verb statement
STATEMENT_KEYWORDS = frozenset({
    "let",
    "listen",
    "set",
    "add",
    "toggle",
    "send",
    "template",
    "bind",
    "call",
    "if",
    "for",
})

# Identifiers with a fixed meaning inside a statement or expression
CONTEXTUAL_KEYWORDS = frozenset({
    "to",
    "with",
    "then",
    "js",
    "else",
    "in",
    "render",
    "get",
    "true",
    "false",
})

TOGGLE_MODES = ("class", "show", "hide")


def suggest_keyword(unknown: str, candidates: Optional[Iterable[str]] = None) -> Optional[str]:
    """
    Suggest the most likely keyword for a misspelled identifier.

    Examples:
        >>> suggest_keyword('lisen')
        'listen'

        >>> suggest_keyword('hid', TOGGLE_MODES)
        'hide'

        >>> suggest_keyword('xyz123') is None
        True
    """
    if candidates is None:
        candidates = STATEMENT_KEYWORDS | CONTEXTUAL_KEYWORDS
    matches = difflib.get_close_matches(unknown, sorted(candidates), n=1, cutoff=0.6)
    return matches[0] if matches else None


__all__ = [
    "STATEMENT_KEYWORDS",
    "CONTEXTUAL_KEYWORDS",
    "TOGGLE_MODES",
    "suggest_keyword",
]
