"""Core AST node definitions shared across the Sprout parser and generator."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List


@dataclass(frozen=True)
class Node:
    """Base class for every AST node."""

    pass


@dataclass(frozen=True)
class Expression(Node):
    """Base class for all expression types."""

    pass


@dataclass(frozen=True)
class Statement(Node):
    """Base class for all statement types."""

    pass


@dataclass(frozen=True)
class BlockStatement(Statement):
    """Ordered sequence of statements between braces."""

    body: List[Statement] = field(default_factory=list)


@dataclass(frozen=True)
class Program(Node):
    """Parsed compilation unit containing top-level statements."""

    body: List[Statement] = field(default_factory=list)
    path: str = ""


__all__ = [
    "Node",
    "Expression",
    "Statement",
    "BlockStatement",
    "Program",
]
