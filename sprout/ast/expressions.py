"""Expression AST for the Sprout language."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Union

from .base import BlockStatement, Expression

__all__ = [
    "LiteralKind",
    "Identifier",
    "Literal",
    "BinaryExpression",
    "LogicalExpression",
    "UnaryExpression",
    "CallExpression",
    "MemberExpression",
    "ListExpression",
    "MapEntry",
    "MapExpression",
    "LambdaExpression",
    "RenderExpression",
    "GetExpression",
    "GroupExpression",
]


class LiteralKind(Enum):
    """Kinds of literal values."""

    NUMBER = "number"
    TEXT = "text"
    BOOL = "bool"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Identifier(Expression):
    """Name reference: count, event.target.value, #panel"""
    name: str


@dataclass(frozen=True)
class Literal(Expression):
    """Literal value: number, text or bool.

    Text values hold the raw characters between the quotes, escape
    sequences included.
    """
    kind: LiteralKind
    value: Union[int, float, str, bool]


@dataclass(frozen=True)
class BinaryExpression(Expression):
    """Binary operation: left op right"""
    operator: str
    left: Expression
    right: Expression


@dataclass(frozen=True)
class LogicalExpression(Expression):
    """Short-circuit operation: left && right, left || right"""
    operator: str
    left: Expression
    right: Expression


@dataclass(frozen=True)
class UnaryExpression(Expression):
    """Prefix operation: !x, -x"""
    operator: str
    argument: Expression


@dataclass(frozen=True)
class CallExpression(Expression):
    """Function call: callee(arg1, arg2, ...)"""
    callee: Expression
    arguments: List[Expression] = field(default_factory=list)


@dataclass(frozen=True)
class MemberExpression(Expression):
    """Property access: object.property"""
    object: Expression
    property: str


@dataclass(frozen=True)
class ListExpression(Expression):
    """List literal: [expr1, expr2, ...]"""
    elements: List[Expression] = field(default_factory=list)


@dataclass(frozen=True)
class MapEntry:
    """Single key/value pair of a map literal."""
    key: str
    value: Expression


@dataclass(frozen=True)
class MapExpression(Expression):
    """Map literal: {key: value, "other key": value}"""
    entries: List[MapEntry] = field(default_factory=list)


@dataclass(frozen=True)
class LambdaExpression(Expression):
    """Anonymous function: x -> expr, (x, y) -> { body }, -> expr"""
    params: List[str] = field(default_factory=list)
    body: Union[BlockStatement, Expression] = field(default_factory=BlockStatement)


@dataclass(frozen=True)
class RenderExpression(Expression):
    """Template render: render card with item"""
    template: str
    value: Expression


@dataclass(frozen=True)
class GetExpression(Expression):
    """DOM read: get "#name" value, get "#link" attr "href" """
    target: Expression
    property: str
    extra: Optional[Expression] = None


@dataclass(frozen=True)
class GroupExpression(Expression):
    """Parenthesized expression: (expr)"""
    expression: Expression
