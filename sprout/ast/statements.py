"""Statement AST for the Sprout language.

Each verb of the language (``listen``, ``set``, ``send`` ...) has its own
node; everything else is an assignment or a bare expression statement.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Union

from .base import BlockStatement, Expression, Statement

__all__ = [
    "ToggleMode",
    "LetStatement",
    "AssignmentStatement",
    "ListenStatement",
    "SetStatement",
    "AddStatement",
    "ToggleStatement",
    "ThenClause",
    "SendStatement",
    "TemplateStatement",
    "BindStatement",
    "CallJsStatement",
    "IfStatement",
    "ForStatement",
    "ExpressionStatement",
]


# Properties whose DOM access takes a secondary selector argument
EXTRA_ARGUMENT_PROPERTIES = frozenset({"attr", "css", "data"})


class ToggleMode(Enum):
    """Modes accepted by the toggle verb."""

    CLASS = "class"
    SHOW = "show"
    HIDE = "hide"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class LetStatement(Statement):
    """Local binding: let name = value"""
    name: str
    value: Expression


@dataclass(frozen=True)
class AssignmentStatement(Statement):
    """Assignment: target = value"""
    target: Expression
    value: Expression


@dataclass(frozen=True)
class ListenStatement(Statement):
    """Event handler: listen selector event { body }"""
    selector: Expression
    event: str
    body: BlockStatement = field(default_factory=BlockStatement)


@dataclass(frozen=True)
class SetStatement(Statement):
    """DOM write: set target property [extra] to value"""
    target: Expression
    property: str
    value: Expression
    extra: Optional[Expression] = None


@dataclass(frozen=True)
class AddStatement(Statement):
    """DOM append: add target property with value"""
    target: Expression
    property: str
    value: Expression


@dataclass(frozen=True)
class ToggleStatement(Statement):
    """Visibility or class toggle: toggle target mode [argument]"""
    target: Expression
    mode: ToggleMode
    argument: Optional[Expression] = None


@dataclass(frozen=True)
class ThenClause:
    """Continuation of a send: then { params -> body }"""
    params: List[str] = field(default_factory=list)
    body: BlockStatement = field(default_factory=BlockStatement)


@dataclass(frozen=True)
class SendStatement(Statement):
    """Network request: send url method payload (then { ... })*"""
    url: Expression
    method: str
    payload: Expression
    chain: List[ThenClause] = field(default_factory=list)


@dataclass(frozen=True)
class TemplateStatement(Statement):
    """Template definition: template name = "raw {{ path }} text" """
    name: str
    template: str


@dataclass(frozen=True)
class BindStatement(Statement):
    """Reactive binding: bind source to selector property"""
    source: Expression
    selector: Expression
    property: str


@dataclass(frozen=True)
class CallJsStatement(Statement):
    """Host function call: call js function [with payload]"""
    function: Expression
    payload: Optional[Expression] = None


@dataclass(frozen=True)
class IfStatement(Statement):
    """Conditional: if test { ... } else if ... else { ... }"""
    test: Expression
    consequent: BlockStatement = field(default_factory=BlockStatement)
    alternate: Optional[Union[BlockStatement, "IfStatement"]] = None


@dataclass(frozen=True)
class ForStatement(Statement):
    """Iteration: for variable in iterable { body }"""
    variable: str
    iterable: Expression
    body: BlockStatement = field(default_factory=BlockStatement)


@dataclass(frozen=True)
class ExpressionStatement(Statement):
    """Bare expression used as a statement."""
    expression: Expression
