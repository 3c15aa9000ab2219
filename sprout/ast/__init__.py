"""AST node dataclasses for Sprout programs.

Statements and expressions are two closed families of frozen dataclasses.
The parser is the only producer and the code generator the only consumer;
both dispatch on the concrete class.
"""

from .base import BlockStatement, Expression, Node, Program, Statement
from .expressions import (
    BinaryExpression,
    CallExpression,
    GetExpression,
    GroupExpression,
    Identifier,
    LambdaExpression,
    ListExpression,
    Literal,
    LiteralKind,
    LogicalExpression,
    MapEntry,
    MapExpression,
    MemberExpression,
    RenderExpression,
    UnaryExpression,
)
from .statements import (
    EXTRA_ARGUMENT_PROPERTIES,
    AddStatement,
    AssignmentStatement,
    BindStatement,
    CallJsStatement,
    ExpressionStatement,
    ForStatement,
    IfStatement,
    LetStatement,
    ListenStatement,
    SendStatement,
    SetStatement,
    TemplateStatement,
    ThenClause,
    ToggleMode,
    ToggleStatement,
)

__all__ = [
    # Base
    "Node",
    "Expression",
    "Statement",
    "BlockStatement",
    "Program",
    # Statements
    "EXTRA_ARGUMENT_PROPERTIES",
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
    # Expressions
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
