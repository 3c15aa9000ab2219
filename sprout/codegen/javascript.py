"""JavaScript code generation for Sprout programs.

Walks a ``Program`` and emits the body of the ``Sprout.run`` callback.
Domain verbs lower to calls on the ``sprout`` runtime handle; arithmetic
and equality go through ``sprout.ops`` so the runtime controls their
semantics.

Nested scopes are rendered by methods that return text for a given
indentation level; callers splice the returned text into their own output.
"""

from __future__ import annotations

import json
import logging
import math
import re
from decimal import Decimal
from typing import Callable, Dict, List, Union

from sprout.ast import (
    AddStatement,
    AssignmentStatement,
    BinaryExpression,
    BindStatement,
    BlockStatement,
    CallExpression,
    CallJsStatement,
    Expression,
    ExpressionStatement,
    ForStatement,
    GetExpression,
    GroupExpression,
    Identifier,
    IfStatement,
    LambdaExpression,
    LetStatement,
    ListenStatement,
    ListExpression,
    Literal,
    LiteralKind,
    LogicalExpression,
    MapExpression,
    MemberExpression,
    Program,
    RenderExpression,
    SendStatement,
    SetStatement,
    Statement,
    TemplateStatement,
    ToggleStatement,
    UnaryExpression,
)
from sprout.lang.parser.errors import CodeGenerationError

logger = logging.getLogger(__name__)

INDENT = "  "

# Binary operators lowered to runtime helpers
RUNTIME_OPERATORS = {
    "+": "sprout.ops.add",
    "-": "sprout.ops.subtract",
    "==": "sprout.ops.equals",
    "!=": "sprout.ops.notEquals",
}

OPERATOR_PRECEDENCE = {
    "*": 6,
    "/": 6,
    "%": 6,
    "+": 5,
    "-": 5,
    ">": 4,
    ">=": 4,
    "<": 4,
    "<=": 4,
    "==": 3,
    "!=": 3,
    "&&": 2,
    "||": 1,
}

# Callee and member object position binds tighter than any operator
POSTFIX_PRECEDENCE = 100

_PLAIN_KEY = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")

_UNSAFE_CHARS = {
    "<": "\\u003C",
    ">": "\\u003E",
    "/": "\\u002F",
    "\\": "\\\\",
    "\b": "\\b",
    "\f": "\\f",
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
    "\0": "\\0",
    "\u2028": "\\u2028",
    "\u2029": "\\u2029",
}
_UNSAFE_PATTERN = re.compile("[" + re.escape("".join(_UNSAFE_CHARS)) + "]")


def indent(level: int) -> str:
    return INDENT * level


def js_string(value: str) -> str:
    """Quote text as a JavaScript string literal."""
    return json.dumps(value, ensure_ascii=False)


def escape_unsafe_chars(text: str) -> str:
    """Escape characters that are unsafe inside an inline script element."""
    return _UNSAFE_PATTERN.sub(lambda match: _UNSAFE_CHARS[match.group(0)], text)


def format_number(value: Union[int, float]) -> str:
    """
    Format a number the way JavaScript's ``String(number)`` does.

    Examples:
        >>> format_number(2.0)
        '2'
        >>> format_number(1.50)
        '1.5'
        >>> format_number(0.00001)
        '0.00001'
        >>> format_number(1e21)
        '1e+21'
    """
    if isinstance(value, int):
        if abs(value) <= 2 ** 53:
            return str(value)
        value = float(value)

    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if math.isnan(value):
        return "NaN"
    if value.is_integer() and abs(value) <= 2 ** 53:
        return str(int(value))

    # repr gives the shortest round-tripping digits, as JavaScript does
    text = repr(value)
    mantissa, _, exponent = text.partition("e")
    if not exponent:
        return text[:-2] if text.endswith(".0") else text
    power = int(exponent)
    if -7 < power < 21:
        return format(Decimal(text), "f")
    sign = "+" if power > 0 else "-"
    return f"{mantissa}e{sign}{abs(power)}"


def format_object_key(key: str) -> str:
    """Emit a map key bare when it is a plain identifier, quoted otherwise."""
    if _PLAIN_KEY.fullmatch(key):
        return key
    return js_string(key)


class CodeGenerator:
    """
    Generate JavaScript for a Sprout program.

    Rendering dispatches on the node class; every handler returns a
    string and holds no state, so a generator can be reused freely.
    """

    def __init__(self) -> None:
        self._statement_handlers: Dict[type, Callable[[Statement, int], str]] = {
            LetStatement: self._render_let,
            AssignmentStatement: self._render_assignment,
            ListenStatement: self._render_listen,
            SetStatement: self._render_set,
            AddStatement: self._render_add,
            ToggleStatement: self._render_toggle,
            SendStatement: self._render_send,
            TemplateStatement: self._render_template,
            BindStatement: self._render_bind,
            CallJsStatement: self._render_call_js,
            IfStatement: self._render_if,
            ForStatement: self._render_for,
            ExpressionStatement: self._render_expression_statement,
            BlockStatement: self._render_nested_block,
        }
        self._expression_handlers: Dict[type, Callable[[Expression, int, int], str]] = {
            Literal: self._render_literal,
            Identifier: self._render_identifier,
            BinaryExpression: self._render_binary,
            LogicalExpression: self._render_logical,
            UnaryExpression: self._render_unary,
            CallExpression: self._render_call,
            MemberExpression: self._render_member,
            ListExpression: self._render_list,
            MapExpression: self._render_map,
            LambdaExpression: self._render_lambda,
            RenderExpression: self._render_render,
            GetExpression: self._render_get,
            GroupExpression: self._render_group,
        }

    def generate(self, program: Program) -> str:
        """Render every top-level statement at indentation level zero."""
        output = self.render_statements(program.body, 0)
        logger.debug("Generated %d characters for %d statements", len(output), len(program.body))
        return output

    # ====================================================================
    # Statements
    # ====================================================================

    def render_statements(self, statements: List[Statement], level: int) -> str:
        return "".join(self.render_statement(statement, level) for statement in statements)

    def render_block(self, block: BlockStatement, level: int) -> str:
        return self.render_statements(block.body, level)

    def render_statement(self, statement: Statement, level: int) -> str:
        handler = self._statement_handlers.get(type(statement))
        if handler is None:
            raise CodeGenerationError(f"Unsupported statement type {type(statement).__name__}")
        return handler(statement, level)

    @staticmethod
    def _line(text: str, level: int) -> str:
        return f"{indent(level)}{text}\n"

    def _render_let(self, statement: LetStatement, level: int) -> str:
        value = self.render_expression(statement.value, level)
        return self._line(f"let {statement.name} = {value};", level)

    def _render_assignment(self, statement: AssignmentStatement, level: int) -> str:
        target = self.render_expression(statement.target, level)
        value = self.render_expression(statement.value, level)
        return self._line(f"{target} = {value};", level)

    def _render_expression_statement(self, statement: ExpressionStatement, level: int) -> str:
        return self._line(f"{self.render_expression(statement.expression, level)};", level)

    def _render_nested_block(self, statement: BlockStatement, level: int) -> str:
        return self.render_block(statement, level)

    def _render_listen(self, statement: ListenStatement, level: int) -> str:
        selector = self.render_expression(statement.selector, level)
        return (
            self._line(f"sprout.listen({selector}, {js_string(statement.event)}, (event) => {{", level)
            + self.render_block(statement.body, level + 1)
            + self._line("});", level)
        )

    def _render_set(self, statement: SetStatement, level: int) -> str:
        args = [
            self.render_expression(statement.target, level),
            js_string(statement.property),
            self.render_expression(statement.value, level),
        ]
        if statement.extra is not None:
            args.append(self.render_expression(statement.extra, level))
        return self._line(f"sprout.set({', '.join(args)});", level)

    def _render_add(self, statement: AddStatement, level: int) -> str:
        target = self.render_expression(statement.target, level)
        value = self.render_expression(statement.value, level)
        return self._line(f"sprout.add({target}, {js_string(statement.property)}, {value});", level)

    def _render_toggle(self, statement: ToggleStatement, level: int) -> str:
        target = self.render_expression(statement.target, level)
        argument = ""
        if statement.argument is not None:
            argument = f", {self.render_expression(statement.argument, level)}"
        return self._line(f"sprout.toggle({target}, {js_string(statement.mode.value)}{argument});", level)

    def _render_send(self, statement: SendStatement, level: int) -> str:
        url = self.render_expression(statement.url, level)
        method = js_string(statement.method.upper())
        payload = self.render_expression(statement.payload, level)
        call = f"sprout.send({url}, {method}, {payload})"
        if not statement.chain:
            return self._line(f"{call};", level)

        chain_level = level + 1
        parts = [f"{indent(level)}{call}"]
        for clause in statement.chain:
            params = ", ".join(clause.params)
            body = self.render_block(clause.body, chain_level + 1)
            parts.append(f"\n{indent(chain_level)}.then(({params}) => {{\n{body}{indent(chain_level)}}})")
        parts.append(";\n")
        return "".join(parts)

    def _render_template(self, statement: TemplateStatement, level: int) -> str:
        return self._line(
            f"sprout.defineTemplate({js_string(statement.name)}, {js_string(statement.template)});",
            level,
        )

    def _render_bind(self, statement: BindStatement, level: int) -> str:
        source = self.render_expression(statement.source, level)
        selector = self.render_expression(statement.selector, level)
        prop = escape_unsafe_chars(js_string(statement.property))
        return self._line(f"sprout.bind(() => {source}, {selector}, {prop});", level)

    def _render_call_js(self, statement: CallJsStatement, level: int) -> str:
        function = self.render_expression(statement.function, level)
        payload = ""
        if statement.payload is not None:
            payload = f", {self.render_expression(statement.payload, level)}"
        return self._line(f"sprout.callJs({function}{payload});", level)

    def _render_if(self, statement: IfStatement, level: int, is_else: bool = False) -> str:
        prefix = "else " if is_else else ""
        test = self.render_expression(statement.test, level)
        output = (
            self._line(f"{prefix}if ({test}) {{", level)
            + self.render_block(statement.consequent, level + 1)
            + self._line("}", level)
        )

        alternate = statement.alternate
        if isinstance(alternate, IfStatement):
            output += self._render_if(alternate, level, is_else=True)
        elif alternate is not None:
            output += (
                self._line("else {", level)
                + self.render_block(alternate, level + 1)
                + self._line("}", level)
            )
        return output

    def _render_for(self, statement: ForStatement, level: int) -> str:
        iterable = self.render_expression(statement.iterable, level)
        return (
            self._line(f"for (const {statement.variable} of sprout.iter({iterable})) {{", level)
            + self.render_block(statement.body, level + 1)
            + self._line("}", level)
        )

    # ====================================================================
    # Expressions
    # ====================================================================

    def render_expression(self, expression: Expression, level: int, parent_precedence: int = 0) -> str:
        """
        Render an expression.

        ``level`` is the indentation of the enclosing statement, used by
        block-bodied lambdas. ``parent_precedence`` decides whether a native
        operator needs parentheses.
        """
        handler = self._expression_handlers.get(type(expression))
        if handler is None:
            raise CodeGenerationError(f"Unsupported expression {type(expression).__name__}")
        return handler(expression, level, parent_precedence)

    def _render_literal(self, expression: Literal, level: int, parent_precedence: int) -> str:
        if expression.kind == LiteralKind.TEXT:
            return js_string(expression.value)
        if expression.kind == LiteralKind.BOOL:
            return "true" if expression.value else "false"
        return format_number(expression.value)

    def _render_identifier(self, expression: Identifier, level: int, parent_precedence: int) -> str:
        return expression.name

    def _render_binary(self, expression: BinaryExpression, level: int, parent_precedence: int) -> str:
        helper = RUNTIME_OPERATORS.get(expression.operator)
        if helper is not None:
            left = self.render_expression(expression.left, level)
            right = self.render_expression(expression.right, level)
            return f"{helper}({left}, {right})"
        return self._render_native(expression, level, parent_precedence)

    def _render_logical(self, expression: LogicalExpression, level: int, parent_precedence: int) -> str:
        return self._render_native(expression, level, parent_precedence)

    def _render_native(
        self,
        expression: Union[BinaryExpression, LogicalExpression],
        level: int,
        parent_precedence: int,
    ) -> str:
        precedence = OPERATOR_PRECEDENCE.get(expression.operator, 0)
        left = self.render_expression(expression.left, level, precedence)
        right = self.render_expression(expression.right, level, precedence + 1)
        result = f"{left} {expression.operator} {right}"
        if precedence < parent_precedence:
            return f"({result})"
        return result

    def _render_unary(self, expression: UnaryExpression, level: int, parent_precedence: int) -> str:
        argument = self.render_expression(expression.argument, level)
        if expression.operator == "-":
            return f"sprout.ops.negate({argument})"
        if expression.operator == "!":
            return f"!({argument})"
        return f"{expression.operator}{argument}"

    def _render_call(self, expression: CallExpression, level: int, parent_precedence: int) -> str:
        callee = self.render_expression(expression.callee, level, POSTFIX_PRECEDENCE)
        arguments = ", ".join(self.render_expression(arg, level) for arg in expression.arguments)
        return f"{callee}({arguments})"

    def _render_member(self, expression: MemberExpression, level: int, parent_precedence: int) -> str:
        obj = self.render_expression(expression.object, level, POSTFIX_PRECEDENCE)
        return f"{obj}.{expression.property}"

    def _render_list(self, expression: ListExpression, level: int, parent_precedence: int) -> str:
        elements = ", ".join(self.render_expression(element, level) for element in expression.elements)
        return f"[{elements}]"

    def _render_map(self, expression: MapExpression, level: int, parent_precedence: int) -> str:
        seen = set()
        entries = []
        for entry in expression.entries:
            if entry.key in seen:
                logger.warning("Duplicate map key %r; the last value wins", entry.key)
            seen.add(entry.key)
            value = self.render_expression(entry.value, level)
            entries.append(f"{format_object_key(entry.key)}: {value}")
        return "{" + ", ".join(entries) + "}"

    def _render_lambda(self, expression: LambdaExpression, level: int, parent_precedence: int) -> str:
        params = ", ".join(expression.params)
        if isinstance(expression.body, BlockStatement):
            body = self.render_block(expression.body, level + 1)
            return f"({params}) => {{\n{body}{indent(level)}}}"
        return f"({params}) => {self.render_expression(expression.body, level)}"

    def _render_render(self, expression: RenderExpression, level: int, parent_precedence: int) -> str:
        value = self.render_expression(expression.value, level)
        return f"sprout.render({js_string(expression.template)}, {value})"

    def _render_get(self, expression: GetExpression, level: int, parent_precedence: int) -> str:
        args = [self.render_expression(expression.target, level), js_string(expression.property)]
        if expression.extra is not None:
            args.append(self.render_expression(expression.extra, level))
        return f"sprout.get({', '.join(args)})"

    def _render_group(self, expression: GroupExpression, level: int, parent_precedence: int) -> str:
        return f"({self.render_expression(expression.expression, level)})"


def generate_javascript(program: Program) -> str:
    """Generate the JavaScript body for a parsed program."""
    return CodeGenerator().generate(program)


__all__ = [
    "CodeGenerator",
    "generate_javascript",
    "escape_unsafe_chars",
    "format_number",
    "format_object_key",
    "js_string",
    "INDENT",
]
