"""Statement parsing methods for SproutParser.

Handles the verb statements (listen, set, send, ...), blocks, control
flow and the assignment / expression-statement fallback.
"""

from typing import Callable, Dict, List, Optional, Union

from sprout.ast import (
    EXTRA_ARGUMENT_PROPERTIES,
    AddStatement,
    AssignmentStatement,
    BindStatement,
    BlockStatement,
    CallJsStatement,
    Expression,
    ExpressionStatement,
    ForStatement,
    IfStatement,
    LetStatement,
    ListenStatement,
    SendStatement,
    SetStatement,
    Statement,
    TemplateStatement,
    ThenClause,
    ToggleMode,
    ToggleStatement,
)
from sprout.lang.keywords import TOGGLE_MODES, suggest_keyword
from .grammar.lexer import TokenType


_OPENING_BRACKETS = frozenset({"(", "[", "{"})
_CLOSING_BRACKETS = frozenset({")", "]", "}"})


class StatementParsingMixin:
    """Mixin with statement and block parsing methods."""

    def _statement_handlers(self) -> Dict[str, Callable[[], Statement]]:
        return {
            "let": self.parse_let,
            "listen": self.parse_listen,
            "set": self.parse_set,
            "add": self.parse_add,
            "toggle": self.parse_toggle,
            "send": self.parse_send,
            "template": self.parse_template,
            "bind": self.parse_bind,
            "call": self.parse_call_js,
            "if": self.parse_if,
            "for": self.parse_for,
        }

    def parse_statement(self) -> Statement:
        """
        Parse a single statement.

        The leading identifier selects a verb statement; anything else is
        an assignment when a top-level '=' follows on the same logical
        line, or a bare expression statement.
        """
        token = self.current()
        if token.type == TokenType.IDENTIFIER:
            handler = self._statement_handlers().get(token.value)
            if handler is not None:
                return handler()

        if self.looks_like_assignment():
            return self.parse_assignment()

        return ExpressionStatement(expression=self.parse_expression())

    def looks_like_assignment(self) -> bool:
        """
        Scan ahead for an '=' operator at bracket depth zero.

        The scan stops at a newline outside brackets, at EOF, or at a closing
        bracket that was not opened within the scanned range. No tokens are
        consumed.
        """
        depth = 0
        for token in self.tokens[self.pos:]:
            if token.type == TokenType.EOF:
                return False
            if token.type == TokenType.NEWLINE and depth == 0:
                return False
            if token.type == TokenType.PUNCTUATION:
                if token.value in _OPENING_BRACKETS:
                    depth += 1
                elif token.value in _CLOSING_BRACKETS:
                    if depth == 0:
                        return False
                    depth -= 1
            if depth == 0 and token.type == TokenType.OPERATOR and token.value == "=":
                return True
        return False

    # ====================================================================
    # Bindings
    # ====================================================================

    def parse_let(self) -> LetStatement:
        """
        Grammar:
            Let = "let" , IDENT , "=" , Expression ;
        """
        self.expect_keyword("let")
        name = self.expect_identifier()
        self.expect_operator("=")
        return LetStatement(name=name, value=self.parse_expression())

    def parse_assignment(self) -> AssignmentStatement:
        """
        Grammar:
            Assignment = Expression , "=" , Expression ;
        """
        target = self.parse_expression()
        self.expect_operator("=")
        return AssignmentStatement(target=target, value=self.parse_expression())

    def parse_template(self) -> TemplateStatement:
        """
        Parse a template definition; the text is kept raw, minus its quotes.

        Grammar:
            Template = "template" , IDENT , "=" , STRING ;
        """
        self.expect_keyword("template")
        name = self.expect_identifier()
        self.expect_operator("=")
        token = self.expect(TokenType.STRING)
        return TemplateStatement(name=name, template=token.value[1:-1])

    # ====================================================================
    # DOM verbs
    # ====================================================================

    def parse_listen(self) -> ListenStatement:
        """
        Grammar:
            Listen = "listen" , Expression , IDENT , Block ;
        """
        self.expect_keyword("listen")
        selector = self.parse_expression()
        event = self.expect_identifier()
        body = self.parse_block()
        return ListenStatement(selector=selector, event=event, body=body)

    def parse_set(self) -> SetStatement:
        """
        Grammar:
            Set = "set" , Expression , IDENT , [ Expression ] , "to" , Expression ;

        The optional expression is only read for attr, css and data.
        """
        self.expect_keyword("set")
        target = self.parse_expression()
        prop = self.expect_identifier()
        extra = self._parse_property_extra(prop)
        self.expect_keyword("to")
        value = self.parse_expression()
        return SetStatement(target=target, property=prop, value=value, extra=extra)

    def _parse_property_extra(self, prop: str) -> Optional[Expression]:
        if prop in EXTRA_ARGUMENT_PROPERTIES:
            return self.parse_expression()
        return None

    def parse_add(self) -> AddStatement:
        """
        Grammar:
            Add = "add" , Expression , IDENT , "with" , Expression ;
        """
        self.expect_keyword("add")
        target = self.parse_expression()
        prop = self.expect_identifier()
        self.expect_keyword("with")
        return AddStatement(target=target, property=prop, value=self.parse_expression())

    def parse_toggle(self) -> ToggleStatement:
        """
        Grammar:
            Toggle = "toggle" , Expression , ( "class" , Expression | "show" | "hide" ) ;
        """
        self.expect_keyword("toggle")
        target = self.parse_expression()
        mode_token = self.expect(TokenType.IDENTIFIER)

        if mode_token.value == ToggleMode.CLASS.value:
            argument = self.parse_expression()
            return ToggleStatement(target=target, mode=ToggleMode.CLASS, argument=argument)
        if mode_token.value in (ToggleMode.SHOW.value, ToggleMode.HIDE.value):
            return ToggleStatement(target=target, mode=ToggleMode(mode_token.value))

        close = suggest_keyword(mode_token.value, TOGGLE_MODES)
        raise self.error(
            f"Unknown toggle mode '{mode_token.value}'",
            mode_token,
            suggestion=f"Did you mean '{close}'?" if close else "Use one of: class, show, hide",
        )

    def parse_bind(self) -> BindStatement:
        """
        Grammar:
            Bind = "bind" , Expression , "to" , Expression , IDENT ;
        """
        self.expect_keyword("bind")
        source = self.parse_expression()
        self.expect_keyword("to")
        selector = self.parse_expression()
        prop = self.expect_identifier()
        return BindStatement(source=source, selector=selector, property=prop)

    # ====================================================================
    # Host interaction
    # ====================================================================

    def parse_send(self) -> SendStatement:
        """
        Parse a network request with its continuation chain.

        Grammar:
            Send = "send" , Expression , IDENT , Expression , { { NEWLINE } , Then } ;
            Then = "then" , "{" , { NEWLINE } , Params , "->" , Statements , "}" ;
        """
        self.expect_keyword("send")
        url = self.parse_expression()
        method = self.expect_identifier()
        payload = self.parse_expression()

        chain: List[ThenClause] = []
        while True:
            self.skip_newlines()
            if not self.check_keyword("then"):
                break
            chain.append(self.parse_then_clause())

        return SendStatement(url=url, method=method, payload=payload, chain=chain)

    def parse_then_clause(self) -> ThenClause:
        self.expect_keyword("then")
        self.expect_punctuation("{")
        self.skip_newlines()
        params = self.parse_then_params()
        self.expect_operator("->")
        body = self.parse_statements_until_close()
        self.expect_punctuation("}")
        return ThenClause(params=params, body=body)

    def parse_then_params(self) -> List[str]:
        """
        Grammar:
            Params = <empty> | IDENT | "(" , [ IDENT , { "," , IDENT } ] , ")" ;
        """
        if self.check_operator("->"):
            return []

        if self.consume_if_punctuation("("):
            params: List[str] = []
            if not self.check_punctuation(")"):
                params.append(self.expect_identifier())
                while self.consume_if_punctuation(","):
                    params.append(self.expect_identifier())
            self.expect_punctuation(")")
            return params

        return [self.expect_identifier()]

    def parse_call_js(self) -> CallJsStatement:
        """
        Grammar:
            CallJs = "call" , "js" , Expression , [ "with" , Expression ] ;
        """
        self.expect_keyword("call")
        self.expect_keyword("js")
        function = self.parse_expression()
        payload = None
        if self.check_keyword("with"):
            self.advance()
            payload = self.parse_expression()
        return CallJsStatement(function=function, payload=payload)

    # ====================================================================
    # Control flow
    # ====================================================================

    def parse_if(self) -> IfStatement:
        """
        Parse a conditional with an optional else branch.

        Grammar:
            If = "if" , Expression , Block , [ { NEWLINE } , "else" , ( If | Block ) ] ;

        An ``else`` may start on the line after the closing brace.
        """
        self.expect_keyword("if")
        test = self.parse_expression()
        consequent = self.parse_block()

        alternate: Optional[Union[BlockStatement, IfStatement]] = None
        following = self.next_significant()
        if following.type == TokenType.IDENTIFIER and following.value == "else":
            self.skip_newlines()
            self.advance()
            if self.check_keyword("if"):
                alternate = self.parse_if()
            else:
                alternate = self.parse_block()

        return IfStatement(test=test, consequent=consequent, alternate=alternate)

    def parse_for(self) -> ForStatement:
        """
        Grammar:
            For = "for" , IDENT , "in" , Expression , Block ;
        """
        self.expect_keyword("for")
        variable = self.expect_identifier()
        self.expect_keyword("in")
        iterable = self.parse_expression()
        body = self.parse_block()
        return ForStatement(variable=variable, iterable=iterable, body=body)

    # ====================================================================
    # Blocks
    # ====================================================================

    def parse_block(self) -> BlockStatement:
        """
        Grammar:
            Block = "{" , Statements , "}" ;
        """
        self.expect_punctuation("{")
        block = self.parse_statements_until_close()
        self.expect_punctuation("}")
        return block

    def parse_statements_until_close(self) -> BlockStatement:
        """Parse newline separated statements up to, not including, a closing brace."""
        body: List[Statement] = []
        self.skip_newlines()
        while not self.check_punctuation("}"):
            if self.match(TokenType.EOF):
                raise self.unexpected(self.current(), ["'}'"], "Expected '}'")
            body.append(self.parse_statement())
            self.skip_newlines()
        return BlockStatement(body=body)


__all__ = ["StatementParsingMixin"]
