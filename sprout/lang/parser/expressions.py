"""Expression parsing methods for SproutParser.

Handles lambdas, the binary operator ladder, postfix access and the
primary forms (literals, lists, maps, render and get).
"""

from typing import List, Union

from sprout.ast import (
    BinaryExpression,
    BlockStatement,
    CallExpression,
    Expression,
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
from .grammar.lexer import ARROW, Token, TokenType


# Operator groups for each binary precedence level, lowest first
LOGICAL_OPERATORS = ("&&", "||")
EQUALITY_OPERATORS = ("==", "!=")
RELATIONAL_OPERATORS = (">", ">=", "<", "<=")
ADDITIVE_OPERATORS = ("+", "-")
MULTIPLICATIVE_OPERATORS = ("*", "/", "%")
UNARY_OPERATORS = ("!", "-")


class ExpressionParsingMixin:
    """Mixin with expression parsing methods."""

    def parse_expression(self) -> Expression:
        """
        Parse an expression, lambdas included.

        Grammar:
            Expression = Lambda | Logical ;
        """
        return self.parse_lambda()

    # ====================================================================
    # Lambdas
    # ====================================================================

    def parse_lambda(self) -> Expression:
        """
        Parse a lambda or fall through to a logical expression.

        Grammar:
            Lambda = "->" , LambdaBody
                   | IDENT , "->" , LambdaBody
                   | "(" , [ IDENT , { "," , IDENT } ] , ")" , "->" , LambdaBody ;

        The parameter side is parsed as an ordinary expression first and
        only reinterpreted once the arrow is seen.
        """
        if self.check_operator(ARROW):
            self.advance()
            return LambdaExpression(params=[], body=self.parse_lambda_body())

        expression = self.parse_logical()
        if not self.check_operator(ARROW):
            return expression

        arrow = self.current()
        if isinstance(expression, Identifier):
            params = [expression.name]
        elif isinstance(expression, GroupExpression):
            params = self.extract_params(expression, arrow)
        else:
            raise self.error(
                "Invalid lambda parameters",
                arrow,
                suggestion="Use 'x -> ...' or '(x, y) -> ...'",
            )

        self.advance()
        return LambdaExpression(params=params, body=self.parse_lambda_body())

    def extract_params(self, group: GroupExpression, arrow: Token) -> List[str]:
        """Resolve a parenthesized expression into lambda parameter names."""
        inner = group.expression
        if isinstance(inner, Identifier):
            return [inner.name]
        if isinstance(inner, GroupExpression):
            return self.extract_params(inner, arrow)
        if isinstance(inner, CallExpression):
            raise self.error("Unexpected call in lambda parameters", arrow)
        if isinstance(inner, ListExpression):
            names: List[str] = []
            for element in inner.elements:
                if not isinstance(element, Identifier):
                    raise self.error("Lambda parameters must be identifiers", arrow)
                names.append(element.name)
            return names
        if isinstance(inner, MapExpression):
            raise self.error("Lambda parameters must be identifiers", arrow)
        raise self.error("Unsupported lambda parameters", arrow)

    def parse_lambda_body(self) -> Union[BlockStatement, Expression]:
        """
        Grammar:
            LambdaBody = Block | Expression ;
        """
        if self.check_punctuation("{"):
            return self.parse_block()
        return self.parse_expression()

    # ====================================================================
    # Binary operator ladder
    # ====================================================================

    def _match_operator(self, operators) -> bool:
        token = self.current()
        return token.type == TokenType.OPERATOR and token.value in operators

    def parse_logical(self) -> Expression:
        """
        Grammar:
            Logical = Equality , { ( "&&" | "||" ) , Equality } ;
        """
        left = self.parse_equality()
        while self._match_operator(LOGICAL_OPERATORS):
            operator = self.advance().value
            right = self.parse_equality()
            left = LogicalExpression(operator=operator, left=left, right=right)
        return left

    def _parse_binary_level(self, operators, parse_operand) -> Expression:
        left = parse_operand()
        while self._match_operator(operators):
            operator = self.advance().value
            right = parse_operand()
            left = BinaryExpression(operator=operator, left=left, right=right)
        return left

    def parse_equality(self) -> Expression:
        return self._parse_binary_level(EQUALITY_OPERATORS, self.parse_relational)

    def parse_relational(self) -> Expression:
        return self._parse_binary_level(RELATIONAL_OPERATORS, self.parse_additive)

    def parse_additive(self) -> Expression:
        return self._parse_binary_level(ADDITIVE_OPERATORS, self.parse_multiplicative)

    def parse_multiplicative(self) -> Expression:
        return self._parse_binary_level(MULTIPLICATIVE_OPERATORS, self.parse_unary)

    def parse_unary(self) -> Expression:
        """
        Grammar:
            Unary = ( "!" | "-" ) , Unary | Postfix ;
        """
        if self._match_operator(UNARY_OPERATORS):
            operator = self.advance().value
            return UnaryExpression(operator=operator, argument=self.parse_unary())
        return self.parse_postfix()

    def parse_postfix(self) -> Expression:
        """
        Parse member access and calls, chained left to right.

        Grammar:
            Postfix = Primary , { "." , IDENT | "(" , [ Arguments ] , ")" } ;
        """
        expression = self.parse_primary()
        while True:
            if self.consume_if_punctuation("."):
                prop = self.expect_identifier()
                expression = MemberExpression(object=expression, property=prop)
            elif self.check_punctuation("("):
                arguments = self._parse_delimited("(", ")", self.parse_expression)
                expression = CallExpression(callee=expression, arguments=arguments)
            else:
                return expression

    def _parse_delimited(self, opener: str, closer: str, parse_item) -> list:
        """Parse a comma separated sequence between brackets, newlines allowed."""
        self.expect_punctuation(opener)
        self.skip_newlines()
        items = []
        if not self.check_punctuation(closer):
            items.append(parse_item())
            self.skip_newlines()
            while self.consume_if_punctuation(","):
                self.skip_newlines()
                items.append(parse_item())
                self.skip_newlines()
        self.expect_punctuation(closer)
        return items

    # ====================================================================
    # Primary expressions
    # ====================================================================

    def parse_primary(self) -> Expression:
        """
        Grammar:
            Primary = NUMBER | STRING | "true" | "false" | Render | Get | IDENT
                    | Group | List | Map ;
        """
        token = self.current()

        if token.type == TokenType.IDENTIFIER:
            if token.value in ("true", "false"):
                self.advance()
                return Literal(kind=LiteralKind.BOOL, value=token.value == "true")
            if token.value == "render":
                return self.parse_render()
            if token.value == "get":
                return self.parse_get()
            self.advance()
            return Identifier(name=token.value)

        if token.type == TokenType.NUMBER:
            self.advance()
            value = float(token.value) if "." in token.value else int(token.value)
            return Literal(kind=LiteralKind.NUMBER, value=value)

        if token.type == TokenType.STRING:
            self.advance()
            return Literal(kind=LiteralKind.TEXT, value=token.value[1:-1])

        if self.check_punctuation("("):
            return self.parse_group()
        if self.check_punctuation("["):
            return ListExpression(elements=self._parse_delimited("[", "]", self.parse_expression))
        if self.check_punctuation("{"):
            return MapExpression(entries=self._parse_delimited("{", "}", self.parse_map_entry))

        if token.type == TokenType.EOF:
            raise self.error("Unexpected end of input", token)
        raise self.error("Unexpected token in expression", token)

    def parse_group(self) -> GroupExpression:
        """
        Parse a parenthesized expression or a lambda parameter list.

        Grammar:
            Group = "(" , Expression , ")" ;
            ParamList = "(" , [ Expression , { "," , Expression } ] , ")" ;

        A parameter list (empty, or more than one element) is represented
        as a group around a list so the lambda rule can validate it; it must
        be followed by "->".
        """
        open_token = self.current()
        elements = self._parse_delimited("(", ")", self.parse_expression)
        if len(elements) == 1:
            return GroupExpression(expression=elements[0])

        if not self.check_operator(ARROW):
            raise self.error(
                "Expected '->' after parameter list",
                self.current(),
                suggestion=f"Parentheses opened at line {open_token.line}:{open_token.column} "
                "hold more than one expression; only lambda parameters may do that",
            )
        return GroupExpression(expression=ListExpression(elements=elements))

    def parse_map_entry(self) -> MapEntry:
        """
        Grammar:
            MapEntry = ( IDENT | STRING ) , ":" , Expression ;
        """
        token = self.current()
        if token.type == TokenType.IDENTIFIER:
            key = token.value
        elif token.type == TokenType.STRING:
            key = token.value[1:-1]
        else:
            raise self.error("Expected map key", token)
        self.advance()
        self.expect_punctuation(":")
        return MapEntry(key=key, value=self.parse_expression())

    def parse_render(self) -> RenderExpression:
        """
        Grammar:
            Render = "render" , ( IDENT | STRING ) , "with" , Expression ;
        """
        self.expect_keyword("render")
        token = self.current()
        if token.type == TokenType.IDENTIFIER:
            name = token.value
        elif token.type == TokenType.STRING:
            name = token.value[1:-1]
        else:
            raise self.error("Expected template name", token)
        self.advance()
        self.expect_keyword("with")
        return RenderExpression(template=name, value=self.parse_expression())

    def parse_get(self) -> GetExpression:
        """
        Grammar:
            Get = "get" , Expression , IDENT , [ Expression ] ;

        The trailing expression is only read for attr, css and data.
        """
        self.expect_keyword("get")
        target = self.parse_expression()
        prop = self.expect_identifier()
        extra = self._parse_property_extra(prop)
        return GetExpression(target=target, property=prop, extra=extra)


__all__ = ["ExpressionParsingMixin"]
