"""Parser tests for lambda expressions."""

import pytest

from sprout.ast import (
    BinaryExpression,
    BlockStatement,
    GroupExpression,
    Identifier,
    LambdaExpression,
    Literal,
    LiteralKind,
)
from sprout.lang.parser import SproutSyntaxError, parse_program


def expr(source):
    return parse_program(source).body[0].expression


class TestLambdaForms:
    """Every accepted parameter shape."""

    def test_single_bare_parameter(self):
        assert expr("x -> x * 2") == LambdaExpression(
            params=["x"],
            body=BinaryExpression("*", Identifier("x"), Literal(LiteralKind.NUMBER, 2)),
        )

    def test_parenthesized_single_parameter(self):
        assert expr("(x) -> x").params == ["x"]

    def test_nested_parentheses_around_parameter(self):
        assert expr("((x)) -> x").params == ["x"]

    def test_multiple_parameters(self):
        assert expr("(a, b) -> a").params == ["a", "b"]

    def test_empty_parameter_list(self):
        assert expr("() -> 1").params == []

    def test_bare_arrow(self):
        result = expr("-> done()")
        assert result.params == []

    def test_block_body(self):
        result = expr("x -> {\n  log(x)\n  y = x\n}")
        assert isinstance(result.body, BlockStatement)
        assert len(result.body.body) == 2

    def test_lambda_as_call_argument(self):
        result = expr("map(items, x -> x + 1)")
        assert isinstance(result.arguments[1], LambdaExpression)

    def test_curried_lambda(self):
        result = expr("a -> b -> a")
        assert result.params == ["a"]
        assert result.body == LambdaExpression(params=["b"], body=Identifier("a"))

    def test_plain_group_is_not_a_lambda(self):
        assert isinstance(expr("(x)"), GroupExpression)


class TestLambdaErrors:
    """Parameter sides that cannot be lambda parameters."""

    @pytest.mark.parametrize(
        "source, message",
        [
            ("(f()) -> 1", "Unexpected call in lambda parameters"),
            ("(a, 1) -> 1", "Lambda parameters must be identifiers"),
            ("({a: 1}) -> 1", "Lambda parameters must be identifiers"),
            ("(1) -> 1", "Unsupported lambda parameters"),
            ("(x + y) -> x", "Unsupported lambda parameters"),
            ("a + b -> 1", "Invalid lambda parameters"),
        ],
    )
    def test_invalid_parameters(self, source, message):
        with pytest.raises(SproutSyntaxError) as exc_info:
            parse_program(source)

        assert exc_info.value.message == message

    def test_error_points_at_arrow(self):
        with pytest.raises(SproutSyntaxError) as exc_info:
            parse_program("(a, 1) -> 1")

        assert (exc_info.value.line, exc_info.value.column) == (1, 8)

    def test_parameter_list_requires_arrow(self):
        with pytest.raises(SproutSyntaxError) as exc_info:
            parse_program("(a, b)")

        assert exc_info.value.message == "Expected '->' after parameter list"

    def test_empty_parentheses_require_arrow(self):
        with pytest.raises(SproutSyntaxError):
            parse_program("let x = ()")
