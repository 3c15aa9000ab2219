"""JavaScript generation tests for Sprout expressions."""

import json
import logging

import pytest

from sprout.ast import (
    BinaryExpression,
    CallExpression,
    Expression,
    Identifier,
    LogicalExpression,
    MemberExpression,
)
from sprout.codegen import (
    CodeGenerator,
    escape_unsafe_chars,
    format_number,
    format_object_key,
    generate_javascript,
    js_string,
)
from sprout.lang.parser import CodeGenerationError, parse_program
from sprout.lang.parser.grammar.lexer import TokenType, tokenize


def js(source):
    """Render the expression of a single expression statement."""
    expression = parse_program(source).body[0].expression
    return CodeGenerator().render_expression(expression, 0)


a, b, c = Identifier("a"), Identifier("b"), Identifier("c")


class TestRuntimeOperators:
    """Operators the runtime owns."""

    @pytest.mark.parametrize(
        "source, expected",
        [
            ("a + b", "sprout.ops.add(a, b)"),
            ("a - b", "sprout.ops.subtract(a, b)"),
            ("a == b", "sprout.ops.equals(a, b)"),
            ("a != b", "sprout.ops.notEquals(a, b)"),
            ("-x", "sprout.ops.negate(x)"),
            ("!ok", "!(ok)"),
        ],
    )
    def test_lowering(self, source, expected):
        assert js(source) == expected

    def test_nested_lowering(self):
        assert js("a + b - c") == "sprout.ops.subtract(sprout.ops.add(a, b), c)"

    def test_native_operand_inside_helper(self):
        assert js("a % 2 == 0") == "sprout.ops.equals(a % 2, 0)"


class TestPrecedence:
    """Parenthesization of native operators."""

    def test_simple_native_operator(self):
        assert js("a * b") == "a * b"

    def test_left_associative_chain_needs_no_parentheses(self):
        assert js("a / b * c") == "a / b * c"

    def test_right_nested_same_level_is_parenthesized(self):
        tree = BinaryExpression("/", a, BinaryExpression("*", b, c))
        assert CodeGenerator().render_expression(tree, 0) == "a / (b * c)"

    def test_lower_precedence_child_is_parenthesized(self):
        assert js("a || b && c") == "(a || b) && c"

    def test_higher_precedence_child_is_bare(self):
        assert js("a && b || c") == "a && b || c"
        assert js("a < b && c > d") == "a < b && c > d"

    def test_explicit_group_is_kept(self):
        assert js("(a + b) * c") == "(sprout.ops.add(a, b)) * c"

    def test_callee_and_member_object_bind_tightest(self):
        generator = CodeGenerator()
        call = CallExpression(callee=BinaryExpression("*", a, b), arguments=[])
        member = MemberExpression(object=LogicalExpression("&&", a, b), property="x")
        assert generator.render_expression(call, 0) == "(a * b)()"
        assert generator.render_expression(member, 0) == "(a && b).x"


class TestPrimaries:
    """Literals, collections and calls."""

    def test_literals(self):
        assert js('"hi"') == '"hi"'
        assert js("2.50") == "2.5"
        assert js("1.0") == "1"
        assert js("true") == "true"

    def test_list(self):
        assert js('[1, "a", x]') == '[1, "a", x]'

    def test_map_keys(self):
        assert js('{name: n, "full name": 1, "a-b": 2}') == '{name: n, "full name": 1, "a-b": 2}'

    def test_duplicate_map_key_warns(self, caplog):
        with caplog.at_level(logging.WARNING, logger="sprout"):
            assert js("{a: 1, a: 2}") == "{a: 1, a: 2}"

        assert "Duplicate map key 'a'" in caplog.text

    def test_call_and_member(self):
        assert js("max(a, 2)") == "max(a, 2)"
        assert js('"abc".length') == '"abc".length'

    def test_render_and_get(self):
        assert js("render card with item") == 'sprout.render("card", item)'
        assert js('get "#name" value') == 'sprout.get("#name", "value")'
        assert js('get "#l" attr "href"') == 'sprout.get("#l", "attr", "href")'

    def test_unknown_expression_raises(self):
        with pytest.raises(CodeGenerationError):
            CodeGenerator().render_expression(Expression(), 0)


class TestLambdas:
    """Arrow function output."""

    def test_expression_bodies(self):
        assert js("x -> x * 2") == "(x) => x * 2"
        assert js("(a, b) -> a") == "(a, b) => a"
        assert js("-> 1") == "() => 1"

    def test_block_body_at_top_level(self):
        assert generate_javascript(parse_program("let f = x -> {\n  log(x)\n}")) == (
            "let f = (x) => {\n"
            "  log(x);\n"
            "};\n"
        )

    def test_block_body_follows_enclosing_indentation(self):
        source = 'listen "#b" click {\n  items.forEach(x -> {\n    log(x)\n  })\n}'
        assert generate_javascript(parse_program(source)) == (
            'sprout.listen("#b", "click", (event) => {\n'
            "  items.forEach((x) => {\n"
            "    log(x);\n"
            "  });\n"
            "});\n"
        )


class TestFormatting:
    """Helpers for literal emission."""

    @pytest.mark.parametrize(
        "value, expected",
        [
            (0, "0"),
            (-3, "-3"),
            (2.0, "2"),
            (1.5, "1.5"),
            (0.1 + 0.2, "0.30000000000000004"),
            (0.00001, "0.00001"),
            (1e-7, "1e-7"),
            (1.5e-10, "1.5e-10"),
            (1e16, "10000000000000000"),
            (123456789012345680000.0, "123456789012345680000"),
            (1e21, "1e+21"),
            (float("inf"), "Infinity"),
            (float("nan"), "NaN"),
        ],
    )
    def test_format_number(self, value, expected):
        assert format_number(value) == expected

    def test_js_string_escapes_quotes(self):
        assert js_string('say "hi"') == '"say \\"hi\\""'
        assert js_string("café") == '"café"'

    @pytest.mark.parametrize(
        "literal",
        ['"a\\"b"', "'it\\'s'", '"x\\\\"', "'say \"hi\"'"],
    )
    def test_string_literal_is_requoted_as_valid_literal(self, literal):
        program = parse_program(f"let s = {literal}")
        stored = program.body[0].value.value
        emitted = js_string(stored)

        assert f"let s = {emitted};" in generate_javascript(program)
        tokens = tokenize(emitted)
        assert [token.type for token in tokens] == [TokenType.STRING, TokenType.EOF]
        assert tokens[0].value == emitted
        assert json.loads(emitted) == stored

    def test_escape_unsafe_chars(self):
        assert escape_unsafe_chars('"</script>"') == '"\\u003C\\u002Fscript\\u003E"'

    @pytest.mark.parametrize(
        "key, expected",
        [("name", "name"), ("_x1", "_x1"), ("full name", '"full name"'), ("1a", '"1a"')],
    )
    def test_format_object_key(self, key, expected):
        assert format_object_key(key) == expected
