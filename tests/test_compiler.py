"""Tests for the compiler driver and output templates."""

import pytest

from sprout.ast import LetStatement, Program
from sprout.codegen import render_bundle, render_program
from sprout.codegen.templates import render_runtime_tag, render_script_tag
from sprout.compiler import CompileResult, compile_source, indent_lines
from sprout.lang.parser import LexError


PRELUDE = (
    "Sprout.run((sprout) => {\n"
    "  const state = sprout.state;\n"
    "  const std = sprout.std;\n"
    "  const { time, random, list, json, url } = std;\n"
)


class TestCompileSource:
    """End-to-end compilation of Sprout source."""

    def test_wraps_body_in_prelude(self):
        result = compile_source("let a = 1")

        assert result.code == PRELUDE + "  let a = 1;\n});\n"

    def test_empty_source(self):
        assert compile_source("").code == PRELUDE + "});\n"

    def test_nested_body_is_indented_one_level(self):
        result = compile_source('listen "#b" click {\n  n = n + 1\n}')

        assert result.code == PRELUDE + (
            '  sprout.listen("#b", "click", (event) => {\n'
            "    n = sprout.ops.add(n, 1);\n"
            "  });\n"
            "});\n"
        )

    def test_counter_example(self):
        source = (
            "state.count = 0\n"
            'bind state.count to "#count" text\n'
            'listen "#inc" click {\n'
            "  state.count = state.count + 1\n"
            "}\n"
        )
        code = compile_source(source, "counter.sprout").code

        assert "  state.count = 0;\n" in code
        assert '  sprout.bind(() => state.count, "#count", "text");\n' in code
        assert "    state.count = sprout.ops.add(state.count, 1);\n" in code

    def test_result_carries_program(self):
        result = compile_source("let a = 1", "a.sprout")

        assert isinstance(result, CompileResult)
        assert isinstance(result.program, Program)
        assert isinstance(result.program.body[0], LetStatement)
        assert result.program.path == "a.sprout"

    def test_superscript_digit_is_a_lex_error(self):
        with pytest.raises(LexError) as exc_info:
            compile_source("let n = 1²")

        assert (exc_info.value.line, exc_info.value.column) == (1, 10)


class TestIndentLines:
    """Re-indentation of the generated body."""

    def test_blank_lines_stay_blank(self):
        assert indent_lines("a\n\nb\n", 1) == "  a\n\n  b\n"

    def test_adds_trailing_newline(self):
        assert indent_lines("a", 2) == "    a\n"

    def test_empty_text(self):
        assert indent_lines("", 3) == ""


class TestTemplates:
    """Fixed output wrappers."""

    def test_render_program(self):
        assert render_program("  x;\n") == PRELUDE + "  x;\n});\n"

    def test_render_bundle_puts_runtime_first(self):
        assert render_bundle("RT", "CODE") == "RT\nCODE"

    def test_script_tags(self):
        assert render_runtime_tag("RT") == "<script>\nRT\n</script>\n"
        assert render_script_tag("CODE\n") == "<script>\nCODE\n</script>"
