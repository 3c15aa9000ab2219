"""Tests for compiling Sprout blocks embedded in HTML."""

import logging

import pytest

from sprout.codegen.html import escape_script_close, script_pattern, transform_html
from sprout.compiler import compile_source
from sprout.lang.parser import SproutSyntaxError


BLOCK = '<script type="text/sprout">\nlet a = 1\n</script>'


class TestTransformHtml:
    """Replacing script blocks with compiled code."""

    def test_block_is_replaced_with_runtime_before_it(self):
        html = f"<p>x</p>\n{BLOCK}\n<p>y</p>"
        code = compile_source("\nlet a = 1\n").code

        result = transform_html(html, runtime="RT")

        assert result == f"<p>x</p>\n<script>\nRT\n</script>\n<script>\n{code}</script>\n<p>y</p>"

    def test_runtime_is_inserted_once(self):
        result = transform_html(f"{BLOCK}\n{BLOCK}", runtime="RT")

        assert result.count("RT") == 1
        assert result.count("Sprout.run(") == 2
        assert result.index("RT") < result.index("Sprout.run(")

    def test_without_runtime(self):
        result = transform_html(BLOCK)

        assert result.startswith("<script>\nSprout.run(")

    def test_blocks_compile_independently(self):
        html = (
            '<script type="text/sprout">let a = 1</script>'
            '<script type="text/sprout">let b = 2</script>'
        )
        result = transform_html(html)

        assert "let a = 1;" in result
        assert "let b = 2;" in result

    def test_match_is_case_insensitive_with_either_quote(self):
        html = "<SCRIPT id='main' TYPE='text/sprout'>let a = 1</SCRIPT>"
        assert "let a = 1;" in transform_html(html)

    def test_other_scripts_are_left_alone(self):
        html = '<script type="module">import x from "y";</script>'
        assert transform_html(html, runtime="RT") == html

    def test_no_blocks_logs_warning(self, caplog):
        with caplog.at_level(logging.WARNING, logger="sprout"):
            result = transform_html("<p>plain</p>", path="page.html")

        assert result == "<p>plain</p>"
        assert "No <script type='text/sprout'> blocks found in page.html" in caplog.text

    def test_custom_script_type(self):
        html = '<script type="text/x-sprout">let a = 1</script>'
        assert "let a = 1;" in transform_html(html, script_type="text/x-sprout")
        assert transform_html(html) == html

    def test_closing_script_sequence_is_escaped(self):
        html = '<script type="text/sprout">log("</script")</script>'
        result = transform_html(html)

        assert '<\\/script' in result
        assert result.count("</script") == 1


class TestHtmlErrors:
    """Errors inside embedded blocks."""

    def test_error_line_refers_to_document(self):
        html = '<html>\n<body>\n<script type="text/sprout">\nlet x = )\n</script>'

        with pytest.raises(SproutSyntaxError) as exc_info:
            transform_html(html, path="page.html")

        assert exc_info.value.line == 4
        assert exc_info.value.path == "page.html"


class TestHelpers:
    """Pattern and escaping helpers."""

    def test_script_pattern_captures_body(self):
        match = script_pattern().search('<script defer type="text/sprout">body</script>')
        assert match.group(1) == "body"

    def test_escape_script_close_keeps_case(self):
        assert escape_script_close("a</SCRIPT>b") == "a<\\/SCRIPT>b"
