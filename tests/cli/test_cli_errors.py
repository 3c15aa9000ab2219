"""
Test suite for CLI error formatting.

Ensures CLI errors, compiler errors and unexpected exceptions are all
reported in a consistent, user-friendly format.
"""

import argparse

import pytest

from sprout.cli.context import get_cli_context
from sprout.cli.errors import (
    CLIBuildError,
    CLIConfigError,
    CLIError,
    CLIFileNotFoundError,
    cli_verbose_enabled,
    format_cli_error,
    handle_cli_exception,
    wrap_exception,
)
from sprout.lang.parser.errors import SproutSyntaxError


class TestErrorClasses:
    """Default codes and attributes."""

    @pytest.mark.parametrize(
        "error_class, code",
        [
            (CLIConfigError, "CLI_CONFIG_ERROR"),
            (CLIBuildError, "CLI_BUILD_ERROR"),
            (CLIFileNotFoundError, "CLI_FILE_NOT_FOUND"),
        ],
    )
    def test_default_codes(self, error_class, code):
        error = error_class("boom")
        assert error.code == code
        assert str(error) == "boom"
        assert error.context == {}

    def test_code_override(self):
        assert CLIConfigError("x", code="CUSTOM").code == "CUSTOM"


class TestFormatCliError:
    """Test format_cli_error()."""

    def test_cli_error_with_hint(self):
        error = CLIBuildError("Could not write", hint="Check permissions")
        assert format_cli_error(error) == "Error [CLI_BUILD_ERROR]: Could not write\nHint: Check permissions"

    def test_context_only_when_verbose(self):
        error = CLIError("Bad", code="X", context={"path": "a.sprout"})
        assert "Context" not in format_cli_error(error)
        assert "  path: a.sprout" in format_cli_error(error, verbose=True)

    def test_compiler_error(self):
        error = SproutSyntaxError("Expected 'to'", path="a.sprout", line=2, column=5)
        assert format_cli_error(error) == "Error: File: a.sprout | Line 2:5 | [SYNTAX_ERROR] Expected 'to'"

    def test_unexpected_exception(self):
        assert format_cli_error(RuntimeError("oops")) == "Error: RuntimeError: oops"

    def test_traceback(self):
        try:
            raise ValueError("deep")
        except ValueError as exc:
            output = format_cli_error(exc, include_traceback=True)

        assert "Traceback:" in output
        assert "ValueError: deep" in output


class TestWrapException:
    """Test wrap_exception()."""

    def test_records_original_exception(self):
        wrapped = wrap_exception(OSError("disk full"), message="Write failed", hint="Free space")

        assert isinstance(wrapped, CLIBuildError)
        assert wrapped.hint == "Free space"
        assert wrapped.context == {"original_exception": "disk full", "original_type": "OSError"}

    def test_custom_error_class(self):
        wrapped = wrap_exception(ValueError("bad"), message="Bad config", error_class=CLIConfigError)
        assert wrapped.code == "CLI_CONFIG_ERROR"


class TestHandleCliException:
    """Test handle_cli_exception() and verbosity flags."""

    def test_exits_with_message(self, capsys, monkeypatch):
        monkeypatch.delenv("SPROUT_VERBOSE", raising=False)

        with pytest.raises(SystemExit) as exc_info:
            handle_cli_exception(CLIFileNotFoundError("missing"))

        assert exc_info.value.code == 1
        assert capsys.readouterr().err.strip() == "Error [CLI_FILE_NOT_FOUND]: missing"

    @pytest.mark.parametrize("value, expected", [("1", True), ("yes", True), ("0", False), ("", False)])
    def test_verbose_env_flag(self, monkeypatch, value, expected):
        monkeypatch.setenv("SPROUT_VERBOSE", value)
        assert cli_verbose_enabled() is expected

    def test_verbose_flag(self, monkeypatch):
        monkeypatch.delenv("SPROUT_VERBOSE", raising=False)
        assert cli_verbose_enabled(True) is True


class TestCliContext:
    """Test get_cli_context()."""

    def test_missing_context(self):
        with pytest.raises(CLIConfigError) as exc_info:
            get_cli_context(argparse.Namespace())
        assert exc_info.value.code == "CLI_CONTEXT_NOT_INITIALIZED"
