"""
Test suite for CLI validation and file loading helpers.

Covers path validation, runtime lookup and output path resolution.
"""

from pathlib import Path

import pytest

from sprout.cli.errors import CLIFileNotFoundError, CLIValidationError
from sprout.cli.loading import (
    display_path,
    load_runtime,
    read_source,
    resolve_output_path,
    resolve_runtime_path,
)
from sprout.cli.validation import is_html_source, validate_path, validate_source_file
from sprout.config import WorkspaceDefaults


class TestValidatePath:
    """Test validate_path() function."""

    def test_valid_string_path(self):
        result = validate_path("/tmp/test.sprout")
        assert isinstance(result, Path)
        assert str(result) == "/tmp/test.sprout"

    def test_none_without_allow_none(self):
        with pytest.raises(CLIValidationError) as exc_info:
            validate_path(None)
        assert "cannot be None" in str(exc_info.value)

    def test_none_with_allow_none(self):
        assert validate_path(None, allow_none=True) is None

    def test_must_exist_with_missing_file(self, tmp_path):
        with pytest.raises(CLIValidationError) as exc_info:
            validate_path(tmp_path / "missing.sprout", must_exist=True)
        assert "does not exist" in str(exc_info.value)

    def test_invalid_type(self):
        with pytest.raises(CLIValidationError) as exc_info:
            validate_path(123)
        assert "Expected path-like value, got int" in str(exc_info.value)


class TestValidateSourceFile:
    """Test validate_source_file() function."""

    def test_existing_file_is_resolved(self, tmp_path):
        source = tmp_path / "app.sprout"
        source.write_text("let a = 1", encoding="utf-8")

        assert validate_source_file(str(source)) == source.resolve()

    def test_missing_file(self, tmp_path):
        with pytest.raises(CLIFileNotFoundError) as exc_info:
            validate_source_file(tmp_path / "missing.sprout")
        assert exc_info.value.code == "CLI_FILE_NOT_FOUND"

    def test_directory(self, tmp_path):
        with pytest.raises(CLIValidationError) as exc_info:
            validate_source_file(tmp_path)
        assert exc_info.value.hint == "Pass a .sprout or .html file"

    @pytest.mark.parametrize("name, expected", [("a.html", True), ("A.HTML", True), ("a.sprout", False)])
    def test_is_html_source(self, name, expected):
        assert is_html_source(Path(name)) is expected


class TestRuntimeLookup:
    """Test runtime bundle resolution."""

    def test_explicit_path_wins(self, tmp_path):
        defaults = WorkspaceDefaults(runtime=tmp_path / "configured.js")
        result = resolve_runtime_path(str(tmp_path / "flag.js"), defaults, tmp_path)
        assert result == (tmp_path / "flag.js").resolve()

    def test_configured_path(self, tmp_path):
        defaults = WorkspaceDefaults(runtime=tmp_path / "configured.js")
        assert resolve_runtime_path(None, defaults, tmp_path) == tmp_path / "configured.js"

    def test_workspace_default(self, tmp_path):
        assert resolve_runtime_path(None, WorkspaceDefaults(), tmp_path) == tmp_path / "runtime.js"

    def test_missing_runtime(self, tmp_path):
        with pytest.raises(CLIFileNotFoundError) as exc_info:
            load_runtime(tmp_path / "runtime.js")
        assert exc_info.value.context == {"runtime": str(tmp_path / "runtime.js")}

    def test_load_runtime(self, tmp_path):
        (tmp_path / "runtime.js").write_text("// rt", encoding="utf-8")
        assert load_runtime(tmp_path / "runtime.js") == "// rt"


class TestOutputPaths:
    """Test resolve_output_path() and display_path()."""

    def test_sprout_source_gets_js_suffix(self):
        assert resolve_output_path(Path("/src/app.sprout")) == Path("/src/app.js")

    def test_html_source_gets_compiled_suffix(self):
        assert resolve_output_path(Path("/src/index.html")) == Path("/src/index.compiled.html")

    def test_out_dir(self, tmp_path):
        result = resolve_output_path(Path("/src/app.sprout"), out_dir=tmp_path / "dist")
        assert result == tmp_path / "dist" / "app.js"

    def test_requested_output_resolves_against_cwd(self, tmp_path):
        result = resolve_output_path(Path("/src/app.sprout"), "out/x.js", cwd=tmp_path)
        assert result == (tmp_path / "out" / "x.js").resolve()

    def test_display_path_is_relative(self, tmp_path):
        assert display_path(tmp_path / "dist" / "app.js", cwd=tmp_path) == str(Path("dist") / "app.js")


class TestReadSource:
    """Test read_source()."""

    def test_invalid_utf8(self, tmp_path):
        path = tmp_path / "app.sprout"
        path.write_bytes(b"\xff\xfe\x00")

        with pytest.raises(CLIValidationError) as exc_info:
            read_source(path)
        assert "not valid UTF-8" in exc_info.value.message

    def test_missing_file(self, tmp_path):
        with pytest.raises(CLIFileNotFoundError):
            read_source(tmp_path / "gone.sprout")
