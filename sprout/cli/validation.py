"""
Argument validation for the Sprout CLI.

Every command checks its input path through these helpers so a missing
file or a directory is reported the same way everywhere.
"""

import os
from pathlib import Path
from typing import Any, Optional

from .errors import CLIFileNotFoundError, CLIValidationError

# Input suffixes the build command knows how to handle
SOURCE_SUFFIXES = (".sprout", ".html")


def validate_path(value: Any, *, allow_none: bool = False, must_exist: bool = False) -> Optional[Path]:
    """
    Coerce a command-line value to a ``Path``.

    Raises:
        CLIValidationError: For None (unless ``allow_none``), non path-like
            values, or a missing path when ``must_exist`` is set

    Examples:
        >>> validate_path("app.sprout")
        PosixPath('app.sprout')
        >>> validate_path(None, allow_none=True) is None
        True
    """
    if value is None and allow_none:
        return None
    if value is None:
        raise CLIValidationError(
            "Path value cannot be None",
            hint="Pass the path of a .sprout or .html file"
        )
    if not isinstance(value, (str, os.PathLike)):
        raise CLIValidationError(
            f"Expected path-like value, got {type(value).__name__}",
            hint="Pass the path as a string"
        )

    path = Path(value)
    if must_exist and not path.exists():
        raise CLIValidationError(f"Path does not exist: {path}", hint="Check the path and try again")
    return path


def validate_source_file(value: Any) -> Path:
    """
    Validate the input file of a command and return its absolute path.

    Raises:
        CLIFileNotFoundError: If the file does not exist
        CLIValidationError: If the path names a directory
    """
    path = validate_path(value).expanduser().resolve()
    if not path.exists():
        raise CLIFileNotFoundError(
            f"Source file not found: {path}",
            hint="Check the file path and try again"
        )
    if path.is_dir():
        raise CLIValidationError(
            f"Expected a file, got a directory: {path}",
            hint=f"Pass a {' or '.join(SOURCE_SUFFIXES)} file"
        )
    return path


def is_html_source(path: Path) -> bool:
    return path.suffix.lower() == ".html"


__all__ = [
    "SOURCE_SUFFIXES",
    "validate_path",
    "validate_source_file",
    "is_html_source",
]
