"""
File loading for CLI operations.

This module reads Sprout sources and the runtime bundle, loads the
workspace configuration and decides where compiled output is written.
All filesystem failures are translated into CLI errors here.
"""

import json
import logging
import os
import tomllib
from pathlib import Path
from typing import Optional

from ..config import WorkspaceConfig, WorkspaceDefaults, load_workspace_config
from .errors import CLIConfigError, CLIFileNotFoundError, CLIValidationError, wrap_exception
from .validation import is_html_source

logger = logging.getLogger(__name__)

DEFAULT_RUNTIME_FILENAME = "runtime.js"


def load_workspace(root: Path, explicit: Optional[Path] = None) -> WorkspaceConfig:
    """
    Load workspace configuration, reporting malformed files as CLI errors.

    Raises:
        CLIFileNotFoundError: If an explicit config file does not exist
        CLIConfigError: If the config file cannot be read or parsed
    """
    if explicit is not None and not explicit.exists():
        raise CLIFileNotFoundError(
            f"Configuration file not found: {explicit}",
            hint="Check the --config path"
        )
    try:
        config = load_workspace_config(root, explicit)
    except (tomllib.TOMLDecodeError, json.JSONDecodeError, ValueError, OSError) as exc:
        raise wrap_exception(
            exc,
            message=f"Invalid workspace configuration: {exc}",
            error_class=CLIConfigError,
            hint="Fix the [defaults] section of sprout.toml or .sproutrc",
        ) from exc
    if config.source is not None:
        logger.debug("Loaded workspace configuration from %s", config.source)
    return config


def read_source(path: Path) -> str:
    """
    Read a Sprout or HTML source file as UTF-8.

    Raises:
        CLIFileNotFoundError: If the file vanished before it could be read
        CLIValidationError: If the file is not valid UTF-8 text
    """
    try:
        return path.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        raise CLIFileNotFoundError(
            f"Source file not found: {path}",
            hint="Check the file path and try again"
        ) from exc
    except UnicodeDecodeError as exc:
        raise CLIValidationError(
            f"Source file is not valid UTF-8: {path}",
            hint="Save the file with UTF-8 encoding"
        ) from exc


def resolve_runtime_path(
    explicit: Optional[str],
    defaults: WorkspaceDefaults,
    workspace_root: Path,
) -> Path:
    """
    Locate the runtime bundle.

    The ``--runtime`` flag wins over ``SPROUT_RUNTIME`` and the configured
    ``runtime``; without either, ``runtime.js`` in the workspace root is used.
    """
    if explicit:
        return Path(explicit).expanduser().resolve()
    if defaults.runtime is not None:
        return defaults.runtime
    return workspace_root / DEFAULT_RUNTIME_FILENAME


def load_runtime(path: Path) -> str:
    """
    Load the runtime bundle source.

    Raises:
        CLIFileNotFoundError: If the bundle cannot be found
    """
    if not path.is_file():
        raise CLIFileNotFoundError(
            f"Runtime bundle not found: {path}",
            hint="Pass --runtime PATH or set SPROUT_RUNTIME; use --no-runtime to omit it",
            context={"runtime": str(path)},
        )
    return path.read_text(encoding="utf-8")


def resolve_output_path(
    input_path: Path,
    requested: Optional[str] = None,
    *,
    out_dir: Optional[Path] = None,
    cwd: Optional[Path] = None,
) -> Path:
    """
    Compute where compiled output is written.

    An explicit output resolves against the working directory. Otherwise
    ``page.html`` becomes ``page.compiled.html`` and any other input
    ``<stem>.js``, next to the input or inside ``out_dir``.

    Examples:
        >>> resolve_output_path(Path("/src/app.sprout"))
        PosixPath('/src/app.js')
        >>> resolve_output_path(Path("/src/index.html"))
        PosixPath('/src/index.compiled.html')
    """
    if requested:
        base = cwd if cwd is not None else Path.cwd()
        return (base / Path(requested).expanduser()).resolve()

    directory = out_dir if out_dir is not None else input_path.parent
    if is_html_source(input_path):
        return directory / f"{input_path.stem}.compiled.html"
    return directory / f"{input_path.stem}.js"


def display_path(path: Path, cwd: Optional[Path] = None) -> str:
    """Path relative to the working directory, as shown in CLI messages."""
    base = cwd if cwd is not None else Path.cwd()
    return os.path.relpath(path, base)


__all__ = [
    "DEFAULT_RUNTIME_FILENAME",
    "load_workspace",
    "read_source",
    "resolve_runtime_path",
    "load_runtime",
    "resolve_output_path",
    "display_path",
]
