"""Workspace configuration support for the Sprout CLI."""

from __future__ import annotations

import json
import os
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

CONFIG_FILENAMES = ("sprout.toml", ".sproutrc")

RUNTIME_ENV_VAR = "SPROUT_RUNTIME"


@dataclass
class WorkspaceDefaults:
    """Build settings applied when the command line does not override them."""

    runtime: Optional[Path] = None
    include_runtime: bool = True
    script_type: str = "text/sprout"
    out_dir: Optional[Path] = None


@dataclass
class WorkspaceConfig:
    """Resolved workspace configuration."""

    root: Path
    defaults: WorkspaceDefaults = field(default_factory=WorkspaceDefaults)
    source: Optional[Path] = None
    raw: Dict[str, Any] = field(default_factory=dict)

    @property
    def is_default(self) -> bool:
        return self.source is None


def _read_json_config(path: Path) -> Dict[str, Any]:
    content = path.read_text(encoding="utf-8")
    return json.loads(content)


def _read_toml_config(path: Path) -> Dict[str, Any]:
    with path.open("rb") as handle:
        return tomllib.load(handle)


def _resolve_path(value: Any, root: Path) -> Optional[Path]:
    if value in (None, ""):
        return None
    path = Path(str(value)).expanduser()
    if not path.is_absolute():
        path = (root / path).resolve()
    return path


def _parse_defaults(data: Dict[str, Any], root: Path) -> WorkspaceDefaults:
    defaults_section = data.get("defaults") or {}
    if not isinstance(defaults_section, dict):
        raise ValueError("[defaults] must be a table")

    include_runtime = defaults_section.get("include_runtime", WorkspaceDefaults.include_runtime)
    if not isinstance(include_runtime, bool):
        raise ValueError(f"include_runtime must be true or false, got {include_runtime!r}")

    return WorkspaceDefaults(
        runtime=_resolve_path(defaults_section.get("runtime"), root),
        include_runtime=include_runtime,
        script_type=str(defaults_section.get("script_type") or WorkspaceDefaults.script_type),
        out_dir=_resolve_path(defaults_section.get("out_dir"), root),
    )


def locate_config_file(root: Path, explicit: Optional[Path] = None) -> Optional[Path]:
    if explicit is not None:
        return explicit if explicit.exists() else None
    for candidate in CONFIG_FILENAMES:
        path = root / candidate
        if path.exists():
            return path
    return None


def load_workspace_config(
    root: Path,
    explicit: Optional[Path] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> WorkspaceConfig:
    """
    Load ``sprout.toml`` or ``.sproutrc`` from the workspace root.

    A missing file yields the built-in defaults. ``SPROUT_RUNTIME`` in
    ``environ`` (the process environment by default) replaces the
    configured runtime path.

    Raises:
        tomllib.TOMLDecodeError, json.JSONDecodeError: Malformed file
        ValueError: A section has the wrong shape
    """
    root = root.resolve()
    environ = os.environ if environ is None else environ
    config_path = locate_config_file(root, explicit)

    data: Dict[str, Any] = {}
    if config_path is not None:
        if config_path.suffix == ".toml":
            data = _read_toml_config(config_path)
        else:
            data = _read_json_config(config_path)
        if not isinstance(data, dict):
            raise ValueError(f"{config_path.name} must contain a table of settings")

    defaults = _parse_defaults(data, root)

    runtime_override = environ.get(RUNTIME_ENV_VAR)
    if runtime_override:
        defaults.runtime = _resolve_path(runtime_override, root)

    return WorkspaceConfig(root=root, defaults=defaults, source=config_path, raw=data)


__all__ = [
    "CONFIG_FILENAMES",
    "RUNTIME_ENV_VAR",
    "WorkspaceDefaults",
    "WorkspaceConfig",
    "locate_config_file",
    "load_workspace_config",
]
