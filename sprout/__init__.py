"""
Sprout language compiler package.

Sprout is a small language for wiring up web pages: event listeners,
DOM updates, network requests and reactive bindings are written as
plain verb statements and compiled to JavaScript that runs against the
``Sprout.run`` host runtime.

The code is organised into several modules:

* ``lang`` - the lexer, the recursive descent parser and its error types.
* ``ast`` - frozen dataclasses forming the syntax tree the parser
  produces and the code generator consumes.
* ``codegen`` - JavaScript generation, output templates and the HTML
  embedding pass that compiles ``<script type="text/sprout">`` blocks.
* ``compiler`` - the driver that turns source text into a runnable script.
* ``config`` - ``sprout.toml`` workspace settings.
* ``cli`` - the ``sprout`` command line interface.
"""

import re
from pathlib import Path
from importlib import metadata as _metadata


def _local_version() -> str | None:
    root = Path(__file__).resolve().parents[1]
    pyproject = root / "pyproject.toml"
    if not pyproject.exists():
        return None
    try:
        text = pyproject.read_text(encoding="utf-8")
    except OSError:  # pragma: no cover - IO errors should not break imports
        return None
    match = re.search(r"^version\s*=\s*\"([^\"]+)\"", text, flags=re.MULTILINE)
    if match:
        return match.group(1)
    return None


try:  # pragma: no cover - metadata fallback for editable installs
    __version__ = _metadata.version("sprout-lang")
except _metadata.PackageNotFoundError:  # pragma: no cover - source tree
    __version__ = _local_version() or "0.1.0"
else:  # pragma: no cover - version override for in-repo runs
    __version__ = _local_version() or __version__

__all__ = ["__version__"]
