"""Shared pytest fixtures for the Sprout test suite."""

import logging
from pathlib import Path

import pytest


RUNTIME_SOURCE = "window.Sprout = { run(fn) { fn({}); } };"


@pytest.fixture(autouse=True)
def reset_sprout_logger():
    """Undo logger configuration done by CLI runs so caplog keeps working."""
    yield
    sprout_logger = logging.getLogger("sprout")
    for handler in list(sprout_logger.handlers):
        sprout_logger.removeHandler(handler)
    sprout_logger.setLevel(logging.NOTSET)
    sprout_logger.propagate = True


@pytest.fixture
def workspace(tmp_path: Path, monkeypatch) -> Path:
    """Temporary working directory with a runtime bundle and a clean environment."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("SPROUT_RUNTIME", raising=False)
    monkeypatch.delenv("SPROUT_VERBOSE", raising=False)
    monkeypatch.delenv("SPROUT_LOG_LEVEL", raising=False)
    (tmp_path / "runtime.js").write_text(RUNTIME_SOURCE, encoding="utf-8")
    return tmp_path
