"""
Test configuration and shared fixtures for collage_layout.

Provides reusable layout documents and a helper for writing them to
disk in either JSON or TOML form.

Note:
    This file is automatically loaded by pytest and should not be
    renamed.

"""
import json
from collections.abc import Callable, Iterator
from pathlib import Path
from typing import Any

import pytest
import tomlkit

from collage_layout.logging_utils import logger


@pytest.fixture
def two_by_two_layout() -> dict[str, Any]:
    """Plain 2x2 grid template."""
    return {
        "gridTemplateColumns": "repeat(2, 1fr)",
        "gridTemplateRows": "repeat(2, 1fr)",
    }


@pytest.fixture
def main_with_sidebar_layout() -> dict[str, Any]:
    """Named-area template: a tall left panel next to two stacked ones."""
    return {
        "gridTemplateColumns": "2fr 1fr",
        "gridTemplateRows": "1fr 1fr",
        "gridTemplateAreas": '"main top" "main bottom"',
        "areas": ["main", "top", "bottom"],
    }


@pytest.fixture
def dragged_layout() -> dict[str, Any]:
    """Ratio-based custom layout as persisted after a border drag."""
    return {
        "panelRects": [
            {"panelId": "panel-2", "index": 1,
             "x": 0.6, "y": 0, "width": 0.4, "height": 1},
            {"panelId": "panel-1", "index": 0,
             "x": 0, "y": 0, "width": 0.6, "height": 1},
        ],
    }


@pytest.fixture
def write_document(tmp_path: Path) -> Callable[..., Path]:
    """Write a document as JSON (default) or TOML and return its path."""

    def _write(data: Any, name: str = "layout.json") -> Path:
        path = tmp_path / name
        if path.suffix == ".toml":
            doc = tomlkit.document()
            doc.update(data)
            path.write_text(tomlkit.dumps(doc), encoding="utf-8")
        else:
            path.write_text(json.dumps(data), encoding="utf-8")
        return path

    return _write


@pytest.fixture(autouse=True)
def enable_logger_propagation(monkeypatch: pytest.MonkeyPatch) -> None:
    """Enable propagation for the package logger to allow caplog to work."""
    monkeypatch.setattr(logger, "propagate", True)


@pytest.fixture(autouse=True)
def restore_logger_level() -> Iterator[None]:
    """Undo level changes made by the CLI or ``set_log_level``."""
    original = logger.level
    yield
    logger.setLevel(original)
