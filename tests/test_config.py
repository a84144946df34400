"""
Unit tests for the config module of the collage layout engine.

Covers:
- Successful loading of a valid config.toml
- Default fallbacks for missing values
- Error handling for missing files
- Field validation of each section
"""
from pathlib import Path
from typing import Any

import pytest
import tomlkit
from pydantic import ValidationError

import collage_layout.config as cl_config
from collage_layout.config_defaults import (
    DEFAULT_ASPECT_RATIO,
    DEFAULT_BORDER_THICKNESS_PERCENT,
    DEFAULT_LIMIT_SEQUENTIAL_TO_GRID_CELLS,
    DEFAULT_LOG_LEVEL,
    DEFAULT_MAX_CANVAS_WIDTH,
    DEFAULT_MIN_RECT_SIZE_PX,
    DEFAULT_SCALE_EPSILON,
)


def create_toml_file(tmp_path: Path, data: dict[str, Any]) -> Path:
    """Write ``data`` as config.toml under ``tmp_path``."""
    doc = tomlkit.document()
    doc.update(data)
    path = tmp_path / "config.toml"
    path.write_text(tomlkit.dumps(doc), encoding="utf-8")
    return path


def test_load_valid_config(tmp_path: Path) -> None:
    """Test that a well-formed config.toml loads successfully."""
    path = create_toml_file(tmp_path, {
        "geometry": {
            "min_rect_size_px": 2.0,
            "limit_sequential_to_grid_cells": True,
        },
        "scaling": {"epsilon": 0.01},
        "canvas": {
            "max_width": 900,
            "default_aspect_ratio": "portrait",
            "border_thickness_percent": 2.5,
        },
        "logging": {"level": "debug"},
    })
    cfg = cl_config.ConfigLoader.load(path)

    assert isinstance(cfg, cl_config.CollageLayoutConfig)
    assert cfg.geometry.min_rect_size_px == 2.0  # noqa: PLR2004
    assert cfg.geometry.limit_sequential_to_grid_cells is True
    assert cfg.scaling.epsilon == 0.01  # noqa: PLR2004
    assert cfg.canvas.max_width == 900  # noqa: PLR2004
    assert cfg.canvas.default_aspect_ratio == "portrait"
    assert cfg.canvas.border_thickness_percent == 2.5  # noqa: PLR2004
    assert cfg.logging.level == "DEBUG"


def test_missing_file_raises(tmp_path: Path) -> None:
    """Ensure FileNotFoundError is raised for nonexistent config."""
    with pytest.raises(FileNotFoundError, match="Config file not found"):
        cl_config.ConfigLoader.load(tmp_path / "nonexistent_file.toml")


def test_partial_config_uses_defaults(tmp_path: Path) -> None:
    """ConfigLoader should fall back to defaults for missing sections."""
    path = create_toml_file(tmp_path, {"geometry": {"min_rect_size_px": 1}})
    cfg = cl_config.ConfigLoader.load(path)

    assert cfg.geometry.min_rect_size_px == 1
    assert (cfg.geometry.limit_sequential_to_grid_cells
            is DEFAULT_LIMIT_SEQUENTIAL_TO_GRID_CELLS)
    assert cfg.scaling.epsilon == DEFAULT_SCALE_EPSILON
    assert cfg.canvas.default_aspect_ratio == DEFAULT_ASPECT_RATIO
    assert cfg.logging.level == DEFAULT_LOG_LEVEL


def test_empty_config_matches_defaults() -> None:
    """An empty document yields the same values as the defaults module."""
    cfg = cl_config.CollageLayoutConfig.model_validate({})
    assert cfg.geometry.min_rect_size_px == DEFAULT_MIN_RECT_SIZE_PX
    assert cfg.canvas.max_width == DEFAULT_MAX_CANVAS_WIDTH
    assert (cfg.canvas.border_thickness_percent
            == DEFAULT_BORDER_THICKNESS_PERCENT)


@pytest.mark.parametrize(("section", "values", "field"), [
    (cl_config.GeometryConfig, {"min_rect_size_px": -1}, "min_rect_size_px"),
    (cl_config.ScalingConfig, {"epsilon": 0}, "epsilon"),
    (cl_config.ScalingConfig, {"epsilon": 1.5}, "epsilon"),
    (cl_config.CanvasConfig, {"max_width": 0}, "max_width"),
    (cl_config.CanvasConfig, {"border_thickness_percent": 101},
     "border_thickness_percent"),
    (cl_config.CanvasConfig, {"default_aspect_ratio": "cinema"},
     "default_aspect_ratio"),
    (cl_config.LoggingConfig, {"level": "chatty"}, "level"),
])
def test_invalid_values_raise(
    section: type, values: dict[str, Any], field: str,
) -> None:
    """Ensure out-of-range values raise ValidationError naming the field."""
    with pytest.raises(ValidationError) as exc_info:
        section.model_validate(values)  # type: ignore[attr-defined]
    assert field in str(exc_info.value)
