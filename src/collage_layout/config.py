"""
Configuration schema and loader for the collage layout engine.

Defines Pydantic models representing structured configuration sections
and a TOML-based config loader with validation support.
"""

from pathlib import Path

import tomlkit
from pydantic import BaseModel, Field, field_validator

from collage_layout.config_defaults import (
    DEFAULT_ASPECT_RATIO,
    DEFAULT_BORDER_THICKNESS_PERCENT,
    DEFAULT_LIMIT_SEQUENTIAL_TO_GRID_CELLS,
    DEFAULT_LOG_LEVEL,
    DEFAULT_MAX_CANVAS_WIDTH,
    DEFAULT_MIN_RECT_SIZE_PX,
    DEFAULT_SCALE_EPSILON,
)
from collage_layout.constants import (
    ASPECT_RATIO_PRESETS,
    BORDER_PERCENT_MAX,
    BORDER_PERCENT_MIN,
)

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class GeometryConfig(BaseModel):
    """Control how layouts are resolved into panel rectangles."""

    min_rect_size_px: float = Field(DEFAULT_MIN_RECT_SIZE_PX, ge=0)
    limit_sequential_to_grid_cells: bool = (
        DEFAULT_LIMIT_SEQUENTIAL_TO_GRID_CELLS
    )


class ScalingConfig(BaseModel):
    """Control transform rescaling on project load."""

    epsilon: float = Field(DEFAULT_SCALE_EPSILON, gt=0, lt=1)


class CanvasConfig(BaseModel):
    """Canvas sizing defaults used when no surface has been measured."""

    max_width: int = Field(DEFAULT_MAX_CANVAS_WIDTH, gt=0)
    default_aspect_ratio: str = Field(DEFAULT_ASPECT_RATIO)
    border_thickness_percent: float = Field(
        DEFAULT_BORDER_THICKNESS_PERCENT,
        ge=BORDER_PERCENT_MIN,
        le=BORDER_PERCENT_MAX,
    )

    @field_validator("default_aspect_ratio")
    @classmethod
    def _known_preset(cls, value: str) -> str:
        if value not in ASPECT_RATIO_PRESETS:
            choices = ", ".join(ASPECT_RATIO_PRESETS)
            msg = f"default_aspect_ratio must be one of: {choices}"
            raise ValueError(msg)
        return value


class LoggingConfig(BaseModel):
    """Select the log level of the shared logger."""

    level: str = Field(DEFAULT_LOG_LEVEL)

    @field_validator("level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        upper = value.upper()
        if upper not in _LOG_LEVELS:
            msg = f"level must be one of: {', '.join(_LOG_LEVELS)}"
            raise ValueError(msg)
        return upper


class CollageLayoutConfig(BaseModel):
    """
    Root configuration object combining all supported sections.

    Mirrors the structure of config.toml, grouping related parameters
    under logical categories.
    """

    geometry: GeometryConfig = Field(
        default_factory=lambda: GeometryConfig.model_validate({}),
    )
    scaling: ScalingConfig = Field(
        default_factory=lambda: ScalingConfig.model_validate({}),
    )
    canvas: CanvasConfig = Field(
        default_factory=lambda: CanvasConfig.model_validate({}),
    )
    logging: LoggingConfig = Field(
        default_factory=lambda: LoggingConfig.model_validate({}),
    )


class ConfigLoader:
    """
    Loads and parses a TOML configuration file into a typed config object.

    Falls back to defaults for any missing subsections or fields.
    """

    @staticmethod
    def load(path: str | Path) -> CollageLayoutConfig:
        """
        Load a layout engine configuration from a TOML file.

        Returns a validated CollageLayoutConfig instance based on the file
        contents.
        """
        config_path = Path(path)
        if not config_path.is_file():
            msg = f"Config file not found: {path}"
            raise FileNotFoundError(msg)

        with config_path.open("r", encoding="utf-8") as f:
            doc = tomlkit.load(f)

        return CollageLayoutConfig.model_validate(doc.unwrap())
