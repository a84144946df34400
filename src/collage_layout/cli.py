"""Command-line front end: layout documents in, JSON geometry out."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import TYPE_CHECKING, Any, TypeVar

import tomlkit
from pydantic import ValidationError

from collage_layout.config import CollageLayoutConfig, ConfigLoader
from collage_layout.geometry import (
    compute_panel_dimensions_from_template,
    estimate_canvas_dimensions,
    is_custom_layout_compatible,
    parse_grid_to_rects,
    resolve_aspect_ratio,
)
from collage_layout.logging_utils import logger, set_log_level
from collage_layout.scaling import scale_transforms
from collage_layout.type_defs import PanelTransform, ScalingContext

if TYPE_CHECKING:  # pragma: no cover
    from collections.abc import Callable, Sequence

_SIZE_PARTS = 2

T = TypeVar("T")


def _wrap_validator(
    validator: Callable[[str], T],
    error_cls: type[argparse.ArgumentTypeError] = argparse.ArgumentTypeError,
) -> Callable[[str], T]:
    """Convert ``ValueError`` from a validator into ``ArgumentTypeError``."""

    def wrapper(text: str) -> T:
        try:
            return validator(text)
        except ValueError as exc:
            raise error_cls(str(exc)) from exc

    return wrapper


def positive_int(text: str) -> int:
    """Argparse-style validator that enforces a strictly positive integer."""
    try:
        value = int(text)
    except ValueError as exc:
        msg = "must be an integer"
        raise ValueError(msg) from exc
    if value <= 0:
        msg = "must be positive"
        raise ValueError(msg)
    return value


def non_negative_float(text: str) -> float:
    """Argparse-style validator for border sizes and percentages."""
    try:
        value = float(text)
    except ValueError as exc:
        msg = "must be a number"
        raise ValueError(msg) from exc
    if value < 0:
        msg = "must not be negative"
        raise ValueError(msg)
    return value


def size_2d(text: str) -> tuple[float, float]:
    """Parse ``WxH`` strings into a positive width and height."""
    parts = text.lower().split("x")
    if len(parts) != _SIZE_PARTS:
        msg = "must look like WxH, e.g., 1200x800"
        raise ValueError(msg)
    try:
        width, height = float(parts[0]), float(parts[1])
    except ValueError as exc:
        msg = "width and height must be numbers"
        raise ValueError(msg) from exc
    if width <= 0 or height <= 0:
        msg = "width and height must be positive"
        raise ValueError(msg)
    return width, height


def aspect_ratio(text: str) -> float:
    """Accept a preset name such as ``landscape`` or a positive number."""
    try:
        value: str | float = float(text)
    except ValueError:
        value = text.lower()
    return resolve_aspect_ratio(value)


def load_document(path: Path) -> Any:
    """Read a layout or transform document from ``.toml`` or JSON."""
    with path.open("r", encoding="utf-8") as handle:
        if path.suffix.lower() == ".toml":
            return tomlkit.load(handle).unwrap()
        return json.load(handle)


def _emit(data: Any) -> None:
    sys.stdout.write(json.dumps(data, indent=2) + "\n")


def _add_size_arguments(command: argparse.ArgumentParser) -> None:
    group = command.add_mutually_exclusive_group()
    group.add_argument("--size", type=_wrap_validator(size_2d),
                       help="Container size as WxH.")
    group.add_argument(
        "--aspect",
        type=_wrap_validator(aspect_ratio),
        default=None,
        help=(
            "Estimate the container from an aspect preset or ratio "
            "when --size is not given."
        ),
    )


def _canvas_size(
    args: argparse.Namespace,
    cfg: CollageLayoutConfig,
) -> tuple[float, float]:
    if args.size is not None:
        return args.size
    aspect = (args.aspect if args.aspect is not None
              else cfg.canvas.default_aspect_ratio)
    return estimate_canvas_dimensions(aspect, cfg.canvas.max_width)


def build_parser() -> argparse.ArgumentParser:
    """Build the command-line parser for the layout engine."""
    parser = argparse.ArgumentParser(
        prog="collage-layout",
        description=(
            "Resolve collage layouts into panel rectangles and rescale "
            "stored panel transforms."
        ),
    )
    parser.add_argument("--config", type=Path, default=None,
                        help="Path to a config.toml file.")
    parser.add_argument("--verbose", action="store_true",
                        help="Log dropped and skipped panels.")
    commands = parser.add_subparsers(dest="command", required=True)

    rects = commands.add_parser(
        "rects", help="Print pixel rectangles for a layout.")
    rects.add_argument("--layout", required=True, type=Path)
    _add_size_arguments(rects)
    rects.add_argument("--panels", required=True,
                       type=_wrap_validator(positive_int))
    rects.add_argument("--border", type=_wrap_validator(non_negative_float),
                       default=0.0, help="Border thickness in pixels.")
    rects.add_argument(
        "--limit-to-grid",
        action="store_true",
        default=None,
        help="Never place more sequential panels than the grid has cells.",
    )

    dims = commands.add_parser(
        "dimensions", help="Print per-panel sizes for a template layout.")
    dims.add_argument("--layout", required=True, type=Path)
    _add_size_arguments(dims)
    dims.add_argument("--panels", required=True,
                      type=_wrap_validator(positive_int))
    dims.add_argument(
        "--border-percent",
        type=_wrap_validator(non_negative_float),
        default=None,
        help="Border thickness as a percentage of the canvas width.",
    )

    check = commands.add_parser(
        "check", help="Exit 0 if a stored layout can host N panels.")
    check.add_argument("--layout", required=True, type=Path)
    check.add_argument("--panels", required=True,
                       type=_wrap_validator(positive_int))

    rescale = commands.add_parser(
        "rescale", help="Rescale stored transforms to a new canvas size.")
    rescale.add_argument("--transforms", required=True, type=Path)
    rescale.add_argument("--saved-size", required=True,
                         type=_wrap_validator(size_2d))
    rescale.add_argument("--size", required=True,
                         type=_wrap_validator(size_2d))
    return parser


def _run_rects(args: argparse.Namespace, cfg: CollageLayoutConfig) -> int:
    layout = load_document(args.layout)
    width, height = _canvas_size(args, cfg)
    limit = args.limit_to_grid
    if limit is None:
        limit = cfg.geometry.limit_sequential_to_grid_cells
    rects = parse_grid_to_rects(
        layout,
        width,
        height,
        args.panels,
        args.border,
        min_rect_size_px=cfg.geometry.min_rect_size_px,
        limit_sequential_to_grid_cells=limit,
    )
    if len(rects) < args.panels:
        logger.warning("Only %d of %d panels could be placed",
                       len(rects), args.panels)
    _emit([rect.to_mapping() for rect in rects])
    return 0


def _run_dimensions(args: argparse.Namespace,
                    cfg: CollageLayoutConfig) -> int:
    layout = load_document(args.layout)
    width, height = _canvas_size(args, cfg)
    border_percent = args.border_percent
    if border_percent is None:
        border_percent = cfg.canvas.border_thickness_percent
    dimensions = compute_panel_dimensions_from_template(
        {"get_layout_config": lambda: layout},
        width,
        height,
        border_percent,
        args.panels,
    )
    _emit({panel_id: size.to_mapping()
           for panel_id, size in dimensions.items()})
    return 0


def _run_check(args: argparse.Namespace, _cfg: CollageLayoutConfig) -> int:
    compatible = is_custom_layout_compatible(
        load_document(args.layout), args.panels)
    _emit(compatible)
    return 0 if compatible else 1


def _run_rescale(args: argparse.Namespace, cfg: CollageLayoutConfig) -> int:
    transforms = load_document(args.transforms)
    if not isinstance(transforms, dict):
        msg = "transforms document must map panel ids to transforms"
        raise ValueError(msg)
    saved_w, saved_h = args.saved_size
    width, height = args.size
    context = ScalingContext(
        current_canvas_width=width,
        current_canvas_height=height,
        current_panel_dimensions={},
        saved_canvas_width=saved_w,
        saved_canvas_height=saved_h,
    )
    scaled = scale_transforms(transforms, context,
                              epsilon=cfg.scaling.epsilon)
    if scaled is None:
        logger.info("Canvas size unchanged, keeping stored transforms")
        scaled = transforms
    _emit({
        panel_id: (value.to_mapping() if isinstance(value, PanelTransform)
                   else value)
        for panel_id, value in scaled.items()
    })
    return 0


_COMMANDS = {
    "rects": _run_rects,
    "dimensions": _run_dimensions,
    "check": _run_check,
    "rescale": _run_rescale,
}


def main(argv: Sequence[str] | None = None) -> int:
    """Parse command-line arguments and run the selected command."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        cfg = (ConfigLoader.load(args.config) if args.config
               else CollageLayoutConfig.model_validate({}))
    except (FileNotFoundError, ValidationError) as exc:
        parser.error(str(exc))

    set_log_level("DEBUG" if args.verbose else cfg.logging.level)

    try:
        return _COMMANDS[args.command](args, cfg)
    except FileNotFoundError as exc:
        parser.error(f"file not found: {exc.filename}")
    except ValueError as exc:
        parser.error(str(exc))


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
