"""
Constants used internally by the collage layout engine.

These are implementation-level values that should not be overridden
via config files or CLI arguments.
"""

# Records of the shared logger
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(message)s"

# Panel ids follow the editor's "panel-<N>" convention, N starting at 1
PANEL_ID_PREFIX = "panel-"
PANEL_ID_PATTERN = r"^panel-(\d+)$"

# Grid template tokens
EMPTY_AREA_TOKEN = "."

# Upper bound on tracks produced by one repeat(N, ...) in a stored template
MAX_REPEAT_TRACKS = 1000

# Canvas size estimation never exceeds this width
MAX_ESTIMATED_CANVAS_WIDTH = 1200

# Border thickness is configured as a percentage of the canvas width
BORDER_PERCENT_MIN = 0.0
BORDER_PERCENT_MAX = 100.0

# Aspect ratio presets offered by the editor (width / height)
ASPECT_RATIO_PRESETS: dict[str, float] = {
    "landscape": 1.78,
    "classic": 1.33,
    "square": 1.0,
    "portrait": 0.8,
    "story": 0.5625,
}
