"""Shared default values for user-facing configuration settings."""

# Geometry
DEFAULT_MIN_RECT_SIZE_PX = 0.25
DEFAULT_LIMIT_SEQUENTIAL_TO_GRID_CELLS = False

# Scaling
# Ratios closer than this to 1.0 count as "unchanged"
DEFAULT_SCALE_EPSILON = 1e-4

# Canvas
DEFAULT_MAX_CANVAS_WIDTH = 1200
DEFAULT_ASPECT_RATIO = "square"
DEFAULT_BORDER_THICKNESS_PERCENT = 0.0

# Logging
DEFAULT_LOG_LEVEL = "INFO"
