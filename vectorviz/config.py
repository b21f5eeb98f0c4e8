"""
Defaults for the vector transform page.
"""
import os

# ---------- Startup state ----------

DEFAULT_VECTOR = (1.0, 2.0, 1.0)
DEFAULT_MATRIX = (
    1.0, 0.0, 0.0,
    0.0, 1.0, 0.0,
    0.0, 0.0, 1.0,
)

# Axis extent is DEFAULT_LENGTH / DEFAULT_UNIT
DEFAULT_UNIT = 5.0
DEFAULT_LENGTH = 100.0
DEFAULT_UNIT_LENGTH = 1.0

# ---------- Scene sizes ----------

STRIP_LENGTH = 0.1
LABEL_OFFSET = 0.5
ARROW_HEAD_LENGTH = 0.3
ARROW_HEAD_WIDTH = 0.2
GRID_OPACITY = 0.3
TRANSFORMED_GRID_OPACITY = 0.2
BREAKDOWN_OPACITY = 0.5

# Fallback direction for zero-length arrows
ZERO_ARROW_DIRECTION = (0.0, 0.0, 1.0)

# ---------- Notifications ----------

NOTIFICATION_LIFETIME = 5.0  # seconds

# ---------- Colors ----------

COLORS = {
    "axis": "#ffff00",               # yellow
    "grid": "#808080",               # gray
    "transformed_grid": "#ff7f0e",   # orange
    "vector_initial": "#00ffff",     # cyan
    "vector_transformed": "#ff0000", # red
    "labels": "#aaaaaa",             # light gray
    "vector_breakdown": "#ffffff",   # white
    "background": "#111111",
}

# ---------- Camera ----------

DEFAULT_CAMERA = dict(
    eye=dict(x=1.6, y=1.6, z=1.2),
    up=dict(x=0, y=0, z=1),
    projection=dict(type="orthographic"),
)

FIGURE_HEIGHT = 800

# ---------- Export ----------

GIF_FILENAME = "vector_transform.gif"
GIF_FRAMES = 60
GIF_FPS = 20

LOG_LEVEL = os.environ.get("VECTORVIZ_LOG_LEVEL", "INFO")
