"""
Canvas Viewport - Constants and Configuration

This module contains the default values used throughout the package:
- Scale limits and zoom steps
- Scale-to-fit padding
- Redraw layers and frame timing
- Hit testing margins

Per-engine overrides live in utils.config.EngineConfig.
"""

# ======================================================================
# SCALE CONSTRAINTS
# ======================================================================

# 1.0 = 100%, already adjusted for device pixel density
DEFAULT_SCALE = 1.0

# Scale limits [0.1, 10.0]; the minimum must stay above zero
MIN_SCALE = 0.1
MAX_SCALE = 10.0

# ======================================================================
# ZOOM
# ======================================================================

# Multiplicative step for zoom_in/zoom_out (25%)
ZOOM_STEP_FACTOR = 1.25

# Additive scale delta applied per wheel notch (120 angle units)
WHEEL_SCALE_DELTA = 0.1
WHEEL_NOTCH_ANGLE = 120

# ======================================================================
# OFFSET
# ======================================================================

# Offset is the content-to-device translation in physical pixels.
# Positive dx moves content right on screen, positive dy moves it down.
DEFAULT_OFFSET_X = 0.0
DEFAULT_OFFSET_Y = 0.0

# ======================================================================
# SCALE TO FIT
# ======================================================================

# Padding around tracked content when fitting (physical pixels, per side)
DEFAULT_FIT_PADDING = 200

# ======================================================================
# REDRAW LAYERS
# ======================================================================

LAYER_MAIN = 'main'
LAYER_TOP = 'top'
LAYER_INTERNAL = 'internal'  # scrollbars and other content-dependent chrome

REDRAW_LAYERS = (LAYER_MAIN, LAYER_INTERNAL, LAYER_TOP)

# Requesting a layer also requests these
REDRAW_LAYER_IMPLIES = {
    LAYER_MAIN: (LAYER_INTERNAL,),
}

# One animation frame at 60Hz
REDRAW_FRAME_INTERVAL_MS = 16

# ======================================================================
# HIT TESTING
# ======================================================================

# Extra device pixels added around stroked paths when hit testing
HIT_TEST_MARGIN = 4

# Pixels to move before a press turns into a drag
DRAG_THRESHOLD = 3

# ======================================================================
# ENGINE REGISTRY
# ======================================================================

DEFAULT_ENGINE_KEY = 'default'
