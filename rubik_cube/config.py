"""
Configuration for the cube engine and the pygame front end.

Every tunable is passed through the sanitizers below so a bad edit here
falls back to a sane default instead of breaking the frame loop.
"""
from __future__ import annotations

import math
from typing import Dict, List, Tuple, Union

# -----------------------------
# Input Sanitization Functions
# -----------------------------

def sanitize_numeric_input(value: Union[int, float], min_val: Union[int, float], max_val: Union[int, float], default: Union[int, float]) -> Union[int, float]:
    """Sanitize numeric input to ensure it's within valid bounds."""
    try:
        if value is None:
            return default
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            return default
        if math.isnan(value) or math.isinf(value):
            return default
        return max(min_val, min(max_val, value))
    except (TypeError, ValueError):
        return default

def sanitize_string_input(value: str, allowed_values: List[str], default: str = "") -> str:
    """Sanitize string input to ensure it's in allowed values."""
    try:
        if not isinstance(value, str):
            return default
        if value in allowed_values:
            return value
        return default
    except (TypeError, AttributeError):
        return default

# -----------------------------
# Window / camera
# -----------------------------
WINDOW_W = sanitize_numeric_input(1024, 400, 4096, 1024)
WINDOW_H = sanitize_numeric_input(720, 300, 2160, 720)
FPS = sanitize_numeric_input(60, 30, 120, 60)
CUBELET_GAP = sanitize_numeric_input(0.03, 0.0, 0.2, 0.03)      # gap between cubelets for visual clarity
CUBELET_SIZE = sanitize_numeric_input(0.94, 0.1, 2.0, 0.94)     # size of each cubelet (edge length)
ZOOM_SENS = sanitize_numeric_input(1.1, 1.01, 2.0, 1.1)
MOUSE_SENS = sanitize_numeric_input(0.3, 0.1, 2.0, 0.3)

# -----------------------------
# Turn timing (milliseconds)
# -----------------------------
DEFAULT_DURATION_MS = sanitize_numeric_input(300, 0, 5000, 300)
TURN_DURATION_MS = sanitize_numeric_input(200, 0, 5000, 200)
UNDO_DURATION_MS = sanitize_numeric_input(200, 0, 5000, 200)
SHUFFLE_DURATION_MS = sanitize_numeric_input(100, 0, 5000, 100)
SOLVE_DURATION_MS = sanitize_numeric_input(150, 0, 5000, 150)
SIMULATED_FRAME_MS = sanitize_numeric_input(1000.0 / 60.0, 1.0, 1000.0, 1000.0 / 60.0)

SHUFFLE_MOVES = int(sanitize_numeric_input(6, 1, 100, 6))

# Max distance (lattice units) between a rounded coordinate and a layer limit
LAYER_TOLERANCE = sanitize_numeric_input(0.1, 0.01, 0.49, 0.1)

# -----------------------------
# Geometry / colours
# -----------------------------

# WCA standard color scheme - Enhanced for better visibility
COLORS: Dict[str, Tuple[float, float, float]] = {
    'U': (1.0, 1.0, 1.0),      # white (bright)
    'D': (1.0, 1.0, 0.0),      # yellow (bright)
    'F': (0.0, 0.8, 0.0),      # green (brighter)
    'B': (0.0, 0.4, 1.0),      # blue (brighter)
    'R': (1.0, 0.0, 0.0),      # red (pure red)
    'L': (1.0, 0.6, 0.0),      # orange (brighter)
}
CORE_COLOR = (0.05, 0.05, 0.05)

AXES = ['x', 'y', 'z']

# Axis vectors used for rotations
AXIS = {
    'x': (1.0, 0.0, 0.0),
    'y': (0.0, 1.0, 0.0),
    'z': (0.0, 0.0, 1.0),
}

# Outward normal of each face in the global frame (y up, z towards the viewer)
FACE_NORMALS: Dict[str, Tuple[int, int, int]] = {
    'U': (0, 1, 0),
    'D': (0, -1, 0),
    'R': (1, 0, 0),
    'L': (-1, 0, 0),
    'F': (0, 0, 1),
    'B': (0, 0, -1),
}
NORMAL_TO_FACE = {normal: face for face, normal in FACE_NORMALS.items()}
