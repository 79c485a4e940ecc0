# seed_recolor/constants.py
"""
Defaults and tunables used across the project.

- CLI defaults (DEFAULT_*)
- Random light colour range
- Voronoi boundary ring density
"""
from __future__ import annotations

from typing import Tuple

# =========================
# CLI defaults
# =========================

# Disc radius for the influence mask, in output pixels.
DEFAULT_RADIUS = 80

# Multiplier applied to raw seed coordinates before use.
DEFAULT_SCALE = 8

# Global overlay strength (0..255). 127 is roughly half transparent.
DEFAULT_ALPHA = 127

DEFAULT_ORIGINAL = "./burgstall.jpg"
DEFAULT_INPUT = "./circles.json"
DEFAULT_OUTPUT = "./circles.png"

VARIANTS: Tuple[str, ...] = ("circles", "voronoi")

# =========================
# Seed colours
# =========================

# Inclusive channel range for generated "light" colours.
LIGHT_CHANNEL_MIN = 127
LIGHT_CHANNEL_MAX = 255

# =========================
# Voronoi geometry
# =========================

# Boundary points per image edge: max(MIN, side // STEP).
BOUNDARY_MIN_POINTS = 10
BOUNDARY_STEP_PX = 50

# =========================
# Blend maths
# =========================

CHANNEL_MAX = 255
CHANNEL_MAX_SQ = CHANNEL_MAX * CHANNEL_MAX

__all__ = [
    "DEFAULT_RADIUS",
    "DEFAULT_SCALE",
    "DEFAULT_ALPHA",
    "DEFAULT_ORIGINAL",
    "DEFAULT_INPUT",
    "DEFAULT_OUTPUT",
    "VARIANTS",
    "LIGHT_CHANNEL_MIN",
    "LIGHT_CHANNEL_MAX",
    "BOUNDARY_MIN_POINTS",
    "BOUNDARY_STEP_PX",
    "CHANNEL_MAX",
    "CHANNEL_MAX_SQ",
]
