#!/usr/bin/env python3
"""
Shared constants for the orbital simulator (SI units unless stated otherwise).

Keeping constants in one place helps ensure values are consistent across the
codebase and makes tuning easier.
"""

# Physical constants
G = 6.67430e-11  # m^3 kg^-1 s^-2
EARTH_MASS = 5.972e24  # kg
SOLAR_MASS = 1.989e30  # kg
KM = 1000.0  # m; world files give orbital heights in kilometres

# Physics controls
MIN_SEPARATION = 1.0e3  # m; separations below this are clamped in the force law
ANCHOR_RADIANCE = 2.009e7  # default radiance of a star, renderer only

# Clock (time scale) bounds
SECONDS_PER_SECOND_MIN = 1
SECONDS_PER_SECOND_MAX = 60 * 60  # one simulated hour per real second
DEFAULT_UPDATES_PER_SECOND = 60
UPDATES_PER_SECOND_STEP = 1.5
MAX_UPDATES_PER_FRAME = 1000  # cap per rendered frame for stability/perf

# Rendering (viewport)
VIEW_WIDTH = 1100
VIEW_HEIGHT = 800
BACKGROUND_COLOR = (26, 26, 26)
HUD_COLOR = (230, 230, 230)
DEFAULT_BODY_COLOR = (200, 200, 255)

# Camera zoom bounds (meters-per-pixel)
DEFAULT_METERS_PER_PIXEL = 2.5e7
MIN_METERS_PER_PIXEL = 1e3
MAX_METERS_PER_PIXEL = 1e11

# Safety: avoid drawing outside reasonable integer pixel ranges
SAFE_COORD_LIMIT = 30000
