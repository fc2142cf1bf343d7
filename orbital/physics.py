#!/usr/bin/env python3
"""
Core Physics for the orbital simulator

Responsibilities
- Compute pairwise gravitational accelerations with a minimum-separation floor.
- Advance a single body's motion with a semi-implicit Euler step.
- Provide small helpers for common orbital computations (circular speed, period).

Units and conventions
- World space positions are in meters [m].
- Velocities are in meters per second [m/s].
- Masses are in kilograms [kg].
- Time steps are in seconds [s].
- The gravitational constant G is expressed in SI: m^3 kg^-1 s^-2.

Numerical notes
- Mass law: by default the acceleration of body i due to body j uses the combined
  mass (m_i + m_j), the standard gravitational parameter of the pair. With an
  anchored parent this makes a circular orbit built from mu = G * (M + m) close
  exactly. MassLaw.NEWTONIAN uses m_j alone.
- Separation floor: distances below min_separation are clamped to it in the
  inverse-square term. Exactly coincident bodies have no direction at all; that
  pair raises NumericalDegeneracy, which accumulate_acceleration turns into a
  skipped (zero) contribution. NaN/Inf never reaches a Frame.
- Integration order: velocity is advanced with the new acceleration, position with
  the pre-update velocity. Swapping the two changes the energy drift.
- Complexity: acceleration computation is O(N^2) per step (direct summation).
"""

import logging
import math
from enum import Enum
from typing import Iterable

from .constants import G, MIN_SEPARATION
from .data_models import Frame, Motion
from .errors import ConfigurationError, NumericalDegeneracy
from .vector_utils import Vec2

logger = logging.getLogger(__name__)


class MassLaw(Enum):
    """Which mass drives the acceleration felt by a body."""
    COMBINED = "combined"  # m_i + m_j
    NEWTONIAN = "newtonian"  # m_j


class GravitySettings:
    """Container for force-law settings shared by every body's tick."""
    def __init__(self, mass_law: MassLaw = MassLaw.COMBINED, min_separation: float = MIN_SEPARATION):
        self.mass_law = MassLaw(mass_law)
        min_separation = float(min_separation)
        if not math.isfinite(min_separation) or min_separation <= 0.0:
            raise ConfigurationError(f"min_separation must be a positive distance, got {min_separation!r}")
        self.min_separation = min_separation

    def interacting_mass(self, mass: float, other_mass: float) -> float:
        if self.mass_law is MassLaw.COMBINED:
            return mass + other_mass
        return other_mass

    def __repr__(self) -> str:
        return f"GravitySettings(mass_law={self.mass_law.name}, min_separation={self.min_separation!r})"


DEFAULT_GRAVITY = GravitySettings()


def pair_acceleration(position: Vec2, mass: float, other_position: Vec2, other_mass: float,
                      settings: GravitySettings = DEFAULT_GRAVITY) -> Vec2:
    """
    Acceleration of a body at position due to a single other body.

        a = G * M / max(r, r_min)^2 * unit(p_other - p)

    where M is (mass + other_mass) or other_mass depending on settings.mass_law.

    Raises:
        NumericalDegeneracy: if both positions coincide (no direction exists).
    """
    dx = other_position[0] - position[0]
    dy = other_position[1] - position[1]
    r = math.hypot(dx, dy)
    if r == 0.0:
        raise NumericalDegeneracy("coincident bodies have no separation direction", r)

    r_eff = max(r, settings.min_separation)
    magnitude = G * settings.interacting_mass(mass, other_mass) / (r_eff * r_eff)
    return (magnitude * dx / r, magnitude * dy / r)


def accumulate_acceleration(body, others: Iterable, settings: GravitySettings = DEFAULT_GRAVITY) -> Vec2:
    """
    Net gravitational acceleration on body from others.

    Only .id, .name, .position and .mass are read. Any entry with the same id as
    body is skipped, so passing the whole world is safe. Coincident pairs contribute
    nothing.
    """
    ax_total, ay_total = 0.0, 0.0
    for other in others:
        if other.id == body.id:
            continue  # Skip self-interaction
        try:
            ax, ay = pair_acceleration(body.position, body.mass, other.position, other.mass, settings)
        except NumericalDegeneracy:
            logger.debug("skipping coincident pair %s <-> %s", body.name, other.name)
            continue
        ax_total += ax
        ay_total += ay
    return (ax_total, ay_total)


def semi_implicit_euler(motion: Motion, acceleration: Vec2, dt: float) -> Frame:
    """
    One Euler step. Both updates read the pre-step state:

        v' = v + a * dt
        p' = p + v * dt   (pre-update velocity)
    """
    (px, py), (vx, vy) = motion.position, motion.velocity
    return Frame(
        position=(px + vx * dt, py + vy * dt),
        velocity=(vx + acceleration[0] * dt, vy + acceleration[1] * dt),
    )


def gravitational_parameter(parent_mass: float, mass: float) -> float:
    """Standard gravitational parameter mu = G * (M + m) of a two-body system."""
    return G * (parent_mass + mass)


def circular_orbit_velocity(mu: float, orbital_radius: float) -> float:
    """
    Speed needed for a circular orbit of the given radius.

    For a circular orbit gravity provides exactly the centripetal force:
    mu / r^2 = v^2 / r, therefore v = sqrt(mu / r).
    """
    if orbital_radius <= 0:
        raise NumericalDegeneracy("circular orbit needs a positive radius", orbital_radius)
    return math.sqrt(mu / orbital_radius)


def orbital_period(orbital_radius: float, parent_mass: float, mass: float) -> float:
    """Period T = 2 * pi * sqrt(r^3 / (G * (M + m))) of a circular two-body orbit [s]."""
    return 2.0 * math.pi * math.sqrt(orbital_radius ** 3 / gravitational_parameter(parent_mass, mass))
