#!/usr/bin/env python3
"""
Stable-orbit construction.

stable_orbit places a body on a circular orbit around a parent:

1) offset    = rotate((r, 0), pi * phase)
2) position  = parent.position + offset
3) r_vec     = parent.position - position         (child -> parent)
4) mu        = G * (M_parent + m)
5) speed     = sqrt(mu / |r_vec|)
6) direction = rotate(unit(r_vec), -pi/2)           (prograde, perpendicular to r_vec)
7) velocity  = parent.velocity + speed * direction

Inheriting the parent's velocity is what lets moon-around-planet-around-star
hierarchies compose. The orbit is circular under the two-body approximation for any
phase; other bodies in the world are ignored here.

The phase is the only random input of world construction. It comes from an injected
random.Random so that seeded runs are reproducible.
"""
import logging
import math
import random
from typing import Optional

from .bodies import Body, orbiting_body
from .constants import MIN_SEPARATION
from .data_models import BodyParams, Motion
from .errors import ConfigurationError, NumericalDegeneracy
from .physics import circular_orbit_velocity, gravitational_parameter
from .vector_utils import vec_add, vec_len, vec_rotate, vec_scale, vec_sub

logger = logging.getLogger(__name__)

PHASE_RANGE = 2.0


def draw_phase(rng: random.Random) -> float:
    """Uniform orbital phase in [0, 2)."""
    return rng.random() * PHASE_RANGE


def stable_orbit(parent: Motion, parent_mass: float, orbital_radius: float, mass: float,
                 phase: float, min_separation: float = MIN_SEPARATION) -> Motion:
    """
    Initial motion of a body circling parent at orbital_radius.

    Args:
        parent: Parent's current motion
        parent_mass: Parent mass in kg
        orbital_radius: Distance from the parent in meters
        mass: Mass of the new body in kg
        phase: Angle as a fraction of pi, theta = pi * phase
        min_separation: Radii below this are rejected

    Returns:
        Motion of the new body (absolute, parent velocity included)
    """
    if not math.isfinite(orbital_radius) or orbital_radius <= 0:
        raise ConfigurationError(f"orbital radius must be positive, got {orbital_radius!r}")
    if not math.isfinite(phase):
        raise ConfigurationError(f"orbital phase must be finite, got {phase!r}")

    offset = vec_rotate((orbital_radius, 0.0), math.pi * phase)
    position = vec_add(parent.position, offset)

    r_vec = vec_sub(parent.position, position)
    distance = vec_len(r_vec)
    if distance < min_separation:
        raise NumericalDegeneracy(
            f"orbital radius {orbital_radius!r} is below the {min_separation!r} m separation floor",
            distance,
        )

    mu = gravitational_parameter(parent_mass, mass)
    speed = circular_orbit_velocity(mu, distance)
    direction = vec_rotate(vec_scale(r_vec, 1.0 / distance), -math.pi / 2)

    velocity = vec_add(parent.velocity, vec_scale(direction, speed))
    return Motion(position, velocity)


def orbit_body(parent: Body, body_id: int, params: BodyParams, rng: Optional[random.Random] = None,
               min_separation: float = MIN_SEPARATION) -> Body:
    """
    Build an orbiting body around parent's current motion.

    params.phase is used when set; otherwise a phase is drawn from rng.
    """
    phase = params.phase
    if phase is None:
        if rng is None:
            raise ConfigurationError(f"{params.name}: no phase given and no random source to draw one")
        phase = draw_phase(rng)

    try:
        motion = stable_orbit(parent.motion(), parent.mass, params.height, params.mass, phase, min_separation)
    except ConfigurationError as exc:
        raise ConfigurationError(f"{params.name}: {exc}") from exc
    logger.debug("%s initial velocity: %s (phase %.4f around %s)", params.name, motion.velocity, phase, parent.name)

    return orbiting_body(
        body_id,
        params.name,
        params.mass,
        params.size,
        motion,
        color=params.color,
        parent_id=parent.id,
        radiance=params.radiance,
    )
