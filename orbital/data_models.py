#!/usr/bin/env python3
"""
Data models for the orbital simulator.

This module defines the value types shared between physics, world construction and
rendering.

Units and usage
- positions are in meters [m], velocities in meters per second [m/s], masses in kg.
- Motion is a read-only snapshot of a body's {position, velocity}.
- Frame has the same shape as Motion but is a pending write: the result of a tick
  that has not been committed yet.
- BodyParams / WorldParams are configuration records consumed by the world builder.
  A BodyParams height is already in meters here; file units are converted by the
  loader.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple

from .constants import DEFAULT_BODY_COLOR
from .vector_utils import Vec2

Color = Tuple[int, int, int]


@dataclass(frozen=True)
class Motion:
    """Snapshot of a body's position [m] and velocity [m/s]."""
    position: Vec2
    velocity: Vec2


class Frame(Motion):
    """Next-step {position, velocity} computed by tick, not yet applied."""


class BodyKind(Enum):
    """
    Closed set of body variants.

    ANCHORED bodies (e.g. the primary star) are a fixed reference frame: their tick
    returns their motion unchanged whatever the forces. ORBITING bodies integrate the
    gravity of every other body.
    """
    ANCHORED = "anchored"
    ORBITING = "orbiting"


@dataclass
class BodyParams:
    """
    Parameters for one body as supplied by a world file or by code.

    Fields:
    - name: Identifier shown to the user
    - mass: Mass in kilograms
    - size: Diameter in meters (rendering only)
    - height: Orbital radius around the parent in meters (ignored for roots)
    - color: RGB tuple used for rendering
    - phase: Orbital phase in [0, 2), theta = pi * phase; None draws one at random
    - position: Fixed position of a root (anchored) body
    - radiance: Light output used for shading children (rendering only)
    - parent: Name of the star a planet orbits; None means the first star
    - children: Bodies orbiting this one
    """
    name: str
    mass: float
    size: float
    height: float = 0.0
    color: Color = DEFAULT_BODY_COLOR
    phase: Optional[float] = None
    position: Vec2 = (0.0, 0.0)
    radiance: float = 0.0
    parent: Optional[str] = None
    children: List["BodyParams"] = field(default_factory=list)


@dataclass
class WorldParams:
    """A complete world description: anchored stars and the planets orbiting them."""
    stars: List[BodyParams] = field(default_factory=list)
    planets: List[BodyParams] = field(default_factory=list)
    name: str = "World"
    description: str = ""
    seconds_per_second: Optional[int] = None

    def count(self) -> int:
        """Total number of bodies described, children included."""
        def _count(params: BodyParams) -> int:
            return 1 + sum(_count(c) for c in params.children)
        return len(self.stars) + sum(_count(p) for p in self.planets)
