#!/usr/bin/env python3
"""
Body: the simulated point mass shared between physics, world and rendering.

A body has a fixed identity (id, name, kind, mass, size, color, parent_id,
radiance) and a mutable motion (position, velocity). Reassigning an identity field
after construction raises AttributeError; motion changes only through commit().

Stepping protocol
- tick(others, dt) is a pure read of self and others. It returns a Frame and
  never mutates any body, including self, so every body of a step can be ticked
  against the same pre-step state in any order.
- commit(frame) writes a Frame back. The Integrator calls it only after every
  tick of the step has been evaluated.
"""
import math
from dataclasses import dataclass
from typing import Iterable, Optional

from .constants import DEFAULT_BODY_COLOR
from .data_models import BodyKind, Color, Frame, Motion
from .errors import ConfigurationError
from .physics import DEFAULT_GRAVITY, GravitySettings, accumulate_acceleration, semi_implicit_euler
from .vector_utils import Vec2, vec_is_finite

_FIXED_FIELDS = frozenset({"id", "name", "kind", "mass", "size", "color", "parent_id", "radiance"})


@dataclass(eq=False)
class Body:
    """
    Represents a celestial body in the simulation.

    Fields:
    - id: Unique id handed out by the World's counter
    - name: Identifier for the body
    - kind: BodyKind.ANCHORED or BodyKind.ORBITING
    - mass: Mass in kilograms
    - size: Visual diameter in meters
    - position: 2D position (x, y) in meters
    - velocity: 2D velocity (vx, vy) in meters/second
    - color: RGB tuple used for rendering
    - parent_id: Id of the body this one was placed around, if any
    - radiance: Light output used to shade children, rendering only
    """
    id: int
    name: str
    kind: BodyKind
    mass: float
    size: float
    position: Vec2
    velocity: Vec2
    color: Color = DEFAULT_BODY_COLOR
    parent_id: Optional[int] = None
    radiance: float = 0.0

    def __post_init__(self):
        if not isinstance(self.kind, BodyKind):
            raise ConfigurationError(f"{self.name}: unknown body kind {self.kind!r}")
        for attr in ("mass", "size"):
            value = getattr(self, attr)
            if not isinstance(value, (int, float)) or not math.isfinite(value) or value <= 0:
                raise ConfigurationError(f"{self.name}: {attr} must be a positive number, got {value!r}")
        if self.radiance < 0 or not math.isfinite(self.radiance):
            raise ConfigurationError(f"{self.name}: radiance must be >= 0, got {self.radiance!r}")
        if not (vec_is_finite(self.position) and vec_is_finite(self.velocity)):
            raise ConfigurationError(f"{self.name}: position and velocity must be finite")
        if self.kind is BodyKind.ANCHORED and self.velocity != (0.0, 0.0):
            raise ConfigurationError(f"{self.name}: an anchored body cannot have a velocity, got {self.velocity!r}")
        if self.parent_id is not None and self.parent_id == self.id:
            raise ConfigurationError(f"{self.name}: a body cannot be its own parent")

    def __setattr__(self, name, value):
        if name in _FIXED_FIELDS and name in self.__dict__:
            raise AttributeError(f"Body.{name} is fixed for the lifetime of the body")
        super().__setattr__(name, value)

    @property
    def anchored(self) -> bool:
        return self.kind is BodyKind.ANCHORED

    def motion(self) -> Motion:
        return Motion(self.position, self.velocity)

    def tick(self, others: Iterable["Body"], dt: float, settings: GravitySettings = DEFAULT_GRAVITY) -> Frame:
        """Compute this body's next Frame from the current state of self and others."""
        if self.kind is BodyKind.ANCHORED:
            return Frame(self.position, self.velocity)
        acceleration = accumulate_acceleration(self, others, settings)
        return semi_implicit_euler(self.motion(), acceleration, dt)

    def commit(self, frame: Frame) -> None:
        """Apply a Frame produced by tick. Anchored bodies keep their state."""
        if self.kind is BodyKind.ANCHORED:
            return
        self.position = frame.position
        self.velocity = frame.velocity

    def __repr__(self) -> str:
        return (f"Body(id={self.id}, name={self.name!r}, kind={self.kind.name}, "
                f"position={self.position}, velocity={self.velocity})")


def anchored_body(body_id: int, name: str, mass: float, size: float,
                  position: Vec2 = (0.0, 0.0), color: Color = DEFAULT_BODY_COLOR,
                  radiance: float = 0.0) -> Body:
    return Body(body_id, name, BodyKind.ANCHORED, mass, size, position, (0.0, 0.0), color, None, radiance)


def orbiting_body(body_id: int, name: str, mass: float, size: float, motion: Motion,
                  color: Color = DEFAULT_BODY_COLOR, parent_id: Optional[int] = None,
                  radiance: float = 0.0) -> Body:
    return Body(body_id, name, BodyKind.ORBITING, mass, size, motion.position, motion.velocity,
                color, parent_id, radiance)
