#!/usr/bin/env python3
"""
World: the ordered collection of bodies being simulated.

Lifecycle
- constructed: bodies are added in order (roots first, then descendants) with ids
  handed out by next_id(), the single id counter for every body kind.
- sealed: once stepping starts no body is added or removed; only position/velocity
  change, through the Integrator.

The World is an explicit context object. The driver owns it and passes it to the
Integrator and the renderer.
"""
import itertools
import random
from typing import Dict, Iterator, List, Optional

from .bodies import Body, anchored_body
from .constants import DEFAULT_BODY_COLOR, MIN_SEPARATION
from .data_models import BodyParams, Color, Motion
from .errors import ConfigurationError
from .orbits import orbit_body
from .vector_utils import Vec2


class World:
    def __init__(self):
        self._bodies: List[Body] = []
        self._by_id: Dict[int, Body] = {}
        self._ids = itertools.count()
        self.sealed = False

    def next_id(self) -> int:
        """Allocate the next body id."""
        return next(self._ids)

    def add(self, body: Body) -> Body:
        if self.sealed:
            raise ConfigurationError(f"cannot add {body.name!r}: world is already stepping")
        if body.id in self._by_id:
            raise ConfigurationError(f"duplicate body id {body.id} ({body.name!r})")
        if body.parent_id is not None and body.parent_id not in self._by_id:
            raise ConfigurationError(f"{body.name!r} refers to unknown parent id {body.parent_id}")
        self._bodies.append(body)
        self._by_id[body.id] = body
        return body

    def seal(self) -> None:
        self.sealed = True

    def get(self, body_id: int) -> Body:
        try:
            return self._by_id[body_id]
        except KeyError:
            raise ConfigurationError(f"unknown body id {body_id}") from None

    def find(self, name: str) -> Optional[Body]:
        """First body with the given name, or None."""
        for body in self._bodies:
            if body.name == name:
                return body
        return None

    def others(self, body: Body) -> Iterator[Body]:
        """Every body except the given one (compared by id)."""
        return (other for other in self._bodies if other.id != body.id)

    def parent_of(self, body: Body) -> Optional[Body]:
        if body.parent_id is None:
            return None
        return self.get(body.parent_id)

    def ids(self) -> List[int]:
        return [body.id for body in self._bodies]

    def motions(self) -> Dict[int, Motion]:
        """Snapshot of every body's motion keyed by id."""
        return {body.id: body.motion() for body in self._bodies}

    def spawn_anchor(self, name: str, mass: float, size: float, position: Vec2 = (0.0, 0.0),
                     color: Color = DEFAULT_BODY_COLOR, radiance: float = 0.0) -> Body:
        """Add a fixed body. Anchors never move, so they take no velocity."""
        return self.add(anchored_body(self.next_id(), name, mass, size, position, color, radiance))

    def spawn_orbiting(self, parent_id: int, params: BodyParams, rng: Optional[random.Random] = None,
                       min_separation: float = MIN_SEPARATION) -> Body:
        """Place a new body on a stable orbit around an existing one."""
        parent = self.get(parent_id)
        return self.add(orbit_body(parent, self.next_id(), params, rng, min_separation))

    def __iter__(self) -> Iterator[Body]:
        return iter(self._bodies)

    def __len__(self) -> int:
        return len(self._bodies)

    def __contains__(self, body_id: int) -> bool:
        return body_id in self._by_id

    def __repr__(self) -> str:
        state = "sealed" if self.sealed else "open"
        return f"World({len(self._bodies)} bodies, {state})"
