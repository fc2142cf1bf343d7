#!/usr/bin/env python3
"""
Two-phase integrator.

Each step is strictly:

1) tick: every body computes a Frame from the pre-step world. Nothing is written
   yet, so every body sees the same state regardless of iteration order.
2) commit: every Frame is written back into the body that produced it.

No partially-applied step is ever visible outside step().
"""
import logging
from typing import List, Optional, Sequence, Tuple

from .bodies import Body
from .data_models import Frame
from .errors import ConfigurationError
from .physics import DEFAULT_GRAVITY, GravitySettings
from .world import World

logger = logging.getLogger(__name__)


class Integrator:
    """
    Advances a World by fixed time steps.

    Attributes:
        world: The world being stepped (sealed on construction)
        settings: Force-law settings passed to every tick
        ticks: Number of completed steps
        elapsed: Simulated seconds advanced so far
    """

    def __init__(self, world: World, settings: GravitySettings = DEFAULT_GRAVITY):
        self.world = world
        self.settings = settings
        self.ticks = 0
        self.elapsed = 0.0
        world.seal()

    def _ordered(self, order: Optional[Sequence[int]]) -> List[Body]:
        if order is None:
            return list(self.world)
        bodies = [self.world.get(body_id) for body_id in order]
        if len(bodies) != len(self.world) or len({b.id for b in bodies}) != len(bodies):
            raise ConfigurationError("step order must list every body id exactly once")
        return bodies

    def compute_frames(self, dt: float, order: Optional[Sequence[int]] = None) -> List[Tuple[Body, Frame]]:
        """Phase 1: tick every body against the current world. Read-only."""
        return [(body, body.tick(self.world.others(body), dt, self.settings)) for body in self._ordered(order)]

    def step(self, dt: float, order: Optional[Sequence[int]] = None) -> None:
        """
        Advance the world by dt seconds.

        Args:
            dt: Simulated seconds for this step. Not bounded; large values only cost
                accuracy.
            order: Optional sequence of body ids giving the tick order. The result
                does not depend on it.
        """
        frames = self.compute_frames(dt, order)
        for body, frame in frames:
            body.commit(frame)
        self.ticks += 1
        self.elapsed += dt

    def run(self, dt: float, steps: int) -> None:
        """Advance steps fixed steps of dt seconds."""
        for _ in range(steps):
            self.step(dt)
        logger.debug("ran %d steps of %.3f s (t=%.1f s)", steps, dt, self.elapsed)
