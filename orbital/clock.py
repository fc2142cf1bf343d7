#!/usr/bin/env python3
"""
Simulation clock: turns real elapsed time into fixed-size simulation steps.

Two knobs control the simulation:
- seconds_per_second: simulated seconds per real second (1 .. 3600).
- updates_per_second: how many integrator steps cover one real second. More updates
  means smaller steps and a more accurate simulation, not a faster one.

Each update advances the world by seconds_per_second / updates_per_second simulated
seconds. '+' first doubles seconds_per_second up to one hour per second, then adds
updates. '-' undoes the last '+' exactly; with nothing to undo it halves
seconds_per_second down to 1, then removes updates.
"""
import logging
import time
from typing import Callable, List, Optional, Tuple

from .constants import (
    DEFAULT_UPDATES_PER_SECOND,
    MAX_UPDATES_PER_FRAME,
    SECONDS_PER_SECOND_MAX,
    SECONDS_PER_SECOND_MIN,
    UPDATES_PER_SECOND_STEP,
)
from .errors import ConfigurationError
from .vector_utils import clamp

logger = logging.getLogger(__name__)


class SimulationClock:
    def __init__(self, updates_per_second: int = DEFAULT_UPDATES_PER_SECOND,
                 seconds_per_second: int = SECONDS_PER_SECOND_MIN,
                 max_updates_per_frame: int = MAX_UPDATES_PER_FRAME):
        if updates_per_second < 1:
            raise ConfigurationError(f"updates_per_second must be >= 1, got {updates_per_second!r}")
        self.updates_per_second = int(updates_per_second)
        self.seconds_per_second = int(clamp(seconds_per_second, SECONDS_PER_SECOND_MIN, SECONDS_PER_SECOND_MAX))
        self.max_updates_per_frame = max_updates_per_frame
        self._accumulator = 0.0
        # (seconds_per_second, updates_per_second) before each change, so the
        # opposite key restores it exactly
        self._sped_up: List[Tuple[int, int]] = []
        self._slowed_down: List[Tuple[int, int]] = []

    @property
    def step_dt(self) -> float:
        """Simulated seconds covered by one update."""
        return self.seconds_per_second / self.updates_per_second

    def _restore(self, state: Tuple[int, int]) -> None:
        self.seconds_per_second, self.updates_per_second = state
        logger.info("time scale now %d s/s at %d updates/s", self.seconds_per_second, self.updates_per_second)

    def _state(self) -> Tuple[int, int]:
        return (self.seconds_per_second, self.updates_per_second)

    def faster(self) -> None:
        if self._slowed_down:
            self._restore(self._slowed_down.pop())
            return
        self._sped_up.append(self._state())
        if self.seconds_per_second < SECONDS_PER_SECOND_MAX:
            self.seconds_per_second = min(self.seconds_per_second * 2, SECONDS_PER_SECOND_MAX)
            logger.info("seconds per second now %d", self.seconds_per_second)
        else:
            ups = self.updates_per_second
            self.updates_per_second = max(int(ups * UPDATES_PER_SECOND_STEP), ups + 1)
            logger.info("updates per second now %d", self.updates_per_second)

    def slower(self) -> None:
        if self._sped_up:
            self._restore(self._sped_up.pop())
            return
        if self.seconds_per_second > SECONDS_PER_SECOND_MIN:
            self._slowed_down.append(self._state())
            self.seconds_per_second = max(self.seconds_per_second // 2, SECONDS_PER_SECOND_MIN)
            logger.info("seconds per second now %d", self.seconds_per_second)
        elif self.updates_per_second > 1:
            self._slowed_down.append(self._state())
            self.updates_per_second = max(int(self.updates_per_second / UPDATES_PER_SECOND_STEP), 1)
            logger.info("updates per second now %d", self.updates_per_second)

    def advance(self, real_dt: float, step: Callable[[float], None]) -> int:
        """
        Run as many whole updates as real_dt (plus leftovers) pays for.

        Args:
            real_dt: Real seconds since the previous call
            step: Called once per update with the simulated dt

        Returns:
            Number of updates run.
        """
        if real_dt <= 0:
            return 0
        self._accumulator += real_dt
        due = int(self._accumulator * self.updates_per_second)
        updates = min(due, self.max_updates_per_frame)
        dt = self.step_dt
        for _ in range(updates):
            step(dt)
        if updates < due:
            logger.debug("dropping %d updates this frame (cap %d)", due - updates, self.max_updates_per_frame)
            self._accumulator = 0.0
        else:
            self._accumulator -= updates / self.updates_per_second
        return updates

    def relative_rate(self, measured_updates_per_second: float) -> float:
        """Simulated seconds per real second actually achieved."""
        return self.seconds_per_second * measured_updates_per_second / self.updates_per_second


class RateCounter:
    """Counts events per wall-clock second (FPS / UPS readouts)."""

    def __init__(self, clock: Callable[[], float] = time.perf_counter):
        self._clock = clock
        self._window_start = clock()
        self._count = 0
        self.rate = 0

    def refresh(self, now: Optional[float] = None) -> int:
        """Close the window if a second has passed, even when nothing was counted."""
        now = self._clock() if now is None else now
        if now - self._window_start >= 1.0:
            self.rate = self._count
            self._count = 0
            self._window_start = now
        return self.rate

    def tick(self, now: Optional[float] = None) -> None:
        self.refresh(now)
        self._count += 1


def format_rate(seconds: float) -> str:
    """Human-readable simulated time per real second, e.g. '1h 30m/s'."""
    seconds = int(round(seconds))
    if seconds <= 0:
        return "0s/s"
    parts = []
    for unit, size in (("d", 86400), ("h", 3600), ("m", 60), ("s", 1)):
        value, seconds = divmod(seconds, size)
        if value:
            parts.append(f"{value}{unit}")
    return " ".join(parts) + "/s"
