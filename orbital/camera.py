#!/usr/bin/env python3
"""
World <-> screen mapping for the viewport.

The camera is a center point in world meters plus a scale in meters per pixel.
Screen y grows downward exactly like world y, so no axis is flipped.
"""
from typing import Iterable, Optional, Tuple

from .constants import (
    DEFAULT_METERS_PER_PIXEL,
    MAX_METERS_PER_PIXEL,
    MIN_METERS_PER_PIXEL,
    VIEW_HEIGHT,
    VIEW_WIDTH,
)
from .vector_utils import Vec2, clamp, vec_add, vec_scale, vec_sub

# A body narrower than this many pixels is drawn as a fixed-size marker
MIN_VISIBLE_PIXELS = 2.5
MAX_ZOOM_STEP = 20.0


class Camera2D:
    def __init__(self, center: Vec2 = (0.0, 0.0), meters_per_pixel: float = DEFAULT_METERS_PER_PIXEL):
        self.center = (float(center[0]), float(center[1]))
        self.mpp = meters_per_pixel
        self.viewport_size = (VIEW_WIDTH, VIEW_HEIGHT)

    def set_viewport_size(self, w: int, h: int) -> None:
        self.viewport_size = (w, h)

    @property
    def _half_view(self) -> Vec2:
        return (self.viewport_size[0] / 2, self.viewport_size[1] / 2)

    def world_to_screen(self, pos: Vec2) -> Tuple[int, int]:
        dx, dy = vec_sub(pos, self.center)
        half_w, half_h = self._half_view
        return (int(dx / self.mpp + half_w), int(dy / self.mpp + half_h))

    def screen_to_world(self, screen: Tuple[int, int]) -> Vec2:
        return vec_add(vec_scale(vec_sub(screen, self._half_view), self.mpp), self.center)

    def zoom(self, factor: float, pivot_screen: Optional[Tuple[int, int]] = None) -> None:
        """
        Scale the view by factor (> 1 zooms in).

        With a pivot, the world point under that pixel stays under it.
        """
        factor = clamp(factor, 1.0 / MAX_ZOOM_STEP, MAX_ZOOM_STEP)
        anchor = self.screen_to_world(pivot_screen) if pivot_screen is not None else None
        self.mpp = clamp(self.mpp / factor, MIN_METERS_PER_PIXEL, MAX_METERS_PER_PIXEL)
        if anchor is not None:
            drift = vec_sub(anchor, self.screen_to_world(pivot_screen))
            self.center = vec_add(self.center, drift)

    def pan_pixels(self, dx_pixels: float, dy_pixels: float) -> None:
        """Move the view as if the scene were dragged by (dx, dy) pixels."""
        self.center = vec_sub(self.center, vec_scale((dx_pixels, dy_pixels), self.mpp))

    def fit(self, positions: Iterable[Vec2], margin: float = 1.3) -> None:
        """Center and zoom so that every position is in view."""
        positions = list(positions)
        if not positions:
            self.center = (0.0, 0.0)
            self.mpp = DEFAULT_METERS_PER_PIXEL
            return
        xs = [p[0] for p in positions]
        ys = [p[1] for p in positions]
        span = ((max(xs) - min(xs)) * margin + 1.0, (max(ys) - min(ys)) * margin + 1.0)
        self.center = ((min(xs) + max(xs)) / 2, (min(ys) + max(ys)) / 2)
        needed = max(span[0] / max(self.viewport_size[0], 1), span[1] / max(self.viewport_size[1], 1))
        self.mpp = clamp(needed, MIN_METERS_PER_PIXEL, MAX_METERS_PER_PIXEL)

    def size_in_pixels(self, size_m: float) -> float:
        return size_m / self.mpp

    def is_visible(self, size_m: float) -> bool:
        """True when a body of this diameter is big enough to draw to scale."""
        return self.size_in_pixels(size_m) > MIN_VISIBLE_PIXELS
