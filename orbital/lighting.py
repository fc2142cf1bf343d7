#!/usr/bin/env python3
"""
Day/night shading for the renderer.

A body is lit by its nearest ancestor with a positive radiance (usually the star at
the root of its hierarchy). The received flux radiance / (4 * pi * r^2) is scaled
into a 0..1 alpha for the highlight and shadow overlays.
"""
import math
from typing import NamedTuple, Optional

from .bodies import Body
from .vector_utils import Vec2, vec_len, vec_scale, vec_sub
from .world import World

FLUX_SCALE = 1e15


class Light(NamedTuple):
    away: Vec2  # unit vector pointing from the light source to the body
    alpha: float  # 0..1


def light_source(world: World, body: Body) -> Optional[Body]:
    """Nearest ancestor of body that emits light, or None."""
    current = world.parent_of(body)
    while current is not None:
        if current.radiance > 0:
            return current
        current = world.parent_of(current)
    return None


def illumination(world: World, body: Body) -> Optional[Light]:
    source = light_source(world, body)
    if source is None:
        return None
    offset = vec_sub(body.position, source.position)
    distance = vec_len(offset)
    if distance == 0.0:
        return None
    flux = source.radiance / (4.0 * math.pi * distance * distance)
    return Light(vec_scale(offset, 1.0 / distance), min(flux * FLUX_SCALE, 1.0))
