#!/usr/bin/env python3
"""
Build a World from WorldParams.

Stars are created first as anchored bodies. Each planet is then placed on a stable
orbit around its star, and its children around the planet's freshly computed motion,
depth first. Ids come from the world's counter in creation order.
"""
import logging
import random
from typing import Dict, Optional

from .bodies import Body
from .constants import MIN_SEPARATION
from .data_models import BodyParams, WorldParams
from .errors import ConfigurationError
from .world import World

logger = logging.getLogger(__name__)


def build_world(params: WorldParams, rng: Optional[random.Random] = None,
                min_separation: float = MIN_SEPARATION) -> World:
    """
    Construct and return the initial World described by params.

    Args:
        params: Stars (roots) and planets (with nested children)
        rng: Source of orbital phases for bodies without an explicit phase.
             Defaults to an unseeded random.Random().
        min_separation: Orbital radii below this are rejected

    Raises:
        ConfigurationError: on malformed parameters, a duplicate star name or an unknown parent star
    """
    if rng is None:
        rng = random.Random()
    if params.planets and not params.stars:
        raise ConfigurationError("planets need at least one star to orbit")

    world = World()
    stars: Dict[str, Body] = {}
    for star in params.stars:
        if star.name in stars:
            raise ConfigurationError(f"duplicate star name {star.name!r}")
        body = world.spawn_anchor(
            star.name,
            star.mass,
            star.size,
            position=star.position,
            color=star.color,
            radiance=star.radiance,
        )
        stars[star.name] = body
        logger.debug("anchored %s (id %d) at %s", body.name, body.id, body.position)

    primary = next(iter(world), None)
    for planet in params.planets:
        if planet.parent is None:
            star = primary
        else:
            star = stars.get(planet.parent)
            if star is None:
                raise ConfigurationError(f"{planet.name}: unknown parent star {planet.parent!r}")
        _spawn_tree(world, star, planet, rng, min_separation)

    logger.info("built world %r with %d bodies", params.name, len(world))
    return world


def _spawn_tree(world: World, parent: Body, params: BodyParams, rng: random.Random,
                min_separation: float) -> Body:
    body = world.spawn_orbiting(parent.id, params, rng, min_separation)
    for child in params.children:
        _spawn_tree(world, body, child, rng, min_separation)
    return body
