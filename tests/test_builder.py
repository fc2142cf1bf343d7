import math
import random

import pytest

from orbital.builder import build_world
from orbital.constants import G
from orbital.data_models import BodyKind, BodyParams, WorldParams
from orbital.errors import ConfigurationError, NumericalDegeneracy
from orbital.vector_utils import vec_len, vec_sub


def _params() -> WorldParams:
    return WorldParams(
        name="Test",
        stars=[
            BodyParams(name="Sun", mass=1.989e30, size=1.39e9, radiance=2.0e7),
            BodyParams(name="Companion", mass=1.0e30, size=1.0e9, position=(5.0e12, 0.0)),
        ],
        planets=[
            BodyParams(name="Earth", mass=5.972e24, size=1.27e7, height=1.496e11, children=[
                BodyParams(name="Moon", mass=7.342e22, size=3.47e6, height=3.844e8, phase=0.25),
            ]),
            BodyParams(name="Far", mass=1.0e24, size=1.0e7, height=1.0e11, parent="Companion", phase=1.0),
        ],
    )


def test_roots_first_then_depth_first_descendants() -> None:
    world = build_world(_params(), rng=random.Random(0))
    names = [body.name for body in world]
    assert names == ["Sun", "Companion", "Earth", "Moon", "Far"]
    assert world.ids() == [0, 1, 2, 3, 4]
    assert [body.kind for body in world][:2] == [BodyKind.ANCHORED, BodyKind.ANCHORED]
    assert world.find("Moon").parent_id == world.find("Earth").id
    assert world.find("Far").parent_id == world.find("Companion").id
    assert world.find("Earth").parent_id == 0


def test_children_orbit_their_parent_and_inherit_its_velocity() -> None:
    world = build_world(_params(), rng=random.Random(0))
    earth, moon = world.find("Earth"), world.find("Moon")
    assert math.isclose(vec_len(vec_sub(moon.position, earth.position)), 3.844e8, rel_tol=1e-9)
    relative_speed = vec_len(vec_sub(moon.velocity, earth.velocity))
    assert math.isclose(relative_speed, math.sqrt(G * (5.972e24 + 7.342e22) / 3.844e8), rel_tol=1e-9)

    far = world.find("Far")
    assert math.isclose(far.position[0], 5.0e12 - 1.0e11, rel_tol=1e-12)


def test_same_seed_same_world() -> None:
    first = build_world(_params(), rng=random.Random(42)).motions()
    second = build_world(_params(), rng=random.Random(42)).motions()
    third = build_world(_params(), rng=random.Random(43)).motions()
    assert first == second
    assert first != third


def test_construction_errors_abort() -> None:
    with pytest.raises(ConfigurationError, match="star"):
        build_world(WorldParams(planets=[BodyParams(name="P", mass=1.0, size=1.0, height=1.0e9)]))

    params = _params()
    params.planets[1].parent = "Nemesis"
    with pytest.raises(ConfigurationError, match="Nemesis"):
        build_world(params, rng=random.Random(0))

    params = _params()
    params.planets[0].children[0].mass = -1.0
    with pytest.raises(ConfigurationError):
        build_world(params, rng=random.Random(0))

    params = _params()
    params.planets[0].height = 10.0
    with pytest.raises(NumericalDegeneracy):
        build_world(params, rng=random.Random(0))


def test_empty_world_is_valid() -> None:
    assert len(build_world(WorldParams())) == 0


def test_duplicate_star_names_are_rejected() -> None:
    params = _params()
    params.stars[1].name = "Sun"
    with pytest.raises(ConfigurationError, match="duplicate star"):
        build_world(params, rng=random.Random(0))
