import math

import pytest

from orbital.bodies import anchored_body, orbiting_body
from orbital.constants import G, MIN_SEPARATION
from orbital.data_models import Motion
from orbital.errors import ConfigurationError, NumericalDegeneracy
from orbital.physics import (
    DEFAULT_GRAVITY,
    GravitySettings,
    MassLaw,
    accumulate_acceleration,
    circular_orbit_velocity,
    orbital_period,
    pair_acceleration,
    semi_implicit_euler,
)


def test_pair_acceleration_uses_combined_mass_by_default() -> None:
    ax, ay = pair_acceleration((0.0, 0.0), 10.0, (2.0e6, 0.0), 1.0e24)
    assert math.isclose(ax, G * (1.0e24 + 10.0) / (2.0e6 ** 2), rel_tol=1e-12)
    assert ay == 0.0


def test_pair_acceleration_newtonian_uses_other_mass_only() -> None:
    settings = GravitySettings(mass_law=MassLaw.NEWTONIAN)
    ax, ay = pair_acceleration((0.0, 0.0), 5.0e23, (0.0, -3.0e6), 1.0e24, settings)
    assert ax == 0.0
    assert math.isclose(ay, -G * 1.0e24 / (3.0e6 ** 2), rel_tol=1e-12)


def test_pair_acceleration_points_at_other_body() -> None:
    ax, ay = pair_acceleration((1.0e6, 1.0e6), 1.0, (4.0e6, 5.0e6), 1.0e24)
    # direction (3, 4) / 5
    assert math.isclose(ax / ay, 0.75, rel_tol=1e-12)
    assert math.isclose(math.hypot(ax, ay), G * (1.0e24 + 1.0) / (5.0e6 ** 2), rel_tol=1e-12)


def test_pair_acceleration_clamps_below_floor() -> None:
    mass = 1.0e20
    near = pair_acceleration((0.0, 0.0), 1.0, (MIN_SEPARATION / 2, 0.0), mass)
    at_floor = pair_acceleration((0.0, 0.0), 1.0, (MIN_SEPARATION, 0.0), mass)
    assert near == at_floor
    assert math.isclose(near[0], G * (mass + 1.0) / MIN_SEPARATION ** 2, rel_tol=1e-12)


def test_pair_acceleration_rejects_coincident_positions() -> None:
    with pytest.raises(NumericalDegeneracy):
        pair_acceleration((3.0, 4.0), 1.0, (3.0, 4.0), 1.0)


def test_accumulate_skips_self_by_id() -> None:
    star = anchored_body(0, "Star", 2.0e30, 1.0e9)
    planet = orbiting_body(1, "Planet", 6.0e24, 1.0e7, Motion((1.5e11, 0.0), (0.0, 3.0e4)))
    alone = accumulate_acceleration(planet, [star])
    with_self = accumulate_acceleration(planet, [star, planet])
    assert alone == with_self
    assert alone[0] < 0.0


def test_accumulate_skips_coincident_pair_without_nan() -> None:
    a = orbiting_body(0, "A", 1.0e24, 1.0e6, Motion((0.0, 0.0), (0.0, 0.0)))
    b = orbiting_body(1, "B", 1.0e24, 1.0e6, Motion((0.0, 0.0), (0.0, 0.0)))
    c = orbiting_body(2, "C", 1.0e24, 1.0e6, Motion((1.0e7, 0.0), (0.0, 0.0)))
    ax, ay = accumulate_acceleration(a, [b, c])
    assert math.isfinite(ax) and math.isfinite(ay)
    # only C contributes
    assert math.isclose(ax, G * 2.0e24 / 1.0e14, rel_tol=1e-12)
    assert ay == 0.0


def test_semi_implicit_euler_moves_position_with_old_velocity() -> None:
    frame = semi_implicit_euler(Motion((1.0, 2.0), (3.0, -1.0)), (10.0, 20.0), 0.5)
    assert frame.position == (1.0 + 3.0 * 0.5, 2.0 - 1.0 * 0.5)
    assert frame.velocity == (3.0 + 10.0 * 0.5, -1.0 + 20.0 * 0.5)


def test_gravity_settings_validation() -> None:
    with pytest.raises(ConfigurationError):
        GravitySettings(min_separation=0.0)
    with pytest.raises(ConfigurationError):
        GravitySettings(min_separation=float("nan"))
    with pytest.raises(ValueError):
        GravitySettings(mass_law="relativistic")
    assert DEFAULT_GRAVITY.mass_law is MassLaw.COMBINED
    assert GravitySettings(mass_law="newtonian").mass_law is MassLaw.NEWTONIAN


def test_circular_orbit_helpers() -> None:
    mu = G * 5.972e24
    assert math.isclose(circular_orbit_velocity(mu, 7.0e6), math.sqrt(mu / 7.0e6))
    with pytest.raises(NumericalDegeneracy):
        circular_orbit_velocity(mu, 0.0)
    period = orbital_period(7.0e6, 5.972e24, 0.0)
    assert math.isclose(period, 2 * math.pi * math.sqrt(7.0e6 ** 3 / mu))
