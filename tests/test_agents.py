import math

import numpy as np
import pytest

from steering_sims.core import Agent, create_agent


def test_create_agent_defaults():
    a = create_agent(pos=(1.0, 2.0))
    assert a.id is None
    assert a.radius == 3.0
    assert a.mass == 1.0
    assert a.max_speed == 4.0
    assert a.max_force == 0.1
    assert np.array_equal(a.acc, np.zeros(2))


@pytest.mark.parametrize("kwargs", [
    {"max_speed": 0.0},
    {"max_speed": -1.0},
    {"max_force": 0.0},
    {"max_force": -0.5},
    {"radius": -1.0},
])
def test_create_agent_rejects_bad_limits(kwargs):
    with pytest.raises(ValueError):
        create_agent(pos=(0.0, 0.0), **kwargs)


@pytest.mark.parametrize("kwargs", [
    {"max_speed": -2.0},
    {"max_force": 0.0},
    {"radius": -1.0},
])
def test_agent_constructor_rejects_bad_limits(kwargs):
    with pytest.raises(ValueError):
        Agent(id=None, pos=(0.0, 0.0), vel=(1.0, 0.0), **kwargs)


def test_agent_constructor_coerces_vectors():
    a = Agent(id=3, pos=[1, 2], vel=(0, 0))
    assert a.pos.dtype == float and a.pos.shape == (2,)
    np.testing.assert_array_equal(a.acc, np.zeros(2))


def test_apply_force_divides_by_mass(make_agent):
    a = make_agent(mass=2.0)
    a.apply_force(np.array([1.0, -4.0]))
    np.testing.assert_allclose(a.acc, [0.5, -2.0], atol=1e-12)


@pytest.mark.parametrize("mass", [0.0, -3.0])
def test_apply_force_non_positive_mass_is_unscaled(make_agent, mass):
    a = make_agent(mass=mass)
    a.apply_force(np.array([1.0, -4.0]))
    np.testing.assert_allclose(a.acc, [1.0, -4.0], atol=1e-12)


def test_forces_accumulate(make_agent):
    a = make_agent()
    a.apply_force(np.array([1.0, 0.0]))
    a.apply_force(np.array([0.0, 2.0]))
    np.testing.assert_allclose(a.acc, [1.0, 2.0], atol=1e-12)


def test_update_integrates_and_resets(make_agent):
    a = make_agent(vel=(1.0, 0.0), max_speed=10.0)
    a.apply_force(np.array([1.0, 0.0]))
    a.update(0.5)
    np.testing.assert_allclose(a.vel, [1.5, 0.0], atol=1e-12)
    np.testing.assert_allclose(a.pos, [0.75, 0.0], atol=1e-12)
    assert np.array_equal(a.acc, np.zeros(2))


def test_update_clamps_speed(make_agent):
    a = make_agent(max_speed=4.0)
    a.apply_force(np.array([10.0, 0.0]))
    a.update(1.0)
    np.testing.assert_allclose(a.vel, [4.0, 0.0], atol=1e-12)
    np.testing.assert_allclose(a.pos, [4.0, 0.0], atol=1e-12)


def test_speed_clamp_holds_under_random_forces(make_agent):
    rng = np.random.default_rng(42)
    agents = [
        make_agent(vel=rng.normal(0, 1, 2), max_speed=float(s), mass=float(m))
        for s, m in zip(rng.uniform(0.1, 10.0, 20), rng.uniform(-1.0, 5.0, 20))
    ]
    for _ in range(200):
        for a in agents:
            a.apply_force(rng.normal(0.0, 50.0, size=2))
            a.update(float(rng.uniform(0.01, 2.0)))
            assert np.linalg.norm(a.vel) <= a.max_speed * (1 + 1e-12)


def test_heading_property(make_agent):
    a = make_agent(vel=(1.0, 0.0))
    assert a.heading == pytest.approx(math.pi / 2)
    assert a.speed == pytest.approx(1.0)
