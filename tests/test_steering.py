import numpy as np
import pytest

from steering_sims.core import flee, predict_point, pursue, seek, wander
from steering_sims.core.steering import desired_seek_velocity


def test_seek_points_at_target(make_agent):
    a = make_agent()
    force = seek(a, (100.0, 0.0))
    assert force[0] > 0
    assert force[1] == pytest.approx(0.0)
    assert np.linalg.norm(force) <= a.max_force + 1e-12


def test_arrival_halves_speed_at_half_slow_radius(make_agent):
    a = make_agent(max_speed=4.0)
    desired = desired_seek_velocity(a, (50.0, 0.0), slow_radius=100.0)
    assert np.linalg.norm(desired) == pytest.approx(0.5 * a.max_speed)


def test_no_arrival_outside_slow_radius(make_agent):
    a = make_agent(max_speed=4.0)
    desired = desired_seek_velocity(a, (0.0, 250.0))
    np.testing.assert_allclose(desired, [0.0, 4.0], atol=1e-12)


def test_seek_own_position_is_finite(make_agent):
    a = make_agent(pos=(5.0, 5.0))
    force = seek(a, (5.0, 5.0))
    assert np.all(np.isfinite(force))
    np.testing.assert_allclose(force, [0.0, 0.0], atol=1e-12)


def test_flee_points_away_without_arrival(make_agent):
    a = make_agent(max_force=10.0)
    force = flee(a, (10.0, 0.0))
    # no damping even though the target is well inside slow_radius
    np.testing.assert_allclose(force, [-a.max_speed, 0.0], atol=1e-12)


def test_flee_is_clamped(make_agent):
    a = make_agent()
    assert np.linalg.norm(flee(a, (10.0, 3.0))) <= a.max_force + 1e-12


def test_pursue_leads_target_by_one_velocity_step(make_agent):
    a = make_agent(max_force=10.0)
    np.testing.assert_allclose(
        pursue(a, (100.0, 0.0), (0.0, 50.0)),
        seek(a, (100.0, 50.0)),
    )


def test_predict_point_stopped_agent_is_its_position(make_agent):
    a = make_agent(pos=(3.0, 4.0))
    np.testing.assert_allclose(predict_point(a, 25.0), [3.0, 4.0])


def test_wander_with_fixed_angle(make_agent, fixed_angle_source):
    # theta = 0: target = predicted (25, 0) + (10, 0)
    a = make_agent(vel=(1.0, 0.0), max_force=10.0)
    force = wander(a, fixed_angle_source, predict_distance=25.0, wander_radius=10.0)
    np.testing.assert_allclose(force, seek(a, (35.0, 0.0)))


def test_wander_is_reproducible_with_seeded_source(make_agent):
    a = make_agent(vel=(0.5, 0.5))
    f1 = [wander(a, rng) for rng in [np.random.default_rng(7)] for _ in range(5)]
    f2 = [wander(a, rng) for rng in [np.random.default_rng(7)] for _ in range(5)]
    for x, y in zip(f1, f2):
        np.testing.assert_array_equal(x, y)
        assert np.linalg.norm(x) <= a.max_force + 1e-12
