import numpy as np
import pytest

from steering_sims.core import KDTreeNeighbors, alignment, cohesion, flock, seek, separation


def test_separation_is_antisymmetric(snapshot_of):
    snap = snapshot_of((0.0, 0.0), (10.0, 0.0))
    f0 = separation(snap, 0, desired_sep=25.0)
    f1 = separation(snap, 1, desired_sep=25.0)
    assert f0[0] < 0 < f1[0]
    np.testing.assert_allclose(f0, -f1)
    assert f0[1] == pytest.approx(0.0)


def test_separation_ignores_agents_beyond_range(snapshot_of):
    snap = snapshot_of((0.0, 0.0), (30.0, 0.0))
    np.testing.assert_array_equal(separation(snap, 0, desired_sep=25.0), np.zeros(2))


def test_separation_skips_coincident_agents(snapshot_of):
    snap = snapshot_of((1.0, 1.0), (1.0, 1.0))
    force = separation(snap, 0, desired_sep=25.0)
    assert np.all(np.isfinite(force))
    np.testing.assert_array_equal(force, np.zeros(2))


def test_separation_clamped(snapshot_of):
    snap = snapshot_of((0.0, 0.0), (1.0, 0.0), (0.0, 1.0))
    assert np.linalg.norm(separation(snap, 0, 25.0)) <= 0.1 + 1e-12


def test_no_neighbors_no_alignment_or_cohesion(snapshot_of):
    snap = snapshot_of((0.0, 0.0), (1000.0, 0.0), vels=[(1.0, 0.0), (0.0, 3.0)])
    np.testing.assert_array_equal(alignment(snap, 0, neighbor_dist=50.0), np.zeros(2))
    np.testing.assert_array_equal(cohesion(snap, 0, neighbor_dist=50.0), np.zeros(2))


def test_alignment_steers_toward_neighbor_heading(snapshot_of):
    snap = snapshot_of((0.0, 0.0), (10.0, 0.0), vels=[(0.0, 0.0), (0.0, 2.0)])
    np.testing.assert_allclose(alignment(snap, 0, neighbor_dist=50.0), [0.0, 0.1], atol=1e-12)


def test_cohesion_seeks_centroid(snapshot_of):
    snap = snapshot_of((0.0, 0.0), (10.0, 0.0), (10.0, 20.0))
    np.testing.assert_allclose(
        cohesion(snap, 0, neighbor_dist=50.0),
        seek(snap.agent(0), (10.0, 10.0)),
    )


def test_flock_returns_weighted_forces_separately(snapshot_of):
    snap = snapshot_of((0.0, 0.0), (10.0, 0.0), (5.0, 8.0), vels=[(1.0, 0.0), (0.0, 1.0), (1.0, 1.0)])
    forces = flock(snap, 0, desired_sep=25.0, neighbor_dist=50.0)
    assert len(forces) == 3
    np.testing.assert_allclose(forces[0], separation(snap, 0, 25.0) * 1.5)
    np.testing.assert_allclose(forces[1], alignment(snap, 0, 50.0))
    np.testing.assert_allclose(forces[2], cohesion(snap, 0, 50.0))


def test_flock_with_kdtree_matches_default(snapshot_of):
    snap = snapshot_of((0.0, 0.0), (10.0, 0.0), (5.0, 8.0), (100.0, 100.0))
    default = flock(snap, 0, 25.0, 50.0)
    kd = flock(snap, 0, 25.0, 50.0, neighbors=KDTreeNeighbors())
    for a, b in zip(default, kd):
        np.testing.assert_array_equal(a, b)
