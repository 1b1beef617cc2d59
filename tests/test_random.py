import numpy as np

from steering_sims.utils.random import rng, seed_all


def test_seed_all_resets_streams():
    seed_all(123)
    first = rng("wander").uniform(size=4)
    seed_all(123)
    np.testing.assert_array_equal(rng("wander").uniform(size=4), first)


def test_named_streams_are_independent():
    seed_all(5)
    a = rng("spawn").uniform(size=3)
    seed_all(5)
    rng("wander").uniform(size=100)
    np.testing.assert_array_equal(rng("spawn").uniform(size=3), a)


def test_same_name_shares_a_stream():
    assert rng("flow") is rng("flow")
