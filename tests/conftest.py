import matplotlib

matplotlib.use("Agg")

import numpy as np
import pytest

from steering_sims.core import Agent, PopulationSnapshot, create_agent
from steering_sims.utils.random import seed_all


@pytest.fixture(autouse=True)
def _reseed():
    # named streams are module-global; start every test from the same state
    seed_all(0)
    yield
    seed_all(None)


@pytest.fixture
def make_agent():
    def _make(pos=(0.0, 0.0), vel=(0.0, 0.0), agent_id=None, **kwargs) -> Agent:
        agent = create_agent(pos=pos, vel=vel, **kwargs)
        agent.id = agent_id
        return agent
    return _make


@pytest.fixture
def snapshot_of(make_agent):
    """Snapshot of agents at the given positions (zero velocity), ids 0..n-1."""
    def _snap(*positions, vels=None, **kwargs) -> PopulationSnapshot:
        vels = vels or [(0.0, 0.0)] * len(positions)
        agents = [make_agent(p, v, agent_id=i, **kwargs) for i, (p, v) in enumerate(zip(positions, vels))]
        return PopulationSnapshot.capture(agents)
    return _snap


class FixedAngleSource:
    """RandomSource that always answers the low end of the requested range."""

    def uniform(self, low=0.0, high=1.0, size=None):
        return np.full(size, low) if size is not None else low


@pytest.fixture
def fixed_angle_source():
    return FixedAngleSource()
