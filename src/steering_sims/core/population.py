# src/steering_sims/core/population.py

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Iterable, List
import logging
import numpy as np

from steering_sims.utils.physics_utils import as_vec
from steering_sims.utils.random import RandomSource, rng as named_rng
from .agents import Agent
from .behaviors import Behavior, StepContext
from .boundary import Boundary
from .environment import Environment
from .neighbors import BruteForceNeighbors, NeighborQuery
from .recording import FrameSnapshot, SimulationRecording, snapshot_agents
from .snapshot import PopulationSnapshot

logger = logging.getLogger(__name__)


@dataclass
class Population:
    """
    Flat arena of agents advanced in two phases per tick.

    Compute: every agent's forces come from one PopulationSnapshot taken at the
    start of the tick and land in that agent's own accumulator.
    Commit: every agent integrates. Agent order never changes the result.
    """
    env: Environment = field(default_factory=Environment)
    behaviors: List[Behavior] = field(default_factory=list)
    boundary: Boundary | None = None
    neighbors: NeighborQuery = field(default_factory=BruteForceNeighbors)
    rng: RandomSource = field(default_factory=lambda: named_rng("wander"))
    agents: List[Agent] = field(default_factory=list)
    target: np.ndarray | None = None
    time: float = 0.0
    _next_id: int = 0

    @property
    def n_agents(self) -> int:
        return len(self.agents)

    def new_id(self) -> int:
        nid = self._next_id
        self._next_id += 1
        return nid

    def add_agent(self, agent: Agent) -> Agent:
        if self.boundary is not None and not self.boundary.contains(agent.pos):
            raise ValueError(f"agent placed outside boundary at {agent.pos.tolist()}")
        if agent.id is None:
            agent.id = self.new_id()
        elif any(a.id == agent.id for a in self.agents):
            raise ValueError(f"agent id {agent.id} already exists in population")
        else:
            self._next_id = max(self._next_id, agent.id + 1)
        self.agents.append(agent)
        return agent

    def add_agents(self, agents: Iterable[Agent]) -> None:
        for agent in agents:
            self.add_agent(agent)

    def get(self, agent_id: int) -> Agent:
        for agent in self.agents:
            if agent.id == agent_id:
                return agent
        raise KeyError(agent_id)

    def add_behavior(self, behavior: Behavior) -> None:
        self.behaviors.append(behavior)

    def set_target(self, target) -> None:
        """Shared goal for target-driven behaviors; None clears it."""
        self.target = None if target is None else as_vec(target)

    def snapshot(self) -> PopulationSnapshot:
        return PopulationSnapshot.capture(self.agents)

    def compute_accelerations(self, snapshot: PopulationSnapshot, indices: Iterable[int] | None = None) -> None:
        """
        Compute phase for the agents at `indices` (all by default).

        Reads only `snapshot` and writes only the listed agents' accumulators,
        so disjoint index sets may run on separate workers.
        """
        ctx = StepContext(
            snapshot=snapshot,
            env=self.env,
            rng=self.rng,
            neighbors=self.neighbors,
            target=self.target,
            time=self.time,
        )
        if indices is None:
            indices = range(len(self.agents))
        for i in indices:
            agent = self.agents[i]
            for behavior in self.behaviors:
                # one apply_force per force: each was clamped on its own
                for force in behavior.forces(ctx, i):
                    agent.apply_force(force)

    def commit(self, dt: float) -> None:
        for agent in self.agents:
            agent.update(dt)
            if self.boundary is not None:
                self.boundary.enforce(agent)
        self.time += dt

    def tick(self, dt: float, *, static_registry: dict | None = None) -> FrameSnapshot:
        """One compute-then-commit step; returns the renderer-facing frame."""
        snapshot = self.snapshot()
        self.compute_accelerations(snapshot)
        self.commit(dt)
        return snapshot_agents(self.agents, self.time, static_registry=static_registry)


def run_simulation(
    population: Population,
    n_steps: int,
    dt: float,
    log_interval: int = 600,
) -> SimulationRecording:
    """Tick the population n_steps times, recording every frame."""
    recording = SimulationRecording()
    recording.add_frame(snapshot_agents(population.agents, population.time,
                                        static_registry=recording.agent_static))
    for step in range(n_steps):
        recording.add_frame(population.tick(dt, static_registry=recording.agent_static))
        if log_interval and (step + 1) % log_interval == 0:
            logger.info("simulated %.3f / %.3f time units, %d agents",
                        population.time, n_steps * dt, population.n_agents)
    return recording
