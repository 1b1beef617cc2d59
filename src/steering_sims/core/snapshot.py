# src/steering_sims/core/snapshot.py

from __future__ import annotations
from dataclasses import dataclass
from typing import Sequence, TYPE_CHECKING
import numpy as np

if TYPE_CHECKING:
    from .agents import Agent


@dataclass(frozen=True, eq=False)
class AgentSnapshot:
    """Prior-tick view of one agent. Satisfies the steering Protocol."""
    index: int
    id: int | None
    pos: np.ndarray
    vel: np.ndarray
    radius: float
    mass: float
    max_speed: float
    max_force: float


@dataclass(frozen=True, eq=False)
class PopulationSnapshot:
    """
    Read-only copy of every agent's state at the start of a tick.

    Arrays are stacked in population order: row i of `positions` belongs to
    `ids[i]`. Neighbor queries answer with indices into these rows.
    """
    ids: tuple
    positions: np.ndarray     # (n, 2)
    velocities: np.ndarray    # (n, 2)
    radii: np.ndarray         # (n,)
    masses: np.ndarray        # (n,)
    max_speeds: np.ndarray    # (n,)
    max_forces: np.ndarray    # (n,)

    @classmethod
    def capture(cls, agents: Sequence["Agent"]) -> "PopulationSnapshot":
        n = len(agents)
        positions = np.array([a.pos for a in agents], dtype=float).reshape(n, 2)
        velocities = np.array([a.vel for a in agents], dtype=float).reshape(n, 2)
        arrays = [
            positions,
            velocities,
            np.array([a.radius for a in agents], dtype=float),
            np.array([a.mass for a in agents], dtype=float),
            np.array([a.max_speed for a in agents], dtype=float),
            np.array([a.max_force for a in agents], dtype=float),
        ]
        for arr in arrays:
            arr.setflags(write=False)
        return cls(tuple(a.id for a in agents), *arrays)

    def __len__(self) -> int:
        return len(self.ids)

    def agent(self, index: int) -> AgentSnapshot:
        return AgentSnapshot(
            index=index,
            id=self.ids[index],
            pos=self.positions[index],
            vel=self.velocities[index],
            radius=float(self.radii[index]),
            mass=float(self.masses[index]),
            max_speed=float(self.max_speeds[index]),
            max_force=float(self.max_forces[index]),
        )

    def index_of(self, agent_id: int) -> int:
        return self.ids.index(agent_id)
