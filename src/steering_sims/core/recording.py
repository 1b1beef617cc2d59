# src/steering_sims/core/recording.py

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Dict, Iterable, Tuple
import numpy as np

from steering_sims.utils.physics_utils import heading

if TYPE_CHECKING:
    from .agents import Agent


@dataclass
class AgentStaticSnapshot:
    """Properties of an agent that never change, stored once per recording."""
    id: int
    radius: float
    mass: float
    max_speed: float
    max_force: float


@dataclass
class AgentStateSnapshot:
    """What a renderer needs each frame."""
    pos: Tuple[float, float]
    vel: Tuple[float, float]
    heading: float            # atan2(vx, vy)


@dataclass
class FrameSnapshot:
    t: float
    agents: dict[int, AgentStateSnapshot]


@dataclass
class SimulationRecording:
    """
    In-memory record of a run, frame by frame.

    `meta` carries config, seed and similar run information.
    """
    frames: list[FrameSnapshot] = field(default_factory=list)
    meta: dict[str, Any] = field(default_factory=dict)
    agent_static: Dict[int, AgentStaticSnapshot] = field(default_factory=dict)

    def add_frame(self, frame: FrameSnapshot) -> None:
        self.frames.append(frame)

    @property
    def t_end(self) -> float | None:
        if not self.frames:
            return None
        return self.frames[-1].t

    def trajectory(self, agent_id: int) -> np.ndarray:
        """Positions of one agent over the frames it appears in, shape (k, 2)."""
        pts = [f.agents[agent_id].pos for f in self.frames if agent_id in f.agents]
        return np.array(pts, dtype=float).reshape(-1, 2)


def make_agent_static_snapshot(agent: "Agent") -> AgentStaticSnapshot:
    return AgentStaticSnapshot(
        id=agent.id,
        radius=float(agent.radius),
        mass=float(agent.mass),
        max_speed=float(agent.max_speed),
        max_force=float(agent.max_force),
    )


def make_agent_state_snapshot(agent: "Agent") -> AgentStateSnapshot:
    pos = np.asarray(agent.pos, dtype=float)
    vel = np.asarray(agent.vel, dtype=float)
    return AgentStateSnapshot(
        pos=(float(pos[0]), float(pos[1])),
        vel=(float(vel[0]), float(vel[1])),
        heading=heading(vel),
    )


def snapshot_agents(
    agents: Iterable["Agent"],
    t: float,
    *,
    static_registry: Dict[int, AgentStaticSnapshot] | None = None,
) -> FrameSnapshot:
    states: Dict[int, AgentStateSnapshot] = {}
    for agent in agents:
        if agent.id is None:
            raise ValueError("agents need an id before they can be recorded")
        if static_registry is not None and agent.id not in static_registry:
            static_registry[agent.id] = make_agent_static_snapshot(agent)
        states[agent.id] = make_agent_state_snapshot(agent)
    return FrameSnapshot(t=t, agents=states)
