# src/steering_sims/core/agents.py

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict

import numpy as np

from steering_sims.utils.physics_utils import as_vec, clamp_length_max, heading

DEFAULT_RADIUS = 3.0
DEFAULT_MASS = 1.0
DEFAULT_MAX_SPEED = 4.0
DEFAULT_MAX_FORCE = 0.1


@dataclass
class Agent:
    """
    A steered vehicle.

    - pos / vel / acc: world-space kinematic state, arrays of shape (2,)
    - mass: divides applied forces when positive; forces pass through raw otherwise
    - max_speed / max_force: limits enforced by `update` and by every steering behavior
    """
    id: int | None
    pos: np.ndarray
    vel: np.ndarray
    acc: np.ndarray = field(default_factory=lambda: np.zeros(2))
    radius: float = DEFAULT_RADIUS
    mass: float = DEFAULT_MASS
    max_speed: float = DEFAULT_MAX_SPEED
    max_force: float = DEFAULT_MAX_FORCE
    state: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        if not self.max_speed > 0:
            raise ValueError(f"max_speed must be positive, got {self.max_speed}")
        if not self.max_force > 0:
            raise ValueError(f"max_force must be positive, got {self.max_force}")
        if self.radius < 0:
            raise ValueError(f"radius must be non-negative, got {self.radius}")
        self.pos = as_vec(self.pos)
        self.vel = as_vec(self.vel)
        self.acc = as_vec(self.acc)

    def apply_force(self, force: np.ndarray) -> None:
        if self.mass > 0:
            self.acc += np.asarray(force, dtype=float) / self.mass
        else:
            # massless agents take the force as an acceleration
            self.acc += np.asarray(force, dtype=float)

    def update(self, dt: float) -> None:
        """Semi-implicit Euler step; leaves acc zeroed for the next tick."""
        self.vel = clamp_length_max(self.vel + self.acc * dt, self.max_speed)
        self.pos = self.pos + self.vel * dt
        self.acc = np.zeros(2)

    @property
    def heading(self) -> float:
        return heading(self.vel)

    @property
    def speed(self) -> float:
        return float(np.linalg.norm(self.vel))


def create_agent(
    pos,
    vel=(0.0, 0.0),
    radius: float = DEFAULT_RADIUS,
    mass: float = DEFAULT_MASS,
    max_speed: float = DEFAULT_MAX_SPEED,
    max_force: float = DEFAULT_MAX_FORCE,
    state: dict | None = None,
) -> Agent:
    """Build an unregistered Agent (id assigned by the Population)."""
    return Agent(
        id=None,
        pos=pos,
        vel=vel,
        radius=float(radius),
        mass=float(mass),
        max_speed=float(max_speed),
        max_force=float(max_force),
        state={} if state is None else dict(state),
    )
