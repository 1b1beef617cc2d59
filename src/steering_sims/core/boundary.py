# src/steering_sims/core/boundary.py
from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass
import numpy as np

from .agents import Agent


class Boundary(ABC):
    @abstractmethod
    def contains(self, pos: np.ndarray, radius: float = 0.0) -> bool:
        """True if a circle of `radius` centred at pos lies fully inside."""
        ...

    @abstractmethod
    def sample_position(self, rng: np.random.Generator, radius: float = 0.0) -> np.ndarray:
        ...

    @abstractmethod
    def enforce(self, agent: Agent) -> None:
        """
        Adjust an agent after integration (commit phase only).

        Touches nothing but the agent passed in.
        """
        ...

    def bounds(self) -> tuple[float, float, float, float]:
        """(xmin, xmax, ymin, ymax), for renderers and flow-field sizing."""
        raise NotImplementedError


@dataclass
class BoxBoundary(Boundary):
    """
    Axis-aligned world [0, width] x [0, height].

    With wrap=True an agent leaving one side by more than its radius
    re-enters on the opposite side; otherwise the box is only used for
    spawning and sizing.
    """
    width: float
    height: float
    wrap: bool = False

    def __post_init__(self):
        if not (self.width > 0 and self.height > 0):
            raise ValueError(f"box must have positive size, got {self.width}x{self.height}")

    def contains(self, pos: np.ndarray, radius: float = 0.0) -> bool:
        x, y = float(pos[0]), float(pos[1])
        return radius <= x <= self.width - radius and radius <= y <= self.height - radius

    def sample_position(self, rng: np.random.Generator, radius: float = 0.0) -> np.ndarray:
        x = rng.uniform(radius, self.width - radius)
        y = rng.uniform(radius, self.height - radius)
        return np.array([x, y], dtype=float)

    def enforce(self, agent: Agent) -> None:
        if not self.wrap:
            return
        r = agent.radius
        pos = agent.pos.copy()
        if pos[0] < -r:
            pos[0] = self.width + r
        elif pos[0] > self.width + r:
            pos[0] = -r
        if pos[1] < -r:
            pos[1] = self.height + r
        elif pos[1] > self.height + r:
            pos[1] = -r
        agent.pos = pos

    def bounds(self) -> tuple[float, float, float, float]:
        return 0.0, self.width, 0.0, self.height
