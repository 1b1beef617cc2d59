# src/steering_sims/core/flow_field.py

from __future__ import annotations
from dataclasses import dataclass
from typing import Callable
import logging
import math
import numpy as np
from scipy.ndimage import gaussian_filter

from .steering import Steerable, steer_towards

logger = logging.getLogger(__name__)

# (cols, rows, resolution) -> angles in radians, shape (cols, rows)
AngleGenerator = Callable[[int, int, float], np.ndarray]


def noise_angles(rng: np.random.Generator, frequency: float = 0.1) -> AngleGenerator:
    """
    Coherent noise mapped onto [0, 2*pi] (both ends reached; they give the same direction).

    A white-noise lattice is smoothed with a gaussian whose width is half a
    noise period (0.5 / frequency cells), then stretched back to [0, 1].
    """
    if frequency <= 0:
        raise ValueError(f"noise frequency must be positive, got {frequency}")

    def generate(cols: int, rows: int, resolution: float) -> np.ndarray:
        raw = rng.uniform(0.0, 1.0, size=(cols, rows))
        smooth = gaussian_filter(raw, sigma=0.5 / frequency, mode="reflect")
        lo, hi = float(smooth.min()), float(smooth.max())
        if hi - lo > 0:
            smooth = (smooth - lo) / (hi - lo)
        else:
            smooth = np.full_like(smooth, 0.5)
        return smooth * 2.0 * math.pi

    return generate


def uniform_angles(angle: float) -> AngleGenerator:
    def generate(cols: int, rows: int, resolution: float) -> np.ndarray:
        return np.full((cols, rows), float(angle))
    return generate


def angles_from(func: Callable[[float, float], float]) -> AngleGenerator:
    """Evaluate func(x, y) at every cell centre (world units)."""
    def generate(cols: int, rows: int, resolution: float) -> np.ndarray:
        out = np.empty((cols, rows))
        for c in range(cols):
            for r in range(rows):
                out[c, r] = func((c + 0.5) * resolution, (r + 0.5) * resolution)
        return out
    return generate


@dataclass(frozen=True, eq=False)
class FlowField:
    """
    Grid of unit direction vectors indexed [col, row].

    The backing array is read-only; build a new FlowField to change it.
    """
    field: np.ndarray     # (cols, rows, 2)
    resolution: float

    def __post_init__(self):
        if not self.resolution > 0:
            raise ValueError(f"flow field resolution must be positive, got {self.resolution}")
        field = np.array(self.field, dtype=float)
        if field.ndim != 3 or field.shape[2] != 2 or field.shape[0] < 1 or field.shape[1] < 1:
            raise ValueError(f"flow field must have shape (cols>=1, rows>=1, 2), got {field.shape}")
        field.setflags(write=False)
        object.__setattr__(self, "field", field)
        object.__setattr__(self, "resolution", float(self.resolution))

    @classmethod
    def from_angles(cls, cols: int, rows: int, resolution: float, generator: AngleGenerator) -> "FlowField":
        if cols < 1 or rows < 1:
            raise ValueError(f"flow field needs at least one cell, got {cols}x{rows}")
        if not resolution > 0:
            raise ValueError(f"flow field resolution must be positive, got {resolution}")
        theta = np.asarray(generator(cols, rows, float(resolution)), dtype=float)
        if theta.shape != (cols, rows):
            raise ValueError(f"generator returned shape {theta.shape}, expected {(cols, rows)}")
        logger.debug("built %dx%d flow field at resolution %g", cols, rows, resolution)
        return cls(np.stack([np.cos(theta), np.sin(theta)], axis=-1), resolution)

    @classmethod
    def for_area(cls, width: float, height: float, resolution: float, generator: AngleGenerator) -> "FlowField":
        """Cover a width x height world, one cell per `resolution` units."""
        if not resolution > 0:
            raise ValueError(f"flow field resolution must be positive, got {resolution}")
        return cls.from_angles(int(width // resolution), int(height // resolution), resolution, generator)

    @property
    def cols(self) -> int:
        return self.field.shape[0]

    @property
    def rows(self) -> int:
        return self.field.shape[1]

    def cell_of(self, position) -> tuple[int, int]:
        """Grid cell for a world position, clamped onto the grid."""
        col = _clamp_index(float(position[0]) / self.resolution, self.cols)
        row = _clamp_index(float(position[1]) / self.resolution, self.rows)
        return col, row

    def lookup(self, position) -> np.ndarray:
        col, row = self.cell_of(position)
        return self.field[col, row].copy()

    def follow(self, agent: Steerable) -> np.ndarray:
        desired = self.lookup(agent.pos) * agent.max_speed
        return steer_towards(agent, desired)


def _clamp_index(scaled: float, n: int) -> int:
    if not math.isfinite(scaled):
        return 0 if scaled < 0 or math.isnan(scaled) else n - 1
    return min(max(math.floor(scaled), 0), n - 1)
