# src/steering_sims/core/environment.py

from __future__ import annotations
from dataclasses import dataclass
from typing import TYPE_CHECKING
import numpy as np

from .flow_field import FlowField, noise_angles
from .path import LOOKAHEAD, Path
from .steering import PREDICT_DISTANCE, SLOW_RADIUS, WANDER_RADIUS

if TYPE_CHECKING:
    from .config import EnvironmentConfig


@dataclass(frozen=True)
class Environment:
    """Read-only surroundings shared by every agent during a tick."""
    flow_field: FlowField | None = None
    path: Path | None = None
    desired_separation: float = 25.0
    neighbor_distance: float = 50.0
    predict_distance: float = PREDICT_DISTANCE
    lookahead: float = LOOKAHEAD
    slow_radius: float = SLOW_RADIUS
    wander_radius: float = WANDER_RADIUS

    @classmethod
    def from_config(
        cls,
        cfg: "EnvironmentConfig",
        width: float,
        height: float,
        flow_rng: np.random.Generator,
    ) -> "Environment":
        """Build the flow field and path described by `cfg` for a width x height world."""
        flow_field = None
        if cfg.flow_resolution is not None:
            flow_field = FlowField.for_area(
                width, height, cfg.flow_resolution,
                noise_angles(flow_rng, frequency=cfg.flow_frequency),
            )
        path = None
        if cfg.path_waypoints:
            path = Path(np.asarray(cfg.path_waypoints, dtype=float), cfg.path_radius)
        return cls(
            flow_field=flow_field,
            path=path,
            desired_separation=cfg.desired_separation,
            neighbor_distance=cfg.neighbor_distance,
            predict_distance=cfg.predict_distance,
            lookahead=cfg.lookahead,
            slow_radius=cfg.slow_radius,
            wander_radius=cfg.wander_radius,
        )
