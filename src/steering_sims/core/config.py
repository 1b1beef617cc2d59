# src/steering_sims/core/config.py

from __future__ import annotations
from dataclasses import dataclass, field, fields
from typing import Any, List, Mapping, Optional

from .agents import DEFAULT_MASS, DEFAULT_MAX_FORCE, DEFAULT_MAX_SPEED, DEFAULT_RADIUS
from .path import LOOKAHEAD
from .steering import PREDICT_DISTANCE, SLOW_RADIUS, WANDER_RADIUS


@dataclass
class AgentSpec:
    """Spawn parameters. pos=None means sample inside the boundary."""
    pos: Optional[tuple[float, float]] = None
    vel: Optional[tuple[float, float]] = None
    radius: float = DEFAULT_RADIUS
    mass: float = DEFAULT_MASS
    max_speed: float = DEFAULT_MAX_SPEED
    max_force: float = DEFAULT_MAX_FORCE


@dataclass
class EnvironmentConfig:
    flow_resolution: Optional[float] = None     # None: no flow field
    flow_seed: Optional[int] = None             # None: derive from the master seed
    flow_frequency: float = 0.1
    path_waypoints: List[tuple[float, float]] = field(default_factory=list)
    path_radius: float = 20.0
    desired_separation: float = 25.0
    neighbor_distance: float = 50.0
    predict_distance: float = PREDICT_DISTANCE
    lookahead: float = LOOKAHEAD
    slow_radius: float = SLOW_RADIUS
    wander_radius: float = WANDER_RADIUS


@dataclass
class SimConfig:
    width: float = 640.0
    height: float = 360.0
    wrap: bool = True
    n_agents: int = 20
    sigma_v: float = 1.0
    agent: AgentSpec = field(default_factory=AgentSpec)
    agents: List[AgentSpec] = field(default_factory=list)   # explicit spawns, added before the n_agents random ones
    environment: EnvironmentConfig = field(default_factory=EnvironmentConfig)
    behaviors: dict[str, dict] = field(default_factory=lambda: {'Flock': {}})  # e.g. {'FollowPath': {'weight': 2.0}}
    neighbor_query: str = 'BruteForceNeighbors'
    # params left out of a BoxBoundary fall back to width / height / wrap above
    boundary: dict = field(default_factory=lambda: {'type': 'BoxBoundary', 'params': {}})
    target: Optional[tuple[float, float]] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "SimConfig":
        """Build from a (preset) mapping; unknown keys are an error."""
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise ValueError(f"Unknown SimConfig keys: {sorted(unknown)}")
        kwargs = dict(data)
        if 'agent' in kwargs:
            kwargs['agent'] = _build(AgentSpec, kwargs['agent'])
        if 'agents' in kwargs:
            kwargs['agents'] = [_build(AgentSpec, a) for a in kwargs['agents'] or []]
        if 'environment' in kwargs:
            kwargs['environment'] = _build(EnvironmentConfig, kwargs['environment'])
        if kwargs.get('behaviors') is None and 'behaviors' in kwargs:
            kwargs['behaviors'] = {}
        if 'boundary' in kwargs:
            kwargs['boundary'] = _boundary_dict(kwargs['boundary'])
        return cls(**kwargs)

    @classmethod
    def from_args(cls, args, base: Optional["SimConfig"] = None) -> "SimConfig":
        """Overlay argparse values that were actually given (not None) onto `base`."""
        cfg = base if base is not None else cls()
        for f in fields(cls):
            name = f.name
            value = getattr(args, name, None)
            if value is None:
                continue
            if name == 'target':
                value = tuple(value)
            setattr(cfg, name, value)
        return cfg


def _build(kind, data):
    if isinstance(data, kind):
        return data
    if not isinstance(data, Mapping):
        raise ValueError(f"{kind.__name__} must be a mapping, got {type(data).__name__}")
    known = {f.name for f in fields(kind)}
    unknown = set(data) - known
    if unknown:
        raise ValueError(f"Unknown {kind.__name__} keys: {sorted(unknown)}")
    return kind(**data)


def _boundary_dict(data):
    if not isinstance(data, Mapping) or 'type' not in data:
        raise ValueError(f"boundary must be a mapping with a 'type', got {data!r}")
    unknown = set(data) - {'type', 'params'}
    if unknown:
        raise ValueError(f"Unknown boundary keys: {sorted(unknown)}")
    return {'type': data['type'], 'params': dict(data.get('params') or {})}
