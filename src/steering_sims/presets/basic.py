from __future__ import annotations
import logging
import numpy as np

from steering_sims.core import (
    AgentSpec,
    Behavior,
    Boundary,
    BoxBoundary,
    Environment,
    NeighborQuery,
    Population,
    SimConfig,
    create_agent,
)
from steering_sims.core import behaviors, boundary, neighbors
from steering_sims.utils.random import rng
from steering_sims.utils.reflection import get_class

logger = logging.getLogger(__name__)


def _spawn(spec: AgentSpec, boundary_obj: Boundary, sigma_v: float):
    pos = spec.pos if spec.pos is not None else boundary_obj.sample_position(rng("spawn"), radius=spec.radius)
    vel = spec.vel if spec.vel is not None else rng("spawn").normal(0.0, sigma_v, size=2)
    return create_agent(
        pos=pos,
        vel=vel,
        radius=spec.radius,
        mass=spec.mass,
        max_speed=spec.max_speed,
        max_force=spec.max_force,
    )


def make_boundary(sim_config: SimConfig) -> Boundary:
    cls = get_class(sim_config.boundary['type'], boundary, base=Boundary)
    params = dict(sim_config.boundary.get('params') or {})
    if issubclass(cls, BoxBoundary):
        params.setdefault('width', sim_config.width)
        params.setdefault('height', sim_config.height)
        params.setdefault('wrap', sim_config.wrap)
    return cls(**params)


def make_population(sim_config: SimConfig) -> Population:
    behavior_list = [
        get_class(name, behaviors, base=Behavior)(**(params or {}))
        for name, params in sim_config.behaviors.items()
    ]
    logger.debug("behaviors: %s", [type(b).__name__ for b in behavior_list])
    query = get_class(sim_config.neighbor_query, neighbors, base=NeighborQuery)()
    boundary_obj = make_boundary(sim_config)

    # the flow field covers the boundary's extent
    xmin, xmax, ymin, ymax = boundary_obj.bounds()
    env_cfg = sim_config.environment
    flow_rng = rng("flow") if env_cfg.flow_seed is None else np.random.default_rng(env_cfg.flow_seed)
    env = Environment.from_config(env_cfg, xmax - xmin, ymax - ymin, flow_rng)

    population = Population(env=env, behaviors=behavior_list, boundary=boundary_obj, neighbors=query)
    population.set_target(sim_config.target)

    for spec in sim_config.agents:
        population.add_agent(_spawn(spec, boundary_obj, sim_config.sigma_v))
    for _ in range(sim_config.n_agents):
        population.add_agent(_spawn(sim_config.agent, boundary_obj, sim_config.sigma_v))

    return population
