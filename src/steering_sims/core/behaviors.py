# src/steering_sims/core/behaviors.py

"""
Force sources a Population asks, agent by agent, during the compute phase.

A behavior sees only the StepContext (prior-tick snapshot plus read-only
environment) and returns a list of forces. Each force is applied with its own
`apply_force` call, in list order.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List
import numpy as np

from steering_sims.utils.physics_utils import as_vec
from steering_sims.utils.random import RandomSource
from .environment import Environment
from .flocking import ALIGNMENT_WEIGHT, COHESION_WEIGHT, SEPARATION_WEIGHT, flock
from .neighbors import NeighborQuery
from .path import follow_path
from .snapshot import PopulationSnapshot
from .steering import flee, pursue, seek, wander


@dataclass
class StepContext:
    snapshot: PopulationSnapshot
    env: Environment
    rng: RandomSource
    neighbors: NeighborQuery
    target: np.ndarray | None = None   # shared goal, e.g. the pointer position
    time: float = 0.0


class Behavior(ABC):
    weight: float = 1.0

    @abstractmethod
    def forces(self, ctx: StepContext, index: int) -> List[np.ndarray]:
        ...


class SeekTarget(Behavior):
    """Seek a fixed target, or the context's shared target when none is set."""

    def __init__(self, target=None, slow_radius: float | None = None, weight: float = 1.0):
        self.target = None if target is None else as_vec(target)
        self.slow_radius = slow_radius
        self.weight = weight

    def forces(self, ctx: StepContext, index: int) -> List[np.ndarray]:
        target = self.target if self.target is not None else ctx.target
        if target is None:
            return []
        slow = ctx.env.slow_radius if self.slow_radius is None else self.slow_radius
        return [seek(ctx.snapshot.agent(index), target, slow) * self.weight]


class FleeTarget(Behavior):
    """Flee a point while it is closer than `panic_distance`."""

    def __init__(self, target=None, panic_distance: float = float("inf"), weight: float = 1.0):
        self.target = None if target is None else as_vec(target)
        self.panic_distance = panic_distance
        self.weight = weight

    def forces(self, ctx: StepContext, index: int) -> List[np.ndarray]:
        target = self.target if self.target is not None else ctx.target
        if target is None:
            return []
        me = ctx.snapshot.agent(index)
        if np.linalg.norm(target - me.pos) >= self.panic_distance:
            return []
        return [flee(me, target) * self.weight]


class PursueAgent(Behavior):
    """Chase another agent of the population, leading it by one step of its velocity."""

    def __init__(self, quarry_id: int, slow_radius: float | None = None, weight: float = 1.0):
        self.quarry_id = quarry_id
        self.slow_radius = slow_radius
        self.weight = weight

    def forces(self, ctx: StepContext, index: int) -> List[np.ndarray]:
        snap = ctx.snapshot
        if self.quarry_id not in snap.ids or snap.ids[index] == self.quarry_id:
            return []
        j = snap.index_of(self.quarry_id)
        slow = ctx.env.slow_radius if self.slow_radius is None else self.slow_radius
        return [pursue(snap.agent(index), snap.positions[j], snap.velocities[j], slow) * self.weight]


class Wander(Behavior):
    def __init__(
        self,
        predict_distance: float | None = None,
        wander_radius: float | None = None,
        weight: float = 1.0,
    ):
        self.predict_distance = predict_distance
        self.wander_radius = wander_radius
        self.weight = weight

    def forces(self, ctx: StepContext, index: int) -> List[np.ndarray]:
        env = ctx.env
        force = wander(
            ctx.snapshot.agent(index),
            ctx.rng,
            predict_distance=env.predict_distance if self.predict_distance is None else self.predict_distance,
            wander_radius=env.wander_radius if self.wander_radius is None else self.wander_radius,
            slow_radius=env.slow_radius,
        )
        return [force * self.weight]


class Flock(Behavior):
    """
    Separation, alignment and cohesion as three separate forces.

    `weight` scales all three on top of the per-component weights.
    """

    def __init__(
        self,
        desired_separation: float | None = None,
        neighbor_distance: float | None = None,
        separation_weight: float = SEPARATION_WEIGHT,
        alignment_weight: float = ALIGNMENT_WEIGHT,
        cohesion_weight: float = COHESION_WEIGHT,
        weight: float = 1.0,
    ):
        self.desired_separation = desired_separation
        self.neighbor_distance = neighbor_distance
        self.weight = weight
        self.weights = (separation_weight * weight, alignment_weight * weight, cohesion_weight * weight)

    def forces(self, ctx: StepContext, index: int) -> List[np.ndarray]:
        env = ctx.env
        return flock(
            ctx.snapshot,
            index,
            desired_sep=env.desired_separation if self.desired_separation is None else self.desired_separation,
            neighbor_dist=env.neighbor_distance if self.neighbor_distance is None else self.neighbor_distance,
            neighbors=ctx.neighbors,
            weights=self.weights,
            slow_radius=env.slow_radius,
        )


class FollowFlowField(Behavior):
    def __init__(self, weight: float = 1.0):
        self.weight = weight

    def forces(self, ctx: StepContext, index: int) -> List[np.ndarray]:
        if ctx.env.flow_field is None:
            return []
        return [ctx.env.flow_field.follow(ctx.snapshot.agent(index)) * self.weight]


class FollowPath(Behavior):
    def __init__(
        self,
        predict_distance: float | None = None,
        lookahead: float | None = None,
        weight: float = 1.0,
    ):
        self.predict_distance = predict_distance
        self.lookahead = lookahead
        self.weight = weight

    def forces(self, ctx: StepContext, index: int) -> List[np.ndarray]:
        env = ctx.env
        if env.path is None:
            return []
        force = follow_path(
            ctx.snapshot.agent(index),
            env.path,
            predict_distance=env.predict_distance if self.predict_distance is None else self.predict_distance,
            lookahead=env.lookahead if self.lookahead is None else self.lookahead,
            slow_radius=env.slow_radius,
        )
        return [force * self.weight]
