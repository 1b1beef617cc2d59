# src/steering_sims/core/flocking.py

"""
Separation, alignment and cohesion against a prior-tick snapshot.

The agent being steered is addressed by its row `index` in the snapshot, so
nothing here ever sees another agent's in-progress state.
"""

from __future__ import annotations
from typing import List
import numpy as np

from steering_sims.utils.physics_utils import set_length
from .neighbors import BruteForceNeighbors, NeighborQuery
from .snapshot import PopulationSnapshot
from .steering import SLOW_RADIUS, seek, steer_towards

SEPARATION_WEIGHT = 1.5
ALIGNMENT_WEIGHT = 1.0
COHESION_WEIGHT = 1.0

_default_neighbors = BruteForceNeighbors()


def separation(
    snapshot: PopulationSnapshot,
    index: int,
    desired_sep: float,
    neighbors: NeighborQuery | None = None,
) -> np.ndarray:
    me = snapshot.agent(index)
    found = (neighbors or _default_neighbors).within(snapshot, index, desired_sep)

    total = np.zeros(2)
    count = 0
    for j in found:
        diff = me.pos - snapshot.positions[j]
        d = float(np.linalg.norm(diff))
        if d <= 0.0:
            # coincident agents have no direction to push apart along
            continue
        total = total + (diff / d) / d
        count += 1

    if count == 0:
        return np.zeros(2)
    total = total / count
    if not np.any(total):
        return np.zeros(2)
    return steer_towards(me, set_length(total, me.max_speed))


def alignment(
    snapshot: PopulationSnapshot,
    index: int,
    neighbor_dist: float,
    neighbors: NeighborQuery | None = None,
) -> np.ndarray:
    me = snapshot.agent(index)
    found = (neighbors or _default_neighbors).within(snapshot, index, neighbor_dist)
    if len(found) == 0:
        return np.zeros(2)

    total = np.zeros(2)
    for j in found:
        total = total + snapshot.velocities[j]
    return steer_towards(me, set_length(total / len(found), me.max_speed))


def cohesion(
    snapshot: PopulationSnapshot,
    index: int,
    neighbor_dist: float,
    neighbors: NeighborQuery | None = None,
    slow_radius: float = SLOW_RADIUS,
) -> np.ndarray:
    me = snapshot.agent(index)
    found = (neighbors or _default_neighbors).within(snapshot, index, neighbor_dist)
    if len(found) == 0:
        return np.zeros(2)

    total = np.zeros(2)
    for j in found:
        total = total + snapshot.positions[j]
    return seek(me, total / len(found), slow_radius)


def flock(
    snapshot: PopulationSnapshot,
    index: int,
    desired_sep: float,
    neighbor_dist: float,
    neighbors: NeighborQuery | None = None,
    weights: tuple[float, float, float] = (SEPARATION_WEIGHT, ALIGNMENT_WEIGHT, COHESION_WEIGHT),
    slow_radius: float = SLOW_RADIUS,
) -> List[np.ndarray]:
    """
    Weighted separation, alignment and cohesion, in that order.

    Returned as separate forces: the caller applies each one on its own so
    they are never summed before being clamped.
    """
    w_sep, w_ali, w_coh = weights
    return [
        separation(snapshot, index, desired_sep, neighbors) * w_sep,
        alignment(snapshot, index, neighbor_dist, neighbors) * w_ali,
        cohesion(snapshot, index, neighbor_dist, neighbors, slow_radius) * w_coh,
    ]
