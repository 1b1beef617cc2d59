# src/steering_sims/core/steering.py

"""
Reynolds-style steering behaviors.

Every function here is pure: it reads an agent-like object (anything with
``pos``, ``vel``, ``max_speed`` and ``max_force``) and returns a force of
magnitude at most ``max_force``. Applying the force is the caller's job.
"""

from __future__ import annotations
from typing import Protocol
import numpy as np

from steering_sims.utils.physics_utils import as_vec, clamp_length_max, map_range, normalize_or_zero
from steering_sims.utils.random import RandomSource

SLOW_RADIUS = 100.0
PREDICT_DISTANCE = 25.0
WANDER_RADIUS = 10.0


class Steerable(Protocol):
    pos: np.ndarray
    vel: np.ndarray
    max_speed: float
    max_force: float


def steer_towards(agent: Steerable, desired: np.ndarray) -> np.ndarray:
    """Reynolds steering: desired minus current velocity, capped at max_force."""
    return clamp_length_max(desired - agent.vel, agent.max_force)


def desired_seek_velocity(agent: Steerable, target, slow_radius: float = SLOW_RADIUS) -> np.ndarray:
    offset = as_vec(target) - agent.pos
    d = float(np.linalg.norm(offset))
    if slow_radius > 0 and d < slow_radius:
        # arrival: ramp from 0 at the target up to max_speed at slow_radius
        speed = map_range(d, 0.0, slow_radius, 0.0, agent.max_speed)
    else:
        speed = agent.max_speed
    return normalize_or_zero(offset) * speed


def seek(agent: Steerable, target, slow_radius: float = SLOW_RADIUS) -> np.ndarray:
    return steer_towards(agent, desired_seek_velocity(agent, target, slow_radius))


def flee(agent: Steerable, target) -> np.ndarray:
    desired = -normalize_or_zero(as_vec(target) - agent.pos) * agent.max_speed
    return steer_towards(agent, desired)


def pursue(agent: Steerable, target_pos, target_vel, slow_radius: float = SLOW_RADIUS) -> np.ndarray:
    # one-step lookahead; deliberately not scaled by dt
    predicted = as_vec(target_pos) + as_vec(target_vel)
    return seek(agent, predicted, slow_radius)


def predict_point(agent: Steerable, distance: float = PREDICT_DISTANCE) -> np.ndarray:
    """Point `distance` ahead along the current heading; the agent's own position when stopped."""
    return agent.pos + normalize_or_zero(agent.vel) * distance


def wander(
    agent: Steerable,
    rng: RandomSource,
    predict_distance: float = PREDICT_DISTANCE,
    wander_radius: float = WANDER_RADIUS,
    slow_radius: float = SLOW_RADIUS,
) -> np.ndarray:
    """Seek a random point on a circle placed ahead of the agent."""
    theta = float(rng.uniform(0.0, 2.0 * np.pi))
    target = predict_point(agent, predict_distance) + wander_radius * np.array([np.cos(theta), np.sin(theta)])
    return seek(agent, target, slow_radius)
