# src/steering_sims/core/__init__.py

from .config import AgentSpec, EnvironmentConfig, SimConfig
from .agents import Agent, create_agent
from .steering import seek, flee, pursue, wander, steer_towards, predict_point
from .snapshot import AgentSnapshot, PopulationSnapshot
from .neighbors import NeighborQuery, BruteForceNeighbors, KDTreeNeighbors
from .flocking import separation, alignment, cohesion, flock
from .flow_field import FlowField, noise_angles, uniform_angles, angles_from
from .path import Path, PathProjection, follow_path, project_onto_line
from .environment import Environment
from .behaviors import (
    Behavior,
    StepContext,
    SeekTarget,
    FleeTarget,
    PursueAgent,
    Wander,
    Flock,
    FollowFlowField,
    FollowPath,
)
from .boundary import Boundary, BoxBoundary
from .recording import AgentStateSnapshot, AgentStaticSnapshot, FrameSnapshot, SimulationRecording
from .population import Population, run_simulation

__all__ = [
    "SimConfig",
    "AgentSpec",
    "EnvironmentConfig",
    "Agent",
    "create_agent",
    "seek",
    "flee",
    "pursue",
    "wander",
    "steer_towards",
    "predict_point",
    "AgentSnapshot",
    "PopulationSnapshot",
    "NeighborQuery",
    "BruteForceNeighbors",
    "KDTreeNeighbors",
    "separation",
    "alignment",
    "cohesion",
    "flock",
    "FlowField",
    "noise_angles",
    "uniform_angles",
    "angles_from",
    "Path",
    "PathProjection",
    "follow_path",
    "project_onto_line",
    "Environment",
    "Behavior",
    "StepContext",
    "SeekTarget",
    "FleeTarget",
    "PursueAgent",
    "Wander",
    "Flock",
    "FollowFlowField",
    "FollowPath",
    "Boundary",
    "BoxBoundary",
    "AgentStateSnapshot",
    "AgentStaticSnapshot",
    "FrameSnapshot",
    "SimulationRecording",
    "Population",
    "run_simulation",
]
