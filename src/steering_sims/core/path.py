# src/steering_sims/core/path.py

from __future__ import annotations
from dataclasses import dataclass
import logging
import numpy as np

from steering_sims.utils.physics_utils import normalize_or_zero
from .steering import PREDICT_DISTANCE, SLOW_RADIUS, Steerable, predict_point, seek

logger = logging.getLogger(__name__)

LOOKAHEAD = 10.0


def project_onto_line(p: np.ndarray, a: np.ndarray, b: np.ndarray) -> np.ndarray:
    """Orthogonal projection of p onto the infinite line through a and b."""
    ab = normalize_or_zero(b - a)
    return a + ab * float(np.dot(p - a, ab))


@dataclass(frozen=True, eq=False)
class PathProjection:
    segment: int            # index of waypoint a; the segment is (a, a + 1)
    point: np.ndarray       # projection used for steering (may be waypoint b)
    distance: float         # from the predicted point to `point`


@dataclass(frozen=True, eq=False)
class Path:
    """Polyline of >= 2 waypoints with a corridor of half-width `radius`."""
    points: np.ndarray      # (n, 2)
    radius: float

    def __post_init__(self):
        pts = np.array(self.points, dtype=float)
        if pts.ndim != 2 or pts.shape[1] != 2:
            raise ValueError(f"path waypoints must have shape (n, 2), got {pts.shape}")
        if len(pts) < 2:
            raise ValueError(f"a path needs at least 2 waypoints, got {len(pts)}")
        if self.radius < 0:
            raise ValueError(f"path radius must be non-negative, got {self.radius}")
        pts.setflags(write=False)
        object.__setattr__(self, "points", pts)
        object.__setattr__(self, "radius", float(self.radius))
        logger.debug("path with %d waypoints, radius %g", len(pts), self.radius)

    @property
    def n_segments(self) -> int:
        return len(self.points) - 1

    def segment_projection(self, p: np.ndarray, i: int) -> np.ndarray:
        """
        Project p onto segment i.

        When the projection leaves the segment along its dominant axis it is
        replaced by the segment's end waypoint b, not the nearest point.
        """
        a, b = self.points[i], self.points[i + 1]
        proj = project_onto_line(p, a, b)
        d = np.abs(b - a)
        axis = 0 if d[0] >= d[1] else 1
        lo, hi = min(a[axis], b[axis]), max(a[axis], b[axis])
        if proj[axis] < lo or proj[axis] > hi:
            return b.copy()
        return proj

    def closest(self, p) -> PathProjection:
        p = np.asarray(p, dtype=float)
        best: PathProjection | None = None
        for i in range(self.n_segments):
            proj = self.segment_projection(p, i)
            dist = float(np.linalg.norm(p - proj))
            if best is None or dist < best.distance:
                best = PathProjection(segment=i, point=proj, distance=dist)
        return best


def follow_path(
    agent: Steerable,
    path: Path,
    predict_distance: float = PREDICT_DISTANCE,
    lookahead: float = LOOKAHEAD,
    slow_radius: float = SLOW_RADIUS,
) -> np.ndarray:
    """Seek back toward the path when the predicted point leaves its corridor."""
    predicted = predict_point(agent, predict_distance)
    hit = path.closest(predicted)
    if hit.distance <= path.radius:
        return np.zeros(2)

    a, b = path.points[hit.segment], path.points[hit.segment + 1]
    target = hit.point + normalize_or_zero(b - a) * lookahead
    return seek(agent, target, slow_radius)
