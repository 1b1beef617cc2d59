from __future__ import annotations
import math
import numpy as np


def as_vec(v) -> np.ndarray:
    """Copy anything vector-like into a float array of shape (2,)."""
    return np.array(v, dtype=float).reshape(2)


def normalize_or_zero(v: np.ndarray) -> np.ndarray:
    """Unit vector along v, or the zero vector when |v| is zero."""
    v = np.asarray(v, dtype=float)
    n = float(np.linalg.norm(v))
    if n == 0.0 or not math.isfinite(n):
        return np.zeros_like(v)
    return v / n


def clamp_length_max(v: np.ndarray, max_len: float) -> np.ndarray:
    v = np.asarray(v, dtype=float)
    n = float(np.linalg.norm(v))
    if n > max_len:
        return v * (max_len / n)
    return v.copy()


def set_length(v: np.ndarray, length: float) -> np.ndarray:
    return normalize_or_zero(v) * length


def map_range(v: float, in_min: float, in_max: float, out_min: float, out_max: float) -> float:
    # arduino-style linear remap, no clamping
    return (v - in_min) * (out_max - out_min) / (in_max - in_min) + out_min


def heading(vel: np.ndarray) -> float:
    # x first: 0 rad points along +y
    return math.atan2(float(vel[0]), float(vel[1]))
