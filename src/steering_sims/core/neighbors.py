# src/steering_sims/core/neighbors.py

from __future__ import annotations
from abc import ABC, abstractmethod
import numpy as np
from scipy.spatial import cKDTree

from .snapshot import PopulationSnapshot


class NeighborQuery(ABC):
    """
    "Given the full agent set, return those within radius r."

    Results are indices into the snapshot, excluding `index` itself, ordered by
    agent id so that downstream sums do not depend on population order.
    """

    @abstractmethod
    def within(self, snapshot: PopulationSnapshot, index: int, radius: float) -> np.ndarray:
        ...

    @staticmethod
    def _canonical(snapshot: PopulationSnapshot, idx: np.ndarray, index: int) -> np.ndarray:
        idx = idx[idx != index]
        if idx.size == 0 or any(snapshot.ids[i] is None for i in idx):
            return np.sort(idx)
        keys = np.array([snapshot.ids[i] for i in idx])
        return idx[np.argsort(keys, kind="stable")]


class BruteForceNeighbors(NeighborQuery):
    """O(n^2) distance scan. Fine for a few hundred agents."""

    def within(self, snapshot: PopulationSnapshot, index: int, radius: float) -> np.ndarray:
        if len(snapshot) == 0 or radius <= 0:
            return np.empty(0, dtype=int)
        d = np.linalg.norm(snapshot.positions - snapshot.positions[index], axis=1)
        return self._canonical(snapshot, np.flatnonzero(d < radius), index)


class KDTreeNeighbors(NeighborQuery):
    """
    Same contract as BruteForceNeighbors, backed by scipy's cKDTree.

    The tree is built lazily once per snapshot object and reused for every
    query against it.
    """

    def __init__(self):
        self._snapshot: PopulationSnapshot | None = None
        self._tree: cKDTree | None = None

    def _tree_for(self, snapshot: PopulationSnapshot) -> cKDTree:
        if self._snapshot is not snapshot:
            self._tree = cKDTree(snapshot.positions)
            self._snapshot = snapshot
        return self._tree

    def within(self, snapshot: PopulationSnapshot, index: int, radius: float) -> np.ndarray:
        if len(snapshot) == 0 or radius <= 0:
            return np.empty(0, dtype=int)
        tree = self._tree_for(snapshot)
        hits = np.asarray(tree.query_ball_point(snapshot.positions[index], r=radius), dtype=int)
        if hits.size:
            # query_ball_point is inclusive of r; the contract is strict
            d = np.linalg.norm(snapshot.positions[hits] - snapshot.positions[index], axis=1)
            hits = hits[d < radius]
        return self._canonical(snapshot, hits, index)
