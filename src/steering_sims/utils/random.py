# steering_sims/utils/random.py

from __future__ import annotations

from typing import Dict, Protocol
import numpy as np

_master_seed: int | None = None
_streams: Dict[str, np.random.Generator] = {}


class RandomSource(Protocol):
    """The slice of numpy's Generator API that behaviors draw from."""

    def uniform(self, low: float = 0.0, high: float = 1.0, size=None): ...


def seed_all(seed: int | None) -> None:
    """
    Reset every named stream and remember `seed` as the master seed.

    With seed=None the streams fall back to OS entropy on next use.
    """
    global _master_seed
    _master_seed = seed
    _streams.clear()


def rng(name: str = "wander") -> np.random.Generator:
    """
    Named generator shared by everyone asking for `name`.

    Streams are independent of each other, so drawing spawn positions
    does not shift the wander sequence.
    """
    stream = _streams.get(name)
    if stream is None:
        if _master_seed is None:
            stream = np.random.default_rng()
        else:
            stream = np.random.default_rng(np.random.SeedSequence([_master_seed, _stable_int(name)]))
        _streams[name] = stream
    return stream


def _stable_int(x: str) -> int:
    # FNV-1a; str hash() is salted per process
    h = 2166136261
    for b in x.encode("utf-8", errors="surrogatepass"):
        h = ((h ^ b) * 16777619) & 0xFFFFFFFF
    return h
