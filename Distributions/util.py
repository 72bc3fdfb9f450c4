"""Sample statistics and the random source threaded through every sampler."""

from typing import Optional, Sequence

import numpy as np


def ensure_rng(rng: Optional[np.random.Generator] = None) -> np.random.Generator:
    """Use the caller's generator, or a fresh unseeded one."""
    if rng is None:
        return np.random.default_rng()
    return rng


def total(x: Sequence[float]) -> float:
    return float(np.sum(x)) if len(x) else 0.0


def mean(x: Sequence[float]) -> float:
    if len(x) == 0:
        return 0.0
    return float(np.mean(x))


def variance(x: Sequence[float]) -> float:
    """Unbiased sample variance (n - 1 denominator)."""
    if len(x) < 2:
        return 0.0
    return float(np.var(x, ddof=1))


def minimum(x: Sequence[float]) -> float:
    if len(x) == 0:
        return 0.0
    return float(np.min(x))


def maximum(x: Sequence[float]) -> float:
    if len(x) == 0:
        return 0.0
    return float(np.max(x))


def min_gt(x: Sequence[float], bound: float) -> float:
    """The smallest value strictly greater than *bound*, else *bound*."""
    arr = np.asarray(x, dtype=float)
    above = arr[arr > bound]
    if above.size == 0:
        return float(bound)
    return float(above.min())


def max_lt(x: Sequence[float], bound: float) -> float:
    """The largest value strictly less than *bound*, else *bound*."""
    arr = np.asarray(x, dtype=float)
    below = arr[arr < bound]
    if below.size == 0:
        return float(bound)
    return float(below.max())
