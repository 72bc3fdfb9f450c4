"""
Beta distribution over the unit interval.

Besides density and moments, it carries the two updates EM needs for a
prior over noise rates:

    posterior(pos, neg)       Beta(alpha + pos, beta + neg)
    maximize_by_mom(samples)  method-of-moments fit of (alpha, beta)
"""

from typing import Optional, Sequence, Tuple

import numpy as np
from scipy import stats

from Distributions.dist import ContinuousDist
from Distributions.errors import MethodOfMomentsError, StatsError
from Distributions.gamma import rand_gamma
from Distributions.space import UNIT_INTERVAL, RealSpace
from Distributions.util import ensure_rng, mean, variance


class Beta(ContinuousDist):
    def __init__(self, alpha: float, beta: float):
        self._check(alpha, beta)
        self.alpha = alpha
        self.beta = beta

    def __repr__(self):
        return f"Beta(a={self.alpha:.2f}, b={self.beta:.2f})"

    @staticmethod
    def _check(alpha: float, beta: float) -> None:
        if alpha <= 0 or beta <= 0:
            raise StatsError(f"Invalid Beta parameters: alpha={alpha:f}, beta={beta:f}")

    @property
    def space(self) -> RealSpace:
        return UNIT_INTERVAL

    def num_vars(self) -> int:
        return 1

    def num_params(self) -> int:
        return 2

    def score(self, vars: Sequence[float], params: Sequence[float]) -> float:
        return float(stats.beta.pdf(vars[0], params[0], params[1]))

    def _apply_params(self, values: Sequence[float]) -> None:
        self._check(values[0], values[1])
        self.alpha, self.beta = float(values[0]), float(values[1])

    def pdf(self, val: float) -> float:
        return float(stats.beta.pdf(val, self.alpha, self.beta))

    def cdf(self, val: float) -> float:
        return float(stats.beta.cdf(val, self.alpha, self.beta))

    def mean(self) -> float:
        return self.alpha / (self.alpha + self.beta)

    def mode(self) -> float:
        a, b = self.alpha, self.beta
        if a > 1 and b > 1:
            return (a - 1) / (a + b - 2)
        raise StatsError(f"Beta({a:f}, {b:f}) has no mode")

    def variance(self) -> float:
        a, b = self.alpha, self.beta
        return (a * b) / ((a + b) * (a + b) * (a + b + 1))

    def sample(self, rng: Optional[np.random.Generator] = None) -> float:
        rng = ensure_rng(rng)
        x = rand_gamma(self.alpha, 1.0, 0.0, rng)
        y = rand_gamma(self.beta, 1.0, 0.0, rng)
        return x / (x + y)

    def posterior(self, pos: float, neg: float) -> "Beta":
        """The conjugate update after *pos* successes and *neg* failures."""
        return Beta(self.alpha + pos, self.beta + neg)

    @staticmethod
    def maximize_by_mom(samples: Sequence[float]) -> Tuple[float, float]:
        """
        Fit (alpha, beta) by matching the sample mean and variance:

            scale = mean * (1 - mean) / variance - 1
            alpha = mean * scale
            beta  = (1 - mean) * scale
        """
        if len(samples) < 2:
            raise MethodOfMomentsError(
                f"Method of moments needs at least 2 samples, got {len(samples)}")
        m, v = mean(samples), variance(samples)
        # round-off leaves identical samples a tiny nonzero variance
        if v <= 1e-12 * m * (1 - m):
            raise MethodOfMomentsError("Method of moments is undefined for zero variance")
        scale = m * (1 - m) / v - 1
        if scale <= 0:
            raise MethodOfMomentsError(
                f"Sample variance {v:g} is too large for a Beta with mean {m:g}")
        return m * scale, (1 - m) * scale
