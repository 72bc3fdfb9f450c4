import math
from typing import Optional, Sequence

import numpy as np

from Distributions.dist import ContinuousDist
from Distributions.errors import StatsError
from Distributions.space import ALL_REALS, RealSpace
from Distributions.util import ensure_rng


def _normal_pdf(val: float, mu: float, sigma: float) -> float:
    return (math.exp(-((val - mu) ** 2) / (2 * sigma * sigma))
            / (sigma * math.sqrt(2 * math.pi)))


class Normal(ContinuousDist):
    """A Normal distribution with mean mu and standard deviation sigma."""

    def __init__(self, mu: float = 0.0, sigma: float = 1.0):
        if sigma <= 0:
            raise StatsError(f"Invalid Normal standard deviation {sigma:f}")
        self.mu = mu
        self.sigma = sigma

    def __repr__(self):
        return f"Normal(mu={self.mu:.3f}, sigma={self.sigma:.3f})"

    @property
    def space(self) -> RealSpace:
        return ALL_REALS

    def num_vars(self) -> int:
        return 1

    def num_params(self) -> int:
        return 2

    def score(self, vars: Sequence[float], params: Sequence[float]) -> float:
        return _normal_pdf(vars[0], params[0], params[1])

    def _apply_params(self, values: Sequence[float]) -> None:
        self.mu, self.sigma = float(values[0]), float(values[1])

    def pdf(self, val: float) -> float:
        return _normal_pdf(val, self.mu, self.sigma)

    def cdf(self, val: float) -> float:
        return (1 + math.erf((val - self.mu) / (self.sigma * math.sqrt(2)))) / 2

    def mean(self) -> float:
        return self.mu

    def mode(self) -> float:
        return self.mu

    def variance(self) -> float:
        return self.sigma * self.sigma

    def sample(self, rng: Optional[np.random.Generator] = None) -> float:
        return float(ensure_rng(rng).normal(self.mu, self.sigma))
