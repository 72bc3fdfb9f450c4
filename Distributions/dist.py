"""
Probability distributions over sample spaces.

A distribution holds its own parameters, which can be overwritten in place
with ``set_params``.  ``score(vars, params)`` evaluates the density (or mass)
of ``vars`` under an explicit parameter vector instead, which is how factors
score parameter variables that live elsewhere in a factor graph.

Every variant is either discrete or continuous; the ``discrete`` class flag
is the capability table callers consult instead of inspecting types.
"""

import math
from abc import ABC, abstractmethod
from typing import List, Optional, Sequence

import numpy as np

from Distributions.errors import (InvalidProbabilityError, NotNormalizedError,
                                  ParameterCountError, UnsupportedDistributionError,
                                  ZeroProbabilityError)
from Distributions.space import DiscreteRealSpace, Outcome, RealSpace, Space
from Distributions.util import ensure_rng


class Dist(ABC):
    discrete: bool = False

    @property
    @abstractmethod
    def space(self) -> Space:
        pass

    @abstractmethod
    def score(self, vars: Sequence[float], params: Sequence[float]) -> float:
        """Density or mass of *vars* under the parameters *params*."""

    @abstractmethod
    def num_vars(self) -> int:
        pass

    @abstractmethod
    def num_params(self) -> int:
        pass

    @abstractmethod
    def _apply_params(self, values: Sequence[float]) -> None:
        pass

    def set_params(self, values: Sequence[float]) -> None:
        """Overwrite the distribution parameters in place."""
        if len(values) != self.num_params():
            raise ParameterCountError(self.num_params(), len(values))
        self._apply_params(values)

    def sample(self, rng: Optional[np.random.Generator] = None):
        raise UnsupportedDistributionError(self)

    def sample_n(self, n: int, rng: Optional[np.random.Generator] = None) -> list:
        rng = ensure_rng(rng)
        return [self.sample(rng) for _ in range(n)]


class ContinuousDist(Dist):
    """A distribution over a subset of the reals."""

    @property
    @abstractmethod
    def space(self) -> RealSpace:
        pass

    @abstractmethod
    def pdf(self, val: float) -> float:
        pass

    @abstractmethod
    def cdf(self, val: float) -> float:
        """Pr(X <= val)."""

    @abstractmethod
    def mean(self) -> float:
        pass

    @abstractmethod
    def mode(self) -> float:
        pass

    @abstractmethod
    def variance(self) -> float:
        pass

    def prob(self, lo: float, hi: float) -> float:
        """Probability of the interval [lo, hi]."""
        return self.cdf(hi) - self.cdf(lo)

    def lg_prob(self, lo: float, hi: float) -> float:
        """Base-2 log probability of the interval [lo, hi]."""
        return math.log2(self.prob(lo, hi))


class DiscreteDist(Dist):
    discrete = True

    @property
    @abstractmethod
    def space(self) -> DiscreteRealSpace:
        pass

    @abstractmethod
    def prob(self, outcome: Outcome) -> float:
        pass

    def lg_prob(self, outcome: Outcome) -> float:
        """Base-2 log probability of an outcome."""
        return math.log2(self.prob(outcome))

    def sample(self, rng: Optional[np.random.Generator] = None) -> Outcome:
        probs = np.array([self.prob(i) for i in range(self.space.size())])
        cumulative = np.cumsum(probs)
        u = ensure_rng(rng).random() * cumulative[-1]
        idx = int(np.searchsorted(cumulative, u, side="right"))
        return min(idx, len(probs) - 1)


class DenseMutableDiscreteDist(DiscreteDist):
    """
    A mutable discrete distribution storing a dense probability vector.

    Weights may be assigned unnormalized with ``set_weight``; the
    distribution must then be normalized before any probability is read.
    As a factor, it scores one outcome against a full probability vector.
    """

    def __init__(self, space: DiscreteRealSpace):
        self._space = space
        self._weights = np.zeros(space.size(), dtype=float)
        self._normalized = False

    @property
    def space(self) -> DiscreteRealSpace:
        return self._space

    @property
    def weights(self) -> np.ndarray:
        return self._weights.copy()

    def num_vars(self) -> int:
        return 1

    def num_params(self) -> int:
        return self._space.size()

    def score(self, vars: Sequence[float], params: Sequence[float]) -> float:
        return params[self._space.outcome(vars[0])]

    def _apply_params(self, values: Sequence[float]) -> None:
        for outcome, prob in enumerate(values):
            self.set_prob(outcome, prob)
        self.normalize()

    def prob(self, outcome: Outcome) -> float:
        if not self._normalized:
            raise NotNormalizedError()
        self._space.check(outcome)
        return float(self._weights[outcome])

    def set_prob(self, outcome: Outcome, prob: float) -> None:
        self._space.check(outcome)
        if prob < 0 or prob > 1:
            raise InvalidProbabilityError(prob)
        self._weights[outcome] = prob
        self._normalized = False

    def set_weight(self, outcome: Outcome, weight: float) -> None:
        """Set the unnormalized mass of an outcome."""
        self._space.check(outcome)
        if weight < 0:
            raise InvalidProbabilityError(weight)
        self._weights[outcome] = weight
        self._normalized = False

    def reset(self) -> None:
        self._weights[:] = 0.0
        self._normalized = False

    def normalize(self) -> None:
        """Rescale the weights to sum to one."""
        total = self._weights.sum()
        if total == 0:
            raise ZeroProbabilityError()
        self._weights /= total
        self._normalized = True

    def normalize_with_extra(self, rest: float) -> None:
        """
        Spread *rest* uniformly over the outcomes that currently have zero
        weight, then normalize.
        """
        if rest != 0:
            zeros = self._weights == 0
            if zeros.any():
                self._weights[zeros] = rest / zeros.sum()
        self.normalize()

    def probs(self) -> List[float]:
        return [self.prob(i) for i in range(self._space.size())]
