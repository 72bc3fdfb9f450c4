"""
Factors: scoring functions over a fixed tuple of random variables.

A factor's ``score()`` is a non-negative likelihood (never a log); the
factor graph takes the natural log when it aggregates.
"""

from abc import ABC, abstractmethod
from typing import List, Sequence

from Distributions.dist import Dist
from Distributions.errors import FactorArityError
from FactorGraph_EM.variable import RandomVariable


class Factor(ABC):
    @abstractmethod
    def adjacent(self) -> List[RandomVariable]:
        """The adjacent random variables, in a fixed order."""

    @abstractmethod
    def score(self) -> float:
        """The current score, given the values of the adjacent variables."""


class DistFactor(Factor):
    """
    Scores variables with a probability distribution.

    The first ``dist.num_vars()`` adjacent variables are the free variables;
    the remaining ``dist.num_params()`` are the distribution's parameters.
    """

    def __init__(self, vars: Sequence[RandomVariable], dist: Dist):
        num_vars, num_params = dist.num_vars(), dist.num_params()
        if len(vars) != num_vars + num_params:
            raise FactorArityError(num_vars, num_params, len(vars))
        self.vars = list(vars)
        self.dist = dist

    def __repr__(self):
        return f"DistFactor({self.dist!r}, {self.vars})"

    def adjacent(self) -> List[RandomVariable]:
        return self.vars

    def score(self) -> float:
        n = self.dist.num_vars()
        values = [rv.val() for rv in self.vars]
        return self.dist.score(values[:n], values[n:])


class ConstFactor(Factor):
    """A factor which always returns the same score."""

    def __init__(self, vars: Sequence[RandomVariable], value: float):
        self.vars = list(vars)
        self.value = value

    def adjacent(self) -> List[RandomVariable]:
        return self.vars

    def score(self) -> float:
        return self.value
