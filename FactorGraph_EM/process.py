"""
Stochastic processes: infinite sequences of random variables drawn i.i.d.
from one distribution whose parameters are themselves random variables.
"""

from typing import List, Optional, Sequence

import numpy as np

from Distributions.bernoulli import Bernoulli
from Distributions.dist import Dist
from Distributions.errors import InvalidProbabilityError
from Distributions.space import UNIT_INTERVAL
from Distributions.util import ensure_rng
from FactorGraph_EM.factor import DistFactor
from FactorGraph_EM.variable import ContinuousRV, DiscreteRV, RandomVariable, VariableArena


class IIDProcess:
    def __init__(self, params: Sequence[RandomVariable], dist: Dist,
                 arena: Optional[VariableArena] = None):
        self.params = list(params)
        self.dist = dist
        self.arena = arena if arena is not None else VariableArena()

    def _wrap(self, value) -> RandomVariable:
        if self.dist.discrete:
            return DiscreteRV(value, self.dist.space, self.arena)
        return ContinuousRV(value, self.dist.space, self.arena)

    def sample(self, rng: Optional[np.random.Generator] = None) -> RandomVariable:
        """Generate the next random variable from the process."""
        return self._wrap(self.dist.sample(rng))

    def sample_n(self, n: int, rng: Optional[np.random.Generator] = None) -> List[RandomVariable]:
        rng = ensure_rng(rng)
        return [self._wrap(v) for v in self.dist.sample_n(n, rng)]

    def factors(self, sequence: Sequence[RandomVariable]) -> List[DistFactor]:
        """One factor per variable, relating it to the process parameters."""
        return [DistFactor([rv] + self.params, self.dist) for rv in sequence]


class BernoulliProcess(IIDProcess):
    """A sequence of binary variables from the same Bernoulli distribution."""

    def __init__(self, bias: float, arena: Optional[VariableArena] = None):
        if bias < 0 or bias > 1:
            raise InvalidProbabilityError(bias)
        arena = arena if arena is not None else VariableArena()
        bias_rv = ContinuousRV(bias, UNIT_INTERVAL, arena, name="bias")
        super().__init__([bias_rv], Bernoulli(bias), arena)

    def set_bias(self, bias: float) -> None:
        self.dist.set_bias(bias)
        self.params[0].set(bias)
