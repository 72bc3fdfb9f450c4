from typing import Sequence

from Distributions.dist import DenseMutableDiscreteDist
from Distributions.errors import InvalidProbabilityError
from Distributions.space import BOOLEAN_SPACE, BooleanSpace


class Bernoulli(DenseMutableDiscreteDist):
    """
    A Bernoulli distribution over the boolean space.
    The single parameter is the bias, Pr(X = 1).
    """

    def __init__(self, bias: float):
        super().__init__(BOOLEAN_SPACE)
        self.set_bias(bias)

    def __repr__(self):
        return f"Bernoulli(bias={self.bias:.3f})"

    @property
    def bspace(self) -> BooleanSpace:
        return self.space

    @property
    def bias(self) -> float:
        return self.prob(1)

    def set_bias(self, bias: float) -> None:
        if bias < 0 or bias > 1:
            raise InvalidProbabilityError(bias)
        self.set_prob(0, 1 - bias)
        self.set_prob(1, bias)
        self.normalize()

    def num_params(self) -> int:
        return 1

    def score(self, vars: Sequence[float], params: Sequence[float]) -> float:
        bias = params[0]
        if bias < 0 or bias > 1:
            raise InvalidProbabilityError(bias)
        return bias if self.bspace.outcome(vars[0]) == 1 else 1 - bias

    def _apply_params(self, values: Sequence[float]) -> None:
        self.set_bias(values[0])

    def cdf(self, val: float) -> float:
        if val < 0:
            return 0.0
        if val < 1:
            return self.prob(0)
        return 1.0

    def mean(self) -> float:
        return self.prob(1)

    def mode(self) -> float:
        if self.prob(0) > self.prob(1):
            return self.bspace.f64_value(0)
        return self.bspace.f64_value(1)

    def variance(self) -> float:
        return self.prob(0) * self.prob(1)
