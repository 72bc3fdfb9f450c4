"""
Binary symmetric channel (BSC) with noise rate p: it takes a "true" boolean
X as input and outputs X with probability (1 - p) and !X with probability p.

We send many X values across many such channels, and infer both their noise
rates and the values of the inputs from the rate of agreement between the
channels.
"""

from typing import List, Optional

import numpy as np

from Channels.channel import Channel
from Distributions.errors import InvalidProbabilityError
from Distributions.space import BOOLEAN_SPACE, UNIT_INTERVAL
from Distributions.util import ensure_rng
from FactorGraph_EM.factor import Factor
from FactorGraph_EM.variable import ContinuousRV, DiscreteRV, RandomVariable, VariableArena


def flip(input: DiscreteRV, flipped: bool) -> DiscreteRV:
    """A new boolean variable next to *input*, negated if *flipped*."""
    x = BOOLEAN_SPACE.bool_value(input.outcome())
    return DiscreteRV(BOOLEAN_SPACE.bool_outcome(x != flipped), BOOLEAN_SPACE, input.arena)


class BSC(Channel):
    def __init__(self, noise_rate: float, arena: Optional[VariableArena] = None,
                 name: str = ""):
        if noise_rate < 0 or noise_rate > 1:
            raise InvalidProbabilityError(noise_rate)
        self.noise_rate = ContinuousRV(noise_rate, UNIT_INTERVAL, arena, name=name)

    def __repr__(self):
        return f"BSC(noise={self.noise_rate.val():.4f})"

    def sample(self, input: DiscreteRV, rng: Optional[np.random.Generator] = None) -> DiscreteRV:
        rng = ensure_rng(rng)
        return flip(input, rng.random() < self.noise_rate.val())

    def factor(self, input: DiscreteRV, output: DiscreteRV) -> "BSCFactor":
        return BSCFactor(input, output, self.noise_rate)


class BSCFactor(Factor):
    """Relates an input to its output as perturbed by one noise rate."""

    def __init__(self, input: DiscreteRV, output: DiscreteRV, noise_rate: ContinuousRV):
        self.input = input
        self.output = output
        self.noise_rate = noise_rate

    def __repr__(self):
        return f"BSCFactor({self.input!r} -> {self.output!r}, {self.noise_rate!r})"

    def output_matches_input(self) -> bool:
        return self.input.equals(self.output)

    def adjacent(self) -> List[RandomVariable]:
        return [self.output, self.input, self.noise_rate]

    def score(self) -> float:
        if self.output_matches_input():
            return 1 - self.noise_rate.val()
        return self.noise_rate.val()
