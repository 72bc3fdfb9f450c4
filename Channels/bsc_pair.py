"""
Two stacked binary symmetric channels with independent noise rates.  Each
layer flips independently; the output is flipped iff exactly one layer
flipped, so the pair behaves like a single BSC with rate

    n1 * (1 - n2) + (1 - n1) * n2
"""

from typing import List, Optional

import numpy as np

from Channels.bsc import flip
from Channels.channel import Channel
from Distributions.errors import InvalidProbabilityError
from Distributions.space import UNIT_INTERVAL
from Distributions.util import ensure_rng
from FactorGraph_EM.factor import Factor
from FactorGraph_EM.variable import ContinuousRV, DiscreteRV, RandomVariable, VariableArena


class BSCPair(Channel):
    def __init__(self, noise_rate1: float, noise_rate2: float,
                 arena: Optional[VariableArena] = None):
        for rate in (noise_rate1, noise_rate2):
            if rate < 0 or rate > 1:
                raise InvalidProbabilityError(rate)
        self.noise_rate1 = ContinuousRV(noise_rate1, UNIT_INTERVAL, arena)
        self.noise_rate2 = ContinuousRV(noise_rate2, UNIT_INTERVAL, self.noise_rate1.arena)

    @classmethod
    def from_rates(cls, noise_rate1: ContinuousRV, noise_rate2: ContinuousRV) -> "BSCPair":
        """A pair over existing rate variables, shared with other pairs."""
        pair = cls.__new__(cls)
        pair.noise_rate1 = noise_rate1
        pair.noise_rate2 = noise_rate2
        return pair

    def __repr__(self):
        return (f"BSCPair(noise1={self.noise_rate1.val():.4f}, "
                f"noise2={self.noise_rate2.val():.4f})")

    def sample(self, input: DiscreteRV, rng: Optional[np.random.Generator] = None) -> DiscreteRV:
        rng = ensure_rng(rng)
        flip1 = rng.random() < self.noise_rate1.val()
        flip2 = rng.random() < self.noise_rate2.val()
        return flip(input, flip1 != flip2)

    def factor(self, input: DiscreteRV, output: DiscreteRV) -> "BSCPairFactor":
        return BSCPairFactor(input, output, self.noise_rate1, self.noise_rate2)


class BSCPairFactor(Factor):
    def __init__(self, input: DiscreteRV, output: DiscreteRV,
                 noise_rate1: ContinuousRV, noise_rate2: ContinuousRV):
        self.input = input
        self.output = output
        self.noise_rate1 = noise_rate1
        self.noise_rate2 = noise_rate2

    def output_matches_input(self) -> bool:
        return self.input.equals(self.output)

    def adjacent(self) -> List[RandomVariable]:
        return [self.output, self.input, self.noise_rate1, self.noise_rate2]

    def score(self) -> float:
        n1, n2 = self.noise_rate1.val(), self.noise_rate2.val()
        if self.output_matches_input():
            # an even number of flips
            return n1 * n2 + (1 - n1) * (1 - n2)
        return (1 - n1) * n2 + n1 * (1 - n2)
