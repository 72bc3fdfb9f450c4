"""
A generic noisy channel: given a message X, it emits a random variable Y
derived from X according to the channel's parameters.
"""

from abc import ABC, abstractmethod
from typing import List, Optional, Sequence

import numpy as np

from Distributions.util import ensure_rng
from FactorGraph_EM.factor import Factor
from FactorGraph_EM.variable import DiscreteRV


class Channel(ABC):
    @abstractmethod
    def sample(self, input: DiscreteRV, rng: Optional[np.random.Generator] = None) -> DiscreteRV:
        """Send an input through the channel and sample an output."""

    @abstractmethod
    def factor(self, input: DiscreteRV, output: DiscreteRV) -> Factor:
        """A factor relating an input variable to one observed output."""

    def sample_n(self, inputs: Sequence[DiscreteRV],
                 rng: Optional[np.random.Generator] = None) -> List[DiscreteRV]:
        rng = ensure_rng(rng)
        return [self.sample(rv, rng) for rv in inputs]

    def factors(self, input: DiscreteRV, outputs: Sequence[DiscreteRV]) -> List[Factor]:
        return [self.factor(input, rv) for rv in outputs]
