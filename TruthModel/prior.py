"""
Empirical-Bayes Beta prior over a family of noise rates.

The prior's alpha and beta are random variables in the model's factor graph;
every noise rate under the prior gets one Beta factor adjacent to
(rate, alpha, beta), so refitting the hyperparameters changes the graph score.
"""

import logging
from typing import Optional, Sequence

from Distributions.beta import Beta
from Distributions.errors import MethodOfMomentsError
from Distributions.space import POSITIVE_REALS
from FactorGraph_EM.factor import DistFactor
from FactorGraph_EM.variable import ContinuousRV, VariableArena

logger = logging.getLogger(__name__)


class NoisePrior:
    def __init__(self, alpha: float, beta: float,
                 arena: Optional[VariableArena] = None, name: str = "noise"):
        self.name = name
        self.dist = Beta(alpha, beta)
        self.alpha = ContinuousRV(alpha, POSITIVE_REALS, arena, name=f"{name}.alpha")
        self.beta = ContinuousRV(beta, POSITIVE_REALS, self.alpha.arena, name=f"{name}.beta")

    def __repr__(self):
        return f"NoisePrior({self.name}, a={self.alpha.val():.3f}, b={self.beta.val():.3f})"

    def factor(self, noise_rate: ContinuousRV) -> DistFactor:
        return DistFactor([noise_rate, self.alpha, self.beta], self.dist)

    def refit(self, rates: Sequence[float]) -> bool:
        """
        Method-of-moments update of (alpha, beta) from the current rates.
        Returns False, keeping the old prior, when the rates admit no fit.
        """
        try:
            alpha, beta = Beta.maximize_by_mom(rates)
        except MethodOfMomentsError as e:
            logger.warning(f"Keeping {self!r}: {e}")
            return False
        self.dist.set_params([alpha, beta])
        self.alpha.set(alpha)
        self.beta.set(beta)
        logger.debug(f"Refit {self!r} from {len(rates)} rates")
        return True

    def sync(self) -> None:
        """Point the density back at the current alpha and beta variables."""
        self.dist.set_params([self.alpha.val(), self.beta.val()])
