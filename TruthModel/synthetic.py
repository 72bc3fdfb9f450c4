"""
Synthetic crowd data with known ground truth.

Item truths come from a Bernoulli process, channel noise rates from a Beta
distribution, and the item/channel assignment from a random bipartite graph
in which every item is judged the same number of times and the judgments are
spread as evenly as possible over the channels.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

import numpy as np

from Channels.bsc import BSC
from Distributions.beta import Beta
from Distributions.space import BOOLEAN_SPACE
from Distributions.util import ensure_rng
from FactorGraph_EM.process import BernoulliProcess
from FactorGraph_EM.variable import VariableArena
from TruthModel.em import clamp
from TruthModel.random_graph import random_bipartite_graph

logger = logging.getLogger(__name__)

Observation = Tuple[str, str, bool]


@dataclass
class CrowdData:
    truth: Dict[str, bool] = field(default_factory=dict)
    noise: Dict[str, float] = field(default_factory=dict)
    observations: List[Observation] = field(default_factory=list)

    def load(self, model) -> None:
        """Feed every observation to a MultipleBSCModel."""
        for item, channel, value in self.observations:
            model.add_observation(item, channel, value)

    def accuracy(self, values: Dict[str, bool]) -> float:
        """Fraction of items whose value in *values* matches the truth."""
        if not self.truth:
            return 0.0
        hits = sum(values.get(item) == truth for item, truth in self.truth.items())
        return hits / len(self.truth)


def spread(total: int, n: int) -> List[int]:
    """*n* degrees summing to *total*, differing by at most one."""
    base, extra = divmod(total, n)
    return [base + 1 if i < extra else base for i in range(n)]


def simulate_crowd(num_items: int, num_channels: int, judgments_per_item: int,
                   bias: float = 0.5, noise_alpha: float = 2.0, noise_beta: float = 10.0,
                   rng: Optional[np.random.Generator] = None,
                   noise_floor: float = 1e-3) -> CrowdData:
    rng = ensure_rng(rng)
    arena = VariableArena()
    data = CrowdData()

    truths = BernoulliProcess(bias, arena).sample_n(num_items, rng)
    items = [f"item{i}" for i in range(num_items)]
    for name, rv in zip(items, truths):
        data.truth[name] = BOOLEAN_SPACE.bool_value(rv.outcome())

    prior = Beta(noise_alpha, noise_beta)
    channels = {}
    for j in range(num_channels):
        name = f"channel{j}"
        rate = clamp(prior.sample(rng), noise_floor)
        channels[name] = BSC(rate, arena, name=name)
        data.noise[name] = rate
    names = list(channels)

    left = [judgments_per_item] * num_items
    right = spread(num_items * judgments_per_item, num_channels)
    for i, j in random_bipartite_graph(left, right, rng):
        output = channels[names[j]].sample(truths[i], rng)
        data.observations.append(
            (items[i], names[j], BOOLEAN_SPACE.bool_value(output.outcome())))

    logger.info(f"Simulated {len(data.observations)} judgments of {num_items} items "
                f"by {num_channels} channels")
    return data
