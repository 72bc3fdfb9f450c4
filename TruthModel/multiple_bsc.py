"""
Many binary symmetric channels observing a shared set of boolean inputs.

Every observation is one BSC factor tying an input to the value one channel
reported for it.  EM alternates between the inputs and the channel noise
rates; an optional Beta prior over the rates is refit between rounds.
"""

import logging
from typing import Dict, Optional, Tuple

from Channels.bsc import BSC, BSCFactor
from FactorGraph_EM.variable import DiscreteRV
from TruthModel.config import EMParams
from TruthModel.em import Callback, NoisyChannelModel, estimate_rate, expected_flips
from TruthModel.prior import NoisePrior

logger = logging.getLogger(__name__)


class MultipleBSCModel(NoisyChannelModel):
    def __init__(self, params: Optional[EMParams] = None,
                 noise_prior: Optional[Tuple[float, float]] = None):
        super().__init__(params)
        self.channels: Dict[str, BSC] = {}
        self.noise_prior: Optional[NoisePrior] = None
        self.update_beta = False
        if noise_prior is not None:
            self.noise_prior = NoisePrior(*noise_prior, arena=self.arena)
            self.update_beta = True

    def __repr__(self):
        return (f"MultipleBSCModel(inputs={len(self.inputs)}, "
                f"channels={len(self.channels)}, {self.factor_graph!r})")

    def has_channel(self, name: str) -> bool:
        return name in self.channels

    def add_channel(self, name: str, noise: Optional[float] = None) -> BSC:
        """Register channel *name*; an existing channel is returned unchanged."""
        channel = self.channels.get(name)
        if channel is not None:
            return channel
        if noise is None:
            noise = self.params.initial_noise
        channel = BSC(noise, self.arena, name=name)
        self.channels[name] = channel
        logger.debug(f"New channel {name} at noise {noise:g}")
        if self.noise_prior is not None:
            self.factor_graph.add_factor(self.noise_prior.factor(channel.noise_rate))
        return channel

    def add_observation(self, input: str, channel: str, value: bool) -> BSCFactor:
        """Record that *channel* reported *value* for *input*."""
        var = self.add_input(input)
        bsc = self.add_channel(channel)
        factor = bsc.factor(var, self._output(value))
        self.factor_graph.add_factor(factor)
        return factor

    def noise_rates(self) -> Dict[str, float]:
        return {name: ch.noise_rate.val() for name, ch in self.channels.items()}

    def _update_noise(self, soft_scores: Dict[DiscreteRV, float], round_: int,
                      callback: Optional[Callback]) -> None:
        for channel in self.channels.values():
            flips, count = 0.0, 0
            for factor in self._incident(channel.noise_rate):
                if not isinstance(factor, BSCFactor):
                    continue
                q = soft_scores.get(factor.input, factor.input.val())
                flips += expected_flips(q, factor.output.val())
                count += 1
            channel.noise_rate.set(estimate_rate(flips, count, self.params.noise_floor))
        self._notify(callback, round_, "noise")

    def _restored(self) -> None:
        if self.noise_prior is not None:
            self.noise_prior.sync()

    def _update_priors(self, round_: int, callback: Optional[Callback]) -> None:
        if self.noise_prior is None or not self.update_beta:
            return
        if self.noise_prior.refit(list(self.noise_rates().values())):
            self._notify(callback, round_, "beta")
