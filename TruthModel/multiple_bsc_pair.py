"""
Observations through paired channels: each report passes through two BSC
layers in series, e.g. one per question and one per worker, with the layer
rates shared by every pair that names the same layer.

Layer rates are fit by coordinate ascent: layer 1 is re-estimated holding
every layer-2 rate fixed, then layer 2 holding layer 1 fixed.
"""

import logging
from typing import Dict, Optional, Tuple

from Channels.bsc_pair import BSCPair, BSCPairFactor
from Distributions.space import UNIT_INTERVAL
from FactorGraph_EM.variable import ContinuousRV, DiscreteRV
from TruthModel.config import EMParams
from TruthModel.em import Callback, NoisyChannelModel, estimate_rate, expected_flips
from TruthModel.prior import NoisePrior

logger = logging.getLogger(__name__)


class MultipleBSCPairModel(NoisyChannelModel):
    def __init__(self, params: Optional[EMParams] = None,
                 noise1_prior: Optional[Tuple[float, float]] = None,
                 noise2_prior: Optional[Tuple[float, float]] = None):
        super().__init__(params)
        self.noise1_rates: Dict[str, ContinuousRV] = {}
        self.noise2_rates: Dict[str, ContinuousRV] = {}
        self.channels: Dict[str, Dict[str, BSCPair]] = {}
        self.noise1_prior: Optional[NoisePrior] = None
        self.noise2_prior: Optional[NoisePrior] = None
        self.update_beta1 = False
        self.update_beta2 = False
        if noise1_prior is not None:
            self.noise1_prior = NoisePrior(*noise1_prior, arena=self.arena, name="noise1")
            self.update_beta1 = True
        if noise2_prior is not None:
            self.noise2_prior = NoisePrior(*noise2_prior, arena=self.arena, name="noise2")
            self.update_beta2 = True

    def __repr__(self):
        return (f"MultipleBSCPairModel(inputs={len(self.inputs)}, "
                f"layer1={len(self.noise1_rates)}, layer2={len(self.noise2_rates)})")

    def has_channel(self, name1: str, name2: str) -> bool:
        return name2 in self.channels.get(name1, {})

    def _layer_rate(self, rates: Dict[str, ContinuousRV], prior: Optional[NoisePrior],
                    name: str, noise: float) -> ContinuousRV:
        rate = rates.get(name)
        if rate is None:
            rate = ContinuousRV(noise, UNIT_INTERVAL, self.arena, name=name)
            rates[name] = rate
            logger.debug(f"New layer rate {name} at noise {noise:g}")
            if prior is not None:
                self.factor_graph.add_factor(prior.factor(rate))
        return rate

    def add_channel(self, name1: str, noise1: Optional[float],
                    name2: str, noise2: Optional[float]) -> BSCPair:
        """
        The channel pairing layer-1 rate *name1* with layer-2 rate *name2*.
        A layer rate seen before keeps its current value; a new one starts at
        its given noise, or the initial noise when that is None.
        """
        existing = self.channels.get(name1, {}).get(name2)
        if existing is not None:
            return existing
        initial = self.params.initial_noise
        rate1 = self._layer_rate(self.noise1_rates, self.noise1_prior, name1,
                                 initial if noise1 is None else noise1)
        rate2 = self._layer_rate(self.noise2_rates, self.noise2_prior, name2,
                                 initial if noise2 is None else noise2)

        channel = BSCPair.from_rates(rate1, rate2)
        self.channels.setdefault(name1, {})[name2] = channel
        return channel

    def add_observation(self, input: str, channel1: str, channel2: str,
                        value: bool) -> BSCPairFactor:
        var = self.add_input(input)
        pair = self.add_channel(channel1, None, channel2, None)
        factor = pair.factor(var, self._output(value))
        self.factor_graph.add_factor(factor)
        return factor

    def noise_rates(self) -> Tuple[Dict[str, float], Dict[str, float]]:
        return ({name: rv.val() for name, rv in self.noise1_rates.items()},
                {name: rv.val() for name, rv in self.noise2_rates.items()})

    def _update_layer(self, rates: Dict[str, ContinuousRV], soft_scores, layer: int) -> None:
        for rate in rates.values():
            flips, count = 0.0, 0
            for factor in self._incident(rate):
                if not isinstance(factor, BSCPairFactor):
                    continue
                other = factor.noise_rate2 if layer == 1 else factor.noise_rate1
                q = soft_scores.get(factor.input, factor.input.val())
                flips += expected_flips(q, factor.output.val(), other.val())
                count += 1
            rate.set(estimate_rate(flips, count, self.params.noise_floor))

    def _update_noise(self, soft_scores: Dict[DiscreteRV, float], round_: int,
                      callback: Optional[Callback]) -> None:
        self._update_layer(self.noise1_rates, soft_scores, 1)
        self._notify(callback, round_, "noise1")
        self._update_layer(self.noise2_rates, soft_scores, 2)
        self._notify(callback, round_, "noise2")

    def _restored(self) -> None:
        for prior in (self.noise1_prior, self.noise2_prior):
            if prior is not None:
                prior.sync()

    def _update_priors(self, round_: int, callback: Optional[Callback]) -> None:
        rates1, rates2 = self.noise_rates()
        if self.noise1_prior is not None and self.update_beta1:
            if self.noise1_prior.refit(list(rates1.values())):
                self._notify(callback, round_, "beta1")
        if self.noise2_prior is not None and self.update_beta2:
            if self.noise2_prior.refit(list(rates2.values())):
                self._notify(callback, round_, "beta2")
