"""
Expectation maximization for noisy-channel truth models.

A model holds latent boolean inputs (the items being judged), noisy channels
with unknown noise rates (the judges), and a factor graph with one channel
factor per observation.  Each outer round:

  1. E-step: set every input to its MAP value given the current noise rates,
     recording its posterior Pr(true) as a soft score.
  2. M-step: re-estimate every noise rate from the expected number of flips
     on its factors, repeated until the graph score stops improving.
  3. Optionally refit Beta priors over the noise rates (empirical Bayes).

Rounds stop when the graph score improves by no more than the tolerance or
the round budget runs out.  A round that lowers the score is rolled back to
the state before it.  A last E-step pass then records the posterior of
every input in ``input_scores``.
"""

import logging
import math
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Tuple

from scipy.special import expit

from Distributions.space import BOOLEAN_SPACE
from FactorGraph_EM.factor import Factor
from FactorGraph_EM.graph import FactorGraph
from FactorGraph_EM.variable import DiscreteRV, RandomVariable, VariableArena
from TruthModel.config import EMParams

logger = logging.getLogger(__name__)

Callback = Callable[["NoisyChannelModel", int, str], None]


@dataclass
class EMResult:
    rounds: int
    score: float
    delta: float
    converged: bool


def clamp(value: float, floor: float) -> float:
    return min(max(value, floor), 1 - floor)


def estimate_rate(flips: float, count: float, floor: float) -> float:
    """Expected flips per observation, kept away from an absorbing 0 or 1."""
    if count == 0:
        return floor
    return clamp(flips / count, floor)


def expected_flips(q: float, output: float, other_rate: float = 0.0) -> float:
    """
    Probability that one channel layer flipped, given Pr(input true) = *q*,
    the observed *output*, and the flip rate of any other layer in series.
    """
    disagree = 1 - q if output == 1 else q
    return disagree * (1 - other_rate) + (1 - disagree) * other_rate


def soft_score(if_false: float, if_true: float, floor: float) -> float:
    """Pr(true) from the two log scores of an input; 0.5 when both vanish."""
    if if_false == -math.inf and if_true == -math.inf:
        return 0.5
    return clamp(float(expit(if_true - if_false)), floor)


class NoisyChannelModel(ABC):
    def __init__(self, params: Optional[EMParams] = None):
        self.params = params if params is not None else EMParams()
        self.soft_inputs = self.params.soft_inputs
        self.arena = VariableArena()
        self.factor_graph = FactorGraph()
        self.inputs: Dict[str, DiscreteRV] = {}
        self.input_scores: Dict[str, float] = {}
        self.result: Optional[EMResult] = None

    # -- inputs --------------------------------------------------------------

    def has_input(self, name: str) -> bool:
        return name in self.inputs

    def add_input(self, name: str) -> DiscreteRV:
        """The latent variable for *name*, created (false) on first use."""
        var = self.inputs.get(name)
        if var is None:
            var = DiscreteRV(0, BOOLEAN_SPACE, self.arena, name=name)
            self.inputs[name] = var
        return var

    def _output(self, value: bool) -> DiscreteRV:
        return DiscreteRV(BOOLEAN_SPACE.bool_outcome(value), BOOLEAN_SPACE, self.arena)

    def input_values(self) -> Dict[str, bool]:
        return {name: BOOLEAN_SPACE.bool_value(var.outcome())
                for name, var in self.inputs.items()}

    def score(self) -> float:
        """Log score of the model under the current values."""
        return self.factor_graph.score()

    def _incident(self, var: RandomVariable) -> List[Factor]:
        if not self.factor_graph.has_variable(var):
            return []
        return self.factor_graph.adj_to_variable(var)

    # -- E-step --------------------------------------------------------------

    def _log_weights(self, var: DiscreteRV) -> Tuple[float, float]:
        """Log scores of *var* forced false and forced true; (0, 0) if unobserved."""
        if not self.factor_graph.has_variable(var):
            return 0.0, 0.0
        var.set(0)
        if_false = self.factor_graph.score_var(var)
        var.set(1)
        if_true = self.factor_graph.score_var(var)
        return if_false, if_true

    def _update_inputs(self, soft_scores: Dict[DiscreteRV, float]) -> None:
        for var in self.inputs.values():
            if_false, if_true = self._log_weights(var)
            var.set(0 if if_false > if_true else 1)
            if self.soft_inputs:
                soft_scores[var] = soft_score(if_false, if_true, self.params.soft_floor)
            else:
                soft_scores[var] = var.val()

    def _record_input_scores(self) -> None:
        self.input_scores = {}
        for name, var in self.inputs.items():
            if_false, if_true = self._log_weights(var)
            var.set(0 if if_false > if_true else 1)
            self.input_scores[name] = soft_score(if_false, if_true, self.params.soft_floor)

    # -- M-step and priors, per model ----------------------------------------

    @abstractmethod
    def _update_noise(self, soft_scores: Dict[DiscreteRV, float], round_: int,
                      callback: Optional[Callback]) -> None:
        pass

    @abstractmethod
    def _update_priors(self, round_: int, callback: Optional[Callback]) -> None:
        pass

    def _restored(self) -> None:
        """Called after the arena is rolled back to an earlier round."""

    def _notify(self, callback: Optional[Callback], round_: int, stage: str) -> None:
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(f"Round {round_} {stage} score: {self.score():.6f}")
        if callback is not None:
            callback(self, round_, stage)

    # -- training ------------------------------------------------------------

    def em(self, max_rounds: Optional[int] = None, tolerance: Optional[float] = None,
           callback: Optional[Callback] = None) -> EMResult:
        """
        Train noise rates and input values with expectation maximization.

        *callback(model, round, stage)* runs after every step; stages are
        "Initial", "input", the model's noise and prior stages, and "Final".
        """
        if max_rounds is None:
            max_rounds = self.params.max_rounds
        if tolerance is None:
            tolerance = self.params.tolerance

        def within_budget(r: int) -> bool:
            return max_rounds == 0 or r <= max_rounds

        soft_scores: Dict[DiscreteRV, float] = {}
        this_round = self.score()
        last_round = this_round - 1.0
        self._notify(callback, 0, "Initial")

        round_ = 1
        fell = False
        while within_budget(round_) and this_round - last_round > tolerance:
            snapshot = self.arena.values()
            self._update_inputs(soft_scores)
            self._notify(callback, round_, "input")

            this_inner, last_inner = this_round, last_round
            r2 = 1
            while within_budget(r2) and this_inner - last_inner > tolerance:
                self._update_noise(soft_scores, round_, callback)
                last_inner, this_inner = this_inner, self.score()
                r2 += 1

            self._update_priors(round_, callback)
            last_round, this_round = this_round, self.score()
            round_ += 1
            if this_round < last_round and round_ > 2:
                # soft updates can lower the hard score; keep the better round
                self.arena.restore(snapshot)
                self._restored()
                fell = True
                break

        delta = this_round - last_round
        score = last_round if fell else this_round
        self.result = EMResult(rounds=round_ - 1, score=score, delta=delta,
                               converged=0 <= delta <= tolerance)
        self._record_input_scores()
        if fell:
            note = " (score fell, previous round kept)"
        elif delta < 0:
            note = " (score fell)"
        elif not self.result.converged:
            note = " (round budget exhausted)"
        else:
            note = ""
        logger.info(f"EM stopped after {self.result.rounds} round(s): "
                    f"score {score:.4f}, last change {delta:.2e}{note}")
        self._notify(callback, 0, "Final")
        return self.result
