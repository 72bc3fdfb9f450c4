"""
Pairwise accuracy of inferred preferences against relevance judgments.

Questions are keyed "small big" (see csv_parser); a question's value is True
when the first document is preferred.  Only pairs whose documents differ in
relevance are scored, and a value is correct when it prefers the more
relevant document.  Documents missing from the QREL count as relevance 0.
"""

from dataclasses import dataclass
from typing import Callable, Dict, Optional

import numpy as np

from Distributions.util import ensure_rng
from TruthModel.em import NoisyChannelModel


@dataclass
class Accuracy:
    correct: int = 0
    total: int = 0

    @property
    def rate(self) -> float:
        return self.correct / self.total if self.total else 0.0

    def __str__(self):
        return f"{self.correct}/{self.total} = {self.rate:f}"


def pairwise_accuracy(values: Dict[str, bool], qrel: Dict[str, int]) -> Accuracy:
    acc = Accuracy()
    for question, first_wins in values.items():
        doc0, doc1 = question.split(" ")
        rel0, rel1 = qrel.get(doc0, 0), qrel.get(doc1, 0)
        if rel0 == rel1:
            continue
        acc.total += 1
        if first_wins == (rel0 > rel1):
            acc.correct += 1
    return acc


def baselines(majority: Dict[str, int], qrel: Dict[str, int],
              rng: Optional[np.random.Generator] = None) -> Dict[str, Accuracy]:
    """Accuracy of majority vote, constant answers and coin flips."""
    rng = ensure_rng(rng)
    return {
        "Majority vote": pairwise_accuracy({q: net > 0 for q, net in majority.items()}, qrel),
        "All-true vote": pairwise_accuracy({q: True for q in majority}, qrel),
        "All-false vote": pairwise_accuracy({q: False for q in majority}, qrel),
        "Random vote": pairwise_accuracy({q: bool(rng.random() > 0.5) for q in majority}, qrel),
    }


def accuracy_reporter(qrel: Dict[str, int],
                      out: Callable[[str], None] = print) -> Callable[[NoisyChannelModel, int, str], None]:
    """An EM callback that reports score and accuracy after every stage."""

    def report(model: NoisyChannelModel, round_: int, stage: str) -> None:
        acc = pairwise_accuracy(model.input_values(), qrel)
        prefix = stage if round_ == 0 else f"Round {round_} {stage}"
        out(f"{prefix} score: {model.score():f} accuracy: {acc}")

    return report
