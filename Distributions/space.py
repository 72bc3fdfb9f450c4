"""
Sample spaces: the domains random variables and distributions live on.

Real-like spaces report an infimum and supremum; discrete spaces report
their number of outcomes. Outcomes of a discrete space are integer ids.
"""

import math
from abc import ABC, abstractmethod
from dataclasses import dataclass

from Distributions.errors import NotInDomainError

Outcome = int


class Space(ABC):
    @abstractmethod
    def equals(self, other: "Space") -> bool:
        """Ask whether the space is the same as some other space."""


class RealSpace(Space):
    """A subset of the reals."""

    @abstractmethod
    def inf(self) -> float:
        pass

    @abstractmethod
    def sup(self) -> float:
        pass

    def contains(self, value: float) -> bool:
        return self.inf() <= value <= self.sup()


class DiscreteRealSpace(RealSpace):
    """A discrete subset of the reals with integer outcome ids."""

    @abstractmethod
    def size(self) -> int:
        """The number of outcomes, or -1 if infinite."""

    @abstractmethod
    def f64_value(self, outcome: Outcome) -> float:
        """The real value of an outcome."""

    @abstractmethod
    def outcome(self, value: float) -> Outcome:
        """The outcome corresponding to a real value."""

    def check(self, outcome: Outcome) -> None:
        if outcome < 0 or (self.size() >= 0 and outcome >= self.size()):
            raise NotInDomainError(outcome)


@dataclass(frozen=True)
class RealIntervalSpace(RealSpace):
    """A closed interval of the reals; either bound may be infinite."""
    min: float
    max: float

    def inf(self) -> float:
        return self.min

    def sup(self) -> float:
        return self.max

    def equals(self, other: Space) -> bool:
        if not isinstance(other, RealIntervalSpace):
            return False
        return self.min == other.min and self.max == other.max


UNIT_INTERVAL = RealIntervalSpace(0.0, 1.0)
POSITIVE_REALS = RealIntervalSpace(0.0, math.inf)
ALL_REALS = RealIntervalSpace(-math.inf, math.inf)


@dataclass(frozen=True)
class BooleanSpace(DiscreteRealSpace):
    """The two-point space {false, true} viewed as the reals {0, 1}."""

    def inf(self) -> float:
        return 0.0

    def sup(self) -> float:
        return 1.0

    def size(self) -> int:
        return 2

    def equals(self, other: Space) -> bool:
        return isinstance(other, BooleanSpace)

    def f64_value(self, outcome: Outcome) -> float:
        return 0.0 if outcome == 0 else 1.0

    def outcome(self, value: float) -> Outcome:
        return 0 if value == 0.0 else 1

    def bool_value(self, outcome: Outcome) -> bool:
        return outcome != 0

    def bool_outcome(self, value: bool) -> Outcome:
        return 1 if value else 0


BOOLEAN_SPACE = BooleanSpace()


@dataclass(frozen=True)
class FiniteSpace(DiscreteRealSpace):
    """Outcomes 0..size-1, each taking its own index as real value."""
    n: int

    def inf(self) -> float:
        return 0.0

    def sup(self) -> float:
        return float(self.n - 1)

    def size(self) -> int:
        return self.n

    def equals(self, other: Space) -> bool:
        return isinstance(other, FiniteSpace) and other.n == self.n

    def f64_value(self, outcome: Outcome) -> float:
        self.check(outcome)
        return float(outcome)

    def outcome(self, value: float) -> Outcome:
        outcome = int(round(value))
        self.check(outcome)
        return outcome
