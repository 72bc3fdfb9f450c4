"""
Random variables for the EM factor graph.

Variable state lives in a ``VariableArena``: a flat store of values addressed
by integer index.  ``ContinuousRV`` and ``DiscreteRV`` are small handles
(arena, index) held by every factor that touches the variable, so a value
written by EM is seen by all of them without any shared object graph.

Handles compare and hash by identity (same arena, same index).  Structural
equality, the same space and the same current value, is ``equals()``.
"""

from typing import List, Optional

from Distributions.space import BOOLEAN_SPACE, DiscreteRealSpace, Outcome, RealSpace, Space


class VariableArena:
    """Owns the values and spaces of a family of random variables."""

    def __init__(self):
        self._values: List[float] = []
        self._spaces: List[Space] = []

    def __len__(self):
        return len(self._values)

    def allocate(self, value: float, space: Space) -> int:
        self._values.append(float(value))
        self._spaces.append(space)
        return len(self._values) - 1

    def get(self, index: int) -> float:
        return self._values[index]

    def set(self, index: int, value: float) -> None:
        self._values[index] = float(value)

    def space(self, index: int) -> Space:
        return self._spaces[index]

    def values(self) -> List[float]:
        return list(self._values)

    def restore(self, values: List[float]) -> None:
        """Roll the arena back to a snapshot taken with ``values()``."""
        self._values[:len(values)] = values


class RandomVariable:
    def __init__(self, value: float, space: Space,
                 arena: Optional[VariableArena] = None, name: str = ""):
        self.arena = arena if arena is not None else VariableArena()
        self.index = self.arena.allocate(value, space)
        self.name = name

    @property
    def space(self) -> Space:
        return self.arena.space(self.index)

    def val(self) -> float:
        return self.arena.get(self.index)

    def set(self, value: float) -> None:
        self.arena.set(self.index, value)

    def equals(self, other: "RandomVariable") -> bool:
        """Ask whether the variable has the same domain and value as another."""
        if not isinstance(other, type(self)):
            return False
        return self.space.equals(other.space) and self.val() == other.val()

    def __eq__(self, other):
        if not isinstance(other, RandomVariable):
            return NotImplemented
        return self.arena is other.arena and self.index == other.index

    def __hash__(self):
        return hash((id(self.arena), self.index))

    def __repr__(self):
        label = self.name or f"#{self.index}"
        return f"{type(self).__name__}({label}={self.val():g})"


class ContinuousRV(RandomVariable):
    def __init__(self, value: float, space: RealSpace,
                 arena: Optional[VariableArena] = None, name: str = ""):
        super().__init__(value, space, arena, name)


class DiscreteRV(RandomVariable):
    """
    A discrete outcome stored through its real-valued view.
    ``set`` snaps any real to the nearest outcome of the space.
    """

    def __init__(self, outcome: Outcome, space: DiscreteRealSpace = BOOLEAN_SPACE,
                 arena: Optional[VariableArena] = None, name: str = ""):
        super().__init__(space.f64_value(outcome), space, arena, name)

    def outcome(self) -> Outcome:
        return self.space.outcome(self.val())

    def set(self, value: float) -> None:
        space = self.space
        super().set(space.f64_value(space.outcome(value)))

    def set_outcome(self, outcome: Outcome) -> None:
        super().set(self.space.f64_value(outcome))
