"""
Exceptions raised by the distributions, variables and factor graphs.

Configuration and domain errors are raised at the point of detection.
Numerical degeneracy inside EM is clamped by the models instead.
"""


class StatsError(Exception):
    """Base class for every error raised by this library."""


class NotNormalizedError(StatsError):
    def __init__(self):
        super().__init__("The distribution was not normalized properly")


class ZeroProbabilityError(StatsError):
    def __init__(self):
        super().__init__("The distribution has zero total probability")


class NotInDomainError(StatsError, ValueError):
    def __init__(self, outcome):
        self.outcome = outcome
        super().__init__(f"Outcome {outcome} not in the sample space")


class InvalidProbabilityError(StatsError, ValueError):
    def __init__(self, prob: float):
        self.prob = prob
        super().__init__(f"Invalid probability {prob:f}")


class ParameterCountError(StatsError, ValueError):
    def __init__(self, expected: int, got: int):
        self.expected = expected
        self.got = got
        super().__init__(f"Expected {expected} parameter(s), got {got}")


class FactorArityError(StatsError):
    def __init__(self, num_vars: int, num_params: int, num_adjacent: int):
        super().__init__(
            f"Factor expected {num_vars} variable(s) and {num_params} "
            f"parameter(s), but has {num_adjacent} adjacent")


class UnsupportedDistributionError(StatsError, TypeError):
    def __init__(self, dist):
        super().__init__(f"Unsupported distribution type {type(dist).__name__}")


class NotInGraphError(StatsError, KeyError):
    def __init__(self, variable):
        self.variable = variable
        super().__init__(f"Random variable {variable!r} not in factor graph")

    def __str__(self):
        # KeyError quotes its argument otherwise
        return self.args[0]


class MethodOfMomentsError(StatsError):
    """The sample cannot be matched by a Beta distribution's moments."""
