from typing import Optional

import numpy as np

from Distributions.errors import StatsError
from Distributions.util import ensure_rng


def rand_gamma(alpha: float, beta: float, lam: float = 0.0,
               rng: Optional[np.random.Generator] = None) -> float:
    """
    Draw from a Gamma distribution with shape *alpha*, scale *beta* and
    shift *lam*: mean alpha*beta + lam, variance alpha*beta^2.
    """
    if alpha <= 0 or beta <= 0:
        raise StatsError(
            f"Invalid Gamma distribution parameters: alpha={alpha:f}, beta={beta:f}")
    return float(ensure_rng(rng).gamma(alpha, beta)) + lam
