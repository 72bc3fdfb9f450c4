"""
Random bipartite graphs with prescribed node degrees, for assigning items to
channels in synthetic experiments.

Implements the sequential algorithm of

    M. Bayati, J. H. Kim, and A. Saberi, "A Sequential Algorithm for
    Generating Random Graphs," Algorithmica 58(4), pp. 860-910, 2010.

Edges are added one at a time, each unused (left, right) pair chosen with
weight need_l * need_r * (1 - d_l * d_r / 4m), where m is the edge count.
The result is approximately uniform over simple graphs with those degrees.
"""

import logging
from typing import List, Optional, Sequence, Tuple

import numpy as np

from Distributions.util import ensure_rng

logger = logging.getLogger(__name__)

Edge = Tuple[int, int]


class RandomGraphError(ValueError):
    pass


def _attempt(left: np.ndarray, right: np.ndarray, total: int,
             rng: np.random.Generator) -> Optional[List[Edge]]:
    left_needed = left.astype(float)
    right_needed = right.astype(float)
    bias = np.clip(1 - np.outer(left, right) / (4 * total), 0.0, None)
    available = np.ones((len(left), len(right)), dtype=bool)

    edges: List[Edge] = []
    for _ in range(total):
        weights = np.outer(left_needed, right_needed) * bias * available
        total_weight = weights.sum()
        if total_weight <= 0:
            return None
        pick = rng.choice(weights.size, p=(weights / total_weight).ravel())
        l, r = divmod(int(pick), len(right))
        edges.append((l, r))
        left_needed[l] -= 1
        right_needed[r] -= 1
        available[l, r] = False
    return edges


def random_bipartite_graph(left_degrees: Sequence[int], right_degrees: Sequence[int],
                           rng: Optional[np.random.Generator] = None,
                           max_attempts: int = 10) -> List[Edge]:
    """
    Returns a list of (left index, right index) edges in which left node i has
    degree left_degrees[i] and right node j has degree right_degrees[j].
    """
    rng = ensure_rng(rng)
    left = np.asarray(left_degrees, dtype=int)
    right = np.asarray(right_degrees, dtype=int)
    total_left, total_right = int(left.sum()), int(right.sum())
    if total_left == 0 and total_right == 0:
        raise RandomGraphError("Total node degree is zero")
    if total_left != total_right:
        raise RandomGraphError(
            f"Total left degree {total_left} != total right degree {total_right}")

    for attempt in range(1, max_attempts + 1):
        edges = _attempt(left, right, total_left, rng)
        if edges is not None:
            return edges
        logger.debug(f"Random graph attempt {attempt} got stuck, restarting")
    raise RandomGraphError("Could not find a random graph of the given degree")
