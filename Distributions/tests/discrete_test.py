import unittest

import numpy as np

from Distributions.dist import DenseMutableDiscreteDist, Dist
from Distributions.errors import (InvalidProbabilityError, NotInDomainError,
                                  NotNormalizedError, UnsupportedDistributionError,
                                  ZeroProbabilityError)
from Distributions.normal import Normal
from Distributions.space import BOOLEAN_SPACE, FiniteSpace


class TestDenseMutableDiscreteDist(unittest.TestCase):
    def test_prob_requires_normalization(self):
        dist = DenseMutableDiscreteDist(FiniteSpace(3))
        dist.set_weight(0, 2.0)
        with self.assertRaises(NotNormalizedError):
            dist.prob(0)

    def test_normalize(self):
        dist = DenseMutableDiscreteDist(FiniteSpace(3))
        dist.set_weight(0, 1.0)
        dist.set_weight(2, 3.0)
        dist.normalize()
        self.assertEqual(dist.probs(), [0.25, 0.0, 0.75])

    def test_normalize_is_idempotent(self):
        dist = DenseMutableDiscreteDist(FiniteSpace(3))
        for outcome, w in enumerate([1.0, 2.0, 5.0]):
            dist.set_weight(outcome, w)
        dist.normalize()
        once = dist.probs()
        dist.normalize()
        np.testing.assert_allclose(dist.probs(), once)

    def test_normalize_zero_mass(self):
        dist = DenseMutableDiscreteDist(BOOLEAN_SPACE)
        with self.assertRaises(ZeroProbabilityError):
            dist.normalize()

    def test_normalize_with_extra_fills_empty_outcomes(self):
        dist = DenseMutableDiscreteDist(FiniteSpace(4))
        dist.set_weight(0, 1.0)
        dist.set_weight(1, 1.0)
        dist.normalize_with_extra(1.0)
        np.testing.assert_allclose(dist.probs(), [1 / 3, 1 / 3, 1 / 6, 1 / 6])

    def test_normalize_with_extra_on_empty_distribution(self):
        dist = DenseMutableDiscreteDist(FiniteSpace(4))
        dist.normalize_with_extra(0.1)
        np.testing.assert_allclose(dist.probs(), [0.25] * 4)

    def test_reset(self):
        dist = DenseMutableDiscreteDist(BOOLEAN_SPACE)
        dist.set_weight(1, 4.0)
        dist.reset()
        self.assertEqual(list(dist.weights), [0.0, 0.0])
        with self.assertRaises(ZeroProbabilityError):
            dist.normalize()

    def test_set_prob_validation(self):
        dist = DenseMutableDiscreteDist(FiniteSpace(2))
        with self.assertRaises(InvalidProbabilityError):
            dist.set_prob(0, 1.5)
        with self.assertRaises(NotInDomainError):
            dist.set_prob(2, 0.5)
        with self.assertRaises(InvalidProbabilityError):
            dist.set_weight(0, -1.0)

    def test_score_reads_outcome_from_params(self):
        dist = DenseMutableDiscreteDist(FiniteSpace(3))
        self.assertEqual(dist.num_vars(), 1)
        self.assertEqual(dist.num_params(), 3)
        self.assertEqual(dist.score([2.0], [0.2, 0.3, 0.5]), 0.5)

    def test_sample_follows_probabilities(self):
        dist = DenseMutableDiscreteDist(FiniteSpace(3))
        dist.set_params([0.0, 1.0, 0.0])
        rng = np.random.default_rng(0)
        self.assertEqual(set(dist.sample_n(50, rng)), {1})


class TestUnsupportedSampling(unittest.TestCase):
    def test_base_sample_raises(self):
        class Fixed(Normal):
            sample = Dist.sample

        with self.assertRaises(UnsupportedDistributionError):
            Fixed().sample()


if __name__ == "__main__":
    unittest.main()
