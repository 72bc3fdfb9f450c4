import unittest

import numpy as np

from Channels.bsc_pair import BSCPair
from Distributions.errors import InvalidProbabilityError
from Distributions.space import BOOLEAN_SPACE
from FactorGraph_EM.variable import DiscreteRV, VariableArena


class TestBSCPair(unittest.TestCase):
    def setUp(self):
        self.arena = VariableArena()
        self.pair = BSCPair(0.1, 0.2, self.arena)
        self.x = DiscreteRV(1, BOOLEAN_SPACE, self.arena)
        self.y = DiscreteRV(1, BOOLEAN_SPACE, self.arena)

    def test_factor_adjacency(self):
        factor = self.pair.factor(self.x, self.y)
        self.assertEqual(factor.adjacent(),
                         [self.y, self.x, self.pair.noise_rate1, self.pair.noise_rate2])

    def test_even_and_odd_flips(self):
        factor = self.pair.factor(self.x, self.y)
        match = factor.score()
        self.assertAlmostEqual(match, 0.1 * 0.2 + 0.9 * 0.8)
        self.y.set(0)
        mismatch = factor.score()
        self.assertAlmostEqual(mismatch, 0.9 * 0.2 + 0.1 * 0.8)
        self.assertAlmostEqual(match + mismatch, 1.0)

    def test_sample_rate_matches_combined_rate(self):
        rng = np.random.default_rng(9)
        outputs = self.pair.sample_n([self.x] * 4000, rng)
        flips = sum(1 for y in outputs if y.outcome() == 0)
        self.assertAlmostEqual(flips / 4000, 0.26, delta=0.03)

    def test_from_rates_shares_variables(self):
        other = BSCPair.from_rates(self.pair.noise_rate1, self.pair.noise_rate2)
        self.pair.noise_rate1.set(0.4)
        self.assertEqual(other.noise_rate1.val(), 0.4)

    def test_rejects_invalid_rates(self):
        with self.assertRaises(InvalidProbabilityError):
            BSCPair(0.1, -0.2)


if __name__ == "__main__":
    unittest.main()
