import math
import unittest

import numpy as np

from Distributions.beta import Beta
from Distributions.errors import InvalidProbabilityError
from Distributions.space import BOOLEAN_SPACE, POSITIVE_REALS
from FactorGraph_EM.factor import DistFactor
from FactorGraph_EM.process import BernoulliProcess, IIDProcess
from FactorGraph_EM.variable import ContinuousRV, DiscreteRV, VariableArena


class TestBernoulliProcess(unittest.TestCase):
    def test_samples_are_boolean_variables(self):
        proc = BernoulliProcess(0.7)
        rng = np.random.default_rng(1)
        seq = proc.sample_n(100, rng)
        self.assertTrue(all(isinstance(rv, DiscreteRV) for rv in seq))
        mean = np.mean([rv.val() for rv in seq])
        std = math.sqrt(0.7 * 0.3)
        self.assertTrue(0.7 - std <= mean <= 0.7 + std)

    def test_factors_score_against_the_bias(self):
        proc = BernoulliProcess(0.2)
        seq = [DiscreteRV(1, BOOLEAN_SPACE, proc.arena), DiscreteRV(0, BOOLEAN_SPACE, proc.arena)]
        factors = proc.factors(seq)
        self.assertEqual(len(factors), 2)
        self.assertIsInstance(factors[0], DistFactor)
        self.assertEqual(factors[0].adjacent(), [seq[0]] + proc.params)
        self.assertAlmostEqual(factors[0].score(), 0.2)
        self.assertAlmostEqual(factors[1].score(), 0.8)

        proc.set_bias(0.6)
        self.assertAlmostEqual(factors[0].score(), 0.6)
        self.assertAlmostEqual(proc.dist.bias, 0.6)

    def test_rejects_invalid_bias(self):
        with self.assertRaises(InvalidProbabilityError):
            BernoulliProcess(-0.5)


class TestIIDProcess(unittest.TestCase):
    def test_continuous_process(self):
        arena = VariableArena()
        params = [ContinuousRV(2.0, POSITIVE_REALS, arena), ContinuousRV(5.0, POSITIVE_REALS, arena)]
        proc = IIDProcess(params, Beta(2.0, 5.0), arena)
        rv = proc.sample(np.random.default_rng(2))
        self.assertIsInstance(rv, ContinuousRV)
        self.assertTrue(0 < rv.val() < 1)
        (factor,) = proc.factors([rv])
        self.assertAlmostEqual(factor.score(), Beta(2.0, 5.0).pdf(rv.val()))


if __name__ == "__main__":
    unittest.main()
