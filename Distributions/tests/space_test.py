import math
import unittest

from Distributions.errors import NotInDomainError
from Distributions.space import (ALL_REALS, BOOLEAN_SPACE, POSITIVE_REALS, UNIT_INTERVAL,
                                 BooleanSpace, FiniteSpace, RealIntervalSpace)


class TestRealIntervalSpace(unittest.TestCase):
    def test_unit_interval_bounds(self):
        self.assertEqual(UNIT_INTERVAL.inf(), 0)
        self.assertEqual(UNIT_INTERVAL.sup(), 1)
        self.assertTrue(UNIT_INTERVAL.contains(0.5))
        self.assertFalse(UNIT_INTERVAL.contains(1.5))

    def test_unbounded_intervals(self):
        self.assertEqual(POSITIVE_REALS.sup(), math.inf)
        self.assertEqual(ALL_REALS.inf(), -math.inf)
        self.assertTrue(ALL_REALS.contains(-1e300))

    def test_equality_is_by_bounds(self):
        self.assertTrue(UNIT_INTERVAL.equals(RealIntervalSpace(0.0, 1.0)))
        self.assertFalse(UNIT_INTERVAL.equals(POSITIVE_REALS))
        self.assertFalse(UNIT_INTERVAL.equals(BOOLEAN_SPACE))


class TestBooleanSpace(unittest.TestCase):
    def test_bounds_and_size(self):
        self.assertEqual(BOOLEAN_SPACE.inf(), 0)
        self.assertEqual(BOOLEAN_SPACE.sup(), 1)
        self.assertEqual(BOOLEAN_SPACE.size(), 2)

    def test_f64_value_maps_nonzero_to_one(self):
        self.assertEqual(BOOLEAN_SPACE.f64_value(0), 0)
        self.assertEqual(BOOLEAN_SPACE.f64_value(1), 1)
        self.assertEqual(BOOLEAN_SPACE.f64_value(2), 1)

    def test_bool_value(self):
        self.assertFalse(BOOLEAN_SPACE.bool_value(0))
        self.assertTrue(BOOLEAN_SPACE.bool_value(1))
        self.assertTrue(BOOLEAN_SPACE.bool_value(2))
        self.assertEqual(BOOLEAN_SPACE.bool_outcome(True), 1)
        self.assertEqual(BOOLEAN_SPACE.bool_outcome(False), 0)

    def test_outcome_of_real(self):
        self.assertEqual(BOOLEAN_SPACE.outcome(0.0), 0)
        self.assertEqual(BOOLEAN_SPACE.outcome(0.3), 1)

    def test_all_instances_are_equal(self):
        self.assertTrue(BooleanSpace().equals(BOOLEAN_SPACE))
        self.assertFalse(BOOLEAN_SPACE.equals(FiniteSpace(2)))


class TestFiniteSpace(unittest.TestCase):
    def test_outcomes_are_indices(self):
        space = FiniteSpace(4)
        self.assertEqual(space.size(), 4)
        self.assertEqual(space.sup(), 3)
        self.assertEqual(space.f64_value(2), 2.0)
        self.assertEqual(space.outcome(2.0), 2)

    def test_rejects_outcomes_outside_the_space(self):
        space = FiniteSpace(3)
        with self.assertRaises(NotInDomainError):
            space.f64_value(3)
        with self.assertRaises(NotInDomainError):
            space.outcome(-1.0)


if __name__ == "__main__":
    unittest.main()
