"""
SocialMediaCharts - Stats Calculator Tests

Unit tests for quantile, quartile and mean calculation.
"""

import random
import unittest

from socialcharts.calculators.stats_calculator import StatsCalculator
from socialcharts.models.errors import InvalidInputError
from socialcharts.models.records import Quartiles


class TestQuantile(unittest.TestCase):
    """Test cases for linear-interpolation quantiles."""

    def test_quantile_endpoints_are_extremes(self):
        """Test p=0 and p=1 return first and last values."""
        values = [3, 8, 15, 40]
        self.assertEqual(StatsCalculator.quantile(values, 0.0), 3)
        self.assertEqual(StatsCalculator.quantile(values, 1.0), 40)

    def test_quantile_exact_index(self):
        """Test index landing on an order statistic needs no interpolation."""
        values = [10, 20, 30, 40, 50]
        # index = 0.5 * 4 = 2
        self.assertEqual(StatsCalculator.quantile(values, 0.5), 30.0)

    def test_quantile_interpolates_between_neighbours(self):
        """Test fractional index interpolates linearly."""
        values = [10, 20]
        # index = 0.3 * 1 = 0.3 -> 10 + (20 - 10) * 0.3
        self.assertAlmostEqual(StatsCalculator.quantile(values, 0.3), 13.0)

    def test_quantile_empty_raises(self):
        """Test empty input is rejected."""
        with self.assertRaises(InvalidInputError):
            StatsCalculator.quantile([], 0.5)

    def test_quantile_out_of_range_raises(self):
        """Test p outside [0, 1] is rejected."""
        with self.assertRaises(InvalidInputError):
            StatsCalculator.quantile([1, 2, 3], 1.5)
        with self.assertRaises(InvalidInputError):
            StatsCalculator.quantile([1, 2, 3], -0.1)


class TestQuartiles(unittest.TestCase):
    """Test cases for five-number summaries."""

    def test_single_value(self):
        """Test a single value collapses every statistic to that value."""
        self.assertEqual(
            StatsCalculator.quartiles([10]),
            Quartiles(min=10, q1=10, median=10, q3=10, max=10)
        )

    def test_four_values_linear_interpolation(self):
        """Test [1, 2, 3, 4] quartiles use linear interpolation."""
        result = StatsCalculator.quartiles([1, 2, 3, 4])

        self.assertEqual(result.min, 1)
        self.assertAlmostEqual(result.q1, 1.75)
        self.assertAlmostEqual(result.median, 2.5)
        self.assertAlmostEqual(result.q3, 3.25)
        self.assertEqual(result.max, 4)

    def test_unsorted_input_is_sorted(self):
        """Test input order does not affect the result."""
        self.assertEqual(
            StatsCalculator.quartiles([4, 1, 3, 2]),
            StatsCalculator.quartiles([1, 2, 3, 4])
        )

    def test_accepts_generator(self):
        """Test any iterable of values is accepted."""
        result = StatsCalculator.quartiles(value for value in [5, 1, 9])
        self.assertEqual(result.median, 5)

    def test_ordering_invariant_holds(self):
        """Test min <= q1 <= median <= q3 <= max for varied inputs."""
        generator = random.Random(42)
        for size in range(1, 40):
            values = [generator.randint(0, 1000) for _ in range(size)]
            result = StatsCalculator.quartiles(values)
            self.assertLessEqual(result.min, result.q1)
            self.assertLessEqual(result.q1, result.median)
            self.assertLessEqual(result.median, result.q3)
            self.assertLessEqual(result.q3, result.max)

    def test_iqr(self):
        """Test interquartile range is q3 - q1."""
        result = StatsCalculator.quartiles([1, 2, 3, 4])
        self.assertAlmostEqual(result.iqr, 1.5)

    def test_empty_raises(self):
        """Test empty input fails with InvalidInputError."""
        with self.assertRaises(InvalidInputError):
            StatsCalculator.quartiles([])


class TestMean(unittest.TestCase):
    """Test cases for arithmetic mean."""

    def test_mean_equals_sum_over_count(self):
        """Test mean is exactly sum / count."""
        values = [120, 45, 300, 7]
        self.assertEqual(StatsCalculator.mean(values), sum(values) / len(values))

    def test_mean_of_single_value(self):
        """Test mean of one value is that value."""
        self.assertEqual(StatsCalculator.mean([42]), 42.0)

    def test_mean_empty_raises(self):
        """Test empty input is rejected."""
        with self.assertRaises(InvalidInputError):
            StatsCalculator.mean([])


if __name__ == "__main__":
    unittest.main()
