"""
SocialMediaCharts - Scale Calculator Tests

Unit tests for axis domains and categorical colors.
"""

import unittest
from datetime import date

from socialcharts.aggregators.post_aggregator import by_platform, by_post_type
from socialcharts.calculators.scale_calculator import DEFAULT_PALETTE, ScaleCalculator
from socialcharts.models.errors import InvalidInputError
from socialcharts.models.records import PostRecord


class TestNiceLinearDomain(unittest.TestCase):
    """Test cases for nice [0, max] domains."""

    def test_rounds_up_to_tens(self):
        """Test 87 rounds to 90 (step 10)."""
        self.assertEqual(ScaleCalculator.nice_linear_domain(87), (0, 90))

    def test_rounds_up_to_hundreds(self):
        """Test 1234 rounds to 1300 (step 100)."""
        self.assertEqual(ScaleCalculator.nice_linear_domain(1234), (0, 1300))

    def test_already_nice_is_unchanged(self):
        """Test a value on a tick boundary is kept."""
        self.assertEqual(ScaleCalculator.nice_linear_domain(500), (0, 500))

    def test_small_values_use_fractional_steps(self):
        """Test small maxima use sub-unit tick steps."""
        self.assertEqual(ScaleCalculator.nice_linear_domain(3), (0, 3))
        self.assertEqual(ScaleCalculator.nice_linear_domain(0.87), (0, 0.9))

    def test_zero_max(self):
        """Test an all-zero dataset yields an empty domain."""
        self.assertEqual(ScaleCalculator.nice_linear_domain(0), (0, 0))

    def test_negative_raises(self):
        """Test negative maxima are rejected."""
        with self.assertRaises(InvalidInputError):
            ScaleCalculator.nice_linear_domain(-5)

    def test_domain_covers_max(self):
        """Test the nice maximum is never below the data maximum."""
        for value in [1, 7, 19, 99, 101, 456, 999, 4321, 98765]:
            _, nice_max = ScaleCalculator.nice_linear_domain(value)
            self.assertGreaterEqual(nice_max, value)


class TestBandDomainAndColors(unittest.TestCase):
    """Test cases for categorical domains and ordinal colors."""

    def setUp(self):
        """Set up test fixtures."""
        self.records = [
            PostRecord("Twitter", date(2024, 3, 1), "Video", 10),
            PostRecord("Facebook", date(2024, 3, 2), "Image", 20),
            PostRecord("Twitter", date(2024, 3, 3), "Link", 30),
            PostRecord("Instagram", date(2024, 2, 28), "Image", 40),
        ]

    def test_band_domain_first_occurrence_order(self):
        """Test distinct values keep first-occurrence order."""
        self.assertEqual(
            ScaleCalculator.band_domain(self.records, by_platform),
            ["Twitter", "Facebook", "Instagram"]
        )
        self.assertEqual(
            ScaleCalculator.band_domain(self.records, by_post_type),
            ["Video", "Image", "Link"]
        )

    def test_ordinal_colors_default_palette(self):
        """Test categories take palette colors in order."""
        colors = ScaleCalculator.ordinal_colors(["Video", "Image", "Link"])
        self.assertEqual(colors, {
            "Video": "#1f77b4",
            "Image": "#ff7f0e",
            "Link": "#2ca02c"
        })

    def test_ordinal_colors_wrap(self):
        """Test categories beyond the palette length wrap around."""
        colors = ScaleCalculator.ordinal_colors(["a", "b", "c", "d", "e"])
        self.assertEqual(colors["d"], DEFAULT_PALETTE[0])
        self.assertEqual(colors["e"], DEFAULT_PALETTE[1])

    def test_ordinal_colors_empty_palette_raises(self):
        """Test an empty palette is rejected."""
        with self.assertRaises(InvalidInputError):
            ScaleCalculator.ordinal_colors(["a"], [])

    def test_date_extent(self):
        """Test date extent spans earliest to latest date."""
        self.assertEqual(
            ScaleCalculator.date_extent(self.records),
            (date(2024, 2, 28), date(2024, 3, 3))
        )

    def test_date_extent_empty_raises(self):
        """Test empty input is rejected."""
        with self.assertRaises(InvalidInputError):
            ScaleCalculator.date_extent([])


if __name__ == "__main__":
    unittest.main()
