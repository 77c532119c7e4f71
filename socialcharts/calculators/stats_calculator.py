"""
SocialMediaCharts - Stats Calculator

Computes quantiles, five-number summaries, and means over Likes values.
"""

import logging
import math
import statistics
from typing import Iterable, List, Sequence

from socialcharts.models.errors import InvalidInputError
from socialcharts.models.records import Quartiles


logger = logging.getLogger(__name__)


class StatsCalculator:
    """
    Calculator for summary statistics.

    Computes:
    - Linear-interpolation quantiles over sorted values
    - Five-number summaries (min, q1, median, q3, max)
    - Arithmetic means
    """

    @staticmethod
    def quantile(sorted_values: Sequence[float], p: float) -> float:
        """
        Calculate the p-quantile of an ascending sequence.

        Uses linear interpolation between order statistics:
        index = p * (n - 1), interpolated between floor(index) and ceil(index).

        Args:
            sorted_values: Values sorted ascending
            p: Quantile to calculate (0.0-1.0)

        Returns:
            Quantile value

        Raises:
            InvalidInputError: If values are empty or p is outside [0, 1]
        """
        if not sorted_values:
            raise InvalidInputError("Cannot calculate a quantile of an empty sequence")
        if not 0.0 <= p <= 1.0:
            raise InvalidInputError(f"Quantile must be between 0 and 1, got {p}")

        index = (len(sorted_values) - 1) * p
        lower = math.floor(index)
        upper = math.ceil(index)

        if lower == upper:
            return float(sorted_values[lower])

        weight = index - lower
        low_value = sorted_values[lower]
        return low_value + (sorted_values[upper] - low_value) * weight

    @staticmethod
    def quartiles(values: Iterable[float]) -> Quartiles:
        """
        Calculate the five-number summary of a set of values.

        Args:
            values: Numeric values in any order

        Returns:
            Quartiles with min, q1, median, q3, max

        Raises:
            InvalidInputError: If values are empty
        """
        sorted_values: List[float] = sorted(values)
        if not sorted_values:
            raise InvalidInputError("Cannot calculate quartiles of an empty sequence")

        return Quartiles(
            min=float(sorted_values[0]),
            q1=StatsCalculator.quantile(sorted_values, 0.25),
            median=StatsCalculator.quantile(sorted_values, 0.5),
            q3=StatsCalculator.quantile(sorted_values, 0.75),
            max=float(sorted_values[-1])
        )

    @staticmethod
    def mean(values: Iterable[float]) -> float:
        """
        Calculate the arithmetic mean (sum / count).

        Raises:
            InvalidInputError: If values are empty
        """
        value_list = list(values)
        if not value_list:
            raise InvalidInputError("Cannot calculate the mean of an empty sequence")
        return float(statistics.mean(value_list))
