"""
SocialMediaCharts - Scale Calculator

Derives axis domains and categorical color mappings for the charts.
"""

import logging
import math
from datetime import date
from typing import Callable, Dict, Iterable, List, Sequence, Tuple

from socialcharts.models.errors import InvalidInputError
from socialcharts.models.records import PostRecord


logger = logging.getLogger(__name__)

# Categorical palette for post types (wraps when there are more categories)
DEFAULT_PALETTE = ["#1f77b4", "#ff7f0e", "#2ca02c"]

# Tick step error thresholds for 10x, 5x, 2x factors
_E10 = math.sqrt(50)
_E5 = math.sqrt(10)
_E2 = math.sqrt(2)


class ScaleCalculator:
    """
    Calculator for chart scales.

    Handles:
    - Linear y-axis domains rounded to nice tick boundaries
    - Band (categorical) domains in first-occurrence order
    - Ordinal color assignment
    - Time axis extents
    """

    @staticmethod
    def tick_increment(start: float, stop: float, count: int) -> float:
        """
        Calculate a tick step of 1, 2, 5 or 10 times a power of ten.

        Args:
            start: Domain start
            stop: Domain end (must be greater than start)
            count: Approximate number of ticks

        Returns:
            Tick step size
        """
        step = (stop - start) / max(1, count)
        power = math.floor(math.log10(step))
        error = step / (10 ** power)

        if error >= _E10:
            factor = 10
        elif error >= _E5:
            factor = 5
        elif error >= _E2:
            factor = 2
        else:
            factor = 1

        return factor * (10 ** power)

    @staticmethod
    def nice_linear_domain(max_value: float, tick_count: int = 10) -> Tuple[float, float]:
        """
        Calculate a [0, max] domain extended to a nice tick boundary.

        Args:
            max_value: Largest data value (the domain starts at zero)
            tick_count: Approximate number of ticks

        Returns:
            Tuple of (0, nice_max); (0, 0) when max_value is zero

        Raises:
            InvalidInputError: If max_value is negative
        """
        if max_value < 0:
            raise InvalidInputError(f"Domain maximum must be non-negative, got {max_value}")
        if max_value == 0:
            return (0, 0)

        stop = float(max_value)
        previous_step = None

        # Re-derive the step against the widened domain until it settles
        for _ in range(10):
            step = ScaleCalculator.tick_increment(0, stop, tick_count)
            if step == previous_step:
                break
            if step >= 1:
                stop = math.ceil(stop / step) * step
            else:
                inverse = round(1 / step)
                stop = math.ceil(stop * inverse) / inverse
            previous_step = step

        logger.debug(f"Nice domain for max {max_value}: (0, {stop})")
        return (0, stop)

    @staticmethod
    def band_domain(
        records: Iterable[PostRecord],
        key_fn: Callable[[PostRecord], str]
    ) -> List[str]:
        """
        Get distinct key values in order of first occurrence.

        Args:
            records: Source records
            key_fn: Function extracting the category from a record

        Returns:
            Distinct category values
        """
        return list(dict.fromkeys(key_fn(record) for record in records))

    @staticmethod
    def ordinal_colors(
        domain: Sequence[str],
        palette: Sequence[str] = tuple(DEFAULT_PALETTE)
    ) -> Dict[str, str]:
        """
        Assign palette colors to categories, wrapping around the palette.

        Raises:
            InvalidInputError: If the palette is empty
        """
        if not palette:
            raise InvalidInputError("Color palette must contain at least one color")
        return {
            value: palette[index % len(palette)]
            for index, value in enumerate(domain)
        }

    @staticmethod
    def date_extent(records: Iterable[PostRecord]) -> Tuple[date, date]:
        """
        Get the earliest and latest record dates.

        Raises:
            InvalidInputError: If there are no records
        """
        dates = [record.date for record in records]
        if not dates:
            raise InvalidInputError("Cannot calculate the date extent of no records")
        return (min(dates), max(dates))
