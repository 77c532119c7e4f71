"""
SocialMediaCharts - Post Aggregator

Rolls post records up into the summaries behind each chart:
quartiles per platform, averages per platform/post type, averages per date.
"""

import logging
from datetime import date
from typing import Any, Callable, Dict, Hashable, List, Optional, Sequence

from socialcharts.calculators.scale_calculator import ScaleCalculator
from socialcharts.calculators.stats_calculator import StatsCalculator
from socialcharts.models.errors import InvalidInputError
from socialcharts.models.records import (
    AggregationResult,
    DateAverage,
    PlatformPostTypeAverage,
    PostRecord,
    Quartiles
)


logger = logging.getLogger(__name__)

KeyFn = Callable[[PostRecord], Hashable]

# Rollups support a single key or a (outer, inner) key pair
MAX_GROUP_KEYS = 2


def by_platform(record: PostRecord) -> str:
    """Group key: platform name."""
    return record.platform


def by_post_type(record: PostRecord) -> str:
    """Group key: post type."""
    return record.post_type


def by_date(record: PostRecord) -> date:
    """Group key: calendar date."""
    return record.date


class PostAggregator:
    """
    Aggregates post records into chart summaries.

    All operations are pure functions of their input; groups are keyed in
    order of first occurrence in the source sequence.
    """

    def __init__(self, stats_calculator: Optional[StatsCalculator] = None):
        """
        Initialize the aggregator.

        Args:
            stats_calculator: Stats calculator instance (creates default if None)
        """
        self.stats = stats_calculator or StatsCalculator()
        logger.debug("PostAggregator initialized")

    @staticmethod
    def group_records(
        records: Sequence[PostRecord],
        key_fn: KeyFn
    ) -> Dict[Any, List[PostRecord]]:
        """
        Group records by key, preserving first-occurrence key order.

        Args:
            records: Source records
            key_fn: Function extracting the group key

        Returns:
            Dict mapping key to the records in that group
        """
        grouped: Dict[Any, List[PostRecord]] = {}
        for record in records:
            grouped.setdefault(key_fn(record), []).append(record)
        return grouped

    def group_average(
        self,
        records: Sequence[PostRecord],
        *key_fns: KeyFn
    ) -> Dict[Any, float]:
        """
        Calculate mean Likes per group.

        With one key function the result is keyed by that key; with two it is
        keyed by (outer, inner) tuples. A group exists only when at least one
        record maps to it.

        Args:
            records: Source records
            key_fns: One or two key functions

        Returns:
            Dict mapping group key to mean Likes

        Raises:
            InvalidInputError: If zero or more than two key functions are given
        """
        if not 1 <= len(key_fns) <= MAX_GROUP_KEYS:
            raise InvalidInputError(
                f"group_average takes 1 to {MAX_GROUP_KEYS} key functions, got {len(key_fns)}"
            )

        if len(key_fns) == 1:
            key_fn = key_fns[0]
        else:
            outer_fn, inner_fn = key_fns
            key_fn = lambda record: (outer_fn(record), inner_fn(record))  # noqa: E731

        grouped = self.group_records(records, key_fn)
        return {
            key: self.stats.mean(record.likes for record in group)
            for key, group in grouped.items()
        }

    def quartiles_by_platform(self, records: Sequence[PostRecord]) -> Dict[str, Quartiles]:
        """
        Calculate the Likes five-number summary for each platform.

        Raises:
            InvalidInputError: If there are no records
        """
        if not records:
            raise InvalidInputError("Cannot calculate quartiles of an empty dataset")

        grouped = self.group_records(records, by_platform)
        quartiles = {}
        for platform, group in grouped.items():
            quartiles[platform] = self.stats.quartiles(record.likes for record in group)
            logger.debug(f"{platform}: {len(group)} posts, median likes {quartiles[platform].median:g}")
        return quartiles

    def averages_by_platform_post_type(
        self,
        records: Sequence[PostRecord]
    ) -> List[PlatformPostTypeAverage]:
        """
        Calculate mean Likes for each (Platform, PostType) pair.

        Ordered by platform first occurrence, then post type first occurrence
        within that platform.
        """
        averages = self.group_average(records, by_platform, by_post_type)

        # Nest by platform so inner order follows first occurrence within the platform
        nested: Dict[str, Dict[str, float]] = {}
        for (platform, post_type), avg_likes in averages.items():
            nested.setdefault(platform, {})[post_type] = avg_likes

        return [
            PlatformPostTypeAverage(platform=platform, post_type=post_type, avg_likes=avg_likes)
            for platform, post_types in nested.items()
            for post_type, avg_likes in post_types.items()
        ]

    def averages_by_date(self, records: Sequence[PostRecord]) -> List[DateAverage]:
        """
        Calculate mean Likes per distinct date, sorted chronologically.
        """
        averages = self.group_average(records, by_date)
        date_averages = [
            DateAverage(date=post_date, avg_likes=avg_likes)
            for post_date, avg_likes in averages.items()
        ]
        date_averages.sort(key=lambda average: average.date)
        return date_averages

    def aggregate(self, records: Sequence[PostRecord]) -> AggregationResult:
        """
        Run all chart rollups over a dataset.

        Args:
            records: Parsed post records

        Returns:
            AggregationResult with every derived collection

        Raises:
            InvalidInputError: If there are no records
        """
        if not records:
            raise InvalidInputError("Cannot aggregate an empty dataset")

        logger.info(f"[...] Aggregating {len(records)} post records")

        quartiles = self.quartiles_by_platform(records)
        platform_post_type_averages = self.averages_by_platform_post_type(records)
        date_averages = self.averages_by_date(records)

        result = AggregationResult(
            quartiles_by_platform=quartiles,
            platform_post_type_averages=platform_post_type_averages,
            date_averages=date_averages,
            platforms=ScaleCalculator.band_domain(records, by_platform),
            post_types=ScaleCalculator.band_domain(records, by_post_type),
            max_likes=max(record.likes for record in records),
            date_range=ScaleCalculator.date_extent(records),
            record_count=len(records),
            platform_counts={
                platform: len(group)
                for platform, group in self.group_records(records, by_platform).items()
            }
        )

        logger.info(
            f"[OK] Aggregated {len(quartiles)} platforms, "
            f"{len(platform_post_type_averages)} platform/post type pairs, "
            f"{len(date_averages)} dates"
        )
        return result
