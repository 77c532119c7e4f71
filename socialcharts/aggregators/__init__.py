"""
SocialMediaCharts - Aggregators Package

Rollups of post records into chart summaries.
"""

from socialcharts.aggregators.post_aggregator import (
    PostAggregator,
    by_platform,
    by_post_type,
    by_date
)

__all__ = [
    "PostAggregator",
    "by_platform",
    "by_post_type",
    "by_date"
]
