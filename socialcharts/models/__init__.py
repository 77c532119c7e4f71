"""
SocialMediaCharts - Data Models Package

Immutable record types and exceptions.
"""

from socialcharts.models.errors import (
    SocialChartsError,
    ParseError,
    InvalidInputError,
    DataLoadError
)
from socialcharts.models.records import (
    PostRecord,
    Quartiles,
    PlatformPostTypeAverage,
    DateAverage,
    AggregationResult
)

__all__ = [
    "SocialChartsError",
    "ParseError",
    "InvalidInputError",
    "DataLoadError",
    "PostRecord",
    "Quartiles",
    "PlatformPostTypeAverage",
    "DateAverage",
    "AggregationResult"
]
