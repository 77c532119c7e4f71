"""
SocialMediaCharts - Record Models

Source records parsed from the posts CSV and the summary records derived from them.
Grain: one PostRecord per post; derived records per Platform, Platform x PostType, Date.
"""

from dataclasses import dataclass, field
from datetime import date
from typing import Dict, List, Optional, Tuple


# Date format used by the source CSV and by exports
DATE_FORMAT = "%m/%d/%Y"


@dataclass(frozen=True)
class PostRecord:
    """
    A single social-media post.

    Immutable once parsed; equality is by value.
    """
    platform: str
    date: date
    post_type: str
    likes: int  # non-negative

    def to_dict(self) -> dict:
        """Convert to dictionary using the source CSV column names."""
        return {
            "Platform": self.platform,
            "Date": self.date.strftime(DATE_FORMAT),
            "PostType": self.post_type,
            "Likes": self.likes
        }


@dataclass(frozen=True)
class Quartiles:
    """
    Five-number summary of Likes for one platform.

    Invariant: min <= q1 <= median <= q3 <= max
    """
    min: float
    q1: float
    median: float
    q3: float
    max: float

    @property
    def iqr(self) -> float:
        """Interquartile range (q3 - q1)."""
        return self.q3 - self.q1

    def to_dict(self) -> dict:
        """Convert to dictionary for export and chart consumption."""
        return {
            "min": self.min,
            "q1": self.q1,
            "median": self.median,
            "q3": self.q3,
            "max": self.max
        }


@dataclass(frozen=True)
class PlatformPostTypeAverage:
    """Mean Likes for one (Platform, PostType) pair."""
    platform: str
    post_type: str
    avg_likes: float

    def to_dict(self) -> dict:
        """Convert to dictionary using the source CSV column names."""
        return {
            "Platform": self.platform,
            "PostType": self.post_type,
            "AvgLikes": self.avg_likes
        }


@dataclass(frozen=True)
class DateAverage:
    """Mean Likes for one calendar date."""
    date: date
    avg_likes: float

    def to_dict(self) -> dict:
        """Convert to dictionary using the source CSV column names."""
        return {
            "Date": self.date.strftime(DATE_FORMAT),
            "AvgLikes": self.avg_likes
        }


@dataclass(frozen=True)
class AggregationResult:
    """
    All derived collections for one load of the dataset.

    Platform and post type orders are first-occurrence order in the source and
    drive the display order of the box and bar charts.
    """
    quartiles_by_platform: Dict[str, Quartiles]
    platform_post_type_averages: List[PlatformPostTypeAverage]
    date_averages: List[DateAverage]
    platforms: List[str] = field(default_factory=list)
    post_types: List[str] = field(default_factory=list)
    max_likes: int = 0
    date_range: Optional[Tuple[date, date]] = None
    record_count: int = 0
    platform_counts: Dict[str, int] = field(default_factory=dict)

    def to_dict(self) -> dict:
        """Convert to a JSON-friendly summary."""
        return {
            "record_count": self.record_count,
            "max_likes": self.max_likes,
            "platforms": list(self.platforms),
            "post_types": list(self.post_types),
            "date_range": [d.strftime(DATE_FORMAT) for d in self.date_range] if self.date_range else [],
            "platform_counts": dict(self.platform_counts),
            "quartiles_by_platform": {
                platform: quartiles.to_dict()
                for platform, quartiles in self.quartiles_by_platform.items()
            },
            "platform_post_type_averages": [a.to_dict() for a in self.platform_post_type_averages],
            "date_averages": [a.to_dict() for a in self.date_averages]
        }
