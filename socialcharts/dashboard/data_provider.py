"""
SocialMediaCharts - Dashboard Data Provider

Loads the posts dataset, runs the aggregator once per load, and provides
chart-ready data structures for dashboard consumption.
"""

import logging
import threading
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from socialcharts.aggregators.post_aggregator import PostAggregator
from socialcharts.calculators.scale_calculator import DEFAULT_PALETTE, ScaleCalculator
from socialcharts.loaders.csv_loader import load_records
from socialcharts.loaders.remote_loader import fetch_records_sync
from socialcharts.models.errors import SocialChartsError
from socialcharts.models.records import AggregationResult, PostRecord
from socialcharts.utils.config import DataConfig, OperationalConfig


logger = logging.getLogger(__name__)


class SocialMediaDataProvider:
    """
    Data provider for the Social Media dashboard.

    Holds the most recent successful AggregationResult. A failed refresh
    keeps the previous result and records the error for display.

    Dash may serve callbacks from several threads, so load state is swapped
    under a lock and renders work from one snapshot (see chart_data).
    """

    def __init__(
        self,
        data_config: Optional[DataConfig] = None,
        operational_config: Optional[OperationalConfig] = None,
        aggregator: Optional[PostAggregator] = None,
        palette: Optional[List[str]] = None
    ):
        """
        Initialize the data provider.

        Args:
            data_config: Dataset source settings (defaults if None)
            operational_config: Remote fetch settings (defaults if None)
            aggregator: Aggregator instance (creates default if None)
            palette: Post type color palette
        """
        self.data_config = data_config or DataConfig()
        self.operational_config = operational_config or OperationalConfig()
        self.aggregator = aggregator or PostAggregator()
        self.palette = list(palette or DEFAULT_PALETTE)

        self._lock = threading.Lock()
        self.result: Optional[AggregationResult] = None
        self.last_loaded: Optional[datetime] = None
        self.last_error: Optional[str] = None

    @property
    def source(self) -> str:
        """Description of the configured data source."""
        return self.data_config.csv_url or str(self.data_config.csv_path)

    def fetch_records(self) -> List[PostRecord]:
        """
        Read records from the configured URL, or the CSV file when no URL is set.

        Raises:
            DataLoadError: If the source cannot be read
            ParseError: If the CSV is malformed
        """
        if self.data_config.csv_url:
            return fetch_records_sync(
                self.data_config.csv_url,
                self.operational_config,
                self.data_config.date_format
            )
        return load_records(self.data_config.csv_path, self.data_config.date_format)

    def load_from_records(self, records: List[PostRecord]) -> AggregationResult:
        """
        Aggregate an in-memory dataset and make it current.

        Raises:
            InvalidInputError: If records are empty
        """
        result = self.aggregator.aggregate(records)
        with self._lock:
            self.result = result
            self.last_loaded = datetime.now(timezone.utc)
            self.last_error = None
        return result

    def load(self) -> AggregationResult:
        """
        Load and aggregate the configured data source.

        Raises:
            SocialChartsError: On load, parse, or aggregation failure
        """
        logger.debug(f"Loading dataset from {self.source}")
        return self.load_from_records(self.fetch_records())

    def refresh(self) -> bool:
        """
        Reload the data source, keeping the previous result on failure.

        Returns:
            True if the reload succeeded
        """
        try:
            self.load()
        except SocialChartsError as error:
            with self._lock:
                self.last_error = str(error)
            logger.error(f"[ERROR] Refresh from {self.source} failed: {error}")
            return False
        logger.info(f"[OK] Refreshed data from {self.source}")
        return True

    def chart_data(self) -> Dict[str, Dict[str, Any]]:
        """
        Get the header summary and all three chart inputs from one read of the state.

        Returns:
            Dict with "summary", "box", "bar" and "line" entries
        """
        with self._lock:
            result = self.result
            last_loaded = self.last_loaded
            last_error = self.last_error

        return {
            "summary": self._summary(result, last_loaded, last_error),
            "box": self._box_data(result),
            "bar": self._bar_data(result),
            "line": self._line_data(result)
        }

    def get_box_data(self) -> Dict[str, Any]:
        """Get quartiles per platform for the box plot."""
        return self._box_data(self.result)

    def get_bar_data(self) -> Dict[str, Any]:
        """Get averages per platform and post type for the grouped bar chart."""
        return self._bar_data(self.result)

    def get_line_data(self) -> Dict[str, Any]:
        """Get chronological averages per date for the line chart."""
        return self._line_data(self.result)

    def get_summary(self) -> Dict[str, Any]:
        """Get load status and dataset totals for the header."""
        return self.chart_data()["summary"]

    @staticmethod
    def _y_domain(result: AggregationResult) -> tuple:
        """Shared y-axis domain: [0, max Likes] rounded to a nice boundary."""
        return ScaleCalculator.nice_linear_domain(result.max_likes)

    def _box_data(self, result: Optional[AggregationResult]) -> Dict[str, Any]:
        if result is None:
            return {"platforms": [], "quartiles": {}, "y_domain": (0, 0)}

        return {
            "platforms": list(result.platforms),
            "quartiles": {
                platform: quartiles.to_dict()
                for platform, quartiles in result.quartiles_by_platform.items()
            },
            "y_domain": self._y_domain(result)
        }

    def _bar_data(self, result: Optional[AggregationResult]) -> Dict[str, Any]:
        if result is None:
            return {"platforms": [], "post_types": [], "averages": [], "colors": {}, "y_domain": (0, 0)}

        return {
            "platforms": list(result.platforms),
            "post_types": list(result.post_types),
            "averages": [average.to_dict() for average in result.platform_post_type_averages],
            "colors": ScaleCalculator.ordinal_colors(result.post_types, self.palette),
            "y_domain": self._y_domain(result)
        }

    def _line_data(self, result: Optional[AggregationResult]) -> Dict[str, Any]:
        if result is None:
            return {"dates": [], "avg_likes": [], "x_domain": None, "y_domain": (0, 0)}

        return {
            "dates": [average.date for average in result.date_averages],
            "avg_likes": [average.avg_likes for average in result.date_averages],
            "x_domain": result.date_range,
            "y_domain": self._y_domain(result)
        }

    def _summary(
        self,
        result: Optional[AggregationResult],
        last_loaded: Optional[datetime],
        last_error: Optional[str]
    ) -> Dict[str, Any]:
        return {
            "source": self.source,
            "loaded": result is not None,
            "record_count": result.record_count if result else 0,
            "platform_count": len(result.platforms) if result else 0,
            "last_loaded": last_loaded.isoformat() if last_loaded else None,
            "last_error": last_error
        }
