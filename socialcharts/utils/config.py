"""
SocialMediaCharts - Configuration Management

This module handles loading and validating configuration from environment variables
and configuration files.
"""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional

from dotenv import load_dotenv

from socialcharts.calculators.scale_calculator import DEFAULT_PALETTE
from socialcharts.models.records import DATE_FORMAT


@dataclass
class DataConfig:
    """Configuration for the posts dataset source."""
    csv_path: Path = field(default_factory=lambda: Path("data/socialMedia.csv"))
    csv_url: Optional[str] = None
    date_format: str = DATE_FORMAT


@dataclass
class ChartConfig:
    """Configuration for chart geometry and colors."""
    width: int = 600
    height: int = 400

    # Margins (pixels)
    margin_top: int = 20
    margin_right: int = 30
    margin_bottom: int = 40
    margin_left: int = 50

    box_fill: str = "lightblue"
    box_line: str = "black"
    line_color: str = "#1f77b4"
    line_width: int = 2
    palette: List[str] = field(default_factory=lambda: list(DEFAULT_PALETTE))

    @property
    def margin(self) -> Dict[str, int]:
        """Margins in Plotly layout form."""
        return {
            "t": self.margin_top,
            "r": self.margin_right,
            "b": self.margin_bottom,
            "l": self.margin_left
        }


@dataclass
class DashboardConfig:
    """Configuration for the Dash server."""
    host: str = "127.0.0.1"
    port: int = 8050
    debug: bool = False
    title: str = "Social Media Engagement"


@dataclass
class OperationalConfig:
    """Configuration for remote dataset fetches."""
    fetch_timeout: float = 30.0
    max_retries: int = 3
    retry_delay: float = 1.0

    def __post_init__(self):
        """Validate fetch settings."""
        if self.max_retries < 1:
            raise ValueError(f"MAX_RETRIES must be at least 1, got {self.max_retries}")
        if self.fetch_timeout <= 0:
            raise ValueError(f"FETCH_TIMEOUT must be positive, got {self.fetch_timeout}")
        if self.retry_delay < 0:
            raise ValueError(f"RETRY_DELAY must not be negative, got {self.retry_delay}")


@dataclass
class LoggingConfig:
    """Configuration for console and rotating file logs."""
    level: str = "INFO"
    file_name: str = "socialcharts.log"
    max_bytes: int = 10 * 1024 * 1024  # 10 MB
    backup_count: int = 5

    def __post_init__(self):
        """Normalize and validate the level name."""
        self.level = self.level.upper()
        if not isinstance(logging.getLevelName(self.level), int):
            raise ValueError(f"LOG_LEVEL must be a logging level name, got {self.level!r}")

    @property
    def level_number(self) -> int:
        """Numeric logging level."""
        return logging.getLevelName(self.level)


@dataclass
class Config:
    """
    Main configuration class that aggregates all configuration sections.

    Loads configuration from environment variables with .env file support.
    """
    data: DataConfig = field(default_factory=DataConfig)
    charts: ChartConfig = field(default_factory=ChartConfig)
    dashboard: DashboardConfig = field(default_factory=DashboardConfig)
    operational: OperationalConfig = field(default_factory=OperationalConfig)
    logs: LoggingConfig = field(default_factory=LoggingConfig)

    # Paths
    log_dir: Path = field(default_factory=lambda: Path("data/logs"))
    export_dir: Path = field(default_factory=lambda: Path("data/exports"))

    def __post_init__(self):
        """Load configuration from environment after initialization."""
        # Load .env file if it exists
        env_file = Path(".env")
        if env_file.exists():
            load_dotenv(env_file)

        # Load data source configuration
        self.data = DataConfig(
            csv_path=Path(os.getenv("SOCIAL_DATA_FILE", str(self.data.csv_path))),
            csv_url=os.getenv("SOCIAL_DATA_URL") or self.data.csv_url,
            date_format=os.getenv("SOCIAL_DATE_FORMAT", self.data.date_format)
        )

        # Load chart configuration
        self.charts = ChartConfig(
            width=self._get_int_env("CHART_WIDTH", self.charts.width),
            height=self._get_int_env("CHART_HEIGHT", self.charts.height),
            margin_top=self._get_int_env("CHART_MARGIN_TOP", self.charts.margin_top),
            margin_right=self._get_int_env("CHART_MARGIN_RIGHT", self.charts.margin_right),
            margin_bottom=self._get_int_env("CHART_MARGIN_BOTTOM", self.charts.margin_bottom),
            margin_left=self._get_int_env("CHART_MARGIN_LEFT", self.charts.margin_left),
            box_fill=self.charts.box_fill,
            box_line=self.charts.box_line,
            line_color=self.charts.line_color,
            line_width=self.charts.line_width,
            palette=self.charts.palette
        )

        # Load dashboard configuration
        self.dashboard = DashboardConfig(
            host=os.getenv("DASH_HOST", self.dashboard.host),
            port=self._get_int_env("DASH_PORT", self.dashboard.port),
            debug=os.getenv("DASH_DEBUG", str(self.dashboard.debug)).lower() in ("1", "true", "yes"),
            title=self.dashboard.title
        )

        # Load operational configuration
        self.operational = OperationalConfig(
            fetch_timeout=self._get_float_env("FETCH_TIMEOUT", self.operational.fetch_timeout),
            max_retries=self._get_int_env("MAX_RETRIES", self.operational.max_retries),
            retry_delay=self._get_float_env("RETRY_DELAY", self.operational.retry_delay)
        )

        # Load logging configuration
        self.logs = LoggingConfig(
            level=os.getenv("LOG_LEVEL", self.logs.level),
            file_name=os.getenv("LOG_FILE", self.logs.file_name),
            max_bytes=self._get_int_env("LOG_MAX_BYTES", self.logs.max_bytes),
            backup_count=self._get_int_env("LOG_BACKUP_COUNT", self.logs.backup_count)
        )

        self.log_dir = Path(os.getenv("LOG_DIR", str(self.log_dir)))
        self.export_dir = Path(os.getenv("EXPORT_DIR", str(self.export_dir)))

        # Ensure data directories exist
        self._ensure_directories()

    def _get_int_env(self, key: str, default: int) -> int:
        """
        Get an integer environment variable.

        Args:
            key: Environment variable name
            default: Value when the variable is not set

        Returns:
            Parsed integer value

        Raises:
            ValueError: If the variable is set but is not an integer
        """
        value = os.getenv(key)
        if value is None:
            return default
        try:
            return int(value)
        except ValueError:
            raise ValueError(f"Environment variable {key} must be an integer, got {value!r}")

    def _get_float_env(self, key: str, default: float) -> float:
        """Get a float environment variable (ValueError if not numeric)."""
        value = os.getenv(key)
        if value is None:
            return default
        try:
            return float(value)
        except ValueError:
            raise ValueError(f"Environment variable {key} must be a number, got {value!r}")

    def _ensure_directories(self) -> None:
        """Create data directories if they don't exist."""
        for directory in [self.log_dir, self.export_dir]:
            directory.mkdir(parents=True, exist_ok=True)
