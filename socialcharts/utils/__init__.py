"""
SocialMediaCharts - Utilities Package

Configuration and logging helpers.
"""

from socialcharts.utils.config import (
    Config,
    DataConfig,
    ChartConfig,
    DashboardConfig,
    OperationalConfig,
    LoggingConfig
)
from socialcharts.utils.logging_config import setup_logging, LogContext

__all__ = [
    "Config",
    "DataConfig",
    "ChartConfig",
    "DashboardConfig",
    "OperationalConfig",
    "LoggingConfig",
    "setup_logging",
    "LogContext"
]
