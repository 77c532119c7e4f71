"""
SocialMediaCharts - Logging Configuration

Console and rotating-file logging driven by LoggingConfig, plus a scoped
level override for verbose runs.
"""

import logging
import logging.handlers
import sys
from pathlib import Path
from typing import Dict, Optional, Sequence

from socialcharts.utils.config import LoggingConfig


CONSOLE_FORMAT = "%(asctime)s | %(levelname)-8s | %(message)s"
FILE_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(funcName)s:%(lineno)d | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

APP_LOGGERS = [
    "socialcharts.loaders",
    "socialcharts.calculators",
    "socialcharts.aggregators",
    "socialcharts.dashboard",
    "socialcharts.models",
    "socialcharts.utils",
    "socialcharts.main"
]

# Loggers on the load -> parse -> aggregate path
DATA_PATH_LOGGERS = [
    "socialcharts.loaders",
    "socialcharts.aggregators",
    "socialcharts.calculators",
    "socialcharts.dashboard.data_provider"
]

NOISY_LIBRARIES = ["werkzeug", "aiohttp", "urllib3"]


def _build_file_handler(log_path: Path, log_config: LoggingConfig) -> logging.Handler:
    """Rotating file handler that keeps everything the loggers let through."""
    handler = logging.handlers.RotatingFileHandler(
        log_path,
        maxBytes=log_config.max_bytes,
        backupCount=log_config.backup_count,
        encoding="utf-8"
    )
    handler.setFormatter(logging.Formatter(fmt=FILE_FORMAT, datefmt=DATE_FORMAT))
    return handler


def setup_logging(
    log_dir: Path = Path("data/logs"),
    log_config: Optional[LoggingConfig] = None,
    level: Optional[int] = None
) -> logging.Logger:
    """
    Configure application-wide logging.

    Handlers carry no level of their own; the root and application logger
    levels decide what is emitted, so LogContext can open up DEBUG output
    for a single step.

    Args:
        log_dir: Directory for the log file (created if missing)
        log_config: File name, rotation and default level (defaults if None)
        level: Overrides log_config.level when given

    Returns:
        Root logger instance
    """
    log_config = log_config or LoggingConfig()
    if level is None:
        level = log_config.level_number

    log_dir = Path(log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    for handler in list(root_logger.handlers):
        handler.close()
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(logging.Formatter(fmt=CONSOLE_FORMAT, datefmt=DATE_FORMAT))
    root_logger.addHandler(console_handler)
    root_logger.addHandler(_build_file_handler(log_dir / log_config.file_name, log_config))

    configure_module_loggers(level)

    return root_logger


def configure_module_loggers(default_level: int = logging.INFO) -> None:
    """
    Set application loggers to default_level and quiet third-party libraries.

    Args:
        default_level: Level for socialcharts loggers
    """
    for name in APP_LOGGERS:
        logging.getLogger(name).setLevel(default_level)

    for name in NOISY_LIBRARIES:
        logging.getLogger(name).setLevel(logging.WARNING)


class LogContext:
    """
    Context manager that sets several loggers to one level and restores them.

    The CLI wraps dataset loading in LogContext(DATA_PATH_LOGGERS, DEBUG)
    when --verbose is given.
    """

    def __init__(self, logger_names: Sequence[str], level: int):
        self.loggers = [logging.getLogger(name) for name in logger_names]
        self.level = level
        self.saved_levels: Dict[str, int] = {}

    def __enter__(self) -> "LogContext":
        for logger in self.loggers:
            self.saved_levels[logger.name] = logger.level
            logger.setLevel(self.level)
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        for logger in self.loggers:
            logger.setLevel(self.saved_levels.get(logger.name, logging.NOTSET))
        return False
