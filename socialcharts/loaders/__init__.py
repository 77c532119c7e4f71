"""
SocialMediaCharts - Loaders Package

CSV parsing, remote fetch, and export modules.
"""

from socialcharts.loaders.csv_loader import (
    REQUIRED_COLUMNS,
    PostRecordParser,
    parse_records,
    load_records,
    load_records_from_text
)
from socialcharts.loaders.csv_exporter import CSVExporter, export_tables
from socialcharts.loaders.remote_loader import AsyncCSVFetcher, fetch_records_sync

__all__ = [
    "REQUIRED_COLUMNS",
    "PostRecordParser",
    "parse_records",
    "load_records",
    "load_records_from_text",
    "CSVExporter",
    "export_tables",
    "AsyncCSVFetcher",
    "fetch_records_sync"
]
