"""
SocialMediaCharts - CSV Exporter

Writes the derived chart collections to CSV files. The same tables back the
dashboard's per-chart downloads.
"""

import csv
import logging
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Tuple, Union

from socialcharts.models.errors import DataLoadError
from socialcharts.models.records import AggregationResult


logger = logging.getLogger(__name__)

QUARTILES_FILE = "quartiles_by_platform.csv"
PLATFORM_POST_TYPE_FILE = "avg_likes_by_platform_post_type.csv"
DATE_FILE = "avg_likes_by_date.csv"

QUARTILE_COLUMNS = ["Platform", "Min", "Q1", "Median", "Q3", "Max"]
PLATFORM_POST_TYPE_COLUMNS = ["Platform", "PostType", "AvgLikes"]
DATE_COLUMNS = ["Date", "AvgLikes"]

# file name -> (header, rows)
ExportTables = Dict[str, Tuple[List[str], List[Dict]]]


def export_tables(result: Optional[AggregationResult]) -> ExportTables:
    """
    Build the header and rows of every export file.

    Args:
        result: Aggregation output, or None when nothing is loaded

    Returns:
        Mapping of file name to (columns, rows); rows are empty for None
    """
    if result is None:
        return {
            QUARTILES_FILE: (QUARTILE_COLUMNS, []),
            PLATFORM_POST_TYPE_FILE: (PLATFORM_POST_TYPE_COLUMNS, []),
            DATE_FILE: (DATE_COLUMNS, [])
        }

    quartile_rows = [
        {
            "Platform": platform,
            "Min": quartiles.min,
            "Q1": quartiles.q1,
            "Median": quartiles.median,
            "Q3": quartiles.q3,
            "Max": quartiles.max
        }
        for platform, quartiles in result.quartiles_by_platform.items()
    ]

    return {
        QUARTILES_FILE: (QUARTILE_COLUMNS, quartile_rows),
        PLATFORM_POST_TYPE_FILE: (
            PLATFORM_POST_TYPE_COLUMNS,
            [average.to_dict() for average in result.platform_post_type_averages]
        ),
        DATE_FILE: (DATE_COLUMNS, [average.to_dict() for average in result.date_averages])
    }


class CSVExporter:
    """Exports an AggregationResult as one CSV file per chart."""

    def export(self, result: AggregationResult, export_dir: Union[str, Path]) -> List[Path]:
        """
        Write all derived collections to export_dir.

        Args:
            result: Aggregation output
            export_dir: Destination directory (created if missing)

        Returns:
            Paths of the written files

        Raises:
            DataLoadError: If a file cannot be written
        """
        directory = Path(export_dir)
        logger.info(f"[...] Exporting aggregates to {directory}")

        written = [
            self._write_rows(directory / file_name, columns, rows)
            for file_name, (columns, rows) in export_tables(result).items()
        ]

        logger.info(f"[OK] Exported {len(written)} files to {directory}")
        return written

    @staticmethod
    def _write_rows(path: Path, fieldnames: Sequence[str], rows: List[Dict]) -> Path:
        """Write dict rows to a CSV file with a header row."""
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            with path.open("w", encoding="utf-8", newline="") as csv_file:
                writer = csv.DictWriter(csv_file, fieldnames=fieldnames)
                writer.writeheader()
                writer.writerows(rows)
        except OSError as error:
            raise DataLoadError(f"Cannot write export {path}: {error}", source=str(path)) from error

        logger.debug(f"Wrote {len(rows)} rows to {path}")
        return path
