"""
SocialMediaCharts - CSV Exporter Tests

Unit tests for writing aggregate CSV files.
"""

import csv
import shutil
import tempfile
import unittest
from datetime import date
from pathlib import Path

from socialcharts.aggregators.post_aggregator import PostAggregator
from socialcharts.loaders.csv_exporter import (
    CSVExporter,
    DATE_FILE,
    PLATFORM_POST_TYPE_FILE,
    QUARTILES_FILE
)
from socialcharts.models.records import PostRecord


class TestCSVExporter(unittest.TestCase):
    """Test cases for CSVExporter."""

    def setUp(self):
        """Set up test fixtures."""
        self.temp_dir = Path(tempfile.mkdtemp())
        records = [
            PostRecord("Instagram", date(2024, 3, 2), "Video", 100),
            PostRecord("Instagram", date(2024, 3, 1), "Image", 300),
            PostRecord("Facebook", date(2024, 3, 1), "Image", 40),
        ]
        self.result = PostAggregator().aggregate(records)

    def tearDown(self):
        """Remove the temporary directory."""
        shutil.rmtree(self.temp_dir, ignore_errors=True)

    def _read_rows(self, path: Path):
        """Helper to read an exported CSV as dict rows."""
        with path.open(newline="", encoding="utf-8") as csv_file:
            return list(csv.DictReader(csv_file))

    def test_export_writes_three_files(self):
        """Test one file per chart is written into a new directory."""
        export_dir = self.temp_dir / "nested" / "exports"

        written = CSVExporter().export(self.result, export_dir)

        self.assertEqual(
            [path.name for path in written],
            [QUARTILES_FILE, PLATFORM_POST_TYPE_FILE, DATE_FILE]
        )
        for path in written:
            self.assertTrue(path.exists())

    def test_quartiles_file_content(self):
        """Test quartile rows per platform with header."""
        CSVExporter().export(self.result, self.temp_dir)

        rows = self._read_rows(self.temp_dir / QUARTILES_FILE)

        self.assertEqual([row["Platform"] for row in rows], ["Instagram", "Facebook"])
        self.assertEqual(float(rows[0]["Median"]), 200.0)
        self.assertEqual(float(rows[1]["Max"]), 40.0)

    def test_date_file_is_chronological(self):
        """Test date averages are written oldest first in MM/DD/YYYY."""
        CSVExporter().export(self.result, self.temp_dir)

        rows = self._read_rows(self.temp_dir / DATE_FILE)

        self.assertEqual([row["Date"] for row in rows], ["03/01/2024", "03/02/2024"])
        self.assertEqual(float(rows[0]["AvgLikes"]), 170.0)

    def test_platform_post_type_file_content(self):
        """Test platform/post type averages keep source column names."""
        CSVExporter().export(self.result, self.temp_dir)

        rows = self._read_rows(self.temp_dir / PLATFORM_POST_TYPE_FILE)

        self.assertEqual(list(rows[0].keys()), ["Platform", "PostType", "AvgLikes"])
        self.assertEqual(len(rows), 3)


if __name__ == "__main__":
    unittest.main()
