"""
SocialMediaCharts - CSV Loader

Parses the posts CSV (Platform, Date, PostType, Likes) into PostRecords.
Fails fast on malformed rows instead of letting bad dates or non-numeric
Likes leak into the aggregates.
"""

import csv
import io
import logging
from datetime import date, datetime
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Union

from socialcharts.models.errors import DataLoadError, ParseError
from socialcharts.models.records import DATE_FORMAT, PostRecord


logger = logging.getLogger(__name__)

REQUIRED_COLUMNS = ["Platform", "Date", "PostType", "Likes"]

BOM = "\ufeff"


class PostRecordParser:
    """
    Converts raw CSV rows into validated PostRecords.

    Row numbers in errors are 1-based data lines: the header is not counted,
    blank lines are.
    """

    def __init__(self, date_format: str = DATE_FORMAT):
        """
        Initialize the parser.

        Args:
            date_format: strptime format of the Date column
        """
        self.date_format = date_format

    def parse_date(self, value: str, row_number: int) -> date:
        """Parse the Date cell (ParseError on mismatch)."""
        try:
            return datetime.strptime(value, self.date_format).date()
        except ValueError:
            raise ParseError(
                f"Row {row_number}: invalid Date {value!r} (expected format {self.date_format})",
                row_number=row_number,
                column="Date",
                value=value
            )

    @staticmethod
    def parse_likes(value: str, row_number: int) -> int:
        """Parse the Likes cell as a non-negative integer (ParseError otherwise)."""
        if not (value.isascii() and value.isdigit()):
            raise ParseError(
                f"Row {row_number}: invalid Likes {value!r} (expected a non-negative integer)",
                row_number=row_number,
                column="Likes",
                value=value
            )
        return int(value)

    def parse_row(self, row: Dict[str, Optional[str]], row_number: int) -> PostRecord:
        """
        Parse a single CSV row.

        Args:
            row: Mapping of column name to raw cell value
            row_number: 1-based data line number for error messages

        Returns:
            Parsed PostRecord

        Raises:
            ParseError: If a required cell is missing or malformed
        """
        cells = {}
        for column in REQUIRED_COLUMNS:
            value = row.get(column)
            if value is None:
                raise ParseError(
                    f"Row {row_number}: missing value for column {column}",
                    row_number=row_number,
                    column=column
                )
            value = value.strip()
            if not value:
                raise ParseError(
                    f"Row {row_number}: empty value for column {column}",
                    row_number=row_number,
                    column=column,
                    value=value
                )
            cells[column] = value

        return PostRecord(
            platform=cells["Platform"],
            date=self.parse_date(cells["Date"], row_number),
            post_type=cells["PostType"],
            likes=self.parse_likes(cells["Likes"], row_number)
        )

    def parse_records(self, reader: "csv.DictReader") -> List[PostRecord]:
        """
        Parse all rows from a DictReader.

        Raises:
            ParseError: If a required column is absent or any row is malformed
        """
        # A BOM survives on text fetched over HTTP or read without utf-8-sig
        header = [name.lstrip(BOM).strip() for name in (reader.fieldnames or [])]
        missing = [column for column in REQUIRED_COLUMNS if column not in header]
        if missing:
            raise ParseError(
                f"CSV is missing required column(s): {', '.join(missing)}",
                column=missing[0]
            )
        reader.fieldnames = header
        logger.debug(f"CSV columns: {', '.join(header)}")

        records = []
        for row in reader:
            if not any((value or "").strip() for value in row.values() if isinstance(value, str)):
                logger.debug(f"Skipping blank data line {reader.line_num - 1}")
                continue
            # DictReader skips empty lines silently; line_num still counts them
            records.append(self.parse_row(row, reader.line_num - 1))

        return records


def parse_records(
    rows: Iterable[str],
    date_format: str = DATE_FORMAT
) -> List[PostRecord]:
    """
    Parse CSV lines (header first) into PostRecords.

    Args:
        rows: CSV text lines, starting with the header line
        date_format: strptime format of the Date column

    Returns:
        Parsed records in source order
    """
    return PostRecordParser(date_format).parse_records(csv.DictReader(rows))


def load_records_from_text(text: str, date_format: str = DATE_FORMAT) -> List[PostRecord]:
    """Parse PostRecords from CSV text."""
    records = parse_records(io.StringIO(text), date_format)
    logger.debug(f"Parsed {len(records)} records from CSV text")
    return records


def load_records(path: Union[str, Path], date_format: str = DATE_FORMAT) -> List[PostRecord]:
    """
    Load PostRecords from a CSV file.

    Args:
        path: CSV file path
        date_format: strptime format of the Date column

    Returns:
        Parsed records in file order

    Raises:
        DataLoadError: If the file cannot be read
        ParseError: If the file content is malformed
    """
    csv_path = Path(path)
    logger.info(f"[...] Loading posts from {csv_path}")

    try:
        with csv_path.open("r", encoding="utf-8-sig", newline="") as csv_file:
            records = parse_records(csv_file, date_format)
    except (OSError, UnicodeDecodeError) as error:
        raise DataLoadError(f"Cannot read posts CSV {csv_path}: {error}", source=str(csv_path)) from error

    logger.info(f"[OK] Loaded {len(records)} posts from {csv_path}")
    return records
