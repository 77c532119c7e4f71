"""
SocialMediaCharts - Exceptions

Errors raised while loading, parsing, and aggregating post data.
"""

from typing import Optional


class SocialChartsError(Exception):
    """Base class for all SocialMediaCharts errors."""


class ParseError(SocialChartsError):
    """
    Exception raised when a CSV row cannot be parsed into a PostRecord.

    Carries the 1-based data row number, the offending column and its raw value
    so callers can point the user at the bad cell.
    """
    def __init__(
        self,
        message: str,
        row_number: Optional[int] = None,
        column: Optional[str] = None,
        value: Optional[str] = None
    ):
        super().__init__(message)
        self.row_number = row_number
        self.column = column
        self.value = value


class InvalidInputError(SocialChartsError):
    """Exception raised when aggregation input is empty or out of range."""


class DataLoadError(SocialChartsError):
    """
    Exception raised when the dataset cannot be read from disk or fetched.

    The source is the file path or URL that failed.
    """
    def __init__(self, message: str, source: Optional[str] = None):
        super().__init__(message)
        self.source = source
