from __future__ import annotations

"""Resolution error hierarchy.

Each error carries one human-readable message (``str(err)``) that the
rendering layer shows as-is, plus an UPPER_SNAKE ``error_type`` used by the
JSON Lines error log and the SUMMARY line.
"""

__all__ = [
    "ResolutionError",
    "FetchError",
    "ParseError",
    "SchemaError",
    "NotFoundError",
    "NO_LOCATION_COLUMN",
    "MISSING_MONTH_COLUMN",
]

NO_LOCATION_COLUMN = "no location column"
MISSING_MONTH_COLUMN = "missing month column"


class ResolutionError(Exception):
    """Base class for a failed resolution attempt."""

    error_type = "RESOLUTION_ERROR"


class FetchError(ResolutionError):
    """Network/transport failure or non-success HTTP status."""

    error_type = "FETCH_ERROR"

    def __init__(self, detail: str, status_code: int | None = None) -> None:
        super().__init__(f"Error fetching data: {detail}")
        self.detail = detail
        self.status_code = status_code


class ParseError(ResolutionError):
    """Malformed CSV or a table with zero data rows."""

    error_type = "PARSE_ERROR"

    def __init__(self, message: str, diagnostic: str | None = None) -> None:
        super().__init__(message)
        self.diagnostic = diagnostic

    @classmethod
    def from_parser(cls, diagnostic: str) -> ParseError:
        return cls(f"Error parsing CSV: {diagnostic}", diagnostic=diagnostic)

    @classmethod
    def empty(cls) -> ParseError:
        return cls("No data available for this year")


class SchemaError(ResolutionError):
    """An expected column is absent (location column or month column)."""

    error_type = "SCHEMA_ERROR"

    def __init__(self, reason: str, message: str) -> None:
        super().__init__(message)
        self.reason = reason

    @classmethod
    def no_location_column(cls) -> SchemaError:
        return cls(NO_LOCATION_COLUMN, "Could not find location column in CSV data")

    @classmethod
    def missing_month_column(cls, month_name: str) -> SchemaError:
        return cls(MISSING_MONTH_COLUMN, f"No data found for {month_name}")


class NotFoundError(ResolutionError):
    """The queried location matched no row under either matching pass."""

    error_type = "NOT_FOUND"

    def __init__(self, location_query: str, available_locations: list[str]) -> None:
        listing = ", ".join(available_locations) or "none"
        super().__init__(f"No data found for {location_query}. Available locations: {listing}")
        self.location_query = location_query
        self.available_locations = list(available_locations)
