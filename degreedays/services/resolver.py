from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from typing import Protocol

from ..models.heating_record import HeatingQuery, HeatingRecord
from ..models.months import month_for
from ..models.resolution import Resolution
from ..table.reader import RawTable, parse_table
from .errors import NotFoundError, ParseError, ResolutionError, SchemaError

"""DataResolver: raw yearly CSV -> one displayable HeatingRecord.

Pipeline per resolve() call (exactly one fetch and one parse, no retries):
1. fetch the year's CSV text
2. parse it (header row, blank lines skipped); zero rows is a ParseError
3. find the location column by header marker substring
4. collect the distinct location names (first-occurrence order)
5. match the query against the location column, exact case first, then
   case-insensitive
6. read the Roman numeral month cell from the matched row
7. build the HeatingRecord
"""

logger = logging.getLogger(__name__)

__all__ = [
    "LOCATION_COLUMN_MARKERS",
    "DataResolver",
    "Fetcher",
    "find_location_column",
    "distinct_locations",
    "match_location",
    "read_month_value",
]

LOCATION_COLUMN_MARKERS: tuple[str, ...] = ("Lämmitystarveluvut", "°Cvrk)")


class Fetcher(Protocol):
    def fetch(self, year: int) -> str: ...


def find_location_column(columns: Sequence[str]) -> str:
    """Return the first header containing a location marker.

    Raises:
        SchemaError: no header matches
    """
    for key in columns:
        if any(marker in key for marker in LOCATION_COLUMN_MARKERS):
            return key
    raise SchemaError.no_location_column()


def distinct_locations(table: RawTable, location_column: str) -> list[str]:
    """Distinct non-empty location names in first-occurrence order."""
    seen: set[str] = set()
    locations: list[str] = []
    for row in table.rows:
        name = row.get(location_column)
        if not name or name in seen:
            continue
        seen.add(name)
        locations.append(name)
    return locations


def match_location(table: RawTable, location_column: str, location_query: str) -> dict[str, str] | None:
    """Return the first row whose location contains the query.

    Two passes over the rows in file order: a case-sensitive containment
    check, then a case-insensitive one. None when both miss.
    """
    for row in table.rows:
        name = row.get(location_column)
        if name and location_query in name:
            return row
    folded = location_query.casefold()
    for row in table.rows:
        name = row.get(location_column)
        if name and folded in name.casefold():
            return row
    return None


def read_month_value(row: dict[str, str], month: int) -> str:
    """Read the Roman numeral month cell; an empty string is valid data.

    Raises:
        SchemaError: the month key is absent from the row
    """
    code = month_for(month)
    if code.roman not in row:
        raise SchemaError.missing_month_column(code.name)
    return row[code.roman]


class DataResolver:
    """Resolve a HeatingQuery against the yearly CSV source.

    Args:
        fetcher: object with ``fetch(year) -> str`` (see source.fetcher.CsvFetcher)
        parser: text -> RawTable; defaults to table.reader.parse_table
        delimiter: field delimiter handed to the default parser
    """

    def __init__(
        self,
        fetcher: Fetcher,
        parser: Callable[[str], RawTable] | None = None,
        delimiter: str = ",",
    ) -> None:
        self.fetcher = fetcher
        self.delimiter = delimiter
        self._parser = parser

    def parse(self, text: str) -> RawTable:
        if self._parser is not None:
            return self._parser(text)
        return parse_table(text, delimiter=self.delimiter)

    def resolve(
        self,
        query: HeatingQuery | int,
        month: int | None = None,
        location_query: str | None = None,
    ) -> Resolution:
        """Resolve one query. Accepts a HeatingQuery or (year, month, location).

        Never raises ResolutionError; failures are returned in the Resolution.
        """
        if not isinstance(query, HeatingQuery):
            if month is None or location_query is None:
                raise TypeError("resolve() needs a HeatingQuery or year, month and location_query")
            query = HeatingQuery(year=query, month=month, location_query=location_query)

        locations: list[str] | None = None
        try:
            text = self.fetcher.fetch(query.year)
            table = self._parse_checked(text)
            location_column = find_location_column(table.columns)
            logger.debug("location column: %r", location_column)
            locations = distinct_locations(table, location_column)

            row = match_location(table, location_column, query.location_query)
            if row is None:
                raise NotFoundError(query.location_query, locations)
            value = read_month_value(row, query.month)
        except ResolutionError as e:
            logger.debug("resolution failed: %s: %s", e.error_type, e)
            return Resolution.failure(query, e, locations)

        record = HeatingRecord(
            location=row[location_column],
            month_label=query.month_label,
            heating_requirement=value,
            data_year=query.year,
        )
        return Resolution.success(query, record, locations)

    def _parse_checked(self, text: str) -> RawTable:
        try:
            table = self.parse(text)
        except ParseError:
            raise
        except Exception as e:
            # custom parsers may raise their own error types
            raise ParseError.from_parser(str(e)) from e
        if len(table.rows) == 0:
            raise ParseError.empty()
        logger.debug("parsed %d rows, %d columns", len(table.rows), len(table.columns))
        return table
