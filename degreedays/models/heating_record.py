from __future__ import annotations

from dataclasses import dataclass

from .months import month_for

"""Query and record models for a single location/month lookup.

HeatingQuery is the immutable input of DataResolver.resolve(); HeatingRecord
is the value it produces on success. Both are frozen: a new query or a new
resolution always replaces them wholesale.
"""

__all__ = [
    "HeatingQuery",
    "HeatingRecord",
]


@dataclass(frozen=True)
class HeatingQuery:
    """Selection made by the user: year, zero-based month and location text."""
    year: int
    month: int  # 0..11
    location_query: str

    def __post_init__(self) -> None:
        # Validates the month index (raises ValueError)
        month_for(self.month)

    @property
    def month_name(self) -> str:
        return month_for(self.month).name

    @property
    def month_roman(self) -> str:
        return month_for(self.month).roman

    @property
    def month_label(self) -> str:
        """Human label, e.g. ``January 2024``."""
        return f"{self.month_name} {self.year}"


@dataclass(frozen=True)
class HeatingRecord:
    """Resolved heating requirement for one location and month.

    heating_requirement is the raw cell string from the CSV (degree-days);
    no numeric conversion is applied.
    """
    location: str
    month_label: str
    heating_requirement: str
    data_year: int
