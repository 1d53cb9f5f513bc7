from __future__ import annotations

from dataclasses import dataclass

from ..services.errors import ResolutionError
from .heating_record import HeatingQuery, HeatingRecord

"""Result type returned by DataResolver.resolve().

A Resolution holds either a HeatingRecord or a ResolutionError, never both.
``locations`` is the distinct location list of the fetched table when the
location column could be determined, and None when resolution failed before
that point.
"""

__all__ = [
    "Resolution",
]


@dataclass(frozen=True)
class Resolution:
    query: HeatingQuery
    record: HeatingRecord | None = None
    error: ResolutionError | None = None
    locations: tuple[str, ...] | None = None

    def __post_init__(self) -> None:
        if (self.record is None) == (self.error is None):
            raise ValueError("Resolution requires exactly one of record or error")

    @classmethod
    def success(
        cls, query: HeatingQuery, record: HeatingRecord, locations: list[str] | tuple[str, ...]
    ) -> Resolution:
        return cls(query=query, record=record, locations=tuple(locations))

    @classmethod
    def failure(
        cls,
        query: HeatingQuery,
        error: ResolutionError,
        locations: list[str] | tuple[str, ...] | None = None,
    ) -> Resolution:
        return cls(
            query=query,
            error=error,
            locations=tuple(locations) if locations is not None else None,
        )

    @property
    def ok(self) -> bool:
        return self.record is not None

    @property
    def message(self) -> str | None:
        """Human-readable error message, None on success."""
        return str(self.error) if self.error is not None else None

    def unwrap(self) -> HeatingRecord:
        """Return the record or raise the stored ResolutionError."""
        if self.error is not None:
            raise self.error
        if self.record is None:
            raise ValueError("resolution holds neither a record nor an error")
        return self.record
