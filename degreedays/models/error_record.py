from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from datetime import UTC, datetime

"""ErrorRecord model for the JSON Lines error log.

One record per failed resolution. The key set is fixed:
timestamp, year, month, location_query, error_type, message.
"""

__all__ = [
    "ErrorRecord",
]


@dataclass(frozen=True)
class ErrorRecord:
    """Structured record of a failed resolution.

    Attributes:
        timestamp: ISO8601 UTC timestamp with 'Z' suffix
        year: Requested data year
        month: Roman numeral header of the requested month (I..XII)
        location_query: Location text as entered by the user
        error_type: Error classification in UPPER_SNAKE_CASE format
        message: Human-readable error message shown to the user
    """
    timestamp: str  # ISO8601 UTC
    year: int
    month: str
    location_query: str
    error_type: str  # UPPER_SNAKE
    message: str

    @staticmethod
    def create(year: int, month: str, location_query: str, error_type: str, message: str) -> ErrorRecord:
        """Create a new ErrorRecord with current UTC timestamp."""
        ts = datetime.now(UTC).isoformat().replace("+00:00", "Z")
        return ErrorRecord(
            timestamp=ts,
            year=year,
            month=month,
            location_query=location_query,
            error_type=error_type,
            message=message,
        )

    def to_json_line(self) -> str:
        """Serialize to one JSON Lines entry (no extra keys)."""
        return json.dumps(asdict(self), ensure_ascii=False)
