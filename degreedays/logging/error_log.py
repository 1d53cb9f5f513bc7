from __future__ import annotations

from datetime import UTC, datetime
from pathlib import Path

from ..models.error_record import ErrorRecord
from ..models.resolution import Resolution

"""Error log buffering for failed resolutions.

- JSON Lines with a fixed key set (see models.error_record)
- One file per run: ``<logs_dir>/errors-YYYYMMDD-HHMMSS.log`` (UTC), created
  on first flush
- Records are buffered and appended on flush()
"""

__all__ = [
    "ErrorRecord",
    "ErrorLogBuffer",
    "record_for",
]

LOGS_DIR = Path("./logs")
TIMESTAMP_FMT = "%Y%m%d-%H%M%S"


def record_for(resolution: Resolution) -> ErrorRecord:
    """Build an ErrorRecord from a failed Resolution."""
    if resolution.error is None:
        raise ValueError("record_for() requires a failed resolution")
    q = resolution.query
    return ErrorRecord.create(
        year=q.year,
        month=q.month_roman,
        location_query=q.location_query,
        error_type=resolution.error.error_type,
        message=str(resolution.error),
    )


class ErrorLogBuffer:
    """In-memory buffer of error records. flush() writes JSON Lines.

    Single-threaded use only.
    """
    def __init__(self, logs_dir: Path | None = None) -> None:
        self.logs_dir = logs_dir if logs_dir is not None else LOGS_DIR
        self._records: list[ErrorRecord] = []
        self._file_path: Path | None = None

    @property
    def file_path(self) -> Path:
        if self._file_path is None:
            stamp = datetime.now(UTC).strftime(TIMESTAMP_FMT)
            self._file_path = self.logs_dir / f"errors-{stamp}.log"
        return self._file_path

    def append(self, record: ErrorRecord) -> None:
        self._records.append(record)

    def __len__(self) -> int:
        return len(self._records)

    def flush(self) -> Path | None:
        """Append buffered records to the log file. None when nothing to write."""
        if not self._records:
            return None
        fp = self.file_path
        fp.parent.mkdir(parents=True, exist_ok=True)
        with fp.open("a", encoding="utf-8") as f:
            for r in self._records:
                f.write(r.to_json_line() + "\n")
        self._records.clear()
        return fp
