from __future__ import annotations

import sys
from typing import Any

from tqdm import tqdm
from tqdm.std import tqdm as TqdmType

"""Download progress display with tqdm (TTY only).

Shown while a yearly CSV is being fetched. In non-TTY environments (CI,
pipes) no bar is created so log output stays free of ANSI control sequences.
"""

__all__ = [
    "DownloadProgress",
    "is_tty_enabled",
]


def is_tty_enabled() -> bool:
    """Return True if stdout is a TTY and progress should be displayed."""
    return sys.stdout.isatty()


class DownloadProgress:
    """Byte-level progress bar for one HTTP download.

    ``total_bytes`` may be None when the server sends no Content-Length; tqdm
    then shows a running byte count without percentage.
    """

    def __init__(self, total_bytes: int | None, *, description: str = "Downloading") -> None:
        self.total_bytes = total_bytes
        self.description = description
        self.received = 0

        self.enabled = is_tty_enabled()
        self.pbar: TqdmType[Any] | None
        if self.enabled:
            self.pbar = tqdm(
                total=total_bytes,
                desc=description,
                unit="B",
                unit_scale=True,
                disable=False,
                leave=False,
                position=0,
                ncols=80,
                ascii=True,
            )
        else:
            self.pbar = None

    def advance(self, n_bytes: int) -> None:
        self.received += n_bytes
        if self.enabled and self.pbar is not None:
            self.pbar.update(n_bytes)

    def close(self) -> None:
        if self.enabled and self.pbar is not None:
            self.pbar.close()
            self.pbar = None

    def __enter__(self) -> DownloadProgress:
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.close()
