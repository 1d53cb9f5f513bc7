from __future__ import annotations

from dataclasses import dataclass

from .heating_record import HeatingRecord

"""ViewState model consumed by the rendering layer.

Snapshot of what the viewer shows at one moment. ViewSession replaces the
whole snapshot on each change instead of mutating it.
"""

__all__ = [
    "ViewState",
]


@dataclass(frozen=True)
class ViewState:
    loading: bool
    error: str | None
    heating_data: HeatingRecord | None
    available_years: tuple[int, ...]
    locations: tuple[str, ...]

    @property
    def displayable(self) -> bool:
        """True when a record should be shown (loaded, no error)."""
        return self.heating_data is not None and not self.loading and self.error is None
