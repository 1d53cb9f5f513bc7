from __future__ import annotations

import asyncio
import logging
from dataclasses import replace
from datetime import date

from ..models.heating_record import HeatingQuery
from ..models.resolution import Resolution
from ..models.view_state import ViewState
from .resolver import DataResolver

"""View session: the state a viewer renders, plus a latest-wins guard.

Every dispatched resolution gets a sequence number. A completion is applied
only when its number is the highest dispatched so far; older completions that
arrive late are discarded, so the rendered state always belongs to the most
recent selection.
"""

logger = logging.getLogger(__name__)

__all__ = [
    "DEFAULT_YEAR_SPAN",
    "available_years",
    "ViewSession",
]

DEFAULT_YEAR_SPAN = 18


def available_years(span: int = DEFAULT_YEAR_SPAN, today: date | None = None) -> list[int]:
    """Current year first, then each previous year down to ``span`` entries."""
    if span < 1:
        raise ValueError(f"year span must be positive, got {span}")
    current = (today or date.today()).year
    return [current - i for i in range(span)]


class ViewSession:
    def __init__(
        self,
        resolver: DataResolver,
        years: list[int] | None = None,
        default_location: str = "Vantaa",
    ) -> None:
        self.resolver = resolver
        self.default_location = default_location
        self.query: HeatingQuery | None = None
        self.resolution: Resolution | None = None  # last applied
        self._seq = 0
        self._state = ViewState(
            loading=False,
            error=None,
            heating_data=None,
            available_years=tuple(years if years is not None else available_years()),
            locations=(default_location,),
        )

    @property
    def state(self) -> ViewState:
        return self._state

    @property
    def latest_seq(self) -> int:
        return self._seq

    def default_query(self, today: date | None = None) -> HeatingQuery:
        """Current year, current month and the default location."""
        today = today or date.today()
        return HeatingQuery(year=today.year, month=today.month - 1, location_query=self.default_location)

    def dispatch(self, query: HeatingQuery) -> int:
        """Register a new resolution attempt and return its sequence number."""
        self._seq += 1
        self.query = query
        self._state = replace(self._state, loading=True, error=None)
        return self._seq

    def complete(self, seq: int, resolution: Resolution) -> bool:
        """Apply a finished resolution. Returns False if it was stale."""
        if seq != self._seq:
            logger.debug("discarding stale resolution seq=%d (latest=%d)", seq, self._seq)
            return False
        self.resolution = resolution
        locations = self._state.locations
        if resolution.locations is not None:
            locations = resolution.locations
        self._state = replace(
            self._state,
            loading=False,
            error=resolution.message,
            heating_data=resolution.record,
            locations=locations,
        )
        return True

    async def refresh(self, query: HeatingQuery) -> ViewState:
        """Resolve ``query`` off the event loop and apply it if still latest."""
        seq = self.dispatch(query)
        resolution = await asyncio.to_thread(self.resolver.resolve, query)
        self.complete(seq, resolution)
        return self._state
