"""Domain models for the heating degree-day viewer.

Query/record value types, the Resolution result type, the month code table
and the view state consumed by the rendering layer.
"""

from .error_record import ErrorRecord
from .heating_record import HeatingQuery, HeatingRecord
from .months import MONTHS, Month, month_for, parse_month
from .resolution import Resolution
from .view_state import ViewState

__all__ = [
    # Month table
    "MONTHS",
    "Month",
    "month_for",
    "parse_month",
    # Lookup models
    "HeatingQuery",
    "HeatingRecord",
    "Resolution",
    # Presentation / logging
    "ViewState",
    "ErrorRecord",
]
