from __future__ import annotations

from ..models.resolution import Resolution

"""SUMMARY line and record rendering for the command-line viewer.

Format:
SUMMARY year={year} month={roman} location={query} status={ok|ERROR_TYPE}
value={raw value or -} elapsed_sec={elapsed}
"""

__all__ = [
    "DATA_SOURCE_LINE",
    "render_record_lines",
    "render_summary_line",
]

DATA_SOURCE_LINE = "Data source: Finnish Meteorological Institute (FMI) https://www.fmi.fi"


def _format_elapsed(elapsed_seconds: float) -> str:
    if elapsed_seconds == 0:
        return "0"
    if elapsed_seconds == int(elapsed_seconds):
        return str(int(elapsed_seconds))
    if elapsed_seconds < 0.01:
        # avoid scientific notation
        return f"{elapsed_seconds:.6f}".rstrip("0").rstrip(".")
    return f"{elapsed_seconds:.3f}".rstrip("0").rstrip(".")


def render_record_lines(resolution: Resolution) -> list[str]:
    """Lines describing a successful resolution, in display order."""
    record = resolution.unwrap()
    return [
        record.location,
        f"Month: {record.month_label}",
        f"Heating Requirement: {record.heating_requirement} degree-days",
        f"Data year: {record.data_year}",
    ]


def render_summary_line(resolution: Resolution, elapsed_seconds: float) -> str:
    """Render the SUMMARY line for one resolution.

    Examples:
        >>> from degreedays.models import HeatingQuery, HeatingRecord, Resolution
        >>> q = HeatingQuery(year=2024, month=0, location_query="Vantaa")
        >>> rec = HeatingRecord("Vantaa", "January 2024", "120", 2024)
        >>> render_summary_line(Resolution.success(q, rec, ["Vantaa"]), 2.0)
        'SUMMARY year=2024 month=I location=Vantaa status=ok value=120 elapsed_sec=2'
    """
    query = resolution.query
    if resolution.error is not None:
        status = resolution.error.error_type
        value = "-"
    else:
        status = "ok"
        value = resolution.unwrap().heating_requirement or "-"
    location = query.location_query.replace(" ", "_") or "-"
    return (
        f"SUMMARY year={query.year} "
        f"month={query.month_roman} "
        f"location={location} "
        f"status={status} "
        f"value={value} "
        f"elapsed_sec={_format_elapsed(elapsed_seconds)}"
    )
