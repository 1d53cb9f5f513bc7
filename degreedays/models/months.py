from __future__ import annotations

from dataclasses import dataclass

"""Month code table for the FMI heating degree-day files.

The yearly CSV labels its monthly columns with Roman numerals (I..XII).
MONTHS maps the zero-based calendar month index to that header and to the
English month name used in labels.
"""

__all__ = [
    "Month",
    "MONTHS",
    "month_for",
    "parse_month",
]


@dataclass(frozen=True)
class Month:
    index: int  # 0 = January
    name: str
    roman: str


MONTHS: tuple[Month, ...] = (
    Month(0, "January", "I"),
    Month(1, "February", "II"),
    Month(2, "March", "III"),
    Month(3, "April", "IV"),
    Month(4, "May", "V"),
    Month(5, "June", "VI"),
    Month(6, "July", "VII"),
    Month(7, "August", "VIII"),
    Month(8, "September", "IX"),
    Month(9, "October", "X"),
    Month(10, "November", "XI"),
    Month(11, "December", "XII"),
)


def month_for(index: int) -> Month:
    """Return the Month for a zero-based index.

    Raises:
        ValueError: index outside 0..11
    """
    if not isinstance(index, int) or isinstance(index, bool) or not 0 <= index <= 11:
        raise ValueError(f"month index must be 0..11, got {index!r}")
    return MONTHS[index]


def parse_month(text: str) -> Month:
    """Parse user input into a Month.

    Accepts a 1-based number ("1".."12"), an English month name or its
    three-letter prefix (case-insensitive), or a Roman numeral header.
    """
    value = text.strip()
    if value.isdigit():
        number = int(value)
        if not 1 <= number <= 12:
            raise ValueError(f"month number must be 1..12, got {number}")
        return MONTHS[number - 1]
    folded = value.casefold()
    for month in MONTHS:
        if folded == month.name.casefold() or (len(folded) == 3 and month.name.casefold().startswith(folded)):
            return month
    upper = value.upper()
    for month in MONTHS:
        if upper == month.roman:
            return month
    raise ValueError(f"unrecognised month: {text!r}")
