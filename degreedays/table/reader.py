from __future__ import annotations

import csv
import io
from dataclasses import dataclass

import pandas as pd

from ..services.errors import ParseError

"""CSV table reader.

Header-row mode: the first non-blank line defines the column names, every
following non-blank line becomes one row mapping header -> cell string.

- Every cell is read as a string; pandas NA conversion is disabled so that
  values such as "NA" or "" survive unchanged.
- A cell missing from a short row is left out of that row's mapping, so the
  caller can tell "absent" apart from "present but empty".
- Fields past the header width are dropped, whether one row is ragged or
  every row ends with a trailing delimiter. The first column is never
  promoted to an index.
- Header cells are stripped of surrounding whitespace and a leading BOM.
"""

__all__ = [
    "RawTable",
    "parse_table",
]

_BOM = "\ufeff"


@dataclass
class RawTable:
    columns: list[str]
    rows: list[dict[str, str]]  # header -> raw cell, file order

    def __len__(self) -> int:
        return len(self.rows)


def parse_table(text: str, delimiter: str = ",") -> RawTable:
    """Parse delimited text with a header row into a RawTable.

    Raises:
        ParseError: the text is not parseable (no header, broken quoting).
            An empty result set is NOT an error here; DataResolver decides
            what zero rows mean.
    """
    try:
        df = pd.read_csv(
            io.StringIO(text),
            sep=delimiter,
            engine="python",
            dtype=object,
            keep_default_na=False,
            na_values=[],
            index_col=False,
            skip_blank_lines=True,
            quotechar='"',
            doublequote=True,
        )
    except pd.errors.EmptyDataError as e:
        raise ParseError.from_parser(str(e)) from e
    except (pd.errors.ParserError, csv.Error) as e:
        raise ParseError.from_parser(str(e)) from e

    columns = [str(c).strip().lstrip(_BOM).strip() for c in df.columns]
    rows: list[dict[str, str]] = []
    for raw in df.itertuples(index=False, name=None):
        row: dict[str, str] = {}
        for col, val in zip(columns, raw, strict=False):
            # the python engine pads a short row with None
            if val is None or (isinstance(val, float) and pd.isna(val)):
                continue
            row[col] = str(val)
        rows.append(row)
    return RawTable(columns=columns, rows=rows)
