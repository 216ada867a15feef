"""
Tabular (CSV) Parser

Turns raw upload text into normalized headers and ordered Row records.

Contract:
- First non-blank line is the header row; names are trimmed + uppercased
- Empty and whitespace-only lines are skipped anywhere in the file; a line
  of bare delimiters is a row of empty cells
- Quoted fields may contain the delimiter or line breaks
- Short rows are padded with "", cells past the header width are dropped
- Never raises: a broken file degrades to an empty table (logged)
"""

import csv
import io
import re
from typing import Any, Dict, List, Optional

import pandas as pd
import structlog

from upload_validator.parsers._parser_kit import (
    ParsedTable,
    Row,
    is_blank,
    normalize_column_name,
)

logger = structlog.get_logger(__name__)


# Header occupies line 1, data starts on line 2
FIRST_DATA_ROW_NUMBER = 2

_LEADING_BLANK_LINES = re.compile(r'\A(?:[ \t]*\r?\n)+')


def _read_frame(text: str, delimiter: str = ",") -> Optional[pd.DataFrame]:
    """
    Read text into an all-string DataFrame with no header applied.

    Returns None when pandas cannot make sense of the input at all.
    """
    content = _LEADING_BLANK_LINES.sub("", text or "")
    if is_blank(content):
        return None

    read_options = dict(
        sep=delimiter,
        header=None,
        dtype=object,
        keep_default_na=False,
        na_filter=False,
        # Drops empty and whitespace-only lines, keeps delimiter-only rows
        skip_blank_lines=True,
        engine="python",
    )

    try:
        width = pd.read_csv(io.StringIO(content), nrows=1, **read_options).shape[1]
        frame = pd.read_csv(
            io.StringIO(content),
            # Cells past the header width are dropped
            on_bad_lines=lambda bad_line: bad_line[:width],
            **read_options,
        )
    except (pd.errors.ParserError, pd.errors.EmptyDataError, csv.Error, ValueError) as e:
        logger.warning("tabular_parse_failed", error=str(e), error_type=type(e).__name__)
        return None

    if frame.empty:
        return None
    return frame.fillna("").astype(str)


def parse_tabular(text: str, delimiter: str = ",") -> ParsedTable:
    """
    Parse raw CSV text into a ParsedTable.

    Args:
        text: Raw file contents
        delimiter: Field separator (default comma)

    Returns:
        ParsedTable with normalized headers and 1-based numbered rows

    Examples:
        >>> table = parse_tabular("cref, Lat\\nA1,36.4\\n\\nA2,37.0\\n")
        >>> table.headers
        ['CREF', 'LAT']
        >>> [row.number for row in table.rows]
        [2, 3]
    """
    frame = _read_frame(text, delimiter)
    if frame is None:
        return ParsedTable()

    headers = [normalize_column_name(h) for h in frame.iloc[0].tolist()]
    rows: List[Row] = []
    for index, values in enumerate(frame.iloc[1:].itertuples(index=False, name=None)):
        rows.append(Row(
            number=index + FIRST_DATA_ROW_NUMBER,
            cells=tuple(zip(headers, values)),
        ))

    logger.debug("tabular_parse_complete", columns=len(headers), rows=len(rows))
    return ParsedTable(headers=headers, rows=rows)


def get_headers(text: str, delimiter: str = ",") -> List[str]:
    """
    Return the header names exactly as they appear in the file.

    Useful for showing the column structure without full validation.
    """
    frame = _read_frame(text, delimiter)
    if frame is None:
        return []
    return frame.iloc[0].tolist()


def get_preview(text: str, row_limit: int = 10, delimiter: str = ",") -> Dict[str, Any]:
    """
    Return headers plus the first `row_limit` rows for an admin to review.

    Rows are keyed by the raw (un-normalized) header names.
    """
    frame = _read_frame(text, delimiter)
    if frame is None:
        return {"headers": [], "rows": []}

    headers = frame.iloc[0].tolist()
    body = frame.iloc[1:1 + max(row_limit, 0)]
    rows = [dict(zip(headers, values)) for values in body.itertuples(index=False, name=None)]
    return {"headers": headers, "rows": rows}
