"""
Tests for the tabular (CSV) parser.

The parser must normalize headers, skip blank lines, respect quoting and
never raise on malformed input.
"""

import pandas as pd
import pytest

from upload_validator.parsers._parser_kit import ParsedTable
from upload_validator.parsers.tabular_parser import get_headers, get_preview, parse_tabular


def test_headers_are_trimmed_and_uppercased():
    table = parse_tabular(" cref ,Lat,meterUnits\nA1,36.4,CCF\n")

    assert table.headers == ["CREF", "LAT", "METERUNITS"]
    assert table.row_count == 1
    assert table.rows[0].get("METERUNITS") == "CCF"


def test_row_numbers_start_after_header():
    table = parse_tabular("CREF\nA1\nA2\nA3\n")

    assert [row.number for row in table.rows] == [2, 3, 4]


def test_blank_lines_are_skipped():
    text = "\n\nCREF,LAT\n\nA1,1\n   \n\nA2,2\n\n"
    table = parse_tabular(text)

    assert table.headers == ["CREF", "LAT"]
    assert [row.get("CREF") for row in table.rows] == ["A1", "A2"]


def test_quoted_fields_keep_delimiters_and_line_breaks():
    text = 'NAME,ADDRESS\n"Cassidy, Butch","1908 San Vincente Rd\nUnit 2"\nSundance,Main St\n'
    table = parse_tabular(text)

    assert table.row_count == 2
    assert table.rows[0].get("NAME") == "Cassidy, Butch"
    assert table.rows[0].get("ADDRESS") == "1908 San Vincente Rd\nUnit 2"
    assert table.rows[1].get("NAME") == "Sundance"


def test_cells_are_returned_as_text():
    table = parse_tabular("MIUSERIAL,LAT\n0671258201,36.40\n")

    # Leading zeros and trailing zeros survive (no numeric inference)
    assert table.rows[0].get("MIUSERIAL") == "0671258201"
    assert table.rows[0].get("LAT") == "36.40"


def test_short_rows_are_padded_and_long_rows_truncated():
    table = parse_tabular("A,B,C\n1,2\n1,2,3,4\n")

    assert table.row_count == 2
    assert table.rows[0].get("C") == ""
    assert table.rows[1].as_dict() == {"A": "1", "B": "2", "C": "3"}


def test_header_only_file_has_no_rows():
    table = parse_tabular("CREF,LAT\n")

    assert table.headers == ["CREF", "LAT"]
    assert table.rows == []


def test_tab_delimiter():
    table = parse_tabular("CREF\tLAT\nA1\t36.4\n", delimiter="\t")

    assert table.headers == ["CREF", "LAT"]
    assert table.rows[0].get("LAT") == "36.4"


def test_row_cells_keep_file_order():
    table = parse_tabular("LAT,CREF\n36.4,A1\n")

    assert table.rows[0].cells == (("LAT", "36.4"), ("CREF", "A1"))


@pytest.mark.edge_case
@pytest.mark.parametrize("text", ["", "   ", "\n\n\n", None])
def test_empty_input_gives_empty_table(text):
    table = parse_tabular(text)

    assert table.headers == []
    assert table.rows == []


@pytest.mark.edge_case
@pytest.mark.parametrize("text", [
    '"CREF,LAT\nA1,36.4',
    'A,B\n"unterminated,1\n2,3',
    'A\x00,B\n1,2\n',
])
def test_malformed_input_never_raises(text):
    table = parse_tabular(text)

    assert isinstance(table, ParsedTable)


def test_get_headers_keeps_raw_names():
    assert get_headers(" cref ,Lat\nA1,1\n") == [" cref ", "Lat"]
    assert get_headers("") == []


def test_get_preview_limits_rows():
    text = "CREF,LAT\n" + "\n".join(f"A{i},{i}" for i in range(20)) + "\n"
    preview = get_preview(text, row_limit=3)

    assert preview["headers"] == ["CREF", "LAT"]
    assert preview["rows"] == [
        {"CREF": "A0", "LAT": "0"},
        {"CREF": "A1", "LAT": "1"},
        {"CREF": "A2", "LAT": "2"},
    ]


def test_get_preview_of_empty_file():
    assert get_preview("") == {"headers": [], "rows": []}


def test_delimiter_only_lines_are_rows():
    table = parse_tabular("A,B\n,\n   \n  ,  \nx,y\n")

    assert table.row_count == 3
    assert [row.number for row in table.rows] == [2, 3, 4]
    assert table.rows[0].as_dict() == {"A": "", "B": ""}
    assert table.rows[1].get("B") == "  "


def test_long_rows_truncated_without_warning(recwarn):
    table = parse_tabular("A,B\n1,2,3,4\n")

    assert table.rows[0].as_dict() == {"A": "1", "B": "2"}
    assert not [w for w in recwarn if issubclass(w.category, pd.errors.ParserWarning)]
