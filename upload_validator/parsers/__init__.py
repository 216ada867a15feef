"""
Tabular parsing for uploaded files.

Every entry point returns data and never raises for a malformed file; the
header normalization used here is the same one templates use.
"""

from upload_validator.parsers._parser_kit import (
    ParseError,
    EncodingDetectionError,
    ParsedTable,
    Row,
    decode_upload,
    detect_encoding,
    normalize_column_name,
)
from upload_validator.parsers.tabular_parser import (
    get_headers,
    get_preview,
    parse_tabular,
)

__all__ = [
    'ParseError',
    'EncodingDetectionError',
    'ParsedTable',
    'Row',
    'decode_upload',
    'detect_encoding',
    'normalize_column_name',
    'get_headers',
    'get_preview',
    'parse_tabular',
]
