"""
Shared parser utilities (internal).

Centralizes the logic every tabular entry point relies on so the header
handling cannot drift between validation and preview:
- Column name normalization (trim + uppercase, applied once at the boundary)
- Encoding detection (UTF-8 BOM → UTF-16 → UTF-8 → CP1252 → Latin-1)
- Blank cell / blank row detection
- ParsedTable / Row return types
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

import structlog

logger = structlog.get_logger(__name__)


# ============================================================================
# Custom Exceptions
# ============================================================================

class ParseError(Exception):
    """Base exception for parser errors."""
    pass


class EncodingDetectionError(ParseError):
    """Raised when upload content is not a byte string."""
    def __init__(self, message: str, received_type: Optional[str] = None):
        super().__init__(message)
        self.received_type = received_type


# ============================================================================
# Return types
# ============================================================================

@dataclass(frozen=True)
class Row:
    """
    One data row of an uploaded file.

    Cells are kept as ordered (normalized column, raw value) pairs so the
    file's column order survives and no dynamic attribute access is needed.

    Attributes:
        number: 1-based line number of the row (the header is line 1, so the
            first data row is 2)
        cells: Ordered (column, value) pairs, column already normalized

    Examples:
        >>> row = Row(number=2, cells=(("CREF", "SPID_1"), ("LAT", "36.4")))
        >>> row.get("CREF")
        'SPID_1'
        >>> row.get("MISSING")
        ''
    """
    number: int
    cells: Tuple[Tuple[str, str], ...]

    def get(self, column: str, default: str = "") -> str:
        """Return the raw value for a normalized column name."""
        for name, value in self.cells:
            if name == column:
                return value
        return default

    def as_dict(self) -> Dict[str, str]:
        """First occurrence wins when a header is repeated."""
        out: Dict[str, str] = {}
        for name, value in self.cells:
            out.setdefault(name, value)
        return out


@dataclass
class ParsedTable:
    """
    Parser output: normalized headers in file order plus data rows.

    An unreadable file is represented by an empty table, never an exception.
    """
    headers: List[str] = field(default_factory=list)
    rows: List[Row] = field(default_factory=list)

    @property
    def row_count(self) -> int:
        return len(self.rows)


# ============================================================================
# Normalization helpers
# ============================================================================

def normalize_column_name(name: Optional[str]) -> str:
    """
    Normalize a column name for case-insensitive matching.

    Used for both template rules and file headers so the two sides always
    compare with the same key.

    Examples:
        " cref " → "CREF"
        "MeterUnits" → "METERUNITS"
        None → ""
    """
    return str(name or "").strip().upper()


def is_blank(value: Optional[str]) -> bool:
    """True for None and whitespace-only strings."""
    return value is None or str(value).strip() == ""


# Byte-order marks and the encoding each one announces
_BYTE_ORDER_MARKS: Tuple[Tuple[bytes, str], ...] = (
    (b'\xef\xbb\xbf', 'utf-8'),
    (b'\xff\xfe', 'utf-16-le'),
    (b'\xfe\xff', 'utf-16-be'),
)

# Tried in order for files without a BOM; CP1252 covers Windows billing
# exports, Latin-1 maps every byte and never fails
_FALLBACK_ENCODINGS: Tuple[str, ...] = ('utf-8', 'cp1252', 'latin-1')


def _decodes(content: bytes, encoding: str) -> bool:
    try:
        content.decode(encoding)
    except UnicodeDecodeError:
        return False
    return True


def detect_encoding(content: bytes) -> Tuple[str, bytes]:
    """
    Work out how an uploaded file is encoded and strip any BOM.

    A BOM is only trusted when the rest of the file really decodes with the
    encoding it announces (an odd-length "UTF-16" payload does not), otherwise
    the file goes through the fallback chain like any BOM-less upload.

    Args:
        content: Raw upload bytes

    Returns:
        (encoding, content_without_bom)

    Raises:
        EncodingDetectionError: content is not bytes (e.g. already-decoded text)

    Examples:
        >>> detect_encoding(b'\\xef\\xbb\\xbfCREF')
        ('utf-8', b'CREF')
        >>> detect_encoding(b'\\x93quoted\\x94')[0]
        'cp1252'
    """
    if not isinstance(content, (bytes, bytearray)):
        raise EncodingDetectionError(
            f"Upload content must be bytes, got {type(content).__name__}",
            received_type=type(content).__name__,
        )
    content = bytes(content)
    if not content:
        return 'utf-8', content

    for bom, encoding in _BYTE_ORDER_MARKS:
        if not content.startswith(bom):
            continue
        payload = content[len(bom):]
        if _decodes(payload, encoding):
            logger.debug("upload_bom_detected", encoding=encoding)
            return encoding, payload
        logger.warning("upload_bom_mismatch", encoding=encoding, size=len(content))
        break

    for encoding in _FALLBACK_ENCODINGS:
        if _decodes(content, encoding):
            if encoding != 'utf-8':
                logger.info("upload_encoding_fallback", encoding=encoding)
            return encoding, content

    # Unreachable while Latin-1 closes the chain
    raise EncodingDetectionError("No encoding could decode the upload")


def decode_upload(content: bytes) -> str:
    """Decode uploaded bytes to text using detect_encoding."""
    encoding, clean = detect_encoding(content)
    return clean.decode(encoding)
