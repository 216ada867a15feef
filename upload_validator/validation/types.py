"""
Validation types and data structures
"""

from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional


class Severity(str, Enum):
    """Diagnostic severity levels"""
    ERROR = "error"
    WARNING = "warning"


# Check identifiers
CHECK_REQUIRED = "required"
CHECK_UNIQUE = "unique"
CHECK_MIN_LENGTH = "min_length"
CHECK_MAX_LENGTH = "max_length"
CHECK_DATA_TYPE = "data_type"
CHECK_INVALID_CHARACTERS = "invalid_characters"
CHECK_PATTERN = "pattern"
CHECK_INVALID_VALUE = "invalid_value"
CHECK_RANGE = "range"
CHECK_FORMAT = "format"
CHECK_BUSINESS_RULE = "business_rule"
CHECK_MISSING_COLUMN = "missing_column"

# Row number used for findings about the file as a whole
FILE_LEVEL_ROW = 0


@dataclass(frozen=True)
class Diagnostic:
    """A single validation finding"""
    row: int
    column: str
    value: str
    check: str
    message: str
    severity: Severity
    notes: Optional[str] = None

    @property
    def is_file_level(self) -> bool:
        return self.row == FILE_LEVEL_ROW

    def to_dict(self) -> Dict[str, Any]:
        return {
            "row": self.row,
            "column": self.column,
            "value": self.value,
            "rule": self.check,
            "message": self.message,
            "severity": self.severity.value,
            "notes": self.notes,
        }


@dataclass
class ValidationResult:
    """Outcome of validating one file against one template"""
    is_valid: bool
    total_rows: int
    total_errors: int
    total_warnings: int
    errors: List[Diagnostic] = field(default_factory=list)
    summary: str = ""
    column_matches: bool = True
    missing_columns: List[str] = field(default_factory=list)
    extra_columns: List[str] = field(default_factory=list)

    def errors_only(self) -> List[Diagnostic]:
        return [d for d in self.errors if d.severity == Severity.ERROR]

    def warnings_only(self) -> List[Diagnostic]:
        return [d for d in self.errors if d.severity == Severity.WARNING]

    def to_dict(self) -> Dict[str, Any]:
        """Serializable form for the persistence/notification layers"""
        data = asdict(self)
        data["errors"] = [d.to_dict() for d in self.errors]
        return data
