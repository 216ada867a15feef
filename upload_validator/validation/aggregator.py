"""
Result Aggregator

Turns the collected diagnostics into a ValidationResult: severity counts,
validity and a one-line summary.
"""

from typing import List

from upload_validator.validation.column_matcher import ColumnMatch
from upload_validator.validation.types import Diagnostic, Severity, ValidationResult


def build_summary(error_count: int, warning_count: int, total_rows: int, missing_columns: List[str]) -> str:
    """
    Pick the summary sentence for the given counts.

    Examples:
        (0, 0, 3, []) → "Success! All 3 rows passed validation."
        (0, 2, 3, []) → "Validation passed with 2 warning(s). 3 rows checked."
        (1, 0, 3, ["B"]) → "Validation failed with 1 error(s) and 0 warning(s). 3 rows checked. Missing columns: B."
    """
    if error_count == 0 and warning_count == 0:
        summary = f"Success! All {total_rows} rows passed validation."
    elif error_count == 0:
        summary = f"Validation passed with {warning_count} warning(s). {total_rows} rows checked."
    else:
        summary = (
            f"Validation failed with {error_count} error(s) and {warning_count} warning(s). "
            f"{total_rows} rows checked."
        )

    if missing_columns:
        summary += f" Missing columns: {', '.join(missing_columns)}."
    return summary


def aggregate(diagnostics: List[Diagnostic], total_rows: int, column_match: ColumnMatch) -> ValidationResult:
    """Build the final result; warnings never affect validity"""
    error_count = sum(1 for d in diagnostics if d.severity == Severity.ERROR)
    warning_count = sum(1 for d in diagnostics if d.severity == Severity.WARNING)

    return ValidationResult(
        is_valid=error_count == 0,
        total_rows=total_rows,
        total_errors=error_count,
        total_warnings=warning_count,
        errors=list(diagnostics),
        summary=build_summary(error_count, warning_count, total_rows, column_match.missing_columns),
        column_matches=column_match.column_matches,
        missing_columns=list(column_match.missing_columns),
        extra_columns=list(column_match.extra_columns),
    )
