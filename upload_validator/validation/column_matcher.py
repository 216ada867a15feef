"""
Column Matcher

Compares a template's expected columns against the headers found in a file.
"""

from dataclasses import dataclass, field
from typing import List

import structlog

from upload_validator.parsers._parser_kit import normalize_column_name
from upload_validator.templates.models import ValidationTemplate
from upload_validator.validation.types import (
    CHECK_MISSING_COLUMN,
    FILE_LEVEL_ROW,
    Diagnostic,
    Severity,
)

logger = structlog.get_logger(__name__)


@dataclass
class ColumnMatch:
    """Header comparison outcome"""
    present_columns: List[str] = field(default_factory=list)
    missing_columns: List[str] = field(default_factory=list)
    extra_columns: List[str] = field(default_factory=list)
    diagnostics: List[Diagnostic] = field(default_factory=list)

    @property
    def column_matches(self) -> bool:
        return not self.missing_columns and not self.extra_columns

    def is_present(self, column: str) -> bool:
        return column in self.present_columns


def match_columns(template: ValidationTemplate, headers: List[str]) -> ColumnMatch:
    """
    Compute missing/extra columns and file-level diagnostics.

    Missing columns keep template order, extra columns keep file order.
    Only a missing *required* column produces a diagnostic, once per column.
    """
    actual = [normalize_column_name(h) for h in headers]
    actual_set = set(actual)
    expected = template.expected_columns
    expected_set = set(expected)

    result = ColumnMatch(present_columns=[c for c in expected if c in actual_set])
    result.missing_columns = [c for c in expected if c not in actual_set]
    result.extra_columns = [c for c in actual if c not in expected_set]

    for rule in template.rules:
        if rule.normalized_name in actual_set or not rule.is_required:
            continue
        result.diagnostics.append(Diagnostic(
            row=FILE_LEVEL_ROW,
            column=rule.normalized_name,
            value="",
            check=CHECK_MISSING_COLUMN,
            message=f'Required column "{rule.normalized_name}" is missing from the file',
            severity=Severity.ERROR,
            notes=rule.notes,
        ))

    if not result.column_matches:
        logger.info(
            "column_mismatch",
            template=template.name,
            missing=result.missing_columns,
            extra=result.extra_columns,
        )
    return result
