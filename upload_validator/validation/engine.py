"""
Validation Engine

Single synchronous pass: parse → match columns → evaluate rows → aggregate.
The engine never raises for a bad file; every problem ends up as a
diagnostic in the returned ValidationResult.
"""

import time
from typing import Optional

import structlog

from upload_validator.config import settings
from upload_validator.parsers._parser_kit import decode_upload
from upload_validator.parsers.tabular_parser import parse_tabular
from upload_validator.templates.models import ValidationTemplate
from upload_validator.validation.aggregator import aggregate
from upload_validator.validation.column_matcher import match_columns
from upload_validator.validation.rule_evaluator import RuleEvaluator
from upload_validator.validation.types import ValidationResult
from upload_validator.validation.uniqueness import UniquenessTracker

logger = structlog.get_logger(__name__)


def validate_csv(
    csv_content: str,
    template: ValidationTemplate,
    delimiter: Optional[str] = None,
) -> ValidationResult:
    """
    Validate raw CSV text against a template.

    Args:
        csv_content: Raw file contents
        template: Rules to check against (not modified)
        delimiter: Field separator, defaults to the DEFAULT_DELIMITER setting

    Returns:
        ValidationResult with every diagnostic, in row then rule order
        (file-level missing-column findings first)

    Examples:
        >>> result = validate_csv("CREF\\nA1\\nA1\\n", template)
        >>> result.is_valid
        False
        >>> [d.check for d in result.errors]
        ['unique']
    """
    start_time = time.time()

    table = parse_tabular(csv_content, delimiter or settings.default_delimiter)
    column_match = match_columns(template, table.headers)

    # Fresh tracker per call, so concurrent validations never share state
    evaluator = RuleEvaluator(template, UniquenessTracker(template))

    diagnostics = list(column_match.diagnostics)
    for row in table.rows:
        diagnostics.extend(evaluator.evaluate_row(row, column_match))

    result = aggregate(diagnostics, table.row_count, column_match)

    logger.info(
        "validation_complete",
        template=template.name,
        total_rows=result.total_rows,
        total_errors=result.total_errors,
        total_warnings=result.total_warnings,
        is_valid=result.is_valid,
        duration_ms=round((time.time() - start_time) * 1000, 2),
    )
    return result


def validate_upload(
    content: bytes,
    template: ValidationTemplate,
    delimiter: Optional[str] = None,
) -> ValidationResult:
    """Decode uploaded bytes (BOM/encoding aware) and validate them"""
    return validate_csv(decode_upload(content), template, delimiter=delimiter)


class ValidationEngine:
    """Binds a template for repeated validations"""

    def __init__(self, template: ValidationTemplate, delimiter: Optional[str] = None):
        self.template = template
        self.delimiter = delimiter

    def validate(self, csv_content: str) -> ValidationResult:
        return validate_csv(csv_content, self.template, delimiter=self.delimiter)

    def validate_bytes(self, content: bytes) -> ValidationResult:
        return validate_upload(content, self.template, delimiter=self.delimiter)
