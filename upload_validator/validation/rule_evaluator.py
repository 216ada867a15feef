"""
Rule Evaluator

Runs every template rule against every data row and emits diagnostics.

Per cell, in order:
1. required + blank → error, stop
2. blank and blanks allowed → stop
3. uniqueness, min/max length, boolean type, invalid characters, pattern
4. column-keyed domain checks (see domain_checks)
"""

from typing import Callable, List

from upload_validator.parsers._parser_kit import Row
from upload_validator.templates.models import ValidationRule, ValidationTemplate
from upload_validator.validation.column_matcher import ColumnMatch
from upload_validator.validation.domain_checks import run_domain_checks
from upload_validator.validation.types import (
    CHECK_DATA_TYPE,
    CHECK_INVALID_CHARACTERS,
    CHECK_MAX_LENGTH,
    CHECK_MIN_LENGTH,
    CHECK_PATTERN,
    CHECK_REQUIRED,
    CHECK_UNIQUE,
    Diagnostic,
    Severity,
)
from upload_validator.validation.uniqueness import UniquenessTracker


BOOLEAN_VALUES = {"yes", "no", "true", "false", "1", "0"}

CellCheck = Callable[[ValidationRule, str, int], List[Diagnostic]]


def _error(rule: ValidationRule, row_number: int, value: str, check: str, message: str) -> Diagnostic:
    return Diagnostic(
        row=row_number,
        column=rule.column_name,
        value=value,
        check=check,
        message=message,
        severity=Severity.ERROR,
        notes=rule.notes,
    )


class RuleEvaluator:
    """Applies a template's rules to rows for a single validation call"""

    def __init__(self, template: ValidationTemplate, tracker: UniquenessTracker):
        self.template = template
        self.tracker = tracker
        self.cell_checks: List[CellCheck] = [
            self._check_unique,
            self._check_min_length,
            self._check_max_length,
            self._check_boolean,
            self._check_invalid_characters,
            self._check_pattern,
        ]

    def evaluate_row(self, row: Row, column_match: ColumnMatch) -> List[Diagnostic]:
        """Evaluate all rules whose column exists in the file"""
        results = []
        for rule in self.template.rules:
            # Absent columns were already reported once at file level
            if not column_match.is_present(rule.normalized_name):
                continue
            results.extend(self.evaluate_cell(rule, row))
        return results

    def evaluate_cell(self, rule: ValidationRule, row: Row) -> List[Diagnostic]:
        """Run the fixed check sequence for one rule on one row"""
        value = row.get(rule.normalized_name).strip()

        if value == "" and rule.blank_is_error:
            return [_error(
                rule, row.number, value, CHECK_REQUIRED,
                f'"{rule.column_name}" is required but is empty',
            )]
        if value == "" and rule.allow_blank:
            return []

        # An optional column that disallows blanks still gets the length
        # checks on an empty cell; everything else needs a value
        results = []
        for check in self.cell_checks:
            results.extend(check(rule, value, row.number))
        if value:
            results.extend(run_domain_checks(rule, value, row))
        return results

    def _check_unique(self, rule: ValidationRule, value: str, row_number: int) -> List[Diagnostic]:
        if not rule.is_unique or not value:
            return []
        if self.tracker.check_and_record(rule.normalized_name, value):
            return []
        return [_error(
            rule, row_number, value, CHECK_UNIQUE,
            f'"{rule.column_name}" must be unique, but "{value}" appears more than once',
        )]

    def _check_min_length(self, rule: ValidationRule, value: str, row_number: int) -> List[Diagnostic]:
        if not rule.min_length or len(value) >= rule.min_length:
            return []
        return [_error(
            rule, row_number, value, CHECK_MIN_LENGTH,
            f'"{rule.column_name}" must be at least {rule.min_length} characters (got {len(value)})',
        )]

    def _check_max_length(self, rule: ValidationRule, value: str, row_number: int) -> List[Diagnostic]:
        if not rule.max_length or len(value) <= rule.max_length:
            return []
        return [_error(
            rule, row_number, value, CHECK_MAX_LENGTH,
            f'"{rule.column_name}" must be at most {rule.max_length} characters (got {len(value)})',
        )]

    def _check_boolean(self, rule: ValidationRule, value: str, row_number: int) -> List[Diagnostic]:
        if rule.data_type != "boolean" or not value or value.lower() in BOOLEAN_VALUES:
            return []
        return [_error(
            rule, row_number, value, CHECK_DATA_TYPE,
            f'"{rule.column_name}" must be yes/no or true/false (got "{value}")',
        )]

    def _check_invalid_characters(self, rule: ValidationRule, value: str, row_number: int) -> List[Diagnostic]:
        if not rule.invalid_characters:
            return []
        found = []
        for char in rule.invalid_characters:
            if char in value and char not in found:
                found.append(char)
        if not found:
            return []
        return [_error(
            rule, row_number, value, CHECK_INVALID_CHARACTERS,
            f'"{rule.column_name}" contains invalid characters: {", ".join(found)}',
        )]

    def _check_pattern(self, rule: ValidationRule, value: str, row_number: int) -> List[Diagnostic]:
        # Disabled patterns (failed to compile) have no compiled form
        pattern = rule.compiled_pattern
        if pattern is None or not value or pattern.fullmatch(value):
            return []
        return [_error(
            rule, row_number, value, CHECK_PATTERN,
            f'"{rule.column_name}" doesn\'t match the required format',
        )]
