"""
Column-keyed business rules for the meter network upload format.

These run in addition to the template's generic checks whenever a known
column is present and its cell is non-empty. Each check returns a list of
diagnostics (usually warnings) so new ones can be registered without
touching the evaluator.
"""

import math
import re
from typing import Callable, Dict, List

from upload_validator.parsers._parser_kit import Row
from upload_validator.templates.models import ValidationRule
from upload_validator.validation.types import (
    CHECK_BUSINESS_RULE,
    CHECK_DATA_TYPE,
    CHECK_FORMAT,
    CHECK_INVALID_VALUE,
    CHECK_RANGE,
    Diagnostic,
    Severity,
)


# Units of measure by utility
VALID_UNITS: Dict[str, List[str]] = {
    "gas": ["CCF", "cu ft"],
    "water": ["CCF", "CGAL", "cu ft", "GAL", "KGAL"],
    "electric": ["KW", "KWH"],
}

VALID_COLLECTION_METHODS = [
    "Manual Read",
    "Cellular 500W ERT",
    "Cellular 500G ERT",
]

CELLULAR_MARKER = "Cellular"
CELLULAR_TAG_COLUMN = "ADDTAG"
CELLULAR_TAG = "cellular-device-installed"
CELLULAR_TAG_NOTES = (
    'For cellular endpoints, pass an addtag value of "Cellular-Device-Installed" '
    'to enable automatic provisioning.'
)

LATITUDE_RANGE = (-90.0, 90.0)
LONGITUDE_RANGE = (-180.0, 180.0)

EMAIL_RE = re.compile(r'^[^\s@]+@[^\s@]+\.[^\s@]+$')
NON_DIGIT_RE = re.compile(r'\D')
MIN_PHONE_DIGITS = 10

DomainCheck = Callable[[ValidationRule, str, Row], List[Diagnostic]]


def all_valid_units() -> List[str]:
    """Every unit across categories, in category order (duplicates kept)"""
    return [unit for units in VALID_UNITS.values() for unit in units]


def check_meter_units(rule: ValidationRule, value: str, row: Row) -> List[Diagnostic]:
    """Meter units must come from the gas/water/electric allow-list"""
    allowed = all_valid_units()
    if value in allowed:
        return []
    return [Diagnostic(
        row=row.number,
        column=rule.column_name,
        value=value,
        check=CHECK_INVALID_VALUE,
        message=f'"{value}" is not a valid unit. Valid units are: {", ".join(allowed)}',
        severity=Severity.WARNING,
        notes=rule.notes,
    )]


def check_collection_method(rule: ValidationRule, value: str, row: Row) -> List[Diagnostic]:
    """Collection method allow-list plus the cellular ADDTAG requirement"""
    results = []

    if value not in VALID_COLLECTION_METHODS:
        results.append(Diagnostic(
            row=row.number,
            column=rule.column_name,
            value=value,
            check=CHECK_INVALID_VALUE,
            message=(
                f'"{value}" may not be a valid collection method. '
                f'Expected: {", ".join(VALID_COLLECTION_METHODS)}'
            ),
            severity=Severity.WARNING,
            notes=rule.notes,
        ))

    if CELLULAR_MARKER in value:
        add_tag = row.get(CELLULAR_TAG_COLUMN).strip()
        if CELLULAR_TAG not in add_tag.lower():
            results.append(Diagnostic(
                row=row.number,
                column=CELLULAR_TAG_COLUMN,
                value=add_tag,
                check=CHECK_BUSINESS_RULE,
                message=(
                    f'When {rule.normalized_name} is "{value}", '
                    f'{CELLULAR_TAG_COLUMN} should include "{CELLULAR_TAG}"'
                ),
                severity=Severity.WARNING,
                notes=CELLULAR_TAG_NOTES,
            ))

    return results


def _parse_decimal(value: str):
    try:
        number = float(value)
    except ValueError:
        return None
    return number if math.isfinite(number) else None


def _check_coordinate(rule: ValidationRule, value: str, row: Row, label: str, bounds) -> List[Diagnostic]:
    number = _parse_decimal(value)
    if number is None:
        return [Diagnostic(
            row=row.number,
            column=rule.column_name,
            value=value,
            check=CHECK_DATA_TYPE,
            message=f'"{rule.column_name}" should be a decimal number (got "{value}")',
            severity=Severity.ERROR,
            notes=rule.notes,
        )]

    low, high = bounds
    if number < low or number > high:
        return [Diagnostic(
            row=row.number,
            column=rule.column_name,
            value=value,
            check=CHECK_RANGE,
            message=f'{label} should be between {low:g} and {high:g} (got {number:g})',
            severity=Severity.WARNING,
            notes=rule.notes,
        )]
    return []


def check_latitude(rule: ValidationRule, value: str, row: Row) -> List[Diagnostic]:
    return _check_coordinate(rule, value, row, "Latitude", LATITUDE_RANGE)


def check_longitude(rule: ValidationRule, value: str, row: Row) -> List[Diagnostic]:
    return _check_coordinate(rule, value, row, "Longitude", LONGITUDE_RANGE)


def check_email(rule: ValidationRule, value: str, row: Row) -> List[Diagnostic]:
    if EMAIL_RE.match(value):
        return []
    return [Diagnostic(
        row=row.number,
        column=rule.column_name,
        value=value,
        check=CHECK_FORMAT,
        message=f'"{value}" doesn\'t look like a valid email address',
        severity=Severity.WARNING,
        notes=rule.notes,
    )]


def check_phone(rule: ValidationRule, value: str, row: Row) -> List[Diagnostic]:
    if len(NON_DIGIT_RE.sub("", value)) >= MIN_PHONE_DIGITS:
        return []
    return [Diagnostic(
        row=row.number,
        column=rule.column_name,
        value=value,
        check=CHECK_FORMAT,
        message=f'Phone number should have at least {MIN_PHONE_DIGITS} digits',
        severity=Severity.WARNING,
        notes=rule.notes,
    )]


# Normalized column name → checks run for that column
DOMAIN_CHECKS: Dict[str, List[DomainCheck]] = {
    "METERUNITS": [check_meter_units],
    "COLLECTIONMETHOD": [check_collection_method],
    "LAT": [check_latitude],
    "LON": [check_longitude],
    "CUSTOMEREMAIL1": [check_email],
    "PHONE": [check_phone],
}


def run_domain_checks(rule: ValidationRule, value: str, row: Row) -> List[Diagnostic]:
    """Run every registered check for the rule's column"""
    results = []
    for check in DOMAIN_CHECKS.get(rule.normalized_name, []):
        results.extend(check(rule, value, row))
    return results
