"""
Upload Validation Module

Checks tabular uploads against a template's column rules and reports
per-cell diagnostics.
"""

from .types import Diagnostic, Severity, ValidationResult
from .column_matcher import ColumnMatch, match_columns
from .uniqueness import UniquenessTracker
from .rule_evaluator import RuleEvaluator
from .aggregator import aggregate, build_summary
from .engine import ValidationEngine, validate_csv, validate_upload

__all__ = [
    'Diagnostic',
    'Severity',
    'ValidationResult',
    'ColumnMatch',
    'match_columns',
    'UniquenessTracker',
    'RuleEvaluator',
    'aggregate',
    'build_summary',
    'ValidationEngine',
    'validate_csv',
    'validate_upload',
]
