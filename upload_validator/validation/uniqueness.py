"""
Uniqueness Tracker

Per-call record of values already seen in unique-flagged columns. Build a
new tracker for every validation; never share one between calls.
"""

from typing import Dict, Set

from upload_validator.templates.models import ValidationTemplate


class UniquenessTracker:
    """Case-insensitive seen-value sets, one per unique column"""

    def __init__(self, template: ValidationTemplate):
        self._seen: Dict[str, Set[str]] = {
            rule.normalized_name: set() for rule in template.rules if rule.is_unique
        }

    def tracks(self, column: str) -> bool:
        return column in self._seen

    def check_and_record(self, column: str, value: str) -> bool:
        """
        Record a value and report whether it is new.

        Returns False when the value (compared case-insensitively) was
        already seen in this column.
        """
        key = value.upper()
        seen = self._seen.setdefault(column, set())
        if key in seen:
            return False
        seen.add(key)
        return True

    def seen_count(self, column: str) -> int:
        return len(self._seen.get(column, ()))
