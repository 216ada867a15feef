"""Rule and template Pydantic models"""

import re
from typing import Any, List, Literal, Optional, Pattern

import structlog
from pydantic import BaseModel, ConfigDict, Field, PrivateAttr, field_validator, model_validator

from upload_validator.config import settings
from upload_validator.parsers._parser_kit import normalize_column_name

logger = structlog.get_logger(__name__)


DataType = Literal["text", "number", "date", "boolean", "email"]

# Aliases seen in older template records
DATA_TYPE_ALIASES = {
    "string": "text",
    "character": "text",
    "char": "text",
    "bool": "boolean",
    "numeric": "number",
}


class TemplateConfigError(ValueError):
    """Raised when a template or rule cannot be loaded."""
    def __init__(self, message: str, column: Optional[str] = None):
        super().__init__(message)
        self.column = column


class ValidationRule(BaseModel):
    """One column's validation contract"""
    model_config = ConfigDict(frozen=True, extra="ignore")

    id: Optional[str] = Field(None, description="Rule identifier from the template store")
    column_name: str = Field(..., min_length=1, description="CSV column header this rule applies to")
    column_index: int = Field(default=0, ge=0, description="Display position, not enforced")

    is_required: bool = Field(default=False, description="Column must be present")
    allow_blank: bool = Field(default=True, description="Cells may be empty")
    is_unique: bool = Field(default=False, description="Values must not repeat (case-insensitive)")

    min_length: Optional[int] = Field(None, ge=0, description="Minimum characters")
    max_length: Optional[int] = Field(None, ge=0, description="Maximum characters")

    data_type: DataType = Field(default="text", description="Data type tag")
    pattern: Optional[str] = Field(None, description="Regular expression the whole value must match")
    invalid_characters: Optional[str] = Field(None, description="Characters that are not allowed")

    notes: Optional[str] = Field(None, description="Instructions shown with diagnostics")
    example: Optional[str] = Field(None, description="Example valid value")
    color_code: Optional[str] = Field(None, description="Display colour for the rule editor")

    _compiled_pattern: Optional[Pattern[str]] = PrivateAttr(default=None)
    _pattern_disabled: bool = PrivateAttr(default=False)

    @field_validator('column_name')
    def validate_column_name(cls, v):
        if not v.strip():
            raise ValueError('column_name must not be blank')
        return v.strip()

    @field_validator('data_type', mode='before')
    def normalize_data_type(cls, v):
        if v is None:
            return "text"
        value = str(v).strip().lower()
        return DATA_TYPE_ALIASES.get(value, value)

    @model_validator(mode='after')
    def validate_length_bounds(self):
        if self.min_length and self.max_length and self.min_length > self.max_length:
            raise ValueError(
                f'min_length ({self.min_length}) exceeds max_length ({self.max_length}) '
                f'for column "{self.column_name}"'
            )
        return self

    def model_post_init(self, context: Any) -> None:
        """Compile the rule pattern once, when the rule is loaded."""
        if not self.pattern:
            return

        strict = settings.strict_patterns
        if isinstance(context, dict) and context.get("strict_patterns") is not None:
            strict = bool(context["strict_patterns"])

        try:
            self._compiled_pattern = re.compile(self.pattern)
        except re.error as e:
            if strict:
                raise TemplateConfigError(
                    f'Pattern for column "{self.column_name}" does not compile: {e}',
                    column=self.column_name,
                ) from e
            self._pattern_disabled = True
            logger.warning(
                "rule_pattern_disabled",
                column=self.column_name,
                pattern=self.pattern,
                error=str(e),
            )

    @property
    def normalized_name(self) -> str:
        return normalize_column_name(self.column_name)

    @property
    def compiled_pattern(self) -> Optional[Pattern[str]]:
        """Compiled pattern, or None when there is none or it is disabled"""
        return self._compiled_pattern

    @property
    def pattern_disabled(self) -> bool:
        return self._pattern_disabled

    @property
    def blank_is_error(self) -> bool:
        return self.is_required and not self.allow_blank


class ValidationTemplate(BaseModel):
    """An ordered set of column rules describing one file format"""
    model_config = ConfigDict(frozen=True, extra="ignore")

    id: Optional[str] = Field(None, description="Template identifier from the template store")
    name: str = Field(..., min_length=1, max_length=200, description="Template name")
    description: Optional[str] = Field(None, description="Template description")
    rules: List[ValidationRule] = Field(default_factory=list, description="Column rules in display order")
    created_by: str = Field(default="system", description="Creator identifier")
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    @model_validator(mode='after')
    def validate_unique_columns(self):
        seen = set()
        for rule in self.rules:
            key = rule.normalized_name
            if key in seen:
                raise ValueError(f'Duplicate column "{rule.column_name}" in template "{self.name}"')
            seen.add(key)
        return self

    @property
    def expected_columns(self) -> List[str]:
        return [rule.normalized_name for rule in self.rules]

    @property
    def required_columns(self) -> List[str]:
        return [rule.normalized_name for rule in self.rules if rule.is_required]

    def get_rule(self, column: str) -> Optional[ValidationRule]:
        """Look up a rule by column name (case-insensitive)"""
        key = normalize_column_name(column)
        for rule in self.rules:
            if rule.normalized_name == key:
                return rule
        return None
