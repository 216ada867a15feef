"""
Template loading.

Templates are owned by an external store; this module turns the store's
records (dicts) or exported JSON files into ValidationTemplate objects.
"""

import json
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Optional, Union

import structlog
from pydantic import ValidationError

from upload_validator.templates.models import TemplateConfigError, ValidationTemplate

logger = structlog.get_logger(__name__)


def template_from_record(
    record: Dict[str, Any],
    strict_patterns: Optional[bool] = None,
) -> ValidationTemplate:
    """
    Convert a template store record into a ValidationTemplate.

    Missing bookkeeping fields are filled in (created_by defaults to
    "system", timestamps to now). `strict_patterns` overrides the
    STRICT_PATTERNS setting for this load only.

    Raises:
        TemplateConfigError: record is not a valid template
    """
    if not isinstance(record, dict):
        raise TemplateConfigError(f"Template record must be a mapping, got {type(record).__name__}")

    now = datetime.now().isoformat()
    data = dict(record)
    data["rules"] = data.get("rules") or []
    data["description"] = data.get("description") or None
    data["created_by"] = data.get("created_by") or "system"
    data["created_at"] = data.get("created_at") or now
    data["updated_at"] = data.get("updated_at") or now

    context = {"strict_patterns": strict_patterns} if strict_patterns is not None else None
    try:
        template = ValidationTemplate.model_validate(data, context=context)
    except ValidationError as e:
        raise TemplateConfigError(f"Invalid template '{data.get('name', '<unnamed>')}': {e}") from e

    logger.debug("template_loaded", template=template.name, rules=len(template.rules))
    return template


def load_template(
    path: Union[str, Path],
    strict_patterns: Optional[bool] = None,
) -> ValidationTemplate:
    """Load a template exported as JSON"""
    file_path = Path(path)
    try:
        with open(file_path, 'r', encoding='utf-8') as f:
            record = json.load(f)
    except json.JSONDecodeError as e:
        raise TemplateConfigError(f"Template file {file_path} is not valid JSON: {e}") from e

    return template_from_record(record, strict_patterns=strict_patterns)


def template_to_record(template: ValidationTemplate) -> Dict[str, Any]:
    """Serialize a template back to the store's record shape"""
    return template.model_dump(mode="json")
