"""
Validation templates: column rules and how they are loaded.
"""

from upload_validator.templates.models import (
    TemplateConfigError,
    ValidationRule,
    ValidationTemplate,
)
from upload_validator.templates.loader import (
    load_template,
    template_from_record,
    template_to_record,
)
from upload_validator.templates.defaults import get_default_template

__all__ = [
    'TemplateConfigError',
    'ValidationRule',
    'ValidationTemplate',
    'load_template',
    'template_from_record',
    'template_to_record',
    'get_default_template',
]
