"""Upload Validator - column rule checks for tabular uploads"""

from upload_validator.templates import (
    TemplateConfigError,
    ValidationRule,
    ValidationTemplate,
    get_default_template,
    load_template,
    template_from_record,
)
from upload_validator.validation import (
    Diagnostic,
    Severity,
    ValidationEngine,
    ValidationResult,
    validate_csv,
    validate_upload,
)

__version__ = "0.1.0"

__all__ = [
    'TemplateConfigError',
    'ValidationRule',
    'ValidationTemplate',
    'get_default_template',
    'load_template',
    'template_from_record',
    'Diagnostic',
    'Severity',
    'ValidationEngine',
    'ValidationResult',
    'validate_csv',
    'validate_upload',
]
