"""Command-line interface for the upload validator"""

import json
import sys
from pathlib import Path
from typing import Optional

import click
import structlog

from upload_validator.config import settings
from upload_validator.logging_config import configure_logging
from upload_validator.parsers._parser_kit import decode_upload
from upload_validator.parsers.tabular_parser import get_headers, get_preview
from upload_validator.templates.defaults import default_template_record, get_default_template
from upload_validator.templates.loader import load_template
from upload_validator.templates.models import TemplateConfigError
from upload_validator.validation.engine import validate_upload
from upload_validator.validation.types import Severity

logger = structlog.get_logger(__name__)

EXIT_INVALID = 1
EXIT_CONFIG_ERROR = 2


def _read_text(file_path: str) -> str:
    return decode_upload(Path(file_path).read_bytes())


@click.group()
@click.option('--log-level', default=None, help='Override LOG_LEVEL')
@click.option('--log-format', type=click.Choice(['json', 'console']), default=None, help='Override LOG_FORMAT')
def cli(log_level: Optional[str], log_format: Optional[str]):
    """Upload Validator CLI"""
    configure_logging(log_level=log_level, log_format=log_format)


@cli.command()
@click.argument('file_path', type=click.Path(exists=True, dir_okay=False))
@click.option('--template', '-t', 'template_path', type=click.Path(exists=True, dir_okay=False),
              help='Template JSON file (defaults to the built-in NewNetworkUpload template)')
@click.option('--delimiter', '-d', default=None, help='Field separator')
@click.option('--strict-patterns/--lenient-patterns', default=None,
              help='Reject templates whose patterns do not compile')
@click.option('--json', 'as_json', is_flag=True, help='Print the full result as JSON')
@click.option('--limit', default=50, type=int, help='Maximum diagnostics to print')
def validate(file_path: str, template_path: Optional[str], delimiter: Optional[str],
             strict_patterns: Optional[bool], as_json: bool, limit: int):
    """Validate FILE_PATH against a template"""
    try:
        if template_path:
            template = load_template(template_path, strict_patterns=strict_patterns)
        else:
            template = get_default_template()
    except TemplateConfigError as e:
        click.echo(f"❌ Template error: {e}", err=True)
        logger.error("cli_template_load_failed", template=template_path, error=str(e))
        sys.exit(EXIT_CONFIG_ERROR)

    result = validate_upload(Path(file_path).read_bytes(), template, delimiter=delimiter)

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2, default=str))
    else:
        icon = "✅" if result.is_valid else "❌"
        click.echo(f"{icon} {result.summary}")
        click.echo(f"   Template: {template.name}")
        click.echo(f"   Rows: {result.total_rows}")
        click.echo(f"   Errors: {result.total_errors}  Warnings: {result.total_warnings}")
        if result.extra_columns:
            click.echo(f"   Extra columns: {', '.join(result.extra_columns)}")

        for diagnostic in result.errors[:limit]:
            marker = "E" if diagnostic.severity == Severity.ERROR else "W"
            where = "file" if diagnostic.is_file_level else f"row {diagnostic.row}"
            click.echo(f"   [{marker}] {where} {diagnostic.column} ({diagnostic.check}): {diagnostic.message}")
        if len(result.errors) > limit:
            click.echo(f"   ... {len(result.errors) - limit} more")

    if not result.is_valid:
        sys.exit(EXIT_INVALID)


@cli.command()
@click.argument('file_path', type=click.Path(exists=True, dir_okay=False))
@click.option('--delimiter', '-d', default=None, help='Field separator')
def headers(file_path: str, delimiter: Optional[str]):
    """Print the header names of FILE_PATH"""
    text = _read_text(file_path)
    for name in get_headers(text, delimiter or settings.default_delimiter):
        click.echo(name)


@cli.command()
@click.argument('file_path', type=click.Path(exists=True, dir_okay=False))
@click.option('--rows', '-n', default=None, type=int, help='Number of rows to show')
@click.option('--delimiter', '-d', default=None, help='Field separator')
def preview(file_path: str, rows: Optional[int], delimiter: Optional[str]):
    """Print the first rows of FILE_PATH as JSON"""
    text = _read_text(file_path)
    data = get_preview(text, rows if rows is not None else settings.preview_rows,
                       delimiter or settings.default_delimiter)
    click.echo(json.dumps(data, indent=2))


@cli.command('default-template')
def default_template():
    """Dump the built-in template as JSON"""
    click.echo(json.dumps(default_template_record(), indent=2))


if __name__ == '__main__':
    cli()
