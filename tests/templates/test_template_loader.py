"""
Template loading and the built-in NewNetworkUpload template.
"""

import json

import pytest

from upload_validator.templates.defaults import (
    DEFAULT_TEMPLATE_ID,
    NEW_NETWORK_UPLOAD_COLUMNS,
    default_template_record,
    get_default_template,
    parse_length_spec,
)
from upload_validator.templates.loader import load_template, template_from_record, template_to_record
from upload_validator.templates.models import TemplateConfigError


def test_template_from_record(sample_template_record):
    template = template_from_record(sample_template_record)

    assert template.id == "tmpl-1"
    assert template.name == "Meter Sync"
    assert template.created_by == "system"
    assert template.created_at is not None
    assert template.expected_columns == ["CREF", "LAT"]
    assert template.rules[0].data_type == "text"
    assert template.rules[0].is_unique is True


def test_template_from_record_without_rules():
    template = template_from_record({"name": "empty", "rules": None})

    assert template.rules == []


@pytest.mark.parametrize("record", [
    "not a mapping",
    {"rules": []},
    {"name": "bad", "rules": [{"column_name": "A"}, {"column_name": "a"}]},
    {"name": "bad", "rules": [{"column_name": "A", "data_type": "currency"}]},
])
def test_invalid_records_raise_template_config_error(record):
    with pytest.raises(TemplateConfigError):
        template_from_record(record)


def test_load_template_from_json(tmp_path, sample_template_record):
    path = tmp_path / "template.json"
    path.write_text(json.dumps(sample_template_record))

    template = load_template(path)

    assert template.name == "Meter Sync"


def test_load_template_rejects_bad_json(tmp_path):
    path = tmp_path / "template.json"
    path.write_text("{not json")

    with pytest.raises(TemplateConfigError):
        load_template(path)


def test_template_record_round_trip():
    template = get_default_template()

    reloaded = template_from_record(template_to_record(template))

    assert reloaded.expected_columns == template.expected_columns
    assert reloaded.rules[3].min_length == 5


@pytest.mark.parametrize("length,expected", [
    (50, (None, 50)),
    ("25", (None, 25)),
    ("5-48", (5, 48)),
    (None, (None, None)),
    ("", (None, None)),
])
def test_parse_length_spec(length, expected):
    assert parse_length_spec(length) == expected


def test_default_template_shape(default_template):
    assert default_template.id == DEFAULT_TEMPLATE_ID
    assert len(default_template.rules) == len(NEW_NETWORK_UPLOAD_COLUMNS) == 28
    assert [r.column_index for r in default_template.rules] == list(range(28))

    serial = default_template.get_rule("METERSERIAL")
    assert (serial.min_length, serial.max_length) == (5, 48)
    assert serial.is_unique

    assert default_template.get_rule("IGNORE").data_type == "boolean"
    assert default_template.get_rule("LAT").allow_blank
    assert set(default_template.required_columns) == {
        "IGNORE", "CANCREATE", "CREF", "METERSERIAL", "ADDTAG", "ACCOUNTREF",
        "PROPERTYADDRESS", "MIUSERIAL", "ROUTENAME", "COLLECTIONMETHOD",
    }


def test_default_template_colors(default_template):
    assert default_template.get_rule("CREF").color_code == "#8b5cf6"
    assert default_template.get_rule("ADDTAG").color_code == "#dc2626"
    assert default_template.get_rule("PHONE").color_code == "#22c55e"


def test_default_template_record_is_json_serializable():
    record = default_template_record()

    assert json.loads(json.dumps(record))["name"] == "NewNetworkUpload"
