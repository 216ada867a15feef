"""
Test configuration and shared fixtures for the upload validator test suite.
"""

from typing import Any, Callable, Dict

import pytest

from upload_validator.templates.defaults import get_default_template
from upload_validator.templates.models import ValidationRule, ValidationTemplate


GOLDEN_HEADER = (
    "IGNORE,CANCREATE,CREF,METERSERIAL,ADDTAG,ACCOUNTREF,PROPERTYADDRESS,MIUSERIAL,"
    "ROUTENAME,COLLECTIONMETHOD,LAT,LON,METERUNITS,PHONE,CUSTOMEREMAIL1"
)

GOLDEN_UPLOAD = "\n".join([
    GOLDEN_HEADER,
    'no,yes,SPID_1,45812-h,readtype=02 cellular-device-installed,ACCN_1,'
    '"1908 San Vincente Rd, Unit 2",67125820,Book,Cellular 500G ERT,36.418176,-116.074688,CCF,'
    '270-555-5555,butch@example.com',
    'no,yes,SPID_2,45813-l,readtype=02,ACCN_2,12 Main St,0671258201,Book,Manual Read,36.5,-116.1,GAL,'
    '(270) 555-1234,a@b.co',
    "",
])

DIRTY_HEADER = (
    "IGNORE,CANCREATE,CREF,METERSERIAL,ADDTAG,ACCOUNTREF,PROPERTYADDRESS,MIUSERIAL,"
    "ROUTENAME,COLLECTIONMETHOD,LAT"
)

# Row 2: IGNORE not boolean (error)
# Row 3: CREF repeats row 2 in another case (error)
# Row 4: METERSERIAL shorter than 5 (error), LAT blank (allowed)
# Row 5: LAT out of range (warning), cellular method without ADDTAG marker (warning)
DIRTY_UPLOAD = "\n".join([
    DIRTY_HEADER,
    "maybe,yes,SPID_1,45812-h,readtype=02,ACCN_1,1 Main St,1001,Book,Manual Read,36.4",
    "no,yes,spid_1,45813-h,readtype=02,ACCN_2,2 Main St,1002,Book,Manual Read,36.4",
    "no,yes,SPID_3,123,readtype=02,ACCN_3,3 Main St,1003,Book,Manual Read,",
    "no,yes,SPID_4,45815-h,readtype=02,ACCN_4,4 Main St,1004,Book,Cellular 500W ERT,95",
    "",
])


def pytest_configure(config):
    """Configure pytest with custom markers"""
    config.addinivalue_line(
        "markers", "golden: end-to-end check against a complete sample upload"
    )
    config.addinivalue_line(
        "markers", "edge_case: malformed or unusual input"
    )


@pytest.fixture
def make_template() -> Callable[..., ValidationTemplate]:
    """Build a template from (column_name, rule kwargs) pairs"""

    def _make(*rules: Dict[str, Any], name: str = "unit-test") -> ValidationTemplate:
        return ValidationTemplate(
            name=name,
            rules=[ValidationRule(column_index=i, **rule) for i, rule in enumerate(rules)],
        )

    return _make


@pytest.fixture(scope="session")
def default_template() -> ValidationTemplate:
    return get_default_template()


@pytest.fixture
def golden_upload() -> str:
    return GOLDEN_UPLOAD


@pytest.fixture
def dirty_upload() -> str:
    return DIRTY_UPLOAD


@pytest.fixture
def sample_template_record() -> Dict[str, Any]:
    """Template as the template store returns it"""
    return {
        "id": "tmpl-1",
        "name": "Meter Sync",
        "description": None,
        "rules": [
            {
                "id": "rule-0",
                "column_name": "cref",
                "column_index": 0,
                "is_required": True,
                "allow_blank": False,
                "is_unique": True,
                "max_length": 50,
                "data_type": "Character",
                "notes": "Service point id",
            },
            {
                "id": "rule-1",
                "column_name": "Lat",
                "column_index": 1,
                "is_required": False,
                "allow_blank": True,
                "is_unique": False,
                "data_type": "text",
            },
        ],
    }
