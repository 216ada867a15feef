"""
Built-in "NewNetworkUpload" template.

Default column rules for the meter network upload format used to sync a
CIS/billing export into the reading system. Projects usually start from this
template and customise it in the template store.
"""

from typing import Any, Dict, List, Optional, Tuple, Union

from upload_validator.templates.models import ValidationRule, ValidationTemplate


DEFAULT_TEMPLATE_ID = "default-new-network-upload"
DEFAULT_TEMPLATE_NAME = "NewNetworkUpload"

# Rule colours for the template editor
COLOR_REQUIRED = "#dc2626"
COLOR_OPTIONAL = "#22c55e"
COLOR_UNIQUE = "#8b5cf6"
COLOR_DEFAULT = "#94a3b8"

# (name, required, allow_blank, unique, data_type, length, example, notes)
# length is a max ("50"/50) or a "min-max" range ("5-48")
NEW_NETWORK_UPLOAD_COLUMNS: List[Tuple[str, bool, bool, bool, str, Optional[Union[int, str]], str, str]] = [
    ("IGNORE", True, False, False, "boolean", 5, "no",
     'Defaults to "no". Set to "yes" to skip the row on import.'),
    ("CANCREATE", True, False, False, "boolean", 5, "yes",
     '(yes, no) Defaults to yes. Yes is always accepted, even when the meter already exists.'),
    ("CREF", True, False, True, "text", 50, "SPID_015481",
     "Unique, permanent id for each meter/endpoint combination. Does not change when the "
     "meter or ERT number changes (ServicePointID when using ChoiceConnect)."),
    ("METERSERIAL", True, False, True, "text", "5-48", "45812-h",
     "Meter serial number, must be unique and at least 5 characters. Compound meters may "
     "use -h for the high side and -l for the low side."),
    ("ADDTAG", True, False, False, "text", None, "readtype=02 cellular-device-installed mcategory=4",
     'Stores the read type code used for RF truncation/multiplication. Records collected by '
     '"Cellular 500W ERT" or "Cellular 500G ERT" must include "Cellular-Device-Installed".'),
    ("ACCOUNTREF", True, False, False, "text", 25, "ACCN_16975",
     "Account lookup reference, unique to the network."),
    ("CUSTOMERNAME", False, True, False, "text", 100, '"Cassidy, Butch"',
     'Customer name. Enclose in double quotes when it contains a comma.'),
    ("PROPERTYADDRESS", True, False, False, "text", 500, "1908 San Vincente Rd",
     "Property address of the meter. Enclose in double quotes when it contains a comma."),
    ("MIUSERIAL", True, False, True, "text", 50, "67125820",
     "Endpoint (transponder/ERT) id for the meter. Cellular ERT ids are 10 digits with a "
     "leading 0. When an ERT is removed, switch COLLECTIONMETHOD to Manual Read."),
    ("ROUTENAME", True, False, False, "text", 25, "Book",
     "Exact name of an existing route (route, book or cycle number)."),
    ("ADDRESSLINE1", False, True, False, "text", 500, "1908 San Vincente Rd",
     "Additional address line."),
    ("LAT", False, True, False, "text", None, "36.418176",
     "Latitude in decimal degrees."),
    ("LON", False, True, False, "text", None, "-116.074688",
     "Longitude in decimal degrees."),
    ("METERTYPE", False, True, False, "text", None, "Generic",
     "Meter type."),
    ("METERMODEL", False, True, False, "text", None, "Gas",
     "Meter model type (Gas, Water)."),
    ("COLLECTIONMETHOD", True, False, False, "text", None, "Cellular 500G ERT",
     "How readings are collected: Manual Read, Cellular 500W ERT or Cellular 500G ERT."),
    ("SEQUENCE", False, True, False, "text", None, "10",
     "Position in the reading route."),
    ("METERNOMINALSIZE", False, True, False, "text", None, '5/8"',
     "Physical meter size."),
    ("METERFORMAT", False, True, False, "text", None, "4.0",
     "Register format/precision."),
    ("METERUNITS", False, True, False, "text", None, "CCF",
     "Units. Gas: CCF, cu ft. Water: CCF, CGAL, cu ft, GAL, KGAL. Electric: KW, KWH."),
    ("METERINSTALLATIONDATE", False, True, False, "text", None, "17/06/1992",
     "Install date, DD/MM/YYYY or YYYY-MM-DD."),
    ("CATEGORY", False, True, False, "text", None, "Residential",
     "Customer category (Residential, Commercial)."),
    ("METERCOMMENT", False, True, False, "text", None, "gate code: 4434",
     "Notes about the meter location."),
    ("METERREF", False, True, False, "text", None, "",
     "Additional meter reference."),
    ("PHONE", False, True, False, "text", None, "270-555-5555",
     "Customer phone number."),
    ("CUSTOMEREMAIL1", False, True, False, "text", None, "Butch.Cassidy@gmail.com",
     "Customer email address."),
    ("DMA", False, True, False, "text", None, "10",
     "District Metered Area identifier."),
    ("PERMANTENTLYDISCONNECTED", False, True, False, "boolean", None, "False",
     "True when the meter is permanently disconnected and should not be read."),
]


def parse_length_spec(length: Optional[Union[int, str]]) -> Tuple[Optional[int], Optional[int]]:
    """
    Split a length column into (min_length, max_length).

    Examples:
        50 → (None, 50)
        "25" → (None, 25)
        "5-48" → (5, 48)
        None → (None, None)
    """
    if length is None or length == "":
        return None, None
    if isinstance(length, str) and "-" in length:
        low, high = length.split("-", 1)
        return int(low.strip()), int(high.strip())
    return None, int(length)


def _color_for(required: bool, allow_blank: bool, unique: bool) -> str:
    if unique:
        return COLOR_UNIQUE
    if not required:
        return COLOR_OPTIONAL
    if not allow_blank:
        return COLOR_REQUIRED
    return COLOR_DEFAULT


def build_default_rules() -> List[ValidationRule]:
    """Convert the column table into ValidationRule objects"""
    rules = []
    for index, (name, required, allow_blank, unique, data_type, length, example, notes) in enumerate(
        NEW_NETWORK_UPLOAD_COLUMNS
    ):
        min_length, max_length = parse_length_spec(length)
        rules.append(ValidationRule(
            id=f"rule-{index}",
            column_name=name,
            column_index=index,
            is_required=required,
            allow_blank=allow_blank,
            is_unique=unique,
            min_length=min_length,
            max_length=max_length,
            data_type=data_type,
            notes=notes,
            example=example,
            color_code=_color_for(required, allow_blank, unique),
        ))
    return rules


def get_default_template() -> ValidationTemplate:
    """The NewNetworkUpload template"""
    return ValidationTemplate(
        id=DEFAULT_TEMPLATE_ID,
        name=DEFAULT_TEMPLATE_NAME,
        description=(
            "NewNetworkUpload CSV used to update the meter reading system from CIS/Billing. "
            "Recommended to run as a nightly automated export."
        ),
        rules=build_default_rules(),
    )


def default_template_record() -> Dict[str, Any]:
    """Default template in the template store's record shape"""
    return get_default_template().model_dump(mode="json")
