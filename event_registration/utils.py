"""
Small helpers shared by the route modules.
"""

import re
from datetime import date, datetime
from typing import Any, Dict, Iterable, Optional

from flask import request

_INT_PATTERN = re.compile(r"^\s*[+-]?\d+\s*$")

# Fixed English names, independent of the process locale
MONTH_NAMES = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)


def json_body() -> Dict[str, Any]:
    """
    Return the request's JSON object, or an empty dict when the body is
    missing, malformed, or not a JSON object (e.g. a list).
    """
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


def parse_id(val: Any) -> Optional[int]:
    """
    Parse an identifier from a path segment or JSON value.

    Accepts ints and strings of digits (optional sign, surrounding spaces).
    Booleans, fractional floats and any other text are rejected.

    Returns:
        int: The parsed id, or None if the value is not an integer.
    """
    if isinstance(val, bool):
        return None
    if isinstance(val, int):
        return val
    if isinstance(val, float):
        return int(val) if val.is_integer() else None
    if isinstance(val, str) and _INT_PATTERN.match(val):
        return int(val)
    return None


def serialize_row(row: Any, fields: Iterable[str] = ()) -> Dict[str, Any]:
    """
    Convert a database row to a JSON-ready dict.

    Date and datetime values in `fields` (or in every column when no
    fields are given) are turned into ISO-8601 strings.
    """
    data = dict(row)
    for key in (fields or data.keys()):
        value = data.get(key)
        if isinstance(value, (datetime, date)):
            data[key] = value.isoformat()
    return data


def format_long_date(val: Any) -> Optional[str]:
    """
    Format a date as "Month D, YYYY", e.g. date(2024, 3, 5) -> "March 5, 2024".
    """
    if val is None:
        return None
    return f"{MONTH_NAMES[val.month - 1]} {val.day}, {val.year}"
