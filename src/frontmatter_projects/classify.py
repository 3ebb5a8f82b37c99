"""Value classification module.

Maps a single raw front matter value to the semantic type used for column
detection. Classification never fails: anything that is not recognized ends
up as UNKNOWN.
"""

import math
import re
from datetime import date, datetime
from typing import Any, NamedTuple

from frontmatter_projects.data import DataFieldType

DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")
DATETIME_PATTERN = re.compile(
    r"^\d{4}-\d{2}-\d{2}[T ]\d{2}:\d{2}(:\d{2}(\.\d+)?)?(Z|[+-]\d{2}:?\d{2})?$"
)

# No leading zeros ("007" is an identifier, not a number), no separators.
NUMBER_PATTERN = re.compile(r"^[+-]?(0|[1-9]\d*)(\.\d+)?([eE][+-]?\d+)?$")

BOOLEAN_LITERALS = {"true": True, "false": False}


class ValueType(NamedTuple):
    """Classification result for one value."""

    type: DataFieldType
    repeated: bool = False


def parse_date_string(value: str) -> date | datetime | None:
    """Parse an ISO 8601 date or date-time string.

    Args:
        value: String to parse.

    Returns:
        A date for "YYYY-MM-DD", a datetime for date-time strings, or None
        if the string is not a valid ISO date.
    """
    try:
        if DATE_PATTERN.match(value):
            return date.fromisoformat(value)
        if DATETIME_PATTERN.match(value):
            return datetime.fromisoformat(value)
    except ValueError:
        return None
    return None


def parse_number_string(value: str) -> int | float | None:
    """Parse an unambiguous numeric literal.

    Returns:
        An int for integer literals, a float for literals with a fraction or
        exponent, or None if the string is not a finite number.
    """
    match = NUMBER_PATTERN.match(value)
    if match is None:
        return None
    try:
        if match.group(2) is None and match.group(3) is None:
            return int(value)
        number = float(value)
    except ValueError:
        # int() refuses digit strings past the interpreter's limit.
        return None
    return number if math.isfinite(number) else None


def parse_boolean_string(value: str) -> bool | None:
    """Parse "true"/"false" in any case, or return None."""
    return BOOLEAN_LITERALS.get(value.lower())


def is_number_string(value: str) -> bool:
    """Check if a string is an unambiguous numeric literal."""
    return parse_number_string(value) is not None


def is_empty(value: Any) -> bool:
    """Check if a value counts as empty (None, empty string or empty list)."""
    if value is None:
        return True
    if isinstance(value, str):
        return value == ""
    if isinstance(value, (list, tuple)):
        return len(value) == 0
    return False


def classify_scalar(value: Any) -> DataFieldType:
    """Classify a non-list value."""
    if isinstance(value, (date, datetime)):
        return DataFieldType.DATE
    if isinstance(value, bool):
        return DataFieldType.BOOLEAN
    if isinstance(value, (int, float)):
        if isinstance(value, float) and not math.isfinite(value):
            return DataFieldType.UNKNOWN
        return DataFieldType.NUMBER
    if isinstance(value, str):
        if value == "":
            return DataFieldType.UNKNOWN
        if parse_date_string(value) is not None:
            return DataFieldType.DATE
        if parse_boolean_string(value) is not None:
            return DataFieldType.BOOLEAN
        if is_number_string(value):
            return DataFieldType.NUMBER
        return DataFieldType.STRING
    return DataFieldType.UNKNOWN


def classify(value: Any) -> ValueType:
    """Classify a raw front matter value.

    Lists are repeated values typed by their first non-empty element. Nested
    lists are not descended into and classify as UNKNOWN elements.

    Args:
        value: Any value a metadata map can hold.

    Returns:
        ValueType with the semantic type and repeated flag.
    """
    if isinstance(value, (list, tuple)):
        for item in value:
            if is_empty(item):
                continue
            if isinstance(item, (list, tuple)):
                return ValueType(DataFieldType.UNKNOWN, repeated=True)
            return ValueType(classify_scalar(item), repeated=True)
        return ValueType(DataFieldType.UNKNOWN, repeated=True)
    return ValueType(classify_scalar(value))
