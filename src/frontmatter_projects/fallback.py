"""String fallback for text columns.

After schema detection a String column may still hold values from minority
observations (numbers, booleans, dates, structures). The fallback rewrites
them to strings so the column is homogeneous.
"""

import json
from datetime import date
from typing import Any

from frontmatter_projects.data import DataRecord


def render_string(value: Any) -> str:
    """Render a value as a display string.

    Args:
        value: Any front matter value.

    Returns:
        Booleans as "true"/"false", dates in ISO format, integral floats
        without a fraction, mappings as JSON and lists comma-separated.
    """
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, dict):
        try:
            return json.dumps(value, ensure_ascii=False, default=str)
        except (TypeError, ValueError):
            # Keys JSON can't represent, e.g. tuples from YAML complex keys.
            return str(value)
    if isinstance(value, (list, tuple)):
        return ", ".join(render_string(v) for v in value)
    return str(value)


def _conforms(value: Any, repeated: bool) -> bool:
    if repeated:
        return isinstance(value, list) and all(isinstance(v, str) for v in value)
    return isinstance(value, str)


def _coerce(value: Any, repeated: bool) -> Any:
    if not repeated:
        return render_string(value)
    if isinstance(value, (list, tuple)):
        return [render_string(v) for v in value]
    return [render_string(value)]


def string_fallback(
    records: list[DataRecord], field: str, repeated: bool = False
) -> list[DataRecord]:
    """Coerce a field's values to strings in every record.

    Args:
        records: Records to normalize. They are not modified.
        field: Name of a String-typed field.
        repeated: Whether the field is list-valued. Repeated fields keep
            their list shape with string elements.

    Returns:
        Records where the field, if present, holds a string (or a list of
        strings for repeated fields). Absent values stay absent.
    """
    result: list[DataRecord] = []
    for record in records:
        value = record.values.get(field)
        if field not in record.values or _conforms(value, repeated):
            result.append(record)
            continue
        values = dict(record.values)
        values[field] = _coerce(value, repeated)
        result.append(DataRecord(id=record.id, values=values))
    return result
