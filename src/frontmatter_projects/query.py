"""DuckDB query execution module."""

import json
import math
from datetime import date, datetime, time, timezone
from typing import Any

import duckdb
import pyarrow as pa

from frontmatter_projects.data import DataField, DataFieldType, DataFrame

TABLE_NAME = "records"


def _arrow_type(field: DataField) -> pa.DataType:
    """Get the Arrow column type for a field.

    Repeated and unknown columns are JSON-encoded strings.
    """
    if field.repeated:
        return pa.string()
    if field.type == DataFieldType.NUMBER:
        return pa.float64()
    if field.type == DataFieldType.BOOLEAN:
        return pa.bool_()
    if field.type == DataFieldType.DATE:
        return pa.timestamp("us")
    return pa.string()


def _to_timestamp(value: Any) -> datetime | None:
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone(timezone.utc).replace(tzinfo=None)
        return value
    if isinstance(value, date):
        return datetime.combine(value, time())
    return None


def _to_json(value: Any) -> str:
    try:
        return json.dumps(value, ensure_ascii=False, default=str)
    except (TypeError, ValueError):
        return json.dumps(str(value), ensure_ascii=False)


def _serialize_value(field: DataField, value: Any) -> Any:
    """Convert a record value to its Arrow column representation.

    Values that don't fit the column type become None.
    """
    if value is None:
        return None
    if field.repeated or field.type == DataFieldType.UNKNOWN:
        return _to_json(value)
    if field.type == DataFieldType.NUMBER:
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            return None
        try:
            number = float(value)
        except OverflowError:
            return None
        return number if math.isfinite(number) else None
    if field.type == DataFieldType.BOOLEAN:
        return value if isinstance(value, bool) else None
    if field.type == DataFieldType.DATE:
        return _to_timestamp(value)
    return value if isinstance(value, str) else str(value)


def to_arrow(frame: DataFrame) -> pa.Table:
    """Build an Arrow table with one typed column per field."""
    columns_data: dict[str, list[Any]] = {f.name: [] for f in frame.fields}
    for record in frame.records:
        for field in frame.fields:
            columns_data[field.name].append(
                _serialize_value(field, record.values.get(field.name))
            )

    schema = pa.schema([(f.name, _arrow_type(f)) for f in frame.fields])
    return pa.table(columns_data, schema=schema)


def execute_query(frame: DataFrame, sql: str) -> dict[str, Any]:
    """Execute DuckDB SQL query on a data frame.

    Columns are typed from the detected fields: numbers are DOUBLE, booleans
    BOOLEAN, dates TIMESTAMP, text VARCHAR. Repeated fields are JSON-encoded
    strings; use from_json() in SQL to unpack them.

    Args:
        frame: Data frame to query.
        sql: SQL query string. Must reference the 'records' table.

    Returns:
        Dictionary with results, row_count, and columns.
    """
    if not frame.records:
        return {
            "results": [],
            "row_count": 0,
            "columns": [],
        }

    conn = duckdb.connect(":memory:")
    try:
        conn.register(TABLE_NAME, to_arrow(frame))

        result = conn.execute(sql)
        columns = [desc[0] for desc in result.description]
        rows = result.fetchall()
    finally:
        conn.close()

    # Convert to list of dicts
    results = [dict(zip(columns, row, strict=True)) for row in rows]

    return {
        "results": results,
        "row_count": len(results),
        "columns": columns,
    }
