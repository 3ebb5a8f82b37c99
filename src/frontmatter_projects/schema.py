"""Schema detection module."""

from collections import Counter, defaultdict
from dataclasses import replace
from typing import Any, NotRequired, TypedDict

from frontmatter_projects.classify import classify
from frontmatter_projects.data import DataField, DataFieldType, DataFrame, DataRecord
from frontmatter_projects.records import NAME_FIELD, PATH_FIELD


class ColumnInfo(TypedDict):
    """Column information for a single field."""

    type: str
    repeated: bool
    derived: bool
    identifier: bool
    nullable: bool
    examples: NotRequired[list[Any]]


# Type alias for a described schema
Schema = dict[str, ColumnInfo]


def consensus_type(observed: Counter[DataFieldType]) -> DataFieldType:
    """Pick the column type from observed value types.

    The most frequent non-UNKNOWN type wins. A tie between the top counts
    resolves to STRING, as does a column with no known observations.

    Args:
        observed: Count of each observed type.

    Returns:
        Consensus type for the column.
    """
    counts = {t: n for t, n in observed.items() if t != DataFieldType.UNKNOWN}
    if not counts:
        return DataFieldType.STRING

    top = max(counts.values())
    winners = [t for t, n in counts.items() if n == top]
    if len(winners) > 1:
        return DataFieldType.STRING
    return winners[0]


def detect_fields(records: list[DataRecord]) -> list[DataField]:
    """Detect fields from the union of record keys.

    Fields are ordered by first appearance.

    Args:
        records: Extracted records.

    Returns:
        One field per observed key, typed by majority vote.
    """
    observed: dict[str, Counter[DataFieldType]] = defaultdict(Counter)
    repeated: dict[str, bool] = defaultdict(bool)

    for record in records:
        for key, value in record.values.items():
            value_type = classify(value)
            observed[key][value_type.type] += 1
            repeated[key] = repeated[key] or value_type.repeated

    return [
        DataField(name=key, type=consensus_type(counts), repeated=repeated[key])
        for key, counts in observed.items()
    ]


def detect_schema(records: list[DataRecord]) -> list[DataField]:
    """Detect fields and mark the derived and identifier columns.

    The path and name fields are always derived strings, and path is the
    record identifier, whatever type their values looked like (a daily note
    named "2025-11-27" still has a string name).
    """
    fields = [
        replace(f, type=DataFieldType.STRING, repeated=False, derived=True)
        if f.name in (PATH_FIELD, NAME_FIELD)
        else f
        for f in detect_fields(records)
    ]
    return [
        replace(f, identifier=True) if f.name == PATH_FIELD else f for f in fields
    ]


def describe_fields(frame: DataFrame, max_samples: int = 5) -> Schema:
    """Summarize each field of a data frame.

    Args:
        frame: Data frame to describe.
        max_samples: Maximum number of example values per field.

    Returns:
        Schema dict with type, flags, nullable and examples for each field.
    """
    property_values: dict[str, list[Any]] = defaultdict(list)
    for record in frame.records:
        for key, value in record.values.items():
            property_values[key].append(value)

    total_records = len(frame.records)
    schema: Schema = {}

    for field in frame.fields:
        values = property_values.get(field.name, [])

        # Collect unique sample values
        seen: set[str] = set()
        samples: list[Any] = []
        for v in values:
            key = str(v)
            if key not in seen and len(samples) < max_samples:
                seen.add(key)
                samples.append(v)

        schema[field.name] = ColumnInfo(
            type=field.type.value,
            repeated=field.repeated,
            derived=field.derived,
            identifier=field.identifier,
            nullable=len(values) < total_records,
            examples=samples,
        )

    return schema
