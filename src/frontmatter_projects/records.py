"""Record extraction from document front matter."""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from pathlib import PurePosixPath
from typing import Any

from frontmatter_projects.classify import (
    is_empty,
    parse_boolean_string,
    parse_date_string,
    parse_number_string,
)
from frontmatter_projects.data import DataRecord

# Keys the host adds for its own bookkeeping (e.g. source positions).
DEFAULT_INTERNAL_KEYS = frozenset({"position"})

PATH_FIELD = "path"
NAME_FIELD = "name"


@dataclass(frozen=True)
class Document:
    """A host document: a vault-relative path and a display name."""

    path: str
    name: str

    @classmethod
    def from_path(cls, path: str) -> "Document":
        """Create a document whose display name is the file stem."""
        return cls(path=path, name=PurePosixPath(path).stem)


def standardize_string(value: str) -> Any:
    """Convert a string the classifier reads as a date, boolean or number.

    Checks run in classification order, so a standardized value always
    classifies the same as the string it came from.
    """
    parsed_date = parse_date_string(value)
    if parsed_date is not None:
        return parsed_date
    parsed_bool = parse_boolean_string(value)
    if parsed_bool is not None:
        return parsed_bool
    parsed_number = parse_number_string(value)
    if parsed_number is not None:
        return parsed_number
    return value


def standardize_value(value: Any) -> Any:
    """Canonicalize a single value.

    Date, boolean and numeric strings become typed values and tuples become
    lists. Empty list elements are dropped.
    """
    if isinstance(value, str):
        return standardize_string(value)
    if isinstance(value, (list, tuple)):
        return [standardize_value(v) for v in value if not is_empty(v)]
    return value


def standardize_record(
    record_id: str,
    values: dict[str, Any],
    keep: Iterable[str] = (PATH_FIELD, NAME_FIELD),
) -> DataRecord:
    """Build a record with standardized values.

    Values that become empty after standardization (e.g. a list of empty
    strings) are dropped. Keys in ``keep`` are stored as given.
    """
    kept = set(keep)
    standardized: dict[str, Any] = {}
    for key, value in values.items():
        if key in kept:
            standardized[key] = value
            continue
        value = standardize_value(value)
        if not is_empty(value):
            standardized[key] = value
    return DataRecord(id=record_id, values=standardized)


def parse_record(
    document: Document,
    metadata: Mapping[str, Any] | None,
    internal_keys: Iterable[str] = DEFAULT_INTERNAL_KEYS,
) -> DataRecord:
    """Extract a normalized record from a document's front matter.

    Args:
        document: Document the metadata belongs to.
        metadata: Raw front matter map, or None if the document has none.
        internal_keys: Host bookkeeping keys to strip.

    Returns:
        Record keyed by the document path. Empty values are omitted and the
        derived path/name values always override user keys of the same name.
    """
    skip = set(internal_keys)
    values = {
        str(key): value
        for key, value in (metadata or {}).items()
        if str(key) not in skip and not is_empty(value)
    }

    # Remove first so derived values always come after user keys.
    values.pop(PATH_FIELD, None)
    values.pop(NAME_FIELD, None)
    values[PATH_FIELD] = document.path
    values[NAME_FIELD] = document.name

    return standardize_record(document.path, values)


def parse_records(
    entries: Iterable[tuple[Document, Mapping[str, Any] | None]],
    internal_keys: Iterable[str] = DEFAULT_INTERNAL_KEYS,
) -> list[DataRecord]:
    """Extract records for (document, metadata) pairs, preserving order."""
    keys = frozenset(internal_keys)
    return [parse_record(doc, metadata, keys) for doc, metadata in entries]
