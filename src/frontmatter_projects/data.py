"""Data model for project tables."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class DataFieldType(str, Enum):
    """Semantic type of a detected column."""

    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    DATE = "date"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class DataField:
    """A detected column descriptor."""

    name: str
    type: DataFieldType
    repeated: bool = False
    """True if the column's values are lists."""

    derived: bool = False
    """True if the field was synthesized rather than authored."""

    identifier: bool = False
    """True for the field that stably identifies a record."""

    type_config: dict[str, Any] | None = None

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {
            "name": self.name,
            "type": self.type.value,
            "repeated": self.repeated,
            "derived": self.derived,
            "identifier": self.identifier,
        }
        if self.type_config is not None:
            result["type_config"] = self.type_config
        return result


@dataclass
class DataRecord:
    """One document's normalized row."""

    id: str
    values: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "values": dict(self.values)}


@dataclass
class DataFrame:
    """Detected fields paired with the extracted records."""

    fields: list[DataField] = field(default_factory=list)
    records: list[DataRecord] = field(default_factory=list)

    def get_field(self, name: str) -> DataField | None:
        """Get a field by name, or None if the frame has no such column."""
        for f in self.fields:
            if f.name == name:
                return f
        return None

    def to_dict(self) -> dict[str, Any]:
        return {
            "fields": [f.to_dict() for f in self.fields],
            "records": [r.to_dict() for r in self.records],
        }
