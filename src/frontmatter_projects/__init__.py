"""Front matter of a folder of documents as a typed table."""

from frontmatter_projects.classify import ValueType, classify
from frontmatter_projects.data import DataField, DataFieldType, DataFrame, DataRecord
from frontmatter_projects.datasource import (
    DataSource,
    FrontmatterDataSource,
    MetadataHost,
)
from frontmatter_projects.fallback import string_fallback
from frontmatter_projects.project import ProjectDefinition
from frontmatter_projects.records import Document, parse_record, parse_records
from frontmatter_projects.schema import describe_fields, detect_fields, detect_schema
from frontmatter_projects.vault import Vault

__all__ = [
    "DataField",
    "DataFieldType",
    "DataFrame",
    "DataRecord",
    "DataSource",
    "Document",
    "FrontmatterDataSource",
    "MetadataHost",
    "ProjectDefinition",
    "ValueType",
    "Vault",
    "classify",
    "describe_fields",
    "detect_fields",
    "detect_schema",
    "parse_record",
    "parse_records",
    "string_fallback",
]
