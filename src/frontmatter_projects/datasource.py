"""Data sources turning project documents into data frames."""

import asyncio
import logging
from abc import ABC, abstractmethod
from collections.abc import Iterable
from typing import Any, Protocol

from frontmatter_projects.data import DataFieldType, DataFrame
from frontmatter_projects.fallback import string_fallback
from frontmatter_projects.project import ProjectDefinition
from frontmatter_projects.records import DEFAULT_INTERNAL_KEYS, Document, parse_records
from frontmatter_projects.schema import detect_schema

logger = logging.getLogger(__name__)


class MetadataHost(Protocol):
    """Host providing documents and their front matter."""

    def list_documents(self) -> list[Document]:
        """List all documents known to the host."""
        ...

    async def get_metadata(self, document: Document) -> dict[str, Any] | None:
        """Get the front matter map of a document, or None if it has none."""
        ...


class DataSource(ABC):
    """Base class for sources of project data."""

    def __init__(self, project: ProjectDefinition) -> None:
        self.project = project

    @abstractmethod
    async def query_one(self, document: Document) -> DataFrame:
        """Query a single document."""

    @abstractmethod
    async def query_all(self) -> DataFrame:
        """Query every document in the project."""

    @abstractmethod
    async def query_files(self, documents: list[Document]) -> DataFrame:
        """Query an explicit list of documents."""

    @abstractmethod
    def includes(self, path: str) -> bool:
        """Check if a document path belongs to the project."""


class FrontmatterDataSource(DataSource):
    """Converts document front matter to data frames.

    Nothing is cached: every query reads the current metadata from the host.
    """

    def __init__(
        self,
        host: MetadataHost,
        project: ProjectDefinition,
        internal_keys: Iterable[str] = DEFAULT_INTERNAL_KEYS,
    ) -> None:
        """Initialize the data source.

        Args:
            host: Host providing documents and metadata.
            project: Project whose documents are queried by query_all().
            internal_keys: Host bookkeeping keys stripped from metadata.
        """
        super().__init__(project)
        self.host = host
        self.internal_keys = frozenset(internal_keys)

    async def query_one(self, document: Document) -> DataFrame:
        return await self.query_files([document])

    async def query_all(self) -> DataFrame:
        documents = [
            doc for doc in self.host.list_documents() if self.includes(doc.path)
        ]
        return await self.query_files(documents)

    async def query_files(self, documents: list[Document]) -> DataFrame:
        metadata = await asyncio.gather(
            *(self.host.get_metadata(doc) for doc in documents)
        )
        records = parse_records(zip(documents, metadata), self.internal_keys)
        fields = detect_schema(records)

        for field in fields:
            if field.type == DataFieldType.STRING:
                records = string_fallback(records, field.name, field.repeated)

        logger.debug(
            "Queried %d documents in project %r: %d fields",
            len(records),
            self.project.path,
            len(fields),
        )
        return DataFrame(fields=fields, records=records)

    def includes(self, path: str) -> bool:
        return self.project.includes(path)
