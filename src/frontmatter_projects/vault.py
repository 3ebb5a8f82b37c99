"""Filesystem vault host backed by python-frontmatter."""

import asyncio
import logging
from collections.abc import Iterable
from pathlib import Path
from typing import Any

import frontmatter
import yaml

from frontmatter_projects.records import Document

logger = logging.getLogger(__name__)

DEFAULT_EXTENSIONS = (".md",)


class Vault:
    """A directory of documents with front matter.

    Implements the MetadataHost protocol: documents are listed from disk and
    their metadata is read on every lookup, so results are never stale.
    """

    def __init__(
        self, base_dir: Path, extensions: Iterable[str] = DEFAULT_EXTENSIONS
    ) -> None:
        """Initialize the vault.

        Args:
            base_dir: Vault root directory.
            extensions: File suffixes treated as documents.
        """
        self._base_dir = base_dir.resolve()
        self._extensions = tuple(ext.lower() for ext in extensions)

    @property
    def base_dir(self) -> Path:
        """Get the resolved vault root."""
        return self._base_dir

    def list_documents(self) -> list[Document]:
        """List documents under the vault root.

        Files inside hidden directories (e.g. ".obsidian") are skipped.

        Returns:
            Documents sorted by vault-relative POSIX path.
        """
        documents: list[Document] = []
        for file_path in self._base_dir.rglob("*"):
            if not file_path.is_file():
                continue
            if file_path.suffix.lower() not in self._extensions:
                continue
            rel_path = file_path.relative_to(self._base_dir)
            if any(part.startswith(".") for part in rel_path.parts):
                continue
            documents.append(Document.from_path(rel_path.as_posix()))
        return sorted(documents, key=lambda doc: doc.path)

    def resolve(self, path: str) -> Path:
        """Resolve a vault-relative path.

        Raises:
            ValueError: If the path points outside the vault.
        """
        abs_path = (self._base_dir / path).resolve()

        # Security: ensure path is within base_dir
        try:
            abs_path.relative_to(self._base_dir)
        except ValueError as e:
            raise ValueError(f"Path must be within base directory: {path}") from e
        return abs_path

    def get_document(self, path: str) -> Document:
        """Get the document at a vault-relative path.

        Raises:
            ValueError: If the path points outside the vault.
            FileNotFoundError: If the file does not exist.
        """
        abs_path = self.resolve(path)
        if not abs_path.is_file():
            raise FileNotFoundError(f"File not found: {path}")
        return Document.from_path(abs_path.relative_to(self._base_dir).as_posix())

    async def get_metadata(self, document: Document) -> dict[str, Any] | None:
        """Read a document's front matter.

        Returns:
            Front matter map, or None if the file can't be read or its
            front matter is not a mapping.
        """
        return await asyncio.to_thread(self._load_metadata, document.path)

    def _load_metadata(self, path: str) -> dict[str, Any] | None:
        try:
            post = frontmatter.load(self._base_dir / path)
        # Front matter that isn't a mapping fails with TypeError.
        except (OSError, ValueError, TypeError, yaml.YAMLError) as e:
            logger.warning("Failed to read front matter of %s: %s", path, e)
            return None
        return dict(post.metadata)

    def update_metadata(
        self,
        path: str,
        set_values: dict[str, Any] | None = None,
        unset: list[str] | None = None,
    ) -> dict[str, Any]:
        """Update front matter properties of a single document.

        Args:
            path: Vault-relative document path.
            set_values: Properties to add or overwrite.
            unset: Property names to remove. Unset wins over set.

        Returns:
            The document's front matter after the update.

        Raises:
            ValueError: If the path points outside the vault.
            FileNotFoundError: If the file does not exist.
        """
        abs_path = self.resolve(path)
        if not abs_path.is_file():
            raise FileNotFoundError(f"File not found: {path}")

        post = frontmatter.load(abs_path)
        for key, value in (set_values or {}).items():
            post[key] = value
        for key in unset or []:
            if key in post.metadata:
                del post[key]

        frontmatter.dump(post, abs_path)
        logger.debug("Updated front matter of %s", path)
        return dict(post.metadata)
