"""Shared fixtures."""

import asyncio
from pathlib import Path
from typing import Any

import pytest

from frontmatter_projects import context
from frontmatter_projects.records import Document
from frontmatter_projects.settings import ENV_PREFIX


class FakeHost:
    """In-memory MetadataHost backed by a path -> metadata dict."""

    def __init__(self, documents: dict[str, dict[str, Any] | None]) -> None:
        self.documents = documents
        self.lookups: list[str] = []

    def list_documents(self) -> list[Document]:
        return [Document.from_path(path) for path in self.documents]

    async def get_metadata(self, document: Document) -> dict[str, Any] | None:
        self.lookups.append(document.path)
        await asyncio.sleep(0)
        return self.documents.get(document.path)


@pytest.fixture
def host() -> FakeHost:
    """Host with a small project tree."""
    return FakeHost(
        {
            "Projects/a.md": {"status": "todo", "cost": 3, "position": {"line": 0}},
            "Projects/b.md": {"status": "done"},
            "Projects/Sub/c.md": {"status": 1, "tags": ["x"]},
            "Other/d.md": {"status": "elsewhere"},
            "Projects/empty.md": None,
        }
    )


@pytest.fixture
def temp_base_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    """Create a vault with test markdown files and point settings at it."""
    base = tmp_path / "vault"
    base.mkdir()

    (base / "a.md").write_text(
        """---
date: 2025-11-27
tags: [python, mcp]
status: todo
cost: 3
---
# File A
"""
    )
    (base / "b.md").write_text(
        """---
date: 2025-11-26
tags: [duckdb]
status: done
---
# File B
"""
    )
    (base / "subdir").mkdir()
    (base / "subdir" / "c.md").write_text(
        """---
date: 2025-11-25
tags: [python]
summary: A summary
status: 2
---
# File C
"""
    )
    (base / ".obsidian").mkdir()
    (base / ".obsidian" / "hidden.md").write_text("---\nx: 1\n---\n")
    (base / "notes.txt").write_text("not a document")

    monkeypatch.setenv(f"{ENV_PREFIX}BASE_DIR", str(base))
    context.reset()
    yield base
    context.reset()
