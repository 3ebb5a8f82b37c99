"""Tests for MCP server module."""

from pathlib import Path

import frontmatter
import pytest

import frontmatter_projects.server as server_module


class TestQueryAll:
    """Tests for query_all tool."""

    async def test_vault_root_recursive(self, temp_base_dir: Path) -> None:
        """Default project is the whole vault, recursively."""
        result = await server_module.query_all()

        ids = [r["id"] for r in result["records"]]
        assert ids == ["a.md", "b.md", "subdir/c.md"]

    async def test_non_recursive(self, temp_base_dir: Path) -> None:
        """Non-recursive projects only see direct children."""
        result = await server_module.query_all(project_path="", recursive=False)
        assert len(result["records"]) == 2

    async def test_subdirectory_project(self, temp_base_dir: Path) -> None:
        """A project rooted at a subdirectory."""
        result = await server_module.query_all(project_path="/subdir")
        assert [r["id"] for r in result["records"]] == ["subdir/c.md"]

    async def test_fields(self, temp_base_dir: Path) -> None:
        """Fields are serialized with types and flags."""
        result = await server_module.query_all()
        fields = {f["name"]: f for f in result["fields"]}

        assert fields["date"]["type"] == "date"
        assert fields["tags"]["repeated"] is True
        assert fields["status"]["type"] == "string"
        assert fields["cost"]["type"] == "number"
        assert fields["path"]["identifier"] is True
        assert fields["name"]["derived"] is True

    async def test_string_fallback(self, temp_base_dir: Path) -> None:
        """Numeric minority values in a string column become strings."""
        result = await server_module.query_all()
        c = next(r for r in result["records"] if r["id"] == "subdir/c.md")
        assert c["values"]["status"] == "2"

    async def test_configured_project(
        self, temp_base_dir: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Project defaults come from settings."""
        monkeypatch.setenv("FRONTMATTER_PROJECTS_PROJECT_PATH", "subdir")
        monkeypatch.setenv("FRONTMATTER_PROJECTS_RECURSIVE", "false")
        server_module.context.reset()

        result = await server_module.query_all()
        assert [r["id"] for r in result["records"]] == ["subdir/c.md"]


class TestQueryFiles:
    """Tests for query_files and query_one tools."""

    async def test_query_files(self, temp_base_dir: Path) -> None:
        """Explicit documents are queried in order."""
        result = await server_module.query_files(["subdir/c.md", "a.md"])

        assert [r["id"] for r in result["records"]] == ["subdir/c.md", "a.md"]
        assert "warnings" not in result

    async def test_query_files_warnings(self, temp_base_dir: Path) -> None:
        """Unknown paths are reported, not raised."""
        result = await server_module.query_files(["a.md", "nope.md", "../x.md"])

        assert len(result["records"]) == 1
        assert len(result["warnings"]) == 2

    async def test_query_one(self, temp_base_dir: Path) -> None:
        """A single document."""
        result = await server_module.query_one("b.md")

        assert len(result["records"]) == 1
        assert result["records"][0]["values"]["name"] == "b"

    async def test_query_one_not_found(self, temp_base_dir: Path) -> None:
        """Error when file does not exist."""
        with pytest.raises(FileNotFoundError):
            await server_module.query_one("nonexistent.md")


class TestIncludes:
    """Tests for includes tool."""

    def test_includes(self, temp_base_dir: Path) -> None:
        """Selection follows the given project."""
        assert server_module.includes("subdir/c.md")
        assert not server_module.includes(
            "subdir/c.md", project_path="", recursive=False
        )
        assert server_module.includes(
            "subdir/c.md", project_path="subdir", recursive=False
        )


class TestInspect:
    """Tests for inspect tool."""

    async def test_schema(self, temp_base_dir: Path) -> None:
        """Get schema from files."""
        result = await server_module.inspect()

        assert result["record_count"] == 3
        assert result["schema"]["summary"]["nullable"] is True
        assert result["schema"]["tags"]["repeated"] is True

    async def test_non_recursive(self, temp_base_dir: Path) -> None:
        """Fields only seen in subdirectories are absent."""
        result = await server_module.inspect(recursive=False)

        assert result["record_count"] == 2
        assert "summary" not in result["schema"]


class TestQuery:
    """Tests for query tool."""

    async def test_select_all(self, temp_base_dir: Path) -> None:
        """Select all records."""
        result = await server_module.query("SELECT path FROM records ORDER BY path")

        assert result["row_count"] == 3
        assert "path" in result["columns"]

    async def test_date_filter(self, temp_base_dir: Path) -> None:
        """Filter by date."""
        result = await server_module.query(
            "SELECT path FROM records WHERE date >= DATE '2025-11-26'"
        )

        paths = {r["path"] for r in result["results"]}
        assert paths == {"a.md", "b.md"}

    async def test_tag_aggregation(self, temp_base_dir: Path) -> None:
        """Aggregate tags using from_json."""
        result = await server_module.query(
            """
            SELECT tag, COUNT(*) AS count
            FROM records, UNNEST(from_json(tags, '["VARCHAR"]')) AS t(tag)
            GROUP BY tag
            ORDER BY count DESC
            """
        )

        assert result["row_count"] == 3
        assert result["results"][0]["tag"] == "python"
        assert result["results"][0]["count"] == 2


class TestUpdateRecord:
    """Tests for update_record tool."""

    async def test_set_property(self, temp_base_dir: Path) -> None:
        """Set a property and get the refreshed record back."""
        result = await server_module.update_record("a.md", set={"status": "published"})

        values = result["records"][0]["values"]
        assert values["status"] == "published"
        assert values["path"] == "a.md"
        assert frontmatter.load(temp_base_dir / "a.md")["status"] == "published"

    async def test_unset_property(self, temp_base_dir: Path) -> None:
        """Unset a property."""
        result = await server_module.update_record("b.md", unset=["tags"])
        assert "tags" not in result["records"][0]["values"]

    async def test_path_outside_base_dir(self, temp_base_dir: Path) -> None:
        """Error when path is outside base_dir."""
        with pytest.raises(ValueError):
            await server_module.update_record("../outside.md", set={"x": 1})
