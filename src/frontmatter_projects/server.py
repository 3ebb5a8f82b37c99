"""MCP Server implementation using FastMCP."""

import logging
import os
import sys
from typing import Any

from mcp.server.fastmcp import FastMCP
from pydantic import ValidationError

from frontmatter_projects import context
from frontmatter_projects.query import execute_query
from frontmatter_projects.records import Document
from frontmatter_projects.schema import describe_fields
from frontmatter_projects.settings import ENV_PREFIX, get_settings

logger = logging.getLogger(__name__)

mcp = FastMCP("frontmatter-projects")


@mcp.tool()
async def query_all(
    project_path: str | None = None, recursive: bool | None = None
) -> dict[str, Any]:
    """Get the table of all documents in a project.

    Args:
        project_path: Project root relative to the vault (e.g. "Projects").
            Defaults to the configured project.
        recursive: Include documents in subdirectories of the root.

    Returns:
        Dict with fields (name, type, repeated, derived, identifier) and
        records (id, values).
    """
    source = context.get_data_source(context.get_project(project_path, recursive))
    frame = await source.query_all()
    return frame.to_dict()


@mcp.tool()
async def query_files(paths: list[str]) -> dict[str, Any]:
    """Get the table of an explicit list of documents.

    Args:
        paths: Document paths relative to the vault.

    Returns:
        Dict with fields and records. Paths that don't resolve to a document
        are reported in warnings.

    Notes:
        Documents are queried regardless of the configured project.
    """
    vault = context.get_vault()
    documents: list[Document] = []
    warnings: list[str] = []
    for path in paths:
        try:
            documents.append(vault.get_document(path))
        except (ValueError, FileNotFoundError) as e:
            warnings.append(f"Skipped {path}: {e}")

    source = context.get_data_source(context.get_project())
    frame = await source.query_files(documents)

    result = frame.to_dict()
    if warnings:
        result["warnings"] = warnings
    return result


@mcp.tool()
async def query_one(path: str) -> dict[str, Any]:
    """Get the table of a single document.

    Args:
        path: Document path relative to the vault.

    Returns:
        Dict with fields and a single record.
    """
    document = context.get_vault().get_document(path)
    source = context.get_data_source(context.get_project())
    frame = await source.query_one(document)
    return frame.to_dict()


@mcp.tool()
def includes(
    path: str, project_path: str | None = None, recursive: bool | None = None
) -> bool:
    """Check if a document path belongs to a project.

    Args:
        path: Document path relative to the vault.
        project_path: Project root. Defaults to the configured project.
        recursive: Include documents in subdirectories of the root.
    """
    return context.get_project(project_path, recursive).includes(path)


@mcp.tool()
async def inspect(
    project_path: str | None = None, recursive: bool | None = None
) -> dict[str, Any]:
    """Get the detected schema of a project.

    Args:
        project_path: Project root. Defaults to the configured project.
        recursive: Include documents in subdirectories of the root.

    Returns:
        Dict with record_count and schema (type, flags, nullable, examples).
    """
    source = context.get_data_source(context.get_project(project_path, recursive))
    frame = await source.query_all()
    return {
        "record_count": len(frame.records),
        "schema": describe_fields(frame),
    }


@mcp.tool()
async def query(
    sql: str, project_path: str | None = None, recursive: bool | None = None
) -> dict[str, Any]:
    """Query a project's table with DuckDB SQL.

    Args:
        sql: SQL query string. Reference the 'records' table. Columns are the
            detected fields, typed by their detected type. Repeated fields
            are JSON-encoded strings.
        project_path: Project root. Defaults to the configured project.
        recursive: Include documents in subdirectories of the root.

    Returns:
        Dict with results array, row_count, and columns.
    """
    source = context.get_data_source(context.get_project(project_path, recursive))
    frame = await source.query_all()
    return execute_query(frame, sql)


@mcp.tool()
async def update_record(
    path: str,
    set: dict[str, Any] | None = None,
    unset: list[str] | None = None,
) -> dict[str, Any]:
    """Update front matter properties of a single record.

    Args:
        path: Document path relative to the vault.
        set: Properties to add or overwrite.
        unset: Property names to remove completely.

    Returns:
        Dict with fields and the updated record.

    Notes:
        - If same key appears in both set and unset, unset takes priority.
        - The derived path and name values can't be changed this way.
    """
    vault = context.get_vault()
    vault.update_metadata(path, set_values=set, unset=unset)
    return await query_one(path)


def configure_logging(level: str) -> None:
    """Send log records to stderr; stdout carries the MCP protocol."""
    logging.basicConfig(
        level=level.upper(),
        stream=sys.stderr,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def main() -> None:
    """Entry point for the MCP server."""
    # Parse --base-dir argument, overriding the environment
    args = sys.argv[1:]
    if "--base-dir" in args:
        base_dir_idx = args.index("--base-dir")
        if base_dir_idx + 1 >= len(args):
            print("Error: --base-dir requires a value", file=sys.stderr)
            sys.exit(1)
        os.environ[f"{ENV_PREFIX}BASE_DIR"] = args[base_dir_idx + 1]
        context.reset()

    try:
        settings = get_settings()
    except ValidationError:
        print(
            f"Error: set {ENV_PREFIX}BASE_DIR or pass --base-dir", file=sys.stderr
        )
        print("Usage: frontmatter-projects --base-dir /path", file=sys.stderr)
        sys.exit(1)

    if not settings.base_dir.is_dir():
        print(
            f"Error: Base directory does not exist: {settings.base_dir}",
            file=sys.stderr,
        )
        sys.exit(1)

    configure_logging(settings.log_level)
    logger.info("Serving vault %s", settings.base_dir.resolve())
    mcp.run()


if __name__ == "__main__":
    main()
