"""Application context management for frontmatter-projects."""

from functools import lru_cache

from frontmatter_projects.datasource import FrontmatterDataSource
from frontmatter_projects.project import ProjectDefinition
from frontmatter_projects.settings import get_settings
from frontmatter_projects.vault import Vault


@lru_cache
def get_vault() -> Vault:
    """Get the cached vault for the configured base directory."""
    settings = get_settings()
    return Vault(settings.base_dir, settings.extensions)


def get_project(
    project_path: str | None = None, recursive: bool | None = None
) -> ProjectDefinition:
    """Build a project definition, defaulting to the configured project.

    Args:
        project_path: Project root, or None for the configured default.
        recursive: Recursive flag, or None for the configured default.
    """
    settings = get_settings()
    return ProjectDefinition(
        path=settings.project_path if project_path is None else project_path,
        recursive=settings.recursive if recursive is None else recursive,
    )


def get_data_source(project: ProjectDefinition) -> FrontmatterDataSource:
    """Create a data source for a project over the configured vault."""
    return FrontmatterDataSource(
        get_vault(), project, internal_keys=get_settings().internal_keys
    )


def reset() -> None:
    """Clear cached settings and vault. Used by tests and reconfiguration."""
    get_settings.cache_clear()
    get_vault.cache_clear()
