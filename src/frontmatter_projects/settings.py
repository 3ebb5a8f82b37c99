"""Settings module for frontmatter-projects."""

from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

ENV_PREFIX = "FRONTMATTER_PROJECTS_"


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Environment variables:
        FRONTMATTER_PROJECTS_BASE_DIR: Vault directory path (required)
        FRONTMATTER_PROJECTS_PROJECT_PATH: Default project root (default: vault root)
        FRONTMATTER_PROJECTS_RECURSIVE: Include subdirectories (default: true)
        FRONTMATTER_PROJECTS_EXTENSIONS: JSON list of document suffixes
        FRONTMATTER_PROJECTS_INTERNAL_KEYS: JSON list of keys to strip
        FRONTMATTER_PROJECTS_LOG_LEVEL: Logging level (default: WARNING)
    """

    model_config = SettingsConfigDict(env_prefix=ENV_PREFIX)

    base_dir: Path
    project_path: str = ""
    recursive: bool = True
    extensions: list[str] = [".md"]
    internal_keys: list[str] = ["position"]
    log_level: str = "WARNING"


@lru_cache
def get_settings() -> Settings:
    """Get the cached settings instance.

    Settings are read from environment variables on first call and cached.
    Use get_settings.cache_clear() in tests to reset.

    Returns:
        Cached Settings instance.

    Raises:
        ValidationError: If required environment variables are not set.
    """
    return Settings()
