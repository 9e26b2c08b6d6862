# ABOUTME: Centralized configuration using Pydantic Settings.
# ABOUTME: Loads post type, cache, REST and database settings from environment and .env file.

from functools import lru_cache

from pydantic import SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="HOMEPAGES_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Post type
    post_type: str = "homepage"
    rest_namespace: str = "wp/v2"

    # Latest homepage cache (transient)
    latest_cache_key: str = "homepage_latest_id"
    latest_cache_ttl: int = 15 * 60  # seconds

    # Activation latch
    has_published_option: str = "has_published_homepage"
    activation_gate: bool = True  # False intercepts even before the first publish

    # Host defaults
    default_posts_per_page: int = 10
    site_name: str = "Homepages"
    reading_settings_url: str = "/admin/options-reading"

    # Database
    database_url: str = "sqlite:///homepages.db"
    db_echo: bool = False

    # Editors presenting this bearer token are treated as logged in
    editor_token: SecretStr | None = None

    # Logging
    log_level: str = "INFO"
    log_format: str = "console"  # "console" or "json"

    @property
    def rest_route(self) -> str:
        """REST route of the homepage listing endpoint, e.g. ``/wp/v2/homepage``."""
        return f"/{self.rest_namespace.strip('/')}/{self.post_type}"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance.

    Settings are loaded from environment variables (prefixed ``HOMEPAGES_``)
    and the .env file.
    """
    return Settings()
