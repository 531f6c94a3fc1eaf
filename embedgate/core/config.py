"""
Application configuration.

Loads settings from environment variables and .env file.
A single Settings instance is built at startup and passed explicitly
to the application factory. Components read it from app.state,
never from a module-level global.
"""

from functools import lru_cache
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict

from embedgate.shared.errors.classifier import TtlClass

WILDCARD_ORIGIN = "*"


class Settings(BaseSettings):
    """Application settings loaded from environment.

    Attributes:
        project_name: Display name for the API.
        version: Current API version string.
        debug: Log full stacks for failures outside request context.
        testing: Disables the static mount.
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR).
        rich_log_enabled: Log tracebacks for request failures.
        allowed_origins: Origins allowed for CORS, "*" for any, or None.
        cache_ttl: Seconds to cache successful embed responses (0 = forever).
        cache_ttl_page_404: Seconds to cache not-found error responses.
        cache_ttl_page_timeout: Seconds to cache timeout error responses.
        cache_ttl_page_other_error: Seconds to cache all other errors.
        base_app_url: Base URL for embeds that require hosted renders.
    """

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    project_name: str = "Iframely"
    version: str = "0.1.0"
    debug: bool = False
    testing: bool = False
    log_level: str = "INFO"
    rich_log_enabled: bool = False

    allowed_origins: Optional[list[str]] = None

    cache_ttl: int = 0
    cache_ttl_page_404: int = 10 * 60
    cache_ttl_page_timeout: int = 10 * 60
    cache_ttl_page_other_error: int = 60

    base_app_url: Optional[str] = None
    relative_static_url: str = "/r"
    static_directory: str = "static"
    files_directory: str = "public"
    root_redirect_url: str = "http://eligapris.com"

    host: str = "0.0.0.0"
    port: int = 8061

    def ttl_for(self, ttl_class: TtlClass) -> int:
        """Return the configured cache duration for an error TTL class."""
        if ttl_class is TtlClass.PAGE_404:
            return self.cache_ttl_page_404
        if ttl_class is TtlClass.PAGE_TIMEOUT:
            return self.cache_ttl_page_timeout
        return self.cache_ttl_page_other_error


@lru_cache
def get_settings() -> Settings:
    return Settings()
