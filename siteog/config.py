"""Configuration loading for the siteog image service.

This module provides centralized configuration management:
- Load settings from environment variables and .env files
- Validate configuration using pydantic
- Provide typed access to all settings
- Build the immutable SiteConfig handed to consumers at startup
"""

from typing import Literal
from urllib.parse import urlsplit

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from siteog.core.models import SiteConfig


class Settings(BaseSettings):
    """Application configuration loaded from environment.

    Uses pydantic-settings for environment variable handling with
    .env file support via python-dotenv.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Site constants
    site_title: str = Field(
        default="Maciek Grzybek",
        description="Site title",
    )
    site_description: str = Field(
        default="I’m a software engineer with ❤️ for TypeScript, React and Node.",
        description="Site description",
    )
    site_author: str = Field(
        default="Maciek Grzybek",
        description="Author name, used for the OG card byline",
    )
    twitter_handle: str = Field(
        default="",
        description="Twitter handle of the author",
    )
    site_url: str = Field(
        default="http://localhost:4321",
        description="Base URL the site is deployed at",
    )

    # Content configuration
    content_dir: str = Field(
        default="./src/content",
        description="Root directory of the content collections",
    )
    blog_directory: str = Field(
        default="blog",
        description="Collection directory holding the blog posts",
    )

    # Font configuration
    font_source: Literal["file", "http"] = Field(
        default="file",
        description="Where the card font is fetched from",
    )
    font_path: str = Field(
        default="./public/fonts/space-grotesk-v13-latin-700.woff",
        description="Font file path when font_source is 'file'",
    )
    font_url: str = Field(
        default="",
        description="Font URL when font_source is 'http'",
    )
    font_fetch_timeout_seconds: float = Field(
        default=10.0,
        description="Timeout for fetching the font over HTTP",
    )

    # OG card configuration
    og_show_logo: bool = Field(
        default=True,
        description="Draw the triangle mark above the title",
    )
    og_show_byline: bool = Field(
        default=False,
        description="Draw the author name under the title",
    )
    og_cache_max_age: int = Field(
        default=86400,
        description="Cache-Control max-age in seconds for OG images",
    )

    # Logging configuration
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Log level",
    )
    log_format: Literal["json", "text"] = Field(
        default="text",
        description="Log format",
    )

    # Run mode
    run_mode: Literal["server", "build", "cli"] = Field(
        default="server",
        description="Run mode",
    )

    # HTTP server configuration
    server_host: str = Field(
        default="0.0.0.0",
        description="Host to listen on for the HTTP server",
    )
    server_port: int = Field(
        default=4321,
        description="Port to listen on for the HTTP server",
    )
    request_timeout_seconds: float = Field(
        default=30.0,
        description="Maximum time to wait for one image to render",
    )

    # Static build
    build_output_dir: str = Field(
        default="./dist",
        description="Directory pre-rendered OG images are written to",
    )

    @field_validator("site_url")
    @classmethod
    def validate_site_url(cls, v: str) -> str:
        """Ensure the site URL is an absolute http(s) URL."""
        parts = urlsplit(v)
        if parts.scheme not in ("http", "https") or not parts.netloc:
            raise ValueError("site_url must be an absolute http(s) URL")
        return v

    @field_validator("font_fetch_timeout_seconds", "request_timeout_seconds")
    @classmethod
    def validate_timeout(cls, v: float) -> float:
        """Ensure timeouts are positive."""
        if v <= 0:
            raise ValueError("timeouts must be positive")
        return v

    @field_validator("og_cache_max_age")
    @classmethod
    def validate_cache_max_age(cls, v: int) -> int:
        """Ensure cache max-age is non-negative."""
        if v < 0:
            raise ValueError("og_cache_max_age must be non-negative")
        return v

    @field_validator("server_port")
    @classmethod
    def validate_server_port(cls, v: int) -> int:
        """Ensure server port is in valid range."""
        if v <= 0 or v > 65535:
            raise ValueError("server_port must be between 1 and 65535")
        return v

    def site_config(self) -> SiteConfig:
        """Build the immutable site configuration.

        The site URL is reduced to its origin.
        """
        parts = urlsplit(self.site_url)
        return SiteConfig(
            title=self.site_title,
            description=self.site_description,
            author=self.site_author,
            url=f"{parts.scheme}://{parts.netloc}",
            twitter_handle=self.twitter_handle,
        )


def load_settings(env_file: str | None = None) -> Settings:
    """Load application settings from environment.

    Args:
        env_file: Optional path to .env file. If not provided,
                 uses the default .env in the current directory.

    Returns:
        Validated Settings instance.

    Raises:
        ValidationError: If settings validation fails.
    """
    if env_file:
        return Settings(_env_file=env_file)  # type: ignore[call-arg]
    return Settings()


__all__ = ["Settings", "load_settings"]
