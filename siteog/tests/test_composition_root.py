"""Integration tests for the composition root.

These tests verify that the bootstrap process correctly loads configuration,
instantiates adapters, initializes core services, and wires dependencies.
"""

import os
from io import BytesIO
from pathlib import Path
from unittest.mock import patch

import pytest
from PIL import Image

from siteog.adapters.font.file import FileFontAsset
from siteog.adapters.font.http import HttpFontAsset
from siteog.config import load_settings
from siteog.core.responder import ImageResponder
from siteog.main import bootstrap, build_font_asset, build_services


class TestConfigurationLoading:
    """Test configuration loading and validation."""

    def test_load_settings_with_defaults(self) -> None:
        """Load settings with default values."""
        settings = load_settings()
        assert settings.run_mode == "server"
        assert settings.blog_directory == "blog"
        assert settings.font_source == "file"
        assert settings.og_show_logo is True
        assert settings.og_show_byline is False
        assert settings.log_level == "INFO"

    def test_load_settings_from_env(self) -> None:
        """Load settings from environment variables."""
        with patch.dict(
            os.environ,
            {
                "SITE_URL": "https://maciekgrzybek.dev/blog/",
                "SERVER_PORT": "8000",
                "RUN_MODE": "build",
                "OG_SHOW_BYLINE": "true",
            },
        ):
            settings = load_settings()
            assert settings.server_port == 8000
            assert settings.run_mode == "build"
            assert settings.og_show_byline is True

    def test_load_settings_from_env_file(self, tmp_path: Path) -> None:
        """Load settings from an explicit .env file."""
        env_file = tmp_path / "site.env"
        env_file.write_text("SITE_TITLE=My Blog\nBLOG_DIRECTORY=posts\n", encoding="utf-8")

        settings = load_settings(str(env_file))

        assert settings.site_title == "My Blog"
        assert settings.blog_directory == "posts"

    def test_site_config_uses_url_origin(self) -> None:
        """Site config reduces the base URL to its origin."""
        with patch.dict(os.environ, {"SITE_URL": "https://maciekgrzybek.dev/blog/"}):
            site = load_settings().site_config()
        assert site.url == "https://maciekgrzybek.dev"
        assert site.author == "Maciek Grzybek"

    def test_site_config_is_immutable(self) -> None:
        site = load_settings().site_config()
        with pytest.raises(AttributeError):
            site.title = "Other"  # type: ignore[misc]

    def test_load_settings_validates_site_url(self) -> None:
        with patch.dict(os.environ, {"SITE_URL": "maciekgrzybek.dev"}):
            with pytest.raises(Exception):  # ValidationError
                load_settings()

    def test_load_settings_validates_port(self) -> None:
        with patch.dict(os.environ, {"SERVER_PORT": "70000"}):
            with pytest.raises(Exception):  # ValidationError
                load_settings()

    def test_load_settings_validates_timeouts(self) -> None:
        with patch.dict(os.environ, {"REQUEST_TIMEOUT_SECONDS": "0"}):
            with pytest.raises(Exception):  # ValidationError
                load_settings()

    def test_load_settings_validates_cache_max_age(self) -> None:
        with patch.dict(os.environ, {"OG_CACHE_MAX_AGE": "-1"}):
            with pytest.raises(Exception):  # ValidationError
                load_settings()


class TestWiring:
    """Test adapter selection and service wiring."""

    def test_file_font_by_default(self) -> None:
        font = build_font_asset(load_settings())
        assert isinstance(font, FileFontAsset)

    @pytest.mark.asyncio
    async def test_http_font_source(self) -> None:
        with patch.dict(
            os.environ,
            {"FONT_SOURCE": "http", "FONT_URL": "https://example.com/font.woff"},
        ):
            font = build_font_asset(load_settings())
        assert isinstance(font, HttpFontAsset)
        await font.close()

    def test_http_font_source_requires_url(self) -> None:
        with patch.dict(os.environ, {"FONT_SOURCE": "http", "FONT_URL": ""}):
            with pytest.raises(ValueError, match="FONT_URL"):
                build_font_asset(load_settings())

    def test_build_services(self) -> None:
        with patch.dict(os.environ, {"OG_SHOW_LOGO": "false", "OG_CACHE_MAX_AGE": "60"}):
            catalog, responder, font = build_services(load_settings())

        assert isinstance(responder, ImageResponder)
        assert responder.catalog is catalog
        assert responder.font is font
        assert responder.show_logo is False
        assert responder.cache_max_age == 60
        assert catalog.directory == "blog"


class TestBootstrap:
    """End-to-end run of the build mode."""

    @pytest.mark.asyncio
    async def test_build_mode_renders_published_posts(self, tmp_path: Path) -> None:
        blog = tmp_path / "content" / "blog"
        blog.mkdir(parents=True)
        (blog / "hello-world.md").write_text("---\ntitle: Hello World\n---\nHi\n", encoding="utf-8")
        (blog / "wip.md").write_text("---\ntitle: WIP\ndraft: true\n---\n", encoding="utf-8")
        output = tmp_path / "dist"

        with patch.dict(
            os.environ,
            {
                "RUN_MODE": "build",
                "CONTENT_DIR": str(tmp_path / "content"),
                "FONT_PATH": str(tmp_path / "missing-font.woff"),
                "BUILD_OUTPUT_DIR": str(output),
            },
        ):
            exit_code = await bootstrap()

        assert exit_code == 0
        assert sorted(path.name for path in (output / "og").iterdir()) == ["hello-world.png"]
        image = Image.open(BytesIO((output / "og" / "hello-world.png").read_bytes()))
        assert image.size == (1200, 630)

    @pytest.mark.asyncio
    async def test_build_mode_with_missing_content_fails(self, tmp_path: Path) -> None:
        with patch.dict(
            os.environ,
            {
                "RUN_MODE": "build",
                "CONTENT_DIR": str(tmp_path / "nowhere"),
                "BUILD_OUTPUT_DIR": str(tmp_path / "dist"),
            },
        ):
            exit_code = await bootstrap()

        assert exit_code == 1
