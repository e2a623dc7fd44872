"""Unit tests for the image responder.

Tests verify that ImageResponder resolves titles, falls back to the
placeholder and the default typeface, and never raises to its caller.
"""

import pytest

from siteog.core.catalog import PostCatalog
from siteog.core.models import (
    FAILURE_MESSAGE,
    OG_IMAGE_HEIGHT,
    OG_IMAGE_WIDTH,
    PLACEHOLDER_TITLE,
    Post,
    SiteConfig,
)
from siteog.core.responder import ImageResponder
from siteog.tests.fakes import (
    FakeCardRendererPort,
    FakeFontAssetPort,
    FakePostIndexPort,
)

# ============================================================================
# Test Fixtures
# ============================================================================


@pytest.fixture
def posts() -> list[Post]:
    """Create a small blog collection."""
    return [
        Post(slug="hello-world", title="Hello World"),
        Post(slug="typescript-tips", title="TypeScript tips & tricks"),
        Post(slug="work-in-progress", title="Not ready yet", draft=True),
        Post(slug="guest-post", title="Written elsewhere", external=True),
    ]


@pytest.fixture
def index(posts: list[Post]) -> FakePostIndexPort:
    return FakePostIndexPort(posts)


@pytest.fixture
def renderer() -> FakeCardRendererPort:
    return FakeCardRendererPort()


@pytest.fixture
def font() -> FakeFontAssetPort:
    return FakeFontAssetPort(b"space-grotesk")


@pytest.fixture
def site() -> SiteConfig:
    return SiteConfig(
        title="Maciek Grzybek",
        description="Blog",
        author="Maciek Grzybek",
        url="https://example.com",
    )


@pytest.fixture
def responder(
    index: FakePostIndexPort,
    renderer: FakeCardRendererPort,
    font: FakeFontAssetPort,
    site: SiteConfig,
) -> ImageResponder:
    return ImageResponder(
        catalog=PostCatalog(index),
        renderer=renderer,
        font=font,
        site=site,
        cache_max_age=3600,
    )


# ============================================================================
# Slug resolution
# ============================================================================


class TestRenderForSlug:
    """Tests for the /og/{slug} family."""

    @pytest.mark.asyncio
    async def test_known_slug_renders_post_title(self, responder, renderer):
        response = await responder.render_for_slug("hello-world")

        assert response.status == 200
        assert response.content_type == "image/png"
        assert response.body == renderer.output
        assert renderer.get_last_layout().title == "Hello World"

    @pytest.mark.asyncio
    async def test_every_published_slug_renders_its_title(self, responder, renderer, posts):
        for post in posts:
            if not post.publishable:
                continue
            await responder.render_for_slug(post.slug)
            assert renderer.get_last_layout().title == post.title

    @pytest.mark.asyncio
    async def test_empty_slug_renders_placeholder(self, responder, renderer, index):
        response = await responder.render_for_slug("")

        assert response.status == 200
        assert renderer.get_last_layout().title == PLACEHOLDER_TITLE
        # No lookup needed for an empty slug
        assert index.list_calls == []

    @pytest.mark.asyncio
    async def test_missing_slug_renders_placeholder(self, responder, renderer):
        response = await responder.render_for_slug(None)

        assert response.ok
        assert renderer.get_last_layout().title == "siema"

    @pytest.mark.asyncio
    async def test_unknown_slug_renders_placeholder(self, responder, renderer):
        response = await responder.render_for_slug("no-such-post")

        assert response.ok
        assert renderer.get_last_layout().title == PLACEHOLDER_TITLE

    @pytest.mark.asyncio
    async def test_draft_slug_renders_placeholder(self, responder, renderer):
        await responder.render_for_slug("work-in-progress")
        assert renderer.get_last_layout().title == PLACEHOLDER_TITLE

    @pytest.mark.asyncio
    async def test_external_slug_renders_placeholder(self, responder, renderer):
        await responder.render_for_slug("guest-post")
        assert renderer.get_last_layout().title == PLACEHOLDER_TITLE

    @pytest.mark.asyncio
    async def test_post_index_failure_returns_500(self, responder, renderer, index):
        index.set_should_fail(True, "frontmatter exploded")

        response = await responder.render_for_slug("hello-world")

        assert response.status == 500
        assert response.body == b"Failed to generate the image"
        assert renderer.rendered == []

    @pytest.mark.asyncio
    async def test_failure_body_does_not_leak_error_detail(self, responder, index):
        index.set_should_fail(True, "secret path /srv/content")

        response = await responder.render_for_slug("hello-world")

        assert b"secret" not in response.body
        assert response.body.decode() == FAILURE_MESSAGE

    @pytest.mark.asyncio
    async def test_uses_configured_directory(self, renderer, font):
        index = FakePostIndexPort([Post(slug="a", title="Notes A")], directory="notes")
        responder = ImageResponder(
            catalog=PostCatalog(index, directory="notes"),
            renderer=renderer,
            font=font,
        )

        await responder.render_for_slug("a")

        assert index.list_calls == ["notes"]
        assert renderer.get_last_layout().title == "Notes A"


# ============================================================================
# Literal titles
# ============================================================================


class TestRenderForTitle:
    """Tests for the /og/title/{title} family."""

    @pytest.mark.asyncio
    async def test_title_is_rendered_verbatim(self, responder, renderer, index):
        response = await responder.render_for_title("  Anything <goes> here ")

        assert response.ok
        assert renderer.get_last_layout().title == "  Anything <goes> here "
        assert index.list_calls == []

    @pytest.mark.asyncio
    async def test_empty_title_renders_placeholder(self, responder, renderer):
        await responder.render_for_title("")
        assert renderer.get_last_layout().title == PLACEHOLDER_TITLE

    @pytest.mark.asyncio
    async def test_missing_title_renders_placeholder(self, responder, renderer):
        await responder.render_for_title(None)
        assert renderer.get_last_layout().title == PLACEHOLDER_TITLE

    @pytest.mark.asyncio
    async def test_render_dispatches_by_family(self, responder, renderer):
        await responder.render("hello-world", by="title")
        assert renderer.get_last_layout().title == "hello-world"

        await responder.render("hello-world", by="slug")
        assert renderer.get_last_layout().title == "Hello World"


# ============================================================================
# Fonts, rendering failures and layout
# ============================================================================


class TestFontAndRendering:
    """Tests for font fallback and rendering failures."""

    @pytest.mark.asyncio
    async def test_font_data_is_passed_to_renderer(self, responder, renderer, font):
        await responder.render_for_slug("hello-world")

        assert font.load_call_count == 1
        assert renderer.get_last_font_data() == b"space-grotesk"

    @pytest.mark.asyncio
    async def test_font_failure_falls_back_to_default_typeface(self, responder, renderer, font):
        font.set_should_fail(True)

        response = await responder.render_for_slug("hello-world")

        assert response.status == 200
        assert renderer.get_last_font_data() is None
        assert renderer.get_last_layout().title == "Hello World"

    @pytest.mark.asyncio
    async def test_unexpected_font_error_returns_500(self, responder, font):
        font.set_should_fail(True, "boom", error=RuntimeError)

        response = await responder.render_for_title("Hello")

        assert response.status == 500
        assert response.body == b"Failed to generate the image"

    @pytest.mark.asyncio
    async def test_without_font_asset_uses_default_typeface(self, index, renderer):
        responder = ImageResponder(catalog=PostCatalog(index), renderer=renderer)

        response = await responder.render_for_slug("hello-world")

        assert response.ok
        assert renderer.get_last_font_data() is None

    @pytest.mark.asyncio
    async def test_renderer_failure_returns_500(self, responder, renderer):
        renderer.set_should_fail(True)

        response = await responder.render_for_slug("hello-world")

        assert response.status == 500
        assert response.content_type.startswith("text/plain")
        assert response.body == b"Failed to generate the image"

    @pytest.mark.asyncio
    async def test_layout_has_social_card_dimensions(self, responder, renderer):
        for title in ("", "Hello", "x" * 500):
            await responder.render_for_title(title)
            layout = renderer.get_last_layout()
            assert (layout.width, layout.height) == (OG_IMAGE_WIDTH, OG_IMAGE_HEIGHT)

    @pytest.mark.asyncio
    async def test_cache_header_on_success(self, responder):
        response = await responder.render_for_slug("hello-world")
        assert response.headers["Cache-Control"] == "public, max-age=3600"

    @pytest.mark.asyncio
    async def test_no_cache_header_on_failure(self, responder, renderer):
        renderer.set_should_fail(True)
        response = await responder.render_for_slug("hello-world")
        assert "Cache-Control" not in response.headers

    @pytest.mark.asyncio
    async def test_byline_shows_site_author_when_enabled(self, index, renderer, font, site):
        responder = ImageResponder(
            catalog=PostCatalog(index),
            renderer=renderer,
            font=font,
            site=site,
            show_byline=True,
            show_logo=False,
        )

        await responder.render_for_slug("hello-world")

        layout = renderer.get_last_layout()
        assert layout.byline == "Maciek Grzybek"
        assert layout.show_logo is False

    @pytest.mark.asyncio
    async def test_byline_hidden_by_default(self, responder, renderer):
        await responder.render_for_slug("hello-world")
        assert renderer.get_last_layout().byline is None
