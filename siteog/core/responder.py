"""Image responder: implements ImageResponderPort for OG image requests.

Resolves a display title (from the post catalog or verbatim), fetches the
card font, composes the card layout and hands it to the renderer. Every
failure except the font fallback is turned into the fixed 500 response;
the error detail is logged, never returned.
"""

import asyncio
import logging

from .card import build_card
from .catalog import PostCatalog
from .models import OgResponse, SiteConfig
from .ports import (
    CardRendererPort,
    FontAssetPort,
    FontUnavailableError,
    ImageResponderPort,
)

logger = logging.getLogger(__name__)


class ImageResponder(ImageResponderPort):
    """Core implementation of ImageResponderPort.

    Stateless: each request resolves its title, loads the font and renders
    independently of any other request.
    """

    def __init__(
        self,
        catalog: PostCatalog,
        renderer: CardRendererPort,
        font: FontAssetPort | None = None,
        site: SiteConfig | None = None,
        show_logo: bool = True,
        show_byline: bool = False,
        cache_max_age: int | None = None,
    ):
        """Initialize the image responder.

        Args:
            catalog: PostCatalog used to resolve slugs into titles.
            renderer: CardRendererPort implementation producing image bytes.
            font: FontAssetPort for the title typeface. None renders every
                card with the renderer's default typeface.
            site: Site configuration, used for the byline.
            show_logo: Draw the triangle mark above the title.
            show_byline: Draw the site author under the title.
            cache_max_age: Cache-Control max-age for successful responses.
        """
        self.catalog = catalog
        self.renderer = renderer
        self.font = font
        self.site = site
        self.show_logo = show_logo
        self.show_byline = show_byline
        self.cache_max_age = cache_max_age

    async def render_for_slug(self, slug: str | None) -> OgResponse:
        """Render the card for the post identified by slug.

        Unknown or empty slugs render the placeholder title. A failing
        post index is a rendering failure.
        """
        try:
            title = await self.catalog.title_for_slug(slug) if slug else None
            if title is None:
                logger.debug(f"No publishable post for slug '{slug}', using placeholder")
            return await self._compose(title)
        except Exception as e:
            logger.error(f"Failed to render OG image for slug '{slug}': {e}", exc_info=True)
            return OgResponse.failure()

    async def render_for_title(self, title: str | None) -> OgResponse:
        """Render the card for a literal title."""
        try:
            return await self._compose(title)
        except Exception as e:
            logger.error(f"Failed to render OG image for title '{title}': {e}", exc_info=True)
            return OgResponse.failure()

    async def _compose(self, title: str | None) -> OgResponse:
        layout = build_card(
            title,
            site=self.site,
            show_logo=self.show_logo,
            show_byline=self.show_byline,
        )
        font_data = await self._load_font()
        png = await asyncio.to_thread(self.renderer.render, layout, font_data)
        logger.debug(
            f"Rendered OG image '{layout.title}'",
            extra={"bytes": len(png), "custom_font": font_data is not None},
        )
        return OgResponse.image(png, cache_max_age=self.cache_max_age)

    async def _load_font(self) -> bytes | None:
        """Fetch the title font, or None to fall back to the default typeface."""
        if self.font is None:
            return None
        try:
            return await self.font.load()
        except FontUnavailableError as e:
            logger.warning(f"Font unavailable, using default typeface: {e}")
            return None
