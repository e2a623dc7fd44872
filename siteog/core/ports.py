"""Port interfaces for the siteog image service.

These abstract base classes define the boundaries between core
domain logic and external adapters. Implementations live in the
adapters/ package.

Port Interface Categories:

1. **Driven Ports** (core calls out to adapters)
   - PostIndexPort: List posts in a content directory
   - FontAssetPort: Fetch the binary font used for the card title
   - CardRendererPort: Rasterize a card layout into image bytes

2. **Driving Ports** (adapters/external systems call into core)
   - ImageResponderPort: Entry point for OG image requests
"""

from abc import ABC, abstractmethod
from typing import Literal

from .models import CardLayout, OgResponse, Post


class ContentError(Exception):
    """Raised by a PostIndexPort when the content cannot be listed or validated."""


class FontUnavailableError(Exception):
    """Raised by a FontAssetPort when the font cannot be fetched."""


# ============================================================================
# DRIVEN PORTS (Core calls out to adapters)
# ============================================================================


class PostIndexPort(ABC):
    """Port for listing posts from the site's content collection.

    Adapters implementing this port read a named directory of content
    documents, validate each document's frontmatter against the blog
    schema and normalize the result into Post models.
    """

    @abstractmethod
    async def list_posts(self, directory: str) -> list[Post]:
        """List every post in a content directory.

        Args:
            directory: Name of the collection directory (e.g. "blog").

        Returns:
            All posts in the directory, drafts and external posts included,
            in a stable order.

        Raises:
            ContentError: If the directory is missing or a document fails
                frontmatter validation.
        """


class FontAssetPort(ABC):
    """Port for fetching the font used to render card titles."""

    @abstractmethod
    async def load(self) -> bytes:
        """Fetch the font's binary data.

        Returns:
            Raw font file contents (TTF, OTF or WOFF).

        Raises:
            FontUnavailableError: If the font cannot be fetched. Callers
                are expected to fall back to a default typeface.
        """


class CardRendererPort(ABC):
    """Port for rasterizing a card layout."""

    @abstractmethod
    def render(self, layout: CardLayout, font_data: bytes | None = None) -> bytes:
        """Render the layout into encoded image bytes.

        Args:
            layout: Card description to draw.
            font_data: Custom font to draw the title with, or None to use
                the renderer's default typeface.

        Returns:
            Encoded image of exactly layout.width x layout.height pixels.

        Raises:
            Exception: If composition fails.
        """


# ============================================================================
# DRIVING PORTS (External systems call into core)
# ============================================================================


class ImageResponderPort(ABC):
    """Port for serving OG image requests.

    Implementations never raise: every failure is turned into an
    OgResponse with a server-error status.
    """

    @abstractmethod
    async def render_for_slug(self, slug: str | None) -> OgResponse:
        """Render the card for the post identified by slug."""

    @abstractmethod
    async def render_for_title(self, title: str | None) -> OgResponse:
        """Render the card for a literal title, without index lookup."""

    async def render(
        self, identifier: str | None, by: Literal["slug", "title"] = "slug"
    ) -> OgResponse:
        """Render by slug or by literal title.

        Args:
            identifier: Slug or title, depending on by.
            by: Which route family the identifier belongs to.

        Returns:
            OgResponse with the encoded image or the fixed failure body.
        """
        if by == "title":
            return await self.render_for_title(identifier)
        return await self.render_for_slug(identifier)
