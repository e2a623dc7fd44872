"""Post catalog: the publishable view of the post index.

Filters the raw post index down to posts that take part in the OG image
family and enumerates the static paths for both route families.
"""

import logging

from .models import Post, StaticPath
from .ports import PostIndexPort

logger = logging.getLogger(__name__)


class PostCatalog:
    """Publishable posts of one content directory."""

    def __init__(self, index: PostIndexPort, directory: str = "blog"):
        """Initialize the catalog.

        Args:
            index: PostIndexPort implementation to list posts from.
            directory: Content directory holding the blog posts.
        """
        self.index = index
        self.directory = directory

    async def published_posts(self) -> list[Post]:
        """Return non-draft, non-external posts in index order.

        Raises:
            ContentError: If the post index cannot list the directory.
        """
        posts = await self.index.list_posts(self.directory)
        published = [post for post in posts if post.publishable]
        logger.debug(
            f"{len(published)} of {len(posts)} posts in '{self.directory}' are publishable"
        )
        return published

    async def title_for_slug(self, slug: str) -> str | None:
        """Look up the title of a publishable post.

        Returns:
            The post title, or None if no publishable post has this slug.
        """
        for post in await self.published_posts():
            if post.slug == slug:
                return post.title
        return None

    async def slug_paths(self) -> list[StaticPath]:
        """Static paths for /og/{slug}, each carrying the post title as a prop."""
        return [
            StaticPath(params={"slug": post.slug}, props={"title": post.title})
            for post in await self.published_posts()
        ]

    async def title_paths(self) -> list[StaticPath]:
        """Static paths for /og/title/{title}.

        The title family is enumerated by slug, so the pre-rendered images
        of this family carry the slug text.
        """
        return [
            StaticPath(params={"title": post.slug})
            for post in await self.published_posts()
        ]
