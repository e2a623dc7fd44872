"""Markdown post index adapter.

Implements PostIndexPort by reading content documents from a directory
on disk. Each document starts with a YAML frontmatter block that is
validated against the blog frontmatter schema; the file stem is the
post slug.
"""

import asyncio
import logging
import re
from datetime import date, datetime
from pathlib import Path

import yaml
from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    field_validator,
)

from siteog.core.models import Post
from siteog.core.ports import ContentError, PostIndexPort

logger = logging.getLogger(__name__)

CONTENT_SUFFIXES = (".md", ".mdx", ".mdoc")

_FRONTMATTER_RE = re.compile(r"\A---\s*\r?\n(.*?)\r?\n---\s*(?:\r?\n|\Z)", re.DOTALL)


class BlogFrontmatter(BaseModel):
    """Frontmatter schema for documents in the blog collection."""

    model_config = ConfigDict(extra="ignore")

    title: str
    description: str | None = None
    pub_date: date | None = Field(
        default=None,
        validation_alias=AliasChoices("pub_date", "pubDate", "date"),
    )
    draft: bool = False
    external: bool = False
    url: str | None = None

    @field_validator("title")
    @classmethod
    def validate_title(cls, v: str) -> str:
        """Ensure the title is not blank."""
        if not v.strip():
            raise ValueError("title must not be blank")
        return v

    @field_validator("pub_date", mode="before")
    @classmethod
    def validate_pub_date(cls, v: object) -> object:
        """Reduce YAML timestamps to their calendar date."""
        if isinstance(v, datetime):
            return v.date()
        return v


def split_frontmatter(text: str) -> tuple[dict, str]:
    """Split a document into its parsed frontmatter and body.

    Returns:
        (frontmatter mapping, body). The mapping is empty when the
        document has no frontmatter block.

    Raises:
        ValueError: If the frontmatter is not valid YAML or not a mapping.
    """
    match = _FRONTMATTER_RE.match(text)
    if not match:
        return {}, text

    try:
        data = yaml.safe_load(match.group(1)) or {}
    except yaml.YAMLError as e:
        raise ValueError(f"invalid YAML frontmatter: {e}") from e
    if not isinstance(data, dict):
        raise ValueError("frontmatter must be a mapping")
    return data, text[match.end():]


class MarkdownPostIndex(PostIndexPort):
    """Post index backed by markdown documents on disk."""

    def __init__(self, content_root: str | Path):
        """Initialize the markdown post index.

        Args:
            content_root: Directory holding one subdirectory per collection.
        """
        self.content_root = Path(content_root)

    async def list_posts(self, directory: str) -> list[Post]:
        """List every post in content_root/directory.

        Documents are read in filename order in a worker thread.

        Raises:
            ContentError: If the directory is missing or escapes the
                content root, or a document fails validation.
        """
        return await asyncio.to_thread(self._read_directory, directory)

    def _read_directory(self, directory: str) -> list[Post]:
        root = self.content_root.resolve()
        collection = (root / directory).resolve()
        if collection != root and root not in collection.parents:
            raise ContentError(f"Collection '{directory}' is outside {root}")
        if not collection.is_dir():
            raise ContentError(f"Collection directory not found: {collection}")

        documents = sorted(
            path
            for path in collection.iterdir()
            if path.is_file() and path.suffix in CONTENT_SUFFIXES
        )
        posts = [self._read_post(path) for path in documents]
        logger.debug(f"Read {len(posts)} posts from {collection}")
        return posts

    @staticmethod
    def _read_post(path: Path) -> Post:
        try:
            text = path.read_text(encoding="utf-8")
        except OSError as e:
            raise ContentError(f"Failed to read {path}: {e}") from e

        try:
            data, _ = split_frontmatter(text)
            frontmatter = BlogFrontmatter.model_validate(data)
        except (ValueError, ValidationError) as e:
            raise ContentError(f"Invalid frontmatter in {path.name}: {e}") from e

        return Post(
            slug=path.stem,
            title=frontmatter.title,
            draft=frontmatter.draft,
            external=frontmatter.external,
            description=frontmatter.description,
            pub_date=frontmatter.pub_date,
            url=frontmatter.url,
        )
