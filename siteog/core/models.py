"""Domain models for the siteog image service.

All models in this module use only Python standard library types,
ensuring zero external dependencies in the core domain.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import date
from types import MappingProxyType
from typing import Any

PLACEHOLDER_TITLE = "siema"
FAILURE_MESSAGE = "Failed to generate the image"

OG_IMAGE_WIDTH = 1200
OG_IMAGE_HEIGHT = 630

RGB = tuple[int, int, int]


@dataclass(frozen=True)
class Post:
    """A blog post as listed by the post index.

    The draft and external flags only decide whether the post takes part
    in the OG image family; the title is rendered verbatim.
    """

    slug: str
    title: str
    draft: bool = False
    external: bool = False
    description: str | None = None
    pub_date: date | None = None
    url: str | None = None

    def __post_init__(self) -> None:
        """Validate post invariants on creation."""
        if not self.slug or not self.slug.strip():
            raise ValueError("slug must be a non-empty string")

    @property
    def publishable(self) -> bool:
        """Whether the post gets a static OG image path."""
        return self.draft is not True and not self.external


@dataclass(frozen=True)
class StaticPath:
    """One pre-computed route for the OG image family.

    params holds the path variables, props the values handed to the
    handler alongside them.
    """

    params: Mapping[str, str]
    props: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        """Convert params and props to read-only proxies."""
        if isinstance(self.params, dict):
            object.__setattr__(self, "params", MappingProxyType(self.params))
        if isinstance(self.props, dict):
            object.__setattr__(self, "props", MappingProxyType(self.props))

    def to_dict(self) -> dict[str, Any]:
        return {"params": dict(self.params), "props": dict(self.props)}


@dataclass(frozen=True)
class SiteConfig:
    """Site-wide constants, built once at startup and passed explicitly."""

    title: str
    description: str
    author: str
    url: str
    twitter_handle: str = ""


@dataclass(frozen=True)
class CardLayout:
    """Declarative description of the OG card.

    A black canvas with an optional white triangle mark above a centered
    title block, and an optional byline under the title. Sizes are in
    pixels except letter_spacing (em) and line_height (multiple of the
    font size).
    """

    title: str
    byline: str | None = None
    show_logo: bool = True
    width: int = OG_IMAGE_WIDTH
    height: int = OG_IMAGE_HEIGHT
    background_color: RGB = (0, 0, 0)
    text_color: RGB = (255, 255, 255)
    byline_color: RGB = (160, 160, 170)
    font_family: str = "Space Grotesk"
    font_size: int = 60
    byline_font_size: int = 28
    line_height: float = 1.4
    letter_spacing: float = -0.025
    horizontal_padding: int = 120
    title_margin_top: int = 30
    logo_width: int = 232
    logo_height: int = 200
    logo_margin: int = 30

    def __post_init__(self) -> None:
        """Validate layout invariants on creation."""
        if self.width <= 0 or self.height <= 0:
            raise ValueError(
                f"card dimensions must be positive, got {self.width}x{self.height}"
            )
        if self.font_size <= 0:
            raise ValueError(f"font_size must be positive, got {self.font_size}")
        if self.horizontal_padding * 2 >= self.width:
            raise ValueError("horizontal_padding leaves no room for the title")

    @property
    def text_width(self) -> int:
        """Maximum width available to a title line."""
        return self.width - 2 * self.horizontal_padding


@dataclass(frozen=True)
class OgResponse:
    """Result of an OG image request, ready to be written by any transport."""

    status: int
    body: bytes
    content_type: str
    headers: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        """Convert headers dict to read-only proxy."""
        if isinstance(self.headers, dict):
            object.__setattr__(self, "headers", MappingProxyType(self.headers))

    @classmethod
    def image(cls, png: bytes, cache_max_age: int | None = None) -> "OgResponse":
        headers = {}
        if cache_max_age is not None:
            headers["Cache-Control"] = f"public, max-age={cache_max_age}"
        return cls(status=200, body=png, content_type="image/png", headers=headers)

    @classmethod
    def failure(cls) -> "OgResponse":
        return cls(
            status=500,
            body=FAILURE_MESSAGE.encode("utf-8"),
            content_type="text/plain; charset=utf-8",
        )

    @property
    def ok(self) -> bool:
        return self.status == 200
