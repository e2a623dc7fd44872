"""Core domain logic for the siteog image service.

This package contains zero external dependencies and represents
the pure business logic of the application. All adapters and
external integrations are handled by the adapters package.
"""

from .models import (
    FAILURE_MESSAGE,
    OG_IMAGE_HEIGHT,
    OG_IMAGE_WIDTH,
    PLACEHOLDER_TITLE,
    CardLayout,
    OgResponse,
    Post,
    SiteConfig,
    StaticPath,
)

__all__ = [
    "FAILURE_MESSAGE",
    "OG_IMAGE_HEIGHT",
    "OG_IMAGE_WIDTH",
    "PLACEHOLDER_TITLE",
    "CardLayout",
    "OgResponse",
    "Post",
    "SiteConfig",
    "StaticPath",
]
