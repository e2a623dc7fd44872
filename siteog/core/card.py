"""The OG card template."""

from .models import PLACEHOLDER_TITLE, CardLayout, SiteConfig


def resolve_title(candidate: str | None) -> str:
    """Return the candidate title, or the placeholder when it is missing or empty."""
    if candidate is None or candidate == "":
        return PLACEHOLDER_TITLE
    return candidate


def build_card(
    title: str | None,
    site: SiteConfig | None = None,
    show_logo: bool = True,
    show_byline: bool = False,
) -> CardLayout:
    """Compose the card layout for a title.

    The title is kept verbatim; explicit newlines become line breaks when
    rendered. The byline is the site author and only appears when enabled
    and a site config is available.
    """
    byline = site.author if (show_byline and site is not None and site.author) else None
    return CardLayout(
        title=resolve_title(title),
        byline=byline,
        show_logo=show_logo,
    )
