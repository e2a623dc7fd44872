"""siteog: Open Graph preview images for the blog."""

__version__ = "0.1.0"
