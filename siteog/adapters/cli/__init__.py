"""Command-line interface for listing, rendering and building OG images."""
