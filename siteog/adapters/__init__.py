"""External adapters for the siteog image service.

This package contains all external dependencies (filesystem content,
Pillow, httpx, HTTP servers, etc.) and provides implementations of the
core port interfaces.

Adapter Organization:

- content/: Post index adapters (markdown documents with YAML frontmatter)
- font/: Font asset adapters (local file, HTTP)
- renderer/: Card renderer adapters (Pillow)
- web/: HTTP server exposing the OG image routes
- cli/: Command-line listing, rendering and static build commands
"""
