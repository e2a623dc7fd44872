"""CLI command implementations for siteog.

Provides operator actions through the command-line interface: list the
static paths of both OG route families, render a single card to disk and
pre-render the whole slug family for a static deploy.

Every command returns a result dictionary instead of raising, so the
interactive loop can print it as JSON.
"""

import asyncio
import logging
from pathlib import Path
from typing import Any, Literal

from siteog.core.catalog import PostCatalog
from siteog.core.models import OgResponse
from siteog.core.ports import ContentError, ImageResponderPort

logger = logging.getLogger(__name__)


class CLICommandHandler:
    """Handles CLI commands by delegating to the catalog and the responder."""

    def __init__(self, catalog: PostCatalog, responder: ImageResponderPort):
        """Initialize the CLI command handler.

        Args:
            catalog: PostCatalog for static path enumeration.
            responder: ImageResponderPort rendering the cards.
        """
        self.catalog = catalog
        self.responder = responder

    async def list_paths(
        self, route: Literal["slug", "title"] = "slug"
    ) -> dict[str, Any]:
        """List the static paths of an OG route family.

        Args:
            route: "slug" for /og/{slug}, "title" for /og/title/{title}.

        Returns:
            Dictionary with status and the list of paths.
        """
        if route not in ("slug", "title"):
            return {
                "status": "error",
                "operation": "paths",
                "message": f"Unknown route family: {route}",
            }

        try:
            if route == "title":
                paths = await self.catalog.title_paths()
            else:
                paths = await self.catalog.slug_paths()
        except ContentError as e:
            logger.error(f"Failed to list static paths: {e}")
            return {"status": "error", "operation": "paths", "message": str(e)}

        return {
            "status": "success",
            "operation": "paths",
            "route": route,
            "count": len(paths),
            "paths": [path.to_dict() for path in paths],
        }

    async def render_slug(self, slug: str, output: str) -> dict[str, Any]:
        """Render the card of a post and write it to output."""
        response = await self.responder.render_for_slug(slug)
        return await self._write_result("render", response, Path(output), slug=slug)

    async def render_title(self, title: str, output: str) -> dict[str, Any]:
        """Render the card of a literal title and write it to output."""
        response = await self.responder.render_for_title(title)
        return await self._write_result("render_title", response, Path(output), title=title)

    async def build(self, output_dir: str) -> dict[str, Any]:
        """Pre-render every slug-family static path.

        Images are written to output_dir/og/<slug>.png. Failed renders and
        writes are reported and do not stop the build.

        Returns:
            Dictionary with counts of written and failed images.
        """
        try:
            paths = await self.catalog.slug_paths()
        except ContentError as e:
            logger.error(f"Failed to enumerate static paths: {e}")
            return {"status": "error", "operation": "build", "message": str(e)}

        og_dir = Path(output_dir) / "og"
        written: list[str] = []
        failed: list[str] = []

        for path in paths:
            slug = path.params["slug"]
            response = await self.responder.render_for_slug(slug)
            if not response.ok:
                logger.error(f"Failed to render OG image for '{slug}'")
                failed.append(slug)
                continue
            target = og_dir / f"{slug}.png"
            try:
                await asyncio.to_thread(_write_bytes, target, response.body)
            except OSError as e:
                logger.error(f"Failed to write {target}: {e}")
                failed.append(slug)
                continue
            written.append(str(target))

        logger.info(
            f"Built {len(written)} OG images into {og_dir}",
            extra={"written": len(written), "failed": len(failed)},
        )
        return {
            "status": "error" if failed else "success",
            "operation": "build",
            "output_dir": str(og_dir),
            "written": written,
            "failed": failed,
        }

    async def _write_result(
        self, operation: str, response: OgResponse, output: Path, **details: str
    ) -> dict[str, Any]:
        if not response.ok:
            return {
                "status": "error",
                "operation": operation,
                "message": response.body.decode("utf-8"),
                **details,
            }

        try:
            await asyncio.to_thread(_write_bytes, output, response.body)
        except OSError as e:
            logger.error(f"Failed to write {output}: {e}")
            return {
                "status": "error",
                "operation": operation,
                "message": str(e),
                **details,
            }

        return {
            "status": "success",
            "operation": operation,
            "output": str(output),
            "bytes": len(response.body),
            **details,
        }


def _write_bytes(path: Path, data: bytes) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(data)
