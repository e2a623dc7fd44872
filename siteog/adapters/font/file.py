"""Local font file adapter.

Implements FontAssetPort by reading a font file from disk.
"""

import asyncio
import logging
from pathlib import Path

from siteog.core.ports import FontAssetPort, FontUnavailableError

logger = logging.getLogger(__name__)


class FileFontAsset(FontAssetPort):
    """Font asset read from the local filesystem."""

    def __init__(self, path: str | Path):
        """Initialize the file font adapter.

        Args:
            path: Path to a TTF, OTF or WOFF font file.
        """
        self.path = Path(path)

    async def load(self) -> bytes:
        """Read the font file in a worker thread.

        Raises:
            FontUnavailableError: If the file is missing, unreadable or empty.
        """
        try:
            data = await asyncio.to_thread(self.path.read_bytes)
        except OSError as e:
            raise FontUnavailableError(f"Cannot read font {self.path}: {e}") from e

        if not data:
            raise FontUnavailableError(f"Font file is empty: {self.path}")

        logger.debug(f"Loaded font {self.path} ({len(data)} bytes)")
        return data
