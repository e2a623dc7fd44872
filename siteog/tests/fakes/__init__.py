"""Fake implementations of core ports for testing.

These in-memory implementations allow core domain logic to be tested
without external dependencies:

- FakePostIndexPort: In-memory post collections
- FakeFontAssetPort: Canned font bytes or fetch failures
- FakeCardRendererPort: Captured layouts and canned image bytes
"""

from .font import FakeFontAssetPort
from .post_index import FakePostIndexPort
from .renderer import FakeCardRendererPort

__all__ = [
    "FakeCardRendererPort",
    "FakeFontAssetPort",
    "FakePostIndexPort",
]
