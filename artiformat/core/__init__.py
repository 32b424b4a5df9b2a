"""
Core functionality exports for artiformat.

    from artiformat.core import VersionEngine, PlatformEngine
"""

from __future__ import annotations

from artiformat.core.version_engine import VersionEngine
from artiformat.core.platform_engine import PLATFORM_CATALOGUE, PlatformEngine

__all__ = [
    "VersionEngine",
    "PlatformEngine",
    "PLATFORM_CATALOGUE",
]
