"""
Unified data model exports for artiformat.

Example:
    >>> from artiformat.models import VersionComponents, PlatformComponents
"""

from __future__ import annotations

from artiformat.models.version import VersionComponents, VersionTemplate, VersionType
from artiformat.models.platform import PlatformComponents, PlatformType

__all__ = [
    "VersionComponents",
    "VersionTemplate",
    "VersionType",
    "PlatformComponents",
    "PlatformType",
]
