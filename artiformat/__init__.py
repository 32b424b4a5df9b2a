"""
artiformat: structured identifier formats for build artifacts.

artiformat parses, validates, composes and extracts the identifiers a
build/release pipeline uses to name its artifacts:

    • Version identifiers such as ``v3.14.2``, ``3.14.2-rc`` or
      ``v3.14.2-rc-abc123f``, governed by eight format templates
    • Platform aliases such as ``ubuntu22.04-arm64``, ``macos14-x86_64``
      or ``win64``, drawn from a fixed catalogue

Example:
    >>> from artiformat import VersionEngine, PlatformEngine
    >>> VersionEngine().parse("v3.14.2-rc-abc123f").type.value
    'rc-dev'
    >>> PlatformEngine().compose(os_name="win", os_arch="64")
    'win64'
"""

from __future__ import annotations

from artiformat.__version__ import __version__
from artiformat.core import PLATFORM_CATALOGUE, PlatformEngine, VersionEngine
from artiformat.exceptions import (
    ArtiformatError,
    ConfigError,
    FormatMismatchError,
    IdentifierError,
    InvalidFormatError,
    InvalidPatternError,
    MissingRequiredFieldError,
    MutuallyExclusiveError,
    NotFoundError,
    NotInCatalogueError,
)
from artiformat.models import (
    PlatformComponents,
    PlatformType,
    VersionComponents,
    VersionTemplate,
    VersionType,
)

# ---------------------------------------------------------------------------
# Package Metadata
# ---------------------------------------------------------------------------

__author__ = "artiformat Contributors"
__license__ = "Apache-2.0"
__description__ = "Parse, validate and compose version and platform identifiers."

# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

__all__ = [
    "__version__",
    # Engines
    "VersionEngine",
    "PlatformEngine",
    "PLATFORM_CATALOGUE",
    # Models
    "VersionComponents",
    "VersionTemplate",
    "VersionType",
    "PlatformComponents",
    "PlatformType",
    # Errors
    "ArtiformatError",
    "ConfigError",
    "InvalidPatternError",
    "IdentifierError",
    "InvalidFormatError",
    "NotInCatalogueError",
    "FormatMismatchError",
    "MissingRequiredFieldError",
    "MutuallyExclusiveError",
    "NotFoundError",
]
