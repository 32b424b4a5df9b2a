"""
Centralized constants for artiformat.

This module defines immutable configuration values used across artiformat,
including the version grammar fragments, the closed set of version format
templates, the supported platform catalogue tables, and logging formats.
All values are intended to be treated as read-only.
"""

from types import MappingProxyType
from typing import Final, Mapping, Sequence

# ---------------------------------------------------------------------------
# Version grammar
# ---------------------------------------------------------------------------

#: Prefix written in front of prefixed version identifiers.
DEFAULT_PREFIX: Final[str] = "v"

#: The reserved release-candidate suffix.
RC_SUFFIX: Final[str] = "rc"

#: Template used when composing without an explicit format.
DEFAULT_VERSION_FORMAT: Final[str] = "vX.YY.Z"

#: A single numeric component: one to three digits, leading zeros kept.
VERSION_NUMBER_PATTERN: Final[str] = r"[0-9]{1,3}"

#: Source-revision hash: lowercase hex, 7-40 characters.
HASH_MIN_LENGTH: Final[int] = 7
HASH_MAX_LENGTH: Final[int] = 40
HASH_PATTERN: Final[str] = rf"[0-9a-f]{{{HASH_MIN_LENGTH},{HASH_MAX_LENGTH}}}"

#: Release qualifier: alphanumeric segments joined by single hyphens.
SUFFIX_PATTERN: Final[str] = r"[A-Za-z0-9]+(?:-[A-Za-z0-9]+)*"

#: The eight supported version templates, in documentation order.
VERSION_FORMATS: Final[Sequence[str]] = (
    "X.YY.Z",
    "vX.YY.Z",
    "X.YY.Z-rc",
    "vX.YY.Z-rc",
    "X.YY.Z-HASH",
    "vX.YY.Z-HASH",
    "X.YY.Z-rc-HASH",
    "vX.YY.Z-rc-HASH",
)

#: Human-readable descriptions for each template.
VERSION_FORMAT_DESCRIPTIONS: Final[Mapping[str, str]] = MappingProxyType(
    {
        "X.YY.Z": "Release without prefix",
        "vX.YY.Z": "Release with prefix (default)",
        "X.YY.Z-rc": "Release candidate without prefix",
        "vX.YY.Z-rc": "Release candidate with prefix",
        "X.YY.Z-HASH": "Development version without prefix",
        "vX.YY.Z-HASH": "Development version with prefix",
        "X.YY.Z-rc-HASH": "RC with commits, no prefix",
        "vX.YY.Z-rc-HASH": "RC with commits, with prefix",
    }
)

#: Human-readable descriptions for each version type.
VERSION_TYPE_DESCRIPTIONS: Final[Mapping[str, str]] = MappingProxyType(
    {
        "release": "Release version (no suffix, no hash)",
        "rc": "Release candidate (suffix='rc', no hash)",
        "dev": "Development version (has hash, no rc suffix)",
        "rc-dev": "RC with commits (suffix='rc', has hash)",
        "custom": "Custom suffix (suffix!='rc', no hash)",
    }
)

# ---------------------------------------------------------------------------
# Platform catalogue
# ---------------------------------------------------------------------------

#: Windows OS name (the only family without a version field).
WINDOWS_OS_NAME: Final[str] = "win"

#: Supported versions per unix OS family, in catalogue order.
PLATFORM_OS_VERSIONS: Final[Mapping[str, Sequence[str]]] = MappingProxyType(
    {
        "ubuntu": ("20.04", "22.04", "24.04"),
        "debian": ("8", "9", "10", "11", "12"),
        "macos": ("13", "14", "15", "16", "17", "18", "26"),
    }
)

#: Architectures offered for Linux and macOS.
UNIX_ARCHS: Final[Sequence[str]] = ("arm64", "x86_64")

#: Architectures (bit widths) offered for Windows.
WINDOWS_ARCHS: Final[Sequence[str]] = ("32", "64")

#: All OS names, in catalogue order.
PLATFORM_OS_NAMES: Final[Sequence[str]] = (
    *PLATFORM_OS_VERSIONS.keys(),
    WINDOWS_OS_NAME,
)

# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------

#: Default for composing versions with the ``v`` prefix.
DEFAULT_INCLUDE_PREFIX: Final[bool] = True

# ---------------------------------------------------------------------------
# Logging configuration
# ---------------------------------------------------------------------------

#: Timestamp format for verbose logging.
LOG_DATE_FORMAT: Final[str] = "%Y-%m-%d %H:%M:%S"

#: Default log format (non-verbose).
LOG_DEFAULT_FORMAT: Final[str] = "%(levelname)s: %(message)s"

#: Verbose log format including timestamp and logger name.
LOG_VERBOSE_FORMAT: Final[str] = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
