"""
Platform identifier data model for artiformat.

A platform alias is ``{os}{version}-{arch}`` for Linux and macOS
(``ubuntu22.04-arm64``) and ``win{arch}`` for Windows (``win64``).
"""

from __future__ import annotations

from enum import Enum
from dataclasses import dataclass
from typing import Any, Dict, Optional

from artiformat.constants import WINDOWS_OS_NAME


class PlatformType(str, Enum):
    """Type predicates over the OS family.

    ``unix`` covers ``linux`` (ubuntu, debian) and ``macos``; ``win`` is
    disjoint from all of them.
    """

    UNIX = "unix"
    LINUX = "linux"
    UBUNTU = "ubuntu"
    DEBIAN = "debian"
    MACOS = "macos"
    WIN = "win"

    def matches(self, os_name: str) -> bool:
        """Return True if ``os_name`` belongs to this type."""
        return os_name in _TYPE_MEMBERS[self]


_TYPE_MEMBERS = {
    PlatformType.UNIX: frozenset({"ubuntu", "debian", "macos"}),
    PlatformType.LINUX: frozenset({"ubuntu", "debian"}),
    PlatformType.UBUNTU: frozenset({"ubuntu"}),
    PlatformType.DEBIAN: frozenset({"debian"}),
    PlatformType.MACOS: frozenset({"macos"}),
    PlatformType.WIN: frozenset({WINDOWS_OS_NAME}),
}


@dataclass(frozen=True)
class PlatformComponents:
    """
    Canonical decomposition of a platform alias.

    Attributes:
        os_name: One of ``ubuntu``, ``debian``, ``macos``, ``win``.
        os_arch: ``arm64``/``x86_64`` for unix families, ``32``/``64`` for Windows.
        os_version: OS release; always ``None`` for Windows.
    """

    os_name: str
    os_arch: str
    os_version: Optional[str] = None

    def is_type(self, platform_type: PlatformType) -> bool:
        return platform_type.matches(self.os_name)

    @property
    def is_unix(self) -> bool:
        return self.is_type(PlatformType.UNIX)

    @property
    def is_linux(self) -> bool:
        return self.is_type(PlatformType.LINUX)

    @property
    def is_ubuntu(self) -> bool:
        return self.is_type(PlatformType.UBUNTU)

    @property
    def is_debian(self) -> bool:
        return self.is_type(PlatformType.DEBIAN)

    @property
    def is_macos(self) -> bool:
        return self.is_type(PlatformType.MACOS)

    @property
    def is_win(self) -> bool:
        return self.is_type(PlatformType.WIN)

    def to_string(self) -> str:
        """Render the platform alias."""
        if self.os_name == WINDOWS_OS_NAME:
            return f"{self.os_name}{self.os_arch}"
        return f"{self.os_name}{self.os_version}-{self.os_arch}"

    def to_dict(self) -> Dict[str, Any]:
        """Return a JSON-serializable representation."""
        return {
            "platform": self.to_string(),
            "os_name": self.os_name,
            "os_version": self.os_version,
            "os_arch": self.os_arch,
        }

    def __str__(self) -> str:
        return self.to_string()
