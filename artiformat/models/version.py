"""
Version identifier data model for artiformat.

This module defines the canonical decomposition of a version identifier
(:class:`VersionComponents`), the closed set of format templates
(:class:`VersionTemplate`), and the derived type classification
(:class:`VersionType`).
"""

from __future__ import annotations

from enum import Enum
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple

from artiformat.constants import (
    DEFAULT_PREFIX,
    RC_SUFFIX,
    VERSION_FORMAT_DESCRIPTIONS,
    VERSION_TYPE_DESCRIPTIONS,
)


class VersionType(str, Enum):
    """Classification derived from a version's suffix and hash."""

    RELEASE = "release"
    RC = "rc"
    DEV = "dev"
    RC_DEV = "rc-dev"
    CUSTOM = "custom"

    @property
    def description(self) -> str:
        return VERSION_TYPE_DESCRIPTIONS[self.value]


class VersionTemplate(str, Enum):
    """One of the eight supported version surface forms."""

    RELEASE = "X.YY.Z"
    PREFIXED_RELEASE = "vX.YY.Z"
    RC = "X.YY.Z-rc"
    PREFIXED_RC = "vX.YY.Z-rc"
    DEV = "X.YY.Z-HASH"
    PREFIXED_DEV = "vX.YY.Z-HASH"
    RC_DEV = "X.YY.Z-rc-HASH"
    PREFIXED_RC_DEV = "vX.YY.Z-rc-HASH"

    @property
    def has_prefix(self) -> bool:
        return self.value.startswith(DEFAULT_PREFIX)

    @property
    def has_suffix(self) -> bool:
        return f"-{RC_SUFFIX}" in self.value

    @property
    def has_hash(self) -> bool:
        return self.value.endswith("-HASH")

    @property
    def version_type(self) -> VersionType:
        """The type every version written in this template has."""
        if self.has_suffix:
            return VersionType.RC_DEV if self.has_hash else VersionType.RC
        return VersionType.DEV if self.has_hash else VersionType.RELEASE

    @property
    def description(self) -> str:
        return VERSION_FORMAT_DESCRIPTIONS[self.value]

    @classmethod
    def from_parts(cls, *, prefix: bool, rc: bool, hash: bool) -> "VersionTemplate":
        """Return the template with the given optional fields present."""
        name = ("v" if prefix else "") + "X.YY.Z"
        if rc:
            name += f"-{RC_SUFFIX}"
        if hash:
            name += "-HASH"
        return cls(name)


@dataclass(frozen=True)
class VersionComponents:
    """
    Canonical decomposition of a version identifier.

    ``type`` and ``template`` are computed from the stored fields and can
    never disagree with them.

    Attributes:
        major: Major version number (0-999).
        minor: Minor version number (0-999).
        patch: Patch version number (0-999).
        prefix: ``"v"`` or ``""``.
        suffix: Release qualifier, ``"rc"`` or a custom token, if any.
        hash: Lowercase hex source-revision hash, if any.
        number_text: Digits as written (``("1", "02", "3")``) when they
            carry leading zeros; ``None`` when the plain numbers render
            them exactly.
    """

    major: int
    minor: int
    patch: int
    prefix: str = ""
    suffix: Optional[str] = None
    hash: Optional[str] = None
    number_text: Optional[Tuple[str, str, str]] = field(default=None, repr=False)

    def __post_init__(self) -> None:
        if self.number_text is None:
            return
        text = tuple(str(part) for part in self.number_text)
        if tuple(int(part) for part in text) != (self.major, self.minor, self.patch):
            raise ValueError(
                f"number_text {text} does not match {self.major}.{self.minor}.{self.patch}"
            )
        if text == (str(self.major), str(self.minor), str(self.patch)):
            text = None
        object.__setattr__(self, "number_text", text)

    # ------------------------------------------------------------------
    # Derived classification
    # ------------------------------------------------------------------

    @property
    def type(self) -> VersionType:
        if self.suffix == RC_SUFFIX:
            return VersionType.RC_DEV if self.hash else VersionType.RC
        if self.hash:
            return VersionType.DEV
        if self.suffix:
            return VersionType.CUSTOM
        return VersionType.RELEASE

    @property
    def template(self) -> Optional[VersionTemplate]:
        """Template this version is written in, or ``None`` for custom suffixes."""
        if self.suffix and self.suffix != RC_SUFFIX:
            return None
        return VersionTemplate.from_parts(
            prefix=self.has_prefix,
            rc=self.suffix == RC_SUFFIX,
            hash=self.has_hash,
        )

    # ------------------------------------------------------------------
    # Predicates
    # ------------------------------------------------------------------

    @property
    def has_prefix(self) -> bool:
        return bool(self.prefix)

    @property
    def has_suffix(self) -> bool:
        return bool(self.suffix)

    @property
    def has_hash(self) -> bool:
        return bool(self.hash)

    @property
    def is_release(self) -> bool:
        return not self.suffix and not self.hash

    @property
    def is_rc(self) -> bool:
        """``rc`` suffix without a hash."""
        return self.type is VersionType.RC

    @property
    def is_dev(self) -> bool:
        """Hash without the ``rc`` suffix."""
        return self.type is VersionType.DEV

    @property
    def is_rc_dev(self) -> bool:
        return self.type is VersionType.RC_DEV

    @property
    def is_custom(self) -> bool:
        """Custom suffix without a hash."""
        return self.type is VersionType.CUSTOM

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    @property
    def core(self) -> str:
        """The ``major.minor.patch`` part without prefix or qualifiers."""
        if self.number_text is not None:
            return ".".join(self.number_text)
        return f"{self.major}.{self.minor}.{self.patch}"

    def to_string(self) -> str:
        """Render the canonical identifier string."""
        result = f"{self.prefix}{self.core}"
        if self.suffix:
            result += f"-{self.suffix}"
        if self.hash:
            result += f"-{self.hash}"
        return result

    def to_dict(self) -> Dict[str, Any]:
        """Return a JSON-serializable representation."""
        template = self.template
        return {
            "version": self.to_string(),
            "prefix": self.prefix,
            "major": self.major,
            "minor": self.minor,
            "patch": self.patch,
            "suffix": self.suffix,
            "hash": self.hash,
            "type": self.type.value,
            "format": template.value if template else None,
        }

    def __str__(self) -> str:
        return self.to_string()
