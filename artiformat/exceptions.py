"""
Custom exception hierarchy for artiformat.

This module defines structured exception types used across artiformat.
All exceptions inherit from :class:`ArtiformatError` and support optional
structured metadata via the ``details`` attribute to improve diagnostics
and logging.

Identifier engine failures derive from :class:`IdentifierError` and carry a
stable ``kind`` string (``InvalidFormat``, ``FormatMismatch``, ...) that
callers can map to exit statuses without inspecting messages.
"""

from __future__ import annotations

from typing import Any, ClassVar, Mapping, MutableMapping, Optional, Sequence


class ArtiformatError(Exception):
    """Base exception for all artiformat errors.

    All artiformat-specific exceptions should inherit from this class.
    It supports structured metadata via ``details`` for richer error
    reporting and debugging.

    Args:
        message: Human-readable error message.
        details: Optional structured metadata describing the error.
    """

    __slots__ = ("message", "details")

    def __init__(
        self,
        message: str,
        details: Optional[Mapping[str, Any]] = None,
    ) -> None:
        self.message: str = message
        # Internally normalize to a mutable dict
        self.details: MutableMapping[str, Any] = dict(details) if details else {}
        super().__init__(message)

    def __str__(self) -> str:
        if not self.details:
            return self.message
        formatted = ", ".join(f"{k}={v}" for k, v in self.details.items())
        return f"{self.message} ({formatted})"

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"message={self.message!r}, details={dict(self.details)!r})"
        )


def _add_if(details: MutableMapping[str, Any], key: str, value: Any) -> None:
    """Add a key to ``details`` only if ``value`` is not ``None``."""
    if value is not None:
        details[key] = value


def _truncate(text: str, max_length: int = 200) -> str:
    """Truncate long text for safe logging or error reporting."""
    if len(text) <= max_length:
        return text
    return text[:max_length] + "..."


class ConfigError(ArtiformatError):
    """Raised when a configuration file cannot be loaded or is invalid.

    Args:
        message: Error description.
        config_path: Path to the configuration file involved.
        option: Name of the offending option, if any.
    """

    __slots__ = ("config_path", "option")

    def __init__(
        self,
        message: str,
        *,
        config_path: Optional[str] = None,
        option: Optional[str] = None,
    ) -> None:
        details: MutableMapping[str, Any] = {}
        _add_if(details, "path", config_path)
        _add_if(details, "option", option)

        super().__init__(message, details)

        self.config_path = config_path
        self.option = option


class InvalidPatternError(ArtiformatError):
    """Raised when a regular expression cannot be compiled.

    Args:
        message: Error description.
        pattern: The offending pattern.
    """

    __slots__ = ("pattern",)

    def __init__(self, message: str, *, pattern: Optional[str] = None) -> None:
        details: MutableMapping[str, Any] = {}
        _add_if(details, "pattern", pattern)

        super().__init__(message, details)

        self.pattern = pattern


class IdentifierError(ArtiformatError):
    """Base class for version and platform identifier errors.

    Attributes:
        kind: Stable error category name, independent of the message text.
        identifier: The identifier (or text) the operation was applied to.
    """

    __slots__ = ("identifier",)

    kind: ClassVar[str] = "IdentifierError"

    def __init__(
        self,
        message: str,
        *,
        identifier: Optional[str] = None,
        details: Optional[Mapping[str, Any]] = None,
    ) -> None:
        merged: MutableMapping[str, Any] = {}
        if identifier is not None:
            merged["identifier"] = _truncate(identifier)
        if details:
            merged.update(details)

        super().__init__(message, merged)

        self.identifier = identifier


class InvalidFormatError(IdentifierError):
    """Raised when an input matches none of the supported grammars."""

    __slots__ = ()

    kind: ClassVar[str] = "InvalidFormat"


class NotInCatalogueError(InvalidFormatError):
    """Raised for a well-formed platform that is not a supported combination."""

    __slots__ = ()

    kind: ClassVar[str] = "NotInCatalogue"


class FormatMismatchError(IdentifierError):
    """Raised when an identifier is valid but not of the requested shape.

    Args:
        message: Error description.
        identifier: The identifier being checked or composed.
        expected: Requested template, type or predicate.
        actual: What the identifier actually is.
    """

    __slots__ = ("expected", "actual")

    kind: ClassVar[str] = "FormatMismatch"

    def __init__(
        self,
        message: str,
        *,
        identifier: Optional[str] = None,
        expected: Optional[str] = None,
        actual: Optional[str] = None,
    ) -> None:
        details: MutableMapping[str, Any] = {}
        _add_if(details, "expected", expected)
        _add_if(details, "actual", actual)

        super().__init__(message, identifier=identifier, details=details)

        self.expected = expected
        self.actual = actual


class MissingRequiredFieldError(IdentifierError):
    """Raised when compose is called without a mandatory component.

    Args:
        message: Error description.
        field: Name of the missing component.
    """

    __slots__ = ("field",)

    kind: ClassVar[str] = "MissingRequiredField"

    def __init__(self, message: str, *, field: str) -> None:
        super().__init__(message, details={"field": field})
        self.field = field


class MutuallyExclusiveError(IdentifierError):
    """Raised when compose receives components that cannot be combined.

    Args:
        message: Error description.
        fields: Names of the conflicting components.
    """

    __slots__ = ("fields",)

    kind: ClassVar[str] = "MutuallyExclusive"

    def __init__(self, message: str, *, fields: Sequence[str]) -> None:
        super().__init__(message, details={"fields": ", ".join(fields)})
        self.fields = tuple(fields)


class NotFoundError(IdentifierError):
    """Raised when no identifier is embedded in the searched text."""

    __slots__ = ()

    kind: ClassVar[str] = "NotFound"
