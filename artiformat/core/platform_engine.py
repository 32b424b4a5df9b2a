"""Platform alias engine for artiformat.

Platform aliases name the build targets artifacts are produced for:
``ubuntu22.04-arm64``, ``debian12-x86_64``, ``macos14-arm64``, ``win64``.
The set of valid aliases is closed and fixed; :data:`PLATFORM_CATALOGUE`
is generated once at import time from the tables in
:mod:`artiformat.constants` and never changes afterwards.
"""

from __future__ import annotations

import re
from typing import List, Optional, Tuple, Union

from artiformat.constants import (
    PLATFORM_OS_NAMES,
    PLATFORM_OS_VERSIONS,
    UNIX_ARCHS,
    WINDOWS_ARCHS,
    WINDOWS_OS_NAME,
)
from artiformat.exceptions import (
    InvalidFormatError,
    MissingRequiredFieldError,
    NotFoundError,
    NotInCatalogueError,
)
from artiformat.models.platform import PlatformComponents, PlatformType
from artiformat.utils.logger import get_logger
from artiformat.utils.patterns import compile_pattern, filter_glob, regex_fullmatch, regex_search

logger = get_logger("core.platform")


# ---------------------------------------------------------------------------
# Catalogue
# ---------------------------------------------------------------------------


def _build_catalogue() -> Tuple[str, ...]:
    aliases: List[str] = []
    for os_name, versions in PLATFORM_OS_VERSIONS.items():
        for os_version in versions:
            for arch in UNIX_ARCHS:
                aliases.append(f"{os_name}{os_version}-{arch}")
    for arch in WINDOWS_ARCHS:
        aliases.append(f"{WINDOWS_OS_NAME}{arch}")
    return tuple(aliases)


#: Every supported alias: ubuntu, debian, macos, then Windows.
PLATFORM_CATALOGUE: Tuple[str, ...] = _build_catalogue()

_CATALOGUE_SET = frozenset(PLATFORM_CATALOGUE)

_WINDOWS_PATTERN = compile_pattern(rf"{WINDOWS_OS_NAME}(?P<arch>[0-9]+)")

# Longest first so ``debian1`` never shadows ``debian12`` in an alternation
_EXTRACT_PATTERN = compile_pattern(
    r"(?<![0-9A-Za-z.])(?:"
    + "|".join(re.escape(alias) for alias in sorted(PLATFORM_CATALOGUE, key=len, reverse=True))
    + r")(?![0-9A-Za-z])"
)


class PlatformEngine:
    """Parse, validate, compose, list and extract platform aliases."""

    @staticmethod
    def list(pattern: Optional[str] = None) -> List[str]:
        """Return catalogue aliases in catalogue order.

        Args:
            pattern: Optional shell-style glob, e.g. ``"ubuntu*"``.
        """
        return filter_glob(PLATFORM_CATALOGUE, pattern)

    @staticmethod
    def resolve_type(value: Union[str, PlatformType]) -> PlatformType:
        if isinstance(value, PlatformType):
            return value
        try:
            return PlatformType(value)
        except ValueError:
            raise InvalidFormatError(
                f"Unknown platform type: {value}",
                identifier=str(value),
                details={"supported": ", ".join(t.value for t in PlatformType)},
            ) from None

    @staticmethod
    def is_supported(alias: str) -> bool:
        return alias in _CATALOGUE_SET

    # ------------------------------------------------------------------
    # Parse
    # ------------------------------------------------------------------

    def parse(self, alias: str) -> PlatformComponents:
        """Decompose a platform alias.

        Args:
            alias: Platform alias, e.g. ``"ubuntu22.04-arm64"`` or ``"win64"``.

        Returns:
            The parsed :class:`PlatformComponents`.

        Raises:
            InvalidFormatError: ``alias`` is not shaped like a platform alias.
            NotInCatalogueError: ``alias`` is well formed but unsupported.
        """
        components = self._split(alias)

        if alias not in _CATALOGUE_SET:
            raise NotInCatalogueError(
                f"Unsupported platform: {alias}",
                identifier=alias,
                details={"hint": "run 'artiformat platform list' for supported platforms"},
            )

        logger.debug("Parsed platform %r -> %s", alias, components.to_dict())
        return components

    @staticmethod
    def _split(alias: str) -> PlatformComponents:
        if not isinstance(alias, str) or not alias:
            raise InvalidFormatError(
                "Invalid platform format: empty identifier",
                identifier=alias if isinstance(alias, str) else repr(alias),
            )

        win_match = regex_fullmatch(alias, _WINDOWS_PATTERN)
        if win_match is not None:
            return PlatformComponents(os_name=WINDOWS_OS_NAME, os_arch=win_match.group("arch"))

        for os_name in PLATFORM_OS_NAMES:
            if os_name == WINDOWS_OS_NAME or not alias.startswith(os_name):
                continue
            os_version, sep, os_arch = alias[len(os_name):].rpartition("-")
            if sep and os_version and os_arch:
                return PlatformComponents(
                    os_name=os_name,
                    os_version=os_version,
                    os_arch=os_arch,
                )
            break

        raise InvalidFormatError(
            f"Invalid platform format: {alias}",
            identifier=alias,
            details={"expected": "{os}{version}-{arch} or win{arch}"},
        )

    # ------------------------------------------------------------------
    # Validate
    # ------------------------------------------------------------------

    def validate(
        self,
        alias: str,
        type: Optional[Union[str, PlatformType]] = None,
    ) -> bool:
        """Return True if ``alias`` is in the catalogue and of ``type``.

        Args:
            alias: Platform alias to check.
            type: Optional OS family the alias must belong to.

        Raises:
            InvalidFormatError: ``type`` names no known platform type.
        """
        platform_type = self.resolve_type(type) if type else None

        try:
            components = self.parse(alias)
        except InvalidFormatError as exc:
            logger.debug("Platform validation of %r failed: %s", alias, exc)
            return False

        if platform_type is not None:
            if not components.is_type(platform_type):
                logger.debug("Platform %r is not of type %s", alias, platform_type.value)
                return False
        return True

    # ------------------------------------------------------------------
    # Compose
    # ------------------------------------------------------------------

    def compose(
        self,
        os_name: Optional[str] = None,
        os_arch: Optional[str] = None,
        os_version: Optional[str] = None,
    ) -> str:
        """Build a platform alias from its parts.

        A version supplied for Windows is ignored.

        Raises:
            MissingRequiredFieldError: A required part is missing.
            NotInCatalogueError: The composed alias is not supported.
        """
        if not os_name:
            raise MissingRequiredFieldError("Missing required component: os_name", field="os_name")
        if not os_arch:
            raise MissingRequiredFieldError("Missing required component: os_arch", field="os_arch")

        if os_name == WINDOWS_OS_NAME:
            if os_version:
                logger.debug("Ignoring os_version=%r for Windows", os_version)
            components = PlatformComponents(os_name=os_name, os_arch=os_arch)
        else:
            if not os_version:
                raise MissingRequiredFieldError(
                    f"Missing required component: os_version (required for {os_name})",
                    field="os_version",
                )
            components = PlatformComponents(
                os_name=os_name,
                os_version=os_version,
                os_arch=os_arch,
            )

        alias = components.to_string()
        if alias not in _CATALOGUE_SET:
            raise NotInCatalogueError(
                f"Unsupported platform: {alias}",
                identifier=alias,
                details={"hint": "run 'artiformat platform list' for supported platforms"},
            )

        logger.debug("Composed platform: %s", alias)
        return alias

    def compose_from(self, components: PlatformComponents) -> str:
        return self.compose(
            os_name=components.os_name,
            os_arch=components.os_arch,
            os_version=components.os_version,
        )

    # ------------------------------------------------------------------
    # Extract
    # ------------------------------------------------------------------

    def extract(self, text: str) -> str:
        """Return the leftmost supported platform alias in ``text``.

        Raises:
            NotFoundError: No supported alias occurs in ``text``.
        """
        match = regex_search(text, _EXTRACT_PATTERN)
        if match is None:
            raise NotFoundError(
                "No platform found in text",
                identifier=text if isinstance(text, str) else repr(text),
            )

        logger.debug("Extracted platform %r", match.group(0))
        return match.group(0)
