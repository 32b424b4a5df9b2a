"""Version identifier engine for artiformat.

Parses, validates, composes and extracts version identifiers such as
``v3.14.2-rc-abc123f``. A version is an optional ``v`` prefix, a
``major.minor.patch`` core, an optional release qualifier (``rc`` or a
custom token such as ``beta-1``) and an optional source-revision hash.

Matching is driven by explicitly ordered rule lists rather than a single
combined expression, so the priority between overlapping forms is a plain,
testable property of this module:

- :data:`PARSE_RULES` is tried most-specific first (prefix+suffix+hash,
  prefix+suffix, prefix+hash, prefix only, then the unprefixed variants).
- :data:`EXTRACT_RULES` is tried most-informative first (``rc-dev``,
  ``dev``, ``rc``, ``release``), each prefixed then unprefixed.

Typical usage::

    engine = VersionEngine()
    components = engine.parse("v3.14.2-rc-abc123f")
    components.type                         # VersionType.RC_DEV
    engine.compose(3, 14, 2, format="X.YY.Z")   # "3.14.2"
    engine.extract("CI: v3.14.2-rc-abc123f passed")

Open decisions:

- A custom suffix combined with a hash classifies as ``dev``; a custom
  suffix alone classifies as ``custom``. Neither belongs to any of the eight
  templates, so format validation of such a version is always false.
- Composing with an explicit ``format`` only accepts the ``rc`` suffix.
- Composing with ``type="dev"`` builds the ``X.YY.Z-HASH`` form and so
  refuses a custom suffix, although ``1.2.3-beta-abc1234`` parses as
  ``dev``. Such a version is only built by :meth:`VersionEngine.compose_from`.
- Numbers are one to three digits. Leading zeros are legal and kept as
  written, so ``1.02.3`` parses and renders back unchanged.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence, Tuple, Union

from artiformat.constants import (
    DEFAULT_INCLUDE_PREFIX,
    DEFAULT_PREFIX,
    DEFAULT_VERSION_FORMAT,
    HASH_PATTERN,
    RC_SUFFIX,
    SUFFIX_PATTERN,
    VERSION_FORMATS,
    VERSION_NUMBER_PATTERN,
)
from artiformat.exceptions import (
    FormatMismatchError,
    InvalidFormatError,
    MissingRequiredFieldError,
    MutuallyExclusiveError,
    NotFoundError,
)
from artiformat.models.version import VersionComponents, VersionTemplate, VersionType
from artiformat.utils.logger import get_logger
from artiformat.utils.patterns import compile_pattern, regex_fullmatch, regex_search

logger = get_logger("core.version")

TemplateLike = Union[str, VersionTemplate]
TypeLike = Union[str, VersionType]
NumberLike = Union[int, str]


# ---------------------------------------------------------------------------
# Grammar rules
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class GrammarRule:
    """A single structural pattern and the template family it belongs to.

    Attributes:
        template: Template family the rule recognizes. For rules with a
            suffix slot, custom suffixes are accepted structurally too; the
            resulting :class:`VersionComponents` reports its own template.
        pattern: Compiled expression with named groups.
    """

    template: VersionTemplate
    pattern: Any


def _version_expression(template: VersionTemplate) -> str:
    number = f"(?:{VERSION_NUMBER_PATTERN})"
    expression = (
        f"(?P<prefix>{DEFAULT_PREFIX})" if template.has_prefix else "(?P<prefix>)"
    )
    expression += rf"(?P<major>{number})\.(?P<minor>{number})\.(?P<patch>{number})"
    if template.has_suffix:
        expression += f"-(?P<suffix>{SUFFIX_PATTERN})"
    if template.has_hash:
        expression += f"-(?P<hash>{HASH_PATTERN})"
    return expression


def _build_rules(order: Sequence[VersionTemplate]) -> Tuple[GrammarRule, ...]:
    return tuple(
        GrammarRule(template=template, pattern=compile_pattern(_version_expression(template)))
        for template in order
    )


#: Parse order: most specific first, prefixed before unprefixed.
PARSE_RULES: Tuple[GrammarRule, ...] = _build_rules(
    (
        VersionTemplate.PREFIXED_RC_DEV,
        VersionTemplate.PREFIXED_RC,
        VersionTemplate.PREFIXED_DEV,
        VersionTemplate.PREFIXED_RELEASE,
        VersionTemplate.RC_DEV,
        VersionTemplate.RC,
        VersionTemplate.DEV,
        VersionTemplate.RELEASE,
    )
)

#: Extraction order: most informative type first, prefixed before unprefixed.
EXTRACT_ORDER: Tuple[VersionTemplate, ...] = (
    VersionTemplate.PREFIXED_RC_DEV,
    VersionTemplate.RC_DEV,
    VersionTemplate.PREFIXED_DEV,
    VersionTemplate.DEV,
    VersionTemplate.PREFIXED_RC,
    VersionTemplate.RC,
    VersionTemplate.PREFIXED_RELEASE,
    VersionTemplate.RELEASE,
)


def _extract_expression(template: VersionTemplate) -> str:
    number = f"(?:{VERSION_NUMBER_PATTERN})"
    if template.has_prefix:
        expression = rf"(?<![0-9A-Za-z]){DEFAULT_PREFIX}"
    else:
        expression = r"(?<![0-9A-Za-z.])"
    expression += rf"{number}\.{number}\.{number}"
    if template.has_suffix:
        expression += f"-{RC_SUFFIX}"
    if template.has_hash:
        expression += f"-{HASH_PATTERN}"

    if template.has_suffix or template.has_hash:
        expression += r"(?![0-9A-Za-z])"
    else:
        # Do not cut a number short or take the head of a four-part version
        expression += r"(?![0-9A-Za-z]|\.[0-9])"
    return expression


EXTRACT_RULES: Tuple[GrammarRule, ...] = tuple(
    GrammarRule(template=template, pattern=compile_pattern(_extract_expression(template)))
    for template in EXTRACT_ORDER
)


# ---------------------------------------------------------------------------
# Component validation helpers
# ---------------------------------------------------------------------------


def is_valid_number(value: object) -> bool:
    """Return True for a version number of one to three digits (0-999)."""
    if isinstance(value, bool):
        return False
    if isinstance(value, int):
        value = str(value)
    return regex_fullmatch(value, VERSION_NUMBER_PATTERN) is not None


def is_valid_hash(value: object) -> bool:
    """Return True for a 7-40 character lowercase hex hash."""
    return regex_fullmatch(value, HASH_PATTERN) is not None


def is_valid_suffix(value: object) -> bool:
    """Return True for ``rc`` or an unambiguous custom qualifier.

    A qualifier whose last hyphen-separated segment looks like a hash would
    read back as ``suffix-HASH`` (or as a bare hash), so it is rejected.
    """
    if regex_fullmatch(value, SUFFIX_PATTERN) is None:
        return False
    last_segment = str(value).rsplit("-", 1)[-1]
    return not is_valid_hash(last_segment)


class VersionEngine:
    """Parse, validate, compose and extract version identifiers.

    The engine holds no per-call state; the only configuration is the
    default prefix presence used by :meth:`compose` when the caller does not
    decide.

    Args:
        include_prefix: Compose with the ``v`` prefix unless told otherwise.
        default_format: Template used by :meth:`compose` when neither
            ``format`` nor ``type`` is supplied.
    """

    def __init__(
        self,
        *,
        include_prefix: bool = DEFAULT_INCLUDE_PREFIX,
        default_format: Optional[TemplateLike] = None,
    ) -> None:
        self.include_prefix = include_prefix
        self._default_format = (
            self.resolve_template(default_format) if default_format else None
        )

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------

    @staticmethod
    def resolve_template(value: TemplateLike) -> VersionTemplate:
        """Return the :class:`VersionTemplate` named by ``value``.

        Raises:
            InvalidFormatError: ``value`` names none of the eight templates.
        """
        if isinstance(value, VersionTemplate):
            return value
        try:
            return VersionTemplate(value)
        except ValueError:
            raise InvalidFormatError(
                f"Unknown version format: {value}",
                identifier=str(value),
                details={"supported": ", ".join(VERSION_FORMATS)},
            ) from None

    @staticmethod
    def resolve_type(value: TypeLike) -> VersionType:
        """Return the :class:`VersionType` named by ``value``.

        Raises:
            InvalidFormatError: ``value`` names no known type.
        """
        if isinstance(value, VersionType):
            return value
        try:
            return VersionType(value)
        except ValueError:
            raise InvalidFormatError(
                f"Unknown version type: {value}",
                identifier=str(value),
                details={"supported": ", ".join(t.value for t in VersionType)},
            ) from None

    @staticmethod
    def list_formats(
        *,
        prefix_only: bool = False,
        prefix_exclude: bool = False,
    ) -> List[VersionTemplate]:
        """Return the supported templates in documentation order.

        Args:
            prefix_only: Keep only templates with the ``v`` prefix.
            prefix_exclude: Keep only templates without the prefix.
        """
        templates = [VersionTemplate(name) for name in VERSION_FORMATS]
        if prefix_only:
            templates = [t for t in templates if t.has_prefix]
        if prefix_exclude:
            templates = [t for t in templates if not t.has_prefix]
        return templates

    @staticmethod
    def list_types() -> List[VersionType]:
        return list(VersionType)

    def default_format(self) -> VersionTemplate:
        if self._default_format is not None:
            return self._default_format
        return VersionTemplate(DEFAULT_VERSION_FORMAT)

    @staticmethod
    def default_prefix() -> str:
        return DEFAULT_PREFIX

    @staticmethod
    def default_suffix() -> str:
        """The suffix the ``-rc`` templates carry."""
        return RC_SUFFIX

    # ------------------------------------------------------------------
    # Parse
    # ------------------------------------------------------------------

    def parse(self, value: str) -> VersionComponents:
        """Decompose a version identifier.

        Rules in :data:`PARSE_RULES` are tried in order and the first
        structural match with an acceptable suffix wins.

        Args:
            value: Version string, e.g. ``"v3.14.2-rc-abc123f"``.

        Returns:
            The parsed :class:`VersionComponents`.

        Raises:
            InvalidFormatError: No rule matches.
        """
        for rule in PARSE_RULES:
            match = regex_fullmatch(value, rule.pattern)
            if match is None:
                continue

            groups = match.groupdict()
            suffix = groups.get("suffix")
            if suffix is not None and not is_valid_suffix(suffix):
                logger.debug(
                    "Rule %s rejected %r: ambiguous suffix %r",
                    rule.template.value,
                    value,
                    suffix,
                )
                continue

            components = VersionComponents(
                major=int(groups["major"]),
                minor=int(groups["minor"]),
                patch=int(groups["patch"]),
                number_text=(groups["major"], groups["minor"], groups["patch"]),
                prefix=groups["prefix"],
                suffix=suffix,
                hash=groups.get("hash"),
            )
            logger.debug(
                "Parsed %r with rule %s -> type=%s",
                value,
                rule.template.value,
                components.type.value,
            )
            return components

        raise InvalidFormatError(
            f"Invalid version format: {value}",
            identifier=value if isinstance(value, str) else repr(value),
        )

    def detect_type(self, value: str) -> VersionType:
        return self.parse(value).type

    def detect_format(self, value: str) -> Optional[VersionTemplate]:
        """Return the template ``value`` is written in (``None`` for custom suffixes)."""
        return self.parse(value).template

    # ------------------------------------------------------------------
    # Validate
    # ------------------------------------------------------------------

    def check(
        self,
        value: str,
        *,
        format: Optional[TemplateLike] = None,
        type: Optional[TypeLike] = None,
        is_release: Optional[bool] = None,
        is_rc: Optional[bool] = None,
        is_dev: Optional[bool] = None,
        is_rc_dev: Optional[bool] = None,
        is_custom: Optional[bool] = None,
        has_prefix: Optional[bool] = None,
        has_suffix: Optional[bool] = None,
        has_hash: Optional[bool] = None,
    ) -> VersionComponents:
        """Parse ``value`` and enforce every requested constraint.

        ``format`` demands exact template equality: ``3.14.2`` is not a
        ``vX.YY.Z`` version even though it parses. Boolean flags are
        independent predicates; ``None`` leaves a predicate unchecked.

        Returns:
            The parsed components when all constraints hold.

        Raises:
            InvalidFormatError: ``value`` does not parse, or ``format``/``type``
                name an unknown template/type.
            FormatMismatchError: A constraint does not hold.
        """
        expected_template = self.resolve_template(format) if format else None
        expected_type = self.resolve_type(type) if type else None

        components = self.parse(value)

        if expected_template is not None and components.template != expected_template:
            actual = components.template
            raise FormatMismatchError(
                f"Version does not match format {expected_template.value}",
                identifier=value,
                expected=expected_template.value,
                actual=actual.value if actual else "custom",
            )

        if expected_type is not None and components.type != expected_type:
            raise FormatMismatchError(
                f"Version is not of type {expected_type.value}",
                identifier=value,
                expected=expected_type.value,
                actual=components.type.value,
            )

        predicates: Dict[str, Optional[bool]] = {
            "is_release": is_release,
            "is_rc": is_rc,
            "is_dev": is_dev,
            "is_rc_dev": is_rc_dev,
            "is_custom": is_custom,
            "has_prefix": has_prefix,
            "has_suffix": has_suffix,
            "has_hash": has_hash,
        }
        for name, wanted in predicates.items():
            if wanted is None:
                continue
            actual_flag = getattr(components, name)
            if actual_flag != wanted:
                raise FormatMismatchError(
                    f"Version check {name} failed",
                    identifier=value,
                    expected=f"{name}={str(wanted).lower()}",
                    actual=f"{name}={str(actual_flag).lower()}",
                )

        return components

    def validate(self, value: str, **options: Any) -> bool:
        """Return True if ``value`` parses and satisfies ``options``.

        Accepts the same keyword options as :meth:`check`.

        Raises:
            InvalidFormatError: ``format`` or ``type`` names an unknown
                template or type (a caller error, not a validation result).
        """
        if options.get("format"):
            self.resolve_template(options["format"])
        if options.get("type"):
            self.resolve_type(options["type"])

        try:
            self.check(value, **options)
        except (InvalidFormatError, FormatMismatchError) as exc:
            logger.debug("Validation of %r failed: %s", value, exc)
            return False
        return True

    # ------------------------------------------------------------------
    # Compose
    # ------------------------------------------------------------------

    def compose(
        self,
        major: Optional[NumberLike] = None,
        minor: Optional[NumberLike] = None,
        patch: Optional[NumberLike] = None,
        *,
        suffix: Optional[str] = None,
        hash: Optional[str] = None,
        include_prefix: Optional[bool] = None,
        format: Optional[TemplateLike] = None,
        type: Optional[TypeLike] = None,
    ) -> str:
        """Build a version string from components.

        Without ``format``, ``suffix`` and ``hash`` are mutually exclusive and
        the prefix follows ``include_prefix`` (engine default when ``None``).
        With ``format``, the template is authoritative for the prefix and
        the supplied fields must fit it. ``type`` picks the template for a
        version type when no ``format`` is given.

        Returns:
            The composed version string.

        Raises:
            MissingRequiredFieldError: A number, or a hash a template needs,
                is missing.
            MutuallyExclusiveError: Both ``suffix`` and ``hash`` were given
                without an ``rc-HASH`` template.
            FormatMismatchError: The fields do not fit ``format``/``type``.
            InvalidFormatError: A component is malformed or ``format``/``type``
                is unknown.
        """
        numbers, number_text = self._check_numbers(major=major, minor=minor, patch=patch)
        suffix = suffix or None
        hash = hash or None

        if hash is not None and not is_valid_hash(hash):
            raise InvalidFormatError(
                f"Invalid hash: {hash} (must be 7-40 lowercase hex characters)",
                identifier=hash,
            )
        if suffix is not None and not is_valid_suffix(suffix):
            raise InvalidFormatError(f"Invalid suffix: {suffix}", identifier=suffix)

        template = self._select_template(format, type, include_prefix, suffix)

        if suffix and hash and not (template and template.has_suffix and template.has_hash):
            raise MutuallyExclusiveError(
                "Cannot use both suffix and hash (mutually exclusive)",
                fields=("suffix", "hash"),
            )

        if template is None:
            prefixed = self.include_prefix if include_prefix is None else include_prefix
            components = VersionComponents(
                *numbers,
                prefix=DEFAULT_PREFIX if prefixed else "",
                suffix=suffix,
                hash=hash,
                number_text=number_text,
            )
        else:
            if include_prefix is not None and include_prefix != template.has_prefix:
                logger.debug(
                    "Format %s overrides include_prefix=%s",
                    template.value,
                    include_prefix,
                )
            components = self._fit_template(template, numbers, number_text, suffix, hash)

        result = components.to_string()
        logger.debug("Composed version: %s", result)
        return result

    def compose_from(self, components: VersionComponents) -> str:
        """Serialize ``components``; the exact inverse of :meth:`parse`.

        Raises:
            InvalidFormatError: A field is outside the grammar.
        """
        major, minor, patch = components.number_text or (
            components.major,
            components.minor,
            components.patch,
        )
        self._check_numbers(major=major, minor=minor, patch=patch)
        if components.prefix not in ("", DEFAULT_PREFIX):
            raise InvalidFormatError(
                f"Invalid prefix: {components.prefix}",
                identifier=components.prefix,
            )
        if components.suffix is not None and not is_valid_suffix(components.suffix):
            raise InvalidFormatError(
                f"Invalid suffix: {components.suffix}",
                identifier=components.suffix,
            )
        if components.hash is not None and not is_valid_hash(components.hash):
            raise InvalidFormatError(
                f"Invalid hash: {components.hash}",
                identifier=components.hash,
            )
        return components.to_string()

    @staticmethod
    def _check_numbers(
        **numbers: Optional[NumberLike],
    ) -> Tuple[Tuple[int, int, int], Tuple[str, str, str]]:
        values: List[int] = []
        texts: List[str] = []
        for name, value in numbers.items():
            if value is None or value == "":
                raise MissingRequiredFieldError(
                    f"Missing required component: {name}",
                    field=name,
                )
            if not is_valid_number(value):
                raise InvalidFormatError(
                    f"Invalid {name} version: {value} (expected 1-3 digits)",
                    identifier=str(value),
                )
            values.append(int(value))
            texts.append(str(value))
        return (values[0], values[1], values[2]), (texts[0], texts[1], texts[2])

    def _select_template(
        self,
        format: Optional[TemplateLike],
        type: Optional[TypeLike],
        include_prefix: Optional[bool],
        suffix: Optional[str],
    ) -> Optional[VersionTemplate]:
        if format:
            return self.resolve_template(format)

        prefixed = self.include_prefix if include_prefix is None else include_prefix

        if type:
            version_type = self.resolve_type(type)
            if version_type is VersionType.CUSTOM:
                if not suffix or suffix == RC_SUFFIX:
                    raise FormatMismatchError(
                        "Type custom requires a custom suffix",
                        expected=VersionType.CUSTOM.value,
                        actual=suffix or "none",
                    )
                return None
            if version_type is VersionType.DEV and suffix:
                raise FormatMismatchError(
                    f"Type dev takes no suffix (got '{suffix}'); "
                    "compose a custom-suffix dev version with compose_from",
                    expected=VersionType.DEV.value,
                    actual=suffix,
                )
            return VersionTemplate.from_parts(
                prefix=prefixed,
                rc=version_type in (VersionType.RC, VersionType.RC_DEV),
                hash=version_type in (VersionType.DEV, VersionType.RC_DEV),
            )

        if self._default_format is not None and include_prefix is None:
            return self._default_format

        return None

    @staticmethod
    def _fit_template(
        template: VersionTemplate,
        numbers: Tuple[int, int, int],
        number_text: Tuple[str, str, str],
        suffix: Optional[str],
        hash: Optional[str],
    ) -> VersionComponents:
        if template.has_suffix:
            if suffix is not None and suffix != RC_SUFFIX:
                raise FormatMismatchError(
                    f"Format {template.value} only accepts the '{RC_SUFFIX}' suffix",
                    expected=RC_SUFFIX,
                    actual=suffix,
                )
            suffix = RC_SUFFIX
        elif suffix is not None:
            raise FormatMismatchError(
                f"Format {template.value} does not take a suffix",
                expected=template.value,
                actual=f"suffix={suffix}",
            )

        if template.has_hash:
            if hash is None:
                raise MissingRequiredFieldError(
                    f"Format {template.value} requires a hash",
                    field="hash",
                )
        elif hash is not None:
            raise FormatMismatchError(
                f"Format {template.value} does not take a hash",
                expected=template.value,
                actual=f"hash={hash}",
            )

        return VersionComponents(
            *numbers,
            prefix=DEFAULT_PREFIX if template.has_prefix else "",
            suffix=suffix,
            hash=hash,
            number_text=number_text,
        )

    # ------------------------------------------------------------------
    # Extract
    # ------------------------------------------------------------------

    def extract(self, text: str) -> str:
        """Find a version identifier embedded in free-form text.

        Rules in :data:`EXTRACT_RULES` are tried in priority order; the
        leftmost match of the first rule that matches anywhere is returned,
        so ``v3.14.2-rc-abc123f`` wins over its ``v3.14.2`` head.

        Raises:
            NotFoundError: No supported version occurs in ``text``.
        """
        for rule in EXTRACT_RULES:
            match = regex_search(text, rule.pattern)
            if match is None:
                continue
            found = match.group(0)
            logger.debug("Extracted %r with rule %s", found, rule.template.value)
            return found

        raise NotFoundError(
            "No version found in text",
            identifier=text if isinstance(text, str) else repr(text),
        )

    def extract_components(self, text: str) -> VersionComponents:
        """Extract and parse in one step."""
        return self.parse(self.extract(text))

