"""Version command group for artiformat.

Wraps :class:`~artiformat.core.version_engine.VersionEngine` for shell use.
Every command writes its result to stdout as plain text and reports
failure through the exit status, so pipelines can do::

    $ eval "$(artiformat version parse v3.14.2-rc-abc123f)"
    $ echo "$ARTIFORMAT_VERSION_PARSED_SUFFIX"
    rc

    $ artiformat version validate "$TAG" --format vX.YY.Z && echo release

    $ artiformat version compose --major 3 --minor 14 --patch 2 --format X.YY.Z-rc
    3.14.2-rc

    $ echo "opendaq-v3.14.2-rc-abc123f-ubuntu22.04-arm64.deb" | artiformat version extract -
    v3.14.2-rc-abc123f
"""

from __future__ import annotations

import os
import sys
from typing import Any, Dict, Mapping, Optional

import click

from artiformat.config import ArtiformatConfig
from artiformat.constants import VERSION_FORMATS
from artiformat.context import ArtiformatContext, pass_context
from artiformat.core.version_engine import VersionEngine
from artiformat.exceptions import ArtiformatError, FormatMismatchError, InvalidFormatError
from artiformat.models.version import VersionComponents, VersionType
from artiformat.commands import OUTPUT_FORMATS, echo_json, fail, read_text_argument
from artiformat.utils import colorize_version_type, get_logger, print_table

logger = get_logger("commands.version")

#: Fields the ``parse`` flags can select, in output order.
PARSE_FIELDS = ("major", "minor", "patch", "prefix", "suffix", "hash", "type", "format")

#: Variable name prefix of the ``KEY=VALUE`` lines printed by ``parse``.
PARSED_ENV_PREFIX = "ARTIFORMAT_VERSION_PARSED_"

#: Variable name prefix read by ``compose --from-env``.
COMPOSED_ENV_PREFIX = "ARTIFORMAT_VERSION_COMPOSED_"

VERSION_TYPE_NAMES = tuple(t.value for t in VersionType)


def _engine(ctx: ArtiformatContext) -> VersionEngine:
    config = ctx.config or ArtiformatConfig()
    return VersionEngine(
        include_prefix=config.include_prefix,
        default_format=config.default_format,
    )


def _text_value(value: Any) -> str:
    return "" if value is None else str(value)


@click.group(name="version")
def version() -> None:
    """Parse, validate, compose and extract version identifiers.

    \b
    Supported formats:
      X.YY.Z  vX.YY.Z  X.YY.Z-rc  vX.YY.Z-rc
      X.YY.Z-HASH  vX.YY.Z-HASH  X.YY.Z-rc-HASH  vX.YY.Z-rc-HASH
    """


# ---------------------------------------------------------------------------
# parse
# ---------------------------------------------------------------------------


@version.command(name="parse")
@click.argument("value", metavar="VERSION")
@click.option("--major", "show_major", is_flag=True, help="Print the major number.")
@click.option("--minor", "show_minor", is_flag=True, help="Print the minor number.")
@click.option("--patch", "show_patch", is_flag=True, help="Print the patch number.")
@click.option("--suffix", "show_suffix", is_flag=True, help="Print the suffix.")
@click.option("--hash", "show_hash", is_flag=True, help="Print the hash.")
@click.option("--prefix", "show_prefix", is_flag=True, help="Print the prefix.")
@click.option("--type", "show_type", is_flag=True, help="Print the version type.")
@click.option("--format-name", "show_format", is_flag=True, help="Print the format template.")
@click.option(
    "--output",
    "-o",
    type=click.Choice(OUTPUT_FORMATS, case_sensitive=False),
    default="text",
    help="Output format.",
)
@pass_context
def parse_command(
    ctx: ArtiformatContext,
    value: str,
    output: str,
    **flags: bool,
) -> None:
    """Parse VERSION into its components.

    \b
    Text output:
      no flags        every field as ARTIFORMAT_VERSION_PARSED_<FIELD>=value
      one flag        the bare value of that field
      several flags   the requested fields as KEY=value lines
    Absent fields are printed empty, so the output can be eval'd.
    """
    try:
        parsed = _engine(ctx).parse(value)
    except ArtiformatError as exc:
        fail(ctx, exc)

    data = parsed.to_dict()
    components = [name for name in PARSE_FIELDS if flags[f"show_{name}"]]

    if output == "json":
        if components:
            data = {name: data[name] for name in components}
        echo_json(data)
        return

    if output == "table":
        _display_components_table(parsed)
        return

    text = _text_fields(parsed)

    if len(components) == 1:
        click.echo(text[components[0]])
        return

    for name in components or PARSE_FIELDS:
        click.echo(f"{PARSED_ENV_PREFIX}{name.upper()}={text[name]}")


def _text_fields(parsed: VersionComponents) -> Dict[str, str]:
    """Field values as printed, keeping the digits of each number as written."""
    data = parsed.to_dict()
    major, minor, patch = parsed.number_text or (
        str(parsed.major),
        str(parsed.minor),
        str(parsed.patch),
    )
    text = {name: _text_value(data[name]) for name in PARSE_FIELDS}
    text.update(major=major, minor=minor, patch=patch)
    return text


def _display_components_table(parsed: VersionComponents) -> None:
    data = parsed.to_dict()
    row: Dict[str, Any] = {
        "Version": data["version"],
        "Prefix": data["prefix"],
        "Major": data["major"],
        "Minor": data["minor"],
        "Patch": data["patch"],
        "Suffix": data["suffix"],
        "Hash": data["hash"],
        "Type": colorize_version_type(data["type"]),
        "Format": data["format"] or "custom",
    }
    print_table(
        [row],
        title="Version Components",
        column_styles={"Version": {"style": "bold cyan", "no_wrap": True}},
    )


# ---------------------------------------------------------------------------
# validate
# ---------------------------------------------------------------------------


@version.command(name="validate")
@click.argument("value", metavar="VERSION")
@click.option(
    "--format",
    "format_name",
    type=click.Choice(VERSION_FORMATS),
    help="Require an exact format template.",
)
@click.option(
    "--type",
    "type_name",
    type=click.Choice(VERSION_TYPE_NAMES),
    help="Require a version type.",
)
@click.option("--is-release", is_flag=True, help="Require a release (no suffix, no hash).")
@click.option("--is-rc", is_flag=True, help="Require a release candidate (rc suffix, no hash).")
@click.option("--is-dev", is_flag=True, help="Require a development version (hash, no rc suffix).")
@click.option("--is-rc-dev", is_flag=True, help="Require the rc suffix and a hash.")
@click.option("--is-custom", is_flag=True, help="Require a custom suffix without a hash.")
@click.option("--has-prefix", is_flag=True, help="Require the v prefix.")
@click.option("--has-suffix", is_flag=True, help="Require a suffix.")
@click.option("--has-hash", is_flag=True, help="Require a hash.")
@pass_context
def validate_command(
    ctx: ArtiformatContext,
    value: str,
    format_name: Optional[str],
    type_name: Optional[str],
    is_release: bool,
    is_rc: bool,
    is_dev: bool,
    is_rc_dev: bool,
    is_custom: bool,
    has_prefix: bool,
    has_suffix: bool,
    has_hash: bool,
) -> None:
    """Check VERSION against the requested constraints.

    Exits 0 when VERSION is valid and every given constraint holds,
    1 otherwise. Nothing is printed.
    """
    try:
        _engine(ctx).check(
            value,
            format=format_name,
            type=type_name,
            is_release=is_release or None,
            is_rc=is_rc or None,
            is_dev=is_dev or None,
            is_rc_dev=is_rc_dev or None,
            is_custom=is_custom or None,
            has_prefix=has_prefix or None,
            has_suffix=has_suffix or None,
            has_hash=has_hash or None,
        )
    except (InvalidFormatError, FormatMismatchError) as exc:
        logger.info("%s", exc)
        sys.exit(1)

    logger.info("Version %s is valid", value)


# ---------------------------------------------------------------------------
# compose
# ---------------------------------------------------------------------------


@version.command(name="compose")
@click.option("--major", help="Major number (0-999).")
@click.option("--minor", help="Minor number (0-999).")
@click.option("--patch", help="Patch number (0-999).")
@click.option("--suffix", help="Release qualifier, e.g. rc.")
@click.option("--hash", "hash_", help="Source-revision hash (7-40 lowercase hex).")
@click.option("--exclude-prefix", is_flag=True, help="Omit the v prefix.")
@click.option(
    "--format",
    "format_name",
    type=click.Choice(VERSION_FORMATS),
    help="Compose in this format template.",
)
@click.option(
    "--type",
    "type_name",
    type=click.Choice(VERSION_TYPE_NAMES),
    help="Compose a version of this type.",
)
@click.option(
    "--from-env",
    is_flag=True,
    help=f"Fill unset fields from {COMPOSED_ENV_PREFIX}* variables.",
)
@pass_context
def compose_command(
    ctx: ArtiformatContext,
    major: Optional[str],
    minor: Optional[str],
    patch: Optional[str],
    suffix: Optional[str],
    hash_: Optional[str],
    exclude_prefix: bool,
    format_name: Optional[str],
    type_name: Optional[str],
    from_env: bool,
) -> None:
    """Compose a version string from components.

    With --from-env, MAJOR, MINOR, PATCH, PREFIX, SUFFIX, HASH, FORMAT and
    TYPE are read from ARTIFORMAT_VERSION_COMPOSED_<FIELD>; options given on
    the command line take precedence. PREFIX must be "v" or empty.

    \b
    Examples:
      artiformat version compose --major 1 --minor 2 --patch 3
      artiformat version compose --major 1 --minor 2 --patch 3 --suffix rc
      artiformat version compose --major 1 --minor 2 --patch 3 \\
          --hash abc1234 --format X.YY.Z-rc-HASH
      ARTIFORMAT_VERSION_COMPOSED_MAJOR=1 ... artiformat version compose --from-env
    """
    include_prefix: Optional[bool] = False if exclude_prefix else None

    try:
        if from_env:
            env = _composed_from_env(os.environ)
            major = major or env.get("major")
            minor = minor or env.get("minor")
            patch = patch or env.get("patch")
            suffix = suffix or env.get("suffix")
            hash_ = hash_ or env.get("hash")
            format_name = format_name or env.get("format")
            type_name = type_name or env.get("type")
            if include_prefix is None and "prefix" in env:
                include_prefix = _prefix_flag(env["prefix"])

        result = _engine(ctx).compose(
            major,
            minor,
            patch,
            suffix=suffix,
            hash=hash_,
            include_prefix=include_prefix,
            format=format_name,
            type=type_name,
        )
    except ArtiformatError as exc:
        fail(ctx, exc)

    click.echo(result)


def _composed_from_env(environ: Mapping[str, str]) -> Dict[str, str]:
    """Collect the ``ARTIFORMAT_VERSION_COMPOSED_*`` variables that are set.

    Empty values count as unset, except ``PREFIX`` where empty means no prefix.
    """
    fields = ("major", "minor", "patch", "prefix", "suffix", "hash", "format", "type")
    values: Dict[str, str] = {}
    for name in fields:
        value = environ.get(f"{COMPOSED_ENV_PREFIX}{name.upper()}")
        if value is None or (value == "" and name != "prefix"):
            continue
        values[name] = value
    logger.debug("Compose fields from environment: %s", values)
    return values


def _prefix_flag(prefix: str) -> bool:
    if prefix not in ("", VersionEngine.default_prefix()):
        raise InvalidFormatError(
            f"Invalid prefix: {prefix} (expected '{VersionEngine.default_prefix()}' or empty)",
            identifier=prefix,
        )
    return bool(prefix)


# ---------------------------------------------------------------------------
# extract
# ---------------------------------------------------------------------------


@version.command(name="extract")
@click.argument("text")
@pass_context
def extract_command(ctx: ArtiformatContext, text: str) -> None:
    """Print the first version identifier found in TEXT.

    Use "-" as TEXT to read from standard input.
    """
    try:
        result = _engine(ctx).extract(read_text_argument(text))
    except ArtiformatError as exc:
        fail(ctx, exc)

    click.echo(result)


# ---------------------------------------------------------------------------
# default
# ---------------------------------------------------------------------------


@version.command(name="default")
@click.argument("setting", type=click.Choice(("format", "prefix", "suffix")))
@pass_context
def default_command(ctx: ArtiformatContext, setting: str) -> None:
    """Print the default format, prefix or suffix.

    The default format reflects ``default_format`` from the configuration.
    """
    if setting == "format":
        click.echo(_engine(ctx).default_format().value)
    elif setting == "prefix":
        click.echo(VersionEngine.default_prefix())
    else:
        click.echo(VersionEngine.default_suffix())


# ---------------------------------------------------------------------------
# list-formats / list-types
# ---------------------------------------------------------------------------


@version.command(name="list-formats")
@click.option("--prefix-only", is_flag=True, help="Only formats with the v prefix.")
@click.option("--prefix-exclude", is_flag=True, help="Only formats without the v prefix.")
@click.option("--details", is_flag=True, help="Show descriptions.")
def list_formats_command(prefix_only: bool, prefix_exclude: bool, details: bool) -> None:
    """List the supported format templates."""
    if prefix_only and prefix_exclude:
        raise click.UsageError("--prefix-only and --prefix-exclude are mutually exclusive")

    templates = VersionEngine.list_formats(
        prefix_only=prefix_only,
        prefix_exclude=prefix_exclude,
    )

    if not details:
        for template in templates:
            click.echo(template.value)
        return

    print_table(
        [
            {
                "Format": template.value,
                "Type": colorize_version_type(template.version_type.value),
                "Description": template.description,
            }
            for template in templates
        ],
        title="Version Formats",
        column_styles={"Format": {"style": "bold cyan", "no_wrap": True}},
    )


@version.command(name="list-types")
@click.option("--details", is_flag=True, help="Show descriptions.")
def list_types_command(details: bool) -> None:
    """List the version types."""
    types = VersionEngine.list_types()

    if not details:
        for version_type in types:
            click.echo(version_type.value)
        return

    print_table(
        [
            {
                "Type": colorize_version_type(version_type.value),
                "Description": version_type.description,
            }
            for version_type in types
        ],
        title="Version Types",
    )
