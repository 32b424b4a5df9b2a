"""Platform command group for artiformat.

Wraps :class:`~artiformat.core.platform_engine.PlatformEngine`::

    $ artiformat platform parse ubuntu22.04-arm64
    ubuntu 22.04 arm64

    $ artiformat platform validate debian11-x86_64 --is-linux && echo linux

    $ artiformat platform compose --os-name win --os-arch 64
    win64

    $ artiformat platform list --pattern 'macos*-arm64'
"""

from __future__ import annotations

import sys
from typing import Optional

import click

from artiformat.commands import OUTPUT_FORMATS, echo_json, fail, read_text_argument
from artiformat.context import ArtiformatContext, pass_context
from artiformat.core.platform_engine import PlatformEngine
from artiformat.exceptions import ArtiformatError
from artiformat.models.platform import PlatformType
from artiformat.utils import get_logger, print_table

logger = get_logger("commands.platform")

#: Fields the ``parse`` flags can select, in output order.
PARSE_FIELDS = ("os_name", "os_version", "os_arch")


@click.group(name="platform")
def platform() -> None:
    """Parse, validate, compose and list platform aliases.

    \b
    Alias forms:
      {os}{version}-{arch}   ubuntu22.04-arm64, debian12-x86_64, macos14-arm64
      win{arch}              win32, win64
    """


@platform.command(name="parse")
@click.argument("alias", metavar="PLATFORM")
@click.option("--os-name", "show_os_name", is_flag=True, help="Print the OS name.")
@click.option("--os-version", "show_os_version", is_flag=True, help="Print the OS version.")
@click.option("--os-arch", "show_os_arch", is_flag=True, help="Print the architecture.")
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
    alias: str,
    output: str,
    **flags: bool,
) -> None:
    """Parse PLATFORM into OS name, version and architecture.

    Text output is ``name version arch`` (``win arch`` for Windows).
    """
    try:
        parsed = PlatformEngine().parse(alias)
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
        print_table(
            [
                {
                    "Platform": data["platform"],
                    "OS": data["os_name"],
                    "Version": data["os_version"],
                    "Arch": data["os_arch"],
                }
            ],
            title="Platform Components",
            column_styles={"Platform": {"style": "bold cyan", "no_wrap": True}},
        )
        return

    if components:
        for name in components:
            click.echo(data[name] or "")
        return

    click.echo(" ".join(data[name] for name in PARSE_FIELDS if data[name]))


@platform.command(name="validate")
@click.argument("alias", metavar="PLATFORM")
@click.option("--is-unix", is_flag=True, help="Require Linux or macOS.")
@click.option("--is-linux", is_flag=True, help="Require Ubuntu or Debian.")
@click.option("--is-ubuntu", is_flag=True, help="Require Ubuntu.")
@click.option("--is-debian", is_flag=True, help="Require Debian.")
@click.option("--is-macos", is_flag=True, help="Require macOS.")
@click.option("--is-win", is_flag=True, help="Require Windows.")
@pass_context
def validate_command(
    ctx: ArtiformatContext,
    alias: str,
    **flags: bool,
) -> None:
    """Check that PLATFORM is supported and, optionally, of a given type.

    At most one type flag may be given. Exits 0 on success, 1 otherwise.
    Nothing is printed.
    """
    requested = [t.value for t in PlatformType if flags[f"is_{t.value}"]]
    if len(requested) > 1:
        raise click.UsageError("Only one of the --is-* type flags may be given")
    platform_type = requested[0] if requested else None

    if not PlatformEngine().validate(alias, type=platform_type):
        logger.info("Platform %s failed validation (type=%s)", alias, platform_type or "any")
        sys.exit(1)

    logger.info("Platform %s is valid", alias)


@platform.command(name="compose")
@click.option("--os-name", help="OS name: ubuntu, debian, macos or win.")
@click.option("--os-version", help="OS version (not used for win).")
@click.option("--os-arch", help="Architecture: arm64, x86_64, 32 or 64.")
@pass_context
def compose_command(
    ctx: ArtiformatContext,
    os_name: Optional[str],
    os_version: Optional[str],
    os_arch: Optional[str],
) -> None:
    """Compose a platform alias from its parts."""
    try:
        result = PlatformEngine().compose(
            os_name=os_name,
            os_arch=os_arch,
            os_version=os_version,
        )
    except ArtiformatError as exc:
        fail(ctx, exc)

    click.echo(result)


@platform.command(name="extract")
@click.argument("text")
@pass_context
def extract_command(ctx: ArtiformatContext, text: str) -> None:
    """Print the first supported platform alias found in TEXT.

    Use "-" as TEXT to read from standard input.
    """
    try:
        result = PlatformEngine().extract(read_text_argument(text))
    except ArtiformatError as exc:
        fail(ctx, exc)

    click.echo(result)


@platform.command(name="list")
@click.option("--pattern", help="Shell-style glob filter, e.g. 'ubuntu*'.")
@click.option(
    "--output",
    "-o",
    type=click.Choice(("text", "json"), case_sensitive=False),
    default="text",
    help="Output format.",
)
def list_command(pattern: Optional[str], output: str) -> None:
    """List all supported platform aliases."""
    aliases = PlatformEngine.list(pattern)

    if output == "json":
        echo_json(aliases)
        return

    for alias in aliases:
        click.echo(alias)
