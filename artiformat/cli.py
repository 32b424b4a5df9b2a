"""
Command-line interface for artiformat.

This module provides the main CLI entry point and handles global options,
configuration loading, and command registration.
"""

from __future__ import annotations

import os
import sys
import logging
from pathlib import Path
from typing import Optional

import click

from artiformat.config import load_config
from artiformat.__version__ import __version__
from artiformat.context import ArtiformatContext
from artiformat.exceptions import ArtiformatError, ConfigError
from artiformat.utils.console import print_error, print_warning, reconfigure_console
from artiformat.utils.logger import get_logger, level_for_verbosity, setup_logging

logger = get_logger("cli")


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.option(
    "--config",
    "-c",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Path to configuration file.",
    envvar="ARTIFORMAT_CONFIG",
)
@click.option(
    "--verbose",
    "-v",
    count=True,
    help="Increase verbosity (can be repeated: -v, -vv).",
)
@click.option(
    "--quiet",
    "-q",
    is_flag=True,
    help="Suppress error messages; rely on the exit status.",
)
@click.option(
    "--color/--no-color",
    default=True,
    help="Enable or disable colored output.",
    envvar="ARTIFORMAT_COLOR",
)
@click.version_option(
    version=__version__,
    prog_name="artiformat",
    message="%(prog)s %(version)s",
)
@click.pass_context
def cli(
    ctx: click.Context,
    config: Optional[Path],
    verbose: int,
    quiet: bool,
    color: bool,
) -> None:
    """artiformat: parse, validate and compose build artifact identifiers.

    \b
    Available command groups:
      artiformat version    Version identifiers (v3.14.2-rc-abc123f)
      artiformat platform   Platform aliases (ubuntu22.04-arm64, win64)

    \b
    Examples:
      artiformat version parse v3.14.2-rc
      artiformat platform list --pattern 'ubuntu*'
      artiformat -vv version extract "build-v1.2.3.tar.gz"

    Use ``artiformat COMMAND --help`` for command-specific options.
    """
    _configure_logging(verbose)

    # Respect NO_COLOR for downstream libraries
    if color:
        os.environ.pop("NO_COLOR", None)
    else:
        os.environ["NO_COLOR"] = "1"
    reconfigure_console()

    try:
        loaded_config = load_config(config)
    except ConfigError as exc:
        if not quiet:
            print_error(str(exc))
        raise SystemExit(1) from exc

    artiformat_ctx = ArtiformatContext()
    artiformat_ctx.config_path = config or loaded_config.source_path
    artiformat_ctx.color = color
    artiformat_ctx.verbose = verbose
    artiformat_ctx.quiet = quiet
    artiformat_ctx.config = loaded_config
    ctx.obj = artiformat_ctx

    logger.debug("artiformat v%s", __version__)
    logger.debug("Config path: %s", artiformat_ctx.config_path)
    if loaded_config.source_path:
        logger.debug("Loaded configuration: %s", loaded_config.to_log_dict())
    logger.debug("Verbosity: %s | Quiet: %s | Color: %s", verbose, quiet, color)


def _configure_logging(verbose: int) -> None:
    """Configure logging level based on verbosity flags."""
    level = level_for_verbosity(verbose)
    setup_logging(level=level, verbose=verbose >= 2)
    logger.debug("Logging initialized at %s level", logging.getLevelName(level))


# Register CLI subcommands
try:
    from artiformat.commands.version import version
    from artiformat.commands.platform import platform

    cli.add_command(version)
    cli.add_command(platform)

except ImportError as exc:
    sys.stderr.write(f"FATAL: Failed to import CLI commands: {exc}\n")
    sys.exit(1)


def main() -> int:
    """Main entry point for the artiformat CLI.

    Returns:
        Exit code:
            0   Success
            1   Identifier error, failed validation, or unhandled error
            2   Usage error (Click)
            130 Interrupted by user (Ctrl+C)
    """
    try:
        cli(standalone_mode=False)
        return 0

    except click.ClickException as exc:
        exc.show()
        return exc.exit_code

    except click.exceptions.Exit as exc:
        return exc.exit_code

    except SystemExit as exc:
        return exc.code if isinstance(exc.code, int) else 1

    except ArtiformatError as exc:
        print_error(str(exc))
        logger.debug(
            "ArtiformatError details: %s",
            exc.details or "<none>",
            exc_info=True,
        )
        return 1

    except (KeyboardInterrupt, click.Abort):
        print_warning("\nOperation cancelled by user")
        return 130

    except Exception as exc:
        print_error(f"Unexpected error: {exc}")
        logger.exception("Unhandled exception in CLI")
        return 1


if __name__ == "__main__":
    sys.exit(main())
