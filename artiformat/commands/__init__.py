"""
CLI subcommand groups for artiformat.

Each module defines one click group (``version``, ``platform``) whose
commands wrap an engine from :mod:`artiformat.core`. Results go to stdout
as plain text so they can be captured by shell pipelines; errors go
through the Rich console and map to exit status 1.
"""

from __future__ import annotations

import sys
import json
from typing import Any, NoReturn

import click

from artiformat.context import ArtiformatContext
from artiformat.exceptions import ArtiformatError
from artiformat.utils.console import print_error
from artiformat.utils.logger import get_logger

logger = get_logger("commands")

#: Output formats accepted by the ``parse`` commands.
OUTPUT_FORMATS = ("text", "json", "table")


def fail(ctx: ArtiformatContext, exc: ArtiformatError) -> NoReturn:
    """Report ``exc`` unless ``--quiet`` was given, then exit with status 1."""
    if not ctx.quiet:
        print_error(str(exc))
    logger.debug(
        "%s details: %s",
        type(exc).__name__,
        exc.details or "<none>",
    )
    sys.exit(1)


def echo_json(data: Any) -> None:
    click.echo(json.dumps(data, indent=2))


def read_text_argument(text: str) -> str:
    """Return ``text``, or everything on standard input when it is ``-``."""
    if text != "-":
        return text
    return click.get_text_stream("stdin").read()
