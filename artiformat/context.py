"""
Shared context object for artiformat CLI commands.

This module defines the global Click context used to share configuration
and runtime options across CLI subcommands.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Optional

import click

if TYPE_CHECKING:
    from artiformat.config import ArtiformatConfig


class ArtiformatContext:
    """Global context object for artiformat CLI commands.

    An instance of this class is created once per CLI invocation and
    passed to commands using Click's context mechanism.

    Attributes:
        config_path: Path to the artiformat configuration file, if any.
        verbose: Verbosity level (0=WARNING, 1=INFO, 2+=DEBUG).
        color: Whether colored terminal output is enabled.
        quiet: Suppress error messages; only the exit status reports failure.
        config: Loaded configuration, or ``None`` before the group callback ran.
    """

    __slots__ = ("config_path", "verbose", "color", "quiet", "config")

    def __init__(self) -> None:
        self.config_path: Optional[Path] = None
        self.verbose: int = 0
        self.color: bool = True
        self.quiet: bool = False
        self.config: Optional[ArtiformatConfig] = None


#: Click decorator for injecting :class:`ArtiformatContext` into commands.
pass_context = click.make_pass_decorator(ArtiformatContext, ensure=True)
