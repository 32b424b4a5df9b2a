"""
Console output utilities for artiformat using Rich.

This module provides user-facing output helpers for CLI commands.
For diagnostic or debug output, use :mod:`artiformat.utils.logger`.

Guidelines:
- print_* functions: user-facing status messages (errors go to stderr)
- print_table: structured CLI output
- Machine-readable results (parsed fields, composed identifiers) are written
  with ``click.echo`` by the commands, never through this module
"""

from __future__ import annotations

import os
import sys
import threading
from typing import Any, Callable, Dict, List, Optional

from rich.markup import escape
from rich.table import Table
from rich.theme import Theme
from rich.console import Console

# ---------------------------------------------------------------------------
# Theme configuration
# ---------------------------------------------------------------------------

ARTIFORMAT_THEME = Theme(
    {
        "error": "bold red",
        "warning": "bold yellow",
        "info": "bold cyan",
        "dim": "dim",
        "highlight": "bold magenta",
    }
)

# ---------------------------------------------------------------------------
# Console lifecycle management
# ---------------------------------------------------------------------------

_console: Optional[Console] = None
_error_console: Optional[Console] = None
_console_lock = threading.Lock()


def _should_use_color() -> bool:
    """Return True if colored output should be enabled."""
    if os.environ.get("NO_COLOR"):
        return False
    if os.environ.get("CI"):
        return False
    try:
        return sys.stdout.isatty()
    except (AttributeError, OSError):
        return False


def _make_console(*, stderr: bool) -> Console:
    use_color = _should_use_color()
    return Console(
        theme=ARTIFORMAT_THEME,
        no_color=not use_color,
        highlight=use_color,
        stderr=stderr,
    )


def _get_console() -> Console:
    """Return a singleton Rich Console writing to stdout."""
    global _console

    if _console is None:
        with _console_lock:
            if _console is None:
                _console = _make_console(stderr=False)
    return _console


def _get_error_console() -> Console:
    """Return a singleton Rich Console writing to stderr."""
    global _error_console

    if _error_console is None:
        with _console_lock:
            if _error_console is None:
                _error_console = _make_console(stderr=True)
    return _error_console


def reconfigure_console() -> None:
    """Reset the global console instances.

    Useful if environment variables (e.g. NO_COLOR) change at runtime.
    """
    global _console, _error_console
    with _console_lock:
        _console = None
        _error_console = None


# ---------------------------------------------------------------------------
# Status message helpers
# ---------------------------------------------------------------------------


def print_error(message: str, *, prefix: str = "[ERROR]") -> None:
    """Print an error message to stderr."""
    _get_error_console().print(f"{prefix} {escape(message)}", style="error")


def print_warning(message: str, *, prefix: str = "[WARNING]") -> None:
    """Print a warning message to stderr."""
    _get_error_console().print(f"{prefix} {escape(message)}", style="warning")


# ---------------------------------------------------------------------------
# Structured output
# ---------------------------------------------------------------------------


def print_table(
    data: List[Dict[str, Any]],
    *,
    headers: Optional[List[str]] = None,
    title: Optional[str] = None,
    caption: Optional[str] = None,
    column_styles: Optional[Dict[str, Dict[str, Any]]] = None,
    row_styler: Optional[Callable[[Dict[str, Any]], Optional[str]]] = None,
    show_row_lines: bool = False,
) -> None:
    """Render structured data as a Rich table.

    Args:
        data: List of row dictionaries.
        headers: Column order. Defaults to keys of the first row.
        title: Optional table title.
        caption: Optional table caption.
        column_styles: Per-column style configuration.
        row_styler: Optional callback returning a row style.
        show_row_lines: Whether to draw horizontal lines between rows.
    """
    if not data:
        return

    if headers is None:
        headers = list(data[0].keys())

    table = Table(
        title=title,
        caption=caption,
        show_header=True,
        header_style="bold",
        show_lines=show_row_lines,
    )

    column_styles = column_styles or {}
    for header in headers:
        config = column_styles.get(header, {})
        table.add_column(
            header,
            style=config.get("style"),
            justify=config.get("justify", "default"),
            no_wrap=config.get("no_wrap", False),
            width=config.get("width"),
            overflow=config.get("overflow", "fold"),
        )

    for row in data:
        values = [_cell(row.get(h)) for h in headers]
        style = row_styler(row) if row_styler else None
        table.add_row(*values, style=style)

    _get_console().print(table)


def _cell(value: Any) -> str:
    if value is None or value == "":
        return "[dim]-[/dim]"
    return str(value)


def colorize_version_type(version_type: str) -> str:
    """Return a Rich-markup colored version type label.

    Args:
        version_type: Version classification string (``release``, ``rc``...).

    Returns:
        Rich markup string.
    """
    color_map = {
        "release": "green",
        "rc": "yellow",
        "dev": "cyan",
        "rc-dev": "magenta",
        "custom": "blue",
    }

    color = color_map.get(version_type.lower())
    return f"[{color}]{version_type}[/{color}]" if color else version_type
