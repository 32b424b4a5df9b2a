"""
Executable module for artiformat.

Running:
    python -m artiformat

is equivalent to:
    artiformat

This module simply forwards execution to the CLI entrypoint defined in
`artiformat.cli`.
"""

from __future__ import annotations

import sys


def _print_startup_error(exc: ImportError) -> None:
    """Explain a failed CLI import on stderr."""
    sys.stderr.write("artiformat CLI could not be started.\n")
    sys.stderr.write(f"Python version : {sys.version}\n")
    try:
        from artiformat.__version__ import __version__

        sys.stderr.write(f"artiformat version: {__version__}\n")
    except ImportError:
        sys.stderr.write("artiformat version: <unknown>\n")
    sys.stderr.write(f"ImportError: {exc}\n")


def main() -> int:
    """
    Main entrypoint when executing `python -m artiformat`.

    Returns:
        Exit code returned by the CLI.
    """
    try:
        # Import lazily so dependencies are only loaded during CLI use
        from artiformat.cli import main as cli_main
    except ImportError as exc:
        _print_startup_error(exc)
        return 1

    return cli_main()


if __name__ == "__main__":
    sys.exit(main())
