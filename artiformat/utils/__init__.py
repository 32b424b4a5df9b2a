"""
Utility helpers for artiformat.

This package provides reusable utilities used across artiformat, including:

- Console output helpers (Rich-based)
- Logging configuration and retrieval
- Safe regular-expression and glob matching

Only symbols listed in ``__all__`` are considered part of the public API.
"""

from __future__ import annotations

# ---------------------------------------------------------------------------
# Logging utilities
# ---------------------------------------------------------------------------

from artiformat.utils.logger import (
    disable_logging,
    get_logger,
    is_logging_configured,
    level_for_verbosity,
    setup_logging,
)

# ---------------------------------------------------------------------------
# Console utilities
# ---------------------------------------------------------------------------

from artiformat.utils.console import (
    colorize_version_type,
    print_error,
    print_table,
    print_warning,
    reconfigure_console,
)

# ---------------------------------------------------------------------------
# Pattern utilities
# ---------------------------------------------------------------------------

from artiformat.utils.patterns import (
    compile_pattern,
    filter_glob,
    glob_to_regex,
    matches_glob,
    regex_fullmatch,
    regex_match,
    regex_search,
)

# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

__all__ = [
    # Console
    "print_error",
    "print_table",
    "print_warning",
    "reconfigure_console",
    "colorize_version_type",
    # Logging
    "get_logger",
    "setup_logging",
    "disable_logging",
    "is_logging_configured",
    "level_for_verbosity",
    # Patterns
    "compile_pattern",
    "regex_fullmatch",
    "regex_search",
    "regex_match",
    "glob_to_regex",
    "matches_glob",
    "filter_glob",
]
