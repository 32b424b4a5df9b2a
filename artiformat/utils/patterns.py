"""
Pattern utilities for artiformat.

Small helpers shared by the version and platform engines and by the CLI:

- Safe regular-expression matching that never raises on a bad pattern or a
  non-string subject (callers get ``None``/``False`` and a DEBUG log line).
- Glob-to-regex conversion for user-facing filters such as
  ``artiformat platform list --pattern 'ubuntu*'``.

Compiled expressions are cached, so hot paths may pass pattern strings
directly.
"""

from __future__ import annotations

import re
from functools import lru_cache
from re import Match, Pattern
from typing import Iterable, List, Optional, Union

from artiformat.exceptions import InvalidPatternError
from artiformat.utils.logger import get_logger

logger = get_logger("utils.patterns")

PatternLike = Union[str, Pattern[str]]


@lru_cache(maxsize=256)
def _compile_cached(pattern: str, flags: int) -> Pattern[str]:
    return re.compile(pattern, flags)


def compile_pattern(pattern: PatternLike, flags: int = 0) -> Pattern[str]:
    """Compile ``pattern``, reusing a cached object where possible.

    Args:
        pattern: Regular expression source or an already compiled pattern.
        flags: ``re`` flags, ignored for precompiled patterns.

    Returns:
        The compiled pattern.

    Raises:
        InvalidPatternError: ``pattern`` is not a valid regular expression.
    """
    if isinstance(pattern, re.Pattern):
        return pattern

    try:
        return _compile_cached(pattern, flags)
    except re.error as exc:
        raise InvalidPatternError(
            f"Invalid regular expression: {exc}",
            pattern=pattern,
        ) from exc


def _safe_apply(method: str, text: object, pattern: PatternLike) -> Optional[Match[str]]:
    if not isinstance(text, str):
        logger.debug("Refusing to match non-string subject: %r", text)
        return None

    try:
        compiled = compile_pattern(pattern)
    except InvalidPatternError as exc:
        logger.debug("%s", exc)
        return None

    return getattr(compiled, method)(text)


def regex_fullmatch(text: object, pattern: PatternLike) -> Optional[Match[str]]:
    """Match ``pattern`` against the whole of ``text``.

    Returns:
        The match object, or ``None`` if there is no match, the pattern is
        invalid, or ``text`` is not a string.
    """
    return _safe_apply("fullmatch", text, pattern)


def regex_search(text: object, pattern: PatternLike) -> Optional[Match[str]]:
    """Return the leftmost match of ``pattern`` anywhere in ``text``."""
    return _safe_apply("search", text, pattern)


def regex_match(text: object, pattern: PatternLike) -> bool:
    """Return True if ``pattern`` occurs anywhere in ``text`` (``grep -E`` style)."""
    return regex_search(text, pattern) is not None


def glob_to_regex(glob: str) -> str:
    """Convert a shell-style glob into an anchored regular expression.

    ``*`` matches any run of characters, ``?`` a single character, and
    ``[...]`` character classes are kept (``[!...]`` negates). Everything
    else is matched literally.

    Examples:
        >>> glob_to_regex("ubuntu*")
        '^ubuntu.*$'
        >>> glob_to_regex("win??")
        '^win..$'
    """
    parts: List[str] = []
    i = 0
    n = len(glob)

    while i < n:
        char = glob[i]
        i += 1

        if char == "*":
            parts.append(".*")
        elif char == "?":
            parts.append(".")
        elif char == "[":
            end = glob.find("]", i)
            if end == -1:
                parts.append(re.escape(char))
                continue
            body = glob[i:end]
            i = end + 1
            if body.startswith("!"):
                body = "^" + body[1:]
            parts.append(f"[{body.replace(chr(92), chr(92) * 2)}]")
        else:
            parts.append(re.escape(char))

    return "^" + "".join(parts) + "$"


def matches_glob(text: str, glob: str) -> bool:
    """Return True if ``text`` matches the shell-style ``glob``."""
    return regex_fullmatch(text, glob_to_regex(glob)) is not None


def filter_glob(items: Iterable[str], glob: Optional[str]) -> List[str]:
    """Keep the items matching ``glob``, preserving order.

    A ``None`` or empty glob keeps everything.
    """
    if not glob:
        return list(items)
    regex = glob_to_regex(glob)
    return [item for item in items if regex_fullmatch(item, regex) is not None]
