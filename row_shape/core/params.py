"""SQL parameter normalization.

Named parameters are written as ``:name`` and positional parameters as
``?``. Both are converted to the driver-specific format, leaving string
literals and PostgreSQL ``::typecast`` syntax untouched.
"""

from __future__ import annotations

import re
from collections.abc import Sequence
from functools import lru_cache
from typing import Any

# Matches :name but not ::typecast and not inside words
# Negative lookbehind for : (handles ::), \w (handles mid-word colons)
_PARAM_PATTERN = re.compile(r"(?<![:\w]):([a-zA-Z_]\w*)")

# Matches single-quoted string literals (with escaped quotes handled)
_STRING_LITERAL_PATTERN = re.compile(r"'(?:[^'\\]|\\.)*'")


def _split_literals(sql: str) -> list[tuple[bool, str]]:
    """Split *sql* into ``(is_literal, text)`` segments."""
    segments: list[tuple[bool, str]] = []
    last_end = 0

    for match in _STRING_LITERAL_PATTERN.finditer(sql):
        start, end = match.span()
        if start > last_end:
            segments.append((False, sql[last_end:start]))
        segments.append((True, match.group()))
        last_end = end

    if last_end < len(sql):
        segments.append((False, sql[last_end:]))
    return segments


def normalize_params(sql: str, paramstyle: str) -> str:
    """Convert :name parameters to the target param style.

    Args:
        sql: SQL string with :name parameters.
        paramstyle: Target style - 'named' (no conversion) or 'pyformat' (%(name)s).

    Returns:
        SQL with parameters converted to the target style.
    """
    if paramstyle == "named":
        return sql
    return _convert_to_pyformat(sql)


@lru_cache(maxsize=256)
def _convert_to_pyformat(sql: str) -> str:
    """Convert :name params to %(name)s, preserving string literals."""
    return "".join(
        text if is_literal else _PARAM_PATTERN.sub(r"%(\1)s", text)
        for is_literal, text in _split_literals(sql)
    )


def normalize_positional(sql: str, style: str) -> str:
    """Convert ``?`` placeholders to the target positional style.

    Args:
        sql: SQL string with ``?`` placeholders.
        style: 'qmark' (no conversion), 'format' (%s) or 'numeric' (:1, :2, ...).

    Returns:
        SQL with placeholders converted to the target style.
    """
    if style == "qmark":
        return sql
    return _convert_positional(sql, style)


@lru_cache(maxsize=256)
def _convert_positional(sql: str, style: str) -> str:
    """Replace ``?`` outside string literals, numbering them for 'numeric'."""
    parts: list[str] = []
    position = 0
    for is_literal, text in _split_literals(sql):
        if is_literal:
            parts.append(text)
            continue
        pieces = text.split("?")
        parts.append(pieces[0])
        for piece in pieces[1:]:
            position += 1
            parts.append("%s" if style == "format" else f":{position}")
            parts.append(piece)
    return "".join(parts)


def coerce_params(
    params: dict[str, Any] | tuple[Any, ...] | list[Any] | Any,
) -> dict[str, Any] | tuple[Any, ...] | None:
    """Normalize *params* to a dict, tuple, or None.

    * ``None`` / ``dict`` → returned as-is (named parameter binding).
    * ``tuple`` / ``list`` → converted to ``tuple`` (positional binding).
    * Any other scalar → wrapped in a single-element tuple.
    """
    if params is None or isinstance(params, dict):
        return params
    if isinstance(params, (tuple, list)):
        return tuple(params)
    return (params,)


def prepare_statement(
    sql: str,
    params: Any,
    paramstyle: str,
    positional_style: str,
    escape_percent: bool = False,
) -> tuple[str, dict[str, Any] | tuple[Any, ...] | None]:
    """Return ``(sql_text, bound_params)`` ready for the driver.

    *escape_percent* doubles literal ``%`` signs for drivers that read
    ``%%`` back as ``%`` (psycopg). Statements without parameters are
    passed through unchanged.
    """
    bound = coerce_params(params)
    if bound is None:
        return sql, None

    if isinstance(bound, dict):
        style = "named" if paramstyle == "named" else "pyformat"
        if escape_percent and style == "pyformat":
            sql = sql.replace("%", "%%")
        return normalize_params(sql, style), bound

    if escape_percent and positional_style == "format":
        sql = sql.replace("%", "%%")
    return normalize_positional(sql, positional_style), bound


def placeholders(values: Sequence[Any]) -> str:
    """Build a ``?, ?, ?`` placeholder list for an ``IN (...)`` clause.

    Raises:
        ValueError: If *values* is empty (``IN ()`` is not valid SQL).
    """
    if not values:
        raise ValueError("Cannot build placeholders for an empty value list")
    return ", ".join("?" for _ in values)
