"""Locate executables through the PATH search directories."""

from __future__ import annotations

import os
from collections.abc import Iterable, Mapping

__all__ = [
    "split_fields",
    "find_path",
    "search_dirs",
    "join_path",
    "resolve_command",
]


def split_fields(text: str, separator: str) -> list[str]:
    """Split ``text`` on ``separator``, dropping empty fields."""
    return [field for field in text.split(separator) if field]


def find_path(env: Mapping[str, str] | Iterable[str]) -> str | None:
    """Return the value of PATH from ``env``, or None when it is not set.

    ``env`` is either a mapping or a sequence of ``NAME=value`` strings; in
    the latter case the first ``PATH=`` entry wins.
    """
    if isinstance(env, Mapping):
        return env.get("PATH")
    return next(
        (entry[len("PATH="):] for entry in env if entry.startswith("PATH=")),
        None,
    )


def search_dirs(env: Mapping[str, str] | Iterable[str]) -> list[str]:
    """Return the non-empty directories listed in PATH.

    Raises LookupError when ``env`` has no PATH entry.
    """
    value = find_path(env)
    if value is None:
        raise LookupError("PATH is not set")
    return split_fields(value, ":")


def join_path(directory: str, name: str) -> str:
    """Join ``directory`` and ``name`` with a single slash between them."""
    return f"{directory}/{name}"


def resolve_command(
    dirs: Iterable[str], name: str, allow_direct: bool = True
) -> str | None:
    """Return the first executable path for ``name``, or None.

    With ``allow_direct``, ``name`` itself is tried first, as given.
    """
    if allow_direct and os.access(name, os.X_OK):
        return name
    return next(
        (
            candidate
            for candidate in (join_path(directory, name) for directory in dirs)
            if os.access(candidate, os.X_OK)
        ),
        None,
    )