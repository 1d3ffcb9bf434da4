"""Collect here-document input up to a limiter line."""

from __future__ import annotations

import contextlib
import io
import os
from typing import IO

from pipechain.lines import LineReader

__all__ = ["read_doc", "write_here_doc"]


def read_doc(limiter: str | bytes, source: IO, sink: IO) -> int:
    """Copy lines from ``source`` to ``sink`` until one starts with ``limiter``.

    The limiter line is consumed but not copied. Nothing past it is read
    from ``source``. Returns the number of lines copied.
    """
    copied = 0
    for line in LineReader(source, 1):
        prefix = limiter
        if isinstance(line, bytes) and isinstance(limiter, str):
            prefix = limiter.encode()
        elif isinstance(line, str) and isinstance(limiter, bytes):
            prefix = limiter.decode()
        if line.startswith(prefix):
            break
        sink.write(line)
        copied += 1
    return copied


def write_here_doc(limiter: str | bytes, source: IO, path: str | os.PathLike) -> int:
    """Write the here-document read from ``source`` to a fresh file at ``path``.

    Any existing file is removed first. Returns the number of lines written.
    """
    with contextlib.suppress(FileNotFoundError):
        os.unlink(path)
    fd = os.open(path, os.O_WRONLY | os.O_CREAT, 0o644)
    if isinstance(source, io.TextIOBase):
        encoding = getattr(source, "encoding", None) or "utf-8"
        sink = os.fdopen(fd, "w", encoding=encoding, newline="")
    else:
        sink = os.fdopen(fd, "wb")
    with sink:
        return read_doc(limiter, source, sink)