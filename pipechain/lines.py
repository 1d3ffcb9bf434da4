"""Read a stream one line at a time through a small fixed-size buffer."""

from __future__ import annotations

from collections.abc import Iterator
from typing import IO, AnyStr, Generic

__all__ = ["LineReader", "LineReaderPool"]


class LineReader(Generic[AnyStr]):
    """Return successive lines of a stream, each with its trailing newline.

    The stream is read ``buffer_size`` units at a time, so with the default
    of 1 nothing past the returned line is consumed. Works with both binary
    and text streams.
    """

    def __init__(self, stream: IO[AnyStr], buffer_size: int = 1) -> None:
        if buffer_size <= 0:
            raise ValueError(f"buffer_size must be positive, got {buffer_size}")
        self._stream = stream
        self._buffer_size = buffer_size
        self._pending: AnyStr | None = None
        self._newline: AnyStr | None = None

    def read_line(self) -> AnyStr | None:
        """Return the next line, the unterminated last line, or None at end."""
        pending = self._pending
        try:
            while not (pending and self._newline in pending):
                chunk = self._stream.read(self._buffer_size)
                if not chunk:
                    break
                if self._newline is None:
                    self._newline = (
                        b"\n" if isinstance(chunk, (bytes, bytearray)) else "\n"
                    )
                pending = chunk if pending is None else pending + chunk
        except OSError:
            self._pending = None
            raise
        if not pending:
            self._pending = None
            return None
        cut = pending.find(self._newline)
        if cut < 0:
            self._pending = None
            return pending
        line, rest = pending[: cut + 1], pending[cut + 1 :]
        self._pending = rest or None
        return line

    def __iter__(self) -> Iterator[AnyStr]:
        return iter(self.read_line, None)


class LineReaderPool:
    """Keep one :class:`LineReader` per stream so several can be interleaved."""

    def __init__(self, buffer_size: int = 1) -> None:
        if buffer_size <= 0:
            raise ValueError(f"buffer_size must be positive, got {buffer_size}")
        self._buffer_size = buffer_size
        self._readers: dict[IO, LineReader] = {}

    def read_line(self, stream: IO[AnyStr]) -> AnyStr | None:
        """Return the next line of ``stream``; None once it is exhausted."""
        reader = self._readers.get(stream)
        if reader is None:
            reader = self._readers[stream] = LineReader(stream, self._buffer_size)
        try:
            line = reader.read_line()
        except OSError:
            self._readers.pop(stream, None)
            raise
        if line is None:
            self._readers.pop(stream, None)
        return line

    def discard(self, stream: IO) -> None:
        """Forget any buffered data held for ``stream``."""
        self._readers.pop(stream, None)