"""Command-line entry point: ``infile cmd1 ... cmdN outfile``.

With ``here_doc LIMITER`` in place of the input file, standard input up to
the limiter line feeds the first command and the output file is appended to
rather than truncated.
"""

from __future__ import annotations

import contextlib
import os
import sys
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import IO

from pipechain.heredoc import write_here_doc
from pipechain.paths import search_dirs, split_fields
from pipechain.pipeline import run_pipeline
from pipechain.words import split_command

__all__ = ["Invocation", "parse_args", "run", "main"]

HERE_DOC_KEYWORD = "here_doc"
HERE_DOC_FILE = "here_doc"
_USAGE = (
    "usage: pipechain infile cmd1 cmd2 ... outfile\n"
    "       pipechain here_doc LIMITER cmd1 ... outfile"
)


@dataclass(frozen=True)
class Invocation:
    """What the command line asks for."""

    commands: tuple[str, ...]
    outfile: str
    infile: str | None = None
    limiter: str | None = None

    @property
    def here_doc(self) -> bool:
        """True when input comes from a here-document."""
        return self.limiter is not None


def parse_args(argv: Sequence[str]) -> Invocation:
    """Interpret the arguments that follow the program name.

    Raises ValueError when there are fewer than four of them.
    """
    args = list(argv)
    if len(args) < 4:
        raise ValueError(_USAGE)
    if args[0].startswith(HERE_DOC_KEYWORD):
        return Invocation(
            commands=tuple(args[2:-1]), outfile=args[-1], limiter=args[1]
        )
    return Invocation(commands=tuple(args[1:-1]), outfile=args[-1], infile=args[0])


def _report(message: str, exc: OSError) -> None:
    print(f"{message}: {exc.strerror or exc}", file=sys.stderr)


def _open_output(path: str, append: bool) -> int:
    flags = os.O_WRONLY | os.O_CREAT | (os.O_APPEND if append else os.O_TRUNC)
    return os.open(path, flags, 0o644)


def _bytes_source(stdin: IO | None) -> IO:
    if stdin is not None:
        return stdin
    return getattr(sys.stdin, "buffer", sys.stdin)


def run(
    argv: Sequence[str],
    env: Mapping[str, str] | None = None,
    stdin: IO | None = None,
    strict: bool = False,
) -> int:
    """Run the pipeline described by ``argv`` and return the exit status.

    ``strict`` splits commands on single spaces only, looks them up through
    PATH alone, and stops with status 2 or 3 when the input or output file
    cannot be opened; otherwise such failures are reported and the pipeline
    still runs.
    """
    env = os.environ if env is None else env
    try:
        dirs = search_dirs(env)
    except LookupError as exc:
        print(f"pipechain: {exc}", file=sys.stderr)
        return 1
    try:
        invocation = parse_args(argv)
    except ValueError as exc:
        print(exc, file=sys.stderr)
        return 1

    if strict:
        splitter = lambda text: split_fields(text, " ")  # noqa: E731
    else:
        splitter = split_command

    in_fd: int | None = None
    out_fd: int | None = None
    try:
        if invocation.here_doc:
            try:
                out_fd = _open_output(invocation.outfile, append=True)
            except OSError as exc:
                _report("Output file open failed", exc)
                if strict:
                    return 2
            try:
                write_here_doc(invocation.limiter, _bytes_source(stdin), HERE_DOC_FILE)
            except OSError as exc:
                _report("Here_doc file open failed", exc)
                if strict:
                    return 2
            try:
                in_fd = os.open(HERE_DOC_FILE, os.O_RDONLY)
            except OSError as exc:
                _report("Here_doc file open failed", exc)
                return 2
        else:
            try:
                in_fd = os.open(invocation.infile, os.O_RDONLY)
            except OSError as exc:
                _report("Input file open failed", exc)
                if strict:
                    return 2
            try:
                out_fd = _open_output(invocation.outfile, append=False)
            except OSError as exc:
                _report("Output file open failed", exc)
                if strict:
                    return 3

        run_pipeline(
            invocation.commands,
            stdin=in_fd if in_fd is not None else os.open(os.devnull, os.O_RDONLY),
            stdout=out_fd if out_fd is not None else os.open(os.devnull, os.O_WRONLY),
            dirs=dirs,
            env=env,
            splitter=splitter,
            allow_direct=not strict,
        )
        return 0
    finally:
        for fd in (in_fd, out_fd):
            if fd is not None:
                os.close(fd)
        if invocation.here_doc:
            with contextlib.suppress(FileNotFoundError):
                os.unlink(HERE_DOC_FILE)


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point for the ``pipechain`` command."""
    if argv is None:
        argv = sys.argv[1:]
    return run(argv)


if __name__ == "__main__":
    sys.exit(main())