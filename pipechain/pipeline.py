"""Run a chain of commands, each reading the previous one's output."""

from __future__ import annotations

import os
import subprocess
import sys
from collections.abc import Callable, Iterable, Mapping, Sequence
from typing import IO, Union

from pipechain.paths import resolve_command, search_dirs
from pipechain.words import UnclosedQuoteError, split_command

__all__ = [
    "CommandError",
    "EmptyCommandError",
    "CommandNotFoundError",
    "prepare_command",
    "run_pipeline",
]

Stream = Union[IO, int, None]
Splitter = Callable[[str], list]


class CommandError(Exception):
    """A command of the pipeline could not be started."""

    def __init__(self, message: str, command: str) -> None:
        super().__init__(message)
        self.command = command


class EmptyCommandError(CommandError):
    """The command string holds no words."""

    def __init__(self, command: str) -> None:
        super().__init__("empty command", command)


class CommandNotFoundError(CommandError):
    """No executable matches the command's first word."""

    def __init__(self, command: str, name: str) -> None:
        super().__init__(f"Command not found: {name}", command)
        self.name = name


def prepare_command(
    command: str,
    dirs: Iterable[str],
    splitter: Splitter = split_command,
    allow_direct: bool = True,
) -> tuple[str, list[str]]:
    """Return the executable path and argument list for ``command``."""
    argv = splitter(command)
    if not argv:
        raise EmptyCommandError(command)
    path = resolve_command(dirs, argv[0], allow_direct)
    if path is None:
        raise CommandNotFoundError(command, argv[0])
    return path, argv


def run_pipeline(
    commands: Sequence[str],
    stdin: Stream = None,
    stdout: Stream = None,
    dirs: Iterable[str] | None = None,
    env: Mapping[str, str] | None = None,
    splitter: Splitter = split_command,
    allow_direct: bool = True,
) -> list[int]:
    """Run ``commands`` connected by pipes and return their exit statuses.

    The first command reads ``stdin`` and the last writes ``stdout``; None
    for either means the caller's own stream. A command that cannot be
    started is reported on stderr, gets status 1, and the next command sees
    empty input.
    """
    if dirs is None:
        dirs = search_dirs(env if env is not None else os.environ)
    dirs = list(dirs)
    child_env = dict(env) if env is not None else None

    processes: list[subprocess.Popen | None] = []
    upstream: Stream = stdin
    owned: IO | None = None
    last = len(commands) - 1
    for position, command in enumerate(commands):
        target = stdout if position == last else subprocess.PIPE
        try:
            path, argv = prepare_command(command, dirs, splitter, allow_direct)
            process = subprocess.Popen(
                argv, executable=path, stdin=upstream, stdout=target, env=child_env
            )
        except (CommandError, UnclosedQuoteError) as exc:
            print(f"pipechain: {exc}", file=sys.stderr)
            process = None
        except OSError as exc:
            print(f"pipechain: execve failed: {exc}", file=sys.stderr)
            process = None
        if owned is not None:
            owned.close()
        if process is None:
            upstream, owned = subprocess.DEVNULL, None
        else:
            upstream = owned = process.stdout
        processes.append(process)

    return [1 if process is None else process.wait() for process in processes]