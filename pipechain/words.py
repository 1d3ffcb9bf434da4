"""Split a command string into words, honouring single and double quotes."""

from __future__ import annotations

import re
from collections.abc import Iterator

__all__ = [
    "UnclosedQuoteError",
    "is_quote",
    "is_whitespace",
    "count_words",
    "split_command",
]

_WHITESPACE = " \t\n\v\f\r"
_QUOTES = "'\""
_BLANKS = re.compile(r"[ \t\n\v\f\r]*")
_BARE_WORD = re.compile(r"[^'\" \t\n\v\f\r]+")


class UnclosedQuoteError(ValueError):
    """Raised when a quoted word has no closing quote."""

    def __init__(self, text: str, position: int) -> None:
        super().__init__(f"closing quote not found !! (opened at {position} in {text!r})")
        self.text = text
        self.position = position


def is_quote(char: str) -> bool:
    """Return True for a single or double quote character."""
    return len(char) == 1 and char in _QUOTES


def is_whitespace(char: str) -> bool:
    """Return True for a space or one of the control characters \\t to \\r."""
    return len(char) == 1 and char in _WHITESPACE


def _words(text: str) -> Iterator[str]:
    """Yield the words of ``text``.

    A quoted section is always a word of its own, even when it touches an
    unquoted word; the quotes themselves are dropped and nothing inside
    them is interpreted.
    """
    pos = 0
    end = len(text)
    while pos < end:
        pos = _BLANKS.match(text, pos).end()
        if pos < end and is_quote(text[pos]):
            quote = text[pos]
            closing = text.find(quote, pos + 1)
            if closing < 0:
                raise UnclosedQuoteError(text, pos)
            yield text[pos + 1 : closing]
            pos = closing + 1
        bare = _BARE_WORD.match(text, pos)
        if bare:
            yield bare.group()
            pos = bare.end()


def count_words(text: str) -> int:
    """Return how many words :func:`split_command` would produce."""
    return sum(1 for _ in _words(text))


def split_command(text: str) -> list[str]:
    """Split ``text`` into an argument list."""
    return list(_words(text))