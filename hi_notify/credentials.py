"""Scoped holder for the SMTP password."""

from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator


class MailSecret:
    """Password kept in a mutable buffer so it can be zeroed after use.

    The value is only materialised as ``str`` for the duration of a login
    call; it is never exported to the process environment. An empty
    password is a valid value and is left for the server to reject.
    """

    __slots__ = ("_buffer", "_cleared")

    def __init__(self, value: str) -> None:
        self._buffer = bytearray(value.encode("utf-8"))
        self._cleared = False

    def reveal(self) -> str:
        if self._cleared:
            raise ValueError("mail secret has been cleared")
        return self._buffer.decode("utf-8")

    @property
    def cleared(self) -> bool:
        return self._cleared

    def clear(self) -> None:
        for index in range(len(self._buffer)):
            self._buffer[index] = 0
        self._buffer = bytearray()
        self._cleared = True

    def __repr__(self) -> str:
        return "MailSecret(<cleared>)" if self._cleared else "MailSecret(<hidden>)"


@contextmanager
def scoped_secret(value: str) -> Iterator[MailSecret]:
    """Yield a MailSecret that is cleared on every exit path."""
    secret = MailSecret(value)
    try:
        yield secret
    finally:
        secret.clear()
