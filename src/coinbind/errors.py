"""Exceptions raised by coinbind."""

from __future__ import annotations

from typing import Any


class CoinbindError(Exception):
    """Base class for all coinbind errors."""


class DecodeError(CoinbindError, ValueError):
    """Input could not be turned into a response model."""


class MalformedInputError(DecodeError):
    """Input is not well-formed JSON."""

    def __init__(self, message: str, lineno: int | None = None, colno: int | None = None) -> None:
        super().__init__(message)
        self.lineno = lineno
        self.colno = colno


class TypeMismatchError(DecodeError):
    """Well-formed JSON whose values do not fit the declared field types.

    Each entry of ``errors`` has a dotted ``path`` naming the offending field
    and a human readable ``message``.
    """

    def __init__(self, message: str, errors: list[dict[str, Any]]) -> None:
        super().__init__(message)
        self.errors = errors

    @property
    def paths(self) -> list[str]:
        return [error["path"] for error in self.errors]


class EncodeError(CoinbindError):
    """Model holds a value that cannot be written as JSON."""


class BitcoindError(CoinbindError):
    """Error payload returned by the daemon."""

    def __init__(self, code: int, message: str) -> None:
        super().__init__(f"bitcoind error {code}: {message}")
        self.code = code
        self.message = message


__all__ = [
    "BitcoindError",
    "CoinbindError",
    "DecodeError",
    "EncodeError",
    "MalformedInputError",
    "TypeMismatchError",
]
