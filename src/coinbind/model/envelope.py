"""Response envelope wrapping every bitcoind JSON-RPC reply."""

from __future__ import annotations

from typing import Generic, TypeVar

from coinbind.errors import BitcoindError
from coinbind.model.base import JsonExtra

ResultT = TypeVar("ResultT")

RequestId = str | int


class ErrorPayload(JsonExtra):
    """Error object carried by a failed reply."""

    wire_order = ("code", "message")

    code: int
    message: str


class BitcoindJsonRpcResponse(JsonExtra, Generic[ResultT]):
    """Envelope with ``result``, ``error`` and ``id``.

    A non-null ``error`` is a successfully decoded outcome, not a decode
    failure. Callers check ``ok`` or call ``raise_for_error``.
    """

    wire_order = ("result", "error", "id")

    result: ResultT | None = None
    error: ErrorPayload | None = None
    id: RequestId | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def raise_for_error(self) -> None:
        if self.error is not None:
            raise BitcoindError(self.error.code, self.error.message)


class BitcoindErrorResponse(BitcoindJsonRpcResponse[None]):
    """Reply whose result is always null."""


__all__ = [
    "BitcoindErrorResponse",
    "BitcoindJsonRpcResponse",
    "ErrorPayload",
    "RequestId",
]
