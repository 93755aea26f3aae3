"""Typed JSON bindings for bitcoind JSON-RPC replies."""

from coinbind.codec import JsonCodec, decode, decode_result, encode, unmapped_fields
from coinbind.errors import (
    BitcoindError,
    CoinbindError,
    DecodeError,
    EncodeError,
    MalformedInputError,
    TypeMismatchError,
)
from coinbind.model import BitcoindJsonRpcResponse, ErrorPayload, JsonExtra, response_type

__all__ = [
    "BitcoindError",
    "BitcoindJsonRpcResponse",
    "CoinbindError",
    "DecodeError",
    "EncodeError",
    "ErrorPayload",
    "JsonCodec",
    "JsonExtra",
    "MalformedInputError",
    "TypeMismatchError",
    "decode",
    "decode_result",
    "encode",
    "response_type",
    "unmapped_fields",
]
