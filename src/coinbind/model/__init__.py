"""Typed bitcoind response models."""

from coinbind.model.base import JsonExtra, UnixTime
from coinbind.model.envelope import BitcoindErrorResponse, BitcoindJsonRpcResponse, ErrorPayload
from coinbind.model.responses import RESPONSE_TYPES, response_type
from coinbind.model.results import (
    AddedNodeAddress,
    AddedNodeInfo,
    CoinbaseAux,
    GetBlockTemplateResult,
    GetInfoResult,
    GetMiningInfoResult,
    ListUnspentResult,
    OutPoint,
    OutputScript,
    PeerInfoResult,
    TemplateTransaction,
    ValidateAddressResult,
)

__all__ = [
    "RESPONSE_TYPES",
    "AddedNodeAddress",
    "AddedNodeInfo",
    "BitcoindErrorResponse",
    "BitcoindJsonRpcResponse",
    "CoinbaseAux",
    "ErrorPayload",
    "GetBlockTemplateResult",
    "GetInfoResult",
    "GetMiningInfoResult",
    "JsonExtra",
    "ListUnspentResult",
    "OutPoint",
    "OutputScript",
    "PeerInfoResult",
    "TemplateTransaction",
    "UnixTime",
    "ValidateAddressResult",
    "response_type",
]
