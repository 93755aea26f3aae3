"""Response classes, one per RPC method, and the name registry."""

from __future__ import annotations

from decimal import Decimal

from coinbind.model.envelope import BitcoindErrorResponse, BitcoindJsonRpcResponse
from coinbind.model.results import (
    AddedNodeInfo,
    AddressGroupingEntry,
    GetBlockTemplateResult,
    GetInfoResult,
    GetMiningInfoResult,
    ListUnspentResult,
    PeerInfoResult,
    ValidateAddressResult,
)


class GetInfoResponse(BitcoindJsonRpcResponse[GetInfoResult]):
    pass


class GetMiningInfoResponse(BitcoindJsonRpcResponse[GetMiningInfoResult]):
    pass


class GetBlockTemplateResponse(BitcoindJsonRpcResponse[GetBlockTemplateResult]):
    pass


class ListUnspentResponse(BitcoindJsonRpcResponse[list[ListUnspentResult]]):
    """Unspent transaction outputs, one entry per output."""


class GetAddedNodeInfoResponse(BitcoindJsonRpcResponse[AddedNodeInfo | list[AddedNodeInfo]]):
    """Reply to ``getaddednodeinfo``.

    The daemon sends a single object or an array depending on the call
    arguments (bitcoin/bitcoin#2467). Both shapes are accepted and kept as
    sent; callers must handle either.
    """


class ListAccountsResponse(BitcoindJsonRpcResponse[dict[str, Decimal]]):
    """Balance per account name, in the order the daemon sent them."""


class ListAddressGroupingsResponse(BitcoindJsonRpcResponse[list[list[AddressGroupingEntry]]]):
    pass


class ValidateAddressResponse(BitcoindJsonRpcResponse[ValidateAddressResult]):
    pass


class GetPeerInfoResponse(BitcoindJsonRpcResponse[list[PeerInfoResult]]):
    pass


class GetBlockCountResponse(BitcoindJsonRpcResponse[int]):
    pass


class GetBestBlockHashResponse(BitcoindJsonRpcResponse[str]):
    pass


class GetBalanceResponse(BitcoindJsonRpcResponse[Decimal]):
    pass


RESPONSE_TYPES: dict[str, type[BitcoindJsonRpcResponse]] = {
    cls.__name__: cls
    for cls in (
        BitcoindErrorResponse,
        GetAddedNodeInfoResponse,
        GetBalanceResponse,
        GetBestBlockHashResponse,
        GetBlockCountResponse,
        GetBlockTemplateResponse,
        GetInfoResponse,
        GetMiningInfoResponse,
        GetPeerInfoResponse,
        ListAccountsResponse,
        ListAddressGroupingsResponse,
        ListUnspentResponse,
        ValidateAddressResponse,
    )
}


def response_type(name: str) -> type[BitcoindJsonRpcResponse]:
    """Look up a response class by name."""
    try:
        return RESPONSE_TYPES[name]
    except KeyError:
        raise KeyError(f"Unknown response type: {name}") from None


__all__ = [
    "RESPONSE_TYPES",
    "GetAddedNodeInfoResponse",
    "GetBalanceResponse",
    "GetBestBlockHashResponse",
    "GetBlockCountResponse",
    "GetBlockTemplateResponse",
    "GetInfoResponse",
    "GetMiningInfoResponse",
    "GetPeerInfoResponse",
    "ListAccountsResponse",
    "ListAddressGroupingsResponse",
    "ListUnspentResponse",
    "ValidateAddressResponse",
    "response_type",
]
