"""Result payloads, one per bitcoind RPC method.

Fields that the daemon only sends for some call arguments are optional and
stay unset when absent, so they are omitted again on encode.
"""

from __future__ import annotations

from decimal import Decimal

from pydantic import Field

from coinbind.model.base import JsonExtra, UnixTime


class GetInfoResult(JsonExtra):
    """Data returned by ``getinfo``."""

    wire_order = (
        "version",
        "protocolversion",
        "walletversion",
        "balance",
        "blocks",
        "timeoffset",
        "connections",
        "proxy",
        "difficulty",
        "testnet",
        "keypoololdest",
        "keypoolsize",
        "paytxfee",
        "unlocked_until",
        "errors",
    )

    version: int | None = None
    protocol_version: int | None = Field(default=None, alias="protocolversion")
    wallet_version: int | None = Field(default=None, alias="walletversion")
    balance: Decimal | None = None
    blocks: int | None = None
    time_offset: int | None = Field(default=None, alias="timeoffset")
    connections: int | None = None
    proxy: str | None = None
    difficulty: Decimal | None = None
    testnet: bool | None = None
    key_pool_oldest: UnixTime | None = Field(default=None, alias="keypoololdest")
    key_pool_size: int | None = Field(default=None, alias="keypoolsize")
    pay_tx_fee: Decimal | None = Field(default=None, alias="paytxfee")
    # Only present for encrypted wallets.
    unlocked_until: int | None = None
    errors: str | None = None


class GetMiningInfoResult(JsonExtra):
    """Data returned by ``getmininginfo``."""

    wire_order = (
        "blocks",
        "currentblocksize",
        "currentblocktx",
        "difficulty",
        "errors",
        "generate",
        "genproclimit",
        "hashespersec",
        "networkhashps",
        "pooledtx",
        "testnet",
    )

    blocks: int | None = None
    current_block_size: int | None = Field(default=None, alias="currentblocksize")
    current_block_tx: int | None = Field(default=None, alias="currentblocktx")
    difficulty: Decimal | None = None
    errors: str | None = None
    generate: bool | None = None
    gen_proc_limit: int | None = Field(default=None, alias="genproclimit")
    hashes_per_sec: int | None = Field(default=None, alias="hashespersec")
    network_hash_ps: int | None = Field(default=None, alias="networkhashps")
    pooled_tx: int | None = Field(default=None, alias="pooledtx")
    testnet: bool | None = None


class TemplateTransaction(JsonExtra):
    """Transaction listed in a block template."""

    wire_order = ("data", "hash", "depends", "fee", "sigops", "required")

    data: str
    hash: str | None = None
    depends: list[int] | None = None
    fee: int | None = None
    sigops: int | None = None
    required: bool | None = None


class CoinbaseAux(JsonExtra):
    """Data the miner should include in the coinbase."""

    flags: str | None = None


class GetBlockTemplateResult(JsonExtra):
    """Data returned by ``getblocktemplate``.

    Either ``coinbasetxn`` or ``coinbasevalue`` is sent, never both.
    """

    wire_order = (
        "version",
        "previousblockhash",
        "transactions",
        "coinbaseaux",
        "coinbasetxn",
        "coinbasevalue",
        "target",
        "mintime",
        "mutable",
        "noncerange",
        "sigoplimit",
        "sizelimit",
        "curtime",
        "bits",
        "height",
        "workid",
    )

    version: int | None = None
    height: int | None = None
    previous_block_hash: str | None = Field(default=None, alias="previousblockhash")
    bits: str | None = None
    target: str | None = None
    nonce_range: str | None = Field(default=None, alias="noncerange")

    transactions: list[TemplateTransaction] | None = None
    coinbase_aux: CoinbaseAux | None = Field(default=None, alias="coinbaseaux")
    coinbase_txn: TemplateTransaction | None = Field(default=None, alias="coinbasetxn")
    # Satoshis, including the block reward and fees.
    coinbase_value: int | None = Field(default=None, alias="coinbasevalue")

    min_time: UnixTime | None = Field(default=None, alias="mintime")
    cur_time: UnixTime | None = Field(default=None, alias="curtime")

    mutable: list[str] | None = None
    sig_op_limit: int | None = Field(default=None, alias="sigoplimit")
    size_limit: int | None = Field(default=None, alias="sizelimit")
    work_id: str | None = Field(default=None, alias="workid")


class OutPoint(JsonExtra):
    """Transaction id and output index."""

    wire_order = ("txid", "vout")

    txid: str
    vout: int


class OutputScript(JsonExtra):
    wire_order = ("scriptPubKey", "redeemScript")

    script_pub_key: str = Field(alias="scriptPubKey")
    # Only for P2SH outputs.
    redeem_script: str | None = Field(default=None, alias="redeemScript")


class ListUnspentResult(JsonExtra):
    """One unspent output from ``listunspent``.

    The outpoint and script keys sit directly in the JSON object; they are
    grouped into sub-models here.
    """

    wire_order = (
        "txid",
        "vout",
        "address",
        "account",
        "scriptPubKey",
        "redeemScript",
        "amount",
        "confirmations",
        "spendable",
    )
    flattened = ("outpoint", "script")

    outpoint: OutPoint | None = None
    address: str | None = None
    account: str | None = None
    script: OutputScript | None = None
    amount: Decimal | None = None
    confirmations: int | None = None
    spendable: bool | None = None


class AddedNodeAddress(JsonExtra):
    wire_order = ("address", "connected")

    address: str
    # "inbound", "outbound" or "false".
    connected: str


class AddedNodeInfo(JsonExtra):
    """Entry from ``getaddednodeinfo``.

    ``connected`` and ``addresses`` are only sent when dns lookups are
    requested.
    """

    wire_order = ("addednode", "connected", "addresses")

    added_node: str = Field(alias="addednode")
    connected: bool | None = None
    addresses: list[AddedNodeAddress] | None = None


class ValidateAddressResult(JsonExtra):
    """Data returned by ``validateaddress``. Invalid addresses only carry ``isvalid``."""

    wire_order = (
        "isvalid",
        "address",
        "ismine",
        "isscript",
        "script",
        "addresses",
        "sigsrequired",
        "pubkey",
        "iscompressed",
        "account",
    )

    is_valid: bool = Field(alias="isvalid")
    address: str | None = None
    is_mine: bool | None = Field(default=None, alias="ismine")
    is_script: bool | None = Field(default=None, alias="isscript")
    script: str | None = None
    addresses: list[str] | None = None
    sigs_required: int | None = Field(default=None, alias="sigsrequired")
    pubkey: str | None = None
    is_compressed: bool | None = Field(default=None, alias="iscompressed")
    account: str | None = None


class PeerInfoResult(JsonExtra):
    """One connected peer from ``getpeerinfo``."""

    wire_order = (
        "addr",
        "services",
        "lastsend",
        "lastrecv",
        "bytessent",
        "bytesrecv",
        "conntime",
        "version",
        "subver",
        "inbound",
        "startingheight",
        "banscore",
        "syncnode",
    )

    addr: str
    services: str | None = None
    last_send: UnixTime | None = Field(default=None, alias="lastsend")
    last_recv: UnixTime | None = Field(default=None, alias="lastrecv")
    bytes_sent: int | None = Field(default=None, alias="bytessent")
    bytes_recv: int | None = Field(default=None, alias="bytesrecv")
    conn_time: UnixTime | None = Field(default=None, alias="conntime")
    version: int | None = None
    subver: str | None = None
    inbound: bool | None = None
    starting_height: int | None = Field(default=None, alias="startingheight")
    ban_score: int | None = Field(default=None, alias="banscore")
    sync_node: bool | None = Field(default=None, alias="syncnode")


# [address, amount] or [address, amount, account]
AddressGroupingEntry = list[str | Decimal]


__all__ = [
    "AddedNodeAddress",
    "AddedNodeInfo",
    "AddressGroupingEntry",
    "CoinbaseAux",
    "GetBlockTemplateResult",
    "GetInfoResult",
    "GetMiningInfoResult",
    "ListUnspentResult",
    "OutPoint",
    "OutputScript",
    "PeerInfoResult",
    "TemplateTransaction",
    "ValidateAddressResult",
]
