from datetime import UTC, datetime
from decimal import Decimal

import pytest

from coinbind.codec import JsonCodec, unmapped_fields
from coinbind.errors import BitcoindError
from coinbind.model import RESPONSE_TYPES, response_type
from coinbind.model.envelope import BitcoindErrorResponse, ErrorPayload
from coinbind.model.responses import (
    GetAddedNodeInfoResponse,
    GetInfoResponse,
    GetPeerInfoResponse,
    ListUnspentResponse,
)
from coinbind.model.results import (
    AddedNodeInfo,
    GetBlockTemplateResult,
    ListUnspentResult,
    OutPoint,
    OutputScript,
    TemplateTransaction,
)


def test_block_template_uses_declared_wire_order() -> None:
    result = GetBlockTemplateResult(
        height=230873,
        bits="1a01aa3d",
        version=2,
        cur_time=datetime(2013, 4, 8, 10, 53, 41, tzinfo=UTC),
        previous_block_hash="00ff",
        coinbase_value=2500050000,
        transactions=[TemplateTransaction(data="01", fee=0)],
    )

    assert JsonCodec().encode(result) == (
        b'{"version":2,"previousblockhash":"00ff","transactions":[{"data":"01","fee":0}],'
        b'"coinbasevalue":2500050000,"curtime":1365418421,"bits":"1a01aa3d","height":230873}'
    )


def test_fields_accept_wire_names_and_attribute_names() -> None:
    by_alias = GetBlockTemplateResult.model_validate({"previousblockhash": "00ff"})
    by_name = GetBlockTemplateResult(previous_block_hash="00ff")

    assert by_alias.previous_block_hash == by_name.previous_block_hash == "00ff"
    assert by_alias.other_fields == {}


def test_flattened_sub_models_are_merged_on_encode() -> None:
    entry = ListUnspentResult(
        outpoint=OutPoint(txid="ab", vout=2),
        script=OutputScript(script_pub_key="76a9"),
        amount=Decimal("0.10000000"),
        confirmations=1,
    )

    assert JsonCodec().encode(entry) == (
        b'{"txid":"ab","vout":2,"scriptPubKey":"76a9","amount":0.10000000,"confirmations":1}'
    )


def test_flattened_sub_model_absent_when_no_keys_present() -> None:
    codec = JsonCodec()
    response = codec.decode(b'{"result":[{"address":"1abc","amount":1}],"error":null}', ListUnspentResponse)

    assert response.result is not None
    assert response.result[0].outpoint is None
    assert response.result[0].script is None
    assert codec.encode(response) == b'{"result":[{"address":"1abc","amount":1}],"error":null}'


def test_unknown_keys_in_flattened_list_entries_go_to_entry_catch_all() -> None:
    codec = JsonCodec()
    response = codec.decode(
        b'{"result":[{"txid":"ab","vout":0,"scriptPubKey":"76a9","solvable":true}],"error":null}',
        ListUnspentResponse,
    )

    assert response.result is not None
    entry = response.result[0]
    assert dict(entry.other_fields) == {"solvable": True}
    assert entry.outpoint is not None and dict(entry.outpoint.other_fields) == {}
    assert entry.script is not None and dict(entry.script.other_fields) == {}


def test_error_response_raises_on_request() -> None:
    response = JsonCodec().decode(
        b'{"result":null,"error":{"code":-5,"message":"Invalid Bitcoin address"},"id":"1"}',
        BitcoindErrorResponse,
    )

    assert not response.ok
    assert response.error == ErrorPayload(code=-5, message="Invalid Bitcoin address")
    with pytest.raises(BitcoindError) as excinfo:
        response.raise_for_error()
    assert excinfo.value.code == -5
    assert excinfo.value.message == "Invalid Bitcoin address"


def test_error_payload_on_typed_response_is_not_a_decode_failure() -> None:
    response = JsonCodec().decode(b'{"result":null,"error":{"code":-1,"message":"boom"},"id":1}', GetInfoResponse)

    assert response.result is None
    assert response.id == 1
    assert response.error is not None
    assert response.error.code == -1


def test_success_response_does_not_raise() -> None:
    response = JsonCodec().decode(b'{"result":{"blocks":1},"error":null}', GetInfoResponse)

    response.raise_for_error()
    assert response.ok


def test_added_node_info_keeps_both_shapes() -> None:
    codec = JsonCodec()

    single = codec.decode(b'{"result":{"addednode":"10.0.0.1"},"error":null}', GetAddedNodeInfoResponse)
    many = codec.decode(b'{"result":[{"addednode":"10.0.0.1"}],"error":null}', GetAddedNodeInfoResponse)

    assert isinstance(single.result, AddedNodeInfo)
    assert isinstance(many.result, list)
    assert many.result[0].added_node == "10.0.0.1"


def test_response_registry() -> None:
    assert response_type("GetInfoResponse") is GetInfoResponse
    assert RESPONSE_TYPES["BitcoindErrorResponse"] is BitcoindErrorResponse
    with pytest.raises(KeyError):
        response_type("GetNothingResponse")


def test_wire_keys_include_flattened_children() -> None:
    keys = ListUnspentResult.wire_keys()

    assert {"txid", "vout", "scriptPubKey", "redeemScript", "amount"} <= keys
    assert "outpoint" not in keys


def test_flattened_attribute_name_on_the_wire_goes_to_catch_all() -> None:
    codec = JsonCodec()
    raw = b'{"result":[{"txid":"ab","vout":0,"script":"abc"}],"error":null}'

    response = codec.decode(raw, ListUnspentResponse)

    assert response.result is not None
    entry = response.result[0]
    assert dict(entry.other_fields) == {"script": "abc"}
    assert entry.outpoint == OutPoint(txid="ab", vout=0)
    assert entry.script is None
    assert unmapped_fields(response) == {"result[0].script": "abc"}
    assert codec.encode(response) == raw


def test_flattened_attribute_name_alongside_flattened_keys() -> None:
    codec = JsonCodec()
    raw = b'{"result":[{"txid":"ab","vout":0,"scriptPubKey":"76a9","script":"abc"}],"error":null}'

    response = codec.decode(raw, ListUnspentResponse)

    assert response.result is not None
    entry = response.result[0]
    assert entry.script is not None and entry.script.script_pub_key == "76a9"
    assert dict(entry.other_fields) == {"script": "abc"}
    assert codec.encode(response) == raw


def test_unix_time_is_always_seconds() -> None:
    codec = JsonCodec()
    raw = b'{"result":[{"addr":"10.0.0.1:8333","conntime":20000000001}],"error":null}'

    response = codec.decode(raw, GetPeerInfoResponse)

    assert response.result is not None
    assert response.result[0].conn_time == datetime.fromtimestamp(20000000001, UTC)
    assert codec.encode(response) == raw
