from pathlib import Path

import pytest

from coinbind.codec import JsonCodec, unmapped_fields
from coinbind.model.responses import GetInfoResponse, ListUnspentResponse
from coinbind.model.results import ListUnspentResult
from coinbind.samples import (
    check_sample,
    check_samples,
    discover_samples,
    response_class_for,
    response_type_name,
)

SAMPLE_DIR = Path(__file__).parent / "resources" / "sample_response"
SAMPLES = discover_samples([SAMPLE_DIR])


def test_samples_are_discovered() -> None:
    names = {path.name for path in SAMPLES}
    assert "GetInfoResponse.json" in names
    assert "ListUnspentResponse.json" in names
    assert "_DOUBLE_UNWRAP.json" not in names


@pytest.mark.parametrize("sample", SAMPLES, ids=lambda path: path.name)
def test_sample_round_trips_byte_for_byte(sample: Path) -> None:
    report = check_sample(sample, JsonCodec())

    assert report.error is None
    assert report.output == sample.read_bytes().rstrip(b"\r\n"), f"round-trip failed for {sample.name}"
    assert report.unmapped == {}, f"fields not explicitly mapped: {sorted(report.unmapped)}"
    assert report.ok


@pytest.mark.parametrize("sample", SAMPLES, ids=lambda path: path.name)
def test_sample_round_trips_semantically(sample: Path) -> None:
    codec = JsonCodec()
    model_type = response_class_for(sample)
    first = codec.decode(sample.read_bytes(), model_type)

    assert codec.decode(codec.encode(first), model_type) == first


def test_double_unwrap_keeps_every_field_once() -> None:
    # Two flattened sub-models next to a catch-all on the same object.
    raw = (SAMPLE_DIR / "_DOUBLE_UNWRAP.json").read_bytes()
    codec = JsonCodec()

    result = codec.decode_result(raw, ListUnspentResult)

    assert result.outpoint is not None
    assert result.outpoint.txid == "d54994ece1d11b19785c7248868696250ab195605b469632b7bd68130e880c9a"
    assert result.outpoint.vout == 1
    assert result.script is not None
    assert result.script.script_pub_key == "a914f815b036d9bbbce5e9f2a00abd1bf3dc91e9551087"
    assert result.script.redeem_script == "5221021a2b52ae"
    assert dict(result.outpoint.other_fields) == {}
    assert dict(result.script.other_fields) == {}
    assert dict(result.other_fields) == {"newfield": "kept"}
    assert unmapped_fields(result) == {"newfield": "kept"}

    output = codec.encode_result(result, ListUnspentResult)
    assert output == raw
    for key in (b'"txid"', b'"vout"', b'"scriptPubKey"', b'"redeemScript"', b'"newfield"'):
        assert output.count(key) == 1


def test_check_sample_flags_incomplete_model(tmp_path: Path) -> None:
    sample = tmp_path / "GetInfoResponse_newfeature.json"
    sample.write_bytes(b'{"result":{"version":1,"newfeature":true},"error":null}')

    report = check_sample(sample, JsonCodec())

    assert report.round_trip_ok
    assert report.unmapped == {"result.newfeature": True}
    assert not report.ok


def test_check_sample_reports_decode_error(tmp_path: Path) -> None:
    sample = tmp_path / "GetInfoResponse.json"
    sample.write_bytes(b'{"result":')

    report = check_sample(sample, JsonCodec())

    assert report.error is not None
    assert not report.ok


def test_check_sample_reports_unknown_type(tmp_path: Path) -> None:
    sample = tmp_path / "NoSuchResponse.json"
    sample.write_bytes(b'{"result":null}')

    report = check_sample(sample, JsonCodec())

    assert report.error is not None
    assert "NoSuchResponse" in report.error


def test_semantic_check_accepts_normalized_output(tmp_path: Path) -> None:
    sample = tmp_path / "GetInfoResponse_spaced.json"
    sample.write_bytes(b'{"result": {"blocks": 5, "version": 1}, "error": null}\n')

    assert not check_sample(sample, JsonCodec()).round_trip_ok
    assert check_sample(sample, JsonCodec(), exact=False).ok


def test_check_samples_over_directory(tmp_path: Path) -> None:
    (tmp_path / "GetBlockCountResponse.json").write_bytes(b'{"result":12,"error":null,"id":"1"}')
    (tmp_path / "_GetBlockCountResponse_disabled.json").write_bytes(b"not json")

    reports = check_samples([tmp_path], JsonCodec())

    assert [report.type_name for report in reports] == ["GetBlockCountResponse"]
    assert reports[0].ok


def test_response_type_name_from_file_name() -> None:
    assert response_type_name(Path("GetInfoResponse.json")) == "GetInfoResponse"
    assert response_type_name(Path("GetInfoResponse_minimal.json")) == "GetInfoResponse"
    assert response_type_name(Path("_ListAccountsResponse.json")) == "ListAccountsResponse"
    assert response_class_for(Path("ListUnspentResponse_2.json")) is ListUnspentResponse
    assert response_class_for(Path("GetInfoResponse.json")) is GetInfoResponse
