"""Round-trip conformance checks over a corpus of JSON reply samples.

Sample files are named ``<ResponseClassName>[_<suffix>].json``. Files whose
name starts with an underscore are skipped by discovery.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from loguru import logger

from coinbind.codec import JsonCodec, unmapped_fields
from coinbind.errors import DecodeError
from coinbind.model.envelope import BitcoindJsonRpcResponse
from coinbind.model.responses import response_type

SAMPLE_SUFFIX = ".json"


@dataclass(frozen=True)
class SampleReport:
    """Outcome of one sample round-trip."""

    path: Path
    type_name: str
    round_trip_ok: bool
    unmapped: dict[str, Any] = field(default_factory=dict)
    output: bytes = b""
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None and self.round_trip_ok and not self.unmapped


def response_type_name(path: Path) -> str:
    """Response class name encoded in a sample file name."""
    stem = path.name.lstrip("_")
    end = stem.find("_")
    if end == -1:
        end = stem.find(".")
    if end == -1:
        return stem
    return stem[:end]


def response_class_for(path: Path) -> type[BitcoindJsonRpcResponse]:
    return response_type(response_type_name(path))


def discover_samples(paths: Iterable[Path]) -> list[Path]:
    """Expand files and directories into a sorted list of enabled sample files."""
    found: list[Path] = []
    for path in paths:
        candidates = sorted(path.rglob(f"*{SAMPLE_SUFFIX}")) if path.is_dir() else [path]
        for candidate in candidates:
            if candidate.name.startswith("_"):
                logger.debug("samples.skip path={} reason=underscore-prefix", str(candidate))
                continue
            found.append(candidate)
    return found


def check_sample(path: Path, codec: JsonCodec, *, exact: bool = True) -> SampleReport:
    """Decode a sample, encode it again and compare.

    With ``exact`` the output must equal the file bytes (a trailing newline in
    the file is ignored). Otherwise decoding the output must give a model equal
    to the first decode.
    """
    type_name = response_type_name(path)
    original = path.read_bytes().rstrip(b"\r\n")
    try:
        model_type = response_type(type_name)
        model = codec.decode(original, model_type)
        output = codec.encode(model)
        if exact:
            round_trip_ok = output == original
        else:
            round_trip_ok = codec.decode(output, model_type) == model
    except (DecodeError, KeyError) as exc:
        logger.warning("samples.error path={} error={}", str(path), exc)
        return SampleReport(path=path, type_name=type_name, round_trip_ok=False, error=str(exc))

    unmapped = unmapped_fields(model)
    if unmapped:
        logger.warning("samples.unmapped path={} fields={}", str(path), ",".join(sorted(unmapped)))
    if not round_trip_ok:
        logger.warning("samples.mismatch path={}", str(path))
    return SampleReport(path=path, type_name=type_name, round_trip_ok=round_trip_ok, unmapped=unmapped, output=output)


def check_samples(paths: Iterable[Path], codec: JsonCodec, *, exact: bool = True) -> list[SampleReport]:
    reports = [check_sample(path, codec, exact=exact) for path in discover_samples(paths)]
    logger.info(
        "samples.done total={} failed={}",
        len(reports),
        sum(1 for report in reports if not report.ok),
    )
    return reports


__all__ = [
    "SampleReport",
    "check_sample",
    "check_samples",
    "discover_samples",
    "response_class_for",
    "response_type_name",
]
