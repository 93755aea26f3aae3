"""Tolerant JSON codec for bitcoind response models.

Decoding reads non-integer numbers as ``Decimal`` so amounts keep their exact
digits; encoding writes them back in plain notation with compact separators.
Fields the models do not declare are kept, never rejected.
"""

from __future__ import annotations

from decimal import Decimal
from functools import lru_cache
from types import NoneType, UnionType
from typing import Any, TypeVar, Union, get_args, get_origin

import simplejson
from loguru import logger
from pydantic import BaseModel, TypeAdapter, ValidationError
from pydantic_core import PydanticSerializationError

from coinbind.config.settings import CodecSettings, load_settings
from coinbind.errors import EncodeError, MalformedInputError, TypeMismatchError
from coinbind.model.base import WIRE_CONTEXT, JsonExtra

ModelT = TypeVar("ModelT", bound=BaseModel)

RawJson = bytes | bytearray | str


def _plain_json(value: Any) -> Any:
    if isinstance(value, Decimal):
        if not value.is_finite():
            raise TypeError(f"Decimal {value} has no JSON representation")
        return simplejson.RawJSON(format(value, "f"))
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def format_path(loc: tuple[int | str, ...]) -> str:
    """Render a validation location as ``result[0].amount``."""
    path = ""
    for part in loc:
        if isinstance(part, int):
            path += f"[{part}]"
        else:
            path = f"{path}.{part}" if path else str(part)
    return path or "<root>"


def _union_members(tp: Any) -> tuple[Any, ...]:
    if get_origin(tp) in (Union, UnionType):
        return tuple(arg for arg in get_args(tp) if arg is not NoneType)
    return (tp,)


def _member_for_tag(members: tuple[Any, ...], tag: str) -> Any | None:
    for member in members:
        origin = get_origin(member)
        if origin is not None and tag.startswith(f"{origin.__name__}["):
            return member
        name = getattr(member, "__name__", None)
        if name is not None and name.lower() == tag.lower():
            return member
    return None


def _field_for_key(model: type[JsonExtra], key: str) -> str | None:
    for name, info in model.model_fields.items():
        if (info.alias or name) == key:
            return name
    return key if key in model.flattened else None


def _member_for_part(members: tuple[Any, ...], part: int | str) -> Any | None:
    for member in members:
        if isinstance(part, int) and get_origin(member) is list:
            return member
        if isinstance(part, str) and get_origin(member) is dict:
            return member
        if isinstance(part, str) and isinstance(member, type) and issubclass(member, JsonExtra):
            if _field_for_key(member, part) is not None:
                return member
    return None


def wire_path(root_type: Any, loc: tuple[int | str, ...]) -> str:
    """Render a validation location as the path of the offending JSON key.

    Flattened fields and union member tags do not exist on the wire, so they
    are dropped; everything else is spelled with its JSON key.
    """
    tp = root_type
    tag_seen = False
    wire: list[int | str] = []
    for part in loc:
        members = _union_members(tp) if tp is not None else ()
        if len(members) > 1:
            if isinstance(part, str) and not tag_seen:
                # Member tags such as "list[...]" or a wrapped validator name.
                tp = _member_for_tag(members, part) or tp
                tag_seen = tp is not None and len(_union_members(tp)) > 1
                continue
            tp = _member_for_part(members, part)
        elif members:
            tp = members[0]
        tag_seen = False

        if isinstance(tp, type) and issubclass(tp, JsonExtra) and isinstance(part, str):
            name = _field_for_key(tp, part)
            if name is None:
                wire.append(part)
                tp = None
                continue
            if name not in tp.flattened:
                wire.append(part)
            tp = tp.model_fields[name].annotation
        elif isinstance(part, int) and get_origin(tp) is list:
            wire.append(part)
            args = get_args(tp)
            tp = args[0] if args else None
        elif get_origin(tp) is dict:
            wire.append(part)
            args = get_args(tp)
            tp = args[1] if len(args) == 2 else None
        else:
            wire.append(part)
            tp = None
    return format_path(tuple(wire))


@lru_cache(maxsize=None)
def _adapter(result_type: Any) -> TypeAdapter[Any]:
    return TypeAdapter(result_type)


def _wire_name(model: JsonExtra, name: str) -> str:
    return type(model).model_fields[name].alias or name


def _join(path: str, key: str) -> str:
    return f"{path}.{key}" if path else key


def unmapped_fields(value: Any, path: str = "") -> dict[str, Any]:
    """Collect every catch-all entry in a decoded tree, keyed by dotted path.

    An empty result means every field of the input was matched by a declared
    property.
    """
    found: dict[str, Any] = {}
    if isinstance(value, JsonExtra):
        for key, extra in value.other_fields.items():
            found[_join(path, key)] = extra
        for name in type(value).model_fields:
            child_path = path if name in value.flattened else _join(path, _wire_name(value, name))
            found.update(unmapped_fields(getattr(value, name), child_path))
    elif isinstance(value, list):
        for index, item in enumerate(value):
            found.update(unmapped_fields(item, f"{path}[{index}]"))
    elif isinstance(value, dict):
        for key, item in value.items():
            found.update(unmapped_fields(item, _join(path, str(key))))
    return found


class JsonCodec:
    """Decode bytes into response models and encode them back."""

    def __init__(self, *, emit_other_fields: bool = True) -> None:
        self.emit_other_fields = emit_other_fields

    @classmethod
    def from_settings(cls, settings: CodecSettings | None = None) -> JsonCodec:
        settings = settings or load_settings()
        return cls(emit_other_fields=settings.emit_other_fields)

    def loads(self, raw: RawJson) -> Any:
        """Parse JSON text with floats read as Decimal."""
        try:
            text = raw.decode("utf-8") if isinstance(raw, bytes | bytearray) else raw
        except UnicodeDecodeError as exc:
            raise MalformedInputError(f"Input is not valid UTF-8: {exc.reason}") from exc
        try:
            return simplejson.loads(text, use_decimal=True)
        except simplejson.JSONDecodeError as exc:
            raise MalformedInputError(
                f"Malformed JSON: {exc.msg} at line {exc.lineno} column {exc.colno}",
                lineno=exc.lineno,
                colno=exc.colno,
            ) from exc

    def dumps(self, data: Any) -> bytes:
        """Write plain JSON data compactly, Decimals in positional notation."""
        try:
            text = simplejson.dumps(
                data,
                separators=(",", ":"),
                ensure_ascii=False,
                use_decimal=False,
                allow_nan=False,
                default=_plain_json,
            )
        except (TypeError, ValueError) as exc:
            raise EncodeError(str(exc)) from exc
        return text.encode("utf-8")

    def decode(self, raw: RawJson, response_type: type[ModelT]) -> ModelT:
        """Decode a reply into ``response_type``.

        Raises:
            MalformedInputError: input is not JSON.
            TypeMismatchError: values conflict with declared field types.
        """
        data = self.loads(raw)
        logger.debug("codec.decode type={} bytes={}", response_type.__name__, len(raw))
        try:
            return response_type.model_validate(data, by_alias=True, by_name=False, context=WIRE_CONTEXT)
        except ValidationError as exc:
            raise _type_mismatch(exc, response_type, response_type.__name__) from exc

    def decode_result(self, raw: RawJson, result_type: Any) -> Any:
        """Decode a bare result payload, without the envelope."""
        data = self.loads(raw)
        logger.debug("codec.decode_result type={} bytes={}", result_type, len(raw))
        try:
            return _adapter(result_type).validate_python(data, by_alias=True, by_name=False, context=WIRE_CONTEXT)
        except ValidationError as exc:
            raise _type_mismatch(exc, result_type, str(result_type)) from exc

    def encode(self, model: BaseModel) -> bytes:
        """Encode a model in wire order, omitting fields absent on input."""
        try:
            data = model.model_dump(
                by_alias=True,
                exclude_unset=True,
                context={"emit_other_fields": self.emit_other_fields},
            )
        except PydanticSerializationError as exc:
            raise EncodeError(str(exc)) from exc
        encoded = self.dumps(data)
        logger.debug("codec.encode type={} bytes={}", type(model).__name__, len(encoded))
        return encoded

    def encode_result(self, value: Any, result_type: Any) -> bytes:
        try:
            data = _adapter(result_type).dump_python(
                value,
                by_alias=True,
                exclude_unset=True,
                context={"emit_other_fields": self.emit_other_fields},
            )
        except PydanticSerializationError as exc:
            raise EncodeError(str(exc)) from exc
        return self.dumps(data)


def _type_mismatch(exc: ValidationError, root_type: Any, type_name: str) -> TypeMismatchError:
    errors = [{"path": wire_path(root_type, error["loc"]), "message": error["msg"]} for error in exc.errors()]
    summary = "; ".join(f"{error['path']}: {error['message']}" for error in errors)
    return TypeMismatchError(f"Cannot decode {type_name}: {summary}", errors)


_DEFAULT_CODEC: JsonCodec | None = None


def default_codec() -> JsonCodec:
    global _DEFAULT_CODEC
    if _DEFAULT_CODEC is None:
        _DEFAULT_CODEC = JsonCodec.from_settings()
    return _DEFAULT_CODEC


def decode(raw: RawJson, response_type: type[ModelT]) -> ModelT:
    return default_codec().decode(raw, response_type)


def decode_result(raw: RawJson, result_type: Any) -> Any:
    return default_codec().decode_result(raw, result_type)


def encode(model: BaseModel) -> bytes:
    return default_codec().encode(model)


__all__ = [
    "JsonCodec",
    "decode",
    "decode_result",
    "default_codec",
    "encode",
    "format_path",
    "wire_path",
    "unmapped_fields",
]
