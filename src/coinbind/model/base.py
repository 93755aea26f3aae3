"""Base model shared by every response and result type.

``JsonExtra`` keeps the fields a model does not declare in a catch-all bucket,
writes keys back in a declared wire order and merges flattened sub-models into
the parent JSON object.
"""

from __future__ import annotations

from collections.abc import Mapping
from datetime import UTC, datetime
from types import MappingProxyType
from typing import Annotated, Any, ClassVar, get_args

from pydantic import (
    BaseModel,
    BeforeValidator,
    ConfigDict,
    ModelWrapValidatorHandler,
    PlainSerializer,
    SerializationInfo,
    SerializerFunctionWrapHandler,
    ValidationInfo,
    model_serializer,
    model_validator,
)

# Validation context marking input that came off the wire, keyed by alias only.
WIRE_CONTEXT: dict[str, Any] = {"from_wire": True}


def _from_unix_seconds(value: Any) -> Any:
    if isinstance(value, int) and not isinstance(value, bool):
        return datetime.fromtimestamp(value, UTC)
    return value


def _unix_seconds(value: datetime) -> int:
    return int(value.timestamp())


# Integer unix seconds on the wire, an aware UTC datetime in Python.
UnixTime = Annotated[
    datetime,
    BeforeValidator(_from_unix_seconds),
    PlainSerializer(_unix_seconds, return_type=int),
]


def _model_type(annotation: Any) -> type[JsonExtra]:
    if isinstance(annotation, type) and issubclass(annotation, JsonExtra):
        return annotation
    for arg in get_args(annotation):
        if isinstance(arg, type) and issubclass(arg, JsonExtra):
            return arg
    raise TypeError(f"flattened field must hold a JsonExtra model, got {annotation!r}")


def _from_wire(info: ValidationInfo) -> bool:
    return bool(info.context and info.context.get("from_wire"))


class JsonExtra(BaseModel):
    """Model with a catch-all bucket for undeclared JSON fields.

    Subclasses declare their fields with the daemon's wire names as aliases and
    may set:

    - ``wire_order``: wire names in the order they are written. Keys not listed
      follow in declaration order, catch-all keys come last.
    - ``flattened``: names of fields holding a sub-model whose keys are written
      into this object instead of under their own key.

    Constructing a model in code accepts attribute names; decoding wire data
    with ``WIRE_CONTEXT`` matches aliases only.
    """

    model_config = ConfigDict(extra="allow", validate_by_name=True, validate_by_alias=True)

    wire_order: ClassVar[tuple[str, ...]] = ()
    flattened: ClassVar[tuple[str, ...]] = ()

    @classmethod
    def wire_keys(cls) -> frozenset[str]:
        """All JSON keys this model consumes, including those of flattened sub-models."""
        keys = set(cls._own_keys())
        for name in cls.flattened:
            keys |= _model_type(cls.model_fields[name].annotation).wire_keys()
        return frozenset(keys)

    @classmethod
    def _own_keys(cls) -> frozenset[str]:
        return frozenset(info.alias or name for name, info in cls.model_fields.items() if name not in cls.flattened)

    @classmethod
    def _order_rank(cls) -> dict[str, int]:
        rank = {key: index for index, key in enumerate(cls.wire_order)}
        for name, info in cls.model_fields.items():
            if info.alias and info.alias in rank:
                rank.setdefault(name, rank[info.alias])
        return rank

    @model_validator(mode="wrap")
    @classmethod
    def _gather_flattened(cls, data: Any, handler: ModelWrapValidatorHandler[JsonExtra], info: ValidationInfo) -> Any:
        # Unknown keys stay on this object so they land in the outermost catch-all only.
        if not cls.flattened or not isinstance(data, Mapping):
            return handler(data)
        from_wire = _from_wire(info)
        data = dict(data)
        order = list(data)
        # A wire key spelled like a flattened attribute is an undeclared field.
        shadowed = {name: data.pop(name) for name in cls.flattened if from_wire and name in data}
        own_keys = cls._own_keys()
        for name in cls.flattened:
            if name in data:
                continue
            sub_keys = _model_type(cls.model_fields[name].annotation).wire_keys() - own_keys
            part = {key: data.pop(key) for key in list(data) if key in sub_keys}
            if part:
                data[name] = part

        model = handler(data)
        extra = model.__pydantic_extra__
        if shadowed and extra is not None:
            restored = {
                key: shadowed[key] if key in shadowed else extra[key]
                for key in order
                if key in shadowed or key in extra
            }
            extra.clear()
            extra.update(restored)
        return model

    def _dump_flattened(self, name: str, info: SerializationInfo) -> dict[str, Any]:
        value = getattr(self, name)
        if not isinstance(value, JsonExtra) or (info.exclude_unset and name not in self.model_fields_set):
            return {}
        return value.model_dump(
            mode=info.mode,
            by_alias=bool(info.by_alias),
            exclude_unset=info.exclude_unset,
            exclude_none=info.exclude_none,
            exclude_defaults=info.exclude_defaults,
            context=info.context,
        )

    @model_serializer(mode="wrap")
    def _serialize_wire(self, handler: SerializerFunctionWrapHandler, info: SerializationInfo) -> dict[str, Any]:
        dumped = handler(self)
        extra = self.__pydantic_extra__ or {}
        context = info.context or {}

        data: dict[str, Any] = {}
        for key, value in dumped.items():
            if key in self.flattened:
                # A catch-all key may share the attribute name, so dump the sub-model itself.
                data.update(value if key not in extra and isinstance(value, dict) else self._dump_flattened(key, info))
            elif key not in extra:
                data[key] = value
        for name in self.flattened:
            if name not in dumped:
                data.update(self._dump_flattened(name, info))
        if context.get("emit_other_fields", True):
            data.update(extra)

        if self.wire_order:
            rank = self._order_rank()
            last = len(self.wire_order)
            # Catch-all keys go last even when spelled like an attribute name.
            ordered = sorted(data, key=lambda key: last if key in extra else rank.get(key, last))
            data = {key: data[key] for key in ordered}
        return data

    def get(self, field: str) -> Any:
        """Value of an undeclared field captured during decode, or None."""
        return (self.__pydantic_extra__ or {}).get(field)

    def set(self, field: str, value: Any) -> None:
        """Store a value for a field this model does not declare."""
        if field in self._own_keys():
            raise ValueError(f"{field!r} is a declared field of {type(self).__name__}")
        if self.__pydantic_extra__ is None:
            self.__pydantic_extra__ = {}
        self.__pydantic_extra__[field] = value

    @property
    def other_fields(self) -> Mapping[str, Any]:
        """Read-only view of the catch-all bucket."""
        return MappingProxyType(self.__pydantic_extra__ or {})


__all__ = ["WIRE_CONTEXT", "JsonExtra", "UnixTime"]
