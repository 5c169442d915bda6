"""Payload serialization for peerlink."""

import dataclasses
import json
import types
import typing
from abc import ABC, abstractmethod
from typing import Any, Generic, Type, TypeVar

from .types import DecodingError

T = TypeVar("T")

_UNION_ORIGINS = {typing.Union, getattr(types, "UnionType", typing.Union)}


class PayloadCodec(ABC, Generic[T]):
    """Interface for turning payloads into bytes and back."""

    @abstractmethod
    def serialize(self, payload: T) -> bytes:
        """Serialize a payload to bytes."""
        ...

    @abstractmethod
    def deserialize(self, data: bytes) -> T:
        """Deserialize bytes into a payload, raising DecodingError on schema mismatch."""
        ...


class JsonPayloadCodec(PayloadCodec[T]):
    """
    Canonical JSON codec for dataclass payloads.

    Output uses sorted keys, compact separators and UTF-8, so equal payloads
    always serialize to identical bytes. Nested dataclass, tuple and list
    fields are rebuilt from their annotations on deserialize.
    """

    def __init__(self, payload_type: Type[T]) -> None:
        if not dataclasses.is_dataclass(payload_type) or not isinstance(payload_type, type):
            raise TypeError(f"Payload type must be a dataclass, got {payload_type!r}")
        self.payload_type = payload_type

    def serialize(self, payload: T) -> bytes:
        """
        Serialize a payload to canonical JSON bytes.

        Raises:
            TypeError: If payload is not an instance of the codec's type
            ValueError: If payload holds a NaN or infinite float
        """
        if not isinstance(payload, self.payload_type):
            raise TypeError(
                f"Expected {self.payload_type.__name__}, got {type(payload).__name__}"
            )
        return json.dumps(
            dataclasses.asdict(payload),
            sort_keys=True,
            separators=(",", ":"),
            ensure_ascii=False,
            allow_nan=False,
        ).encode("utf-8")

    def deserialize(self, data: bytes) -> T:
        try:
            obj = json.loads(data.decode("utf-8"), parse_constant=_reject_constant)
        except UnicodeDecodeError as e:
            raise DecodingError(f"Payload is not valid UTF-8: {e}") from e
        except json.JSONDecodeError as e:
            raise DecodingError(f"Payload is not valid JSON: {e}") from e

        return _build(self.payload_type, obj, "")


def _reject_constant(name: str) -> Any:
    raise DecodingError(f"Payload is not valid JSON: {name} is not allowed")


def _build(cls: type, obj: Any, path: str) -> Any:
    """Build a dataclass instance from a decoded JSON object."""
    if not isinstance(obj, dict):
        where = f"Field {path!r}" if path else "Payload"
        raise DecodingError(f"{where} must be a JSON object, got {type(obj).__name__}")

    fields = {f.name: f for f in dataclasses.fields(cls)}
    hints = typing.get_type_hints(cls)
    prefix = f"{path}." if path else ""

    unknown = sorted(prefix + name for name in set(obj) - set(fields))
    if unknown:
        raise DecodingError(f"Unknown field(s) in payload: {', '.join(unknown)}")

    values = {}
    for name, f in fields.items():
        if name not in obj:
            if f.default is dataclasses.MISSING and f.default_factory is dataclasses.MISSING:
                raise DecodingError(f"Missing required field: {prefix}{name}")
            continue
        values[name] = _decode_value(prefix + name, obj[name], hints.get(name))

    try:
        return cls(**values)
    except (TypeError, ValueError) as e:
        raise DecodingError(f"Cannot build {cls.__name__}: {e}") from e


def _decode_value(name: str, value: Any, hint: Any) -> Any:
    """Check a decoded value against a field annotation and rebuild containers."""
    if dataclasses.is_dataclass(hint) and isinstance(hint, type):
        return _build(hint, value, name)

    origin = typing.get_origin(hint)
    args = typing.get_args(hint)

    if origin in _UNION_ORIGINS:
        if value is None and type(None) in args:
            return None
        options = [a for a in args if a is not type(None)]
        if len(options) == 1:
            return _decode_value(name, value, options[0])
        # Multi-type unions are left to the payload type
        return value

    if hint is tuple or origin is tuple:
        if not isinstance(value, list):
            raise DecodingError(f"Field {name!r} must be an array, got {type(value).__name__}")
        if not args:
            return tuple(value)
        if len(args) == 2 and args[1] is Ellipsis:
            return tuple(_decode_value(f"{name}[{i}]", v, args[0]) for i, v in enumerate(value))
        if len(args) != len(value):
            raise DecodingError(
                f"Field {name!r} must have {len(args)} items, got {len(value)}"
            )
        return tuple(
            _decode_value(f"{name}[{i}]", v, a) for i, (v, a) in enumerate(zip(value, args))
        )

    if hint is list or origin is list:
        if not isinstance(value, list):
            raise DecodingError(f"Field {name!r} must be an array, got {type(value).__name__}")
        if not args:
            return value
        return [_decode_value(f"{name}[{i}]", v, args[0]) for i, v in enumerate(value)]

    if isinstance(hint, type):
        _check_type(name, value, hint)
    return value


def _check_type(name: str, value: Any, hint: type) -> None:
    """Check a decoded value against a simple field annotation."""
    if hint is float:
        ok = isinstance(value, (int, float)) and not isinstance(value, bool)
    elif hint is int:
        ok = isinstance(value, int) and not isinstance(value, bool)
    else:
        ok = isinstance(value, hint)

    if not ok:
        raise DecodingError(
            f"Field {name!r} must be {hint.__name__}, got {type(value).__name__}"
        )
