"""Value codecs translating stored values to and from file contents."""
from __future__ import annotations

import json
from typing import Any, Generic, Protocol, Type, TypeVar

from pydantic import TypeAdapter, ValidationError
from pydantic_core import PydanticSerializationError

from .errors import SerializationError

INDENT = 4

V = TypeVar("V")


class Codec(Protocol[V]):
    def encode(self, value: V) -> bytes:  # pragma: no cover - interface
        ...

    def decode(self, raw: bytes) -> V:  # pragma: no cover - interface
        ...


class JSONCodec:
    """Untyped codec: any value the standard ``json`` module accepts."""

    def encode(self, value: Any) -> bytes:
        try:
            text = json.dumps(value, indent=INDENT, ensure_ascii=False, allow_nan=False)
        except (TypeError, ValueError) as exc:
            raise SerializationError(f"value is not JSON serializable: {exc}") from exc
        return text.encode("utf-8")

    def decode(self, raw: bytes) -> Any:
        try:
            return json.loads(raw.decode("utf-8"))
        except ValueError as exc:
            raise SerializationError(f"stored content is not valid JSON: {exc}") from exc


class PydanticCodec(Generic[V]):
    """Typed codec.

    Values are validated against ``value_type`` before they are written and
    again when they are read back, so a typed store never hands out a value
    of the wrong shape.
    """

    def __init__(self, value_type: Type[V]) -> None:
        self.value_type = value_type
        self._adapter: TypeAdapter[V] = TypeAdapter(value_type)

    def encode(self, value: V) -> bytes:
        try:
            validated = self._adapter.validate_python(value)
            return self._adapter.dump_json(validated, indent=INDENT)
        except (ValidationError, PydanticSerializationError) as exc:
            raise SerializationError(f"value is not serializable as {self.type_name}: {exc}") from exc

    def decode(self, raw: bytes) -> V:
        try:
            return self._adapter.validate_json(raw)
        except ValidationError as exc:
            raise SerializationError(f"stored content is not a valid {self.type_name}: {exc}") from exc

    @property
    def type_name(self) -> str:
        return getattr(self.value_type, "__name__", repr(self.value_type))
