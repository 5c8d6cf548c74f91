"""
JsonCodec Protocol - serialization capability used by the client.

The client never touches `json` directly; it encodes request models and
decodes response bodies through an injected codec. PydanticCodec is the
default implementation.
"""

from typing import Protocol, TypeVar

from pydantic import BaseModel, TypeAdapter

T = TypeVar("T")


class JsonCodec(Protocol):
    """
    Contract for (de)serializing wire models.

    Implementations must:
    - Omit unset optional fields when encoding
    - Tolerate unknown and missing optional fields when decoding
    - Raise ValueError (or a subclass) when the text does not fit the shape
    """

    def encode(self, value: BaseModel) -> str:
        ...

    def decode(self, text: str, shape: type[T]) -> T:
        ...


class PydanticCodec:
    """JsonCodec backed by pydantic's JSON (de)serialization."""

    def encode(self, value: BaseModel) -> str:
        return value.model_dump_json(by_alias=True, exclude_none=True)

    def decode(self, text: str, shape: type[T]) -> T:
        # pydantic.ValidationError subclasses ValueError, and covers invalid JSON too
        return TypeAdapter(shape).validate_json(text)
