"""Base model and wire helpers shared by every message schema."""

from __future__ import annotations

from typing import ClassVar, TypeVar

from pydantic import BaseModel, ConfigDict

M = TypeVar("M", bound="Message")


class Message(BaseModel):
    """Root of all schemas carried on the bus.

    ``package`` groups related schemas the same way the bridged middleware
    does (``std_msgs``, ``geometry_msgs``...). Unknown fields are rejected so
    that a payload decoded as the wrong schema fails loudly.
    """

    model_config = ConfigDict(extra="forbid")

    package: ClassVar[str] = ""

    @classmethod
    def schema_name(cls) -> str:
        return f"{cls.package}/{cls.__name__}" if cls.package else cls.__name__


def encode(message: Message) -> bytes:
    """Serialise ``message`` to the JSON bytes published on a channel."""

    return message.model_dump_json().encode("utf-8")


def decode(schema: type[M], payload: bytes) -> M:
    """Parse ``payload`` as ``schema``; raises ``pydantic.ValidationError``."""

    return schema.model_validate_json(payload)


__all__ = ["Message", "decode", "encode"]
