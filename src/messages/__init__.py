"""Message schemas relayed by the bridge, addressable by ``package/Name``."""

from __future__ import annotations

from . import geometry, sensor, std, visualization
from .base import Message, decode, encode

REGISTRY: dict[str, type[Message]] = {
    schema.schema_name(): schema
    for module in (std, geometry, sensor, visualization)
    for schema in module.SCHEMAS
}


def resolve_schema(name: str) -> type[Message]:
    """Look up a schema by its ``package/Name`` identifier."""

    try:
        return REGISTRY[name]
    except KeyError:
        raise ValueError(f"Unknown message schema {name!r}") from None


__all__ = ["Message", "REGISTRY", "decode", "encode", "resolve_schema"]
