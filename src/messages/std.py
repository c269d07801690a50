"""Primitive and header schemas."""

from __future__ import annotations

from typing import ClassVar

from pydantic import Field

from .base import Message


class StdMessage(Message):
    package: ClassVar[str] = "std_msgs"


class Bool(StdMessage):
    data: bool = False


class ColorRGBA(StdMessage):
    r: float = 0.0
    g: float = 0.0
    b: float = 0.0
    a: float = 0.0


class Empty(StdMessage):
    pass


class Int32(StdMessage):
    data: int = Field(0, ge=-(2**31), le=2**31 - 1)


class Float32(StdMessage):
    data: float = 0.0


class Float64(StdMessage):
    data: float = 0.0


class String(StdMessage):
    data: str = ""


class Time(Message):
    package: ClassVar[str] = "builtin_interfaces"

    sec: int = Field(0, ge=0)
    nanosec: int = Field(0, ge=0, lt=1_000_000_000)


class Duration(Message):
    package: ClassVar[str] = "builtin_interfaces"

    sec: int = 0
    nanosec: int = Field(0, ge=0, lt=1_000_000_000)


class Header(StdMessage):
    stamp: Time = Field(default_factory=Time)
    frame_id: str = ""


class Clock(Message):
    package: ClassVar[str] = "rosgraph_msgs"

    clock: Time = Field(default_factory=Time)


SCHEMAS = (Bool, ColorRGBA, Empty, Int32, Float32, Float64, Header, String, Clock)
