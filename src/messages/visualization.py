"""Display markers."""

from __future__ import annotations

from typing import ClassVar

from pydantic import Field

from .base import Message
from .geometry import Point, Pose, Vector3
from .std import ColorRGBA, Duration, Header


class VisualizationMessage(Message):
    package: ClassVar[str] = "visualization_msgs"


class Marker(VisualizationMessage):
    ARROW: ClassVar[int] = 0
    CUBE: ClassVar[int] = 1
    SPHERE: ClassVar[int] = 2
    TEXT_VIEW_FACING: ClassVar[int] = 9

    ADD: ClassVar[int] = 0
    DELETE: ClassVar[int] = 2

    header: Header = Field(default_factory=Header)
    ns: str = ""
    id: int = 0
    type: int = Field(0, ge=0, le=11)
    action: int = Field(0, ge=0, le=3)
    pose: Pose = Field(default_factory=Pose)
    scale: Vector3 = Field(default_factory=Vector3)
    color: ColorRGBA = Field(default_factory=ColorRGBA)
    lifetime: Duration = Field(default_factory=Duration)
    frame_locked: bool = False
    points: list[Point] = Field(default_factory=list)
    colors: list[ColorRGBA] = Field(default_factory=list)
    text: str = ""
    mesh_resource: str = ""
    mesh_use_embedded_materials: bool = False


class MarkerArray(VisualizationMessage):
    markers: list[Marker] = Field(default_factory=list)


SCHEMAS = (Marker, MarkerArray)
