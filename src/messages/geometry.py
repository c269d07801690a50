"""Geometric primitives and transforms."""

from __future__ import annotations

from typing import ClassVar

from pydantic import Field

from .base import Message
from .std import Header


class GeometryMessage(Message):
    package: ClassVar[str] = "geometry_msgs"


class Vector3(GeometryMessage):
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0


class Point(GeometryMessage):
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0


class Quaternion(GeometryMessage):
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0
    w: float = 1.0


class Pose(GeometryMessage):
    position: Point = Field(default_factory=Point)
    orientation: Quaternion = Field(default_factory=Quaternion)


class PoseArray(GeometryMessage):
    header: Header = Field(default_factory=Header)
    poses: list[Pose] = Field(default_factory=list)


class PoseStamped(GeometryMessage):
    header: Header = Field(default_factory=Header)
    pose: Pose = Field(default_factory=Pose)


class Transform(GeometryMessage):
    translation: Vector3 = Field(default_factory=Vector3)
    rotation: Quaternion = Field(default_factory=Quaternion)


class TransformStamped(GeometryMessage):
    header: Header = Field(default_factory=Header)
    child_frame_id: str = ""
    transform: Transform = Field(default_factory=Transform)


class Twist(GeometryMessage):
    linear: Vector3 = Field(default_factory=Vector3)
    angular: Vector3 = Field(default_factory=Vector3)


class PoseWithCovariance(GeometryMessage):
    pose: Pose = Field(default_factory=Pose)
    covariance: list[float] = Field(default_factory=lambda: [0.0] * 36)


class TwistWithCovariance(GeometryMessage):
    twist: Twist = Field(default_factory=Twist)
    covariance: list[float] = Field(default_factory=lambda: [0.0] * 36)


class TFMessage(Message):
    package: ClassVar[str] = "tf2_msgs"

    transforms: list[TransformStamped] = Field(default_factory=list)


SCHEMAS = (
    Vector3,
    Point,
    Quaternion,
    Pose,
    PoseArray,
    PoseStamped,
    Transform,
    TransformStamped,
    Twist,
    PoseWithCovariance,
    TwistWithCovariance,
    TFMessage,
)
