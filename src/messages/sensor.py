"""Sensor readings, imagery and vehicle state."""

from __future__ import annotations

from typing import ClassVar

from pydantic import Field

from .base import Message
from .geometry import Point, PoseWithCovariance, Quaternion, TwistWithCovariance, Vector3
from .std import Header


def _zeros(n: int):
    return Field(default_factory=lambda: [0.0] * n)


class SensorMessage(Message):
    package: ClassVar[str] = "sensor_msgs"


class Image(SensorMessage):
    header: Header = Field(default_factory=Header)
    height: int = Field(0, ge=0)
    width: int = Field(0, ge=0)
    encoding: str = ""
    is_bigendian: bool = False
    step: int = Field(0, ge=0)
    data: list[int] = Field(default_factory=list)


class RegionOfInterest(SensorMessage):
    x_offset: int = 0
    y_offset: int = 0
    height: int = 0
    width: int = 0
    do_rectify: bool = False


class CameraInfo(SensorMessage):
    header: Header = Field(default_factory=Header)
    height: int = Field(0, ge=0)
    width: int = Field(0, ge=0)
    distortion_model: str = ""
    d: list[float] = Field(default_factory=list)
    k: list[float] = _zeros(9)
    r: list[float] = _zeros(9)
    p: list[float] = _zeros(12)
    binning_x: int = 0
    binning_y: int = 0
    roi: RegionOfInterest = Field(default_factory=RegionOfInterest)


class FluidPressure(SensorMessage):
    header: Header = Field(default_factory=Header)
    fluid_pressure: float = 0.0
    variance: float = 0.0


class Imu(SensorMessage):
    header: Header = Field(default_factory=Header)
    orientation: Quaternion = Field(default_factory=Quaternion)
    orientation_covariance: list[float] = _zeros(9)
    angular_velocity: Vector3 = Field(default_factory=Vector3)
    angular_velocity_covariance: list[float] = _zeros(9)
    linear_acceleration: Vector3 = Field(default_factory=Vector3)
    linear_acceleration_covariance: list[float] = _zeros(9)


class JointState(SensorMessage):
    header: Header = Field(default_factory=Header)
    name: list[str] = Field(default_factory=list)
    position: list[float] = Field(default_factory=list)
    velocity: list[float] = Field(default_factory=list)
    effort: list[float] = Field(default_factory=list)


class LaserScan(SensorMessage):
    header: Header = Field(default_factory=Header)
    angle_min: float = 0.0
    angle_max: float = 0.0
    angle_increment: float = 0.0
    time_increment: float = 0.0
    scan_time: float = 0.0
    range_min: float = 0.0
    range_max: float = 0.0
    ranges: list[float] = Field(default_factory=list)
    intensities: list[float] = Field(default_factory=list)


class MagneticField(SensorMessage):
    header: Header = Field(default_factory=Header)
    magnetic_field: Vector3 = Field(default_factory=Vector3)
    magnetic_field_covariance: list[float] = _zeros(9)


class NavSatStatus(SensorMessage):
    status: int = Field(0, ge=-1, le=2)
    service: int = 0


class NavSatFix(SensorMessage):
    header: Header = Field(default_factory=Header)
    status: NavSatStatus = Field(default_factory=NavSatStatus)
    latitude: float = 0.0
    longitude: float = 0.0
    altitude: float = 0.0
    position_covariance: list[float] = _zeros(9)
    position_covariance_type: int = Field(0, ge=0, le=3)


class BatteryState(SensorMessage):
    header: Header = Field(default_factory=Header)
    voltage: float = 0.0
    current: float = 0.0
    charge: float = 0.0
    capacity: float = 0.0
    design_capacity: float = 0.0
    percentage: float = 0.0
    power_supply_status: int = 0
    power_supply_health: int = 0
    power_supply_technology: int = 0
    present: bool = False


class PointField(SensorMessage):
    name: str = ""
    offset: int = Field(0, ge=0)
    datatype: int = Field(0, ge=0, le=8)
    count: int = Field(1, ge=0)


class PointCloud2(SensorMessage):
    header: Header = Field(default_factory=Header)
    height: int = Field(0, ge=0)
    width: int = Field(0, ge=0)
    fields: list[PointField] = Field(default_factory=list)
    is_bigendian: bool = False
    point_step: int = Field(0, ge=0)
    row_step: int = Field(0, ge=0)
    data: list[int] = Field(default_factory=list)
    is_dense: bool = False


class Odometry(Message):
    package: ClassVar[str] = "nav_msgs"

    header: Header = Field(default_factory=Header)
    child_frame_id: str = ""
    pose: PoseWithCovariance = Field(default_factory=PoseWithCovariance)
    twist: TwistWithCovariance = Field(default_factory=TwistWithCovariance)


class MapMetaData(Message):
    package: ClassVar[str] = "nav_msgs"

    resolution: float = 0.0
    width: int = Field(0, ge=0)
    height: int = Field(0, ge=0)
    origin_position: Point = Field(default_factory=Point)
    origin_orientation: Quaternion = Field(default_factory=Quaternion)


class OccupancyGrid(Message):
    package: ClassVar[str] = "nav_msgs"

    header: Header = Field(default_factory=Header)
    info: MapMetaData = Field(default_factory=MapMetaData)
    data: list[int] = Field(default_factory=list)


class Actuators(Message):
    package: ClassVar[str] = "mav_msgs"

    header: Header = Field(default_factory=Header)
    angles: list[float] = Field(default_factory=list)
    angular_velocities: list[float] = Field(default_factory=list)
    normalized: list[float] = Field(default_factory=list)


SCHEMAS = (
    Image,
    CameraInfo,
    FluidPressure,
    Imu,
    JointState,
    LaserScan,
    MagneticField,
    NavSatFix,
    BatteryState,
    PointCloud2,
    Odometry,
    OccupancyGrid,
    Actuators,
)
