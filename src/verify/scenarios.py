"""The channel table exercised by a harness run, and loading it from config."""

from __future__ import annotations

from typing import Any, Iterable, Mapping, Optional

from common.config import as_float, as_int, as_list, as_mapping
from messages import Message, resolve_schema
from messages.geometry import (
    Point,
    Pose,
    PoseArray,
    PoseStamped,
    PoseWithCovariance,
    Quaternion,
    TFMessage,
    Transform,
    TransformStamped,
    Twist,
    TwistWithCovariance,
    Vector3,
)
from messages.sensor import (
    Actuators,
    BatteryState,
    CameraInfo,
    FluidPressure,
    Image,
    Imu,
    JointState,
    LaserScan,
    MagneticField,
    MapMetaData,
    NavSatFix,
    NavSatStatus,
    OccupancyGrid,
    Odometry,
    PointCloud2,
    PointField,
)
from messages.std import (
    Bool,
    Clock,
    ColorRGBA,
    Duration,
    Empty,
    Float32,
    Float64,
    Header,
    Int32,
    String,
    Time,
)
from messages.visualization import Marker, MarkerArray

from .driver import ScenarioSpec
from .waiting import WaitPolicy

HEADER = Header(stamp=Time(sec=2, nanosec=3), frame_id="frame_id_value")
POINT = Point(x=1.0, y=2.0, z=3.0)
QUATERNION = Quaternion(x=1.0, y=2.0, z=3.0, w=4.0)
VECTOR3 = Vector3(x=1.0, y=2.0, z=3.0)
POSE = Pose(position=POINT, orientation=QUATERNION)
TRANSFORM = Transform(translation=VECTOR3, rotation=QUATERNION)
TRANSFORM_STAMPED = TransformStamped(
    header=HEADER, child_frame_id="child_frame_id_value", transform=TRANSFORM
)
TWIST = Twist(linear=VECTOR3, angular=VECTOR3)
COVARIANCE_3 = [float(i) for i in range(1, 10)]
COVARIANCE_6 = [float(i) for i in range(1, 37)]
MARKER = Marker(
    header=HEADER,
    ns="ns_value",
    id=1,
    type=Marker.CUBE,
    action=Marker.ADD,
    pose=POSE,
    scale=VECTOR3,
    color=ColorRGBA(r=0.1, g=0.2, b=0.3, a=1.0),
    lifetime=Duration(sec=4, nanosec=5),
    frame_locked=True,
    points=[POINT],
    colors=[ColorRGBA(r=1.0, g=0.0, b=0.0, a=1.0)],
    text="text_value",
)

FIXTURES: tuple[tuple[str, Message], ...] = (
    ("bool", Bool(data=True)),
    ("color", ColorRGBA(r=0.2, g=0.4, b=0.6, a=0.8)),
    ("empty", Empty()),
    ("int32", Int32(data=5)),
    ("float", Float32(data=1.5)),
    ("double", Float64(data=1.5)),
    ("header", HEADER),
    ("string", String(data="string")),
    ("quaternion", QUATERNION),
    ("vector3", VECTOR3),
    ("clock", Clock(clock=Time(sec=1, nanosec=2))),
    ("point", POINT),
    ("pose", POSE),
    ("pose_array", PoseArray(header=HEADER, poses=[POSE])),
    ("pose_stamped", PoseStamped(header=HEADER, pose=POSE)),
    ("transform", TRANSFORM),
    ("transform_stamped", TRANSFORM_STAMPED),
    ("tf2_message", TFMessage(transforms=[TRANSFORM_STAMPED])),
    ("twist", TWIST),
    (
        "image",
        Image(
            header=HEADER,
            height=2,
            width=2,
            encoding="rgb8",
            step=6,
            data=list(range(12)),
        ),
    ),
    (
        "camera_info",
        CameraInfo(
            header=HEADER,
            height=240,
            width=320,
            distortion_model="plumb_bob",
            d=[1.0, 2.0, 3.0, 4.0, 5.0],
            k=COVARIANCE_3,
            r=COVARIANCE_3,
            p=[float(i) for i in range(1, 13)],
        ),
    ),
    ("fluid_pressure", FluidPressure(header=HEADER, fluid_pressure=0.123, variance=0.456)),
    (
        "imu",
        Imu(
            header=HEADER,
            orientation=QUATERNION,
            orientation_covariance=COVARIANCE_3,
            angular_velocity=VECTOR3,
            angular_velocity_covariance=COVARIANCE_3,
            linear_acceleration=VECTOR3,
            linear_acceleration_covariance=COVARIANCE_3,
        ),
    ),
    (
        "joint_states",
        JointState(
            header=HEADER,
            name=["joint_0", "joint_1", "joint_2"],
            position=[1.0, 1.0, 1.0],
            velocity=[2.0, 2.0, 2.0],
            effort=[3.0, 3.0, 3.0],
        ),
    ),
    (
        "laserscan",
        LaserScan(
            header=HEADER,
            angle_min=-1.57,
            angle_max=1.57,
            angle_increment=0.01,
            time_increment=0.0,
            scan_time=0.0,
            range_min=1.0,
            range_max=2.0,
            ranges=[1.5] * 8,
            intensities=[0.5] * 8,
        ),
    ),
    (
        "magnetic",
        MagneticField(
            header=HEADER, magnetic_field=VECTOR3, magnetic_field_covariance=COVARIANCE_3
        ),
    ),
    (
        "navsat",
        NavSatFix(
            header=HEADER,
            status=NavSatStatus(status=0, service=1),
            latitude=0.00001,
            longitude=0.00002,
            altitude=0.00003,
            position_covariance=COVARIANCE_3,
            position_covariance_type=3,
        ),
    ),
    (
        "actuators",
        Actuators(
            header=HEADER,
            angles=[0.0, 1.0, 2.0, 3.0, 4.0],
            angular_velocities=[0.0, 1.0, 2.0, 3.0, 4.0],
            normalized=[0.0, 1.0, 2.0, 3.0, 4.0],
        ),
    ),
    (
        "map",
        OccupancyGrid(
            header=HEADER,
            info=MapMetaData(
                resolution=0.05,
                width=4,
                height=2,
                origin_position=POINT,
                origin_orientation=QUATERNION,
            ),
            data=[0, 100, -1, 0, 100, -1, 0, 100],
        ),
    ),
    (
        "odometry",
        Odometry(
            header=HEADER,
            child_frame_id="child_frame_id_value",
            pose=PoseWithCovariance(pose=POSE, covariance=COVARIANCE_6),
            twist=TwistWithCovariance(twist=TWIST, covariance=COVARIANCE_6),
        ),
    ),
    (
        "battery_state",
        BatteryState(
            header=HEADER,
            voltage=123.0,
            current=456.0,
            charge=789.0,
            capacity=321.0,
            design_capacity=654.0,
            percentage=987.0,
            power_supply_status=2,
            power_supply_health=2,
            power_supply_technology=2,
            present=True,
        ),
    ),
    (
        "pointcloud2",
        PointCloud2(
            header=HEADER,
            height=1,
            width=2,
            fields=[
                PointField(name="x", offset=0, datatype=7, count=1),
                PointField(name="y", offset=4, datatype=7, count=1),
            ],
            point_step=8,
            row_step=16,
            data=list(range(16)),
            is_dense=True,
        ),
    ),
    ("marker", MARKER),
    ("marker_array", MarkerArray(markers=[MARKER, MARKER.model_copy(update={"id": 2})])),
)

DEFAULT_SCENARIOS: tuple[ScenarioSpec, ...] = tuple(
    ScenarioSpec(channel=channel, schema=type(expected), expected=expected)
    for channel, expected in FIXTURES
)


def build_wait_policy(
    raw: object, default: Optional[WaitPolicy] = None
) -> Optional[WaitPolicy]:
    """Build a ``WaitPolicy`` from a ``{interval_ms, max_iterations}`` mapping.

    Returns ``default`` when ``raw`` carries neither key.
    """

    wait_cfg = as_mapping(raw)
    if "interval_ms" not in wait_cfg and "max_iterations" not in wait_cfg:
        return default
    base = default or WaitPolicy()
    return WaitPolicy(
        interval=as_float(wait_cfg.get("interval_ms"), base.interval * 1000.0) / 1000.0,
        max_iterations=as_int(wait_cfg.get("max_iterations"), base.max_iterations),
    )


def scenarios_from_config(entries: object) -> tuple[ScenarioSpec, ...]:
    """Parse a ``scenarios:`` list from YAML into scenario specs.

    Each entry needs ``channel`` and ``schema`` (``package/Name``). ``expected``
    holds the fixture fields and defaults to the schema's defaults; ``wait``
    overrides the run-wide policy for that row.
    """

    specs: list[ScenarioSpec] = []
    for index, raw in enumerate(as_list(entries)):
        if not isinstance(raw, Mapping):
            raise ValueError(f"Scenario #{index} must be a mapping, got {type(raw)!r}")
        channel = str(raw.get("channel", "")).strip()
        schema_name = str(raw.get("schema", "")).strip()
        if not channel or not schema_name:
            raise ValueError(f"Scenario #{index} needs both 'channel' and 'schema'")
        schema = resolve_schema(schema_name)
        expected_raw: Mapping[str, Any] = as_mapping(raw.get("expected"))
        specs.append(
            ScenarioSpec(
                channel=channel,
                schema=schema,
                expected=schema.model_validate(dict(expected_raw)),
                policy=build_wait_policy(raw.get("wait")),
            )
        )
    return tuple(specs)


def select(
    scenarios: Iterable[ScenarioSpec], channels: Optional[Iterable[str]] = None
) -> tuple[ScenarioSpec, ...]:
    """Keep only the scenarios for ``channels`` (all of them when ``None``)."""

    if not channels:
        return tuple(scenarios)
    wanted = set(channels)
    return tuple(scenario for scenario in scenarios if scenario.channel in wanted)


__all__ = [
    "DEFAULT_SCENARIOS",
    "FIXTURES",
    "build_wait_policy",
    "scenarios_from_config",
    "select",
]
