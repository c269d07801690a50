from __future__ import annotations

from pathlib import Path

import pytest
import yaml

from common import load_config
from messages import REGISTRY, resolve_schema
from messages.geometry import Point
from messages.std import Bool, Header
from verify.scenarios import (
    DEFAULT_SCENARIOS,
    build_wait_policy,
    scenarios_from_config,
    select,
)
from verify.waiting import WaitPolicy


def test_default_table_has_one_scenario_per_channel():
    channels = [scenario.channel for scenario in DEFAULT_SCENARIOS]
    assert len(channels) == len(set(channels))
    assert 25 <= len(channels) <= 40
    assert {"bool", "point", "imu", "odometry", "tf2_message"} <= set(channels)


def test_default_table_covers_markers_and_point_clouds():
    by_channel = {scenario.channel: scenario for scenario in DEFAULT_SCENARIOS}
    assert {"marker", "marker_array", "pointcloud2"} <= set(by_channel)
    assert by_channel["marker"].schema_name == "visualization_msgs/Marker"
    assert by_channel["marker_array"].schema_name == "visualization_msgs/MarkerArray"
    assert by_channel["pointcloud2"].schema_name == "sensor_msgs/PointCloud2"
    assert len(by_channel["marker_array"].expected.markers) == 2


def test_default_fixtures_use_registered_schemas():
    for scenario in DEFAULT_SCENARIOS:
        assert isinstance(scenario.expected, scenario.schema)
        assert REGISTRY[scenario.schema_name] is scenario.schema


def test_resolve_schema_rejects_unknown_names():
    assert resolve_schema("geometry_msgs/Point") is Point
    with pytest.raises(ValueError, match="Unknown message schema"):
        resolve_schema("geometry_msgs/Nope")


def test_scenarios_load_from_yaml_with_env_expansion(tmp_path: Path, monkeypatch):
    monkeypatch.setenv("HARNESS_FRAME", "base_link")
    config_path = tmp_path / "config.yaml"
    config_path.write_text(
        yaml.safe_dump(
            {
                "scenarios": [
                    {"channel": "bool", "schema": "std_msgs/Bool", "expected": {"data": True}},
                    {
                        "channel": "/robot/header",
                        "schema": "std_msgs/Header",
                        "expected": {
                            "stamp": {"sec": 4, "nanosec": 5},
                            "frame_id": "${HARNESS_FRAME}",
                        },
                        "wait": {"interval_ms": 5, "max_iterations": 40},
                    },
                ]
            }
        )
    )

    scenarios = scenarios_from_config(load_config(config_path)["scenarios"])

    assert [s.channel for s in scenarios] == ["bool", "/robot/header"]
    assert scenarios[0].expected == Bool(data=True)
    assert scenarios[0].policy is None
    header = scenarios[1].expected
    assert isinstance(header, Header)
    assert header.frame_id == "base_link"
    assert header.stamp.sec == 4
    assert scenarios[1].policy == WaitPolicy(interval=0.005, max_iterations=40)


def test_expected_defaults_to_schema_defaults():
    (scenario,) = scenarios_from_config([{"channel": "point", "schema": "geometry_msgs/Point"}])
    assert scenario.expected == Point()


@pytest.mark.parametrize(
    "entry",
    [
        "bool",
        {"schema": "std_msgs/Bool"},
        {"channel": "bool"},
        {"channel": "bool", "schema": "std_msgs/Missing"},
    ],
)
def test_invalid_scenario_entries_are_rejected(entry):
    with pytest.raises(ValueError):
        scenarios_from_config([entry])


def test_expected_fields_are_validated():
    with pytest.raises(ValueError):
        scenarios_from_config(
            [{"channel": "bool", "schema": "std_msgs/Bool", "expected": {"bogus": 1}}]
        )


def test_build_wait_policy_merges_with_default():
    assert build_wait_policy(None) is None
    assert build_wait_policy({}, WaitPolicy()) == WaitPolicy()
    assert build_wait_policy({"max_iterations": 10}, WaitPolicy()) == WaitPolicy(
        interval=0.010, max_iterations=10
    )
    assert build_wait_policy({"interval_ms": 50}) == WaitPolicy(interval=0.05, max_iterations=200)
    with pytest.raises(ValueError):
        build_wait_policy({"max_iterations": 0})


def test_select_filters_by_channel():
    assert select(DEFAULT_SCENARIOS) == DEFAULT_SCENARIOS
    picked = select(DEFAULT_SCENARIOS, ["point", "bool"])
    assert [scenario.channel for scenario in picked] == ["bool", "point"]
    assert select(DEFAULT_SCENARIOS, ["nothing"]) == ()


def test_load_config_without_path_is_empty():
    assert load_config(None) == {}


def test_load_config_rejects_non_mapping_root(tmp_path: Path):
    path = tmp_path / "config.yaml"
    path.write_text("- just\n- a list\n")
    with pytest.raises(ValueError, match="mapping"):
        load_config(path)
