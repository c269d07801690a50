from messages.geometry import Point, Pose, PoseArray, Quaternion
from messages.std import Bool, Float32
from verify.oracle import FixtureOracle, Verdict, as_verdict


def test_identical_message_passes():
    expected = Point(x=1.0, y=2.0, z=3.0)
    verdict = FixtureOracle(expected)(Point(x=1.0, y=2.0, z=3.0))
    assert verdict
    assert verdict.detail == ""


def test_single_field_off_is_reported_with_its_path():
    oracle = FixtureOracle(Point(x=1.0, y=2.0, z=3.0))
    verdict = oracle(Point(x=1.0, y=2.5, z=3.0))
    assert not verdict
    assert verdict.detail == "y: expected 2.0, got 2.5"


def test_nested_field_path():
    expected = Pose(position=Point(x=1.0), orientation=Quaternion(w=1.0))
    verdict = FixtureOracle(expected)(
        Pose(position=Point(x=1.0), orientation=Quaternion(w=0.0))
    )
    assert not verdict
    assert verdict.detail.startswith("orientation.w:")


def test_list_length_and_items_are_checked():
    pose = Pose(position=Point(x=1.0))
    oracle = FixtureOracle(PoseArray(poses=[pose]))

    short = oracle(PoseArray(poses=[]))
    assert not short
    assert "poses: expected 1 items, got 0" in short.detail

    wrong = oracle(PoseArray(poses=[Pose(position=Point(x=9.0))]))
    assert not wrong
    assert wrong.detail.startswith("poses[0].position.x:")


def test_float_tolerance_absorbs_single_precision_rounding():
    oracle = FixtureOracle(Float32(data=0.1))
    assert oracle(Float32(data=0.10000000149011612))
    assert not oracle(Float32(data=0.1001))


def test_wrong_schema_is_a_mismatch():
    verdict = FixtureOracle(Bool(data=True))(Float32(data=1.0))
    assert not verdict
    assert "std_msgs/Bool" in verdict.detail


def test_as_verdict_accepts_bool_like_results():
    assert as_verdict(True) == Verdict.ok()
    assert as_verdict(1)
    failed = as_verdict(False)
    assert not failed
    assert "False" in failed.detail
    explicit = Verdict.mismatch("off by one")
    assert as_verdict(explicit) is explicit
