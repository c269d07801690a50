"""Unit tests for the typed subscriber and its completion flag."""

from __future__ import annotations

import asyncio

import pytest

from common.bus import MessageBus
from common.errors import SubscriptionError
from messages import encode
from messages.geometry import Point
from messages.std import Bool, Int32
from verify.oracle import FixtureOracle, Verdict
from verify.subscriber import TypedSubscriber


class CountingOracle:
    def __init__(self, verdict: object = True) -> None:
        self.calls: list[object] = []
        self._verdict = verdict

    def __call__(self, message: object) -> object:
        self.calls.append(message)
        return self._verdict


@pytest.mark.asyncio
async def test_flag_is_set_by_delivery_during_spin() -> None:
    bus = MessageBus()
    subscriber = TypedSubscriber.expecting(bus, "bool", Bool(data=True))

    await bus.publish("bool", encode(Bool(data=True)))
    assert not subscriber.is_complete()

    bus.spin_once()

    assert subscriber.is_complete()
    assert subscriber.verdict == Verdict.ok()
    assert not subscriber.mismatch
    assert subscriber.message == Bool(data=True)


@pytest.mark.asyncio
async def test_mismatch_is_recorded_and_still_completes() -> None:
    bus = MessageBus()
    subscriber = TypedSubscriber.expecting(bus, "point", Point(x=1.0, y=2.0, z=3.0))

    await bus.publish("point", encode(Point(x=1.0, y=2.0, z=4.0)))
    bus.spin_once()

    assert subscriber.is_complete()
    assert subscriber.mismatch
    assert subscriber.verdict is not None
    assert "z" in subscriber.verdict.detail


@pytest.mark.asyncio
async def test_undecodable_payload_counts_as_mismatch() -> None:
    bus = MessageBus()
    oracle = CountingOracle()
    subscriber = TypedSubscriber(bus, "point", Point, oracle)

    await bus.publish("point", b'{"x": "not a number"}')
    bus.spin_once()

    assert subscriber.is_complete()
    assert subscriber.mismatch
    assert "geometry_msgs/Point" in subscriber.verdict.detail
    assert oracle.calls == []


@pytest.mark.asyncio
async def test_deliveries_after_the_first_are_ignored() -> None:
    bus = MessageBus()
    oracle = CountingOracle()
    subscriber = TypedSubscriber(bus, "bool", Bool, oracle)

    await bus.publish("bool", encode(Bool(data=True)))
    bus.spin_once()
    await bus.publish("bool", encode(Bool(data=False)))
    await bus.publish("bool", b"garbage")
    bus.spin_once()

    assert subscriber.is_complete()
    assert not subscriber.mismatch
    assert oracle.calls == [Bool(data=True)]


@pytest.mark.asyncio
async def test_failed_verdict_is_not_overwritten_by_a_later_match() -> None:
    bus = MessageBus()
    subscriber = TypedSubscriber(bus, "bool", Bool, FixtureOracle(Bool(data=True)))

    await bus.publish("bool", encode(Bool(data=False)))
    await bus.publish("bool", encode(Bool(data=True)))
    bus.spin_once()

    assert subscriber.mismatch


@pytest.mark.asyncio
async def test_bare_false_from_oracle_is_a_mismatch() -> None:
    bus = MessageBus()
    subscriber = TypedSubscriber(bus, "bool", Bool, CountingOracle(verdict=False))

    await bus.publish("bool", encode(Bool(data=True)))
    bus.spin_once()

    assert subscriber.is_complete()
    assert subscriber.mismatch


def test_sequential_subscribers_keep_separate_flags() -> None:
    async def _run() -> None:
        bus = MessageBus()
        with TypedSubscriber.expecting(bus, "bool", Bool(data=True)) as first:
            await bus.publish("bool", encode(Bool(data=True)))
            bus.spin_once()
            assert first.is_complete()

        assert bus.subscription_count("bool") == 0

        with TypedSubscriber.expecting(bus, "bool", Bool(data=True)) as second:
            bus.spin_once()
            assert not second.is_complete()
            assert first.is_complete()

            await bus.publish("bool", encode(Bool(data=True)))
            bus.spin_once()
            assert second.is_complete()

        assert first.is_complete()

    asyncio.run(_run())


def test_registration_failure_names_channel_and_schema() -> None:
    bus = MessageBus()
    with pytest.raises(SubscriptionError) as excinfo:
        TypedSubscriber.expecting(bus, "not a channel", Bool(data=True))

    assert excinfo.value.channel == "not a channel"
    assert excinfo.value.schema_name == "std_msgs/Bool"


@pytest.mark.asyncio
async def test_raising_oracle_is_recorded_as_mismatch() -> None:
    bus = MessageBus()

    def strict(message: Bool) -> bool:
        raise AssertionError("field mismatch")

    raising = TypedSubscriber(bus, "bool", Bool, strict)
    sibling = TypedSubscriber.expecting(bus, "int32", Int32(data=5))

    await bus.publish("bool", encode(Bool(data=True)))
    await bus.publish("int32", encode(Int32(data=5)))
    bus.spin_once()

    assert raising.is_complete()
    assert raising.mismatch
    assert "AssertionError('field mismatch')" in raising.verdict.detail
    assert sibling.is_complete()
    assert not sibling.mismatch
