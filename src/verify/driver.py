"""Run delivery scenarios: subscribe, wait for the message, judge the outcome."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Iterable, Optional

from common.bus import MessageBus
from common.errors import ComparisonMismatch, DeliveryTimeoutError, HarnessError
from messages import Message

from .oracle import FixtureOracle, Oracle
from .subscriber import TypedSubscriber
from .waiting import DEFAULT_POLICY, Sleep, WaitOutcome, WaitPolicy, wait_until

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ScenarioSpec:
    """One row of the scenario table."""

    channel: str
    schema: type[Message]
    expected: Message
    oracle: Optional[Oracle] = None
    policy: Optional[WaitPolicy] = None

    def __post_init__(self) -> None:
        if not isinstance(self.expected, self.schema):
            raise ValueError(
                f"Expected fixture for {self.channel!r} is a "
                f"{type(self.expected).__name__}, not {self.schema.schema_name()}"
            )

    @property
    def schema_name(self) -> str:
        return self.schema.schema_name()

    def build_oracle(self) -> Oracle:
        return self.oracle or FixtureOracle(self.expected)


@dataclass
class ScenarioResult:
    channel: str
    schema_name: str
    passed: bool
    iterations: int = 0
    error: Optional[HarnessError] = None


@dataclass
class HarnessReport:
    """Pass/fail aggregation of a harness run."""

    results: list[ScenarioResult] = field(default_factory=list)

    @property
    def passed(self) -> list[ScenarioResult]:
        return [result for result in self.results if result.passed]

    @property
    def failed(self) -> list[ScenarioResult]:
        return [result for result in self.results if not result.passed]

    @property
    def exit_code(self) -> int:
        return 0 if not self.failed else 1


async def run_scenario(
    bus: MessageBus,
    scenario: ScenarioSpec,
    *,
    policy: Optional[WaitPolicy] = None,
    sleep: Sleep = asyncio.sleep,
) -> WaitOutcome:
    """Wait for the scenario's message and raise if it is missing or wrong.

    Raises:
        SubscriptionError: the bus refused the channel.
        DeliveryTimeoutError: nothing arrived within the wait budget.
        ComparisonMismatch: a message arrived but the oracle rejected it.
    """

    effective = scenario.policy or policy or DEFAULT_POLICY
    with TypedSubscriber(
        bus, scenario.channel, scenario.schema, scenario.build_oracle()
    ) as subscriber:
        outcome = await wait_until(
            subscriber.is_complete, effective, spin=bus.spin_once, sleep=sleep
        )

    if not outcome.completed:
        raise DeliveryTimeoutError(
            f"No {scenario.schema_name} message received on {scenario.channel!r} "
            f"within {effective.budget:.3f}s ({effective.max_iterations} polls)",
            channel=scenario.channel,
            schema_name=scenario.schema_name,
        )
    if subscriber.mismatch:
        assert subscriber.verdict is not None
        raise ComparisonMismatch(
            f"{scenario.schema_name} on {scenario.channel!r} did not match: "
            f"{subscriber.verdict.detail}",
            channel=scenario.channel,
            schema_name=scenario.schema_name,
        )
    return outcome


async def run_all(
    bus: MessageBus,
    scenarios: Iterable[ScenarioSpec],
    *,
    policy: Optional[WaitPolicy] = None,
    sleep: Sleep = asyncio.sleep,
) -> HarnessReport:
    """Run each scenario in turn; a failure never stops the ones after it."""

    report = HarnessReport()
    for scenario in scenarios:
        logger.debug("Waiting for %s on %s", scenario.schema_name, scenario.channel)
        try:
            outcome = await run_scenario(bus, scenario, policy=policy, sleep=sleep)
        except HarnessError as exc:
            logger.error("FAIL %s (%s): %s", scenario.channel, scenario.schema_name, exc)
            report.results.append(
                ScenarioResult(
                    channel=scenario.channel,
                    schema_name=scenario.schema_name,
                    passed=False,
                    error=exc,
                )
            )
            continue

        logger.info(
            "PASS %s (%s) after %d polls",
            scenario.channel,
            scenario.schema_name,
            outcome.iterations,
        )
        report.results.append(
            ScenarioResult(
                channel=scenario.channel,
                schema_name=scenario.schema_name,
                passed=True,
                iterations=outcome.iterations,
            )
        )

    logger.info(
        "%d/%d scenarios passed", len(report.passed), len(report.results)
    )
    return report


__all__ = [
    "HarnessReport",
    "ScenarioResult",
    "ScenarioSpec",
    "run_all",
    "run_scenario",
]
