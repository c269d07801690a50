"""Delivery verification: typed subscribers, bounded waits and scenario runs."""

from .driver import (  # noqa: F401
    HarnessReport,
    ScenarioResult,
    ScenarioSpec,
    run_all,
    run_scenario,
)
from .oracle import FixtureOracle, Oracle, Verdict, as_verdict  # noqa: F401
from .scenarios import DEFAULT_SCENARIOS, scenarios_from_config  # noqa: F401
from .subscriber import TypedSubscriber  # noqa: F401
from .waiting import DEFAULT_POLICY, WaitOutcome, WaitPolicy, wait_until  # noqa: F401

__all__ = [
    "DEFAULT_POLICY",
    "DEFAULT_SCENARIOS",
    "FixtureOracle",
    "HarnessReport",
    "Oracle",
    "ScenarioResult",
    "ScenarioSpec",
    "TypedSubscriber",
    "Verdict",
    "WaitOutcome",
    "WaitPolicy",
    "as_verdict",
    "run_all",
    "run_scenario",
    "scenarios_from_config",
    "wait_until",
]
