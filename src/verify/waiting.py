"""Bounded cooperative polling between bus spins."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Awaitable, Callable

FlagReader = Callable[[], bool]
Spin = Callable[[], object]
Sleep = Callable[[float], Awaitable[None]]


@dataclass(frozen=True)
class WaitPolicy:
    """How long to wait for a flag: ``max_iterations`` polls ``interval`` apart."""

    interval: float = 0.010
    max_iterations: int = 200

    def __post_init__(self) -> None:
        if self.interval < 0:
            raise ValueError(f"interval must be >= 0, got {self.interval!r}")
        if self.max_iterations < 1:
            raise ValueError(f"max_iterations must be >= 1, got {self.max_iterations!r}")

    @property
    def budget(self) -> float:
        """Worst case time spent sleeping, in seconds."""

        return self.interval * self.max_iterations


DEFAULT_POLICY = WaitPolicy()


@dataclass(frozen=True)
class WaitOutcome:
    completed: bool
    iterations: int
    elapsed: float  # sum of requested sleeps, not wall clock

    def __bool__(self) -> bool:
        return self.completed


async def wait_until(
    flag_reader: FlagReader,
    policy: WaitPolicy = DEFAULT_POLICY,
    *,
    spin: Spin,
    sleep: Sleep = asyncio.sleep,
) -> WaitOutcome:
    """Spin, check ``flag_reader``, sleep; repeat until set or out of budget.

    ``spin`` is the only place delivery callbacks may run, so the flag is only
    ever read between two spins. A flag that is already set costs one spin and
    no sleep. A flag that never gets set costs exactly
    ``policy.max_iterations`` spins and sleeps and yields a timed-out outcome
    rather than an exception.
    """

    elapsed = 0.0
    for iteration in range(1, policy.max_iterations + 1):
        spin()
        if flag_reader():
            return WaitOutcome(completed=True, iterations=iteration, elapsed=elapsed)
        await sleep(policy.interval)
        elapsed += policy.interval
    return WaitOutcome(completed=False, iterations=policy.max_iterations, elapsed=elapsed)


__all__ = ["DEFAULT_POLICY", "WaitOutcome", "WaitPolicy", "wait_until"]
