"""Periodic publisher that plays the far side of the bridge in-process."""

from __future__ import annotations

import asyncio
import logging
from typing import Iterable, Optional

from common.bus import MessageBus
from messages import encode
from verify.driver import ScenarioSpec

logger = logging.getLogger(__name__)


class LoopbackPublisher:
    """Republish every scenario's expected message on its channel.

    Publishing repeats every ``period`` seconds because a subscriber only sees
    messages published after it registered.
    """

    def __init__(
        self,
        bus: MessageBus,
        scenarios: Iterable[ScenarioSpec],
        period: float = 0.02,
    ) -> None:
        self.name = "loopback-publisher"
        self._bus = bus
        self._payloads = [(scenario.channel, encode(scenario.expected)) for scenario in scenarios]
        self._period = period
        self._stopped = asyncio.Event()
        self._task: Optional[asyncio.Task[None]] = None

    @property
    def stopped(self) -> bool:
        return self._stopped.is_set()

    async def start(self) -> None:
        """Start the publishing loop."""

        if self._task and not self._task.done():
            logger.debug("%s already running", self.name)
            return

        self._stopped.clear()
        self._task = asyncio.create_task(self._run(), name=self.name)

    async def stop(self) -> None:
        """Signal the loop to stop and wait for the background task."""

        self._stopped.set()
        if self._task:
            await self._task

    async def publish_once(self) -> None:
        for channel, payload in self._payloads:
            await self._bus.publish(channel, payload)

    async def _run(self) -> None:
        logger.info("%s publishing %d channels", self.name, len(self._payloads))
        while not self._stopped.is_set():
            try:
                await self.publish_once()
            except asyncio.CancelledError:  # pragma: no cover - cooperative shutdown
                raise
            except Exception as exc:  # pragma: no cover - logged for operators
                logger.exception("%s errored: %s", self.name, exc)
            try:
                await asyncio.wait_for(self._stopped.wait(), timeout=self._period)
            except asyncio.TimeoutError:
                continue
        logger.info("%s stopped", self.name)


__all__ = ["LoopbackPublisher"]
