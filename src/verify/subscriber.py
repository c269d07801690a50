"""Typed listener binding one channel to one message schema."""

from __future__ import annotations

import logging
from typing import Generic, Optional, TypeVar

from pydantic import ValidationError

from common.bus import MessageBus
from common.errors import SubscriptionError
from messages import Message, decode

from .oracle import FixtureOracle, Oracle, Verdict, as_verdict

M = TypeVar("M", bound=Message)

logger = logging.getLogger(__name__)


class TypedSubscriber(Generic[M]):
    """Decode deliveries on ``channel`` as ``schema`` and check them.

    The first delivery is decoded, handed to the oracle and then marks the
    subscriber complete, whatever the verdict. Later deliveries are ignored so
    a recorded outcome never changes.

    ``_complete`` is a plain attribute because callbacks only run inside
    ``MessageBus.spin_once`` on the caller's thread. Moving event processing
    to another thread requires replacing it with a ``threading.Event``.
    """

    def __init__(
        self,
        bus: MessageBus,
        channel: str,
        schema: type[M],
        oracle: Oracle,
    ) -> None:
        self.channel = channel
        self.schema = schema
        self._bus = bus
        self._oracle = oracle
        self._complete = False
        self._verdict: Optional[Verdict] = None
        self._message: Optional[M] = None
        try:
            self._subscription = bus.subscribe(channel, self._on_delivery)
        except SubscriptionError as exc:
            exc.schema_name = schema.schema_name()
            raise

    @classmethod
    def expecting(cls, bus: MessageBus, channel: str, expected: M) -> "TypedSubscriber[M]":
        """Subscribe with a ``FixtureOracle`` built from ``expected``."""

        return cls(bus, channel, type(expected), FixtureOracle(expected))

    def __enter__(self) -> "TypedSubscriber[M]":
        return self

    def __exit__(self, *_: object) -> None:
        self.close()

    @property
    def schema_name(self) -> str:
        return self.schema.schema_name()

    @property
    def verdict(self) -> Optional[Verdict]:
        return self._verdict

    @property
    def message(self) -> Optional[M]:
        return self._message

    @property
    def mismatch(self) -> bool:
        return self._verdict is not None and not self._verdict.passed

    def is_complete(self) -> bool:
        return self._complete

    def close(self) -> None:
        self._bus.unsubscribe(self._subscription)

    def _on_delivery(self, payload: bytes) -> None:
        if self._complete:
            logger.debug("Ignoring repeat delivery on %s", self.channel)
            return

        try:
            message = decode(self.schema, payload)
        except ValidationError as exc:
            logger.warning(
                "Could not decode %s on %s: %s",
                self.schema_name,
                self.channel,
                exc.errors(include_url=False),
            )
            self._verdict = Verdict.mismatch(f"payload is not a valid {self.schema_name}: {exc}")
        else:
            self._message = message
            try:
                self._verdict = as_verdict(self._oracle(message))
            except Exception as exc:
                # A raising oracle is a failed comparison, never a bus failure.
                self._verdict = Verdict.mismatch(f"oracle raised {exc!r}")
            if not self._verdict:
                logger.warning(
                    "Mismatch on %s (%s): %s",
                    self.channel,
                    self.schema_name,
                    self._verdict.detail,
                )

        self._complete = True


__all__ = ["TypedSubscriber"]
