"""In-process message bus with named channels and explicit event processing."""

from __future__ import annotations

import asyncio
import itertools
import logging
import re
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Callable

from .errors import SubscriptionError

logger = logging.getLogger(__name__)

DeliveryCallback = Callable[[bytes], None]

_CHANNEL_RE = re.compile(r"^[A-Za-z_~/][A-Za-z0-9_/~]*$")


def validate_channel(channel: str) -> str:
    """Return ``channel`` unchanged or raise ``ValueError`` if it is malformed."""

    if not isinstance(channel, str) or not _CHANNEL_RE.match(channel):
        raise ValueError(f"Invalid channel name {channel!r}")
    if "//" in channel:
        raise ValueError(f"Invalid channel name {channel!r}: empty path segment")
    return channel


@dataclass(eq=False)
class Subscription:
    """Handle for one registered callback on one channel."""

    id: int
    channel: str
    callback: DeliveryCallback
    queue: asyncio.Queue[bytes] = field(repr=False)


class MessageBus:
    """Channel-keyed publisher whose callbacks only run inside ``spin_once``.

    ``publish`` enqueues raw payloads for every subscription on the channel.
    Nothing is delivered until ``spin_once`` drains the pending queues, so a
    caller that alternates spinning and checking state never observes a
    callback half way through.
    """

    def __init__(self, max_subscriptions: int = 1024, queue_size: int = 1000) -> None:
        self._subscriptions: dict[str, set[Subscription]] = {}
        self._lock = asyncio.Lock()
        self._ids = itertools.count(1)
        self._max_subscriptions = max_subscriptions
        self._queue_size = queue_size
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def subscription_count(self, channel: str | None = None) -> int:
        if channel is not None:
            return len(self._subscriptions.get(channel, ()))
        return sum(len(subs) for subs in self._subscriptions.values())

    async def publish(self, channel: str, payload: bytes) -> None:
        """Queue ``payload`` for every subscription currently on ``channel``."""

        async with self._lock:
            queues: Iterable[asyncio.Queue[bytes]] = tuple(
                sub.queue for sub in self._subscriptions.get(channel, ())
            )

        if not queues:
            return

        await asyncio.gather(*(queue.put(payload) for queue in queues))

    def subscribe(self, channel: str, callback: DeliveryCallback) -> Subscription:
        """Register ``callback`` for deliveries on ``channel``."""

        if self._closed:
            raise SubscriptionError("Message bus is closed", channel=channel)
        try:
            validate_channel(channel)
        except ValueError as exc:
            raise SubscriptionError(str(exc), channel=channel) from exc
        if self.subscription_count() >= self._max_subscriptions:
            raise SubscriptionError(
                f"Subscription limit of {self._max_subscriptions} reached",
                channel=channel,
            )

        subscription = Subscription(
            id=next(self._ids),
            channel=channel,
            callback=callback,
            queue=asyncio.Queue(maxsize=self._queue_size),
        )
        self._subscriptions.setdefault(channel, set()).add(subscription)
        logger.debug("Subscribed #%d to %s", subscription.id, channel)
        return subscription

    def unsubscribe(self, subscription: Subscription) -> None:
        """Remove a subscription and drop anything still queued for it."""

        subs = self._subscriptions.get(subscription.channel)
        if subs is None:
            return
        subs.discard(subscription)
        if not subs:
            del self._subscriptions[subscription.channel]
        _drain(subscription.queue)
        logger.debug("Unsubscribed #%d from %s", subscription.id, subscription.channel)

    def spin_once(self) -> int:
        """Run callbacks for every payload queued so far and return the count.

        Payloads published by a callback while spinning wait for the next call.
        """

        pending: list[tuple[Subscription, bytes]] = []
        for subs in tuple(self._subscriptions.values()):
            for sub in tuple(subs):
                while not sub.queue.empty():
                    pending.append((sub, sub.queue.get_nowait()))
                    sub.queue.task_done()

        delivered = 0
        for sub, payload in pending:
            if sub not in self._subscriptions.get(sub.channel, ()):
                continue
            sub.callback(payload)
            delivered += 1
        return delivered

    async def close(self) -> None:
        """Remove all subscriptions and drain any pending payloads."""

        async with self._lock:
            subs = [sub for group in self._subscriptions.values() for sub in group]
            self._subscriptions.clear()
            self._closed = True

        for sub in subs:
            _drain(sub.queue)


def _drain(queue: asyncio.Queue[bytes]) -> None:
    while not queue.empty():
        queue.get_nowait()
        queue.task_done()


__all__ = ["DeliveryCallback", "MessageBus", "Subscription", "validate_channel"]
