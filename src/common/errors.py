"""Exceptions raised while verifying deliveries on a channel."""

from __future__ import annotations

from typing import Optional


class HarnessError(Exception):
    """Base class for failures that end a single scenario."""

    def __init__(
        self,
        message: str,
        *,
        channel: Optional[str] = None,
        schema_name: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.channel = channel
        self.schema_name = schema_name


class SubscriptionError(HarnessError):
    """The bus refused to register a subscription."""


class DeliveryTimeoutError(HarnessError):
    """No message arrived on the channel within the wait budget."""


class ComparisonMismatch(HarnessError):
    """A message arrived but did not match the expected fixture."""


__all__ = [
    "ComparisonMismatch",
    "DeliveryTimeoutError",
    "HarnessError",
    "SubscriptionError",
]
