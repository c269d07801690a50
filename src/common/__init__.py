"""Common utilities shared across the delivery harness."""

from .bus import MessageBus, Subscription  # noqa: F401
from .config import load_config  # noqa: F401
from .errors import (  # noqa: F401
    ComparisonMismatch,
    DeliveryTimeoutError,
    HarnessError,
    SubscriptionError,
)
from .logging import setup_logging  # noqa: F401

__all__ = [
    "ComparisonMismatch",
    "DeliveryTimeoutError",
    "HarnessError",
    "MessageBus",
    "Subscription",
    "SubscriptionError",
    "load_config",
    "setup_logging",
]
