"""Comparison oracles that judge a decoded message against an expected value."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Callable, Generic, Optional, TypeVar

from messages import Message

M = TypeVar("M", bound=Message)

# Any callable returning something truthy for a match qualifies as an oracle.
Oracle = Callable[[Any], object]


@dataclass(frozen=True)
class Verdict:
    """Outcome of comparing one message; truthy when it matched."""

    passed: bool
    detail: str = ""

    def __bool__(self) -> bool:
        return self.passed

    @classmethod
    def ok(cls) -> "Verdict":
        return cls(True)

    @classmethod
    def mismatch(cls, detail: str) -> "Verdict":
        return cls(False, detail)


def as_verdict(result: object) -> Verdict:
    """Normalise whatever an oracle returned into a ``Verdict``."""

    if isinstance(result, Verdict):
        return result
    if result:
        return Verdict.ok()
    return Verdict.mismatch(f"oracle returned {result!r}")


class FixtureOracle(Generic[M]):
    """Compare every field of a message with a fixed expected instance.

    Floats are compared with ``math.isclose`` so that values which went
    through a single-precision field on the far side of the bridge still
    match. Everything else must be equal.
    """

    def __init__(self, expected: M, *, rel_tol: float = 1e-6, abs_tol: float = 1e-9) -> None:
        self.expected = expected
        self.rel_tol = rel_tol
        self.abs_tol = abs_tol

    def __call__(self, message: M) -> Verdict:
        if type(message) is not type(self.expected):
            return Verdict.mismatch(
                f"expected {self.expected.schema_name()}, got {type(message).__name__}"
            )
        difference = self._first_difference(
            self.expected.model_dump(), message.model_dump(), ""
        )
        if difference is None:
            return Verdict.ok()
        return Verdict.mismatch(difference)

    def _first_difference(self, expected: Any, actual: Any, path: str) -> Optional[str]:
        where = path or "<root>"
        if isinstance(expected, dict) and isinstance(actual, dict):
            for key, value in expected.items():
                if key not in actual:
                    return f"{_join(path, key)}: missing"
                found = self._first_difference(value, actual[key], _join(path, key))
                if found:
                    return found
            return None
        if isinstance(expected, list) and isinstance(actual, list):
            if len(expected) != len(actual):
                return f"{where}: expected {len(expected)} items, got {len(actual)}"
            for index, (want, got) in enumerate(zip(expected, actual)):
                found = self._first_difference(want, got, f"{path}[{index}]")
                if found:
                    return found
            return None
        if isinstance(expected, float) and isinstance(actual, (int, float)) and not isinstance(
            actual, bool
        ):
            if math.isnan(expected) and math.isnan(actual):
                return None
            if math.isclose(expected, actual, rel_tol=self.rel_tol, abs_tol=self.abs_tol):
                return None
            return f"{where}: expected {expected!r}, got {actual!r}"
        if type(expected) is not type(actual) or expected != actual:
            return f"{where}: expected {expected!r}, got {actual!r}"
        return None


def _join(path: str, key: str) -> str:
    return f"{path}.{key}" if path else key


__all__ = ["FixtureOracle", "Oracle", "Verdict", "as_verdict"]
