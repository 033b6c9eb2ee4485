"""Identifier allocation and wall-clock sources for the library store."""

from __future__ import annotations

import itertools
import time
from collections.abc import Callable
from datetime import datetime, timezone
from typing import Protocol, runtime_checkable

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    """Default clock: timezone-aware current time in UTC."""
    return datetime.now(timezone.utc)


@runtime_checkable
class IdGenerator(Protocol):
    """Source of identifiers that never repeat within a process."""

    def __call__(self) -> str:
        """Return a fresh identifier."""
        ...


class CounterIdGenerator:
    """Sequential ids ("1", "2", ...), deterministic for tests."""

    def __init__(self, start: int = 1, prefix: str = "") -> None:
        self._counter = itertools.count(start)
        self._prefix = prefix

    def __call__(self) -> str:
        return f"{self._prefix}{next(self._counter)}"


class TimestampIdGenerator:
    """Millisecond wall-clock ids, bumped so consecutive ids strictly increase.

    Two allocations inside the same millisecond (or after the clock steps
    backwards) still get distinct, increasing values.
    """

    def __init__(self, now_ms: Callable[[], int] | None = None) -> None:
        self._now_ms = now_ms or (lambda: time.time_ns() // 1_000_000)
        self._last = 0

    def __call__(self) -> str:
        value = max(self._now_ms(), self._last + 1)
        self._last = value
        return str(value)


__all__ = [
    "Clock",
    "CounterIdGenerator",
    "IdGenerator",
    "TimestampIdGenerator",
    "utc_now",
]
