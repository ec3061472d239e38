"""Reactive primitives used to wire the calendar pipeline.

Three small building blocks cover everything the view model needs:

- ``Stream``: holds the last published value, replays it to new subscribers and
  only forwards values that differ structurally from the previous one.
- ``Signal``: fire-and-forget unit notifications (no replay, no gating).
- ``Memo``: caches the result of a pure function for its last arguments so a
  stage is only recomputed when one of its inputs changed.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Generic, List, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")

Unsubscribe = Callable[[], None]

__all__ = ["NO_VALUE", "Stream", "Signal", "Memo", "Unsubscribe"]


class _NoValue:
    """Sentinel type for a stream that has not published yet."""

    _instance = None

    def __new__(cls) -> "_NoValue":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "NO_VALUE"

    def __bool__(self) -> bool:
        return False


NO_VALUE: Any = _NoValue()


class Stream(Generic[T]):
    """A replay-last, equality-gated value stream."""

    def __init__(self, name: str, initial: Any = NO_VALUE) -> None:
        self.name = name
        self._value: Any = initial
        self._subscribers: List[Callable[[T], None]] = []
        self._emissions = 0

    @property
    def has_value(self) -> bool:
        return self._value is not NO_VALUE

    @property
    def value(self) -> T:
        """Latest published value.

        Raises:
            LookupError: If nothing has been published yet
        """
        if self._value is NO_VALUE:
            raise LookupError(f"Stream '{self.name}' has no value yet")
        return self._value  # type: ignore[no-any-return]

    @property
    def emissions(self) -> int:
        """Number of values forwarded so far."""
        return self._emissions

    def publish(self, value: T) -> bool:
        """Publish a value if it differs from the last one.

        Returns True if the value was forwarded to subscribers.
        """
        if self._value is not NO_VALUE and self._value == value:
            return False
        self._value = value
        self._emissions += 1
        for callback in list(self._subscribers):
            callback(value)
        return True

    def subscribe(self, callback: Callable[[T], None]) -> Unsubscribe:
        """Register a callback, replaying the latest value immediately."""
        self._subscribers.append(callback)
        if self._value is not NO_VALUE:
            callback(self._value)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    def __repr__(self) -> str:
        return f"Stream({self.name!r}, value={self._value!r})"


class Signal:
    """Unit notification without replay or de-duplication."""

    def __init__(self, name: str) -> None:
        self.name = name
        self._listeners: List[Callable[[], None]] = []

    def connect(self, listener: Callable[[], None]) -> Unsubscribe:
        self._listeners.append(listener)

        def disconnect() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return disconnect

    def emit(self) -> None:
        logger.debug(f"Signal emitted: {self.name}")
        for listener in list(self._listeners):
            listener()

    @property
    def listener_count(self) -> int:
        return len(self._listeners)


class Memo(Generic[T]):
    """Recompute a pure function only when its arguments change."""

    def __init__(self, fn: Callable[..., T]) -> None:
        self._fn = fn
        self._args: Any = NO_VALUE
        self._result: Any = NO_VALUE
        self.calls = 0

    def __call__(self, *args: Any) -> T:
        if self._args is not NO_VALUE and self._args == args:
            return self._result  # type: ignore[no-any-return]
        self._result = self._fn(*args)
        self._args = args
        self.calls += 1
        return self._result  # type: ignore[no-any-return]

    def reset(self) -> None:
        self._args = NO_VALUE
        self._result = NO_VALUE
