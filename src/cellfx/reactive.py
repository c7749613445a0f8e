"""Reactive cells — values that track which computed cells read them.

Reading a ReactiveCell while a computed cell is deriving records that cell's
subscriber invocation. Writing the ReactiveCell replaces the value and calls
every recorded subscriber, synchronously and in registration order.

Error policy: call set_error_policy() once at startup to choose what a write
does when a subscriber raises. "propagate" (the default) lets the first error
escape immediately. "collect" notifies every subscriber, logs each failure,
then raises a NotificationError holding all of them.
"""

from __future__ import annotations

import logging
from typing import Generic, TypeVar

from cellfx._tracking import Subscriber, active_subscribers
from cellfx.errors import NotificationError

logger = logging.getLogger("cellfx.reactive")

T = TypeVar("T")

# ─── Error policy ────────────────────────────────────────────────────────────
ERROR_POLICIES = ("propagate", "collect")
_error_policy = "propagate"


def set_error_policy(policy: str) -> None:
    """Choose how ReactiveCell.set() handles a failing subscriber.

    Usage:
        cellfx.set_error_policy("collect")
    """
    global _error_policy
    if policy not in ERROR_POLICIES:
        raise ValueError(
            f"unknown error policy {policy!r}, expected one of {ERROR_POLICIES}"
        )
    _error_policy = policy


def get_error_policy() -> str:
    return _error_policy


class ReactiveCell(Generic[T]):
    """A single observable value that records its readers."""

    __slots__ = ("_value", "_subscribers")

    def __init__(self, value: T | None = None) -> None:
        self._value = value
        self._subscribers: list[Subscriber] = []

    def get(self) -> T | None:
        """Read the value. Inside a derivation, registers the subscriber(s)."""
        for subscriber in active_subscribers():
            # Identity check: a derivation that reads this cell twice must
            # register once.
            if not any(s is subscriber for s in self._subscribers):
                self._subscribers.append(subscriber)
                logger.debug("Registered subscriber %r on %r", subscriber, self)
        return self._value

    def peek(self) -> T | None:
        """Read the value without registering anything."""
        return self._value

    def set(self, value: T) -> None:
        """Replace the value, then notify every subscriber before returning."""
        self._value = value
        self._notify()

    def _notify(self) -> None:
        # Snapshot: subscribers added during notification wait for the next write.
        subscribers = list(self._subscribers)
        if _error_policy == "propagate":
            for subscriber in subscribers:
                subscriber()
            return

        errors = []
        for subscriber in subscribers:
            try:
                subscriber()
            except Exception as exc:
                logger.exception("Subscriber %r failed", subscriber)
                errors.append(exc)
        if errors:
            raise NotificationError(
                f"{len(errors)} of {len(subscribers)} subscribers failed", errors
            )

    @property
    def subscriber_count(self) -> int:
        return len(self._subscribers)

    def __repr__(self) -> str:
        return f"ReactiveCell({self._value!r})"
