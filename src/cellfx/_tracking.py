"""Dependency marker — the ambient slot that links reads to their reader.

While a computed cell's derivation runs, its subscriber invocation sits on the
marker. Any ReactiveCell.get() during that span records the subscriber, which
is how the dependency graph is built without explicit subscribe calls.

The marker is a contextvar holding a stack, so a computed cell read inside
another derivation pushes its own subscriber and restores the outer one when
it finishes.
"""

from __future__ import annotations

import contextvars
from contextlib import contextmanager
from typing import Callable, Iterator

Subscriber = Callable[[], None]

# Active subscribers, outermost first. Empty outside any derivation.
_active: contextvars.ContextVar[tuple[Subscriber, ...]] = contextvars.ContextVar(
    "cellfx_active_subscribers", default=()
)


def activate(subscriber: Subscriber) -> contextvars.Token:
    """Push subscriber onto the marker. Pass the token to deactivate()."""
    return _active.set(_active.get() + (subscriber,))


def deactivate(token: contextvars.Token) -> None:
    """Restore the marker to its state before the matching activate()."""
    _active.reset(token)


def current_subscriber() -> Subscriber | None:
    """The innermost active subscriber, or None outside a derivation."""
    stack = _active.get()
    return stack[-1] if stack else None


def active_subscribers() -> tuple[Subscriber, ...]:
    return _active.get()


@contextmanager
def tracking(subscriber: Subscriber) -> Iterator[None]:
    """Keep subscriber on the marker for the duration of the block.

    Usage:
        with tracking(on_change):
            value = fn()   # every reactive read inside registers on_change
    """
    token = activate(subscriber)
    try:
        yield
    finally:
        deactivate(token)
