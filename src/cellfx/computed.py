"""Computed cells — derived values with automatic dependency tracking.

A ComputedCell wraps a zero-argument function. Every read puts the cell's
subscriber invocation on the dependency marker, runs the function, and takes
it off again, so each ReactiveCell the function reads records the subscriber.

There is no cache: every read re-runs the function. When a recorded
ReactiveCell is written, the subscriber re-runs the function and hands the
fresh value to the on_change callback.
"""

from __future__ import annotations

from typing import Callable, Generic, TypeVar, overload

from cellfx._tracking import tracking

T = TypeVar("T")


def _noop(value: object) -> None:
    pass


class ComputedCell(Generic[T]):
    """A read-only derived value that re-derives on every read."""

    __slots__ = ("_fn", "_on_change", "_subscriber")

    def __init__(
        self,
        fn: Callable[[], T],
        on_change: Callable[[T], None] | None = None,
    ) -> None:
        self._fn = fn
        self._on_change = on_change or _noop
        # One invocation object per cell; reactive cells deduplicate by identity.
        self._subscriber = self._on_dependency_changed

    def get(self) -> T:
        """Derive the value, registering this cell on everything fn reads."""
        with tracking(self._subscriber):
            return self._fn()

    def set(self, value: object) -> None:
        """Computed cells are not settable. Writes are ignored."""

    def _on_dependency_changed(self) -> None:
        """Called by a ReactiveCell write. Re-derives and reports the value."""
        self._on_change(self.get())

    def __repr__(self) -> str:
        name = getattr(self._fn, "__name__", repr(self._fn))
        return f"ComputedCell({name})"


@overload
def computed(fn: Callable[[], T]) -> ComputedCell[T]: ...


@overload
def computed(
    fn: None = None,
    *,
    on_change: Callable[[T], None] | None = None,
) -> Callable[[Callable[[], T]], ComputedCell[T]]: ...


def computed(
    fn: Callable[[], T] | None = None,
    *,
    on_change: Callable[[T], None] | None = None,
) -> ComputedCell[T] | Callable[[Callable[[], T]], ComputedCell[T]]:
    """Decorator/factory to create a ComputedCell from a function.

    Usage:
        count = ReactiveCell(1)

        @computed(on_change=print)
        def doubled():
            return count.get() * 2

        doubled.get()  # 2, and doubled now depends on count
        count.set(5)   # prints 10
    """
    if fn is None:
        return lambda f: ComputedCell(f, on_change)
    return ComputedCell(fn, on_change)
