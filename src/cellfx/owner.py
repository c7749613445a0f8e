"""Owners — objects whose attributes are backed by cells.

A ReactiveObject keeps a key -> cell mapping. Attribute access on a cell key
routes to the cell: ``obj.key`` calls ``cell.get()`` and ``obj.key = v``
calls ``cell.set(v)``. Everything else is an ordinary attribute.

define_reactive() and define_computed() are the two ways to add cells.
"""

from __future__ import annotations

import keyword
import logging
from typing import Callable, Iterator, Union

from cellfx.computed import ComputedCell
from cellfx.errors import InvalidKeyError, UnsupportedOwnerError
from cellfx.reactive import ReactiveCell

logger = logging.getLogger("cellfx.owner")

Cell = Union[ReactiveCell, ComputedCell]


class ReactiveObject:
    """Attribute-style container for reactive and computed cells.

    Usage:
        data = ReactiveObject(todos=[])
        define_computed(data, "count", lambda: len(data.todos))
        data.count      # 0
    """

    def __new__(cls, *args: object, **kwargs: object) -> ReactiveObject:
        self = super().__new__(cls)
        # Exists before any __init__ runs, so subclasses may set attributes first.
        object.__setattr__(self, "_cells", {})
        return self

    def __init__(self, **initial: object) -> None:
        for key, value in initial.items():
            define_reactive(self, key, value)

    def __getattr__(self, key: str) -> object:
        # Only reached when normal attribute lookup fails.
        if not key.startswith("_"):
            cell = self._cells.get(key)
            if cell is not None:
                return cell.get()
        raise AttributeError(
            f"{type(self).__name__!r} object has no attribute {key!r}"
        )

    def __setattr__(self, key: str, value: object) -> None:
        cell = self._cells.get(key)
        if cell is None:
            object.__setattr__(self, key, value)
        else:
            cell.set(value)

    def get(self, key: str) -> object:
        cell = self._cells.get(key)
        return cell.get() if cell is not None else None

    def set(self, key: str, value: object) -> None:
        cell = self._cells.get(key)
        if cell is not None:
            cell.set(value)

    def cell(self, key: str) -> Cell:
        """The cell object behind key. Raises KeyError if there is none."""
        return self._cells[key]

    def keys(self) -> Iterator[str]:
        return iter(list(self._cells))

    def __contains__(self, key: object) -> bool:
        return key in self._cells

    def __repr__(self) -> str:
        parts = []
        for key, cell in self._cells.items():
            if isinstance(cell, ReactiveCell):
                parts.append(f"{key}={cell.peek()!r}")
            else:
                parts.append(f"{key}=<computed>")
        return f"{type(self).__name__}({', '.join(parts)})"


def _check_key(owner: ReactiveObject, key: str) -> None:
    if not isinstance(key, str) or not key.isidentifier() or keyword.iskeyword(key):
        raise InvalidKeyError(f"{key!r} is not a valid identifier")
    if key.startswith("_"):
        raise InvalidKeyError(f"{key!r}: cell keys cannot start with an underscore")
    if hasattr(type(owner), key) or key in vars(owner):
        raise InvalidKeyError(
            f"{key!r} would shadow an existing attribute of {type(owner).__name__}"
        )


def _install(owner: object, key: str, cell: Cell) -> None:
    """Bind cell to owner.key, replacing any cell already under that key."""
    if not isinstance(owner, ReactiveObject):
        raise UnsupportedOwnerError(
            f"cannot define cells on {type(owner).__name__}; use a ReactiveObject"
        )
    _check_key(owner, key)
    if key in owner._cells:
        logger.debug("Redefining %r on %r", key, owner)
    owner._cells[key] = cell


def define_reactive(owner: ReactiveObject, key: str, initial: object = None) -> None:
    """Install a reactive cell as ``owner.key`` with an initial value.

    Reading ``owner.key`` registers the active subscriber; assigning to it
    notifies every subscriber before the assignment returns.
    """
    _install(owner, key, ReactiveCell(initial))


def define_computed(
    owner: ReactiveObject,
    key: str,
    fn: Callable[[], object],
    on_change: Callable[[object], None] | None = None,
) -> None:
    """Install a computed cell as ``owner.key``.

    Reading ``owner.key`` re-runs fn and returns the result. Assigning to it
    is ignored. on_change receives the re-derived value whenever a reactive
    cell fn read is written.

    Usage:
        data = ReactiveObject(todos=[])
        define_computed(
            data, "done_count",
            lambda: sum(1 for t in data.todos if t["done"]),
            lambda n: print(f"new done count is {n}"),
        )
    """
    _install(owner, key, ComputedCell(fn, on_change))
