"""Exception types raised by cellfx."""

from __future__ import annotations


class CellError(Exception):
    """Base class for all cellfx errors."""


class UnsupportedOwnerError(CellError, TypeError):
    """The owner object cannot hold cells."""


class InvalidKeyError(CellError, ValueError):
    """The key is not a public identifier."""


class NotificationError(CellError, ExceptionGroup):
    """One or more subscribers failed during a write.

    Raised only under the "collect" error policy, after every subscriber
    has been attempted. The individual failures are in ``.exceptions``.
    """
