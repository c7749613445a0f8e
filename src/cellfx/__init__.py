"""cellfx: implicit dependency tracking between reactive and computed cells."""

from importlib.metadata import version as _version

__version__ = _version("cellfx")

from cellfx._tracking import current_subscriber
from cellfx.reactive import ReactiveCell, set_error_policy, get_error_policy
from cellfx.computed import ComputedCell, computed
from cellfx.owner import ReactiveObject, define_reactive, define_computed
from cellfx.errors import (
    CellError,
    UnsupportedOwnerError,
    InvalidKeyError,
    NotificationError,
)

__all__ = [
    "ReactiveCell",
    "ComputedCell",
    "computed",
    "ReactiveObject",
    "define_reactive",
    "define_computed",
    "current_subscriber",
    "set_error_policy",
    "get_error_policy",
    "CellError",
    "UnsupportedOwnerError",
    "InvalidKeyError",
    "NotificationError",
]
