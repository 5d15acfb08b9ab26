"""
optimist

Speculative state transitions for pure reducers: apply an action now,
commit or revert it later without replaying history from the start.
"""

from .config import ReconcilerConfig
from .core import (
    BEGIN,
    COMMIT,
    REVERT,
    Action,
    TransactionKind,
    TransactionMarker,
    begin,
    commit,
    revert,
    with_error,
    with_meta,
    with_transaction,
)
from .core.errors import InvalidActionError, OptimistError, UnknownTransactionError
from .log import ABSENT, LogEntry, TransactionLog
from .reconciler import Reconciler, optimist
from .state import CompositeState, split_state
from .store import Store

__version__ = "0.1.0"

__all__ = [
    "ReconcilerConfig",
    "BEGIN",
    "COMMIT",
    "REVERT",
    "Action",
    "TransactionKind",
    "TransactionMarker",
    "begin",
    "commit",
    "revert",
    "with_error",
    "with_meta",
    "with_transaction",
    "InvalidActionError",
    "OptimistError",
    "UnknownTransactionError",
    "ABSENT",
    "LogEntry",
    "TransactionLog",
    "Reconciler",
    "optimist",
    "CompositeState",
    "split_state",
    "Store",
]
