"""
Core primitives.

- Action / TransactionMarker: Dispatched records and their transaction markers
- Combinators: with_meta, with_error, with_transaction, begin, commit, revert
- Canonical: Deterministic serialization
- Errors
"""

from .actions import (
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
from .canonical import canonicalize, canonical_json_bytes, canonical_json_str, state_hash
from .errors import InvalidActionError, OptimistError, UnknownTransactionError

__all__ = [
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
    "canonicalize",
    "canonical_json_bytes",
    "canonical_json_str",
    "state_hash",
    "InvalidActionError",
    "OptimistError",
    "UnknownTransactionError",
]
