"""
Transaction log and its rebuild passes.

This module provides:
- LogEntry: Recorded action with optional pre-action snapshot
- TransactionLog: Immutable ordered sequence of entries
- prune_committed / rebuild_reverted: One-pass rebuilds for COMMIT and REVERT
"""

from .entries import ABSENT, EMPTY_LOG, LogEntry, TransactionLog
from .pruning import RevertResult, prune_committed, rebuild_reverted

__all__ = [
    "ABSENT",
    "EMPTY_LOG",
    "LogEntry",
    "TransactionLog",
    "RevertResult",
    "prune_committed",
    "rebuild_reverted",
]
