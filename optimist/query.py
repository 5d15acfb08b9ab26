"""
Query helpers for composite state.
"""

from typing import Any, List

from .core.actions import TransactionID
from .state import DEFAULT_LOG_KEY, split_state


def pending_transactions(state: Any, log_key: str = DEFAULT_LOG_KEY) -> List[TransactionID]:
    """Ids of transactions that are begun but not yet committed or reverted, oldest first."""
    return split_state(state, log_key).log.pending_ids()


def is_pending(state: Any, transaction_id: TransactionID, log_key: str = DEFAULT_LOG_KEY) -> bool:
    return split_state(state, log_key).log.is_pending(transaction_id)


def log_size(state: Any, log_key: str = DEFAULT_LOG_KEY) -> int:
    return len(split_state(state, log_key).log)
