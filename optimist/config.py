"""
Reconciler configuration.

Environment Variables:
    OPTIMIST_STRICT: Reject COMMIT/REVERT for unknown transactions (1/true/yes) - default: off
    OPTIMIST_LOG_KEY: Key holding the log in the flattened host state - default: optimist
"""

import os
from dataclasses import dataclass

from .state import DEFAULT_LOG_KEY

_TRUTHY = {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class ReconcilerConfig:
    """
    Fields:
        strict: Raise UnknownTransactionError instead of ignoring unmatched ids
        log_key: Key used when splitting/flattening host state
    """
    strict: bool = False
    log_key: str = DEFAULT_LOG_KEY

    @staticmethod
    def from_env() -> "ReconcilerConfig":
        strict = os.getenv("OPTIMIST_STRICT", "").strip().lower() in _TRUTHY
        log_key = os.getenv("OPTIMIST_LOG_KEY", "").strip() or DEFAULT_LOG_KEY
        return ReconcilerConfig(strict=strict, log_key=log_key)
