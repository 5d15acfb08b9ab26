"""
Exception types for the optimist reconciler.
"""


class OptimistError(Exception):
    """Base class for reconciler errors."""
    pass


class InvalidActionError(OptimistError):
    """Raised when an action cannot be decoded or has no type."""
    pass


class UnknownTransactionError(OptimistError):
    """Raised in strict mode when COMMIT/REVERT names a transaction not in the log."""

    def __init__(self, kind: str, transaction_id) -> None:
        super().__init__(f"{kind} for unknown transaction id: {transaction_id!r}")
        self.kind = kind
        self.transaction_id = transaction_id
