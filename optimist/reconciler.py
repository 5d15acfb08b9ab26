"""
Reconciler: wraps a pure domain reducer with speculative transactions.

Every dispatch is routed by the action's transaction marker:

    no marker / unknown kind -> base
    BEGIN                    -> begin
    COMMIT                   -> commit
    REVERT                   -> revert

The reconciler itself is pure: it returns a new CompositeState and never
mutates the one passed in. Domain reducer exceptions propagate unchanged.
"""

import logging
from typing import Any, Callable, Optional

from .config import ReconcilerConfig
from .core.actions import BEGIN, COMMIT, REVERT, Action
from .core.errors import UnknownTransactionError
from .log.entries import LogEntry, TransactionLog
from .log.pruning import prune_committed, rebuild_reverted
from .state import CompositeState, split_state

# Domain reducer signature: (domain_state, action) -> new_domain_state
DomainReducer = Callable[[Any, Action], Any]

logger = logging.getLogger(__name__)


def _trace(transaction_id: Any) -> dict:
    return {"trace_id": str(transaction_id)}


class Reconciler:
    """
    Domain reducer wrapped with a transaction log.

    Usage:
        reconcile = Reconciler(domain_reducer)
        state = reconcile(state, begin("SAVE", {"title": "draft"}, 1))
        state = reconcile(state, revert("SAVE_REJECTED", err, 1))
    """

    def __init__(self, reducer: DomainReducer, config: Optional[ReconcilerConfig] = None) -> None:
        """
        Args:
            reducer: Pure function (domain_state, action) -> domain_state
            config: Reconciler configuration (defaults: non-strict, "optimist" log key)
        """
        self.reducer = reducer
        self.config = config or ReconcilerConfig()

    def __call__(self, state: Any, action: Action) -> CompositeState:
        return self.apply(state, action)

    def apply(self, state: Any, action: Action) -> CompositeState:
        """
        Apply action to state.

        Args:
            state: CompositeState, flattened host state or bare domain state
            action: Action to dispatch

        Returns:
            New CompositeState

        Raises:
            UnknownTransactionError: strict mode only, for COMMIT/REVERT of an id
                that is not pending
        """
        composite = split_state(state, self.config.log_key)
        marker = action.transaction

        if marker is not None:
            if marker.kind == BEGIN:
                return self._begin(composite, action)
            if marker.kind == COMMIT:
                return self._commit(composite, action)
            if marker.kind == REVERT:
                return self._revert(composite, action)

        return self._base(composite.log, composite.domain_state, action)

    def _base(self, log: TransactionLog, domain_state: Any, action: Action) -> CompositeState:
        # only record while something speculative is open
        if log:
            log = log.append(LogEntry(action=action))
        return CompositeState(log=log, domain_state=self.reducer(domain_state, action))

    def _begin(self, state: CompositeState, action: Action) -> CompositeState:
        log = state.log.append(LogEntry(action=action, snapshot=state.domain_state))
        logger.debug(
            "Transaction begun by %s (log size %d)",
            action.type,
            len(log),
            extra=_trace(action.transaction.id),
        )
        return CompositeState(log=log, domain_state=self.reducer(state.domain_state, action))

    def _commit(self, state: CompositeState, action: Action) -> CompositeState:
        transaction_id = action.transaction.id
        self._check_known(state.log, COMMIT.value, transaction_id)

        log = prune_committed(state.log, transaction_id)
        logger.debug(
            "Transaction committed (log size %d -> %d)",
            len(state.log),
            len(log),
            extra=_trace(transaction_id),
        )
        return self._base(log, state.domain_state, action)

    def _revert(self, state: CompositeState, action: Action) -> CompositeState:
        transaction_id = action.transaction.id
        self._check_known(state.log, REVERT.value, transaction_id)

        result = rebuild_reverted(state.log, transaction_id, self.reducer)
        domain_state = result.state if result.found else state.domain_state
        logger.debug(
            "Transaction reverted (log size %d -> %d, replayed from snapshot: %s)",
            len(state.log),
            len(result.log),
            result.found,
            extra=_trace(transaction_id),
        )
        return self._base(result.log, domain_state, action)

    def _check_known(self, log: TransactionLog, kind: str, transaction_id: Any) -> None:
        if log.is_pending(transaction_id):
            return
        if self.config.strict:
            raise UnknownTransactionError(kind, transaction_id)
        logger.warning("%s for unknown transaction ignored", kind, extra=_trace(transaction_id))


def optimist(reducer: DomainReducer, config: Optional[ReconcilerConfig] = None) -> Reconciler:
    """Wrap a domain reducer; shorthand for Reconciler(reducer, config)."""
    return Reconciler(reducer, config)
