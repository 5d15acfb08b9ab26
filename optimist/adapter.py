"""
Async operation adapter.

Turns an awaitable operation into plain actions:

    <TYPE>_PENDING    dispatched first; opens a transaction (BEGIN) when
                      optimistic data is given
    <TYPE>_FULFILLED  on success; COMMITs the transaction
    <TYPE>_REJECTED   on failure; REVERTs the transaction, error=True

Transaction ids come from a TransactionCounter owned by the adapter. The
adapter never schedules, retries or times out the operation itself.
"""

import inspect
import itertools
import threading
from dataclasses import dataclass
from typing import Any, Callable, Optional

from .core.actions import BEGIN, COMMIT, REVERT, Action, TransactionID, with_error, with_transaction

PENDING = "PENDING"
FULFILLED = "FULFILLED"
REJECTED = "REJECTED"

_UNSET: Any = object()

Dispatch = Callable[[Action], Any]


class TransactionCounter:
    """
    Thread-safe, monotonically increasing transaction id source.

    Pass one instance to every adapter sharing a store so that ids are unique
    among all open transactions.
    """

    def __init__(self, start: int = 0) -> None:
        self._ids = itertools.count(start)
        self._lock = threading.Lock()

    def next_id(self) -> int:
        with self._lock:
            return next(self._ids)


@dataclass(frozen=True)
class OperationResult:
    """
    Fields:
        value: Value produced by the operation
        action: The settled action that was dispatched
    """
    value: Any
    action: Action


def pending_action(
    action_type: str,
    meta: Any = None,
    optimistic_data: Any = _UNSET,
    transaction_id: Optional[TransactionID] = None,
) -> Action:
    """Build the <TYPE>_PENDING action; carries BEGIN only when optimistic data is given."""
    if optimistic_data is _UNSET:
        return Action(type=f"{action_type}_{PENDING}", meta=meta)
    action = Action(type=f"{action_type}_{PENDING}", payload=optimistic_data, meta=meta)
    if transaction_id is not None:
        action = with_transaction(action, BEGIN, transaction_id)
    return action


def settled_action(
    action_type: str,
    payload: Any,
    rejected: bool,
    meta: Any = None,
    transaction_id: Optional[TransactionID] = None,
) -> Action:
    """Build <TYPE>_FULFILLED (COMMIT) or <TYPE>_REJECTED (REVERT, error=True)."""
    suffix = REJECTED if rejected else FULFILLED
    action = Action(type=f"{action_type}_{suffix}", payload=payload, meta=meta)
    if rejected:
        action = with_error(action)
    if transaction_id is not None:
        action = with_transaction(action, REVERT if rejected else COMMIT, transaction_id)
    return action


class OperationAdapter:
    """
    Dispatches the pending/fulfilled/rejected sequence for an operation.

    Usage:
        adapter = OperationAdapter(store.dispatch, counter)
        result = await adapter.run("SAVE", api.save(doc), optimistic_data=doc)
    """

    def __init__(self, dispatch: Dispatch, counter: Optional[TransactionCounter] = None) -> None:
        self.dispatch = dispatch
        self.counter = counter or TransactionCounter()

    async def run(
        self,
        action_type: str,
        operation: Any,
        optimistic_data: Any = _UNSET,
        meta: Any = None,
    ) -> OperationResult:
        """
        Run operation and dispatch its actions.

        Args:
            action_type: Base action type
            operation: Awaitable, or a callable returning one. Anything else is
                dispatched as the payload of a single plain action.
            optimistic_data: Payload applied speculatively while pending
            meta: Metadata copied onto every dispatched action

        Returns:
            OperationResult with the operation's value and the settled action

        Raises:
            Whatever the operation raises (cancellation included), after the rejected
                action was dispatched
        """
        payload = operation() if callable(operation) else operation

        if not inspect.isawaitable(payload):
            action = Action(type=action_type, payload=payload, meta=meta)
            self.dispatch(action)
            return OperationResult(value=payload, action=action)

        transaction_id = None
        if optimistic_data is not _UNSET:
            transaction_id = self.counter.next_id()

        self.dispatch(pending_action(action_type, meta, optimistic_data, transaction_id))

        try:
            value = await payload
        except BaseException as ex:
            # cancellation must still settle the transaction
            self.dispatch(settled_action(action_type, ex, True, meta, transaction_id))
            raise

        resolved = settled_action(action_type, value, False, meta, transaction_id)
        self.dispatch(resolved)
        return OperationResult(value=value, action=resolved)
