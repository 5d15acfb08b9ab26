"""
Log rebuild passes for COMMIT and REVERT.

Both passes walk the log once, front to back. An entry is kept only once
"recording" has started, i.e. once an entry holding the snapshot of some
other still-pending transaction has been seen. Everything before that point
can never be replayed again and is dropped.
"""

from dataclasses import dataclass
from typing import Any, Callable, List

from ..core.actions import Action, TransactionID
from .entries import ABSENT, LogEntry, TransactionLog

DomainReducer = Callable[[Any, Action], Any]


def prune_committed(log: TransactionLog, transaction_id: TransactionID) -> TransactionLog:
    """
    Rebuild the log after transaction_id was confirmed.

    The committed entry loses its snapshot (it will never be reverted) but is
    kept when it sits after another pending snapshot, since an undo of that
    transaction must replay through it.
    """
    kept: List[LogEntry] = []
    recording = False

    for entry in log:
        matches = entry.action.matches(transaction_id)
        if recording and matches:
            entry = entry.without_snapshot()
        elif entry.has_snapshot and not matches:
            recording = True

        if recording:
            kept.append(entry)

    return TransactionLog.rebuild(kept)


@dataclass(frozen=True)
class RevertResult:
    """
    Result of the revert pass.

    Fields:
        log: Rebuilt log without the reverted action
        state: Domain state with the reverted action removed from history,
            or ABSENT if the transaction was not found
    """
    log: TransactionLog
    state: Any

    @property
    def found(self) -> bool:
        return self.state is not ABSENT


def rebuild_reverted(
    log: TransactionLog,
    transaction_id: TransactionID,
    reducer: DomainReducer,
) -> RevertResult:
    """
    Rebuild the log after transaction_id was undone and recompute state.

    Starting from the snapshot taken when the transaction began, every later
    action is replayed through the domain reducer. Snapshots of later pending
    transactions are rewritten, since the state before them changed.
    """
    kept: List[LogEntry] = []
    recording = False
    state: Any = ABSENT

    for entry in log:
        if entry.action.matches(transaction_id):
            state = entry.snapshot
            continue

        if entry.has_snapshot:
            recording = True

        if recording:
            if state is not ABSENT and entry.has_snapshot:
                kept.append(entry.with_snapshot(state))
            else:
                kept.append(entry)

        # replay
        if state is not ABSENT:
            state = reducer(state, entry.action)

    return RevertResult(log=TransactionLog.rebuild(kept), state=state)
