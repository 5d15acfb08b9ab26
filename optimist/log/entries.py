"""
Transaction log: ordered record of actions dispatched while a speculative
transaction is open.

Each entry remembers the action and, for entries that opened a transaction
which is still pending, the domain state as it was right before the action.
"""

from dataclasses import dataclass, field, replace
from typing import Any, Dict, Iterable, Iterator, Tuple

from ..core.actions import Action, TransactionID


class _Absent:
    """Marker for "no snapshot". Distinct from None so None can be a snapshot."""

    _instance = None

    def __new__(cls) -> "_Absent":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "ABSENT"

    def __bool__(self) -> bool:
        return False

    def __reduce__(self):
        return (_Absent, ())


ABSENT: Any = _Absent()


@dataclass(frozen=True)
class LogEntry:
    """
    Immutable log entry.

    Fields:
        action: Recorded action
        snapshot: Domain state before action, or ABSENT
    """
    action: Action
    snapshot: Any = ABSENT

    @property
    def has_snapshot(self) -> bool:
        return self.snapshot is not ABSENT

    def without_snapshot(self) -> "LogEntry":
        return replace(self, snapshot=ABSENT)

    def with_snapshot(self, snapshot: Any) -> "LogEntry":
        return replace(self, snapshot=snapshot)

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"action": self.action.to_dict()}
        if self.has_snapshot:
            data["snapshot"] = self.snapshot
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "LogEntry":
        return cls(
            action=Action.from_dict(data["action"]),
            snapshot=data["snapshot"] if "snapshot" in data else ABSENT,
        )


@dataclass(frozen=True)
class TransactionLog:
    """
    Immutable, chronologically ordered sequence of log entries.

    append() and the rebuild helpers below return new logs; entries are
    shared between the old and new log.
    """
    entries: Tuple[LogEntry, ...] = field(default_factory=tuple)

    def __iter__(self) -> Iterator[LogEntry]:
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)

    def __bool__(self) -> bool:
        return bool(self.entries)

    def __getitem__(self, index: int) -> LogEntry:
        return self.entries[index]

    def append(self, entry: LogEntry) -> "TransactionLog":
        return TransactionLog(self.entries + (entry,))

    @classmethod
    def rebuild(cls, entries: Iterable[LogEntry]) -> "TransactionLog":
        return cls(tuple(entries))

    def to_list(self) -> list:
        return [entry.to_dict() for entry in self.entries]

    @classmethod
    def from_list(cls, data: Iterable[Dict[str, Any]]) -> "TransactionLog":
        return cls.rebuild(LogEntry.from_dict(item) for item in data)

    def pending_ids(self) -> list:
        """Ids of transactions whose BEGIN snapshot is still held, oldest first."""
        return [
            entry.action.transaction.id
            for entry in self.entries
            if entry.has_snapshot and entry.action.transaction is not None
        ]

    def is_pending(self, transaction_id: TransactionID) -> bool:
        return any(
            entry.has_snapshot and entry.action.matches(transaction_id) for entry in self.entries
        )


EMPTY_LOG = TransactionLog()
