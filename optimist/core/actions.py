"""
Action model for reconciled state transitions.

Actions are immutable records handed to the domain reducer. An action may
carry a transaction marker that tells the reconciler to open, confirm or undo
a speculative transition.
"""

from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Dict, Hashable, Optional

from .errors import InvalidActionError


class TransactionKind(str, Enum):
    """Marker kinds understood by the reconciler."""

    BEGIN = "BEGIN"
    COMMIT = "COMMIT"
    REVERT = "REVERT"


BEGIN = TransactionKind.BEGIN
COMMIT = TransactionKind.COMMIT
REVERT = TransactionKind.REVERT

TransactionID = Hashable


@dataclass(frozen=True)
class TransactionMarker:
    """
    Transaction marker attached to an action.

    Fields:
        kind: BEGIN, COMMIT or REVERT (any other string is routed as a plain action)
        id: Transaction identifier, unique among open transactions
    """
    kind: str
    id: TransactionID

    def to_dict(self) -> Dict[str, Any]:
        return {"kind": str(getattr(self.kind, "value", self.kind)), "id": self.id}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TransactionMarker":
        if not isinstance(data, dict) or "kind" not in data or "id" not in data:
            raise InvalidActionError(f"transaction marker needs kind and id: {data!r}")
        kind = data["kind"]
        try:
            kind = TransactionKind(kind)
        except ValueError:
            # Unknown kinds are kept verbatim and fall back to base handling.
            pass
        return cls(kind=kind, id=data["id"])


@dataclass(frozen=True)
class Action:
    """
    Immutable action record.

    Fields:
        type: Action type (e.g., "SET", "SAVE_PENDING")
        payload: Action-specific data
        meta: Optional metadata passed through untouched
        error: True when the action reports a failed operation
        transaction: Optional transaction marker
    """
    type: str
    payload: Any = None
    meta: Any = None
    error: bool = False
    transaction: Optional[TransactionMarker] = None

    def matches(self, transaction_id: TransactionID) -> bool:
        """True if this action carries a marker for transaction_id (any kind)."""
        return self.transaction is not None and self.transaction.id == transaction_id

    def to_dict(self) -> Dict[str, Any]:
        """Serialize action to dict; optional fields are left out when unset."""
        data: Dict[str, Any] = {"type": self.type, "payload": self.payload}
        if self.meta is not None:
            data["meta"] = self.meta
        if self.error:
            data["error"] = True
        if self.transaction is not None:
            data["transaction"] = self.transaction.to_dict()
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Action":
        """
        Deserialize action from dict.

        Raises:
            InvalidActionError: If data is not a mapping or has no string type
        """
        if not isinstance(data, dict):
            raise InvalidActionError(f"action must be an object, got {type(data).__name__}")
        action_type = data.get("type")
        if not isinstance(action_type, str) or not action_type:
            raise InvalidActionError(f"action type must be a non-empty string: {data!r}")

        transaction = None
        if data.get("transaction") is not None:
            transaction = TransactionMarker.from_dict(data["transaction"])

        return cls(
            type=action_type,
            payload=data.get("payload"),
            meta=data.get("meta"),
            error=bool(data.get("error", False)),
            transaction=transaction,
        )


def with_meta(action: Action, meta: Any) -> Action:
    """Return a copy of action carrying meta (None leaves it unset)."""
    return replace(action, meta=meta)


def with_error(action: Action, error: bool = True) -> Action:
    """Return a copy of action flagged as an error."""
    return replace(action, error=error)


def with_transaction(action: Action, kind: str, transaction_id: TransactionID) -> Action:
    """Return a copy of action carrying a transaction marker."""
    return replace(action, transaction=TransactionMarker(kind=kind, id=transaction_id))


def begin(action_type: str, payload: Any, transaction_id: TransactionID, meta: Any = None) -> Action:
    """Shorthand for an action that opens a speculative transaction."""
    return with_transaction(Action(type=action_type, payload=payload, meta=meta), BEGIN, transaction_id)


def commit(action_type: str, payload: Any, transaction_id: TransactionID, meta: Any = None) -> Action:
    """Shorthand for an action that confirms a transaction."""
    return with_transaction(Action(type=action_type, payload=payload, meta=meta), COMMIT, transaction_id)


def revert(action_type: str, payload: Any, transaction_id: TransactionID, meta: Any = None) -> Action:
    """Shorthand for an action that undoes a transaction."""
    return with_transaction(Action(type=action_type, payload=payload, meta=meta), REVERT, transaction_id)
