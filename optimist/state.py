"""
Composite state: transaction log plus the domain state it protects.

Hosts either keep CompositeState objects directly or persist the flattened
shape, where the log lives under its own key next to the domain fields:

    {"optimist": <log>, **domain_fields}      # domain state is a mapping
    {"optimist": <log>, "domain_state": value} # anything else
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping

from .log.entries import EMPTY_LOG, LogEntry, TransactionLog

DEFAULT_LOG_KEY = "optimist"
DOMAIN_KEY = "domain_state"


@dataclass(frozen=True)
class CompositeState:
    """
    Immutable composite state.

    Fields:
        log: Transaction log (empty when nothing speculative is open)
        domain_state: Opaque value owned by the domain reducer
    """
    log: TransactionLog = field(default=EMPTY_LOG)
    domain_state: Any = None

    def flatten(self, log_key: str = DEFAULT_LOG_KEY) -> Dict[str, Any]:
        """Return the host-persisted shape with the log stored beside the domain data."""
        if isinstance(self.domain_state, Mapping):
            if log_key in self.domain_state:
                raise ValueError(f"domain state already uses the log key {log_key!r}")
            if set(self.domain_state) == {DOMAIN_KEY}:
                raise ValueError(f"domain state with only the {DOMAIN_KEY!r} key cannot be flattened")
            return {log_key: self.log, **self.domain_state}
        return {log_key: self.log, DOMAIN_KEY: self.domain_state}

    def to_dict(self) -> Dict[str, Any]:
        return {"log": self.log.to_list(), "domain_state": self.domain_state}


def _coerce_log(raw: Any) -> TransactionLog:
    if isinstance(raw, TransactionLog):
        return raw
    if raw is None:
        return EMPTY_LOG
    items = list(raw)
    if all(isinstance(item, LogEntry) for item in items):
        return TransactionLog.rebuild(items)
    return TransactionLog.from_list(items)


def split_state(state: Any, log_key: str = DEFAULT_LOG_KEY) -> CompositeState:
    """
    Separate an opaque host value into log and domain state.

    Values that are not composite (primitives, None, mappings without the
    log key) are treated as domain state with an empty log.
    """
    if isinstance(state, CompositeState):
        return state
    if not isinstance(state, Mapping) or log_key not in state:
        return CompositeState(log=EMPTY_LOG, domain_state=state)

    log = _coerce_log(state[log_key])
    rest = {k: v for k, v in state.items() if k != log_key}
    if set(rest) == {DOMAIN_KEY}:
        return CompositeState(log=log, domain_state=rest[DOMAIN_KEY])
    return CompositeState(log=log, domain_state=rest)
