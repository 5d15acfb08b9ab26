"""
Replay runner: run an action sequence through a reconciler.

fold() is the plain reducer fold over a history and serves as the reference
the reconciler's domain state must agree with.
"""

from dataclasses import dataclass
from typing import Any, Callable, Iterable, Optional

from ..core.actions import Action
from ..reconciler import Reconciler
from ..state import CompositeState, split_state


@dataclass(frozen=True)
class ReplayResult:
    """
    Result of replay operation.

    Fields:
        state: Final composite state
        applied: Number of actions applied
    """
    state: CompositeState
    applied: int


def replay(
    actions: Iterable[Action],
    reconciler: Reconciler,
    initial: Any = None,
    until: Optional[int] = None,
) -> ReplayResult:
    """
    Dispatch actions in order.

    Args:
        actions: Actions to dispatch
        reconciler: Wrapped domain reducer
        initial: Starting state (composite, flattened or bare domain state)
        until: Stop after this many actions (None = all)

    Returns:
        ReplayResult with final state and count
    """
    st = split_state(initial, reconciler.config.log_key)
    count = 0

    for action in actions:
        if until is not None and count >= until:
            break
        st = reconciler(st, action)
        count += 1

    return ReplayResult(state=st, applied=count)


def fold(actions: Iterable[Action], reducer: Callable[[Any, Action], Any], initial: Any = None) -> Any:
    """Apply reducer to each action in order, with no transaction handling."""
    st = initial
    for action in actions:
        st = reducer(st, action)
    return st
