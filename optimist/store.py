"""
Minimal host store: keeps the composite state and dispatches actions.

The reconciler is pure; the store is the one place holding mutable state.
Dispatches are serialized with a lock so operations settling on different
threads never interleave a transition.
"""

import threading
from typing import Any, Callable, List, Optional

from .config import ReconcilerConfig
from .core.actions import Action
from .reconciler import DomainReducer, Reconciler
from .state import CompositeState, split_state

Listener = Callable[[CompositeState, Action], None]


class Store:
    """
    Usage:
        store = Store(domain_reducer, initial=0)
        store.dispatch(begin("SET", 5, 1))
        store.domain_state  # 5
    """

    def __init__(
        self,
        reducer: DomainReducer,
        initial: Any = None,
        config: Optional[ReconcilerConfig] = None,
    ) -> None:
        self.reconciler = Reconciler(reducer, config)
        self._state = split_state(initial, self.reconciler.config.log_key)
        self._lock = threading.Lock()
        self._listeners: List[Listener] = []

    @property
    def state(self) -> CompositeState:
        return self._state

    @property
    def domain_state(self) -> Any:
        return self._state.domain_state

    def pending(self) -> list:
        return self._state.log.pending_ids()

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a listener called after each dispatch; returns an unsubscribe function."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def dispatch(self, action: Action) -> Action:
        """
        Apply action and store the new state.

        If the domain reducer raises, the exception propagates and the stored
        state is left as it was.
        """
        with self._lock:
            new_state = self.reconciler(self._state, action)
            self._state = new_state
        for listener in list(self._listeners):
            listener(new_state, action)
        return action
