"""
Built-in domain reducers for driving the reconciler from the command line.

    set      SET replaces the state with the payload
    counter  INC / DEC add or subtract the payload (default 1)
    merge    MERGE shallow-merges a dict payload into a dict state
"""

from typing import Any, Callable, Dict

from optimist.core.actions import Action


def set_reducer(state: Any, action: Action) -> Any:
    if action.type == "SET":
        return action.payload
    return state


def counter_reducer(state: Any, action: Action) -> Any:
    n = state or 0
    step = action.payload if action.payload is not None else 1
    if action.type == "INC":
        return n + step
    if action.type == "DEC":
        return n - step
    return n


def merge_reducer(state: Any, action: Action) -> Any:
    cur = dict(state or {})
    if action.type == "MERGE" and isinstance(action.payload, dict):
        cur.update(action.payload)
    return cur


REDUCERS: Dict[str, Callable[[Any, Action], Any]] = {
    "set": set_reducer,
    "counter": counter_reducer,
    "merge": merge_reducer,
}
