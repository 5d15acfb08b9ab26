"""
Tests for the async operation adapter and the host store.
"""

import asyncio
import threading

import pytest

from optimist import Action, Store, begin, revert
from optimist.adapter import (
    OperationAdapter,
    TransactionCounter,
    pending_action,
    settled_action,
)
from optimist.core.actions import BEGIN, COMMIT, REVERT


def todos(state, action):
    """Domain state: list of todo titles."""
    cur = list(state or [])
    if action.type == "ADD_PENDING" and action.payload is not None:
        cur.append(action.payload)
    elif action.type == "ADD_FULFILLED":
        cur.append(action.payload)
    return cur


class Recorder:
    def __init__(self):
        self.actions = []

    def __call__(self, action):
        self.actions.append(action)


def test_counter_is_monotonic_and_thread_safe():
    counter = TransactionCounter(start=5)
    seen = []
    lock = threading.Lock()

    def worker():
        for _ in range(200):
            i = counter.next_id()
            with lock:
                seen.append(i)

    threads = [threading.Thread(target=worker) for _ in range(4)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert sorted(seen) == list(range(5, 805))


def test_pending_action_shapes():
    plain = pending_action("SAVE", meta={"m": 1})
    assert plain == Action(type="SAVE_PENDING", meta={"m": 1})

    optimistic = pending_action("SAVE", optimistic_data=None, transaction_id=4)
    assert optimistic.payload is None
    assert optimistic.transaction.kind == BEGIN
    assert optimistic.transaction.id == 4


def test_settled_action_shapes():
    ok = settled_action("SAVE", 1, rejected=False, transaction_id=2)
    assert ok.type == "SAVE_FULFILLED"
    assert ok.transaction.kind == COMMIT
    assert not ok.error

    err = RuntimeError("nope")
    bad = settled_action("SAVE", err, rejected=True, meta="m", transaction_id=2)
    assert bad.type == "SAVE_REJECTED"
    assert bad.payload is err
    assert bad.error
    assert bad.meta == "m"
    assert bad.transaction.kind == REVERT

    assert settled_action("SAVE", 1, rejected=False).transaction is None


def test_run_non_awaitable_dispatches_single_action():
    rec = Recorder()
    adapter = OperationAdapter(rec)

    result = asyncio.run(adapter.run("PING", lambda: 42, meta="m"))

    assert result.value == 42
    assert rec.actions == [Action(type="PING", payload=42, meta="m")]


def test_run_fulfilled_without_optimistic_data():
    rec = Recorder()
    adapter = OperationAdapter(rec)

    async def op():
        return "saved"

    result = asyncio.run(adapter.run("SAVE", op))

    assert [a.type for a in rec.actions] == ["SAVE_PENDING", "SAVE_FULFILLED"]
    assert all(a.transaction is None for a in rec.actions)
    assert result.value == "saved"
    assert result.action is rec.actions[-1]


def test_optimistic_success_commits():
    store = Store(todos, initial=[])
    adapter = OperationAdapter(store.dispatch, TransactionCounter())

    async def scenario():
        seen_while_pending = []

        async def op():
            seen_while_pending.append((list(store.domain_state), store.pending()))
            return "server-title"

        result = await adapter.run("ADD", op, optimistic_data="draft")
        return result, seen_while_pending

    result, seen = asyncio.run(scenario())

    assert seen == [(["draft"], [0])]
    assert result.action.transaction.kind == COMMIT
    assert store.domain_state == ["draft", "server-title"]
    assert store.pending() == []
    assert len(store.state.log) == 0


def test_optimistic_failure_reverts_and_reraises():
    store = Store(todos, initial=["kept"])
    adapter = OperationAdapter(store.dispatch)

    async def op():
        raise ConnectionError("offline")

    with pytest.raises(ConnectionError, match="offline"):
        asyncio.run(adapter.run("ADD", op(), optimistic_data="draft"))

    assert store.domain_state == ["kept"]
    assert store.pending() == []


def test_interleaved_operations():
    """Two in-flight operations settle in reverse order; only the failed one is undone."""
    store = Store(todos, initial=[])
    adapter = OperationAdapter(store.dispatch, TransactionCounter())

    async def scenario():
        first_gate = asyncio.Event()

        async def slow_fail():
            await first_gate.wait()
            raise ValueError("rejected")

        async def fast_ok():
            return "b-final"

        failing = asyncio.ensure_future(adapter.run("ADD", slow_fail, optimistic_data="a"))
        await asyncio.sleep(0)
        await adapter.run("ADD", fast_ok, optimistic_data="b")
        assert store.domain_state == ["a", "b", "b-final"]
        first_gate.set()
        with pytest.raises(ValueError):
            await failing

    asyncio.run(scenario())

    assert store.domain_state == ["b", "b-final"]
    assert store.pending() == []


def test_cancelled_operation_reverts():
    """Cancelling an in-flight optimistic run dispatches the rejected action."""
    store = Store(todos, initial=[])
    adapter = OperationAdapter(store.dispatch)
    dispatched = []
    store.subscribe(lambda st, action: dispatched.append(action))

    async def scenario():
        never = asyncio.Event()

        async def hang():
            await never.wait()

        task = asyncio.ensure_future(adapter.run("ADD", hang, optimistic_data="draft"))
        await asyncio.sleep(0)
        assert store.pending() == [0]
        assert store.domain_state == ["draft"]

        task.cancel()
        with pytest.raises(asyncio.CancelledError):
            await task

    asyncio.run(scenario())

    assert store.pending() == []
    assert store.domain_state == []
    last = dispatched[-1]
    assert last.type == "ADD_REJECTED"
    assert last.error
    assert last.transaction.kind == REVERT
    assert isinstance(last.payload, asyncio.CancelledError)


def test_store_keeps_state_when_reducer_raises():
    def reducer(state, action):
        if action.type == "BOOM":
            raise KeyError("boom")
        return (state or 0) + 1

    store = Store(reducer, initial=0)
    store.dispatch(begin("INC", None, 1))
    before = store.state

    with pytest.raises(KeyError):
        store.dispatch(Action(type="BOOM"))

    assert store.state is before
    store.dispatch(revert("UNDO", None, 1))
    assert store.domain_state == 1


def test_store_listeners():
    store = Store(lambda s, a: a.payload, initial=None)
    calls = []
    unsubscribe = store.subscribe(lambda st, action: calls.append((st.domain_state, action.type)))

    store.dispatch(Action(type="A", payload=1))
    unsubscribe()
    store.dispatch(Action(type="B", payload=2))

    assert calls == [(1, "A")]
    assert store.domain_state == 2
