"""
Tests for the per-identity call log.

Goal: records of one identity are never lost or reordered, even with
concurrent writers on other (or the same) identities.
"""

import threading

from shelltable.core.table import Table
from shelltable.history.log import CallLog, shared_call_log
from shelltable.history.records import CallRecord


def _call(n: int, writer: int = 0) -> CallRecord:
    return CallRecord("test", "op", True, {"n": n, "writer": writer})


def test_unknown_identity_has_empty_history():
    assert CallLog().history_of(42) == ()


def test_histories_are_separate_per_identity():
    log = CallLog()
    log.record(1, CallRecord("class1", "method1", True, {"param1": "a"}))
    log.record(2, CallRecord("class2", "method2", False, {"param2": "b"}))
    assert log.history_of(1) != log.history_of(2)
    assert [c.operation for c in log.history_of(1)] == ["method1"]
    assert sorted(log.identities()) == [1, 2]
    assert len(log) == 2


def test_record_preserves_order():
    log = CallLog()
    for i in range(10):
        log.record(7, _call(i))
    assert [c.arguments["n"] for c in log.history_of(7)] == list(range(10))


def test_history_is_a_snapshot():
    log = CallLog()
    log.record(1, _call(0))
    before = log.history_of(1)
    log.record(1, _call(1))
    assert len(before) == 1
    assert len(log.history_of(1)) == 2


def test_extend_and_clear():
    log = CallLog()
    log.extend(3, [_call(0), _call(1)])
    assert len(log.history_of(3)) == 2
    log.clear(3)
    assert log.history_of(3) == ()
    assert 3 not in log.identities()
    log.clear(3)  # unknown identity is fine


def test_lock_outliving_its_history_is_tolerated():
    """A writer holding a lock taken before clear() must not fail."""
    log = CallLog()
    log.record(5, _call(0))
    lock = log._locks[5]
    log.clear(5)
    # the window between _lock_for() and the append
    log._locks[5] = lock
    assert log.history_of(5) == ()
    log.record(5, _call(1))
    assert [c.arguments["n"] for c in log.history_of(5)] == [1]


def test_clear_racing_writers_never_raises():
    log = CallLog()
    errors = []
    done = threading.Event()

    def write() -> None:
        try:
            for i in range(2000):
                log.record(11, _call(i))
                log.history_of(11)
        except Exception as e:
            errors.append(e)

    def clear() -> None:
        while not done.is_set():
            log.clear(11)

    writers = [threading.Thread(target=write) for _ in range(4)]
    clearer = threading.Thread(target=clear)
    clearer.start()
    for t in writers:
        t.start()
    for t in writers:
        t.join()
    done.set()
    clearer.join()

    assert errors == []


def test_concurrent_writers_on_distinct_identities():
    log = CallLog()
    writers, per_writer = 8, 500

    def work(identity: int) -> None:
        for i in range(per_writer):
            log.record(identity, _call(i, identity))

    threads = [threading.Thread(target=work, args=(w,)) for w in range(writers)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    for w in range(writers):
        history = log.history_of(w)
        assert [c.arguments["n"] for c in history] == list(range(per_writer))


def test_concurrent_writers_on_shared_identity_lose_nothing():
    log = CallLog()
    writers, per_writer = 4, 500

    def work(writer: int) -> None:
        for i in range(per_writer):
            log.record(99, _call(i, writer))

    threads = [threading.Thread(target=work, args=(w,)) for w in range(writers)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    history = log.history_of(99)
    assert len(history) == writers * per_writer
    for w in range(writers):
        mine = [c.arguments["n"] for c in history if c.arguments["writer"] == w]
        assert mine == list(range(per_writer))


def test_tables_default_to_shared_log():
    table = Table().with_header("A")
    try:
        assert table.log is shared_call_log()
        assert len(shared_call_log().history_of(table.identity)) == 1
    finally:
        shared_call_log().clear(table.identity)
