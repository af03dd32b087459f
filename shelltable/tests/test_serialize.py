"""
Tests for the canonical JSON form of call histories.
"""

import datetime

import pytest

from shelltable.core.table import Table
from shelltable.core.values import SortOrder
from shelltable.history.log import CallLog
from shelltable.history.serialize import (
    dump_history,
    from_jsonable,
    load_history,
    record_from_dict,
    to_jsonable,
)
from shelltable.replay import default_registry, replay_all


def _pipeline(log: CallLog) -> Table:
    left = Table(log=log).with_title("L").with_header("id").with_header("at")
    left.begin_row().push_value(2).push_value(datetime.datetime(2024, 1, 2, 3, 4))
    left.begin_row().push_value(1).push_value(datetime.datetime(2023, 1, 1))
    left.apply(left.cell(0, 0).with_value(3))
    right = Table(log=log).with_header("id").with_header("ok")
    right.begin_row().push_value(3).push_value(True)
    right.begin_row().push_value(1).push_value(False)
    joined = left.sort("id", SortOrder.DESCENDING).join(right, 0, 0, title="J")
    return joined.filter("ok", "true|false").select("id,ok")


def test_dump_is_deterministic():
    log = CallLog()
    table = _pipeline(log)
    dumps = {dump_history(table.call_history()) for _ in range(100)}
    assert len(dumps) == 1


def test_loaded_history_replays_to_same_table():
    log = CallLog()
    table = _pipeline(log)
    calls = load_history(dump_history(table.call_history()))

    other = CallLog()
    other.extend(1, calls)
    rebuilt = replay_all(other, default_registry(), 1).table

    assert rebuilt.snapshot() == table.snapshot()


def test_timestamp_tagging():
    ts = datetime.datetime(2024, 1, 2, 3, 4, 5)
    lowered = to_jsonable({"when": ts, "items": (1, 2)})
    assert lowered == {"when": {"$timestamp": "2024-01-02T03:04:05"}, "items": [1, 2]}
    assert from_jsonable(lowered) == {"when": ts, "items": [1, 2]}


def test_enum_lowered_to_value():
    assert to_jsonable(SortOrder.DESCENDING) == "descending"


def test_record_from_dict_requires_names():
    with pytest.raises(KeyError):
        record_from_dict({"operation": "x"})
