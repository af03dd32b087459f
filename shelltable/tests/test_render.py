"""
Tests for the text, delimited and JSON renderers.
"""

import json

import pytest

from shelltable.core.errors import InconsistentArity
from shelltable.core.table import Table
from shelltable.history.log import CallLog


def _table(headers, rows, title=None) -> Table:
    table = Table(log=CallLog())
    if title:
        table.with_title(title)
    for h in headers:
        table.with_header(h)
    for row in rows:
        table.begin_row()
        for v in row:
            table.push_value(v)
    return table


HEADERS = ["Column A", "Column B", "Column C"]


def test_simple_table_rendering():
    expected = (
        "+------------+------------+------------+\n"
        "|  Column A  |  Column B  |  Column C  |\n"
        "+------------+------------+------------+\n"
        "|    123     |    456     |     3      |\n"
        "+------------+------------+------------+\n"
    )
    assert str(_table(HEADERS, [["123", "456", "3"]])) == expected


def test_value_longer_than_header():
    expected = (
        "+------------+------------+--------------+\n"
        "|  Column A  |  Column B  |   Column C   |\n"
        "+------------+------------+--------------+\n"
        "|    123     |    456     |  344444444   |\n"
        "+------------+------------+--------------+\n"
    )
    assert _table(HEADERS, [["123", "456", "344444444"]]).to_text() == expected


def test_multiple_rows_and_select():
    table = _table(HEADERS, [["123", "456", "344444444"], ["789", "012", "844444444"]])
    expected = (
        "+------------+------------+--------------+\n"
        "|  Column A  |  Column B  |   Column C   |\n"
        "+------------+------------+--------------+\n"
        "|    123     |    456     |  344444444   |\n"
        "|    789     |    012     |  844444444   |\n"
        "+------------+------------+--------------+\n"
    )
    assert table.to_text() == expected

    expected_selected = (
        "+------------+--------------+\n"
        "|  Column A  |   Column C   |\n"
        "+------------+--------------+\n"
        "|    123     |  344444444   |\n"
        "|    789     |  844444444   |\n"
        "+------------+--------------+\n"
    )
    assert table.select("Column A,Column C").to_text() == expected_selected


def test_rendering_without_headers():
    expected = (
        "+--------+--------+--------------+\n"
        "|  123   |  456   |  344444444   |\n"
        "|  789   |  012   |  844444444   |\n"
        "+--------+--------+--------------+\n"
    )
    table = _table([], [["123", "456", "344444444"], ["789", "012", "844444444"]])
    assert table.to_text() == expected
    # rendering is repeatable
    assert table.to_text() == expected


def test_ragged_rows_without_headers():
    table = _table([], [["1", "2"], ["3"]])
    assert table.to_text() == (
        "+------+------+\n"
        "|  1   |  2   |\n"
        "|  3   |      |\n"
        "+------+------+\n"
    )


def test_title_is_printed_first():
    text = _table(["A"], [["1"]], title="Books").to_text()
    assert text.splitlines()[0] == "Books"


def test_empty_table_renders_empty():
    assert Table(log=CallLog()).to_text() == ""


def test_mismatched_header_count_fails():
    table = _table(["Column A", "Column B"], [["123", "456", "344444444"], ["789", "012", "844444444"]])
    with pytest.raises(InconsistentArity):
        str(table)
    with pytest.raises(InconsistentArity):
        table.to_delimited()


def test_delimited_output():
    table = _table(HEADERS, [["123", "456", "344444444"], ["789", "012", "844444444"]])
    assert table.to_delimited() == (
        "Column A,Column B,Column C\n"
        "123,456,344444444\n"
        "789,012,844444444\n"
    )
    assert table.to_delimited(";").splitlines()[1] == "123;456;344444444"


def test_delimited_quotes_and_typed_values():
    table = _table(["name", "n", "ok"], [["a,b", 3, True]])
    assert table.to_delimited().splitlines()[1] == '"a,b",3,true'


def test_delimited_without_headers():
    assert _table([], [["1", "2"]]).to_delimited() == "1,2\n"


def test_json_document():
    table = _table(["a", "b"], [[1, "x"]], title="T")
    doc = json.loads(table.to_json())
    assert doc["id"] == table.identity
    assert doc["title"] == "T"
    assert doc["headers"] == ["a", "b"]
    assert doc["rows"] == [[1, "x"]]
    assert [c["operation"] for c in doc["callHistory"]][:2] == ["with_title", "with_header"]


def test_json_document_without_data():
    doc = json.loads(_table(["a"], [[1]]).to_json(data=False))
    assert "rows" not in doc
    assert "headers" not in doc
    assert len(doc["callHistory"]) == 3
