import logging
from types import SimpleNamespace

import pytest

from catalog.errors import CategoryNotFound
from catalog.services.path_renderer import build_index, render_all, render_one, render_path


def row(id, name, parent_id=None):
    return SimpleNamespace(id=id, name=name, parent_id=parent_id)


def test_render_path_walks_to_root():
    rows = [row(1, "Electronics"), row(2, "Computers", 1), row(3, "Laptops", 2)]
    assert render_one(3, rows) == "Electronics > Computers > Laptops"
    assert render_one(1, rows) == "Electronics"


def test_memo_is_filled_for_ancestors():
    rows = [row(1, "A"), row(2, "B", 1), row(3, "C", 2)]
    memo = {}
    render_path(3, build_index(rows), memo)
    assert memo == {1: "A", 2: "A > B", 3: "A > B > C"}


def test_memo_hit_short_circuits_lookup():
    rows = [row(1, "A"), row(2, "B", 1)]
    memo = {1: "Cached"}
    assert render_path(2, build_index(rows), memo) == "Cached > B"


def test_render_all_sorts_alphabetically():
    rows = [row(1, "Zebra"), row(2, "Apple"), row(3, "Mango"), row(4, "Sub", 3)]
    names = [path for _cid, path in render_all(rows)]
    assert names == ["Apple", "Mango", "Mango > Sub", "Zebra"]


def test_render_all_ordering_of_example():
    rows = [row(10, "Zebra"), row(11, "Apple"), row(12, "Sub", 13), row(13, "Mango")]
    out = [p for _cid, p in render_all(rows) if p != "Mango"]
    assert out == ["Apple", "Mango > Sub", "Zebra"]


def test_dangling_parent_renders_as_root(caplog):
    rows = [row(5, "Orphan", 999), row(6, "Child", 5)]
    with caplog.at_level(logging.WARNING):
        out = dict(render_all(rows))
    assert out[5] == "Orphan"
    assert out[6] == "Orphan > Child"
    assert "999" in caplog.text


def test_self_cycle_does_not_loop(caplog):
    rows = [row(7, "Loop", 7), row(8, "Ok")]
    with caplog.at_level(logging.WARNING):
        out = dict(render_all(rows))
    assert out == {7: "Loop", 8: "Ok"}
    assert "Zyklus" in caplog.text


def test_longer_cycle_degrades_per_row():
    rows = [row(1, "A", 2), row(2, "B", 1), row(3, "X", 1), row(4, "Fine")]
    out = dict(render_all(rows))
    assert out[1] == "A"
    assert out[2] == "B"
    assert out[3] == "A > X"
    assert out[4] == "Fine"


def test_unknown_id_raises():
    with pytest.raises(CategoryNotFound):
        render_one(42, [row(1, "A")])


def test_empty_input_renders_nothing():
    assert render_all([]) == []


def test_render_all_ignores_case_when_sorting():
    rows = [row(1, "apple"), row(2, "Banana"), row(3, "Apple"), row(4, "cherry")]
    assert [p for _cid, p in render_all(rows)] == ["Apple", "apple", "Banana", "cherry"]
