"""Tests: column set derivation, visibility toggling, and header labels."""

import random

from xml_viewer.view.columns import (
    ColumnLabel,
    column_label,
    derive_columns,
    restore_visibility,
    toggle,
)

ALL = ["A", "B", "C", "D"]


def test_derive_columns_uses_first_record_only():
    records = [{"A": "1", "B": "2"}, {"A": "3", "C": "4"}]
    assert derive_columns(records) == ["A", "B"]
    # Idempotent and order-stable.
    assert derive_columns(records) == derive_columns(records)


def test_derive_columns_empty():
    assert derive_columns([]) == []


def test_hide_appends_to_excluded():
    visible, excluded = toggle("B", ALL, [], ALL)
    assert visible == ["A", "C", "D"]
    assert excluded == ["B"]
    visible, excluded = toggle("A", visible, excluded, ALL)
    assert excluded == ["B", "A"]


def test_show_restores_column_set_order():
    visible, excluded = toggle("B", ALL, [], ALL)
    visible, excluded = toggle("D", visible, excluded, ALL)
    assert visible == ["A", "C"]
    visible, excluded = toggle("B", visible, excluded, ALL)
    assert visible == ["A", "B", "C"]
    assert excluded == ["D"]


def test_hide_then_show_round_trip():
    visible, excluded = toggle("C", ALL, [], ALL)
    visible, excluded = toggle("C", visible, excluded, ALL)
    assert (visible, excluded) == (ALL, [])


def test_unknown_column_is_a_no_op():
    assert toggle("Z", ["A"], ["B"], ["A", "B"]) == (["A"], ["B"])


def test_inputs_are_not_mutated():
    visible, excluded = ["A", "B"], ["C"]
    toggle("A", visible, excluded, ["A", "B", "C"])
    toggle("C", visible, excluded, ["A", "B", "C"])
    assert visible == ["A", "B"]
    assert excluded == ["C"]


def test_partition_invariant_holds_for_random_toggle_sequences():
    rng = random.Random(1234)
    columns = [f"c{i}" for i in range(8)]
    visible, excluded = list(columns), []
    for _ in range(500):
        visible, excluded = toggle(rng.choice(columns), visible, excluded, columns)
        assert set(visible) | set(excluded) == set(columns)
        assert not set(visible) & set(excluded)
        assert len(visible) + len(excluded) == len(columns)
        # Visible columns always keep column-set order.
        assert visible == [c for c in columns if c in visible]


def test_restore_without_snapshot_shows_everything():
    assert restore_visibility(ALL, None) == (ALL, [])


def test_restore_honors_stored_empty_snapshot():
    assert restore_visibility(ALL, []) == ([], ALL)


def test_restore_applies_snapshot_in_column_order():
    visible, excluded = restore_visibility(ALL, ["D", "A"])
    assert visible == ["A", "D"]
    assert excluded == ["B", "C"]


def test_restore_ignores_unrelated_snapshot():
    assert restore_visibility(ALL, ["X", "Y"]) == (ALL, [])


def test_restore_with_hidden_names_only_hides_those():
    # "E" is new to this column set; it must come up visible.
    columns = [*ALL, "E"]
    visible, excluded = restore_visibility(columns, ["A"], hidden=["C", "X", "B"])
    assert visible == ["A", "D", "E"]
    assert excluded == ["C", "B"]


def test_restore_with_empty_hidden_shows_everything():
    assert restore_visibility(ALL, [], hidden=[]) == (ALL, [])


def test_column_label_splits_on_first_dot():
    assert column_label("Name") == ColumnLabel(group="Name")
    assert column_label("Addr.City") == ColumnLabel(group="Addr", sub_label="City")
    assert column_label("a.b.c") == ColumnLabel(group="a", sub_label="b.c")
