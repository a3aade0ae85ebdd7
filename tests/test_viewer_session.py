"""Tests: ViewerSession state transitions.

The page cursor resets to 1 whenever the view contents change (upload,
search, filter, sort). Column visibility changes leave the cursor alone.
"""

import json

import pytest

from conftest import make_rows_xml
from xml_viewer.ingest.errors import PARSE_ERROR_MESSAGE, ParseError
from xml_viewer.ingest.extract_config import ExtractConfig
from xml_viewer.services.sessions import SessionNotFound, SessionRegistry
from xml_viewer.services.viewer import ViewerSession
from xml_viewer.store.kv import (
    HIDDEN_COLUMNS_KEY,
    VISIBLE_COLUMNS_KEY,
    save_visible_columns,
)


@pytest.fixture
def session(memory_store):
    return ViewerSession("sid-1", memory_store, page_size=10)


def test_fresh_session_is_empty(session):
    snap = session.snapshot()
    assert snap.all_columns == []
    assert snap.rows == []
    assert snap.page == 1
    assert snap.total_pages == 1
    assert snap.error is None


def test_load_populates_state(session, sample_xml_bytes):
    session.load(sample_xml_bytes)
    snap = session.snapshot()
    assert snap.all_columns == ["Name", "Amount"]
    assert snap.visible_columns == ["Name", "Amount"]
    assert snap.excluded_columns == []
    assert snap.row_count == 3
    assert len(snap.rows) == 3


def test_parse_error_keeps_previous_table(session, sample_xml_bytes):
    session.load(sample_xml_bytes)
    with pytest.raises(ParseError):
        session.load(b"<broken>")
    snap = session.snapshot()
    assert snap.error == PARSE_ERROR_MESSAGE
    assert snap.row_count == 3
    assert snap.all_columns == ["Name", "Amount"]

    # Next good upload clears the error.
    session.load(sample_xml_bytes)
    assert session.snapshot().error is None


def test_parse_error_on_empty_session(session):
    with pytest.raises(ParseError):
        session.load(b"")
    snap = session.snapshot()
    assert snap.error == PARSE_ERROR_MESSAGE
    assert snap.row_count == 0


def test_toggle_persists_visible_snapshot(session, memory_store, sample_xml_bytes):
    session.load(sample_xml_bytes)
    session.toggle_column("Name")
    assert json.loads(memory_store.get(VISIBLE_COLUMNS_KEY)) == ["Amount"]
    session.toggle_column("Name")
    assert json.loads(memory_store.get(VISIBLE_COLUMNS_KEY)) == ["Name", "Amount"]


def test_hidden_column_leaves_records_untouched(session, sample_xml_bytes):
    session.load(sample_xml_bytes)
    session.toggle_column("Amount")
    snap = session.snapshot()
    assert snap.visible_columns == ["Name"]
    assert snap.excluded_columns == ["Amount"]
    assert all("Amount" in r for r in snap.rows)


def test_stored_snapshot_applies_on_load(memory_store, sample_xml_bytes):
    save_visible_columns(memory_store, ["Amount"])
    session = ViewerSession("sid-2", memory_store)
    session.load(sample_xml_bytes)
    snap = session.snapshot()
    assert snap.visible_columns == ["Amount"]
    assert snap.excluded_columns == ["Name"]


def test_new_columns_in_later_upload_come_up_visible(session):
    session.load(b"<D><Table1><Name>a</Name><Amount>1</Amount></Table1></D>")
    session.toggle_column("Amount")
    session.load(
        b"<D><Table1><Name>a</Name><Date>d</Date><Total>2</Total></Table1></D>"
    )
    snap = session.snapshot()
    assert snap.visible_columns == ["Name", "Date", "Total"]
    assert snap.excluded_columns == []

    # Going back to the first layout hides the column again.
    session.load(b"<D><Table1><Name>a</Name><Amount>1</Amount></Table1></D>")
    assert session.snapshot().excluded_columns == ["Amount"]


def test_hidden_names_survive_a_new_session(memory_store, sample_xml_bytes):
    first = ViewerSession("sid-a", memory_store)
    first.load(sample_xml_bytes)
    first.toggle_column("Amount")
    assert json.loads(memory_store.get(HIDDEN_COLUMNS_KEY)) == ["Amount"]

    second = ViewerSession("sid-b", memory_store)
    second.load(
        b"<D><Table1><Name>a</Name><Amount>1</Amount><Note>n</Note></Table1></D>"
    )
    snap = second.snapshot()
    assert snap.visible_columns == ["Name", "Note"]
    assert snap.excluded_columns == ["Amount"]


def test_all_hidden_snapshot_is_kept_on_reload(memory_store, sample_xml_bytes):
    save_visible_columns(memory_store, [])
    session = ViewerSession("sid-3", memory_store)
    session.load(sample_xml_bytes)
    snap = session.snapshot()
    assert snap.visible_columns == []
    assert snap.excluded_columns == ["Name", "Amount"]


def test_page_cursor_moves_and_clamps(session):
    session.load(make_rows_xml(25))
    assert session.snapshot().total_pages == 3
    session.previous_page()
    assert session.snapshot().page == 1
    for _ in range(5):
        session.next_page()
    snap = session.snapshot()
    assert snap.page == 3
    assert [r["Id"] for r in snap.rows] == ["021", "022", "023", "024", "025"]


@pytest.mark.parametrize(
    "action",
    [
        lambda s: s.set_search("row"),
        lambda s: s.toggle_filter("Label"),
        lambda s: s.sort_by("Id"),
    ],
)
def test_view_changes_reset_page(session, action):
    session.load(make_rows_xml(25))
    session.next_page()
    assert session.snapshot().page == 2
    action(session)
    assert session.snapshot().page == 1


def test_visibility_toggle_keeps_page(session):
    session.load(make_rows_xml(25))
    session.next_page()
    session.toggle_column("Label")
    assert session.snapshot().page == 2


def test_reupload_resets_page_and_drops_stale_sort(session, sample_xml_bytes):
    session.load(make_rows_xml(25))
    session.sort_by("Id")
    session.toggle_filter("Label")
    session.next_page()
    session.load(sample_xml_bytes)
    snap = session.snapshot()
    assert snap.page == 1
    assert snap.sort is None
    assert snap.filter_column is None
    assert snap.row_count == 3


def test_search_filter_sort_through_session(session, sample_xml_bytes):
    session.load(sample_xml_bytes)
    session.sort_by("Amount")
    assert [r["Amount"] for r in session.snapshot().rows] == ["150", "225", "300"]
    session.sort_by("Amount")
    assert [r["Amount"] for r in session.snapshot().rows] == ["300", "225", "150"]
    session.toggle_filter("Name")
    assert session.snapshot().total_rows == 2
    session.set_search("BETA")
    assert [r["Name"] for r in session.snapshot().rows] == ["Beta"]


def test_registry_create_get_drop(memory_store):
    registry = SessionRegistry(
        memory_store, page_size=10, extract_config=ExtractConfig(), max_sessions=2
    )
    a = registry.create()
    assert registry.get(a.session_id) is a
    registry.drop(a.session_id)
    with pytest.raises(SessionNotFound):
        registry.get(a.session_id)
    with pytest.raises(SessionNotFound):
        registry.drop(a.session_id)


def test_registry_evicts_least_recently_used(memory_store):
    registry = SessionRegistry(
        memory_store, page_size=10, extract_config=ExtractConfig(), max_sessions=2
    )
    a = registry.create()
    b = registry.create()
    registry.get(a.session_id)  # a is now most recent
    registry.create()
    assert len(registry) == 2
    assert registry.get(a.session_id) is a
    with pytest.raises(SessionNotFound):
        registry.get(b.session_id)
