"""Shared pytest fixtures.

Every test gets its own state DB under `tmp_path`, so the persisted
visible-columns snapshot never leaks between tests.
"""

from __future__ import annotations

import asyncio

import pytest
from fastapi.testclient import TestClient

from xml_viewer.core.config import settings
from xml_viewer.main import app
from xml_viewer.store.kv import MemoryStore

# Three <Table1> rows with {Name, Amount}; the third Name is blank.
SAMPLE_XML = b"""<?xml version="1.0" encoding="utf-8"?>
<NewDataSet>
  <Table1>
    <Name>Alpha</Name>
    <Amount>300</Amount>
  </Table1>
  <Table1>
    <Name>Beta</Name>
    <Amount>150</Amount>
  </Table1>
  <Table1>
    <Name>  </Name>
    <Amount>225</Amount>
  </Table1>
</NewDataSet>
"""


def make_rows_xml(n: int) -> bytes:
    """Build a DataSet export with `n` rows: Id=1..n, Label=row-<i>."""
    rows = "".join(
        f"<Table1><Id>{i:03d}</Id><Label>row-{i}</Label></Table1>"
        for i in range(1, n + 1)
    )
    return f"<NewDataSet>{rows}</NewDataSet>".encode("utf-8")


@pytest.fixture(autouse=True)
def _isolated_state(tmp_path, monkeypatch):
    monkeypatch.setattr(settings, "DATA_DIR", tmp_path)
    monkeypatch.setattr(settings, "STATE_DB", tmp_path / "state.sqlite")


@pytest.fixture
def sample_xml_bytes() -> bytes:
    return SAMPLE_XML


@pytest.fixture
def memory_store() -> MemoryStore:
    return MemoryStore()


@pytest.fixture
def client():
    # Context manager runs the lifespan (store + session registry).
    with TestClient(app) as c:
        yield c


@pytest.fixture
def session_id(client) -> str:
    r = client.post("/v1/sessions")
    assert r.status_code == 201
    return r.json()["session_id"]


def upload(client, session_id: str, data: bytes, filename: str = "data.xml"):
    return client.post(
        f"/v1/sessions/{session_id}/upload",
        files={"file": (filename, data, "application/xml")},
    )


def running_loop_or_none():
    """The event loop running on this thread, or None on a worker thread."""
    try:
        return asyncio.get_running_loop()
    except RuntimeError:
        return None
