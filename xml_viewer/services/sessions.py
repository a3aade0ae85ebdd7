# ------------------------------------------------------------
# Module: xml_viewer/services/sessions.py
# Purpose: In-process registry of live viewer sessions.
# ------------------------------------------------------------

"""Create, look up, and drop viewer sessions by id.

Sessions live in memory only (one per open browser tab). The registry is
bounded; when full, the least recently used session is evicted.
"""

from __future__ import annotations

import logging
import threading
import uuid
from collections import OrderedDict

from xml_viewer.ingest.errors import ViewerError
from xml_viewer.ingest.extract_config import ExtractConfig
from xml_viewer.services.viewer import ViewerSession
from xml_viewer.store.kv import KeyValueStore

log = logging.getLogger("xmlviewer.services.sessions")


class SessionNotFound(ViewerError):
    """Raised when a session id is unknown or was evicted."""


class SessionRegistry:
    def __init__(
        self,
        store: KeyValueStore,
        *,
        page_size: int,
        extract_config: ExtractConfig,
        max_sessions: int = 256,
    ) -> None:
        self.store = store
        self.page_size = page_size
        self.extract_config = extract_config
        self.max_sessions = max_sessions
        self._sessions: OrderedDict[str, ViewerSession] = OrderedDict()
        self._lock = threading.Lock()

    def create(self) -> ViewerSession:
        session = ViewerSession(
            uuid.uuid4().hex,
            self.store,
            page_size=self.page_size,
            extract_config=self.extract_config,
        )
        with self._lock:
            self._sessions[session.session_id] = session
            while len(self._sessions) > self.max_sessions:
                evicted, _ = self._sessions.popitem(last=False)
                log.info("session evicted sid=%s", evicted)
        log.info("session created sid=%s", session.session_id)
        return session

    def get(self, session_id: str) -> ViewerSession:
        with self._lock:
            session = self._sessions.get(session_id)
            if session is None:
                raise SessionNotFound(session_id)
            self._sessions.move_to_end(session_id)
            return session

    def drop(self, session_id: str) -> None:
        with self._lock:
            if self._sessions.pop(session_id, None) is None:
                raise SessionNotFound(session_id)
        log.info("session dropped sid=%s", session_id)

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)
