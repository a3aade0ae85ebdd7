# ------------------------------------------------------------
# Module: xml_viewer/utils/logging_extras.py
# Purpose: Tag log lines with the viewer session they belong to.
# ------------------------------------------------------------

"""Session-scoped logging.

Many sessions share one process, so every line a session writes is
prefixed with `sid=<id>` and the id is also set as `record.sid` for
handlers that format it themselves.
"""

from __future__ import annotations

import logging
from collections.abc import MutableMapping
from typing import Any


class SessionLogAdapter(logging.LoggerAdapter):
    def process(
        self, msg: Any, kwargs: MutableMapping[str, Any]
    ) -> tuple[Any, MutableMapping[str, Any]]:
        sid = self.extra.get("sid") if self.extra else None
        if not sid:
            return msg, kwargs
        kwargs.setdefault("extra", {})["sid"] = sid
        return f"sid={sid} {msg}", kwargs


def log_adapter(logger: logging.Logger, sid: str | None) -> SessionLogAdapter:
    """Wrap `logger` so each message carries session id `sid` (if any)."""
    return SessionLogAdapter(logger, {"sid": sid} if sid else {})
