# ------------------------------------------------------------
# Module: xml_viewer/core/logging.py
# Purpose: One logging setup shared by the API server and the CLI.
# ------------------------------------------------------------

"""Logging setup for the XML viewer.

All project loggers live under the `xmlviewer` namespace, so one level
setting covers extraction, sessions, the store and the routes. The API
logs to stdout next to Uvicorn; the CLI logs to stderr because stdout
carries the table.

Notes
-----
- `settings.MUTE_ALL_LOGS` disables logging entirely (CI, benchmarks).
- `settings.ACCESS_LOG=false` drops Uvicorn's per-request lines; uploads
  and control clicks are chatty otherwise.
"""

from __future__ import annotations

import logging
import sys
from typing import TextIO

from xml_viewer.core.config import settings

APP_LOGGER = "xmlviewer"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


def configure_logging(level: str | None = None, stream: TextIO | None = None) -> None:
    """Install the root handler and set levels for app and Uvicorn loggers.

    `level` overrides `settings.LOG_LEVEL`; `stream` defaults to stdout.
    """
    if settings.MUTE_ALL_LOGS:
        logging.disable(logging.CRITICAL)
        return

    level = level or settings.LOG_LEVEL
    logging.basicConfig(level=level, format=LOG_FORMAT, stream=stream or sys.stdout)
    logging.getLogger(APP_LOGGER).setLevel(level)

    for name in ("uvicorn", "uvicorn.error", "uvicorn.access"):
        logging.getLogger(name).setLevel(level)
    logging.getLogger("uvicorn.access").disabled = not settings.ACCESS_LOG
