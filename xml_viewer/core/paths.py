# ------------------------------------------------------------
# Module: xml_viewer/core/paths.py
# Purpose: Canonical, CWD-agnostic path helpers for runtime state.
# ------------------------------------------------------------

"""Centralized path management utilities.

Responsibilities
----------------
- Resolve the state DB path from `settings`.
- Create its parent directory idempotently before first use.
- Offer a path snapshot for startup diagnostics.
"""

from __future__ import annotations

from pathlib import Path

from xml_viewer.core.config import settings


def state_db() -> Path:
    """Path to the SQLite file backing the key-value store."""
    p = settings.STATE_DB
    p.parent.mkdir(parents=True, exist_ok=True)
    return p


# ---- Diagnostics ----
def log_path_map() -> dict[str, str]:
    """Return canonical paths snapshot for startup logging and diagnostics."""
    return {
        "PROJECT_ROOT": str(settings.PROJECT_ROOT),
        "DATA_DIR": str(settings.DATA_DIR),
        "STATE_DB": str(settings.STATE_DB),
    }
