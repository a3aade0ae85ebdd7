# ------------------------------------------------------------
# Module: xml_viewer/utils/hashing.py
# Purpose: SHA-256 fingerprint for uploaded payloads.
# ------------------------------------------------------------

from __future__ import annotations

import hashlib


# Compute SHA-256 for an in-memory bytes payload.
def compute_sha256(data: bytes) -> str:
    """Compute SHA-256 of a bytes payload (returned to clients for caching)."""
    return hashlib.sha256(data).hexdigest()


__all__ = ["compute_sha256"]
