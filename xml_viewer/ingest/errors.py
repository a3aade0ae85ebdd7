# ------------------------------------------------------------
# Module: xml_viewer/ingest/errors.py
# Purpose: Define typed viewer exceptions for clear, fail-fast error handling.
# ------------------------------------------------------------

"""Exception types for the viewer.

Responsibilities
----------------
- Provide a base `ViewerError` for catch-all handling.
- Surface malformed or undecodable XML as `ParseError`.
- Carry the user-facing message shown in place of a raw parser error.
"""

# Static message surfaced to users; parser details stay in the logs.
PARSE_ERROR_MESSAGE = "Error parsing XML file. Please make sure it's a valid XML."


class ViewerError(Exception):
    """Base class for viewer failures."""


class ParseError(ViewerError):
    """Raised when input is not well-formed XML or cannot be read as text."""

    user_message = PARSE_ERROR_MESSAGE
