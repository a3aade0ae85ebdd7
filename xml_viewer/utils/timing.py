# ------------------------------------------------------------
# Module: xml_viewer/utils/timing.py
# Purpose: Time a unit of work and log one start line and one outcome line.
# ------------------------------------------------------------

"""Timing for extraction and other per-upload work.

`log_timer` yields a dict the caller fills with results (row and column
counts, say) so the outcome line carries both the inputs and what came
out. Errors listed in `expected` are user-caused (a malformed upload) and
log at WARNING without a traceback; anything else logs at ERROR with one.

Example
-------
    with log_timer("extract", log, expected=(ParseError,), size=n) as out:
        records = ...
        out["rows"] = len(records)
"""

from __future__ import annotations

import logging
import time
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any


def _fields(ctx: dict[str, Any]) -> str:
    return " ".join(f"{k}={v}" for k, v in ctx.items())


@contextmanager
def log_timer(
    msg: str,
    logger: logging.Logger | logging.LoggerAdapter | None = None,
    *,
    expected: tuple[type[BaseException], ...] = (),
    **ctx: Any,
) -> Iterator[dict[str, Any]]:
    log = logger or logging.getLogger(__name__)
    result: dict[str, Any] = {}
    log.debug("%s start %s", msg, _fields(ctx))
    t0 = time.perf_counter()
    try:
        yield result
    except expected as e:
        log.warning(
            "%s rejected after %.3fs %s: %s",
            msg,
            time.perf_counter() - t0,
            _fields(ctx),
            e,
        )
        raise
    except Exception:
        log.error(
            "%s failed after %.3fs %s",
            msg,
            time.perf_counter() - t0,
            _fields(ctx),
            exc_info=True,
        )
        raise
    log.info(
        "%s ok in %.3fs %s", msg, time.perf_counter() - t0, _fields({**ctx, **result})
    )
