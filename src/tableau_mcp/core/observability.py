from __future__ import annotations

import logging
import time
from contextlib import contextmanager
from typing import Any, Dict, Iterator

_LOG = logging.getLogger("tableau_mcp.observability")

# LogRecord attributes; passing these via ``extra`` raises KeyError.
RESERVED_LOG_KEYS = frozenset(
    logging.LogRecord("", 0, "", 0, "", None, None).__dict__
) | {"message", "asctime"}


def _clean_fields(fields: Dict[str, Any]) -> Dict[str, Any]:
    return {k: v for k, v in fields.items() if k not in RESERVED_LOG_KEYS}


def log_event(event: str, logger: logging.Logger | None = None, **fields: Any) -> None:
    """
    Emit one structured INFO record named ``event``.
    Fields land on the record as attributes so LogfmtFormatter can print them.
    """
    log = logger or _LOG
    extra = {"event": event, **_clean_fields(fields)}
    log.info(event, extra=extra)


@contextmanager
def tool_call(tool: str, logger: logging.Logger | None = None) -> Iterator[None]:
    """Log a ``tool_call`` event with status and duration around an MCP tool body."""
    start = time.perf_counter()
    status: Any = "ok"
    error_type = None
    try:
        yield
    except Exception as exc:
        status = "exception"
        error_type = type(exc).__name__
        raise
    finally:
        log_event(
            "tool_call",
            logger=logger,
            tool=tool,
            status=status,
            error_type=error_type,
            duration_ms=int((time.perf_counter() - start) * 1000),
        )


__all__ = ["log_event", "tool_call", "RESERVED_LOG_KEYS"]
