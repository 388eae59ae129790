"""
Structured logging utilities.

Provides a context manager for structured operation logging with timing,
error tracking, and metadata.
"""

from __future__ import annotations

import time
from contextlib import asynccontextmanager
from typing import Any

import structlog

logger = structlog.get_logger(__name__)


@asynccontextmanager
async def log_operation(
    operation: str,
    subject_ids: dict[str, str] | None = None,
    **context: Any,
) -> Any:  # AsyncGenerator[None, None]
    """
    Context manager for structured operation logging.

    Logs operation start, completion, and errors with timing information.

    Args:
        operation: Name of the operation being performed
        subject_ids: Dictionary of subject identifiers (e.g., {"module": "chat"})
        **context: Additional context to include in logs

    Example:
        async with log_operation("rule_agent.execute", module=context.module):
            result = await run_checks(...)
    """
    start_time = time.monotonic()
    log = logger.bind(operation=operation, **(subject_ids or {}), **context)

    log.info(f"🚀 Starting {operation}")

    try:
        yield
    except Exception as e:
        latency_ms = int((time.monotonic() - start_time) * 1000)
        log.error(f"❌ {operation} failed after {latency_ms}ms", error=str(e), latency_ms=latency_ms, exc_info=True)
        raise
    else:
        latency_ms = int((time.monotonic() - start_time) * 1000)
        log.info(f"✅ {operation} completed in {latency_ms}ms", latency_ms=latency_ms)
