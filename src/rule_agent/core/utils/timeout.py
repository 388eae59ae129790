"""
Timeout utilities for async operations.
"""

import asyncio
from collections.abc import Coroutine
from typing import Any

import structlog

logger = structlog.get_logger(__name__)


async def execute_with_timeout(
    coro: Coroutine[Any, Any, Any],
    timeout: float | None = 30.0,
    timeout_message: str | None = None,
) -> Any:
    """
    Execute a coroutine with timeout handling.

    Args:
        coro: The coroutine to execute
        timeout: Timeout in seconds, or None to wait indefinitely
        timeout_message: Custom message for timeout exception

    Returns:
        The result of the coroutine

    Raises:
        TimeoutError: If the operation times out
    """
    if timeout is None:
        return await coro

    try:
        return await asyncio.wait_for(coro, timeout=timeout)
    except TimeoutError as err:
        msg = timeout_message or f"Operation timed out after {timeout} seconds"
        logger.error(f"❌ {msg}")
        raise TimeoutError(msg) from err
