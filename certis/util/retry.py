"""Bounded retry for optimistic concurrency conflicts."""

from collections.abc import Awaitable, Callable
from typing import TypeVar

import logfire

from certis.domain.error import ConcurrencyConflictError

T = TypeVar("T")


async def retry_on_conflict(
    operation: Callable[[], Awaitable[T]],
    attempts: int = 2,
    name: str = "operation",
) -> T:
    """Run an operation, re-running it after a lost optimistic write.

    The operation must re-read its inputs and re-check its preconditions on
    every call. The last ``ConcurrencyConflictError`` propagates once the
    attempts are used up.

    Args:
        operation: Zero-argument coroutine factory
        attempts: Total number of attempts (default: the first try plus one retry)
        name: Name used in log events

    Returns:
        The operation's result
    """
    attempt = 1
    while True:
        try:
            return await operation()
        except ConcurrencyConflictError as e:
            if attempt >= attempts:
                logfire.warn(
                    "Concurrent update conflict, giving up",
                    operation=name,
                    attempts=attempt,
                    error=str(e),
                )
                raise
            logfire.info(
                "Concurrent update conflict, retrying",
                operation=name,
                attempt=attempt,
            )
            attempt += 1
