"""
RetryExecutor — bounded retry around a single remote command.

A result equal to its type's neutral value (None, False, zero) counts as
a failed attempt. After the last attempt the neutral value is returned;
callers treat that as "not confirmed", never as an exception.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Awaitable, Callable, Optional, TypeVar

from .protocols import Backoff

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_MAX_ATTEMPTS = 3
DEFAULT_RETRY_DELAY_S = 0.6


def is_neutral(result: Any) -> bool:
    """True for None, False and numeric zero."""
    if result is None or result is False:
        return True
    if isinstance(result, (int, float)) and not isinstance(result, bool):
        return result == 0
    return False


class RetryExecutor:
    """
    Calls a command until it returns a non-neutral result or the attempt
    bound is reached, sleeping ``delay_s`` between attempts.

    ``is_terminal`` is checked before every attempt: once the session has
    ended no further request is made.
    """

    def __init__(
        self,
        is_terminal: Callable[[], bool],
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
        delay_s: float = DEFAULT_RETRY_DELAY_S,
        backoff: Optional[Backoff] = None,
    ):
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        self._is_terminal = is_terminal
        self._max_attempts = max_attempts
        self._delay_s = delay_s
        self._backoff: Backoff = backoff or asyncio.sleep

    @property
    def max_attempts(self) -> int:
        return self._max_attempts

    @property
    def delay_s(self) -> float:
        return self._delay_s

    async def execute(
        self,
        command: Callable[[], Awaitable[T]],
        label: str = "command",
    ) -> Optional[T]:
        result: Optional[T] = None
        for attempt in range(1, self._max_attempts + 1):
            if self._is_terminal():
                logger.debug("Skipping %s: session is terminal", label)
                return None

            result = await command()
            if not is_neutral(result):
                return result

            logger.debug(
                "%s not confirmed (attempt %d/%d)", label, attempt, self._max_attempts,
            )
            if attempt < self._max_attempts:
                await self._backoff(self._delay_s)

        logger.warning("%s failed after %d attempts", label, self._max_attempts)
        return result
