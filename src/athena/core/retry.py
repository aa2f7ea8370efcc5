"""Retry with exponential backoff for tool handler calls."""

from __future__ import annotations

import asyncio
import logging
import socket
from dataclasses import dataclass
from typing import TYPE_CHECKING, TypeVar

import httpx
import openai
import pydantic

from athena.core.errors import ErrorCategory, ToolError

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

T = TypeVar("T")

logger = logging.getLogger(__name__)

_TERMINAL_CATEGORIES: frozenset[ErrorCategory] = frozenset(
    {
        ErrorCategory.HOST_NOT_FOUND,
        ErrorCategory.UNAUTHORIZED,
        ErrorCategory.FORBIDDEN,
        ErrorCategory.INVALID_INPUT,
    }
)

_STATUS_CATEGORIES: dict[int, ErrorCategory] = {
    401: ErrorCategory.UNAUTHORIZED,
    403: ErrorCategory.FORBIDDEN,
    429: ErrorCategory.RATE_LIMITED,
}


@dataclass(frozen=True, slots=True)
class RetryConfig:
    """Configuration for retry with backoff."""

    max_attempts: int = 3
    base_delay: float = 1.0


def is_dns_failure(error: BaseException) -> bool:
    """Walk the cause chain looking for a name-resolution failure."""
    seen: set[int] = set()
    current: BaseException | None = error
    while current is not None and id(current) not in seen:
        seen.add(id(current))
        if isinstance(current, socket.gaierror):
            return True
        current = current.__cause__ or current.__context__
    return False


def _status_of(error: BaseException) -> int | None:
    """Extract an HTTP-ish status code from an arbitrary exception."""
    if isinstance(error, httpx.HTTPStatusError):
        return error.response.status_code
    for attr in ("status_code", "status"):
        value = getattr(error, attr, None)
        if isinstance(value, int) and not isinstance(value, bool):
            return value
    return None


def classify_error(error: BaseException) -> ErrorCategory:
    """Normalize any handler failure into an :class:`ErrorCategory`."""
    if isinstance(error, ToolError):
        return error.category
    if isinstance(error, pydantic.ValidationError):
        return ErrorCategory.INVALID_INPUT
    if isinstance(error, openai.AuthenticationError):
        return ErrorCategory.UNAUTHORIZED
    if isinstance(error, openai.PermissionDeniedError):
        return ErrorCategory.FORBIDDEN
    if isinstance(error, openai.RateLimitError):
        return ErrorCategory.RATE_LIMITED
    if is_dns_failure(error):
        return ErrorCategory.HOST_NOT_FOUND
    if isinstance(
        error,
        (openai.APIConnectionError, httpx.TransportError, ConnectionError, TimeoutError),
    ):
        return ErrorCategory.NETWORK
    status = _status_of(error)
    if status is not None:
        return _STATUS_CATEGORIES.get(status, ErrorCategory.OTHER)
    return ErrorCategory.OTHER


def is_retryable(error: BaseException) -> bool:
    """Check if an error should trigger another attempt."""
    return classify_error(error) not in _TERMINAL_CATEGORIES


def compute_delay(attempt: int, config: RetryConfig) -> float:
    """Backoff delay after a failed attempt: base_delay * 2^attempt."""
    return config.base_delay * (2**attempt)


async def retry_with_backoff(
    fn: Callable[[], Awaitable[T]],
    config: RetryConfig | None = None,
    on_retry: Callable[[int, float, Exception], None] | None = None,
) -> T:
    """Execute fn with retry and exponential backoff.

    Every failure is retried except those classified as host-not-found,
    unauthorized or forbidden, which propagate immediately. There is no
    jitter and no delay cap; each call is independent of the others.

    Args:
        fn: Zero-arg callable returning an awaitable.
        config: Retry configuration. Uses defaults if None.
        on_retry: Optional callback(attempt, delay, error) before each wait.

    Returns:
        The result of fn().

    Raises:
        The last error once attempts are exhausted, or the first terminal
        error.
    """
    cfg = config or RetryConfig()
    attempts = max(cfg.max_attempts, 1)

    for attempt in range(attempts):
        try:
            return await fn()
        except Exception as e:
            if attempt == attempts - 1:
                raise
            if not is_retryable(e):
                raise
            delay = compute_delay(attempt, cfg)
            logger.warning(
                "Attempt %d/%d failed (%s), retrying in %.1fs",
                attempt + 1,
                attempts,
                e,
                delay,
            )
            if on_retry is not None:
                on_retry(attempt + 1, delay, e)
            await asyncio.sleep(delay)

    # Unreachable, but satisfies mypy
    msg = f"Retry loop exited unexpectedly (max_attempts={cfg.max_attempts})"
    raise RuntimeError(msg)
