"""Tool-invocation pipeline.

One call flows through::

    lookup -> validate -> cache lookup -> execute with retry -> cache store

Unknown names fail before validation. Validation failures never reach
the cache or the handler. Handler failures surface as
:class:`~athena.core.errors.ToolExecutionError` and are never cached.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from athena.core.cache import ResponseCache, make_key
from athena.core.errors import MethodNotFoundError, ToolExecutionError
from athena.core.retry import RetryConfig, retry_with_backoff
from athena.core.validation import validate_arguments

if TYPE_CHECKING:
    from collections.abc import Mapping

    from athena.tools.base import ToolDescriptor
    from athena.tools.registry import ToolRegistry

logger = logging.getLogger(__name__)

CACHED_MARKER = "[CACHED] "


@dataclass(frozen=True, slots=True)
class InvocationResult:
    """Outcome of a successful invocation."""

    tool_name: str
    text: str
    cached: bool = False

    def render(self) -> str:
        """Text shown to the caller; cache hits carry a visible marker."""
        if self.cached:
            return f"{CACHED_MARKER}{self.text}"
        return self.text


class ToolPipeline:
    """Validates, caches, and retries tool calls against a registry.

    The cache is owned by the pipeline instance. Pass one explicitly to
    share it or to control its clock in tests.
    """

    def __init__(
        self,
        registry: ToolRegistry,
        *,
        cache: ResponseCache | None = None,
        retry: RetryConfig | None = None,
        caching: bool = True,
    ) -> None:
        self._registry = registry
        self._caching = caching
        self._cache = cache if cache is not None else ResponseCache()
        self._retry = retry or RetryConfig()

    @property
    def registry(self) -> ToolRegistry:
        return self._registry

    @property
    def cache(self) -> ResponseCache:
        return self._cache

    def _resolve(self, name: str) -> ToolDescriptor:
        try:
            return self._registry.get(name)
        except KeyError:
            raise MethodNotFoundError(name) from None

    async def invoke(
        self,
        name: str,
        arguments: Mapping[str, Any] | None = None,
    ) -> InvocationResult:
        """Run one tool call end to end.

        Raises:
            MethodNotFoundError: No tool is registered under ``name``.
            InvalidParamsError: Arguments failed schema validation.
            ToolExecutionError: The handler failed after retries.
        """
        descriptor = self._resolve(name)
        args: dict[str, Any] = dict(arguments or {})

        validate_arguments(name, descriptor.schema, args)

        key = make_key(name, args) if descriptor.cacheable and self._caching else None
        if key is not None:
            hit = self._cache.lookup(key)
            if hit is not None:
                logger.debug("Cache hit for %s", name)
                return InvocationResult(tool_name=name, text=hit, cached=True)

        attempts = 0

        async def _attempt() -> str:
            nonlocal attempts
            attempts += 1
            return await descriptor.handler(dict(args))

        start = time.monotonic()
        try:
            text = await retry_with_backoff(_attempt, config=self._retry)
        except Exception as e:
            logger.error(
                "Tool %s failed after %d attempt(s): %s", name, attempts, e
            )
            raise ToolExecutionError(name, str(e), attempts=attempts) from e

        logger.info(
            "Tool %s succeeded in %.0fms (%d attempt(s))",
            name,
            (time.monotonic() - start) * 1000,
            attempts,
        )
        if key is not None:
            self._cache.store(key, text)
        return InvocationResult(tool_name=name, text=text)
