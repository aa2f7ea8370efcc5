"""Shared test fixtures for athena."""

from __future__ import annotations

from typing import Any

import pytest

from athena.core.cache import ResponseCache
from athena.core.pipeline import ToolPipeline
from athena.core.retry import RetryConfig
from athena.core.validation import ToolSchema
from athena.tools.registry import ToolRegistry
from tests.fixtures.tools import ECHO_SCHEMA, CountingHandler, FakeClock


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def cache(clock: FakeClock) -> ResponseCache:
    return ResponseCache(clock=clock)


@pytest.fixture
def make_pipeline(cache: ResponseCache) -> Any:
    """Factory: pipeline over a registry with one handler under ``name``."""

    def _make(
        handler: CountingHandler,
        *,
        name: str = "echo",
        cacheable: bool = False,
        schema: ToolSchema | None = ECHO_SCHEMA,
        retry: RetryConfig | None = None,
    ) -> ToolPipeline:
        registry = ToolRegistry()
        registry.add(name, handler, schema=schema, cacheable=cacheable)
        return ToolPipeline(registry, cache=cache, retry=retry)

    return _make
