"""MCP server exposing the athena tools over stdio."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.shared.exceptions import McpError
from mcp.types import (
    CallToolRequest,
    CallToolResult,
    ServerResult,
    TextContent,
    Tool,
)

from athena.core.cache import ResponseCache
from athena.core.errors import ToolInvocationError
from athena.core.pipeline import ToolPipeline
from athena.core.retry import RetryConfig
from athena.tools.builtin import build_registry

if TYPE_CHECKING:
    from athena.config.schema import AthenaConfig
    from athena.tools.registry import ToolRegistry

logger = logging.getLogger(__name__)


def build_pipeline(
    config: AthenaConfig,
    registry: ToolRegistry | None = None,
) -> ToolPipeline:
    """Assemble a pipeline from config, using the built-in tools by default."""
    return ToolPipeline(
        registry if registry is not None else build_registry(config),
        cache=ResponseCache(
            ttl=config.cache.ttl_seconds,
            max_entries=config.cache.max_entries,
        ),
        retry=RetryConfig(
            max_attempts=config.retry.max_attempts,
            base_delay=config.retry.base_delay,
        ),
        caching=config.cache.enabled,
    )


def _get_tools(pipeline: ToolPipeline) -> list[Tool]:
    """Render registered tools as MCP tool definitions."""
    return [
        Tool(
            name=d.name,
            description=d.description,
            inputSchema=d.parameters_schema,
        )
        for d in pipeline.registry.list_descriptors()
    ]


async def _call_tool(
    pipeline: ToolPipeline,
    name: str,
    arguments: dict[str, Any] | None,
) -> list[TextContent]:
    """Run one call through the pipeline and shape the MCP response.

    Raises:
        McpError: Carrying the pipeline error kind and message.
    """
    try:
        result = await pipeline.invoke(name, arguments or {})
    except ToolInvocationError as e:
        logger.error("Error in tool %s: %s", name, e.message)
        raise McpError(e.to_error_data()) from e
    return [TextContent(type="text", text=result.render())]


def create_server(pipeline: ToolPipeline, name: str = "athena") -> Server:
    """Create an MCP server bound to a pipeline."""
    server: Server = Server(name)

    @server.list_tools()  # type: ignore[no-untyped-call, untyped-decorator]
    async def list_tools() -> list[Tool]:
        """List available MCP tools."""
        return _get_tools(pipeline)

    # Registered directly rather than through @server.call_tool(), which
    # folds every exception into an isError result and drops the error code.
    async def call_tool(req: CallToolRequest) -> ServerResult:
        """Handle tool calls; pipeline errors become JSON-RPC errors."""
        content = await _call_tool(pipeline, req.params.name, req.params.arguments)
        return ServerResult(CallToolResult(content=content, isError=False))

    server.request_handlers[CallToolRequest] = call_tool

    return server


async def run_server(config: AthenaConfig) -> None:
    """Start the MCP server on stdio."""
    pipeline = build_pipeline(config)
    server = create_server(pipeline, name=config.server.name)
    logger.info(
        "%s MCP server v%s running on stdio with %d tools",
        config.server.name,
        config.server.version,
        len(pipeline.registry),
    )
    async with stdio_server() as (read_stream, write_stream):
        await server.run(
            read_stream,
            write_stream,
            server.create_initialization_options(),
        )
