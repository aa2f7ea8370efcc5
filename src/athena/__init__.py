"""athena - MCP tool server with validated, cached, retried tool calls."""

__version__ = "2.0.0"
