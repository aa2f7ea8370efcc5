"""Tool descriptor and handler types.

A tool is a named handler plus the metadata the pipeline needs to run
it: a validation schema, a cacheable flag, and a description for the
MCP listing.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any

from athena.core.validation import ToolSchema

ToolHandler = Callable[[dict[str, Any]], Awaitable[str]]


@dataclass(frozen=True, slots=True)
class ToolDescriptor:
    """Everything the pipeline knows about one tool."""

    name: str
    description: str
    handler: ToolHandler
    schema: ToolSchema | None = None
    cacheable: bool = False

    @property
    def parameters_schema(self) -> dict[str, Any]:
        """JSON Schema for the tool's parameters."""
        if self.schema is None:
            return {"type": "object", "properties": {}}
        return self.schema.to_json_schema()

