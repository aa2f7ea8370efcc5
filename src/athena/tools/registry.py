"""Tool registry: maps tool names to descriptors.

Provides registration, lookup, and listing of
:class:`~athena.tools.base.ToolDescriptor` objects.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from athena.tools.base import ToolDescriptor

if TYPE_CHECKING:
    from athena.core.validation import ToolSchema
    from athena.tools.base import ToolHandler

logger = logging.getLogger(__name__)


class ToolRegistry:
    """Registry for managing available tools.

    Supports registration, lookup by name, and listing descriptors in
    registration order (for the MCP tool listing and the CLI).
    """

    def __init__(self) -> None:
        self._tools: dict[str, ToolDescriptor] = {}

    def register(self, descriptor: ToolDescriptor) -> None:
        """Register a tool.

        Raises:
            ValueError: If a tool with the same name is already registered.
        """
        if descriptor.name in self._tools:
            msg = f"Tool already registered: {descriptor.name}"
            raise ValueError(msg)
        self._tools[descriptor.name] = descriptor
        logger.debug("Registered tool: %s", descriptor.name)

    def add(
        self,
        name: str,
        handler: ToolHandler,
        *,
        description: str = "",
        schema: ToolSchema | None = None,
        cacheable: bool = False,
    ) -> ToolDescriptor:
        """Build a descriptor from parts and register it."""
        descriptor = ToolDescriptor(
            name=name,
            description=description,
            handler=handler,
            schema=schema,
            cacheable=cacheable,
        )
        self.register(descriptor)
        return descriptor

    def get(self, name: str) -> ToolDescriptor:
        """Get a tool by name.

        Raises:
            KeyError: If the tool is not found.
        """
        if name not in self._tools:
            msg = f"Tool not found: {name}"
            raise KeyError(msg)
        return self._tools[name]

    def list_descriptors(self) -> list[ToolDescriptor]:
        return list(self._tools.values())

    def list_names(self) -> list[str]:
        """Return names of all registered tools."""
        return list(self._tools.keys())

    def __len__(self) -> int:
        return len(self._tools)

    def __contains__(self, name: str) -> bool:
        return name in self._tools
