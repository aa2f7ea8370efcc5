"""Tool descriptors, registry, and the built-in tool catalog."""
