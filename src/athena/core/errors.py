"""Exception hierarchy for athena.

Every module imports from here. The hierarchy is:

    AthenaError
    ├── ToolInvocationError(kind)       caller-visible pipeline outcome
    │   ├── InvalidParamsError
    │   ├── MethodNotFoundError
    │   └── ToolExecutionError
    ├── ToolError(tool_name, category)  raised by tool handlers
    │   ├── ToolNetworkError
    │   ├── ToolHostNotFoundError
    │   ├── ToolAuthError
    │   ├── ToolForbiddenError
    │   ├── ToolRateLimitError
    │   └── ToolInputError
    └── ConfigError
"""

from __future__ import annotations

import enum

from mcp.types import INTERNAL_ERROR, INVALID_PARAMS, METHOD_NOT_FOUND, ErrorData


class AthenaError(Exception):
    """Base exception for all athena errors."""


# ─── Error Categories ─────────────────────────────────────────


class ErrorCategory(enum.Enum):
    """Closed set of failure categories a handler error normalizes into."""

    NETWORK = "network"
    HOST_NOT_FOUND = "host_not_found"
    UNAUTHORIZED = "unauthorized"
    FORBIDDEN = "forbidden"
    RATE_LIMITED = "rate_limited"
    INVALID_INPUT = "invalid_input"
    OTHER = "other"


# ─── Pipeline Errors ──────────────────────────────────────────


class ErrorKind(enum.Enum):
    """Kinds of error the pipeline reports to its caller."""

    INVALID_PARAMS = INVALID_PARAMS
    METHOD_NOT_FOUND = METHOD_NOT_FOUND
    INTERNAL_ERROR = INTERNAL_ERROR

    @property
    def code(self) -> int:
        """JSON-RPC error code for this kind."""
        return int(self.value)


class ToolInvocationError(AthenaError):
    """Base for errors surfaced by the tool-invocation pipeline."""

    kind: ErrorKind = ErrorKind.INTERNAL_ERROR

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)

    def to_error_data(self) -> ErrorData:
        """Render as a JSON-RPC error payload."""
        return ErrorData(code=self.kind.code, message=self.message)


class InvalidParamsError(ToolInvocationError):
    """Tool arguments failed schema validation."""

    kind = ErrorKind.INVALID_PARAMS

    def __init__(self, tool_name: str, message: str) -> None:
        self.tool_name = tool_name
        super().__init__(message)


class MethodNotFoundError(ToolInvocationError):
    """No handler is registered under the requested tool name."""

    kind = ErrorKind.METHOD_NOT_FOUND

    def __init__(self, tool_name: str) -> None:
        self.tool_name = tool_name
        super().__init__(f"Unknown tool: {tool_name}")


class ToolExecutionError(ToolInvocationError):
    """The handler failed after retries, or failed with a terminal error."""

    kind = ErrorKind.INTERNAL_ERROR

    def __init__(self, tool_name: str, message: str, attempts: int = 1) -> None:
        self.tool_name = tool_name
        self.attempts = attempts
        super().__init__(message)


# ─── Handler Errors ───────────────────────────────────────────


class ToolError(AthenaError):
    """Base for failures raised by a tool handler."""

    category: ErrorCategory = ErrorCategory.OTHER

    def __init__(
        self,
        tool_name: str,
        message: str,
        *,
        category: ErrorCategory | None = None,
    ) -> None:
        self.tool_name = tool_name
        if category is not None:
            self.category = category
        super().__init__(message)


class ToolNetworkError(ToolError):
    """Transient network failure (connection reset, timeout)."""

    category = ErrorCategory.NETWORK


class ToolHostNotFoundError(ToolError):
    """DNS resolution failed for the target host."""

    category = ErrorCategory.HOST_NOT_FOUND


class ToolAuthError(ToolError):
    """Missing or rejected credentials (401)."""

    category = ErrorCategory.UNAUTHORIZED


class ToolForbiddenError(ToolError):
    """Credentials accepted but access denied (403)."""

    category = ErrorCategory.FORBIDDEN


class ToolRateLimitError(ToolError):
    """Upstream rate limit exceeded (429)."""

    category = ErrorCategory.RATE_LIMITED


class ToolInputError(ToolError):
    """Arguments passed the schema but the handler cannot use them."""

    category = ErrorCategory.INVALID_INPUT


# ─── Configuration Errors ─────────────────────────────────────


class ConfigError(AthenaError):
    """Invalid configuration."""
