"""Core types, errors, and the tool-invocation pipeline."""

from athena.core.cache import CacheEntry, ResponseCache, make_key
from athena.core.errors import (
    AthenaError,
    ConfigError,
    ErrorCategory,
    ErrorKind,
    InvalidParamsError,
    MethodNotFoundError,
    ToolAuthError,
    ToolError,
    ToolExecutionError,
    ToolForbiddenError,
    ToolHostNotFoundError,
    ToolInputError,
    ToolInvocationError,
    ToolNetworkError,
    ToolRateLimitError,
)
from athena.core.pipeline import InvocationResult, ToolPipeline
from athena.core.retry import (
    RetryConfig,
    classify_error,
    is_retryable,
    retry_with_backoff,
)
from athena.core.validation import FieldRule, ToolSchema, validate_arguments

__all__ = [
    "AthenaError",
    "CacheEntry",
    "ConfigError",
    "ErrorCategory",
    "ErrorKind",
    "FieldRule",
    "InvalidParamsError",
    "InvocationResult",
    "MethodNotFoundError",
    "ResponseCache",
    "RetryConfig",
    "ToolAuthError",
    "ToolError",
    "ToolExecutionError",
    "ToolForbiddenError",
    "ToolHostNotFoundError",
    "ToolInvocationError",
    "ToolNetworkError",
    "ToolPipeline",
    "ToolInputError",
    "ToolRateLimitError",
    "ToolSchema",
    "classify_error",
    "is_retryable",
    "make_key",
    "retry_with_backoff",
    "validate_arguments",
]
