"""Tests for the core error hierarchy."""

from mcp.types import INTERNAL_ERROR, INVALID_PARAMS, METHOD_NOT_FOUND

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
    ToolInvocationError,
    ToolNetworkError,
    ToolRateLimitError,
)


class TestHierarchy:
    """All errors inherit from AthenaError."""

    def test_invocation_errors(self):
        errors = [
            InvalidParamsError("t", "bad"),
            MethodNotFoundError("t"),
            ToolExecutionError("t", "boom"),
        ]
        for err in errors:
            assert isinstance(err, ToolInvocationError)
            assert isinstance(err, AthenaError)

    def test_handler_errors(self):
        errors = [
            ToolNetworkError("t", "reset"),
            ToolHostNotFoundError("t", "nxdomain"),
            ToolAuthError("t", "401"),
            ToolForbiddenError("t", "403"),
            ToolRateLimitError("t", "429"),
        ]
        for err in errors:
            assert isinstance(err, ToolError)
            assert isinstance(err, AthenaError)

    def test_config_error_is_athena_error(self):
        assert isinstance(ConfigError("bad config"), AthenaError)

    def test_handler_errors_are_not_invocation_errors(self):
        assert not isinstance(ToolAuthError("t", "x"), ToolInvocationError)


class TestErrorKind:
    def test_codes_match_jsonrpc(self):
        assert ErrorKind.INVALID_PARAMS.code == INVALID_PARAMS
        assert ErrorKind.METHOD_NOT_FOUND.code == METHOD_NOT_FOUND
        assert ErrorKind.INTERNAL_ERROR.code == INTERNAL_ERROR

    def test_kind_per_class(self):
        assert InvalidParamsError("t", "m").kind is ErrorKind.INVALID_PARAMS
        assert MethodNotFoundError("t").kind is ErrorKind.METHOD_NOT_FOUND
        assert ToolExecutionError("t", "m").kind is ErrorKind.INTERNAL_ERROR


class TestInvocationErrors:
    def test_method_not_found_message(self):
        err = MethodNotFoundError("nope")
        assert err.tool_name == "nope"
        assert str(err) == "Unknown tool: nope"

    def test_invalid_params_keeps_message(self):
        err = InvalidParamsError("ask", "Missing required field: prompt")
        assert err.message == "Missing required field: prompt"
        assert err.tool_name == "ask"

    def test_execution_error_attempts(self):
        err = ToolExecutionError("ask", "timeout", attempts=3)
        assert err.attempts == 3
        assert str(err) == "timeout"

    def test_to_error_data(self):
        data = InvalidParamsError("t", "Field n must be a number").to_error_data()
        assert data.code == INVALID_PARAMS
        assert data.message == "Field n must be a number"


class TestToolError:
    def test_default_category(self):
        assert ToolError("t", "x").category is ErrorCategory.OTHER

    def test_subclass_categories(self):
        assert ToolNetworkError("t", "x").category is ErrorCategory.NETWORK
        assert ToolHostNotFoundError("t", "x").category is ErrorCategory.HOST_NOT_FOUND
        assert ToolAuthError("t", "x").category is ErrorCategory.UNAUTHORIZED
        assert ToolForbiddenError("t", "x").category is ErrorCategory.FORBIDDEN
        assert ToolRateLimitError("t", "x").category is ErrorCategory.RATE_LIMITED

    def test_category_override(self):
        err = ToolError("t", "x", category=ErrorCategory.FORBIDDEN)
        assert err.category is ErrorCategory.FORBIDDEN
        # Class default is untouched
        assert ToolError("t", "y").category is ErrorCategory.OTHER

    def test_tool_name_attribute(self):
        err = ToolAuthError("ask_athena", "bad key")
        assert err.tool_name == "ask_athena"
        assert str(err) == "bad key"
