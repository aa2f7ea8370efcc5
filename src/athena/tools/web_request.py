"""web_request tool: make an HTTP request and return status, headers, body."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

import httpx

from athena.core.errors import (
    ToolAuthError,
    ToolError,
    ToolForbiddenError,
    ToolHostNotFoundError,
    ToolNetworkError,
    ToolRateLimitError,
)
from athena.core.retry import is_dns_failure
from athena.tools.arguments import WebRequestArgs, parse_arguments

if TYPE_CHECKING:
    from athena.config.schema import WebRequestConfig

TOOL_NAME = "web_request"

_BODY_METHODS = frozenset({"POST", "PUT", "PATCH"})


def _map_transport_error(e: httpx.TransportError) -> ToolError:
    if is_dns_failure(e):
        return ToolHostNotFoundError(TOOL_NAME, str(e) or "Host not found")
    return ToolNetworkError(TOOL_NAME, str(e) or type(e).__name__)


def _check_status(response: httpx.Response) -> None:
    """Raise for statuses that say retrying cannot help, or must back off."""
    status = response.status_code
    if status == 401:
        raise ToolAuthError(TOOL_NAME, f"Request failed with status code {status}")
    if status == 403:
        raise ToolForbiddenError(TOOL_NAME, f"Request failed with status code {status}")
    if status == 429:
        raise ToolRateLimitError(TOOL_NAME, f"Request failed with status code {status}")
    if status >= 400:
        raise ToolError(TOOL_NAME, f"Request failed with status code {status}")


def _decode_body(response: httpx.Response) -> Any:
    content_type = response.headers.get("content-type", "")
    if "json" in content_type:
        try:
            return response.json()
        except ValueError:
            pass
    return response.text


class WebRequestTool:
    """Handler for ``web_request``.

    Accepts an optional :class:`httpx.AsyncClient` so tests can inject a
    mock transport; otherwise a client is opened per call.
    """

    def __init__(
        self,
        config: WebRequestConfig,
        *,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._config = config
        self._client = client

    async def __call__(self, arguments: dict[str, Any]) -> str:
        args = parse_arguments(WebRequestArgs, TOOL_NAME, arguments)
        headers = {"User-Agent": self._config.user_agent}
        headers.update({k: str(v) for k, v in (args.headers or {}).items()})
        request_kwargs: dict[str, Any] = {"headers": headers}
        if args.data is not None and args.method.upper() in _BODY_METHODS:
            request_kwargs["json"] = args.data

        try:
            if self._client is not None:
                response = await self._client.request(
                    args.method, args.url, timeout=self._config.timeout, **request_kwargs
                )
            else:
                async with httpx.AsyncClient(timeout=self._config.timeout) as client:
                    response = await client.request(args.method, args.url, **request_kwargs)
        except httpx.TransportError as e:
            raise _map_transport_error(e) from e

        _check_status(response)
        return json.dumps(
            {
                "status": response.status_code,
                "statusText": response.reason_phrase,
                "headers": dict(response.headers),
                "data": _decode_body(response),
            },
            indent=2,
            default=str,
        )
