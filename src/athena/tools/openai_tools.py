"""OpenAI-backed tools: ask_athena, analyze_code, generate_code, image_generate."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import openai

from athena.core.errors import (
    ToolAuthError,
    ToolError,
    ToolForbiddenError,
    ToolNetworkError,
    ToolRateLimitError,
)
from athena.tools.arguments import (
    AnalyzeCodeArgs,
    AskArgs,
    GenerateCodeArgs,
    ImageGenerateArgs,
    parse_arguments,
)

if TYPE_CHECKING:
    from athena.config.schema import OpenAIConfig

ATHENA_PERSONA = (
    "You are Athena, a hyper-sentient AI assistant designed for curiosity, "
    "clarity, and utility. Speak with calm intelligence and always provide "
    "actionable insights."
)

_CODE_GEN_PERSONA = (
    "You are an expert software developer. Generate clean, efficient, "
    "well-documented code with proper error handling and best practices."
)


def map_openai_error(tool_name: str, e: openai.APIError) -> ToolError:
    """Map OpenAI SDK errors to athena handler errors."""
    if isinstance(e, openai.AuthenticationError):
        return ToolAuthError(tool_name, str(e))
    if isinstance(e, openai.PermissionDeniedError):
        return ToolForbiddenError(tool_name, str(e))
    if isinstance(e, openai.RateLimitError):
        return ToolRateLimitError(tool_name, str(e))
    if isinstance(e, openai.APIConnectionError):
        return ToolNetworkError(tool_name, str(e))
    return ToolError(tool_name, str(e))


class OpenAITools:
    """Handlers for the tools that call the OpenAI API.

    The client is created lazily from config so a server without an API
    key still starts; calls to these tools then fail with
    :class:`ToolAuthError`, which is never retried.
    """

    def __init__(
        self,
        config: OpenAIConfig,
        *,
        client: openai.AsyncOpenAI | None = None,
    ) -> None:
        self._config = config
        self._client = client

    def _get_client(self, tool_name: str) -> openai.AsyncOpenAI:
        if self._client is None:
            if not self._config.api_key:
                msg = "OpenAI client not initialized. Please check your API key."
                raise ToolAuthError(tool_name, msg)
            kwargs: dict[str, Any] = {"api_key": self._config.api_key}
            if self._config.base_url:
                kwargs["base_url"] = self._config.base_url
            self._client = openai.AsyncOpenAI(**kwargs)
        return self._client

    async def _chat(
        self,
        tool_name: str,
        system: str,
        user: str,
        *,
        max_tokens: int,
        temperature: float,
    ) -> str:
        client = self._get_client(tool_name)
        try:
            response = await client.chat.completions.create(
                model=self._config.chat_model,
                messages=[
                    {"role": "system", "content": system},
                    {"role": "user", "content": user},
                ],
                max_tokens=max_tokens,
                temperature=temperature,
            )
        except openai.APIError as e:
            raise map_openai_error(tool_name, e) from e
        if not response.choices:
            return ""
        return response.choices[0].message.content or ""

    async def ask_athena(self, arguments: dict[str, Any]) -> str:
        args = parse_arguments(AskArgs, "ask_athena", arguments)
        if args.context:
            user = f"Context: {args.context}\n\nQuestion: {args.prompt}"
        else:
            user = args.prompt
        return await self._chat(
            "ask_athena", ATHENA_PERSONA, user, max_tokens=1000, temperature=0.7
        )

    async def analyze_code(self, arguments: dict[str, Any]) -> str:
        args = parse_arguments(AnalyzeCodeArgs, "analyze_code", arguments)
        system = (
            f"You are a senior software engineer providing {args.analysis_type} "
            "feedback. Be specific, constructive, and focus on best practices."
        )
        user = (
            f"Please {args.analysis_type} the following {args.language or 'code'}:"
            f"\n\n{args.code}\n\nProvide specific, actionable feedback."
        )
        return await self._chat(
            "analyze_code", system, user, max_tokens=1500, temperature=0.3
        )

    async def generate_code(self, arguments: dict[str, Any]) -> str:
        args = parse_arguments(GenerateCodeArgs, "generate_code", arguments)
        parts = [
            f"Generate {args.language} code that meets these requirements:\n"
            f"{args.requirements}"
        ]
        if args.framework:
            parts.append(f"Use the {args.framework} framework.")
        if args.style:
            parts.append(f"Code style: {args.style}")
        user = "\n".join(parts)
        user += (
            "\n\nProvide clean, well-commented, production-ready code "
            "with error handling."
        )
        return await self._chat(
            "generate_code", _CODE_GEN_PERSONA, user, max_tokens=2000, temperature=0.2
        )

    async def image_generate(self, arguments: dict[str, Any]) -> str:
        args = parse_arguments(ImageGenerateArgs, "image_generate", arguments)
        client = self._get_client("image_generate")
        try:
            response = await client.images.generate(
                model=self._config.image_model,
                prompt=args.prompt,
                size=args.size,
                n=args.n,
                quality="standard",
            )
        except openai.APIError as e:
            raise map_openai_error("image_generate", e) from e
        urls = [img.url for img in (response.data or []) if img.url]
        return f"Generated {args.n} image(s):\n" + "\n".join(urls)
