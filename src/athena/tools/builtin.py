"""Built-in tool catalog.

Declares each tool's validation schema and cacheable flag in one place
and wires the handlers into a :class:`~athena.tools.registry.ToolRegistry`.
Only side-effect-free reads are cacheable.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from athena.core.validation import FieldRule, ToolSchema
from athena.tools.openai_tools import OpenAITools
from athena.tools.registry import ToolRegistry
from athena.tools.system_stats import get_system_stats
from athena.tools.web_request import WebRequestTool

if TYPE_CHECKING:
    import httpx
    import openai

    from athena.config.schema import AthenaConfig

ASK_ATHENA_SCHEMA = ToolSchema(
    {
        "prompt": FieldRule(
            type="string",
            required=True,
            min_length=1,
            max_length=2000,
            description="The question or prompt to ask Athena (1-2000 characters)",
        ),
        "context": FieldRule(
            type="string",
            description="Optional context to provide with the question",
        ),
    }
)

SYSTEM_STATS_SCHEMA = ToolSchema(
    {
        "detailed": FieldRule(
            type="boolean",
            description="Whether to include process memory and runtime details",
            default=True,
        ),
    }
)

ANALYZE_CODE_SCHEMA = ToolSchema(
    {
        "code": FieldRule(
            type="string",
            required=True,
            min_length=1,
            description="The code to analyze (required, non-empty)",
        ),
        "language": FieldRule(type="string", description="Programming language of the code"),
        "analysis_type": FieldRule(
            type="string",
            enum=("review", "explain", "optimize", "debug"),
            description="Type of analysis: review, explain, optimize, debug",
            default="review",
        ),
    }
)

GENERATE_CODE_SCHEMA = ToolSchema(
    {
        "requirements": FieldRule(
            type="string",
            required=True,
            min_length=1,
            description="Description of what the code should do",
        ),
        "language": FieldRule(
            type="string", description="Target programming language", default="javascript"
        ),
        "framework": FieldRule(type="string", description="Framework or library to use"),
        "style": FieldRule(type="string", description="Code style preferences"),
    }
)

IMAGE_GENERATE_SCHEMA = ToolSchema(
    {
        "prompt": FieldRule(
            type="string",
            required=True,
            min_length=1,
            max_length=1000,
            description="Description of the image to generate (1-1000 characters)",
        ),
        "size": FieldRule(
            type="string",
            enum=("256x256", "512x512", "1024x1024"),
            description="Image size",
            default="512x512",
        ),
        "n": FieldRule(
            type="integer",
            min=1,
            max=4,
            description="Number of images to generate (1-4)",
            default=1,
        ),
    }
)

WEB_REQUEST_SCHEMA = ToolSchema(
    {
        "url": FieldRule(type="string", required=True, description="URL to make the request to"),
        "method": FieldRule(
            type="string",
            enum=("GET", "POST", "PUT", "DELETE", "PATCH"),
            description="HTTP method",
            default="GET",
        ),
        "headers": FieldRule(type="object", description="HTTP headers"),
        "data": FieldRule(type="object", description="Request body data"),
    }
)


def build_registry(
    config: AthenaConfig,
    *,
    openai_client: openai.AsyncOpenAI | None = None,
    http_client: httpx.AsyncClient | None = None,
) -> ToolRegistry:
    """Create a registry holding every built-in tool."""
    oa = OpenAITools(config.openai, client=openai_client)
    web = WebRequestTool(config.web_request, client=http_client)

    registry = ToolRegistry()
    registry.add(
        "ask_athena",
        oa.ask_athena,
        description="Ask Athena AI assistant a question with intelligent caching and retry logic",
        schema=ASK_ATHENA_SCHEMA,
        cacheable=True,
    )
    registry.add(
        "get_system_stats",
        get_system_stats,
        description="Get detailed system CPU, memory, and performance statistics with caching",
        schema=SYSTEM_STATS_SCHEMA,
        cacheable=True,
    )
    registry.add(
        "analyze_code",
        oa.analyze_code,
        description="Analyze code snippets with validation and intelligent insights",
        schema=ANALYZE_CODE_SCHEMA,
    )
    registry.add(
        "generate_code",
        oa.generate_code,
        description="Generate code based on requirements with enhanced validation",
        schema=GENERATE_CODE_SCHEMA,
    )
    registry.add(
        "image_generate",
        oa.image_generate,
        description="Generate images using DALL-E with validation",
        schema=IMAGE_GENERATE_SCHEMA,
    )
    registry.add(
        "web_request",
        web,
        description="Make HTTP requests with retry logic and validation",
        schema=WEB_REQUEST_SCHEMA,
    )
    return registry
