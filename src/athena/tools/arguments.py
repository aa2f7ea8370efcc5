"""Typed argument records for the built-in tools.

Handlers receive a raw mapping that has already passed the generic
validator, then parse it into one of these models to get attribute
access and defaults. Unknown keys are ignored.
"""

from __future__ import annotations

from typing import Any, Literal, TypeVar

from pydantic import BaseModel, ConfigDict, ValidationError

from athena.core.errors import ToolInputError


class _Args(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)


A = TypeVar("A", bound=_Args)


def parse_arguments(model: type[A], tool_name: str, arguments: dict[str, Any]) -> A:
    """Parse a raw argument map into ``model``.

    Raises:
        ToolInputError: If the arguments do not fit the model. Never retried.
    """
    try:
        return model.model_validate(arguments)
    except ValidationError as e:
        problems = "; ".join(
            f"{'.'.join(str(p) for p in err['loc']) or tool_name}: {err['msg']}"
            for err in e.errors()
        )
        msg = f"Invalid arguments for {tool_name}: {problems}"
        raise ToolInputError(tool_name, msg) from e


class AskArgs(_Args):
    prompt: str
    context: str | None = None


class SystemStatsArgs(_Args):
    detailed: bool = True


class AnalyzeCodeArgs(_Args):
    code: str
    language: str | None = None
    analysis_type: Literal["review", "explain", "optimize", "debug"] = "review"


class GenerateCodeArgs(_Args):
    requirements: str
    language: str = "javascript"
    framework: str | None = None
    style: str | None = None


class ImageGenerateArgs(_Args):
    prompt: str
    size: Literal["256x256", "512x512", "1024x1024"] = "512x512"
    n: int = 1


class WebRequestArgs(_Args):
    url: str
    method: Literal["GET", "POST", "PUT", "DELETE", "PATCH"] = "GET"
    headers: dict[str, Any] | None = None
    data: dict[str, Any] | None = None
