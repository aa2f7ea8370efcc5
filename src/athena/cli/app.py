"""Main CLI application.

Click commands for the athena MCP server: serve, tools, call, check-key.
"""

from __future__ import annotations

import asyncio
import json
import logging
import re
import sys
from typing import TYPE_CHECKING, Any

import click
from rich.console import Console
from rich.table import Table

from athena import __version__
from athena.config.loader import load_config
from athena.core.errors import AthenaError, ConfigError, ToolInvocationError

if TYPE_CHECKING:
    from athena.config.schema import AthenaConfig, LoggingConfig
    from athena.core.pipeline import ToolPipeline

_LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

# Standard, project, and legacy OpenAI key shapes.
_KEY_PATTERNS = (
    re.compile(r"^sk-[A-Za-z0-9]{48}$"),
    re.compile(r"^sk-proj-[A-Za-z0-9_-]{64,}$"),
    re.compile(r"^sk-[A-Za-z0-9_-]{20}T3BlbkFJ[A-Za-z0-9_-]{20,}$"),
)


# ── Helpers ──────────────────────────────────────────────────────


def _error(msg: str) -> None:
    """Print an error message to stderr and exit."""
    click.echo(f"Error: {msg}", err=True)
    sys.exit(1)


def _load_config(config_path: str | None) -> AthenaConfig:
    """Load config with user-friendly error handling."""
    try:
        return load_config(path=config_path)
    except ConfigError as e:
        _error(str(e))
        raise  # unreachable, keeps mypy happy


def configure_logging(config: LoggingConfig) -> None:
    """Send log records to a file or stderr; stdout belongs to MCP."""
    handler: logging.Handler
    if config.file:
        handler = logging.FileHandler(config.file)
    else:
        handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(_LOG_FORMAT))

    root = logging.getLogger("athena")
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(config.level)


def _build_pipeline(config: AthenaConfig) -> ToolPipeline:
    from athena.mcp.server import build_pipeline

    return build_pipeline(config)


def is_valid_key_format(key: str) -> bool:
    """Check an OpenAI API key against the known key formats."""
    return any(p.match(key) for p in _KEY_PATTERNS)


# ── CLI group ────────────────────────────────────────────────────


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="athena")
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True),
    default=None,
    help="Path to config file.",
)
@click.pass_context
def cli(ctx: click.Context, config_path: str | None) -> None:
    """athena - MCP tool server.

    Validated, cached, retried tool calls for AI agents.
    """
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config_path
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


# ── serve ────────────────────────────────────────────────────────


@cli.command()
@click.pass_context
def serve(ctx: click.Context) -> None:
    """Start the MCP server on stdio."""
    from athena.mcp.server import run_server

    config = _load_config(ctx.obj["config_path"])
    configure_logging(config.logging)
    asyncio.run(run_server(config))


# ── tools ────────────────────────────────────────────────────────


@cli.command()
@click.pass_context
def tools(ctx: click.Context) -> None:
    """List registered tools."""
    config = _load_config(ctx.obj["config_path"])
    pipeline = _build_pipeline(config)

    table = Table(title="athena tools")
    table.add_column("Name", style="bold")
    table.add_column("Cached")
    table.add_column("Required")
    table.add_column("Description")
    for d in pipeline.registry.list_descriptors():
        required = ", ".join(d.schema.required_fields) if d.schema else ""
        table.add_row(d.name, "yes" if d.cacheable else "no", required, d.description)

    Console().print(table)


# ── call ─────────────────────────────────────────────────────────


@cli.command()
@click.argument("name")
@click.option(
    "--args",
    "args_json",
    default="{}",
    help="Tool arguments as a JSON object.",
)
@click.pass_context
def call(ctx: click.Context, name: str, args_json: str) -> None:
    """Invoke one tool through the validation/cache/retry pipeline."""
    try:
        arguments: Any = json.loads(args_json)
    except json.JSONDecodeError as e:
        _error(f"--args is not valid JSON: {e}")
        return
    if not isinstance(arguments, dict):
        _error("--args must be a JSON object")
        return

    config = _load_config(ctx.obj["config_path"])
    configure_logging(config.logging)
    pipeline = _build_pipeline(config)
    try:
        result = asyncio.run(pipeline.invoke(name, arguments))
    except ToolInvocationError as e:
        _error(f"[{e.kind.name}] {e.message}")
        return
    click.echo(result.render())


# ── check-key ────────────────────────────────────────────────────


@cli.command("check-key")
@click.option("--live", is_flag=True, help="Also make a one-token API call.")
@click.pass_context
def check_key(ctx: click.Context, live: bool) -> None:
    """Validate the configured OpenAI API key."""
    config = _load_config(ctx.obj["config_path"])
    key = config.openai.api_key
    if not key:
        env = config.openai.api_key_env or "openai.api_key"
        _error(f"No OpenAI API key found (set {env})")
        return
    if not is_valid_key_format(key):
        _error(
            "Invalid API key format. Expected sk-[48 chars], "
            "sk-proj-[64+ chars], or the legacy T3BlbkFJ form."
        )
        return
    click.echo("API key format is valid.")

    if live:
        try:
            asyncio.run(_check_key_live(config))
        except AthenaError as e:
            _error(str(e))
            return
        click.echo("API key works.")


async def _check_key_live(config: AthenaConfig) -> None:
    """Send a tiny chat completion to confirm the key is accepted."""
    import openai

    from athena.tools.openai_tools import map_openai_error

    kwargs: dict[str, Any] = {"api_key": config.openai.api_key}
    if config.openai.base_url:
        kwargs["base_url"] = config.openai.base_url
    client = openai.AsyncOpenAI(**kwargs)
    try:
        await client.chat.completions.create(
            model=config.openai.chat_model,
            messages=[{"role": "user", "content": "Hello"}],
            max_tokens=5,
        )
    except openai.APIError as e:
        raise map_openai_error("check-key", e) from e
    finally:
        await client.close()
