"""Configuration loading: TOML files, env var overrides, merge logic.

Sources, lowest priority first:
    1. Pydantic model defaults
    2. ``$XDG_CONFIG_HOME/athena/config.toml`` (``~/.config/athena/config.toml``)
    3. ``./athena.toml``
    4. The file named by ``$ATHENA_CONFIG``
    5. An explicit ``path`` argument
    6. Programmatic ``overrides``

The OpenAI key is read from the variable named by ``openai.api_key_env``
when ``openai.api_key`` is not set in any file.
"""

from __future__ import annotations

import os
import tomllib
from pathlib import Path
from typing import Any

from athena.core.errors import ConfigError

from .schema import AthenaConfig

ENV_CONFIG_VAR = "ATHENA_CONFIG"


def _user_config_path() -> Path:
    xdg = os.environ.get("XDG_CONFIG_HOME", "")
    base = Path(xdg) if xdg else Path.home() / ".config"
    return base / "athena" / "config.toml"


def _config_sources(path: str | Path | None) -> list[Path]:
    """Return existing config files in merge order.

    Raises:
        ConfigError: If ``$ATHENA_CONFIG`` or ``path`` names a missing file.
    """
    sources = [
        p for p in (_user_config_path(), Path.cwd() / "athena.toml") if p.is_file()
    ]

    env_path = os.environ.get(ENV_CONFIG_VAR)
    if env_path:
        if not Path(env_path).is_file():
            msg = f"{ENV_CONFIG_VAR} points to non-existent file: {env_path}"
            raise ConfigError(msg)
        sources.append(Path(env_path))

    if path is not None:
        if not Path(path).is_file():
            msg = f"Config file not found: {path}"
            raise ConfigError(msg)
        sources.append(Path(path))

    return sources


def _read_toml(path: Path) -> dict[str, Any]:
    try:
        with path.open("rb") as f:
            return tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        msg = f"Invalid TOML in {path}: {e}"
        raise ConfigError(msg) from e
    except OSError as e:
        msg = f"Cannot read config file {path}: {e}"
        raise ConfigError(msg) from e


def merge_dicts(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Recursively merge override into a copy of base. Override wins."""
    merged = dict(base)
    for key, value in override.items():
        current = merged.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            merged[key] = merge_dicts(current, value)
        else:
            merged[key] = value
    return merged


def load_config(
    path: str | Path | None = None,
    overrides: dict[str, Any] | None = None,
) -> AthenaConfig:
    """Load and validate configuration.

    Args:
        path: Explicit config file path (highest file priority).
        overrides: Dict merged last (highest overall priority).

    Raises:
        ConfigError: On invalid TOML, missing files, or validation failure.
    """
    merged: dict[str, Any] = {}
    for source in _config_sources(path):
        merged = merge_dicts(merged, _read_toml(source))
    if overrides:
        merged = merge_dicts(merged, overrides)

    try:
        config = AthenaConfig.model_validate(merged)
    except Exception as e:
        msg = f"Configuration validation failed: {e}"
        raise ConfigError(msg) from e

    openai_cfg = config.openai
    if openai_cfg.api_key is None and openai_cfg.api_key_env:
        openai_cfg.api_key = os.environ.get(openai_cfg.api_key_env)

    return config
