"""Core configuration.

- Centralizes environment variables (pydantic-settings) away from the CLI.
- Adapters (Monday.com, HTTP) and the conversation layer read the same
  settings object.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


def get_user_config_dir() -> Path:
    """Per-user configuration directory (cross-platform, no dependencies)."""

    if sys.platform.startswith("win"):
        base = Path(os.environ.get("APPDATA", str(Path.home())))
        return base / "pricebot"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / "pricebot"

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "pricebot"
    return Path.home() / ".config" / "pricebot"


def get_user_env_file() -> Path:
    return get_user_config_dir() / ".env"


def _parse_env_lines(text: str) -> dict[str, str]:
    data: dict[str, str] = {}
    for raw_line in text.splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        if "=" not in line:
            continue
        key, value = line.split("=", 1)
        key = key.strip()
        value = value.strip().strip('"').strip("'")
        if key:
            data[key] = value
    return data


def write_user_env_vars(values: dict[str, str], *, env_path: Path | None = None) -> Path:
    """Write or update variables in the user's global .env."""

    env_path = env_path or get_user_env_file()
    env_path.parent.mkdir(parents=True, exist_ok=True)

    existing: dict[str, str] = {}
    if env_path.exists():
        existing = _parse_env_lines(env_path.read_text(encoding="utf-8"))

    existing.update({k: v for k, v in values.items() if v is not None})

    lines = ["# pricebot user config (.env)"]
    for key in sorted(existing.keys()):
        lines.append(f"{key}={existing[key]}")
    env_path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return env_path


class AppSettings(BaseSettings):
    """Application settings.

    Every field can be set through a `PRICEBOT_*` environment variable, the
    project `.env` or the user `.env` written by `pricebot doctor setup`.
    """

    model_config = SettingsConfigDict(
        env_prefix="PRICEBOT_",
        extra="ignore",
        case_sensitive=False,
        # Project first (dev), then the user's global config.
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
    )

    monday_api_token: str | None = Field(
        default=None,
        description="Monday.com API token (sent as the Authorization header).",
    )
    monday_api_url: str = Field(
        default="https://api.monday.com/v2",
        min_length=8,
        description="Monday.com GraphQL endpoint.",
    )
    monday_api_version: str = Field(
        default="2023-10",
        min_length=1,
        description="Value of the API-version header.",
    )
    monday_cost_column_id: str = Field(
        default="_",
        min_length=1,
        description="Board column id holding the publisher cost.",
    )

    http_timeout_seconds: float = Field(
        default=20.0,
        gt=0,
        description="Timeout per request (seconds).",
    )
    user_agent: str = Field(
        default="pricebot/0.1",
        min_length=1,
        description="User-Agent for outgoing requests.",
    )

    search_max_concurrency: int = Field(
        default=8,
        ge=1,
        le=100,
        description="Maximum partition lookups in flight during one search.",
    )
    partition_table_path: Path | None = Field(
        default=None,
        description="Optional JSON file replacing the built-in partition table.",
    )

    price_command: str = Field(
        default="/price",
        min_length=1,
        description="Prefix that starts a quote (followed by the domain).",
    )
    cancel_command: str = Field(
        default="/cancel",
        min_length=1,
        description="Command that discards the sender's active quote.",
    )

    log_level: str = Field(
        default="INFO",
        description="Log level for the `pricebot` logger.",
    )
