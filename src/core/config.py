"""Core configuration.

- Centralizes environment variables (pydantic-settings) outside the CLI.
- Adapters (HTTP client, proxy selector) read their settings from here.
"""

from __future__ import annotations

import json
import os
import sys
from pathlib import Path
from typing import Annotated, Any

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict


def get_user_config_dir() -> Path:
    """Per-user config directory (cross-platform, no extra dependencies)."""

    if sys.platform.startswith("win"):
        base = Path(os.environ.get("APPDATA", str(Path.home())))
        return base / "airdrop-checker"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / "airdrop-checker"

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "airdrop-checker"
    return Path.home() / ".config" / "airdrop-checker"


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


def write_user_env_vars(values: dict[str, str]) -> Path:
    """Write or update variables in the per-user .env file."""

    env_path = get_user_env_file()
    env_path.parent.mkdir(parents=True, exist_ok=True)

    existing: dict[str, str] = {}
    if env_path.exists():
        try:
            existing = _parse_env_lines(env_path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError):
            existing = {}

    existing.update({k: v for k, v in values.items() if v is not None})

    lines = ["# airdrop-checker user config (.env)"]
    for key in sorted(existing.keys()):
        lines.append(f"{key}={existing[key]}")
    env_path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return env_path


class AppSettings(BaseSettings):
    """Central application settings.

    Read from `AIRDROP_CHECKER_*` environment variables, the project `.env`
    and then the per-user `.env`.
    """

    model_config = SettingsConfigDict(
        env_prefix="AIRDROP_CHECKER_",
        extra="ignore",
        case_sensitive=False,
        # Project first (dev), then the per-user config.
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
    )

    http_timeout_seconds: float = Field(
        default=20.0,
        gt=0,
        description="Timeout per eligibility request (seconds).",
    )
    user_agent: str = Field(
        default="airdrop-checker/0.1 (+https://local)",
        min_length=1,
        description="User-Agent sent to eligibility providers.",
    )

    use_proxy: bool = Field(
        default=False,
        description="Route eligibility lookups through the configured proxy list.",
    )
    proxies: Annotated[list[str], NoDecode] = Field(
        default_factory=list,
        description="Inline proxy list (JSON array or comma separated).",
    )
    proxies_path: Path | None = Field(
        default=None,
        description="Text file with one proxy per line.",
    )

    programs_path: Path | None = Field(
        default=None,
        description="JSON file describing the eligibility programs.",
    )
    max_addresses: int = Field(
        default=80,
        ge=1,
        le=10_000,
        description="Maximum number of distinct addresses per batch.",
    )

    log_level: str = Field(
        default="WARNING",
        description="Root log level for the CLI (DEBUG, INFO, WARNING, ...).",
    )

    @field_validator("proxies", mode="before")
    @classmethod
    def _split_proxies(cls, value: Any) -> Any:
        if not isinstance(value, str):
            return value
        text = value.strip()
        if not text:
            return []
        if text.startswith("["):
            return json.loads(text)
        return [part.strip() for part in text.split(",") if part.strip()]

    @field_validator("log_level")
    @classmethod
    def _upper_level(cls, value: str) -> str:
        return value.strip().upper()
