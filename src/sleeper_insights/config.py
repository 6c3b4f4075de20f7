"""Runtime configuration for the dashboard.

Values are read once at startup from the process environment, layered over an
optional ``.env`` file. A missing AI credential is not an error: every model
call then fails fast and the canned fallback analysis is served instead.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, ValidationError, field_validator

from .errors import ConfigurationError

DEFAULT_CACHE_DIR = Path.home() / ".cache" / "sleeper-insights"
DEFAULT_TIMEOUT_SECONDS = 30.0

AIProvider = Literal["google", "anthropic"]

# Field name -> accepted environment variables, first match wins.
ENV_VARIABLES: dict[str, tuple[str, ...]] = {
    "league_id": ("SLEEPER_LEAGUE_ID", "REACT_APP_SLEEPER_LEAGUE_ID"),
    "draft_id": ("SLEEPER_DRAFT_ID", "REACT_APP_SLEEPER_DRAFT_ID"),
    "ai_provider": ("SLEEPER_INSIGHTS_AI_PROVIDER",),
    "google_api_key": ("GOOGLE_AI_API_KEY", "REACT_APP_GOOGLE_AI_API_KEY"),
    "anthropic_api_key": ("ANTHROPIC_API_KEY",),
    "model": ("SLEEPER_INSIGHTS_MODEL",),
    "cache_dir": ("SLEEPER_INSIGHTS_CACHE_DIR",),
    "league_notes": ("SLEEPER_INSIGHTS_LEAGUE_NOTES",),
    "request_timeout": ("SLEEPER_INSIGHTS_TIMEOUT",),
}


class Settings(BaseModel):
    """Resolved configuration shared by the CLI and dashboard service."""

    league_id: str | None = None
    draft_id: str | None = None
    ai_provider: AIProvider = "google"
    google_api_key: str | None = None
    anthropic_api_key: str | None = None
    model: str | None = None
    cache_dir: Path = DEFAULT_CACHE_DIR
    league_notes: list[str] = Field(default_factory=list)
    request_timeout: float = Field(default=DEFAULT_TIMEOUT_SECONDS, gt=0)

    @field_validator("ai_provider", mode="before")
    @classmethod
    def _lowercase_provider(cls, value: object) -> object:
        if isinstance(value, str):
            return value.strip().lower()
        return value

    @field_validator("league_notes", mode="before")
    @classmethod
    def _split_notes(cls, value: object) -> object:
        if isinstance(value, str):
            return [note.strip() for note in value.split(";") if note.strip()]
        return value

    @field_validator("cache_dir", mode="before")
    @classmethod
    def _expand_cache_dir(cls, value: object) -> object:
        if isinstance(value, str):
            return Path(value).expanduser()
        return value

    @property
    def ai_api_key(self) -> str | None:
        """Credential for the configured generative provider."""
        if self.ai_provider == "anthropic":
            return self.anthropic_api_key
        return self.google_api_key


def parse_env_file(path: Path) -> dict[str, str]:
    """Read simple ``KEY=VALUE`` pairs from an ``.env`` file.

    Blank lines, comments and ``export`` prefixes are tolerated. A missing file
    yields an empty mapping.
    """

    try:
        raw_lines = path.read_text(encoding="utf-8").splitlines()
    except FileNotFoundError:
        return {}

    values: dict[str, str] = {}
    for raw_line in raw_lines:
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        if line.startswith("export "):
            line = line[len("export ") :].strip()
        if "=" not in line:
            continue
        key, value = line.split("=", 1)
        key = key.strip()
        value = value.strip()
        if not key:
            continue

        if len(value) >= 2 and value[0] in {'"', "'"} and value[-1] == value[0]:
            value = value[1:-1]
        else:
            value = value.split(" #", 1)[0].rstrip()

        values[key] = os.path.expandvars(value)
    return values


def load_settings(
    env: Mapping[str, str] | None = None,
    env_file: Path | None = None,
) -> Settings:
    """Resolve :class:`Settings` from ``env`` (default ``os.environ``).

    When reading the real environment, ``./.env`` is consulted unless another
    ``env_file`` is given. Real environment variables win over file values.
    """

    if env is None:
        env = os.environ
        if env_file is None:
            env_file = Path.cwd() / ".env"

    merged: dict[str, str] = {}
    if env_file is not None:
        merged.update(parse_env_file(env_file))
    merged.update(env)

    fields: dict[str, str] = {}
    for field_name, names in ENV_VARIABLES.items():
        for name in names:
            value = merged.get(name)
            if value is not None and value.strip():
                fields[field_name] = value.strip()
                break

    try:
        return Settings.model_validate(fields)
    except ValidationError as exc:
        raise ConfigurationError(f"Invalid configuration: {exc}") from exc


__all__ = [
    "DEFAULT_CACHE_DIR",
    "DEFAULT_TIMEOUT_SECONDS",
    "ENV_VARIABLES",
    "AIProvider",
    "Settings",
    "load_settings",
    "parse_env_file",
]
