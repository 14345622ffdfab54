from __future__ import annotations

import os
from pathlib import Path

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from .config import ENV_BOT_TOKEN, ConfigError, load_config

DEFAULT_API_ROOT = "https://api.telegram.org"


class BotSettings(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)

    bot_token: str
    api_root: str = DEFAULT_API_ROOT
    timeout_s: float = 30.0

    @field_validator("bot_token")
    @classmethod
    def _non_empty_token(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("expected a non-empty string")
        return value

    @field_validator("api_root")
    @classmethod
    def _strip_slash(cls, value: str) -> str:
        return value.rstrip("/")

    @field_validator("timeout_s")
    @classmethod
    def _positive_timeout(cls, value: float) -> float:
        if value <= 0:
            raise ValueError("expected a positive number of seconds")
        return value


def load_settings(path: str | Path | None = None) -> tuple[BotSettings, Path | None]:
    """Load settings from TOML.

    Environment variable BOTCTX_BOT_TOKEN takes precedence over the file.
    """
    config, cfg_path = load_config(path)
    data = dict(config)
    env_token = os.environ.get(ENV_BOT_TOKEN)
    if env_token and env_token.strip():
        data["bot_token"] = env_token.strip()
    source = str(cfg_path) if cfg_path is not None else "environment"
    if "bot_token" not in data:
        raise ConfigError(
            f"Missing bot token. Set {ENV_BOT_TOKEN} environment variable "
            f"or add `bot_token` to {source}."
        )
    try:
        settings = BotSettings.model_validate(data)
    except ValidationError as exc:
        raise ConfigError(f"Invalid config in {source}: {exc}") from exc
    return settings, cfg_path
