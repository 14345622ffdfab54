from __future__ import annotations

import tomllib
from pathlib import Path

ENV_BOT_TOKEN = "BOTCTX_BOT_TOKEN"

LOCAL_CONFIG_NAME = Path(".botctx") / "botctx.toml"
HOME_CONFIG_PATH = Path.home() / ".botctx" / "botctx.toml"


class ConfigError(RuntimeError):
    pass


def read_config(cfg_path: Path) -> dict:
    try:
        with cfg_path.open("rb") as fh:
            return tomllib.load(fh)
    except FileNotFoundError:
        raise ConfigError(f"Missing config file {cfg_path}.") from None
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Malformed TOML in {cfg_path}: {e}") from None
    except OSError as e:
        raise ConfigError(f"Failed to read config file {cfg_path}: {e}") from e


def load_config(path: str | Path | None = None) -> tuple[dict, Path | None]:
    """Read the explicit config file, or the first existing default one.

    The working directory's ``.botctx/botctx.toml`` is tried before the one
    in the home directory. Returns an empty table when neither exists so
    that the environment alone can configure the bot.
    """
    if path:
        cfg_path = Path(path).expanduser()
        return read_config(cfg_path), cfg_path

    local = Path.cwd() / LOCAL_CONFIG_NAME
    for candidate in dict.fromkeys((local, HOME_CONFIG_PATH)):
        if candidate.is_file():
            return read_config(candidate), candidate
    return {}, None
