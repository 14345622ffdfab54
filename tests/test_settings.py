from pathlib import Path

import pytest
from pydantic import ValidationError

from botctx import config as config_module
from botctx.config import ENV_BOT_TOKEN, ConfigError, load_config
from botctx.settings import DEFAULT_API_ROOT, BotSettings, load_settings


@pytest.fixture(autouse=True)
def _isolated(monkeypatch, tmp_path: Path) -> None:
    monkeypatch.delenv(ENV_BOT_TOKEN, raising=False)
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr(
        config_module, "HOME_CONFIG_PATH", tmp_path / "home" / "botctx.toml"
    )


def _write(path: Path, text: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


def test_load_settings_from_explicit_path(tmp_path: Path) -> None:
    cfg = _write(
        tmp_path / "bot.toml",
        'bot_token = " 1:abc "\napi_root = "http://localhost:8081/"\ntimeout_s = 5\n',
    )

    settings, path = load_settings(cfg)

    assert path == cfg
    assert settings.bot_token == "1:abc"
    assert settings.api_root == "http://localhost:8081"
    assert settings.timeout_s == 5.0


def test_local_config_is_found(tmp_path: Path) -> None:
    cfg = _write(tmp_path / ".botctx" / "botctx.toml", 'bot_token = "1:local"\n')

    settings, path = load_settings()

    assert path == cfg
    assert settings.bot_token == "1:local"
    assert settings.api_root == DEFAULT_API_ROOT


def test_home_config_is_fallback(tmp_path: Path) -> None:
    cfg = _write(tmp_path / "home" / "botctx.toml", 'bot_token = "1:home"\n')

    settings, path = load_settings()

    assert path == cfg
    assert settings.bot_token == "1:home"


def test_env_token_overrides_file(monkeypatch, tmp_path: Path) -> None:
    cfg = _write(tmp_path / "bot.toml", 'bot_token = "1:file"\n')
    monkeypatch.setenv(ENV_BOT_TOKEN, "1:env")

    settings, _ = load_settings(cfg)

    assert settings.bot_token == "1:env"


def test_env_only_without_config_file(monkeypatch) -> None:
    monkeypatch.setenv(ENV_BOT_TOKEN, "1:env")

    settings, path = load_settings()

    assert path is None
    assert settings.bot_token == "1:env"


def test_missing_token_raises() -> None:
    with pytest.raises(ConfigError, match="Missing bot token"):
        load_settings()


def test_blank_token_raises(tmp_path: Path) -> None:
    cfg = _write(tmp_path / "bot.toml", 'bot_token = "   "\n')

    with pytest.raises(ConfigError, match="Invalid config"):
        load_settings(cfg)


def test_invalid_timeout_raises(tmp_path: Path) -> None:
    cfg = _write(tmp_path / "bot.toml", 'bot_token = "1:x"\ntimeout_s = 0\n')

    with pytest.raises(ConfigError, match="timeout_s"):
        load_settings(cfg)


def test_malformed_toml_raises(tmp_path: Path) -> None:
    cfg = _write(tmp_path / "bot.toml", "bot_token = \n")

    with pytest.raises(ConfigError, match="Malformed TOML"):
        load_config(cfg)


def test_missing_explicit_file_raises(tmp_path: Path) -> None:
    with pytest.raises(ConfigError, match="Missing config file"):
        load_config(tmp_path / "nope.toml")


def test_settings_are_frozen() -> None:
    settings = BotSettings(bot_token="1:x")

    with pytest.raises(ValidationError):
        settings.bot_token = "2:y"  # type: ignore[misc]
