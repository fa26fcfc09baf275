import logging
import os
from logging.handlers import RotatingFileHandler

from raydium_bot_bundle.common.constants import config_path, env_path
from raydium_bot_bundle.trading_bot.utils_exec import load_config, setup_logging
from raydium_bot_bundle.utils import load_env_first_found, redact


def test_dotenv_path_wins(tmp_path, monkeypatch):
    f = tmp_path / "custom.env"
    f.write_text("RAYDIUM_TEST_VALUE=from-dotenv-path\n", encoding="utf-8")
    monkeypatch.setenv("DOTENV_PATH", str(f))
    monkeypatch.delenv("RAYDIUM_TEST_VALUE", raising=False)

    assert load_env_first_found() == f
    assert os.environ["RAYDIUM_TEST_VALUE"] == "from-dotenv-path"
    monkeypatch.delenv("RAYDIUM_TEST_VALUE")


def test_appdata_env_does_not_override_existing(monkeypatch):
    monkeypatch.delenv("DOTENV_PATH", raising=False)
    p = env_path()
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_text("RAYDIUM_TEST_VALUE=from-file\n", encoding="utf-8")
    monkeypatch.setenv("RAYDIUM_TEST_VALUE", "from-process")

    assert load_env_first_found() == p
    assert os.environ["RAYDIUM_TEST_VALUE"] == "from-process"


def test_load_config_creates_default():
    cfg = load_config()
    assert config_path().exists()
    assert cfg["logging"]["log_level"] == "INFO"


def test_load_config_bad_yaml_returns_empty(tmp_path):
    bad = tmp_path / "bad.yaml"
    bad.write_text("logging: [unclosed\n", encoding="utf-8")
    assert load_config(bad) == {}


def test_setup_logging_is_idempotent(tmp_path, clean_root_logger):
    cfg = {"logging": {"file": str(tmp_path / "logs" / "bot.log"), "log_level": "WARNING"}}

    setup_logging(cfg, level_override="debug")
    setup_logging(cfg)

    log_file = str(tmp_path / "logs" / "bot.log")
    file_handlers = [
        h for h in clean_root_logger.handlers
        if isinstance(h, RotatingFileHandler) and h.baseFilename == log_file
    ]
    assert len(file_handlers) == 1
    assert clean_root_logger.level == logging.WARNING
    assert (tmp_path / "logs" / "bot.log").exists()


def test_redact_hides_secrets():
    assert redact(None) == "<missing>"
    assert redact("abcdefghijklmnop") == "abcd...mnop"
    assert "secret" not in redact("supersecretvalue")
