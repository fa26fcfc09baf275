# raydium_bot_bundle/trading_bot/utils_exec.py
from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from raydium_bot_bundle.common.constants import config_path, ensure_app_dirs, logs_dir

logger = logging.getLogger("TradingBot")

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(message)s"

# -----------------------------------------------------------------------------
# Config helpers
# -----------------------------------------------------------------------------
def _default_config() -> Dict[str, Any]:
    return {
        "logging": {
            "file": str(logs_dir() / "bot.log"),
            "log_level": "INFO",
            "log_rotation_size_mb": 10,
            "log_max_files": 5,
        },
    }


def _create_default_config(cfg_path: Path) -> None:
    if cfg_path.exists() and cfg_path.stat().st_size > 0:
        return
    try:
        cfg_path.parent.mkdir(parents=True, exist_ok=True)
        cfg_path.write_text("# Auto-generated default config\n" + yaml.safe_dump(_default_config()), encoding="utf-8")
    except OSError as e:
        logger.debug("Could not create default config at %s: %s", cfg_path, e)


def load_config(path: str | Path | None = None) -> Dict[str, Any]:
    """
    Load the YAML config (logging options). A missing default file is created;
    an unreadable or malformed one is logged and treated as empty.
    """
    cfg_path = Path(path) if path else config_path()
    if path is None:
        _create_default_config(cfg_path)
    try:
        with open(cfg_path, "r", encoding="utf-8") as f:
            config = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        logger.error("Failed to load config from %s: %s", cfg_path, e)
        return {}
    if not isinstance(config, dict):
        logger.error("Config at %s is not a mapping; ignoring it", cfg_path)
        return {}
    logger.debug("Loaded configuration from %s", cfg_path)
    return config


# -----------------------------------------------------------------------------
# Logging
# -----------------------------------------------------------------------------
_LOG_SENTINEL_ATTR = "_raydium_bot_logging_file"
_CONSOLE_HANDLER_ATTR = "_raydium_bot_console"


def setup_console_logging() -> logging.Handler:
    """
    Console handler on the root logger with the bot's log format. Installed
    before settings are read so configuration errors are formatted like every
    other line; ``setup_logging`` later reuses it.
    """
    root = logging.getLogger()
    for h in root.handlers:
        if getattr(h, _CONSOLE_HANDLER_ATTR, False):
            return h
    sh = logging.StreamHandler()
    sh.setFormatter(logging.Formatter(LOG_FORMAT))
    setattr(sh, _CONSOLE_HANDLER_ATTR, True)
    root.addHandler(sh)
    return sh


def setup_logging(config: Optional[Dict[str, Any]], level_override: Optional[str] = None) -> logging.Logger:
    """
    Rotating file log plus console output on the root logger. Safe to call
    again: handlers are reused and only their level is updated.
    ``level_override`` (the LOG_LEVEL setting) wins over the YAML level.
    """
    log_cfg = (config or {}).get("logging", {}) if isinstance(config, dict) else {}
    ensure_app_dirs()

    raw_file = log_cfg.get("file") or (logs_dir() / "bot.log")
    log_file = Path(raw_file)
    log_file.parent.mkdir(parents=True, exist_ok=True)

    level_name = str(level_override or log_cfg.get("log_level", "INFO")).upper()
    level = getattr(logging, level_name, None)
    if not isinstance(level, int):
        level_name, level = "INFO", logging.INFO
    max_size_mb = int(log_cfg.get("log_rotation_size_mb", 10))
    max_files = int(log_cfg.get("log_max_files", 5))

    root = logging.getLogger()
    root.setLevel(level)

    if getattr(root, _LOG_SENTINEL_ATTR, None) == str(log_file):
        for h in root.handlers:
            h.setLevel(level)
        return logger

    file_handler = RotatingFileHandler(
        str(log_file),
        maxBytes=max_size_mb * 1024 * 1024,
        backupCount=max_files,
        encoding="utf-8",
    )
    file_handler.setFormatter(logging.Formatter(LOG_FORMAT))
    file_handler.setLevel(level)
    root.addHandler(file_handler)

    setup_console_logging().setLevel(level)

    logger.handlers.clear()
    logger.propagate = True
    logger.setLevel(level)

    setattr(root, _LOG_SENTINEL_ATTR, str(log_file))
    logger.info("Logging configured: level=%s, file=%s", level_name, str(log_file))
    return logger


__all__ = ["LOG_FORMAT", "load_config", "setup_console_logging", "setup_logging"]
