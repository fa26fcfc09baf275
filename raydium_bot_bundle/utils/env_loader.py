# raydium_bot_bundle/utils/env_loader.py
from __future__ import annotations

import logging
import os
import sys
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from raydium_bot_bundle.common.constants import env_path as _appdata_env_path

logger = logging.getLogger(__name__)


def _package_root_dir() -> Path:
    if getattr(sys, "frozen", False) and hasattr(sys, "_MEIPASS"):
        return Path(sys.argv[0]).resolve().parent
    return Path(__file__).resolve().parents[2]


def _candidate_env_paths() -> list[Path]:
    return [
        Path.cwd() / ".env",              # project CWD (dev)
        _package_root_dir() / ".env",     # alongside the checkout / binary
    ]


def load_env_first_found(override: bool = False) -> Optional[Path]:
    """
    Load the first .env file found into ``os.environ``.

    Priority:
      1) DOTENV_PATH env var (if set and exists)
      2) Per-user app-data path (see ``common.constants.env_path``)
      3) CWD, then the directory above the package

    Variables already present in the environment win unless ``override``.
    Returns the Path loaded or None.
    """
    dotenv_override = os.environ.get("DOTENV_PATH")
    if dotenv_override:
        p = Path(dotenv_override)
        if p.exists():
            load_dotenv(dotenv_path=str(p), override=override)
            logger.info("Loaded .env from DOTENV_PATH: %s", str(p))
            return p
        logger.warning("DOTENV_PATH set but file not found: %s", str(p))

    preferred = _appdata_env_path()
    if preferred.exists():
        load_dotenv(dotenv_path=str(preferred), override=override)
        logger.info("Loaded preferred .env from app data: %s", str(preferred))
        return preferred

    for p in _candidate_env_paths():
        if p.exists():
            load_dotenv(dotenv_path=str(p), override=override)
            logger.info("Loaded .env from candidate path: %s", str(p))
            return p

    logger.warning("No .env file found by loader; relying on process environment.")
    return None


__all__ = ["load_env_first_found"]
