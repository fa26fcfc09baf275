# raydium_bot_bundle/common/constants.py
from __future__ import annotations

import os
import platform
from pathlib import Path
from typing import Optional, Final

from solders.pubkey import Pubkey

__all__ = [
    "APP_NAME",
    "NETWORK",
    "POSSIBLE_COMMITMENTS",
    "TOKEN_PROGRAM_ID",
    "RAYDIUM_LIQUIDITY_PROGRAM_ID_V4",
    "OPENBOOK_PROGRAM_ID",
    "local_appdata_dir",
    "appdata_dir",
    "logs_dir",
    "config_path",
    "env_path",
    "ensure_app_dirs",
]

# -----------------------------------------------------------------------------
# App naming / cluster
# -----------------------------------------------------------------------------
APP_NAME: Final[str] = "RaydiumBot"  # used as the directory name across platforms

NETWORK: Final[str] = "mainnet-beta"
POSSIBLE_COMMITMENTS: Final[tuple[str, ...]] = ("processed", "confirmed", "finalized")

# -----------------------------------------------------------------------------
# Program IDs (mainnet)
# -----------------------------------------------------------------------------
TOKEN_PROGRAM_ID: Final[Pubkey] = Pubkey.from_string("TokenkegQfeZyiNwAJbNbGKPFXCWuBvf9Ss623VQ5DA")
RAYDIUM_LIQUIDITY_PROGRAM_ID_V4: Final[Pubkey] = Pubkey.from_string("675kPX9MHTjS2zt1qfr1NYHuzeLXfQM9H24wFSUt1Mp8")
OPENBOOK_PROGRAM_ID: Final[Pubkey] = Pubkey.from_string("srmqPvymJeFKQ4zGQed1GFppgkRHL9kaELCbyksJtPX")


# -----------------------------------------------------------------------------
# Platform-aware base dirs
# -----------------------------------------------------------------------------
def _windows_local_appdata() -> Optional[Path]:
    """Return Windows LocalAppData (LOCALAPPDATA), falling back to Roaming, or None."""
    val = os.getenv("LOCALAPPDATA") or os.getenv("APPDATA")
    if not val:
        return None
    return Path(val).expanduser()


def _xdg_data_home() -> Path:
    val = os.getenv("XDG_DATA_HOME")
    return Path(val).expanduser() if val else (Path.home() / ".local" / "share")


def local_appdata_dir() -> Path:
    r"""
    Cross-platform "local app data" root for this user.

    - Windows:  %LOCALAPPDATA%
    - macOS:    ~/Library/Application Support
    - Linux:    ~/.local/share  (or $XDG_DATA_HOME)
    """
    system = platform.system().lower()
    if system.startswith("win"):
        return _windows_local_appdata() or Path.home()
    if system == "darwin":
        return Path.home() / "Library" / "Application Support"
    return _xdg_data_home()


def appdata_dir() -> Path:
    """Full application data directory (``<local appdata>/RaydiumBot``)."""
    return local_appdata_dir() / APP_NAME


def logs_dir() -> Path:
    """Directory where rotating logs are stored."""
    return appdata_dir() / "logs"


def config_path() -> Path:
    """Default location for YAML config."""
    return appdata_dir() / "config.yaml"


def env_path() -> Path:
    """Default location for a .env file (optional)."""
    return appdata_dir() / ".env"


def ensure_app_dirs() -> None:
    """
    Create the app data hierarchy if missing. Safe to call multiple times.
    Filesystem errors are left to the caller that actually writes a file.
    """
    try:
        logs_dir().mkdir(parents=True, exist_ok=True)
    except OSError:
        pass
