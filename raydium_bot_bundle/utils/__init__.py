# raydium_bot_bundle/utils/__init__.py
# -*- coding: utf-8 -*-
from __future__ import annotations

from .env_loader import load_env_first_found


def redact(s: object) -> str:
    """Short, log-safe rendering of a secret (API key, private key)."""
    if not s:
        return "<missing>"
    s = str(s)
    if len(s) <= 10:
        return s[:2] + "..." + s[-2:]
    return s[:4] + "..." + s[-4:]


__all__ = ["load_env_first_found", "redact"]
