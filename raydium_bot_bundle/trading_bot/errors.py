# raydium_bot_bundle/trading_bot/errors.py
from __future__ import annotations

from typing import Optional


class BotError(Exception):
    """Base class for errors raised by the bot helpers."""


class ConfigError(BotError):
    """A required setting is missing or has an invalid value."""

    def __init__(self, setting: str, message: str, value: Optional[str] = None):
        super().__init__(f"{setting}: {message}")
        self.setting = setting
        self.message = message
        self.value = value


class AccountNotFoundError(BotError):
    """The ledger has no account at the requested address."""

    def __init__(self, address: object, what: str = "account"):
        super().__init__(f"{what} {address} not found")
        self.address = address
        self.what = what


class PoolKeyDerivationError(BotError):
    """No valid program address could be derived for a pool or market authority."""
