# raydium_bot_bundle/trading_bot/settings.py
"""
Operator settings read from the process environment.

``load_settings`` validates everything up front and raises ``ConfigError`` for
the first missing or malformed value; it never exits the process. The entry
point calls ``settings_or_exit`` which logs the error and exits with status 1,
so nothing touches the ledger or the price oracle with a partial config.
"""
from __future__ import annotations

import logging
import os
import sys
from dataclasses import dataclass, field
from typing import Callable, Mapping, Optional, TypeVar

from raydium_bot_bundle.common.constants import NETWORK, POSSIBLE_COMMITMENTS
from raydium_bot_bundle.utils import redact

from .errors import ConfigError

logger = logging.getLogger("TradingBot")

T = TypeVar("T")


@dataclass(frozen=True)
class BotSettings:
    commitment_level: str
    rpc_endpoint: str
    rpc_websocket_endpoint: str
    log_level: str
    check_if_mint_is_renounced: bool
    max_sell_retries: int
    private_key: str = field(repr=False)
    quote_mint: str
    quote_amount: str
    min_pool_size: str
    max_pool_size: str
    one_token_at_a_time: bool
    sell_after_gain_percentage: float
    moralis_api_key: str = field(repr=False)
    network: str = NETWORK

    def summary(self) -> dict:
        """Log-safe view of the settings (secrets redacted)."""
        return {
            "network": self.network,
            "commitment_level": self.commitment_level,
            "rpc_endpoint": self.rpc_endpoint,
            "rpc_websocket_endpoint": self.rpc_websocket_endpoint,
            "log_level": self.log_level,
            "check_if_mint_is_renounced": self.check_if_mint_is_renounced,
            "max_sell_retries": self.max_sell_retries,
            "private_key": redact(self.private_key),
            "quote_mint": self.quote_mint,
            "quote_amount": self.quote_amount,
            "min_pool_size": self.min_pool_size,
            "max_pool_size": self.max_pool_size,
            "one_token_at_a_time": self.one_token_at_a_time,
            "sell_after_gain_percentage": self.sell_after_gain_percentage,
            "moralis_api_key": redact(self.moralis_api_key),
        }


def retrieve_env_variable(name: str, environ: Optional[Mapping[str, str]] = None) -> str:
    """Return a required variable; an unset or empty value raises ``ConfigError``."""
    env = os.environ if environ is None else environ
    value = env.get(name, "")
    if not value:
        raise ConfigError(name, f"{name} is not set")
    return value


def _parsed(name: str, raw: str, conv: Callable[[str], T], kind: str) -> T:
    try:
        return conv(raw)
    except ValueError:
        raise ConfigError(name, f"{name} must be {kind}", value=raw) from None


def load_settings(environ: Optional[Mapping[str, str]] = None) -> BotSettings:
    env = os.environ if environ is None else environ

    def get(name: str) -> str:
        return retrieve_env_variable(name, env)

    commitment = get("COMMITMENT_LEVEL")
    if commitment not in POSSIBLE_COMMITMENTS:
        raise ConfigError(
            "COMMITMENT_LEVEL",
            f"Invalid commitment level. Possible values are {', '.join(POSSIBLE_COMMITMENTS)}",
            value=commitment,
        )

    return BotSettings(
        commitment_level=commitment,
        rpc_endpoint=get("RPC_ENDPOINT"),
        rpc_websocket_endpoint=get("RPC_WEBSOCKET_ENDPOINT"),
        log_level=get("LOG_LEVEL"),
        check_if_mint_is_renounced=get("CHECK_IF_MINT_IS_RENOUNCED") == "true",
        max_sell_retries=_parsed("MAX_SELL_RETRIES", get("MAX_SELL_RETRIES"), int, "an integer"),
        private_key=get("PRIVATE_KEY"),
        quote_mint=get("QUOTE_MINT"),
        quote_amount=get("QUOTE_AMOUNT"),
        min_pool_size=get("MIN_POOL_SIZE"),
        max_pool_size=get("MAX_POOL_SIZE"),
        one_token_at_a_time=get("ONE_TOKEN_AT_A_TIME") == "true",
        sell_after_gain_percentage=_parsed(
            "SELL_AFTER_GAIN_PERCENTAGE", get("SELL_AFTER_GAIN_PERCENTAGE"), float, "a number"
        ),
        moralis_api_key=get("MORALIS_API_KEY"),
    )


def settings_or_exit(environ: Optional[Mapping[str, str]] = None) -> BotSettings:
    try:
        return load_settings(environ)
    except ConfigError as e:
        # PRIVATE_KEY / MORALIS_API_KEY values are never echoed back
        shown = e.value if e.setting not in ("PRIVATE_KEY", "MORALIS_API_KEY") else redact(e.value)
        logger.error("Invalid configuration: setting=%s value=%r error=%s", e.setting, shown, e.message)
        sys.exit(1)


__all__ = ["BotSettings", "ConfigError", "load_settings", "retrieve_env_variable", "settings_or_exit"]
