# raydium_bot_bundle/trading_bot/moralis_client.py
from __future__ import annotations

import asyncio
import json
import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import TYPE_CHECKING, Any, Dict, Optional, Union

import aiohttp

from raydium_bot_bundle.utils import redact

if TYPE_CHECKING:
    from .settings import BotSettings

logger = logging.getLogger(__name__)

MORALIS_SOLANA_GATEWAY = "https://solana-gateway.moralis.io"


@dataclass(frozen=True)
class Price:
    usd: Decimal


@dataclass(frozen=True)
class Unavailable:
    mint: str
    reason: str
    error: Optional[BaseException] = None

    def describe(self) -> str:
        if self.error is None:
            return self.reason
        return f"{self.reason}: {self.error!r}"


PriceQuote = Union[Price, Unavailable]


class MoralisClient:
    """
    Async Moralis Solana API client for real-time token prices.

    ``get_usd_price`` never raises for network, HTTP or payload problems; it
    returns ``Unavailable`` so the caller decides how to log and degrade.
    One HTTP request per call, no retries and no rate spacing.

    Moralis only reports ``usdPrice`` to 4 decimal places, so any token worth
    less than $0.0001 comes back as exactly 0.
    """

    def __init__(
        self,
        api_key: Optional[str],
        network: str = "mainnet",
        base_url: str = MORALIS_SOLANA_GATEWAY,
        timeout: float = 10.0,
        session_kwargs: Optional[Dict[str, Any]] = None,
    ):
        self.api_key = api_key
        self.network = network
        self.base_url = base_url.rstrip("/")
        self._timeout = aiohttp.ClientTimeout(total=float(timeout), sock_connect=min(5.0, float(timeout)))
        self._session_kwargs = session_kwargs or {}
        self._session: Optional[aiohttp.ClientSession] = None
        logger.info("Moralis client ready: network=%s api_key=%s", self.network, redact(self.api_key))

    async def start(self) -> aiohttp.ClientSession:
        if self._session is None:
            headers = {"Accept": "application/json"}
            self._session = aiohttp.ClientSession(headers=headers, **self._session_kwargs)
        return self._session

    async def close(self) -> None:
        if self._session:
            await self._session.close()
            self._session = None

    async def __aenter__(self) -> "MoralisClient":
        await self.start()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    def price_url(self, mint: str) -> str:
        return f"{self.base_url}/token/{self.network}/{mint}/price"

    async def get_usd_price(self, mint: str) -> PriceQuote:
        mint = str(mint)
        if not self.api_key:
            return Unavailable(mint, "no api key")
        session = await self.start()

        url = self.price_url(mint)
        headers = {"X-API-Key": str(self.api_key)}
        try:
            async with session.get(url, headers=headers, timeout=self._timeout) as resp:
                body = await resp.read()
                if resp.status in (401, 403):
                    return Unavailable(mint, f"unauthorized (HTTP {resp.status})")
                if resp.status != 200:
                    logger.debug("Moralis HTTP %s for %s: %s", resp.status, mint, body[:200])
                    return Unavailable(mint, f"HTTP {resp.status}")
        except asyncio.TimeoutError as e:
            return Unavailable(mint, "timeout", e)
        except aiohttp.ClientError as e:
            return Unavailable(mint, "transport error", e)

        return parse_price_payload(mint, body)


def parse_price_payload(mint: str, body: Union[str, bytes]) -> PriceQuote:
    """Read ``usdPrice`` from a Moralis price response, keeping full decimal precision.

    ``body`` may be raw bytes; anything that does not decode as JSON text
    (including invalid UTF-8) is reported as a malformed response.
    """
    try:
        payload = json.loads(body, parse_float=Decimal)
    except ValueError as e:
        return Unavailable(mint, "malformed response", e)
    if not isinstance(payload, dict):
        return Unavailable(mint, "malformed response")

    raw = payload.get("usdPrice")
    # bool is an int subclass; a JSON true/false is not a price
    if isinstance(raw, bool) or not isinstance(raw, (int, Decimal)):
        return Unavailable(mint, "missing usdPrice")
    price = Decimal(raw)
    if not price.is_finite() or price < 0:
        return Unavailable(mint, f"invalid usdPrice {raw!r}")
    return Price(price)


def make_moralis_client_from_settings(settings: "BotSettings", **kwargs: Any) -> MoralisClient:
    return MoralisClient(api_key=settings.moralis_api_key, **kwargs)


__all__ = [
    "MORALIS_SOLANA_GATEWAY",
    "MoralisClient",
    "Price",
    "PriceQuote",
    "Unavailable",
    "make_moralis_client_from_settings",
    "parse_price_payload",
]
