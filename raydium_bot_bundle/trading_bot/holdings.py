# raydium_bot_bundle/trading_bot/holdings.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, List, Optional, Protocol

from solana.rpc.commitment import Commitment
from solana.rpc.types import TokenAccountOpts
from solders.pubkey import Pubkey

from raydium_bot_bundle.common.constants import TOKEN_PROGRAM_ID

from .layouts import decode_token_account
from .moralis_client import Price, PriceQuote, Unavailable

logger = logging.getLogger("TradingBot")


class PriceOracle(Protocol):
    async def get_usd_price(self, mint: str) -> PriceQuote: ...


@dataclass(frozen=True)
class TokenHolding:
    owner_address: Pubkey
    account_address: Pubkey
    program_id: Pubkey
    mint_address: Pubkey
    amount: int
    price_usd: Optional[Decimal] = None

    def to_dict(self) -> dict:
        return {
            "owner": str(self.owner_address),
            "account": str(self.account_address),
            "program_id": str(self.program_id),
            "mint": str(self.mint_address),
            "amount": str(self.amount),
            "price_usd": None if self.price_usd is None else str(self.price_usd),
        }


async def fetch_coin_price(oracle: PriceOracle, mint: str) -> Optional[Decimal]:
    """
    One oracle attempt for ``mint``; returns a strictly positive price or None.

    A price of exactly 0 is treated like a failed lookup: the oracle rounds
    anything under $0.0001 down to 0, and the auto-sell gain check cannot work
    with a zero price anyway.
    """
    logger.info("Fetching real-time coin price: %s", mint)
    try:
        quote = await oracle.get_usd_price(mint)
    except Exception as e:
        logger.error("Fetching real-time coin price failed: mint=%s error=%r", mint, e)
        return None

    if isinstance(quote, Unavailable):
        logger.error("Fetching real-time coin price failed: mint=%s error=%s", mint, quote.describe())
        return None
    if not isinstance(quote, Price):
        logger.error("Fetching real-time coin price failed: mint=%s error=unexpected quote %r", mint, quote)
        return None
    if quote.usd == 0:
        logger.info("Price of coin %s is 0, returning None", mint)
        return None
    if quote.usd < 0:
        logger.error("Fetching real-time coin price failed: mint=%s error=negative price %s", mint, quote.usd)
        return None
    return quote.usd


async def enrich_holdings(
    client: Any,
    owner: Pubkey,
    oracle: PriceOracle,
    commitment: Optional[Commitment] = None,
) -> List[TokenHolding]:
    """
    List every SPL token account owned by ``owner`` and attach a USD price to each.

    ``client`` is a ``solana.rpc.async_api.AsyncClient`` (or anything with the
    same ``get_token_accounts_by_owner`` coroutine). Errors from that call
    propagate. Price lookups run one at a time in ledger order and a failed
    lookup only leaves that holding's ``price_usd`` as None.
    """
    resp = await client.get_token_accounts_by_owner(
        owner,
        TokenAccountOpts(program_id=TOKEN_PROGRAM_ID),
        commitment,
    )

    holdings: List[TokenHolding] = []
    for keyed in resp.value:
        info = decode_token_account(keyed.account.data)
        price = await fetch_coin_price(oracle, str(info.mint))
        holdings.append(
            TokenHolding(
                owner_address=owner,
                account_address=keyed.pubkey,
                program_id=keyed.account.owner,
                mint_address=info.mint,
                amount=info.amount,
                price_usd=price,
            )
        )

    logger.debug("Enriched %d token account(s) for %s", len(holdings), owner)
    return holdings


# Name used by the rest of the bot
get_token_accounts = enrich_holdings

__all__ = ["PriceOracle", "TokenHolding", "enrich_holdings", "fetch_coin_price", "get_token_accounts"]
