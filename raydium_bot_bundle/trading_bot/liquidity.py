# raydium_bot_bundle/trading_bot/liquidity.py
from __future__ import annotations

import logging
from dataclasses import dataclass, fields
from typing import Any, Dict, Optional

from solana.rpc.commitment import Commitment
from solders.pubkey import Pubkey

from raydium_bot_bundle.common.constants import OPENBOOK_PROGRAM_ID, RAYDIUM_LIQUIDITY_PROGRAM_ID_V4

from .errors import AccountNotFoundError, PoolKeyDerivationError
from .layouts import MinimalMarketLayoutV3, decode_liquidity_state
from .market import get_minimal_market_v3

logger = logging.getLogger("TradingBot")

AMM_AUTHORITY_SEED = b"amm authority"
MARKET_AUTHORITY_MAX_NONCE = 100
LP_DECIMALS = 5


@dataclass(frozen=True)
class PoolKeys:
    id: Pubkey
    base_mint: Pubkey
    quote_mint: Pubkey
    lp_mint: Pubkey
    base_decimals: int
    quote_decimals: int
    lp_decimals: int
    version: int
    program_id: Pubkey
    authority: Pubkey
    open_orders: Pubkey
    target_orders: Pubkey
    base_vault: Pubkey
    quote_vault: Pubkey
    market_version: int
    market_program_id: Pubkey
    market_id: Pubkey
    market_authority: Pubkey
    market_base_vault: Pubkey
    market_quote_vault: Pubkey
    market_bids: Pubkey
    market_asks: Pubkey
    market_event_queue: Pubkey
    withdraw_queue: Pubkey
    lp_vault: Pubkey
    lookup_table_account: Pubkey

    def to_dict(self) -> Dict[str, Any]:
        values = ((f.name, getattr(self, f.name)) for f in fields(self))
        return {k: (str(v) if isinstance(v, Pubkey) else v) for k, v in values}


def get_associated_authority(program_id: Pubkey = RAYDIUM_LIQUIDITY_PROGRAM_ID_V4) -> Pubkey:
    authority, _bump = Pubkey.find_program_address([AMM_AUTHORITY_SEED], program_id)
    return authority


def get_market_authority(market_program_id: Pubkey, market_id: Pubkey) -> Pubkey:
    """Vault signer of an OpenBook market: first nonce whose derived address is off-curve."""
    for nonce in range(MARKET_AUTHORITY_MAX_NONCE):
        seeds = [bytes(market_id), nonce.to_bytes(8, "little")]
        try:
            return Pubkey.create_program_address(seeds, market_program_id)
        except ValueError:
            # derived point was on the curve; try the next nonce
            continue
    raise PoolKeyDerivationError(
        f"no market authority for {market_id} under {market_program_id} "
        f"within {MARKET_AUTHORITY_MAX_NONCE} nonces"
    )


def create_pool_keys(pool_id: Pubkey, state: Any, market: MinimalMarketLayoutV3) -> PoolKeys:
    """
    Assemble the account set needed to trade against one AMM v4 pool.

    ``state`` is a decoded pool account (``decode_liquidity_state``) or any
    object exposing the same attribute names.
    """
    return PoolKeys(
        id=pool_id,
        base_mint=state.base_mint,
        quote_mint=state.quote_mint,
        lp_mint=state.lp_mint,
        base_decimals=int(state.base_decimal),
        quote_decimals=int(state.quote_decimal),
        lp_decimals=LP_DECIMALS,
        version=4,
        program_id=RAYDIUM_LIQUIDITY_PROGRAM_ID_V4,
        authority=get_associated_authority(RAYDIUM_LIQUIDITY_PROGRAM_ID_V4),
        open_orders=state.open_orders,
        target_orders=state.target_orders,
        base_vault=state.base_vault,
        quote_vault=state.quote_vault,
        market_version=3,
        market_program_id=state.market_program_id,
        market_id=state.market_id,
        market_authority=get_market_authority(state.market_program_id, state.market_id),
        market_base_vault=state.base_vault,
        market_quote_vault=state.quote_vault,
        market_bids=market.bids,
        market_asks=market.asks,
        market_event_queue=market.event_queue,
        withdraw_queue=state.withdraw_queue,
        lp_vault=state.lp_vault,
        lookup_table_account=Pubkey.default(),
    )


async def fetch_pool_keys(
    client: Any,
    pool_id: Pubkey,
    commitment: Optional[Commitment] = None,
) -> PoolKeys:
    resp = await client.get_account_info(pool_id, commitment=commitment)
    if resp.value is None:
        raise AccountNotFoundError(pool_id, "pool")
    if resp.value.owner != RAYDIUM_LIQUIDITY_PROGRAM_ID_V4:
        logger.warning("Pool %s is owned by %s, not the AMM v4 program", pool_id, resp.value.owner)
    state = decode_liquidity_state(resp.value.data)
    if state.market_program_id != OPENBOOK_PROGRAM_ID:
        logger.debug("Pool %s uses market program %s", pool_id, state.market_program_id)
    market = await get_minimal_market_v3(client, state.market_id, commitment)
    return create_pool_keys(pool_id, state, market)


__all__ = [
    "PoolKeys",
    "create_pool_keys",
    "fetch_pool_keys",
    "get_associated_authority",
    "get_market_authority",
]
