# raydium_bot_bundle/trading_bot/market.py
from __future__ import annotations

import logging
from typing import Any, Optional

from solana.rpc.commitment import Commitment
from solana.rpc.types import DataSliceOpts
from solders.pubkey import Pubkey

from .errors import AccountNotFoundError
from .layouts import (
    MARKET_STATE_V3_EVENT_QUEUE_OFFSET,
    MINIMAL_MARKET_STATE_LAYOUT_V3,
    MinimalMarketLayoutV3,
    decode_minimal_market,
)

logger = logging.getLogger("TradingBot")


async def get_minimal_market_v3(
    client: Any,
    market_id: Pubkey,
    commitment: Optional[Commitment] = None,
) -> MinimalMarketLayoutV3:
    """Read only the event queue / bids / asks keys of an OpenBook v3 market."""
    resp = await client.get_account_info(
        market_id,
        commitment=commitment,
        data_slice=DataSliceOpts(
            offset=MARKET_STATE_V3_EVENT_QUEUE_OFFSET,
            length=MINIMAL_MARKET_STATE_LAYOUT_V3.sizeof(),
        ),
    )
    if resp.value is None:
        raise AccountNotFoundError(market_id, "market")
    market = decode_minimal_market(resp.value.data)
    logger.debug("Market %s: event_queue=%s bids=%s asks=%s", market_id, market.event_queue, market.bids, market.asks)
    return market


__all__ = ["get_minimal_market_v3"]
