# raydium_bot_bundle/trading_bot/layouts.py
"""
Binary account layouts used by the helpers.

The SPL token account layout is the one shipped with solana-py (``spl.token``);
the Raydium AMM v4 pool state and the slice of the OpenBook v3 market state
we need are declared here with ``construct``, the same library solana-py uses
for its own layouts.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from construct import Array, Bytes, BytesInteger, Int64ul, Struct
from solders.pubkey import Pubkey
from spl.token._layouts import ACCOUNT_LAYOUT as SPL_ACCOUNT_LAYOUT

PUBLIC_KEY_LAYOUT = Bytes(32)
U128 = BytesInteger(16, swapped=True)

LIQUIDITY_STATE_LAYOUT_V4 = Struct(
    "status" / Int64ul,
    "nonce" / Int64ul,
    "max_order" / Int64ul,
    "depth" / Int64ul,
    "base_decimal" / Int64ul,
    "quote_decimal" / Int64ul,
    "state" / Int64ul,
    "reset_flag" / Int64ul,
    "min_size" / Int64ul,
    "vol_max_cut_ratio" / Int64ul,
    "amount_wave_ratio" / Int64ul,
    "base_lot_size" / Int64ul,
    "quote_lot_size" / Int64ul,
    "min_price_multiplier" / Int64ul,
    "max_price_multiplier" / Int64ul,
    "system_decimal_value" / Int64ul,
    "min_separate_numerator" / Int64ul,
    "min_separate_denominator" / Int64ul,
    "trade_fee_numerator" / Int64ul,
    "trade_fee_denominator" / Int64ul,
    "pnl_numerator" / Int64ul,
    "pnl_denominator" / Int64ul,
    "swap_fee_numerator" / Int64ul,
    "swap_fee_denominator" / Int64ul,
    "base_need_take_pnl" / Int64ul,
    "quote_need_take_pnl" / Int64ul,
    "quote_total_pnl" / Int64ul,
    "base_total_pnl" / Int64ul,
    "pool_open_time" / Int64ul,
    "punish_pc_amount" / Int64ul,
    "punish_coin_amount" / Int64ul,
    "orderbook_to_init_time" / Int64ul,
    "swap_base_in_amount" / U128,
    "swap_quote_out_amount" / U128,
    "swap_base2quote_fee" / Int64ul,
    "swap_quote_in_amount" / U128,
    "swap_base_out_amount" / U128,
    "swap_quote2base_fee" / Int64ul,
    # amm vaults
    "base_vault" / PUBLIC_KEY_LAYOUT,
    "quote_vault" / PUBLIC_KEY_LAYOUT,
    # mints
    "base_mint" / PUBLIC_KEY_LAYOUT,
    "quote_mint" / PUBLIC_KEY_LAYOUT,
    "lp_mint" / PUBLIC_KEY_LAYOUT,
    # market
    "open_orders" / PUBLIC_KEY_LAYOUT,
    "market_id" / PUBLIC_KEY_LAYOUT,
    "market_program_id" / PUBLIC_KEY_LAYOUT,
    "target_orders" / PUBLIC_KEY_LAYOUT,
    "withdraw_queue" / PUBLIC_KEY_LAYOUT,
    "lp_vault" / PUBLIC_KEY_LAYOUT,
    "owner" / PUBLIC_KEY_LAYOUT,
    "lp_reserve" / Int64ul,
    "padding" / Array(3, Int64ul),
)

LIQUIDITY_STATE_V4_SIZE = LIQUIDITY_STATE_LAYOUT_V4.sizeof()  # 752

_STATE_PUBKEY_FIELDS = (
    "base_vault", "quote_vault", "base_mint", "quote_mint", "lp_mint", "open_orders",
    "market_id", "market_program_id", "target_orders", "withdraw_queue", "lp_vault", "owner",
)

# OpenBook / Serum v3 market: eventQueue, bids and asks are contiguous from byte 253
MARKET_STATE_V3_EVENT_QUEUE_OFFSET = 253

MINIMAL_MARKET_STATE_LAYOUT_V3 = Struct(
    "event_queue" / PUBLIC_KEY_LAYOUT,
    "bids" / PUBLIC_KEY_LAYOUT,
    "asks" / PUBLIC_KEY_LAYOUT,
)


@dataclass(frozen=True)
class MinimalMarketLayoutV3:
    event_queue: Pubkey
    bids: Pubkey
    asks: Pubkey


@dataclass(frozen=True)
class DecodedTokenAccount:
    mint: Pubkey
    owner: Pubkey
    amount: int


def decode_token_account(data: bytes) -> DecodedTokenAccount:
    info = SPL_ACCOUNT_LAYOUT.parse(bytes(data))
    return DecodedTokenAccount(
        mint=Pubkey.from_bytes(info.mint),
        owner=Pubkey.from_bytes(info.owner),
        amount=int(info.amount),
    )


def decode_liquidity_state(data: bytes) -> Any:
    """
    Parse a Raydium AMM v4 pool account. Pubkey fields come back as
    ``solders.pubkey.Pubkey``; integers stay Python ints.
    """
    state = LIQUIDITY_STATE_LAYOUT_V4.parse(bytes(data))
    for name in _STATE_PUBKEY_FIELDS:
        state[name] = Pubkey.from_bytes(state[name])
    return state


def decode_minimal_market(data: bytes) -> MinimalMarketLayoutV3:
    raw = MINIMAL_MARKET_STATE_LAYOUT_V3.parse(bytes(data))
    return MinimalMarketLayoutV3(
        event_queue=Pubkey.from_bytes(raw.event_queue),
        bids=Pubkey.from_bytes(raw.bids),
        asks=Pubkey.from_bytes(raw.asks),
    )


__all__ = [
    "SPL_ACCOUNT_LAYOUT",
    "LIQUIDITY_STATE_LAYOUT_V4",
    "LIQUIDITY_STATE_V4_SIZE",
    "MARKET_STATE_V3_EVENT_QUEUE_OFFSET",
    "MINIMAL_MARKET_STATE_LAYOUT_V3",
    "MinimalMarketLayoutV3",
    "DecodedTokenAccount",
    "decode_token_account",
    "decode_liquidity_state",
    "decode_minimal_market",
]
