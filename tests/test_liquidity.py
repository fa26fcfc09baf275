from types import SimpleNamespace

import pytest
from solders.pubkey import Pubkey

from conftest import token_account_bytes
from raydium_bot_bundle.common.constants import OPENBOOK_PROGRAM_ID, RAYDIUM_LIQUIDITY_PROGRAM_ID_V4
from raydium_bot_bundle.trading_bot.errors import AccountNotFoundError
from raydium_bot_bundle.trading_bot.layouts import (
    LIQUIDITY_STATE_LAYOUT_V4,
    LIQUIDITY_STATE_V4_SIZE,
    MARKET_STATE_V3_EVENT_QUEUE_OFFSET,
    MinimalMarketLayoutV3,
    decode_liquidity_state,
    decode_token_account,
)
from raydium_bot_bundle.trading_bot.liquidity import (
    create_pool_keys,
    fetch_pool_keys,
    get_associated_authority,
    get_market_authority,
)
from raydium_bot_bundle.trading_bot.market import get_minimal_market_v3

PUBKEY_FIELDS = (
    "base_vault", "quote_vault", "base_mint", "quote_mint", "lp_mint", "open_orders",
    "market_id", "market_program_id", "target_orders", "withdraw_queue", "lp_vault", "owner",
)


def _pool_state_bytes(keys, base_decimal=9, quote_decimal=6):
    values = {}
    for sub in LIQUIDITY_STATE_LAYOUT_V4.subcons:
        if sub.name in PUBKEY_FIELDS:
            values[sub.name] = bytes(keys[sub.name])
        elif sub.name == "padding":
            values[sub.name] = [0, 0, 0]
        else:
            values[sub.name] = 0
    values["base_decimal"] = base_decimal
    values["quote_decimal"] = quote_decimal
    values["swap_base_in_amount"] = 2 ** 100
    return LIQUIDITY_STATE_LAYOUT_V4.build(values)


def _pool_keys_input():
    keys = {name: Pubkey.new_unique() for name in PUBKEY_FIELDS}
    keys["market_program_id"] = OPENBOOK_PROGRAM_ID
    return keys


class FakeAccountsClient:
    """Stands in for AsyncClient.get_account_info, honouring data_slice."""

    def __init__(self, accounts):
        self.accounts = accounts  # pubkey -> (owner, data)
        self.calls = []

    async def get_account_info(self, pubkey, commitment=None, encoding="base64", data_slice=None):
        self.calls.append((pubkey, commitment, data_slice))
        if pubkey not in self.accounts:
            return SimpleNamespace(value=None)
        owner, data = self.accounts[pubkey]
        if data_slice is not None:
            data = data[data_slice.offset:data_slice.offset + data_slice.length]
        return SimpleNamespace(value=SimpleNamespace(owner=owner, data=data))


def test_liquidity_state_layout_size():
    assert LIQUIDITY_STATE_V4_SIZE == 752


def test_decode_liquidity_state_returns_pubkeys_and_ints():
    keys = _pool_keys_input()
    state = decode_liquidity_state(_pool_state_bytes(keys))

    for name in PUBKEY_FIELDS:
        assert state[name] == keys[name]
    assert state.base_decimal == 9
    assert state.swap_base_in_amount == 2 ** 100


def test_decode_token_account():
    mint, owner = Pubkey.new_unique(), Pubkey.new_unique()
    info = decode_token_account(token_account_bytes(mint, owner, 123456789))
    assert (info.mint, info.owner, info.amount) == (mint, owner, 123456789)


def test_amm_authority_matches_mainnet():
    assert str(get_associated_authority()) == "5Q544fKrFoe6tsEbD7S8EmxGTJYAKtTVhAW5Q5pge4j1"


def test_market_authority_is_first_valid_nonce():
    market_id = Pubkey.new_unique()
    authority = get_market_authority(OPENBOOK_PROGRAM_ID, market_id)

    assert not authority.is_on_curve()
    for nonce in range(100):
        seeds = [bytes(market_id), nonce.to_bytes(8, "little")]
        try:
            expected = Pubkey.create_program_address(seeds, OPENBOOK_PROGRAM_ID)
        except ValueError:
            continue
        break
    assert authority == expected


def test_create_pool_keys_copies_and_derives():
    keys = _pool_keys_input()
    state = decode_liquidity_state(_pool_state_bytes(keys))
    market = MinimalMarketLayoutV3(event_queue=Pubkey.new_unique(), bids=Pubkey.new_unique(), asks=Pubkey.new_unique())
    pool_id = Pubkey.new_unique()

    pk = create_pool_keys(pool_id, state, market)

    assert pk.id == pool_id
    assert (pk.base_mint, pk.quote_mint, pk.lp_mint) == (keys["base_mint"], keys["quote_mint"], keys["lp_mint"])
    assert (pk.base_decimals, pk.quote_decimals, pk.lp_decimals) == (9, 6, 5)
    assert (pk.version, pk.market_version) == (4, 3)
    assert pk.program_id == RAYDIUM_LIQUIDITY_PROGRAM_ID_V4
    assert pk.authority == get_associated_authority()
    assert pk.market_authority == get_market_authority(OPENBOOK_PROGRAM_ID, keys["market_id"])
    assert pk.market_base_vault == keys["base_vault"] == pk.base_vault
    assert pk.market_quote_vault == keys["quote_vault"] == pk.quote_vault
    assert (pk.market_bids, pk.market_asks, pk.market_event_queue) == (market.bids, market.asks, market.event_queue)
    assert pk.withdraw_queue == keys["withdraw_queue"]
    assert pk.lp_vault == keys["lp_vault"]
    assert pk.lookup_table_account == Pubkey.default()

    rendered = pk.to_dict()
    assert rendered["id"] == str(pool_id)
    assert rendered["lp_decimals"] == 5


def test_create_pool_keys_accepts_plain_objects():
    keys = _pool_keys_input()
    state = SimpleNamespace(base_decimal=9, quote_decimal=9, **keys)
    market = MinimalMarketLayoutV3(event_queue=Pubkey.new_unique(), bids=Pubkey.new_unique(), asks=Pubkey.new_unique())

    pk = create_pool_keys(Pubkey.new_unique(), state, market)
    assert pk.open_orders == keys["open_orders"]
    assert pk.target_orders == keys["target_orders"]


@pytest.mark.asyncio
async def test_fetch_pool_keys_reads_pool_then_market_slice():
    keys = _pool_keys_input()
    pool_id = Pubkey.new_unique()
    event_queue, bids, asks = Pubkey.new_unique(), Pubkey.new_unique(), Pubkey.new_unique()
    market_data = (
        bytes(MARKET_STATE_V3_EVENT_QUEUE_OFFSET) + bytes(event_queue) + bytes(bids) + bytes(asks) + bytes(100)
    )
    client = FakeAccountsClient({
        pool_id: (RAYDIUM_LIQUIDITY_PROGRAM_ID_V4, _pool_state_bytes(keys)),
        keys["market_id"]: (OPENBOOK_PROGRAM_ID, market_data),
    })

    pk = await fetch_pool_keys(client, pool_id, "confirmed")

    assert (pk.market_event_queue, pk.market_bids, pk.market_asks) == (event_queue, bids, asks)
    assert pk.market_id == keys["market_id"]
    (_, _, pool_slice), (market_key, commitment, market_slice) = client.calls
    assert pool_slice is None
    assert market_key == keys["market_id"]
    assert commitment == "confirmed"
    assert (market_slice.offset, market_slice.length) == (253, 96)


@pytest.mark.asyncio
async def test_missing_accounts_raise():
    with pytest.raises(AccountNotFoundError):
        await fetch_pool_keys(FakeAccountsClient({}), Pubkey.new_unique())
    with pytest.raises(AccountNotFoundError):
        await get_minimal_market_v3(FakeAccountsClient({}), Pubkey.new_unique())


def test_market_authority_propagates_unexpected_errors(monkeypatch):
    from raydium_bot_bundle.trading_bot import liquidity

    class BrokenPubkey:
        @staticmethod
        def create_program_address(seeds, program_id):
            raise TypeError("bad seeds")

    monkeypatch.setattr(liquidity, "Pubkey", BrokenPubkey)
    with pytest.raises(TypeError):
        liquidity.get_market_authority(OPENBOOK_PROGRAM_ID, Pubkey.new_unique())
