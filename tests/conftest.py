import logging
from types import SimpleNamespace

import pytest
from solders.pubkey import Pubkey

from raydium_bot_bundle.common.constants import TOKEN_PROGRAM_ID
from raydium_bot_bundle.trading_bot.moralis_client import Price, Unavailable

SETTINGS_ENV = {
    "COMMITMENT_LEVEL": "confirmed",
    "RPC_ENDPOINT": "https://rpc.example.invalid",
    "RPC_WEBSOCKET_ENDPOINT": "wss://rpc.example.invalid",
    "LOG_LEVEL": "debug",
    "CHECK_IF_MINT_IS_RENOUNCED": "true",
    "MAX_SELL_RETRIES": "5",
    "PRIVATE_KEY": "not-a-real-private-key-value",
    "QUOTE_MINT": "WSOL",
    "QUOTE_AMOUNT": "0.01",
    "MIN_POOL_SIZE": "5",
    "MAX_POOL_SIZE": "50",
    "ONE_TOKEN_AT_A_TIME": "false",
    "SELL_AFTER_GAIN_PERCENTAGE": "12.5",
    "MORALIS_API_KEY": "moralis-test-key-123456",
}


@pytest.fixture(autouse=True)
def isolated_appdata(tmp_path, monkeypatch):
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "appdata"))
    monkeypatch.setenv("LOCALAPPDATA", str(tmp_path / "appdata"))
    return tmp_path / "appdata"


@pytest.fixture
def settings_env():
    return dict(SETTINGS_ENV)


def token_account_bytes(mint: Pubkey, owner: Pubkey, amount: int) -> bytes:
    # SPL token account: mint | owner | amount (u64 LE) | 93 bytes we do not read
    return bytes(mint) + bytes(owner) + amount.to_bytes(8, "little") + bytes(93)


class FakeLedger:
    """Stands in for AsyncClient.get_token_accounts_by_owner."""

    def __init__(self, owner, records, error=None):
        self.owner = owner
        self.records = records  # list of (mint, amount)
        self.error = error
        self.calls = []
        self.account_addresses = [Pubkey.new_unique() for _ in records]

    async def get_token_accounts_by_owner(self, owner, opts, commitment=None):
        self.calls.append((owner, opts, commitment))
        if self.error is not None:
            raise self.error
        value = [
            SimpleNamespace(
                pubkey=addr,
                account=SimpleNamespace(owner=TOKEN_PROGRAM_ID, data=token_account_bytes(mint, owner, amount)),
            )
            for addr, (mint, amount) in zip(self.account_addresses, self.records)
        ]
        return SimpleNamespace(value=value)


class FakeOracle:
    """Maps mint -> PriceQuote or exception; records the order of lookups."""

    def __init__(self, answers):
        self.answers = answers
        self.calls = []

    async def get_usd_price(self, mint):
        self.calls.append(mint)
        answer = self.answers[mint]
        if isinstance(answer, BaseException):
            raise answer
        return answer


@pytest.fixture
def clean_root_logger():
    root = logging.getLogger()
    before = list(root.handlers)
    level = root.level
    yield root
    for h in list(root.handlers):
        if h not in before:
            root.removeHandler(h)
            h.close()
    root.setLevel(level)
    if hasattr(root, "_raydium_bot_logging_file"):
        delattr(root, "_raydium_bot_logging_file")
