#!/usr/bin/env python3
from __future__ import annotations

import argparse
import asyncio
import json
import logging
import re
import sys
from typing import Optional, Sequence

from solana.rpc.async_api import AsyncClient
from solana.rpc.commitment import Commitment
from solders.keypair import Keypair
from solders.pubkey import Pubkey

from raydium_bot_bundle.utils import load_env_first_found

from .holdings import enrich_holdings
from .liquidity import fetch_pool_keys
from .moralis_client import make_moralis_client_from_settings
from .settings import BotSettings, settings_or_exit
from .utils_exec import load_config, setup_console_logging, setup_logging

logger = logging.getLogger("TradingBot")


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Raydium bot helpers")
    p.add_argument("-c", "--config", dest="config", default=None,
                   help="Path to config.yaml (optional; will use AppData default if omitted)")
    sub = p.add_subparsers(dest="command", required=True)

    h = sub.add_parser("holdings", help="List wallet token accounts with USD prices")
    h.add_argument("--owner", default=None,
                   help="Wallet address (defaults to the wallet of PRIVATE_KEY)")

    k = sub.add_parser("pool-keys", help="Print the account keys of an AMM v4 pool")
    k.add_argument("pool_id", help="Pool account address")
    return p.parse_args(argv)


def _parse_pubkey(value: str, what: str) -> Pubkey:
    try:
        return Pubkey.from_string(value)
    except ValueError:
        logger.error("Invalid %s address: %s", what, value)
        sys.exit(2)


_BASE58_SECRET = re.compile(r"[1-9A-HJ-NP-Za-km-z]{64,90}")


def _wallet_owner(settings: BotSettings) -> Pubkey:
    if not _BASE58_SECRET.fullmatch(settings.private_key.strip()):
        logger.error("PRIVATE_KEY is not a base58 keypair; pass --owner instead")
        sys.exit(1)
    try:
        return Keypair.from_base58_string(settings.private_key.strip()).pubkey()
    except ValueError:
        logger.error("PRIVATE_KEY is not a base58 keypair; pass --owner instead")
        sys.exit(1)


async def _run_holdings(settings: BotSettings, client: AsyncClient, owner: Pubkey) -> None:
    async with make_moralis_client_from_settings(settings) as oracle:
        holdings = await enrich_holdings(client, owner, oracle, Commitment(settings.commitment_level))
    print(json.dumps([h.to_dict() for h in holdings], indent=2))


async def _run_pool_keys(settings: BotSettings, client: AsyncClient, pool_id: Pubkey) -> None:
    keys = await fetch_pool_keys(client, pool_id, Commitment(settings.commitment_level))
    print(json.dumps(keys.to_dict(), indent=2))


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = _parse_args(argv)
    setup_console_logging()
    load_env_first_found()
    settings = settings_or_exit()
    setup_logging(load_config(args.config), level_override=settings.log_level)
    logger.info("Settings: %s", settings.summary())

    if args.command == "holdings":
        target = _parse_pubkey(args.owner, "owner") if args.owner else _wallet_owner(settings)
    else:
        target = _parse_pubkey(args.pool_id, "pool")

    async def _runner() -> None:
        async with AsyncClient(settings.rpc_endpoint, commitment=Commitment(settings.commitment_level)) as client:
            if args.command == "holdings":
                await _run_holdings(settings, client, target)
            else:
                await _run_pool_keys(settings, client, target)

    asyncio.run(_runner())


if __name__ == "__main__":
    main()
