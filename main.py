#!/usr/bin/env python3
"""
NEAR token query smoke check

Runs every token query against the configured RPC node and prints the
decoded records or the classified errors.

Usage:
    python main.py [--block-height 68000000]
"""

import argparse
import asyncio
import logging
import sys
from typing import Awaitable, Optional

from config import settings
from near_query import DomainError
from near_query.fetching import TokenFetcher
from near_query.rpc import JsonRpcClient, RpcError, create_client

# Configure logging
logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logging.getLogger("httpx").setLevel(logging.WARNING)
logging.getLogger("websockets").setLevel(logging.WARNING)
logger = logging.getLogger(__name__)

# Well-known mainnet contracts
FT_CONTRACT = "usn"
FT_HOLDER = "cgarls.near"
NFT_CONTRACT = "x.paras.near"
NFT_TOKEN = "415815:1"
NFT_COLLECTION = "billionairebullsclub.near"
NFT_HOLDER = "olenavorobei.near"


async def _show(label: str, query: Awaitable) -> bool:
    """Print one query result. Expected domain errors still count as a pass."""
    try:
        result = await query
    except DomainError as e:
        print(f"  {label}: {type(e).__name__} ({e.status_code}) {e.message}")
        return e.status_code < 500
    print(f"  {label}: {result}")
    return True


async def run_queries(client: JsonRpcClient, block_height: Optional[int]) -> bool:
    health = await client.health_check()
    if health["status"] != "healthy":
        print(f"❌ Node unhealthy: {health.get('error')}")
        return False
    print(f"✅ Node healthy: chain {health['chain_id']}, head {health['latest_block_height']}")

    if block_height is None:
        block_height = await client.get_final_block_height()
    print(f"Querying at block height {block_height:,}")
    print()

    fetcher = TokenFetcher(client, page_limit_max=settings.nft_page_limit_max)
    results = [
        await _show("FT balance", fetcher.get_ft_balance(FT_CONTRACT, FT_HOLDER, block_height)),
        await _show("FT metadata", fetcher.get_ft_metadata(FT_CONTRACT, block_height)),
        await _show("FT metadata, not an FT contract", fetcher.get_ft_metadata(NFT_CONTRACT, block_height)),
        await _show("NFT metadata", fetcher.get_nft_general_metadata(NFT_CONTRACT, block_height)),
        await _show("NFT count", fetcher.get_nft_count(NFT_COLLECTION, NFT_HOLDER, block_height)),
        await _show("NFT list", fetcher.get_nfts(NFT_COLLECTION, NFT_HOLDER, block_height, 4)),
        await _show("NFT item", fetcher.get_nft_metadata(NFT_CONTRACT, NFT_TOKEN, block_height)),
        await _show("NFT item, missing", fetcher.get_nft_metadata(NFT_CONTRACT, "no_such_token", block_height)),
    ]
    return all(results)


async def main(block_height: Optional[int]) -> bool:
    print("=" * 60)
    print("NEAR Token Query - Smoke Check")
    print("=" * 60)
    print(f"RPC URL: {settings.rpc_url}")
    print()

    try:
        async with create_client(settings.rpc_url, settings.rpc_timeout) as client:
            return await run_queries(client, block_height)
    except RpcError as e:
        print(f"❌ RPC failure: {e}")
        logger.exception("Smoke check failed")
        return False


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description=__doc__.strip().splitlines()[0])
    parser.add_argument("--block-height", type=int, default=None, help="defaults to the latest final block")
    args = parser.parse_args()
    try:
        success = asyncio.run(main(args.block_height))
        sys.exit(0 if success else 1)
    except KeyboardInterrupt:
        print("\nInterrupted by user")
        sys.exit(130)
