"""Token standard queries (NEP-141, NEP-148, NEP-171, NEP-177, NEP-181)."""

import logging
from typing import List

from near_query import decoders
from near_query.errors import InvalidInput
from near_query.rpc import RpcClient, build_view_call, execute
from near_query.types import FtContractMetadata, NftContractMetadata, NonFungibleToken, validate_account_id

logger = logging.getLogger(__name__)

DEFAULT_PAGE_LIMIT_MAX = 100


class TokenFetcher:
    """Runs block-pinned token queries using any RpcClient implementation.

    Holds no per-call state, so one instance can serve concurrent requests.
    """

    def __init__(self, client: RpcClient, page_limit_max: int = DEFAULT_PAGE_LIMIT_MAX):
        self.client = client
        self.page_limit_max = page_limit_max

    async def _call(self, contract_id: str, method_name: str, args: dict, block_height: int) -> bytes:
        request = build_view_call(block_height, validate_account_id(contract_id), method_name, args)
        return (await execute(self.client, request)).result

    async def get_ft_balance(self, contract_id: str, account_id: str, block_height: int) -> int:
        payload = await self._call(
            contract_id, "ft_balance_of", {"account_id": validate_account_id(account_id)}, block_height
        )
        return decoders.decode_ft_balance(payload)

    async def get_ft_metadata(self, contract_id: str, block_height: int) -> FtContractMetadata:
        payload = await self._call(contract_id, "ft_metadata", {}, block_height)
        return decoders.decode_ft_metadata(payload)

    async def get_nft_general_metadata(self, contract_id: str, block_height: int) -> NftContractMetadata:
        payload = await self._call(contract_id, "nft_metadata", {}, block_height)
        return decoders.decode_nft_general_metadata(payload)

    async def get_nft_count(self, contract_id: str, account_id: str, block_height: int) -> int:
        payload = await self._call(
            contract_id, "nft_supply_for_owner", {"account_id": validate_account_id(account_id)}, block_height
        )
        return decoders.decode_nft_supply(payload)

    async def get_nfts(
        self, contract_id: str, account_id: str, block_height: int, limit: int
    ) -> List[NonFungibleToken]:
        """
        First page of tokens owned by ``account_id``.

        Only the first page is reachable: iteration order is defined by each
        contract, so ``from_index`` is always "0".
        """
        if isinstance(limit, bool) or not isinstance(limit, int) or not 1 <= limit <= self.page_limit_max:
            raise InvalidInput(f"limit must be between 1 and {self.page_limit_max}, got {limit!r}")

        args = {"account_id": validate_account_id(account_id), "from_index": "0", "limit": limit}
        tokens = decoders.decode_nft_list(await self._call(contract_id, "nft_tokens_for_owner", args, block_height))
        if len(tokens) > limit:
            logger.debug(f"{contract_id} returned {len(tokens)} tokens for limit {limit}, truncating")
        return tokens[:limit]

    async def get_nft_metadata(self, contract_id: str, token_id: str, block_height: int) -> NonFungibleToken:
        payload = await self._call(contract_id, "nft_token", {"token_id": token_id}, block_height)
        return decoders.decode_single_nft(payload, contract_id, token_id, block_height)
