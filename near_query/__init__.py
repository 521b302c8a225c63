"""
Block-pinned queries against NEAR token standard contracts.

Structure:
    near_query/
    ├── types.py          # Domain records, account id validation
    ├── errors.py         # DomainError taxonomy
    ├── wire.py           # Wire schemas and string-encoded integers
    ├── decoders.py       # Payload -> domain record
    ├── rpc/              # JSON-RPC clients, view call builder and executor
    └── fetching/         # Token queries

Usage:
    from near_query.rpc import create_client
    from near_query.fetching import TokenFetcher

    async with create_client("https://archival-rpc.mainnet.near.org") as client:
        balance = await TokenFetcher(client).get_ft_balance("usn", "cgarls.near", 68000000)
"""

from .errors import DomainError, InvalidInput, RPCError, InternalError, ContractNotFound
from .types import FtContractMetadata, NftContractMetadata, NftItemMetadata, NonFungibleToken

__all__ = [
    # Errors
    "DomainError",
    "InvalidInput",
    "RPCError",
    "InternalError",
    "ContractNotFound",
    # Records
    "FtContractMetadata",
    "NftContractMetadata",
    "NftItemMetadata",
    "NonFungibleToken",
]
