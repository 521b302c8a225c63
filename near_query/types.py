"""
Domain records returned by token queries.

Records are frozen and built only from decoded contract output. Conversion
from wire schemas lives here so that validation errors are raised by the
domain layer.
"""

import re
from dataclasses import dataclass
from typing import Optional

from near_query import wire
from near_query.errors import InvalidInput
from near_query.wire import base64_to_string

MIN_ACCOUNT_ID_LEN = 2
MAX_ACCOUNT_ID_LEN = 64
_ACCOUNT_ID_RE = re.compile(r"^(([a-z\d]+[\-_])*[a-z\d]+\.)*([a-z\d]+[\-_])*[a-z\d]+$")


def is_valid_account_id(account_id: str) -> bool:
    return (
        isinstance(account_id, str)
        and MIN_ACCOUNT_ID_LEN <= len(account_id) <= MAX_ACCOUNT_ID_LEN
        and _ACCOUNT_ID_RE.match(account_id) is not None
    )


def validate_account_id(account_id: str) -> str:
    """Return the account id unchanged, or raise InvalidInput."""
    if not is_valid_account_id(account_id):
        raise InvalidInput(f"Invalid account_id: {account_id!r}")
    return account_id


@dataclass(frozen=True)
class FtContractMetadata:
    spec: str
    name: str
    symbol: str
    icon: Optional[str]
    decimals: int
    reference: Optional[str]
    reference_hash: Optional[str]

    @classmethod
    def from_wire(cls, metadata: wire.FungibleTokenMetadata) -> "FtContractMetadata":
        return cls(
            spec=metadata.spec,
            name=metadata.name,
            symbol=metadata.symbol,
            icon=metadata.icon,
            decimals=metadata.decimals,
            reference=metadata.reference,
            reference_hash=base64_to_string(metadata.reference_hash),
        )


@dataclass(frozen=True)
class NftContractMetadata:
    spec: str
    name: str
    symbol: str
    icon: Optional[str]
    base_uri: Optional[str]
    reference: Optional[str]
    reference_hash: Optional[str]

    @classmethod
    def from_wire(cls, metadata: wire.NFTContractMetadata) -> "NftContractMetadata":
        return cls(
            spec=metadata.spec,
            name=metadata.name,
            symbol=metadata.symbol,
            icon=metadata.icon,
            base_uri=metadata.base_uri,
            reference=metadata.reference,
            reference_hash=base64_to_string(metadata.reference_hash),
        )


@dataclass(frozen=True)
class NftItemMetadata:
    """Metadata of a single token. Hash fields are decoded to text."""
    title: Optional[str] = None
    description: Optional[str] = None
    media: Optional[str] = None
    media_hash: Optional[str] = None
    copies: Optional[int] = None
    issued_at: Optional[str] = None
    expires_at: Optional[str] = None
    starts_at: Optional[str] = None
    updated_at: Optional[str] = None
    extra: Optional[str] = None
    reference: Optional[str] = None
    reference_hash: Optional[str] = None

    @classmethod
    def from_wire(cls, metadata: wire.TokenMetadata) -> "NftItemMetadata":
        return cls(
            title=metadata.title,
            description=metadata.description,
            media=metadata.media,
            media_hash=base64_to_string(metadata.media_hash),
            copies=metadata.copies,
            issued_at=metadata.issued_at,
            expires_at=metadata.expires_at,
            starts_at=metadata.starts_at,
            updated_at=metadata.updated_at,
            extra=metadata.extra,
            reference=metadata.reference,
            reference_hash=base64_to_string(metadata.reference_hash),
        )


@dataclass(frozen=True)
class NonFungibleToken:
    token_id: str
    owner_account_id: str
    metadata: Optional[NftItemMetadata] = None

    @classmethod
    def from_wire(cls, token: wire.Token) -> "NonFungibleToken":
        return cls(
            token_id=token.token_id,
            owner_account_id=token.owner_id,
            metadata=NftItemMetadata.from_wire(token.metadata) if token.metadata is not None else None,
        )

    def __str__(self) -> str:
        title = self.metadata.title if self.metadata and self.metadata.title else "untitled"
        return f"{self.token_id} ({title}) owned by {self.owner_account_id}"
