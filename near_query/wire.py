"""Wire-level schemas for NEP token standard view methods.

Contracts return JSON. Large integers travel as decimal strings and hashes as
base64 text, so every such field is typed explicitly here instead of being
coerced at the use site.
"""

import base64
import binascii
import re
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, StrictInt, StrictStr

from near_query.errors import InternalError

U128_MAX = 2**128 - 1
U32_MAX = 2**32 - 1
U64_MAX = 2**64 - 1

_DECIMAL_RE = re.compile(r"[0-9]+")


def _parse_unsigned(text: str, max_value: int, type_name: str) -> int:
    if not isinstance(text, str):
        raise ValueError(f"expected a decimal string, got {type(text).__name__}")
    if not _DECIMAL_RE.fullmatch(text):
        raise ValueError(f"invalid digit found in string {text!r}")
    value = int(text)
    if value > max_value:
        raise ValueError(f"number too large to fit in target type {type_name}")
    return value


def parse_u128(text: str) -> int:
    """Parse a string-encoded u128 (NEP-141 ``U128``)."""
    try:
        return _parse_unsigned(text, U128_MAX, "u128")
    except ValueError as e:
        raise InternalError(f"Failed to parse u128 {e}") from e


def parse_u32(text: str) -> int:
    try:
        return _parse_unsigned(text, U32_MAX, "u32")
    except ValueError as e:
        raise InternalError(f"Failed to parse u32 {e}") from e


def u128_to_wire(value: int) -> str:
    if not 0 <= value <= U128_MAX:
        raise ValueError(f"{value} is out of range for u128")
    return str(value)


def u32_to_wire(value: int) -> str:
    if not 0 <= value <= U32_MAX:
        raise ValueError(f"{value} is out of range for u32")
    return str(value)


def base64_to_string(encoded: Optional[str]) -> Optional[str]:
    """Decode an optional base64 field into UTF-8 text."""
    if encoded is None:
        return None
    try:
        return base64.b64decode(encoded, validate=True).decode("utf-8")
    except (binascii.Error, ValueError) as e:
        raise InternalError(f"Failed to decode base64 field: {e}") from e


class WireModel(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")


class FungibleTokenMetadata(WireModel):
    """NEP-148 ``ft_metadata`` result."""
    spec: StrictStr
    name: StrictStr
    symbol: StrictStr
    icon: Optional[StrictStr] = None
    reference: Optional[StrictStr] = None
    reference_hash: Optional[StrictStr] = None
    decimals: StrictInt = Field(..., ge=0, le=255)


class NFTContractMetadata(WireModel):
    """NEP-177 ``nft_metadata`` result."""
    spec: StrictStr
    name: StrictStr
    symbol: StrictStr
    icon: Optional[StrictStr] = None
    base_uri: Optional[StrictStr] = None
    reference: Optional[StrictStr] = None
    reference_hash: Optional[StrictStr] = None


class TokenMetadata(WireModel):
    """NEP-177 per-token metadata. Every field is optional on the wire."""
    title: Optional[StrictStr] = None
    description: Optional[StrictStr] = None
    media: Optional[StrictStr] = None
    media_hash: Optional[StrictStr] = None
    copies: Optional[StrictInt] = Field(default=None, ge=0, le=U64_MAX)
    issued_at: Optional[StrictStr] = None
    expires_at: Optional[StrictStr] = None
    starts_at: Optional[StrictStr] = None
    updated_at: Optional[StrictStr] = None
    extra: Optional[StrictStr] = None
    reference: Optional[StrictStr] = None
    reference_hash: Optional[StrictStr] = None


class Token(WireModel):
    """NEP-171 ``Token`` as returned by ``nft_token`` and the enumeration methods."""
    token_id: StrictStr
    owner_id: StrictStr
    metadata: Optional[TokenMetadata] = None
