"""Decoders turning raw view call payloads into domain records.

All functions are pure. Malformed payloads raise InternalError; nothing is
defaulted silently.
"""

import json
from typing import Any, List, Type, TypeVar

from pydantic import BaseModel, ValidationError

from near_query import wire
from near_query.errors import InternalError, InvalidInput
from near_query.types import FtContractMetadata, NftContractMetadata, NonFungibleToken

M = TypeVar("M", bound=BaseModel)


def _load_json(payload: bytes) -> Any:
    try:
        return json.loads(payload)
    except (ValueError, RecursionError) as e:
        raise InternalError(f"Failed to parse JSON payload: {e}") from e


def _validate(model: Type[M], data: Any) -> M:
    try:
        return model.model_validate(data)
    except ValidationError as e:
        raise InternalError(f"Failed to parse {model.__name__}: {e}") from e
    except RecursionError as e:
        raise InternalError(f"Failed to parse {model.__name__}: payload nested too deeply") from e


def decode_ft_balance(payload: bytes) -> int:
    """NEP-141 ``ft_balance_of``: a JSON string with a decimal u128."""
    return wire.parse_u128(_load_json(payload))


def decode_ft_metadata(payload: bytes) -> FtContractMetadata:
    return FtContractMetadata.from_wire(_validate(wire.FungibleTokenMetadata, _load_json(payload)))


def decode_nft_general_metadata(payload: bytes) -> NftContractMetadata:
    return NftContractMetadata.from_wire(_validate(wire.NFTContractMetadata, _load_json(payload)))


def decode_nft_supply(payload: bytes) -> int:
    """NEP-181 ``nft_supply_for_owner``: a JSON string with a decimal u32."""
    return wire.parse_u32(_load_json(payload))


def _decode_token(data: Any) -> NonFungibleToken:
    return NonFungibleToken.from_wire(_validate(wire.Token, data))


def decode_nft_list(payload: bytes) -> List[NonFungibleToken]:
    """
    NEP-181 enumeration result: a JSON array of tokens.

    Items are converted one by one, in order. The first failing item fails the
    whole call.
    """
    data = _load_json(payload)
    if not isinstance(data, list):
        raise InternalError(f"Expected a JSON array of tokens, got {type(data).__name__}")

    tokens = []
    for index, item in enumerate(data):
        try:
            tokens.append(_decode_token(item))
        except InternalError as e:
            raise InternalError(f"Token #{index}: {e.message}") from e
    return tokens


def decode_single_nft(payload: bytes, contract_id: str, token_id: str, block_height: int) -> NonFungibleToken:
    """NEP-171 ``nft_token``: a token object, or ``null`` when there is no such token."""
    data = _load_json(payload)
    if data is None:
        raise InvalidInput(
            f"Token '{token_id}' does not exist in contract '{contract_id}', block_height {block_height}"
        )
    return _decode_token(data)
