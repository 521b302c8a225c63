"""Tests for TokenFetcher queries."""

import pytest

from conftest import FakeRpcClient, call_result, contract_execution_error, token_record
from near_query.errors import ContractNotFound, InvalidInput
from near_query.fetching import TokenFetcher


@pytest.mark.asyncio
async def test_get_ft_balance(block_height: int) -> None:
    client = FakeRpcClient(call_result("17201878399999996928"))

    balance = await TokenFetcher(client).get_ft_balance("usn", "cgarls.near", block_height)

    assert balance == 17201878399999996928
    assert client.calls[0]["method_name"] == "ft_balance_of"
    assert client.calls[0]["account_id"] == "usn"
    assert client.last_args == {"account_id": "cgarls.near"}


@pytest.mark.asyncio
async def test_get_ft_metadata_no_contract_deployed(block_height: int) -> None:
    client = FakeRpcClient(contract_execution_error(
        'wasm execution failed with error: CompilationError(CodeDoesNotExist { account_id: "olga.near" })'
    ))

    with pytest.raises(ContractNotFound) as exc_info:
        await TokenFetcher(client).get_ft_metadata("olga.near", block_height)

    assert exc_info.value.contract_id == "olga.near"
    assert client.last_args == {}


@pytest.mark.asyncio
async def test_get_nft_general_metadata_other_contract_deployed(block_height: int) -> None:
    client = FakeRpcClient(contract_execution_error("MethodResolveError(MethodNotFound)"))

    with pytest.raises(ContractNotFound):
        await TokenFetcher(client).get_nft_general_metadata("usn", block_height)


@pytest.mark.asyncio
async def test_get_nft_count(block_height: int) -> None:
    client = FakeRpcClient(call_result("4"))

    assert await TokenFetcher(client).get_nft_count("billionairebullsclub.near", "olenavorobei.near", block_height) == 4
    assert client.calls[0]["method_name"] == "nft_supply_for_owner"


@pytest.mark.asyncio
async def test_get_nfts_requests_first_page(block_height: int) -> None:
    client = FakeRpcClient(call_result([token_record(str(i)) for i in range(4)]))

    tokens = await TokenFetcher(client).get_nfts("billionairebullsclub.near", "olenavorobei.near", block_height, 4)

    assert [t.token_id for t in tokens] == ["0", "1", "2", "3"]
    assert client.calls[0]["method_name"] == "nft_tokens_for_owner"
    assert client.last_args == {"account_id": "olenavorobei.near", "from_index": "0", "limit": 4}


@pytest.mark.asyncio
async def test_get_nfts_truncates_to_limit(block_height: int) -> None:
    client = FakeRpcClient(call_result([token_record(str(i)) for i in range(5)]))

    tokens = await TokenFetcher(client).get_nfts("billionairebullsclub.near", "olenavorobei.near", block_height, 2)

    assert len(tokens) == 2


@pytest.mark.asyncio
@pytest.mark.parametrize("limit", [0, -1, 101, "4", True])
async def test_get_nfts_rejects_bad_limit(limit, block_height: int) -> None:
    client = FakeRpcClient()

    with pytest.raises(InvalidInput):
        await TokenFetcher(client).get_nfts("billionairebullsclub.near", "olenavorobei.near", block_height, limit)
    assert client.calls == []


@pytest.mark.asyncio
async def test_get_nft_metadata(block_height: int) -> None:
    client = FakeRpcClient(call_result(token_record("415815:1", owner_id="some.near")))

    token = await TokenFetcher(client).get_nft_metadata("x.paras.near", "415815:1", block_height)

    assert token.owner_account_id == "some.near"
    assert client.last_args == {"token_id": "415815:1"}


@pytest.mark.asyncio
async def test_get_nft_metadata_token_does_not_exist(block_height: int) -> None:
    client = FakeRpcClient(call_result(None))

    with pytest.raises(InvalidInput) as exc_info:
        await TokenFetcher(client).get_nft_metadata("x.paras.near", "no_such_token", block_height)

    assert "no_such_token" in exc_info.value.message
    assert "x.paras.near" in exc_info.value.message
    assert exc_info.value.status_code == 400


@pytest.mark.asyncio
@pytest.mark.parametrize("contract_id,account_id", [
    ("USN", "cgarls.near"),
    ("usn", "a"),
    ("usn", "bad..near"),
    ("usn", "x" * 65),
])
async def test_invalid_account_ids_never_reach_the_node(contract_id: str, account_id: str, block_height: int) -> None:
    client = FakeRpcClient()

    with pytest.raises(InvalidInput):
        await TokenFetcher(client).get_ft_balance(contract_id, account_id, block_height)
    assert client.calls == []
