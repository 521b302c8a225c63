"""Pytest configuration and shared fixtures for all tests."""

import base64
import json
import sys
from pathlib import Path
from typing import Any, Dict, List

import pytest

# Project root on PYTHONPATH so `near_query` and `config` import without install
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from near_query.rpc import RpcServerError  # noqa: E402

BLOCK_HEIGHT = 68000000


def call_result(value: Any, block_height: int = BLOCK_HEIGHT) -> Dict[str, Any]:
    """A successful ``call_function`` result whose payload is ``value`` as JSON."""
    return {
        "result": list(json.dumps(value).encode("utf-8")),
        "logs": [],
        "block_height": block_height,
        "block_hash": "GpM3Dv2cHRChyhZgKBmQG5GeBXm6LmhvVZ3u4gqDZKgB",
    }


def contract_execution_error(vm_error: str) -> RpcServerError:
    return RpcServerError.from_response({
        "name": "HANDLER_ERROR",
        "cause": {
            "name": "CONTRACT_EXECUTION_ERROR",
            "info": {"vm_error": vm_error, "block_height": BLOCK_HEIGHT, "block_hash": "abc"},
        },
        "code": -32000,
        "message": "Server error",
        "data": vm_error,
    })


def token_record(token_id: str, owner_id: str = "olenavorobei.near", title: str = "Bull") -> Dict[str, Any]:
    return {
        "token_id": token_id,
        "owner_id": owner_id,
        "metadata": {
            "title": f"{title} #{token_id}",
            "description": None,
            "media": f"{token_id}.png",
            "media_hash": None,
            "copies": 1,
            "issued_at": None,
            "expires_at": None,
            "starts_at": None,
            "updated_at": None,
            "extra": None,
            "reference": f"{token_id}.json",
            "reference_hash": None,
        },
        "approved_account_ids": {},
    }


class FakeRpcClient:
    """RpcClient double returning scripted responses and recording params."""

    def __init__(self, *responses: Any):
        self.responses: List[Any] = list(responses)
        self.calls: List[Dict[str, Any]] = []

    async def query(self, params: Dict[str, Any]) -> Dict[str, Any]:
        self.calls.append(params)
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response

    @property
    def last_args(self) -> Dict[str, Any]:
        return json.loads(base64.b64decode(self.calls[-1]["args_base64"]))


@pytest.fixture
def block_height() -> int:
    return BLOCK_HEIGHT
