"""Block-pinned view calls: request building, execution and failure classification."""

import base64
import json
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from near_query.errors import ContractNotFound, InvalidInput, RPCError
from .client import RpcClient, RpcError, RpcServerError

logger = logging.getLogger(__name__)

# vm_error substrings meaning the contract cannot answer: no code deployed, or no such method
CONTRACT_NOT_FOUND_MARKERS = ("CodeDoesNotExist", "MethodNotFound")


@dataclass(frozen=True)
class ViewCallRequest:
    block_height: int
    contract_id: str
    method_name: str
    args: bytes

    def to_params(self) -> Dict[str, Any]:
        """Render as params of the JSON-RPC ``query`` method."""
        return {
            "request_type": "call_function",
            "block_id": self.block_height,
            "account_id": self.contract_id,
            "method_name": self.method_name,
            "args_base64": base64.b64encode(self.args).decode("ascii"),
        }


@dataclass(frozen=True)
class ViewCallResult:
    result: bytes
    logs: List[str] = field(default_factory=list)
    block_height: Optional[int] = None
    block_hash: Optional[str] = None


def serialize_args(args: Any) -> bytes:
    """Deterministic JSON encoding: sorted keys, no whitespace."""
    return json.dumps(args, sort_keys=True, separators=(",", ":"), ensure_ascii=False).encode("utf-8")


def build_view_call(block_height: int, contract_id: str, method_name: str, args: Any) -> ViewCallRequest:
    if isinstance(block_height, bool) or not isinstance(block_height, int) or block_height < 0:
        raise InvalidInput(f"block_height must be a non-negative integer, got {block_height!r}")
    return ViewCallRequest(
        block_height=block_height,
        contract_id=contract_id,
        method_name=method_name,
        args=serialize_args(args),
    )


def _parse_call_result(response: Any) -> Optional[ViewCallResult]:
    if not isinstance(response, dict) or not isinstance(response.get("result"), list):
        return None
    try:
        payload = bytes(response["result"])
    except (TypeError, ValueError):
        return None

    logs = response.get("logs")
    if logs is None:
        logs = []
    block_height = response.get("block_height")
    block_hash = response.get("block_hash")
    if not isinstance(logs, list) or not all(isinstance(line, str) for line in logs):
        return None
    if block_height is not None and (isinstance(block_height, bool) or not isinstance(block_height, int)):
        return None
    if block_hash is not None and not isinstance(block_hash, str):
        return None
    return ViewCallResult(result=payload, logs=logs, block_height=block_height, block_hash=block_hash)


def is_contract_not_found(error: RpcServerError) -> bool:
    vm_error = error.vm_error
    return vm_error is not None and any(marker in vm_error for marker in CONTRACT_NOT_FOUND_MARKERS)


async def execute(client: RpcClient, request: ViewCallRequest) -> ViewCallResult:
    """Run a view call. Raises ContractNotFound or RPCError on failure."""
    logger.debug(f"View call {request.contract_id}.{request.method_name} at block {request.block_height}")
    try:
        response = await client.query(request.to_params())
    except RpcServerError as e:
        if is_contract_not_found(e):
            logger.info(
                f"{request.contract_id} cannot answer {request.method_name} "
                f"at block {request.block_height}: {e.vm_error}"
            )
            raise ContractNotFound(request.contract_id, request.block_height) from e
        logger.warning(f"View call {request.contract_id}.{request.method_name} failed: {e}")
        raise RPCError(str(e)) from e
    except RpcError as e:
        logger.warning(f"View call {request.contract_id}.{request.method_name} failed: {e}")
        raise RPCError(str(e)) from e

    result = _parse_call_result(response)
    if result is None:
        raise RPCError("Unexpected type of the response after CallFunction request")
    return result
