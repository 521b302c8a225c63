"""NEAR JSON-RPC access and block-pinned view calls."""

from .client import (
    RpcClient, JsonRpcClient, HttpRpcClient, WebSocketRpcClient, create_client,
    RpcError, RpcTransportError, RpcServerError, FinalBlock,
)
from .view_call import ViewCallRequest, ViewCallResult, build_view_call, execute

__all__ = [
    "RpcClient", "JsonRpcClient", "HttpRpcClient", "WebSocketRpcClient", "create_client",
    "RpcError", "RpcTransportError", "RpcServerError", "FinalBlock",
    "ViewCallRequest", "ViewCallResult", "build_view_call", "execute",
]
