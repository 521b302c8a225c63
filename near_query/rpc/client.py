"""JSON-RPC clients for NEAR nodes (HTTP and WebSocket)."""

import asyncio
import itertools
import json
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, Optional, Protocol

import httpx
from websockets.asyncio.client import ClientConnection, connect
from websockets.exceptions import ConnectionClosed, WebSocketException

logger = logging.getLogger(__name__)

HANDLER_ERROR = "HANDLER_ERROR"
CONTRACT_EXECUTION_ERROR = "CONTRACT_EXECUTION_ERROR"


class RpcError(Exception):
    """Base exception for JSON-RPC failures."""


class RpcTransportError(RpcError):
    """The request never produced a JSON-RPC response (network, timeout, bad body)."""


class RpcServerError(RpcError):
    """Structured error returned by the node.

    ``name`` is the error class (``HANDLER_ERROR``, ``REQUEST_VALIDATION_ERROR``,
    ``INTERNAL_ERROR``), ``cause_name`` and ``info`` describe the handler error.
    """

    def __init__(
        self,
        message: str,
        name: Optional[str] = None,
        cause_name: Optional[str] = None,
        info: Optional[Dict[str, Any]] = None,
        code: Optional[int] = None,
        data: Any = None,
    ):
        super().__init__(message)
        self.message = message
        self.name = name
        self.cause_name = cause_name
        self.info = info or {}
        self.code = code
        self.data = data

    @classmethod
    def from_response(cls, error: Any) -> "RpcServerError":
        if not isinstance(error, dict):
            return cls(f"RPC error: {error}")
        cause = error.get("cause") if isinstance(error.get("cause"), dict) else {}
        info = cause.get("info") if isinstance(cause.get("info"), dict) else {}
        data = error.get("data")
        message = error.get("message", "Unknown RPC error")
        if data is not None:
            message = f"{message}: {data}"
        return cls(
            message,
            name=error.get("name"),
            cause_name=cause.get("name"),
            info=info,
            code=error.get("code"),
            data=data,
        )

    @property
    def vm_error(self) -> Optional[str]:
        """Execution diagnostic text, present only for contract execution errors."""
        if self.name == HANDLER_ERROR and self.cause_name == CONTRACT_EXECUTION_ERROR:
            vm_error = self.info.get("vm_error")
            return vm_error if isinstance(vm_error, str) else None
        return None


@dataclass(frozen=True)
class FinalBlock:
    height: int
    block_hash: str


class RpcClient(Protocol):
    """Anything that can run a NEAR ``query`` request."""

    async def query(self, params: Dict[str, Any]) -> Dict[str, Any]:
        """Run ``query`` and return its ``result`` object, or raise RpcError."""
        ...


class JsonRpcClient(ABC):
    """Common JSON-RPC envelope handling. Subclasses provide ``_transmit``."""

    def __init__(self, url: str, timeout: float = 30.0):
        self.url = url
        self.timeout = timeout
        self._ids = itertools.count(1)

    def _next_request_id(self) -> int:
        return next(self._ids)

    @abstractmethod
    async def _transmit(self, request: Dict[str, Any]) -> Dict[str, Any]:
        """Deliver one request envelope and return the decoded response envelope."""
        ...

    async def close(self):
        pass

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    async def _send_request(self, method: str, params: Any) -> Any:
        """Send JSON-RPC request and unwrap its result."""
        request = {"jsonrpc": "2.0", "id": self._next_request_id(), "method": method, "params": params}
        logger.debug(f"RPC {method} #{request['id']} -> {self.url}")
        response = await self._transmit(request)

        if not isinstance(response, dict):
            raise RpcTransportError(f"Malformed JSON-RPC response: {response!r}")
        if "error" in response:
            raise RpcServerError.from_response(response["error"])
        if "result" in response:
            return response["result"]
        raise RpcTransportError(f"JSON-RPC response has neither result nor error: {response!r}")

    async def query(self, params: Dict[str, Any]) -> Dict[str, Any]:
        result = await self._send_request("query", params)
        # Older nodes report contract failures inside a successful response.
        if isinstance(result, dict) and isinstance(result.get("error"), str):
            raise RpcServerError(
                result["error"],
                name=HANDLER_ERROR,
                cause_name=CONTRACT_EXECUTION_ERROR,
                info={
                    "vm_error": result["error"],
                    "block_height": result.get("block_height"),
                    "block_hash": result.get("block_hash"),
                },
            )
        return result

    async def get_final_block(self) -> FinalBlock:
        """Query the latest final block."""
        result = await self._send_request("block", {"finality": "final"})
        try:
            header = result["header"]
            return FinalBlock(height=int(header["height"]), block_hash=header["hash"])
        except (KeyError, TypeError, ValueError) as e:
            raise RpcTransportError(f"Unexpected block response: {e}") from e

    async def get_final_block_height(self) -> int:
        return (await self.get_final_block()).height

    async def health_check(self) -> Dict[str, Any]:
        try:
            status = await self._send_request("status", [])
            sync_info = status.get("sync_info", {}) if isinstance(status, dict) else {}
            return {
                "status": "healthy",
                "connected": True,
                "chain_id": status.get("chain_id") if isinstance(status, dict) else None,
                "latest_block_height": sync_info.get("latest_block_height"),
                "syncing": sync_info.get("syncing"),
            }
        except RpcError as e:
            return {"status": "unhealthy", "connected": False, "error": str(e)}


class HttpRpcClient(JsonRpcClient):
    """JSON-RPC over HTTP POST. One pooled httpx client, shared by all calls."""

    def __init__(self, url: str, timeout: float = 30.0, transport: Optional[httpx.AsyncBaseTransport] = None):
        super().__init__(url, timeout)
        self._http = httpx.AsyncClient(timeout=timeout, transport=transport)

    async def _transmit(self, request: Dict[str, Any]) -> Dict[str, Any]:
        try:
            response = await self._http.post(self.url, json=request)
        except httpx.TimeoutException as e:
            raise RpcTransportError(f"Request timed out after {self.timeout}s: {request['method']}") from e
        except httpx.HTTPError as e:
            raise RpcTransportError(f"Request failed: {e}") from e

        # nearcore answers handler errors with non-2xx codes and a JSON-RPC body
        try:
            return response.json()
        except (ValueError, RecursionError) as e:
            raise RpcTransportError(
                f"HTTP {response.status_code} from {self.url} is not JSON: {response.text[:200]!r}"
            ) from e

    async def close(self):
        await self._http.aclose()


class WebSocketRpcClient(JsonRpcClient):
    """JSON-RPC over a single WebSocket, requests matched to responses by id.

    nearcore itself does not serve WebSocket; this targets gateways that proxy
    JSON-RPC over one.
    """

    def __init__(self, url: str, timeout: float = 30.0, max_size: int = 16 * 1024 * 1024):
        super().__init__(url, timeout)
        self.max_size = max_size
        self._ws: Optional[ClientConnection] = None
        self._reader: Optional[asyncio.Task] = None
        self._pending: Dict[int, asyncio.Future] = {}

    async def connect(self) -> bool:
        """Connect to the node. Returns True on success."""
        try:
            self._ws = await connect(self.url, max_size=self.max_size)
        except (OSError, WebSocketException) as e:
            logger.error(f"Failed to connect to {self.url}: {e}")
            return False
        self._reader = asyncio.create_task(self._read_loop())
        logger.info(f"Connected to {self.url}")
        return True

    @property
    def is_connected(self) -> bool:
        return self._ws is not None

    async def close(self):
        if self._ws:
            await self._ws.close()
            self._ws = None
            logger.info(f"Disconnected from {self.url}")
        if self._reader:
            self._reader.cancel()
            try:
                await self._reader
            except asyncio.CancelledError:
                pass
            self._reader = None
        self._fail_pending(RpcTransportError("Connection closed"))

    async def __aenter__(self):
        if not await self.connect():
            raise RpcTransportError(f"Failed to connect to {self.url}")
        return self

    async def _read_loop(self):
        error = RpcTransportError("Connection closed by the node")
        try:
            async for message in self._ws:
                try:
                    response = json.loads(message)
                except (ValueError, RecursionError):
                    logger.warning(f"Dropping non-JSON message from {self.url}")
                    continue
                request_id = response.get("id") if isinstance(response, dict) else None
                # ids we issue are ints; anything else cannot match a pending request
                if isinstance(request_id, bool) or not isinstance(request_id, (int, str)):
                    request_id = None
                future = self._pending.pop(request_id, None) if request_id is not None else None
                if future is None:
                    logger.warning(f"Dropping unsolicited message from {self.url}")
                elif not future.done():
                    future.set_result(response)
        except ConnectionClosed as e:
            error = RpcTransportError(f"Connection closed by the node: {e}")
        except Exception as e:
            logger.exception(f"WebSocket reader for {self.url} failed")
            error = RpcTransportError(f"WebSocket reader failed: {e}")
        finally:
            self._fail_pending(error)

    def _fail_pending(self, error: RpcTransportError):
        pending, self._pending = self._pending, {}
        for future in pending.values():
            if not future.done():
                future.set_exception(error)

    async def _transmit(self, request: Dict[str, Any]) -> Dict[str, Any]:
        if not self._ws:
            raise RpcTransportError(f"Not connected to {self.url}")

        future = asyncio.get_running_loop().create_future()
        self._pending[request["id"]] = future
        try:
            await self._ws.send(json.dumps(request))
            return await asyncio.wait_for(future, timeout=self.timeout)
        except asyncio.TimeoutError as e:
            raise RpcTransportError(f"Request timed out after {self.timeout}s: {request['method']}") from e
        except (ConnectionClosed, OSError) as e:
            raise RpcTransportError(f"Request failed: {e}") from e
        finally:
            self._pending.pop(request["id"], None)


def create_client(url: str, timeout: float = 30.0) -> JsonRpcClient:
    """Pick a client for the URL scheme. WebSocket clients still need ``connect()``."""
    if url.startswith(("ws://", "wss://")):
        return WebSocketRpcClient(url, timeout)
    return HttpRpcClient(url, timeout)
