from __future__ import annotations

import asyncio
import itertools
import logging
from typing import Any, Dict, List, Optional, Protocol

import requests
from web3.providers.async_base import AsyncBaseProvider
from web3.types import RPCEndpoint, RPCResponse

from ..errors import ProviderRpcError

logger = logging.getLogger(__name__)

# JSON-RPC "internal error"; used when a provider failure carries no code
INTERNAL_ERROR = -32603


class InjectedProvider(Protocol):
    """A wallet provider found in the host environment (EIP-1193 shape).

    ``request`` takes ``{"method": ..., "params": [...]}`` and returns the RPC
    result, raising an exception with an integer ``code`` on failure.
    """

    async def request(self, args: Dict[str, Any]) -> Any: ...


class HttpWalletProvider:
    """EIP-1193 style provider over a JSON-RPC HTTP endpoint.

    Meant for local development nodes that hold unlocked accounts. Requests are
    sent with ``requests`` on a worker thread so the caller's event loop keeps
    running while the node responds.
    """

    # Wallet-only methods mapped to their node equivalents
    METHOD_ALIASES = {"eth_requestAccounts": "eth_accounts"}

    def __init__(self, rpc_url: str, timeout: float = 30.0, session: Optional[requests.Session] = None) -> None:
        if not rpc_url:
            raise ValueError("RPC URL is required")
        self.rpc_url = rpc_url
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update({"Content-Type": "application/json", "User-Agent": "pixelpond"})
        self._ids = itertools.count(1)

    async def request(self, args: Dict[str, Any]) -> Any:
        method = args["method"]
        params = list(args.get("params") or [])
        return await asyncio.to_thread(self._post, self.METHOD_ALIASES.get(method, method), params)

    def _post(self, method: str, params: List[Any]) -> Any:
        payload = {"jsonrpc": "2.0", "id": next(self._ids), "method": method, "params": params}
        logger.debug("RPC -> %s %s", method, params)
        try:
            resp = self.session.post(self.rpc_url, json=payload, timeout=self.timeout)
        except requests.RequestException as exc:
            raise ProviderRpcError(INTERNAL_ERROR, f"RPC transport error: {exc}") from exc
        if resp.status_code >= 400:
            raise ProviderRpcError(INTERNAL_ERROR, f"RPC HTTP error {resp.status_code}: {resp.text}")
        body = resp.json()
        error = body.get("error")
        if error:
            raise ProviderRpcError(int(error.get("code", INTERNAL_ERROR)), str(error.get("message", "")), error.get("data"))
        return body.get("result")


class Eip1193Provider(AsyncBaseProvider):
    """Adapt an injected wallet provider to web3.py's AsyncWeb3.

    Provider errors are returned as JSON-RPC error responses so web3.py raises
    its own exceptions for them.
    """

    def __init__(self, injected: InjectedProvider) -> None:
        super().__init__()
        self.injected = injected
        self._ids = itertools.count(1)

    async def make_request(self, method: RPCEndpoint, params: Any) -> RPCResponse:
        request_id = next(self._ids)
        try:
            result = await self.injected.request({"method": method, "params": list(params or [])})
        except Exception as exc:
            code = getattr(exc, "code", None)
            logger.debug("Injected provider failed %s: %s", method, exc)
            return {
                "jsonrpc": "2.0",
                "id": request_id,
                "error": {"code": code if isinstance(code, int) else INTERNAL_ERROR, "message": str(exc)},
            }
        return {"jsonrpc": "2.0", "id": request_id, "result": result}

    async def is_connected(self, show_traceback: bool = False) -> bool:
        try:
            await self.injected.request({"method": "eth_chainId", "params": []})
        except Exception:
            if show_traceback:
                raise
            return False
        return True
