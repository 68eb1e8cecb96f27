"""
Thin JSON-RPC client for the read-only SVM endpoints used by the tools.

Each client is bound to one RPC URL for the life of the process. All methods
are reads and map transport or RPC failures to internal exceptions whose
messages are safe to hand back to callers.
"""

from __future__ import annotations

import itertools
import logging
from typing import Any, Dict, List, Optional

import httpx

from svm_mcp.config import NETWORKS, SvmConfig, default_config

logger = logging.getLogger(__name__)


class SvmRpcError(Exception):
    """Base exception for SVM RPC errors."""

    def __init__(
        self,
        message: str,
        *,
        code: Optional[int] = None,
        status_code: Optional[int] = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.status_code = status_code


class InvalidAddressError(SvmRpcError):
    """Raised when an address is not a valid 32-byte Base58 public key."""


class NodeUnreachableError(SvmRpcError):
    """Raised when the RPC endpoint cannot be reached."""


class RpcResponseError(SvmRpcError):
    """Raised when the endpoint answers with an HTTP or JSON-RPC error."""


class SvmRpcClient:
    """Async client for one SVM JSON-RPC endpoint."""

    def __init__(
        self,
        rpc_url: str,
        *,
        timeout: float = default_config.timeout,
        commitment: Optional[str] = None,
        async_client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self.rpc_url = rpc_url
        self.timeout = timeout
        self.commitment = commitment
        self._client: Optional[httpx.AsyncClient] = async_client
        self._owns_client = async_client is None
        self._ids = itertools.count(1)

    def __repr__(self) -> str:
        return f"SvmRpcClient({self.rpc_url!r})"

    async def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self.timeout)
            self._owns_client = True
        return self._client

    async def aclose(self) -> None:
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None

    def _with_commitment(self, config: Dict[str, Any]) -> Dict[str, Any]:
        if self.commitment and "commitment" not in config:
            config = {**config, "commitment": self.commitment}
        return config

    def _process_response(self, response: httpx.Response, *, context: str) -> Any:
        try:
            data = response.json()
        except ValueError:
            data = None

        if response.status_code >= 400:
            detail = None
            if isinstance(data, dict) and isinstance(data.get("error"), dict):
                detail = data["error"].get("message")
            raise RpcResponseError(
                f"{context}: {response.status_code} {detail or response.reason_phrase}".rstrip(),
                status_code=response.status_code,
            )

        if not isinstance(data, dict):
            raise RpcResponseError(
                f"{context}: unexpected response from node", status_code=response.status_code
            )

        error = data.get("error")
        if isinstance(error, dict):
            code = error.get("code")
            raise RpcResponseError(
                f"{context}: {error.get('message', 'unknown error')}",
                code=code if isinstance(code, int) else None,
                status_code=response.status_code,
            )

        if "result" not in data:
            raise RpcResponseError(
                f"{context}: unexpected response from node", status_code=response.status_code
            )
        return data["result"]

    async def _request(self, method: str, params: List[Any], *, context: str) -> Any:
        client = await self._get_client()
        payload = {"jsonrpc": "2.0", "id": next(self._ids), "method": method, "params": params}
        try:
            response = await client.post(self.rpc_url, json=payload)
        except httpx.RequestError as exc:
            logger.warning("RPC endpoint unreachable for method %s at %s", method, self.rpc_url)
            raise NodeUnreachableError(f"RPC endpoint unreachable: {self.rpc_url}") from exc
        return self._process_response(response, context=context)

    async def get_balance(self, address: str) -> int:
        """Return the balance of ``address`` in lamports."""
        params: List[Any] = [address]
        config = self._with_commitment({})
        if config:
            params.append(config)
        context = f"failed to get balance of account {address}"
        result = await self._request("getBalance", params, context=context)
        value = result.get("value") if isinstance(result, dict) else None
        # bool is an int subclass; JSON keeps them apart.
        if not isinstance(value, int) or isinstance(value, bool):
            raise RpcResponseError(f"{context}: unexpected response from node")
        return value

    async def get_signatures_for_address(
        self,
        address: str,
        *,
        limit: Optional[int] = None,
        before: Optional[str] = None,
        until: Optional[str] = None,
    ) -> List[Dict[str, Any]]:
        """Return confirmed signatures for ``address``, newest first."""
        options: Dict[str, Any] = {}
        if limit is not None:
            options["limit"] = limit
        if before is not None:
            options["before"] = before
        if until is not None:
            options["until"] = until
        result = await self._request(
            "getSignaturesForAddress",
            [address, self._with_commitment(options)],
            context="failed to get signatures for address",
        )
        if not isinstance(result, list) or not all(
            isinstance(entry, dict) and isinstance(entry.get("signature"), str) for entry in result
        ):
            raise RpcResponseError("failed to get signatures for address: unexpected response from node")
        return result

    async def get_transaction(self, signature: str) -> Optional[Dict[str, Any]]:
        """Return the transaction record for ``signature``, or None if unknown."""
        options = self._with_commitment({"encoding": "json", "maxSupportedTransactionVersion": 0})
        return await self._request(
            "getTransaction", [signature, options], context="failed to get transaction"
        )

    async def get_token_accounts_by_owner(self, owner: str, *, program_id: str) -> Dict[str, Any]:
        """Return ``{"context": ..., "value": [...]}`` for token accounts of ``owner``."""
        options = self._with_commitment({"encoding": "base64"})
        return await self._request(
            "getTokenAccountsByOwner",
            [owner, {"programId": program_id}, options],
            context=f"failed to get token accounts owned by account {owner}",
        )


def build_network_clients(config: SvmConfig = default_config) -> Dict[str, SvmRpcClient]:
    """Create one client handle per network from ``config``."""
    return {
        network: SvmRpcClient(
            config.rpc_url_for(network),
            timeout=config.timeout,
            commitment=config.commitment,
        )
        for network in NETWORKS
    }


default_clients = build_network_clients()
