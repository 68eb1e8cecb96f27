"""
Configuration helpers for the SVM MCP server.

This module centralizes RPC endpoint selection, default timeouts, transport
choice and logging options. Every value can be overridden from the
environment; nothing here requires secrets.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

# Public SOON RPC endpoints
DEFAULT_TESTNET_RPC_URL = os.getenv("SVM_MCP_TESTNET_RPC_URL", "https://rpc.testnet.soo.network/rpc")
DEFAULT_MAINNET_RPC_URL = os.getenv("SVM_MCP_MAINNET_RPC_URL", "https://rpc.mainnet.soo.network/rpc")

# SPL Token program; token-account lookups are always scoped to it.
TOKEN_PROGRAM_ID = "TokenkegQfeZyiNwAJbNbGKPFXCWuBvf9Ss623VQ5DA"

NETWORKS = ("testnet", "mainnet")
TRANSPORTS = ("stdio", "http")


def _load_timeout() -> float:
    raw_timeout = os.getenv("SVM_MCP_HTTP_TIMEOUT")
    if raw_timeout:
        try:
            return float(raw_timeout)
        except ValueError:
            return 30.0
    return 30.0


def _load_port() -> int:
    raw_port = os.getenv("SVM_MCP_HTTP_PORT")
    if raw_port:
        try:
            return int(raw_port)
        except ValueError:
            return 8000
    return 8000


def _load_transport() -> str:
    transport = os.getenv("SVM_MCP_TRANSPORT", "stdio").strip().lower()
    if transport not in TRANSPORTS:
        return "stdio"
    return transport


DEFAULT_TIMEOUT = _load_timeout()
DEFAULT_COMMITMENT: Optional[str] = os.getenv("SVM_MCP_COMMITMENT") or None
DEFAULT_TRANSPORT = _load_transport()
DEFAULT_HTTP_HOST = os.getenv("SVM_MCP_HTTP_HOST", "127.0.0.1")
DEFAULT_HTTP_PORT = _load_port()
LOG_LEVEL = os.getenv("SVM_MCP_LOG_LEVEL", "INFO")
LOG_FORMAT = os.getenv("SVM_MCP_LOG_FORMAT", "plain")  # json or plain

SERVER_NAME = "svm-mcp"
SERVER_VERSION = "0.0.1"


@dataclass(slots=True)
class SvmConfig:
    """Runtime configuration for RPC access and the server surfaces."""

    testnet_rpc_url: str = DEFAULT_TESTNET_RPC_URL
    mainnet_rpc_url: str = DEFAULT_MAINNET_RPC_URL
    timeout: float = DEFAULT_TIMEOUT
    commitment: Optional[str] = DEFAULT_COMMITMENT
    transport: str = DEFAULT_TRANSPORT
    http_host: str = DEFAULT_HTTP_HOST
    http_port: int = DEFAULT_HTTP_PORT
    log_level: str = LOG_LEVEL
    log_format: str = LOG_FORMAT

    def rpc_url_for(self, network: str) -> str:
        """Return the endpoint URL bound to ``network``."""
        if network == "testnet":
            return self.testnet_rpc_url
        if network == "mainnet":
            return self.mainnet_rpc_url
        raise ValueError(f"Unknown network: {network}")


default_config = SvmConfig()
