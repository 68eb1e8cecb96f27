"""JSON-RPC client wrappers for SVM networks."""

from .client import (
    InvalidAddressError,
    NodeUnreachableError,
    RpcResponseError,
    SvmRpcClient,
    SvmRpcError,
    build_network_clients,
    default_clients,
)

__all__ = [
    "SvmRpcClient",
    "SvmRpcError",
    "InvalidAddressError",
    "NodeUnreachableError",
    "RpcResponseError",
    "build_network_clients",
    "default_clients",
]
