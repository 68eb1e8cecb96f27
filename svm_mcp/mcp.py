"""
Tool registry and dispatcher shared by the stdio and HTTP surfaces.

Six tools are generated from three behaviours crossed with two networks; each
tool closes over the client handle of its network. The dispatcher validates
arguments against the tool's input schema, awaits the handler and returns an
MCP content envelope.
"""

from __future__ import annotations

import functools
import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, List, Mapping, Optional

from svm_mcp.config import NETWORKS
from svm_mcp.metrics import default_metrics
from svm_mcp.svm_rpc import SvmRpcClient, default_clients
from svm_mcp.tools import get_account_tokens, get_balance, get_last_transaction
from svm_mcp.tools.content import error_message, error_result

logger = logging.getLogger(__name__)

ToolCallable = Callable[..., Awaitable[Dict[str, Any]]]

NETWORK_LABELS = {"testnet": "Soon testnet", "mainnet": "Soon mainnet"}


@dataclass(frozen=True, slots=True)
class ToolKind:
    suffix: str
    description: str
    address_description: str
    handler: ToolCallable


TOOL_KINDS = (
    ToolKind(
        suffix="balance",
        description="Get the balance of a address on the {label}",
        address_description="The SOON address to get the balance of",
        handler=get_balance,
    ),
    ToolKind(
        suffix="last-transaction",
        description="Get the last transaction of an address on the {label}",
        address_description="The SOON address to get the last transaction for",
        handler=get_last_transaction,
    ),
    ToolKind(
        suffix="account-tokens",
        description="Get the tokens of a address on the {label}",
        address_description="The SOON address to get the tokens of",
        handler=get_account_tokens,
    ),
)


@dataclass(slots=True)
class ToolDefinition:
    name: str
    description: str
    params: Dict[str, Any]
    input_schema: Dict[str, Any]
    callable: ToolCallable
    network: str
    kind: str


class InvalidArgumentsError(ValueError):
    """Raised when tool arguments do not satisfy the input schema."""


def tool_name(network: str, kind: str) -> str:
    return f"get-soon-{network}-{kind}"


def _address_schema(description: str) -> Dict[str, Any]:
    return {
        "type": "object",
        "properties": {
            "address": {
                "type": "string",
                "description": description,
            }
        },
        "required": ["address"],
        "additionalProperties": False,
    }


def _build_tool(network: str, kind: ToolKind, client: SvmRpcClient) -> ToolDefinition:
    return ToolDefinition(
        name=tool_name(network, kind.suffix),
        description=kind.description.format(label=NETWORK_LABELS[network]),
        params={"address": "string (required)"},
        input_schema=_address_schema(kind.address_description),
        callable=functools.partial(kind.handler, client=client),
        network=network,
        kind=kind.suffix,
    )


def build_registry(clients: Mapping[str, SvmRpcClient]) -> Dict[str, ToolDefinition]:
    """Generate every network/behaviour binding against ``clients``."""
    registry: Dict[str, ToolDefinition] = {}
    for network in NETWORKS:
        client = clients[network]
        for kind in TOOL_KINDS:
            tool = _build_tool(network, kind, client)
            registry[tool.name] = tool
    return registry


TOOL_REGISTRY: Dict[str, ToolDefinition] = build_registry(default_clients)


_JSON_TYPES: Dict[str, type | tuple[type, ...]] = {
    "string": str,
    "integer": int,
    "number": (int, float),
    "boolean": bool,
    "object": dict,
    "array": list,
}


def validate_arguments(schema: Dict[str, Any], arguments: Any) -> Dict[str, Any]:
    """Check ``arguments`` against a flat object schema; return them unchanged."""
    if not isinstance(arguments, dict):
        raise InvalidArgumentsError("arguments must be an object")
    properties: Dict[str, Any] = schema.get("properties", {})
    for name in schema.get("required", []):
        if name not in arguments:
            raise InvalidArgumentsError(f"missing required argument '{name}'")
    for name, value in arguments.items():
        prop = properties.get(name)
        if prop is None:
            if schema.get("additionalProperties", True) is False:
                raise InvalidArgumentsError(f"unexpected argument '{name}'")
            continue
        expected = _JSON_TYPES.get(prop.get("type", ""))
        # bool is an int subclass; JSON keeps them apart.
        if expected is not None and (
            not isinstance(value, expected) or (isinstance(value, bool) and prop["type"] != "boolean")
        ):
            raise InvalidArgumentsError(f"argument '{name}' must be of type {prop['type']}")
    return arguments


def list_tools(registry: Optional[Mapping[str, ToolDefinition]] = None) -> List[Dict[str, Any]]:
    """Return a simple list of available tools."""
    registry = TOOL_REGISTRY if registry is None else registry
    return [
        {
            "name": tool.name,
            "description": tool.description,
            "params": tool.params,
            "inputSchema": tool.input_schema,
        }
        for tool in registry.values()
    ]


def _log_tool_result(tool: ToolDefinition, result: Dict[str, Any], request_id: Optional[str] = None) -> None:
    if result.get("isError"):
        text = result["content"][0]["text"] if result.get("content") else None
        logger.warning(
            "tool=%s outcome=error error=%s request_id=%s",
            tool.name,
            text,
            request_id,
            extra={"tool": tool.name, "network": tool.network, "request_id": request_id, "error": text},
        )
        default_metrics.record_tool(tool.name, success=False)
    else:
        logger.info(
            "tool=%s outcome=success request_id=%s",
            tool.name,
            request_id,
            extra={"tool": tool.name, "network": tool.network, "request_id": request_id},
        )
        default_metrics.record_tool(tool.name, success=True)


async def call_tool(
    tool_name: str,
    arguments: Optional[Dict[str, Any]] = None,
    *,
    registry: Optional[Mapping[str, ToolDefinition]] = None,
    request_id: Optional[str] = None,
) -> Dict[str, Any]:
    """Dispatch to a tool by name and return its content envelope."""
    registry = TOOL_REGISTRY if registry is None else registry
    arguments = {} if arguments is None else arguments
    tool = registry.get(tool_name)
    if tool is None:
        logger.warning("Unknown tool requested: %s", tool_name, extra={"request_id": request_id})
        return error_result(f"Unknown tool: {tool_name}")

    try:
        validate_arguments(tool.input_schema, arguments)
    except InvalidArgumentsError as exc:
        result = error_result(f"Invalid parameters: {exc}")
        _log_tool_result(tool, result, request_id)
        return result

    try:
        result = await tool.callable(**arguments)
    except Exception as exc:  # noqa: BLE001
        # Handlers that do not shape their own errors (balance) end up here.
        logger.debug("Tool %s raised", tool.name, exc_info=True)
        result = error_result(error_message(exc))
    _log_tool_result(tool, result, request_id)
    return result
