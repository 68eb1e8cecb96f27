"""
MCP server over stdin/stdout.

Wraps the shared tool registry in the `mcp` SDK's low-level server. Protocol
framing belongs to the SDK; this module only adapts tool listings and content
envelopes to SDK types and owns process bootstrap.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, List, Mapping, Optional

from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.types import TextContent, Tool

from svm_mcp import mcp
from svm_mcp.config import SERVER_NAME, SERVER_VERSION, SvmConfig, default_config
from svm_mcp.logging_setup import configure_logging
from svm_mcp.svm_rpc import SvmRpcClient, build_network_clients, default_clients

logger = logging.getLogger(__name__)

app = Server(SERVER_NAME, version=SERVER_VERSION)

# Registry bound to the clients of the running server; None means mcp.TOOL_REGISTRY.
_active_registry: Optional[Mapping[str, mcp.ToolDefinition]] = None


class ToolCallFailed(Exception):
    """Raised so the SDK reports a tool result with isError set."""


def _to_text_content(result: dict[str, Any]) -> List[TextContent]:
    blocks = [
        TextContent(type="text", text=block["text"])
        for block in result.get("content", [])
        if block.get("type") == "text"
    ]
    if result.get("isError"):
        raise ToolCallFailed(blocks[0].text if blocks else "Tool call failed")
    return blocks


@app.list_tools()
async def list_tools() -> List[Tool]:
    return [
        Tool(
            name=tool["name"],
            description=tool["description"],
            inputSchema=tool["inputSchema"],
        )
        for tool in mcp.list_tools(_active_registry)
    ]


@app.call_tool()
async def call_tool(name: str, arguments: Any) -> List[TextContent]:
    result = await mcp.call_tool(
        name, arguments if arguments is not None else {}, registry=_active_registry
    )
    return _to_text_content(result)


async def _close_clients(clients: Mapping[str, SvmRpcClient]) -> None:
    await asyncio.gather(*(client.aclose() for client in clients.values()))


async def serve(config: SvmConfig = default_config) -> None:
    """Serve the tools over stdio with RPC clients built from ``config``."""
    global _active_registry
    if config is default_config:
        clients = default_clients
        _active_registry = None
    else:
        clients = build_network_clients(config)
        _active_registry = mcp.build_registry(clients)
    try:
        async with stdio_server() as (read_stream, write_stream):
            logger.info("Transport initialized, connecting to server...")
            options = app.create_initialization_options()
            logger.info("Server connection established successfully")
            await app.run(read_stream, write_stream, options)
    finally:
        _active_registry = None
        await _close_clients(clients)


def main(config: SvmConfig = default_config) -> int:
    """Run the stdio server until stdin closes; return the process exit code."""
    configure_logging(config)
    logger.info("Starting MCP server...")
    try:
        asyncio.run(serve(config))
    except KeyboardInterrupt:
        logger.info("Interrupted, shutting down")
    except Exception:
        logger.exception("There was an error connecting to the server")
        return 1
    return 0
