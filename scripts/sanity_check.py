"""Minimal sanity checks for the SVM MCP tools against the live endpoints."""

from __future__ import annotations

import asyncio
import os
import sys

REPO_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if REPO_ROOT not in sys.path:
    sys.path.insert(0, REPO_ROOT)

from svm_mcp import mcp  # noqa: E402
from svm_mcp.config import NETWORKS  # noqa: E402
from svm_mcp.svm_rpc import default_clients  # noqa: E402

# Wrapped SOL mint by default; override via env.
SAMPLE_ADDRESS = os.getenv("SVM_SAMPLE_ADDRESS", "So11111111111111111111111111111111111111112")
MAX_PREVIEW = 300


async def main() -> None:
    try:
        for network in NETWORKS:
            for kind in ("balance", "last-transaction", "account-tokens"):
                name = mcp.tool_name(network, kind)
                result = await mcp.call_tool(name, {"address": SAMPLE_ADDRESS})
                text = result["content"][0]["text"]
                flag = " (error)" if result.get("isError") else ""
                print(f"{name}{flag}:", text[:MAX_PREVIEW])
    finally:
        await asyncio.gather(*(client.aclose() for client in default_clients.values()))


if __name__ == "__main__":
    asyncio.run(main())
