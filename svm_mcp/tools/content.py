"""Helpers shaping tool outputs into MCP content envelopes."""

from __future__ import annotations

import json
from typing import Any, Dict


def text_result(text: str) -> Dict[str, Any]:
    """Wrap ``text`` as a single-block content envelope."""
    return {"content": [{"type": "text", "text": text}]}


def error_result(text: str) -> Dict[str, Any]:
    """Single text block flagged as a tool-level error."""
    wrapped = text_result(text)
    wrapped["isError"] = True
    return wrapped


def to_json_text(value: Any) -> str:
    """Compact JSON rendering of an RPC payload (``null`` for None)."""
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False)


def error_message(exc: BaseException) -> str:
    """Message of an exception, falling back to its string form."""
    if exc.args and isinstance(exc.args[0], str):
        return exc.args[0]
    return str(exc)
