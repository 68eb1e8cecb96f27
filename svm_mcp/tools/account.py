"""Account-related tools."""

from __future__ import annotations

import logging
from typing import Any, Dict

from svm_mcp.config import TOKEN_PROGRAM_ID
from svm_mcp.svm_rpc import SvmRpcClient
from svm_mcp.tools.content import error_message, text_result, to_json_text
from svm_mcp.tools.validators import require_address

logger = logging.getLogger(__name__)


async def get_balance(address: str, *, client: SvmRpcClient) -> Dict[str, Any]:
    """
    Return ``Balance: <lamports>`` for an address.

    Errors are not intercepted here: an invalid address or a
    failed RPC call propagates to the dispatcher, which reports it as a
    failed tool call.
    """
    balance = await client.get_balance(require_address(address))
    return text_result(f"Balance: {balance}")


async def get_account_tokens(address: str, *, client: SvmRpcClient) -> Dict[str, Any]:
    """Return every SPL token account owned by ``address`` as JSON text."""
    try:
        tokens = await client.get_token_accounts_by_owner(
            require_address(address), program_id=TOKEN_PROGRAM_ID
        )
    except Exception as exc:  # noqa: BLE001
        logger.debug("Token account lookup failed via %r: %s", client, exc)
        return text_result(f"Error getting tokens: {error_message(exc)}")
    return text_result(to_json_text(tokens))
