"""Transaction lookup tools."""

from __future__ import annotations

import logging
from typing import Any, Dict

from svm_mcp.svm_rpc import SvmRpcClient
from svm_mcp.tools.content import error_message, text_result, to_json_text
from svm_mcp.tools.validators import require_address

logger = logging.getLogger(__name__)

NO_TRANSACTIONS_MESSAGE = "No transactions found for this address"


async def get_last_transaction(address: str, *, client: SvmRpcClient) -> Dict[str, Any]:
    """
    Return the most recent transaction touching ``address``.

    Only the newest signature is requested; when there is none, no second
    RPC call is made.
    """
    try:
        signatures = await client.get_signatures_for_address(require_address(address), limit=1)
        if not signatures:
            return text_result(NO_TRANSACTIONS_MESSAGE)

        latest_signature = signatures[0]["signature"]
        transaction = await client.get_transaction(latest_signature)
    except Exception as exc:  # noqa: BLE001
        logger.debug("Last transaction lookup failed via %r: %s", client, exc)
        return text_result(f"Error getting transaction: {error_message(exc)}")
    return text_result(to_json_text(transaction))
