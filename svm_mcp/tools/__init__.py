"""LLM-facing tool implementations."""

from .account import get_account_tokens, get_balance
from .transactions import get_last_transaction
from . import validators

__all__ = [
    "get_balance",
    "get_last_transaction",
    "get_account_tokens",
    "validators",
]
