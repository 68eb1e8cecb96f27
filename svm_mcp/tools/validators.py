"""Shared validation helpers for SVM MCP tools."""

from __future__ import annotations

import re
from typing import Optional

from svm_mcp.svm_rpc import InvalidAddressError

BASE58_ALPHABET = "123456789ABCDEFGHJKLMNPQRSTUVWXYZabcdefghijkmnopqrstuvwxyz"
# A 32-byte public key encodes to 32..44 Base58 characters.
ADDRESS_REGEX = re.compile(r"^[1-9A-HJ-NP-Za-km-z]{32,44}$")
PUBLIC_KEY_LENGTH = 32

INVALID_PUBLIC_KEY_MESSAGE = "Invalid public key input"


def b58decode(value: str) -> bytes:
    """Decode a Base58 (Bitcoin alphabet) string; raises ValueError on bad characters."""
    number = 0
    for char in value:
        digit = BASE58_ALPHABET.find(char)
        if digit < 0:
            raise ValueError(f"Non-base58 character: {char!r}")
        number = number * 58 + digit
    body = number.to_bytes((number.bit_length() + 7) // 8, "big") if number else b""
    # Each leading '1' encodes one leading zero byte.
    leading_zeros = len(value) - len(value.lstrip("1"))
    return b"\x00" * leading_zeros + body


def is_valid_svm_address(address: Optional[str]) -> bool:
    """Return True when ``address`` decodes to a 32-byte public key."""
    if not address or not isinstance(address, str):
        return False
    if not ADDRESS_REGEX.fullmatch(address):
        return False
    try:
        return len(b58decode(address)) == PUBLIC_KEY_LENGTH
    except ValueError:
        return False


def require_address(address: Optional[str]) -> str:
    """
    Return the address unchanged, or raise InvalidAddressError.

    Surrounding whitespace is not stripped: a padded string is not a valid
    public key.
    """
    if not is_valid_svm_address(address):
        raise InvalidAddressError(INVALID_PUBLIC_KEY_MESSAGE)
    return address  # type: ignore[return-value]
