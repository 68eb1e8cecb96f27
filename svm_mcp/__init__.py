"""
Read-only SVM MCP server package.

Exposes balance, last-transaction and token-account lookups for the SOON
testnet and mainnet as MCP tools. See DESIGN.md for full details.
"""

__all__ = ["config"]
