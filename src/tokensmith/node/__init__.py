"""
Node Integration Layer.

Provides abstracted access to Sui ledger data and transaction submission.
"""

from tokensmith.node.interface import Balance, LedgerClient, Receipt
from tokensmith.node.jsonrpc import SuiJsonRpcAdapter

__all__ = [
    "Balance",
    "LedgerClient",
    "Receipt",
    "SuiJsonRpcAdapter",
]
