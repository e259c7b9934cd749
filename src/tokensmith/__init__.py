"""
Tokensmith operator tooling.

Submits single Move calls to the tokensmith options deployment on Sui:
minting mock USDC, initializing an option vault and writing a covered call.
"""

__version__ = "0.1.0"

from tokensmith.core.runner import RunState, TransactionRunner
from tokensmith.tx.action import Action, MoveArg
from tokensmith.tx.actions import InitVaultAction, MintAction, WriteCallAction

__all__ = [
    "TransactionRunner",
    "RunState",
    "Action",
    "MoveArg",
    "MintAction",
    "InitVaultAction",
    "WriteCallAction",
]
