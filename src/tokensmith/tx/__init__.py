"""
Transaction module.

Handles action construction and signing.
"""

from tokensmith.tx.action import Action, ArgKind, MoveArg, MoveTarget
from tokensmith.tx.actions import (
    ActionKind,
    ActionSpec,
    InitVaultAction,
    MintAction,
    OptionType,
    WriteCallAction,
)
from tokensmith.tx.signer import SignedTransaction, TransactionSigner

__all__ = [
    "Action",
    "ArgKind",
    "MoveArg",
    "MoveTarget",
    "ActionKind",
    "ActionSpec",
    "InitVaultAction",
    "MintAction",
    "OptionType",
    "WriteCallAction",
    "SignedTransaction",
    "TransactionSigner",
]
