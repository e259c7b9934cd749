"""
Abstract interface for Sui fullnode access.

Defines the contract for ledger access that all node adapters must implement.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict

from tokensmith.tx.action import Action
from tokensmith.tx.signer import SignedTransaction

# Receipts are passed through to the caller untouched.
Receipt = Dict[str, Any]


@dataclass(frozen=True)
class Balance:
    """Balance of one coin type owned by an address."""
    coin_type: str
    total: int
    coin_object_count: int = 0

    @property
    def is_empty(self) -> bool:
        return self.total == 0


class LedgerClient(ABC):
    """
    Abstract interface for Sui ledger access.

    This interface defines the blockchain operations needed by the runner:
    - Balance queries
    - Transaction construction from an Action
    - Transaction submission
    """

    @abstractmethod
    async def connect(self) -> None:
        """
        Establish connection to the fullnode.

        Raises:
            NodeConnectionError: If connection cannot be established
        """
        pass

    @abstractmethod
    async def disconnect(self) -> None:
        """Close connection to the fullnode."""
        pass

    @abstractmethod
    async def get_balance(self, owner: str, coin_type: str) -> Balance:
        """
        Get the total balance of a coin type owned by an address.

        Args:
            owner: Owner address
            coin_type: Coin type tag, e.g. ``0x2::sui::SUI``

        Returns:
            Fresh balance snapshot
        """
        pass

    @abstractmethod
    async def build_transaction(
        self,
        sender: str,
        action: Action,
        gas_budget: int,
    ) -> bytes:
        """
        Serialize an Action into transaction bytes ready for signing.

        Args:
            sender: Address paying for and signing the transaction
            action: Move call to perform
            gas_budget: Maximum gas the transaction may consume

        Returns:
            BCS serialized TransactionData

        Raises:
            NetworkError: If the fullnode rejects the call
        """
        pass

    @abstractmethod
    async def submit_transaction(self, tx: SignedTransaction) -> Receipt:
        """
        Submit a signed transaction and wait for its effects.

        Args:
            tx: Signed transaction to submit

        Returns:
            Receipt as returned by the fullnode

        Raises:
            TransactionSubmitError: If the transaction is rejected or fails
        """
        pass

    async def __aenter__(self) -> "LedgerClient":
        await self.connect()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.disconnect()
