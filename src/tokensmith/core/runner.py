"""
Transaction Runner - submits a single action to the ledger.

The runner walks one action through a strictly linear workflow:

    IDLE -> BALANCE_CHECKED -> ACTION_BUILT -> SUBMITTED -> SUCCEEDED | FAILED

Every step is an exit point. Nothing is retried; runs are meant to be
started by an operator, one at a time.
"""

import asyncio
from enum import Enum
from typing import Optional

import structlog

from tokensmith.config import RunnerConfig, get_config
from tokensmith.errors import (
    ActionBuildError,
    Classification,
    ConfigurationError,
    InsufficientFundsError,
    classify,
)
from tokensmith.node.interface import Balance, LedgerClient, Receipt
from tokensmith.tx.action import Action
from tokensmith.tx.actions import ActionSpec
from tokensmith.tx.signer import TransactionSigner

logger = structlog.get_logger(__name__)


class RunState(str, Enum):
    """State of a runner."""
    IDLE = "idle"
    BALANCE_CHECKED = "balance_checked"
    ACTION_BUILT = "action_built"
    SUBMITTED = "submitted"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


_ORDER = [
    RunState.IDLE,
    RunState.BALANCE_CHECKED,
    RunState.ACTION_BUILT,
    RunState.SUBMITTED,
    RunState.SUCCEEDED,
]


class RunnerStateError(RuntimeError):
    """Raised when a runner is reused or driven out of order."""
    pass


class TransactionRunner:
    """
    Runs the balance check, build, sign and submit workflow for one action.

    The balance check is the first call the runner makes. A ledger client
    may still talk to the network earlier, when it connects: the JSON-RPC
    adapter requests ``sui_getChainIdentifier`` before the check runs. No
    transaction-related request is sent before the check.

    A runner is single use. If the process is interrupted while submission
    is in flight, the transaction may or may not have been executed; the
    runner cannot tell and reports the outcome as unknown.
    """

    def __init__(
        self,
        node: LedgerClient,
        signer: TransactionSigner,
        config: Optional[RunnerConfig] = None,
    ):
        """
        Initialize the runner.

        Args:
            node: Ledger client for balance queries and submission
            signer: Signer holding the operator key
            config: Runner configuration
        """
        self.node = node
        self.signer = signer
        self.config = config or get_config()

        self.state = RunState.IDLE
        self.balance: Optional[Balance] = None
        self.action: Optional[Action] = None
        self.receipt: Optional[Receipt] = None
        self.classification: Optional[Classification] = None

    def _advance(self, state: RunState) -> None:
        """Move forward to the next state."""
        if self.state == RunState.FAILED or _ORDER.index(state) != _ORDER.index(self.state) + 1:
            raise RunnerStateError(f"Cannot move from {self.state.value} to {state.value}")
        self.state = state
        logger.debug("runner_state", state=state.value)

    async def run(self, spec: ActionSpec) -> Receipt:
        """
        Submit one action.

        Args:
            spec: Action to submit

        Returns:
            Receipt returned by the ledger, unchanged

        Raises:
            ConfigurationError: If no signing key is loaded
            InsufficientFundsError: If the fee-coin balance is zero
            ActionBuildError: If the action cannot be built
            NetworkError: If the ledger rejects or fails the transaction
        """
        if self.state != RunState.IDLE:
            raise RunnerStateError("Runner has already been used")

        try:
            if not self.signer.is_loaded:
                raise ConfigurationError("Signer key not loaded")

            self.balance = await self._check_balance()
            self._advance(RunState.BALANCE_CHECKED)

            self.action = self._build_action(spec)
            self._advance(RunState.ACTION_BUILT)

            self.receipt = await self._submit(self.action, spec)
            self._advance(RunState.SUCCEEDED)

            return self.receipt
        except BaseException:
            self.state = RunState.FAILED
            raise

    async def _check_balance(self) -> Balance:
        """Fail fast when the wallet cannot pay any fee at all."""
        address = self.signer.address
        coin_type = self.config.fee_coin_type

        logger.info("current_address", address=address)

        try:
            balance = await self.node.get_balance(address, coin_type)
        except Exception as e:
            logger.error("balance_check_failed", error=str(e), error_type=type(e).__name__)
            raise

        logger.info("current_balance", coin_type=balance.coin_type, total=balance.total)

        # Only an empty wallet is rejected; a low balance surfaces as a gas failure.
        if balance.is_empty:
            raise InsufficientFundsError(address, coin_type)

        return balance

    def _build_action(self, spec: ActionSpec) -> Action:
        """Build the action locally."""
        try:
            action = spec.build()
        except ActionBuildError as e:
            logger.error("action_build_failed", action=spec.kind.value, error=str(e))
            raise

        logger.info("action_built", action=spec.kind.value, **action.to_dict())
        return action

    async def _submit(self, action: Action, spec: ActionSpec) -> Receipt:
        """Build, sign and submit the transaction, classifying any failure."""
        logger.info(
            "submitting_transaction",
            action=spec.kind.value,
            target=str(action.target),
            gas_budget=self.config.gas_budget,
        )

        submitted = False
        try:
            tx_bytes = await self.node.build_transaction(
                self.signer.address,
                action,
                self.config.gas_budget,
            )
            signed = self.signer.sign_transaction(tx_bytes)

            submitted = True
            self._advance(RunState.SUBMITTED)
            receipt = await self.node.submit_transaction(signed)
        except asyncio.CancelledError:
            if submitted:
                logger.warning(
                    "submission_interrupted",
                    target=str(action.target),
                    outcome="unknown",
                )
            raise
        except Exception as e:
            self.classification = classify(str(e), spec.hints)
            logger.error(
                "transaction_failed",
                error_type=type(e).__name__,
                error=str(e),
                origin=str(action.target),
                exc_info=True,
            )
            if self.classification.hint:
                logger.error(
                    "transaction_hint",
                    kind=self.classification.kind.value,
                    hint=self.classification.hint,
                )
            e.classification = self.classification
            raise

        logger.info("transaction_result", digest=receipt.get("digest"), receipt=receipt)
        return receipt
