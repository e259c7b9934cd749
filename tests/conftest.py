"""
Pytest configuration and shared fixtures for the test suite.
"""

import os
from typing import Any, Dict, List, Optional, Tuple

import pytest
from structlog.testing import capture_logs

from tokensmith.config import RunnerConfig, SuiNetwork
from tokensmith.contracts import ContractRefs
from tokensmith.node.interface import Balance, LedgerClient, Receipt
from tokensmith.tx.action import Action
from tokensmith.tx.actions import InitVaultAction, MintAction, WriteCallAction
from tokensmith.tx.signer import SignedTransaction, TransactionSigner

TEST_SEED_HEX = bytes(range(32)).hex()
TEST_DIGEST = "9dGkZbYq1bB3XwJ8v5p3Wm2hG8c6QqS1dP5t7nRr4Ue"


# ============================================================================
# Configuration Fixtures
# ============================================================================

@pytest.fixture
def test_config() -> RunnerConfig:
    """Create a test configuration."""
    return RunnerConfig(
        network=SuiNetwork.TESTNET,
        rpc_url="http://fullnode.test",
        private_key=None,
        gas_budget=10_000_000,
        log_level="DEBUG",
    )


@pytest.fixture
def refs() -> ContractRefs:
    """Testnet contract references."""
    return ContractRefs.for_network(SuiNetwork.TESTNET)


# ============================================================================
# Sample Actions
# ============================================================================

@pytest.fixture
def mint_action(refs) -> MintAction:
    return MintAction.from_refs(refs)


@pytest.fixture
def init_vault_action(refs) -> InitVaultAction:
    return InitVaultAction.from_refs(refs, expire_ms=1_700_000_000_000)


@pytest.fixture
def write_call_action(refs) -> WriteCallAction:
    return WriteCallAction.from_refs(refs)


# ============================================================================
# Mock Ledger Client
# ============================================================================

class MockLedgerClient(LedgerClient):
    """Mock ledger client for testing."""

    def __init__(
        self,
        balance: int = 500_000_000,
        submit_error: Optional[BaseException] = None,
        build_error: Optional[BaseException] = None,
    ):
        self.balance = balance
        self.submit_error = submit_error
        self.build_error = build_error
        self.calls: List[str] = []
        self.balance_queries: List[Tuple[str, str]] = []
        self.built: List[Tuple[str, Action, int]] = []
        self.submitted: List[SignedTransaction] = []
        self.receipt: Receipt = {
            "digest": TEST_DIGEST,
            "effects": {"status": {"status": "success"}},
        }
        self.connected = False

    async def connect(self) -> None:
        self.connected = True

    async def disconnect(self) -> None:
        self.connected = False

    async def get_balance(self, owner: str, coin_type: str) -> Balance:
        self.calls.append("get_balance")
        self.balance_queries.append((owner, coin_type))
        return Balance(coin_type=coin_type, total=self.balance, coin_object_count=1)

    async def build_transaction(self, sender: str, action: Action, gas_budget: int) -> bytes:
        self.calls.append("build_transaction")
        if self.build_error is not None:
            raise self.build_error
        self.built.append((sender, action, gas_budget))
        return f"tx:{action.target}".encode()

    async def submit_transaction(self, tx: SignedTransaction) -> Receipt:
        self.calls.append("submit_transaction")
        if self.submit_error is not None:
            raise self.submit_error
        self.submitted.append(tx)
        return self.receipt


@pytest.fixture
def mock_node() -> MockLedgerClient:
    """Create a mock ledger client with a funded wallet."""
    return MockLedgerClient()


# ============================================================================
# Test Signer
# ============================================================================

@pytest.fixture
def test_signer(test_config) -> TransactionSigner:
    """Create a signer with a fixed key."""
    signer = TransactionSigner(test_config)
    with capture_logs():
        signer.load_key(TEST_SEED_HEX)
    return signer


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    """Run with no key or reference overrides in the environment."""
    monkeypatch.chdir(tmp_path)
    for name in ("privatekey", "TOKENSMITH_PRIVATE_KEY", "TOKENSMITH_NETWORK", "TOKENSMITH_RPC_URL"):
        monkeypatch.delenv(name, raising=False)
    for name in [n for n in os.environ if n.upper().startswith("TOKENSMITH_REF_")]:
        monkeypatch.delenv(name)
    return monkeypatch


def rpc_result(request_body: Dict[str, Any], result: Any) -> Dict[str, Any]:
    """Build a JSON-RPC success response for a request."""
    return {"jsonrpc": "2.0", "id": request_body["id"], "result": result}
