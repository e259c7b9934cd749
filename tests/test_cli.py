"""
Test suite for the command-line entry point and its exit codes.
"""

import json

import pytest
from structlog.testing import capture_logs

from tokensmith import cli
from tokensmith.contracts import ContractRefs
from tokensmith.errors import ErrorKind, TransactionSubmitError
from tokensmith.tx.action import normalize_object_id
from tokensmith.tx.actions import InitVaultAction, MintAction, OptionType, WriteCallAction

from conftest import TEST_DIGEST, TEST_SEED_HEX, MockLedgerClient


@pytest.fixture
def cli_env(clean_env):
    """Environment with a signing key and no real logging setup."""
    clean_env.setenv("privatekey", TEST_SEED_HEX)
    clean_env.setattr(cli, "setup_logging", lambda *args, **kwargs: None)
    return clean_env


@pytest.fixture
def use_node(cli_env):
    """Route the CLI to a mock ledger client."""
    created = []

    def install(node: MockLedgerClient) -> list:
        def factory(config):
            created.append(config)
            return node

        cli_env.setattr(cli, "SuiJsonRpcAdapter", factory)
        return created

    return install


class TestActionCommands:
    """End-to-end runs of the action commands."""

    def test_zero_balance_exits_1(self, use_node):
        node = MockLedgerClient(balance=0)
        use_node(node)

        with capture_logs() as logs:
            code = cli.main(["mint-usdc"])

        assert code == 1
        assert node.calls == ["get_balance"]
        assert logs[-1]["event"] == "program_failed"
        assert logs[-1]["error_type"] == "InsufficientFundsError"

    def test_success_exits_0(self, use_node, capsys):
        node = MockLedgerClient(balance=500_000_000)
        use_node(node)

        with capture_logs() as logs:
            code = cli.main(["mint-usdc"])

        assert code == 0
        assert node.calls == ["get_balance", "build_transaction", "submit_transaction"]
        assert json.loads(capsys.readouterr().out)["digest"] == TEST_DIGEST
        assert "transaction_hint" not in [e["event"] for e in logs]

    def test_object_not_found_exits_1_with_hint(self, use_node):
        node = MockLedgerClient(
            submit_error=TransactionSubmitError("Transaction failed: object not found"),
        )
        use_node(node)

        with capture_logs() as logs:
            code = cli.main(["write-call"])

        assert code == 1
        final = logs[-1]
        assert final["event"] == "program_failed"
        assert final["error"] == "Transaction failed: object not found"
        assert final["hint"] == WriteCallAction.from_refs(
            ContractRefs.from_env()
        ).hints[ErrorKind.OBJECT_NOT_FOUND]

    def test_malformed_argument_fails_before_network(self, use_node):
        node = MockLedgerClient()
        created = use_node(node)

        with capture_logs() as logs:
            code = cli.main(["mint-usdc", "--amount", "abc"])

        assert code == 1
        assert created == []
        assert node.calls == []
        assert logs[-1]["error_type"] == "ActionBuildError"
        assert "hint" not in logs[-1]

    def test_missing_key_fails_before_network(self, use_node, cli_env):
        cli_env.delenv("privatekey")
        node = MockLedgerClient()
        created = use_node(node)

        with capture_logs() as logs:
            code = cli.main(["init-vault"])

        assert code == 1
        assert created == []
        assert logs[-1]["error_type"] == "ConfigurationError"

    def test_reference_override_from_env_file(self, use_node, cli_env, tmp_path):
        cli_env.delenv("privatekey")
        (tmp_path / ".env").write_text(
            f"privatekey={TEST_SEED_HEX}\n"
            "TOKENSMITH_REF_ASSET_COIN=0xabc\n"
        )
        node = MockLedgerClient()
        use_node(node)

        with capture_logs():
            code = cli.main(["write-call"])

        assert code == 0
        _, action, _ = node.built[0]
        assert action.arguments[3].value == normalize_object_id("0xabc")

    def test_invalid_gas_budget(self, use_node):
        use_node(MockLedgerClient())

        with capture_logs() as logs:
            code = cli.main(["mint-usdc", "--gas-budget", "0"])

        assert code == 1
        assert logs[-1]["error_type"] == "ConfigurationError"


class TestWalletCommands:
    """Tests for the wallet helper commands."""

    def test_address(self, cli_env, capsys, test_signer):
        with capture_logs():
            assert cli.main(["address"]) == 0

        assert capsys.readouterr().out.strip() == test_signer.address

    def test_balance(self, use_node, capsys):
        use_node(MockLedgerClient(balance=42))

        with capture_logs():
            assert cli.main(["balance"]) == 0

        assert "Balance: 42" in capsys.readouterr().out

    def test_no_command(self, cli_env):
        assert cli.main([]) == 1


class TestBuildAction:
    """Tests for mapping commands onto actions."""

    def test_init_vault_expiry(self, refs):
        args = cli.create_parser().parse_args(["init-vault", "--option-type", "put", "--expires-in", "60"])

        spec = cli.build_action(args, refs, now_ms=1_000)

        assert isinstance(spec, InitVaultAction)
        assert spec.expire_ms == 61_000
        assert spec.option_type == OptionType.PUT

    def test_init_vault_default_expiry_is_one_hour(self, refs):
        args = cli.create_parser().parse_args(["init-vault"])

        spec = cli.build_action(args, refs, now_ms=0)

        assert spec.expire_ms == 3_600_000
        assert spec.price_numerator == 100
        assert (spec.asset_decimals, spec.usdc_decimals) == (8, 6)

    def test_mint_amount(self, refs):
        args = cli.create_parser().parse_args(["mint-usdc", "--amount", "5"])

        spec = cli.build_action(args, refs)

        assert isinstance(spec, MintAction)
        assert spec.amount == 5
