"""
Command-line interface for tokensmith.

Provides one command per operator action plus wallet helpers.
Exit code 0 means the transaction was executed; any failure exits with 1.
"""

import argparse
import asyncio
import json
import logging
import sys
from datetime import datetime, timezone
from typing import List, Optional

import structlog
from pydantic import ValidationError

from tokensmith import __version__
from tokensmith.config import RunnerConfig, SuiNetwork, set_config
from tokensmith.contracts import ContractRefs
from tokensmith.core.runner import TransactionRunner
from tokensmith.errors import ConfigurationError
from tokensmith.node.interface import LedgerClient, Receipt
from tokensmith.node.jsonrpc import SuiJsonRpcAdapter
from tokensmith.tx.actions import (
    DEFAULT_EXPIRY_MS,
    ActionSpec,
    InitVaultAction,
    MintAction,
    OptionType,
    WriteCallAction,
)
from tokensmith.tx.signer import TransactionSigner

logger = structlog.get_logger("tokensmith.cli")


def setup_logging(level: str = "INFO", json_format: bool = False) -> None:
    """Configure structured logging on the error stream."""
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.processors.JSONRenderer() if json_format
            else structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(message)s",
        level=getattr(logging, level.upper()),
        stream=sys.stderr,
    )


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "--network",
        choices=[n.value for n in SuiNetwork],
        help="Sui network (default: testnet)",
    )
    common.add_argument(
        "--rpc-url",
        help="Custom fullnode JSON-RPC URL",
    )
    common.add_argument(
        "--gas-budget",
        type=int,
        help="Gas budget in MIST (default: 10000000)",
    )
    common.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: INFO)",
    )
    common.add_argument(
        "--log-json",
        action="store_true",
        default=None,
        help="Output logs in JSON format",
    )

    parser = argparse.ArgumentParser(
        prog="tokensmith",
        description="Submit tokensmith transactions to Sui",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    # Mint command
    mint_parser = subparsers.add_parser("mint-usdc", parents=[common], help="Mint mock USDC")
    mint_parser.add_argument(
        "--amount",
        default="100000000",
        help="Amount in base units (default: 100000000)",
    )

    # Init vault command
    vault_parser = subparsers.add_parser(
        "init-vault", parents=[common], help="Initialize an option vault"
    )
    vault_parser.add_argument(
        "--option-type",
        choices=["call", "put"],
        default="call",
        help="Option type (default: call)",
    )
    vault_parser.add_argument(
        "--expires-in",
        type=int,
        default=DEFAULT_EXPIRY_MS // 1000,
        help="Seconds until expiry (default: 3600)",
    )
    vault_parser.add_argument(
        "--price-numerator",
        default="100",
        help="Strike price numerator (default: 100)",
    )
    vault_parser.add_argument(
        "--price-denominator",
        default="1",
        help="Strike price denominator (default: 1)",
    )
    vault_parser.add_argument(
        "--asset-decimals",
        default="8",
        help="Asset coin decimals (default: 8)",
    )
    vault_parser.add_argument(
        "--usdc-decimals",
        default="6",
        help="USDC decimals (default: 6)",
    )

    # Write call command
    call_parser = subparsers.add_parser(
        "write-call", parents=[common], help="Write a covered call option"
    )
    call_parser.add_argument(
        "--vault-owner",
        help="Vault owner object ID (default: configured reference)",
    )
    call_parser.add_argument(
        "--asset-coin",
        help="Asset coin object ID (default: configured reference)",
    )

    # Wallet helpers
    subparsers.add_parser("balance", parents=[common], help="Show the fee-coin balance")
    subparsers.add_parser("address", parents=[common], help="Show the signer address")

    return parser


def build_config(args: argparse.Namespace) -> RunnerConfig:
    """Build configuration from the environment and command-line overrides."""
    overrides = {
        "network": args.network,
        "rpc_url": args.rpc_url,
        "gas_budget": args.gas_budget,
        "log_level": args.log_level,
        "log_json": args.log_json,
    }
    try:
        return RunnerConfig(**{k: v for k, v in overrides.items() if v is not None})
    except ValidationError as e:
        raise ConfigurationError(f"Invalid configuration: {e}") from e


def build_action(
    args: argparse.Namespace,
    refs: ContractRefs,
    now_ms: Optional[int] = None,
) -> ActionSpec:
    """
    Create the action for a command.

    Inputs are validated here, before any network access.
    """
    if args.command == "mint-usdc":
        return MintAction.from_refs(refs, amount=args.amount)

    if args.command == "init-vault":
        if now_ms is None:
            now_ms = int(datetime.now(timezone.utc).timestamp() * 1000)
        return InitVaultAction.from_refs(
            refs,
            expire_ms=now_ms + args.expires_in * 1000,
            option_type=OptionType[args.option_type.upper()],
            price_numerator=args.price_numerator,
            price_denominator=args.price_denominator,
            asset_decimals=args.asset_decimals,
            usdc_decimals=args.usdc_decimals,
        )

    if args.command == "write-call":
        return WriteCallAction.from_refs(
            refs,
            vault_owner=args.vault_owner,
            asset_coin=args.asset_coin,
        )

    raise ValueError(f"Unknown action command: {args.command}")


def load_signer(config: RunnerConfig) -> TransactionSigner:
    signer = TransactionSigner(config)
    signer.load_from_config()
    return signer


async def run_action(
    spec: ActionSpec,
    signer: TransactionSigner,
    config: RunnerConfig,
    node: Optional[LedgerClient] = None,
) -> Receipt:
    """Run one action against the fullnode."""
    node = node or SuiJsonRpcAdapter(config)
    async with node:
        runner = TransactionRunner(node=node, signer=signer, config=config)
        return await runner.run(spec)


async def show_balance(
    signer: TransactionSigner,
    config: RunnerConfig,
    node: Optional[LedgerClient] = None,
) -> None:
    """Print the fee-coin balance of the signer."""
    node = node or SuiJsonRpcAdapter(config)
    async with node:
        balance = await node.get_balance(signer.address, config.fee_coin_type)

    print(f"Address: {signer.address}")
    print(f"Balance: {balance.total} ({balance.coin_type}, {balance.coin_object_count} coins)")


def report_failure(error: Exception) -> None:
    """Log the final failure line with the raw error and any hint."""
    classification = getattr(error, "classification", None)
    extra = {"hint": classification.hint} if classification and classification.hint else {}
    logger.error(
        "program_failed",
        error_type=type(error).__name__,
        error=str(error),
        **extra,
    )


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    try:
        config = build_config(args)
    except ConfigurationError as e:
        setup_logging(args.log_level or "INFO", bool(args.log_json))
        report_failure(e)
        return 1

    setup_logging(config.log_level, config.log_json)

    try:
        set_config(config)
        signer = load_signer(config)

        if args.command == "address":
            print(signer.address)
            return 0

        if args.command == "balance":
            asyncio.run(show_balance(signer, config))
            return 0

        refs = ContractRefs.from_env(config.network)
        spec = build_action(args, refs)

        receipt = asyncio.run(run_action(spec, signer, config))
        print(json.dumps(receipt, indent=2, default=str))
        return 0

    except KeyboardInterrupt:
        logger.warning("program_interrupted", outcome="unknown")
        return 1
    except Exception as e:
        report_failure(e)
        return 1


if __name__ == "__main__":
    sys.exit(main())
