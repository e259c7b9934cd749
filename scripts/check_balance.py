#!/usr/bin/env python3
"""
Check the fee-coin balance of the operator address.
"""

import asyncio
import argparse
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from tokensmith.config import RunnerConfig, SuiNetwork
from tokensmith.errors import ConfigurationError, NetworkError
from tokensmith.node.jsonrpc import SuiJsonRpcAdapter
from tokensmith.tx.signer import TransactionSigner

MIST_PER_SUI = 1_000_000_000


async def check_balance(config: RunnerConfig) -> dict:
    """Check balance at the operator address."""
    signer = TransactionSigner(config)
    signer.load_from_config()

    print(f"\n📬 Address: {signer.address}")

    async with SuiJsonRpcAdapter(config) as node:
        balance = await node.get_balance(signer.address, config.fee_coin_type)

    total_sui = balance.total / MIST_PER_SUI

    print(f"\n💰 Balance:")
    print(f"   Coins: {balance.coin_object_count}")
    print(f"   Total: {total_sui:.9f} SUI ({balance.total:,} MIST)")

    if balance.total >= config.gas_budget:
        print(f"\n✅ Balance covers the gas budget of {config.gas_budget:,} MIST")
    elif balance.total > 0:
        print(f"\n⚠️  Balance is below the gas budget; transactions may fail for insufficient gas")
    else:
        print(f"\n❌ No balance found. Please fund the address from the {config.network.value} faucet:")
        print(f"   Address: {signer.address}")

    return {
        "address": signer.address,
        "coin_type": balance.coin_type,
        "coin_count": balance.coin_object_count,
        "total_mist": balance.total,
    }


def main():
    parser = argparse.ArgumentParser(description="Check operator balance")
    parser.add_argument(
        "--network", "-n",
        choices=[n.value for n in SuiNetwork],
        default=SuiNetwork.TESTNET.value,
        help="Sui network (default: testnet)"
    )

    args = parser.parse_args()
    config = RunnerConfig(network=SuiNetwork(args.network))

    try:
        asyncio.run(check_balance(config))
    except (ConfigurationError, NetworkError) as e:
        print(f"❌ Error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
