#!/usr/bin/env python3
"""
Generate an Ed25519 operator key.

This script generates:
- A ``suiprivkey`` encoded private key, written to a .env file
- The matching Sui address
"""

import argparse
import json
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from tokensmith.tx.signer import generate_key


def generate_keys(output_dir: str = "./keys") -> dict:
    """
    Generate a new key pair.

    Args:
        output_dir: Directory to save keys

    Returns:
        Dictionary with key info and address
    """
    output_path = Path(output_dir)
    output_path.mkdir(parents=True, exist_ok=True)

    signer = generate_key()

    env_path = output_path / ".env"
    env_path.write_text(f"TOKENSMITH_PRIVATE_KEY={signer.export_private_key()}\n")

    info = {
        "env_path": str(env_path),
        "public_key": signer.public_key.hex(),
        "address": signer.address,
    }

    info_path = output_path / "key_info.json"
    with open(info_path, "w") as f:
        json.dump(info, f, indent=2)

    return info


def main():
    parser = argparse.ArgumentParser(description="Generate a Sui operator key")
    parser.add_argument(
        "--output-dir", "-o",
        default="./keys",
        help="Output directory for keys (default: ./keys)"
    )
    parser.add_argument(
        "--force", "-f",
        action="store_true",
        help="Overwrite existing keys"
    )

    args = parser.parse_args()

    output_path = Path(args.output_dir)
    env_path = output_path / ".env"

    if env_path.exists() and not args.force:
        print(f"⚠️  Key already exists at {args.output_dir}")
        print("   Use --force to overwrite")

        info_path = output_path / "key_info.json"
        if info_path.exists():
            with open(info_path) as f:
                info = json.load(f)
            print(f"\n📋 Existing Address: {info['address']}")
        return

    print("🔑 Generating new Sui key...")
    info = generate_keys(args.output_dir)

    print("\n✅ Key generated successfully!")
    print(f"\n📁 Saved to: {args.output_dir}/")
    print(f"   - .env (KEEP SECRET!)")
    print(f"   - key_info.json")

    print(f"\n📬 Address: {info['address']}")

    print("\n💰 To fund on testnet:")
    print(f"   sui client faucet --address {info['address']}")

    print("\n⚠️  IMPORTANT: Copy the .env entry to the project root and keep it secure!")


if __name__ == "__main__":
    main()
