#!/usr/bin/env python3
"""
Mint mock USDC with the configured treasury cap.

Extra arguments are passed through, e.g. `--network devnet --log-json`.
"""

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from tokensmith.cli import main


if __name__ == "__main__":
    sys.exit(main(["mint-usdc", *sys.argv[1:]]))
