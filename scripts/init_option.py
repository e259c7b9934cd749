#!/usr/bin/env python3
"""
Initialize a call option vault on the tokensmith marketplace.

Extra arguments are passed through, e.g. `--network devnet --log-json`.
"""

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from tokensmith.cli import main


if __name__ == "__main__":
    sys.exit(main(["init-vault", *sys.argv[1:]]))
