#!/usr/bin/env python3
"""Deploy the RedVsBlue contract.

Usage: python scripts/deploy_red_vs_blue.py --network arbitrumSepolia
"""

import sys
from clashdeploy.cli import main

if __name__ == "__main__":
    sys.exit(main(["deploy", "redvsblue", *sys.argv[1:]]))
