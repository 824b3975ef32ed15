#!/usr/bin/env python3
"""Deploy the ColorClash contract.

Usage: python scripts/deploy.py --network arbitrumSepolia
"""

import sys
from clashdeploy.cli import main

if __name__ == "__main__":
    sys.exit(main(["deploy", "colors", *sys.argv[1:]]))
