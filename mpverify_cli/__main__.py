"""
Module execution entry point.

Allows running with: python -m mpverify_cli
"""

import sys
from mpverify_cli.main import main

if __name__ == "__main__":
    sys.exit(main())
