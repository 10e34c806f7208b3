"""
Module execution entry point.

Allows running with: python -m shield_cli
"""

import sys
from shield_cli.main import main

if __name__ == "__main__":
    sys.exit(main())
