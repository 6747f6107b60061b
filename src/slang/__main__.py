"""
Entry point for running the slang CLI as a module.

Usage:
    python -m slang ast -c "1 + 2"
"""

import sys

from slang.cli import main

if __name__ == "__main__":
    sys.exit(main())
