"""
Entry point for running the slang LSP server as a module.

Usage:
    python -m slang.lsp
    python -m slang.lsp --tcp --port 2087
"""

from slang.lsp.server import main

if __name__ == "__main__":
    main()
