"""
slang - front end for a small expression language.

Scans source text into tokens, parses them into an expression tree with a
recursive descent parser, and renders trees as parenthesized prefix text.
"""

from slang.compiler import parse_source, render_source, scan_source
from slang.compiler.ast_printer import AstPrinter
from slang.compiler.parser import Parser
from slang.compiler.scanner import Scanner, scan_all

__version__ = "0.1.0"
__all__ = [
    "scan_source",
    "parse_source",
    "render_source",
    "scan_all",
    "Scanner",
    "Parser",
    "AstPrinter",
]
