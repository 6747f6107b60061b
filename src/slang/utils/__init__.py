"""
slang Utilities Package.

Common utilities for error handling, source locations, and diagnostics.
"""

from slang.utils.diagnostics import (
    ERROR_DESCRIPTIONS,
    Diagnostic,
    DiagnosticLevel,
    DiagnosticReporter,
    ErrorCode,
    SourceSpan,
    format_error_line,
    split_source_lines,
)
from slang.utils.errors import (
    ParseError,
    ScanError,
    SlangError,
    SourceLocation,
)

__all__ = [
    # Errors
    "SlangError",
    "ScanError",
    "ParseError",
    "SourceLocation",
    # Diagnostics
    "ErrorCode",
    "ERROR_DESCRIPTIONS",
    "DiagnosticLevel",
    "SourceSpan",
    "Diagnostic",
    "DiagnosticReporter",
    "format_error_line",
    "split_source_lines",
]
