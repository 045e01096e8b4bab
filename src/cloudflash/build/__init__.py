"""
Compile result handling for cloudflash.

This module provides:
- Size report decoding (linker size tool output)
- Compiler diagnostic parsing into build issues
- Interpretation of compile service responses
"""

from .build_utils import IssuePrinter, SizeReportPrinter
from .compile_result import (
    BinaryInfo,
    BuildResult,
    CompileFailure,
    CompileSuccess,
    interpret_compile_response,
)
from .diagnostics import (
    BuildIssue,
    Continuation,
    Diagnostic,
    IssueKind,
    aggregate_issues,
    classify_line,
)
from .size_report import SizeReport

__all__ = [
    "SizeReport",
    "BuildIssue",
    "IssueKind",
    "Diagnostic",
    "Continuation",
    "classify_line",
    "aggregate_issues",
    "BinaryInfo",
    "BuildResult",
    "CompileSuccess",
    "CompileFailure",
    "interpret_compile_response",
    "SizeReportPrinter",
    "IssuePrinter",
]
