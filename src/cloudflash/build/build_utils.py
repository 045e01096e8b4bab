"""Build output utilities for cloudflash.

This module provides helpers for printing firmware size information and
compiler issues from a compile result.
"""

from typing import List, Optional

from .diagnostics import BuildIssue, IssueKind
from .size_report import SizeReport


class SizeReportPrinter:
    """Utility class for printing firmware size information."""

    @staticmethod
    def format_size_report(size_info: SizeReport) -> List[str]:
        """Format a size report as display lines."""
        return [
            "Firmware Size:",
            f"  Text:     {size_info.text:6d} bytes",
            f"  Data:     {size_info.data:6d} bytes",
            f"  BSS:      {size_info.bss:6d} bytes",
            f"  Total:    {size_info.size:6d} bytes",
        ]

    @staticmethod
    def print_size_info(size_info: Optional[SizeReport]) -> None:
        """
        Print firmware size information in a formatted display.

        Args:
            size_info: Size report from a compile (None to skip printing)
        """
        if not size_info:
            return

        for line in SizeReportPrinter.format_size_report(size_info):
            print(line)


class IssuePrinter:
    """Utility class for printing compiler warnings and errors."""

    RED = "\033[1;31m"
    YELLOW = "\033[1;33m"
    RESET = "\033[0m"

    @staticmethod
    def format_issue(issue: BuildIssue, color: bool = False) -> str:
        """Format an issue as ``path:line:column: kind: message``."""
        text = f"{issue.path}:{issue.line}:{issue.column}: {issue.kind.value}: {issue.message}"
        if not color:
            return text
        code = IssuePrinter.RED if issue.kind is IssueKind.ERROR else IssuePrinter.YELLOW
        return f"{code}{text}{IssuePrinter.RESET}"

    @staticmethod
    def summarize(issues: List[BuildIssue]) -> str:
        """Summarize issue counts, e.g. ``2 error(s), 1 warning(s)``."""
        errors = sum(1 for issue in issues if issue.kind is IssueKind.ERROR)
        warnings = len(issues) - errors
        return f"{errors} error(s), {warnings} warning(s)"

    @staticmethod
    def print_issues(issues: List[BuildIssue], color: bool = True) -> None:
        """Print each issue followed by a summary line."""
        for issue in issues:
            print(IssuePrinter.format_issue(issue, color=color))
        print()
        print(IssuePrinter.summarize(issues))
