"""CLI utility functions for cloudflash.

This module provides common utilities used across CLI commands including:
- Source file collection for compile requests
- Error handling and formatting
"""

import sys
from pathlib import Path
from typing import Iterable, List

from cloudflash.cloud import SourceFile
from cloudflash.errors import AuthError, CloudError, ConfigError

SOURCE_EXTENSIONS = {".c", ".cpp", ".h", ".hpp", ".ino", ".properties"}


class SourceCollector:
    """Collects source files to submit for compilation."""

    @staticmethod
    def collect(paths: Iterable[Path]) -> List[SourceFile]:
        """Collect sources from files and directories.

        Files are taken as given, under their own name. Directories are
        searched recursively for source files, which are named relative to
        the directory with forward slashes (e.g. ``lib/sensor.h``).

        Args:
            paths: Files or directories

        Returns:
            Source files in a stable order

        Raises:
            FileNotFoundError: If a path doesn't exist
            ValueError: If no source files were found
        """
        sources: List[SourceFile] = []

        for path in paths:
            path = Path(path)
            if not path.exists():
                raise FileNotFoundError(f"Source not found: {path}")

            if path.is_dir():
                for file_path in sorted(path.rglob("*")):
                    if file_path.is_file() and file_path.suffix.lower() in SOURCE_EXTENSIONS:
                        name = file_path.relative_to(path).as_posix()
                        sources.append(SourceFile.from_path(file_path, name))
            else:
                sources.append(SourceFile.from_path(path))

        if not sources:
            raise ValueError("No source files found")

        return sources


class ErrorFormatter:
    """Formats and displays error messages with ANSI color codes."""

    # ANSI color codes
    RED = "\033[1;31m"
    GREEN = "\033[1;32m"
    YELLOW = "\033[1;33m"
    RESET = "\033[0m"

    @staticmethod
    def print_error(title: str, message: str) -> None:
        """Print formatted error message.

        Args:
            title: Error title (e.g., "File not found", "Compile failed")
            message: Error message details
        """
        print()
        print(f"{ErrorFormatter.RED}✗ {title}{ErrorFormatter.RESET}")
        print()
        if message:
            print(message)
            print()

    @staticmethod
    def print_success(message: str) -> None:
        """Print formatted success message."""
        print()
        print(f"{ErrorFormatter.GREEN}✓ {message}{ErrorFormatter.RESET}")

    @staticmethod
    def print_warning(message: str) -> None:
        """Print formatted warning message."""
        print()
        print(f"{ErrorFormatter.YELLOW}✗ {message}{ErrorFormatter.RESET}")

    @staticmethod
    def handle_file_not_found(error: FileNotFoundError) -> None:
        """Handle FileNotFoundError with standard formatting."""
        ErrorFormatter.print_error("Error: File not found", str(error))
        sys.exit(1)

    @staticmethod
    def handle_auth_error(error: AuthError) -> None:
        """Handle a missing or rejected access token."""
        ErrorFormatter.print_error("Error: Authentication failed", str(error))
        sys.exit(1)

    @staticmethod
    def handle_config_error(error: ConfigError) -> None:
        """Handle an unreadable or invalid configuration."""
        ErrorFormatter.print_error("Error: Invalid configuration", str(error))
        sys.exit(2)

    @staticmethod
    def handle_cloud_error(error: CloudError) -> None:
        """Handle a failed cloud request."""
        ErrorFormatter.print_error("Error: Cloud request failed", f"{type(error).__name__}: {error}")
        sys.exit(1)

    @staticmethod
    def handle_keyboard_interrupt() -> None:
        """Handle KeyboardInterrupt with standard formatting."""
        ErrorFormatter.print_warning("Interrupted")
        sys.exit(130)  # Standard exit code for SIGINT

    @staticmethod
    def handle_unexpected_error(error: Exception, verbose: bool = False) -> None:
        """Handle unexpected errors with standard formatting.

        Args:
            error: The exception to handle
            verbose: Whether to print traceback
        """
        message = f"{type(error).__name__}: {error}"
        ErrorFormatter.print_error("Unexpected error", message)

        if verbose:
            import traceback

            print("Traceback:")
            print(traceback.format_exc())

        sys.exit(1)
