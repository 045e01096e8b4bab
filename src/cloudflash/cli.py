"""
Command-line interface for cloudflash.

This module provides the `cloudflash` CLI tool for compiling firmware in the
cloud, downloading compiled binaries and flashing devices over the air.
"""

import argparse
import logging
import sys
import time
from dataclasses import dataclass, field
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import List, Optional

from cloudflash import __version__
from cloudflash.build import CompileSuccess, IssuePrinter, SizeReportPrinter
from cloudflash.cli_utils import ErrorFormatter, SourceCollector
from cloudflash.cloud import CloudClient, Product, RequestsTransport
from cloudflash.config import CloudConfig
from cloudflash.errors import AuthError, CloudError, ConfigError

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


@dataclass
class CompileArgs:
    """Arguments for the compile command."""

    sources: List[Path] = field(default_factory=list)
    product: str = "photon"
    target_version: Optional[str] = None
    output: Optional[Path] = None
    config: Optional[Path] = None
    verbose: bool = False


@dataclass
class DownloadArgs:
    """Arguments for the download command."""

    binary_id: str
    output: Path
    config: Optional[Path] = None
    verbose: bool = False


@dataclass
class FlashArgs:
    """Arguments for the flash command."""

    device_id: str
    firmware: Path
    config: Optional[Path] = None
    verbose: bool = False


def setup_logging(verbose: bool = False, log_file: Optional[Path] = None) -> None:
    """Setup logging for the CLI.

    Args:
        verbose: Log debug messages to the console
        log_file: Optional file to also log to (rotated at 10MB)
    """
    logger = logging.getLogger()
    logger.setLevel(logging.DEBUG if verbose or log_file else logging.WARNING)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(logging.DEBUG if verbose else logging.WARNING)
    console_handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(console_handler)

    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            str(log_file),
            maxBytes=10 * 1024 * 1024,  # 10MB
            backupCount=3,
        )
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(file_handler)


def create_client(config_path: Optional[Path]) -> CloudClient:
    """Create a cloud client from configuration."""
    config = CloudConfig.load(config_path)
    return CloudClient(
        config.token_provider(),
        transport=RequestsTransport(timeout=config.timeout),
        api_url=config.api_url,
    )


def _handle_errors(error: BaseException, verbose: bool) -> None:
    """Report an exception raised by a command and exit."""
    if isinstance(error, FileNotFoundError):
        ErrorFormatter.handle_file_not_found(error)
    elif isinstance(error, ConfigError):
        ErrorFormatter.handle_config_error(error)
    elif isinstance(error, AuthError):
        ErrorFormatter.handle_auth_error(error)
    elif isinstance(error, CloudError):
        ErrorFormatter.handle_cloud_error(error)
    elif isinstance(error, KeyboardInterrupt):
        ErrorFormatter.handle_keyboard_interrupt()
    else:
        ErrorFormatter.handle_unexpected_error(error, verbose)


def compile_command(args: CompileArgs) -> None:
    """Compile firmware sources in the cloud.

    Examples:
        cloudflash compile src/                    # Compile a project directory
        cloudflash compile app.ino -p electron     # Compile for Electron
        cloudflash compile src/ -t 1.4.4           # Build against firmware 1.4.4
        cloudflash compile src/ -o firmware.bin    # Download the binary
    """
    print(f"cloudflash v{__version__}")
    print()

    try:
        product = Product.from_value(args.product)
        sources = SourceCollector.collect(args.sources)
        client = create_client(args.config)

        print(f"Compiling {len(sources)} file(s) for {product.display_name}...")
        if args.verbose:
            for source in sources:
                print(f"  {source.name}")

        start_time = time.time()
        result = client.compile(sources, product, args.target_version)
        compile_time = time.time() - start_time

        if isinstance(result, CompileSuccess):
            binary = result.binary
            ErrorFormatter.print_success("Compile successful!")
            print()
            print(f"Binary:  {binary.binary_id}")
            print(f"Expires: {binary.expires.isoformat()}")
            print()
            SizeReportPrinter.print_size_info(binary.size_info)

            if args.output:
                client.download_binary(binary, args.output, show_progress=True)
                print()
                print(f"Firmware: {args.output}")

            print()
            print(f"Compile time: {compile_time:.2f}s")
            sys.exit(0)

        ErrorFormatter.print_error("Compile failed!", result.output)
        if result.issues:
            IssuePrinter.print_issues(result.issues)
        else:
            # Nothing parsed as a diagnostic; show the raw output instead
            for error in result.errors:
                print(error)
            if result.stdout:
                print(result.stdout)
        sys.exit(1)

    except ValueError as e:
        ErrorFormatter.print_error("Error: Invalid arguments", str(e))
        sys.exit(2)
    except (Exception, KeyboardInterrupt) as e:
        _handle_errors(e, args.verbose)


def download_command(args: DownloadArgs) -> None:
    """Download a compiled binary.

    Examples:
        cloudflash download 5a1b... -o firmware.bin
    """
    try:
        client = create_client(args.config)
        data = client.download_binary(args.binary_id, args.output, show_progress=True)
        ErrorFormatter.print_success(f"Downloaded {len(data)} bytes to {args.output}")
        sys.exit(0)
    except (Exception, KeyboardInterrupt) as e:
        _handle_errors(e, args.verbose)


def flash_command(args: FlashArgs) -> None:
    """Flash a device over the air.

    Examples:
        cloudflash flash 0123456789abcdef firmware.bin
    """
    try:
        if not args.firmware.is_file():
            raise FileNotFoundError(f"Firmware not found: {args.firmware}")

        client = create_client(args.config)
        status = client.flash(args.device_id, args.firmware.read_bytes())
        ErrorFormatter.print_success(f"{args.device_id}: {status}")
        sys.exit(0)
    except (Exception, KeyboardInterrupt) as e:
        _handle_errors(e, args.verbose)


def _add_common_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Config file (default: $CLOUDFLASH_CONFIG or ~/.cloudflash/config.ini)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Show verbose output",
    )
    parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help="Also write debug logs to this file",
    )


def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the cloudflash CLI."""
    parser = argparse.ArgumentParser(
        prog="cloudflash",
        description="cloudflash - Compile and flash firmware through the cloud",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"cloudflash {__version__}",
    )

    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    # Compile command
    compile_parser = subparsers.add_parser(
        "compile",
        help="Compile firmware sources in the cloud",
    )
    compile_parser.add_argument(
        "sources",
        nargs="+",
        type=Path,
        help="Source files or project directories",
    )
    compile_parser.add_argument(
        "-p",
        "--product",
        default="photon",
        help="Product to build for: core, photon, electron or a numeric id (default: photon)",
    )
    compile_parser.add_argument(
        "-t",
        "--target-version",
        default=None,
        help="Firmware version to build against (default: latest)",
    )
    compile_parser.add_argument(
        "-o",
        "--output",
        type=Path,
        default=None,
        help="Download the compiled binary to this file",
    )
    _add_common_arguments(compile_parser)

    # Download command
    download_parser = subparsers.add_parser(
        "download",
        help="Download a compiled binary",
    )
    download_parser.add_argument("binary_id", help="Binary id reported by compile")
    download_parser.add_argument(
        "-o",
        "--output",
        type=Path,
        required=True,
        help="Destination file",
    )
    _add_common_arguments(download_parser)

    # Flash command
    flash_parser = subparsers.add_parser(
        "flash",
        help="Flash a device over the air",
    )
    flash_parser.add_argument("device_id", help="Device to flash")
    flash_parser.add_argument("firmware", type=Path, help="Firmware binary")
    _add_common_arguments(flash_parser)

    return parser


def main(argv: Optional[List[str]] = None) -> None:
    """cloudflash - Compile and flash firmware through the cloud."""
    parser = build_parser()
    parsed_args = parser.parse_args(argv)

    # If no command specified, show help
    if not parsed_args.command:
        parser.print_help()
        sys.exit(0)

    setup_logging(parsed_args.verbose, parsed_args.log_file)

    # Execute command
    if parsed_args.command == "compile":
        compile_command(
            CompileArgs(
                sources=parsed_args.sources,
                product=parsed_args.product,
                target_version=parsed_args.target_version,
                output=parsed_args.output,
                config=parsed_args.config,
                verbose=parsed_args.verbose,
            )
        )
    elif parsed_args.command == "download":
        download_command(
            DownloadArgs(
                binary_id=parsed_args.binary_id,
                output=parsed_args.output,
                config=parsed_args.config,
                verbose=parsed_args.verbose,
            )
        )
    elif parsed_args.command == "flash":
        flash_command(
            FlashArgs(
                device_id=parsed_args.device_id,
                firmware=parsed_args.firmware,
                config=parsed_args.config,
                verbose=parsed_args.verbose,
            )
        )


if __name__ == "__main__":
    main()
