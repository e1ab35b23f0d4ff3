"""Command-line entry point for netcfg-generator.

Renders an interface document as a netplan or ifupdown configuration file.
The file is only written, never applied.

Usage:
    python -m netcfg_generator [document] [-f netplan|ifupdown] [--os ID] [-o OUTPUT]

Arguments:
    document: Path to a YAML or JSON interface document (default: interfaces.yaml)
"""

import argparse
import logging
import os
import sys
from pathlib import Path

from netcfg_generator.errors import ErrorCollector
from netcfg_generator.generators import NETPLAN_FILE_MODE, render_ifupdown, render_netplan
from netcfg_generator.models import DEFAULT_PROFILE_ID, OS_PROFILES
from netcfg_generator.parser import parse_document
from netcfg_generator.validation import validate_interfaces

logger = logging.getLogger(__name__)

# Exit codes
EXIT_SUCCESS = 0
EXIT_DOCUMENT_ERROR = 1
EXIT_WRITE_ERROR = 2


def setup_logging(verbose: bool = False) -> None:
    """Configure logging for the application.

    Logs go to stderr so the rendered document can be piped from stdout.

    Args:
        verbose: If True, use DEBUG level. Otherwise, use INFO.
    """
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stderr,
    )


def write_output(text: str, output_path: str, file_mode: int | None = None) -> None:
    """Write rendered text to a file.

    Args:
        text: Rendered document
        output_path: Destination path
        file_mode: Permission bits to apply after writing (e.g., 0o600)

    Raises:
        OSError: If the file cannot be written
    """
    path = Path(output_path)
    path.write_text(text)
    if file_mode is not None:
        os.chmod(path, file_mode)
    logger.info("Wrote %s", path)


def generate_file(
    document_path: str,
    output_format: str = "netplan",
    os_id: str | None = None,
    output_path: str | None = None,
) -> int:
    """Parse a document, report findings, and render it.

    Validation findings are logged but never stop rendering. Interface
    entries dropped by the parser still produce output for the rest of the
    document, but the exit code is then EXIT_DOCUMENT_ERROR.

    Args:
        document_path: Path to the interface document
        output_format: "netplan" or "ifupdown"
        os_id: OS profile id overriding the document's ``os`` key
        output_path: Destination file, or None to print to stdout

    Returns:
        Exit code (0 for success, 1 if the document is unusable or had
        invalid entries, 2 if the output cannot be written)
    """
    error_collector = ErrorCollector()

    try:
        logger.info("Reading interfaces from %s", document_path)
        document = parse_document(document_path, error_collector=error_collector)
    except FileNotFoundError as e:
        logger.error("%s", e)
        return EXIT_DOCUMENT_ERROR
    except ValueError as e:
        logger.error("Failed to parse document: %s", e)
        return EXIT_DOCUMENT_ERROR

    validate_interfaces(document.interfaces, error_collector)
    if error_collector.has_errors() or error_collector.has_warnings():
        error_collector.log_summary()

    if output_format == "ifupdown":
        text = render_ifupdown(document.interfaces)
        file_mode = None
    else:
        text = render_netplan(os_id or document.os, document.interfaces)
        file_mode = NETPLAN_FILE_MODE

    if output_path is None:
        sys.stdout.write(text)
    else:
        try:
            write_output(text, output_path, file_mode)
        except OSError as e:
            logger.error("Failed to write %s: %s", output_path, e)
            return EXIT_WRITE_ERROR

    return EXIT_DOCUMENT_ERROR if error_collector.has_errors() else EXIT_SUCCESS


def main(argv: list[str] | None = None) -> int:
    """Main entry point.

    Args:
        argv: Command-line arguments (default: sys.argv[1:])

    Returns:
        Exit code.
    """
    parser = argparse.ArgumentParser(
        description="Render network interface settings as netplan or ifupdown configuration",
        prog="python -m netcfg_generator",
    )
    parser.add_argument(
        "document",
        nargs="?",
        default="interfaces.yaml",
        help="Path to the YAML or JSON interface document (default: interfaces.yaml)",
    )
    parser.add_argument(
        "-f",
        "--format",
        choices=["netplan", "ifupdown"],
        default="netplan",
        help="Output format (default: netplan)",
    )
    parser.add_argument(
        "--os",
        dest="os_id",
        default=None,
        help=f"Target OS profile id, overrides the document (default: {DEFAULT_PROFILE_ID})",
    )
    parser.add_argument(
        "-o",
        "--output",
        default=None,
        help="Write to this file instead of stdout (netplan files get mode 600)",
    )
    parser.add_argument(
        "--list-os",
        action="store_true",
        help="List the available OS profiles and exit",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose (debug) logging",
    )

    args = parser.parse_args(argv)

    setup_logging(verbose=args.verbose)

    if args.list_os:
        for profile in OS_PROFILES:
            print(f"{profile.id:<14} {profile.style.value:<7} {profile.display_name}")
        return EXIT_SUCCESS

    return generate_file(
        document_path=args.document,
        output_format=args.format,
        os_id=args.os_id,
        output_path=args.output,
    )


if __name__ == "__main__":
    sys.exit(main())
