"""CLI utility functions for gdforge.

This module provides common utilities used across CLI commands including:
- Success message rendering for each command
- Error handling and formatting
- Logging setup
- Project directory validation
"""

import logging
import sys
from pathlib import Path

from gdforge.commands import CommandReport
from gdforge.errors import GdforgeError, InvalidProjectError, TargetOperationError


def setup_logging(verbose: bool = False) -> None:
    """Configure the root logger for CLI use."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


class MessageFormatter:
    """Renders the one-line success message of each command."""

    @staticmethod
    def describe(report: CommandReport) -> str:
        """Describe a successful command report.

        Args:
            report: Report returned by ProjectCommands

        Returns:
            Human-readable description (without colour)
        """
        succeeded = [result.target for result in report.results if result.success]

        if report.operation == "build":
            places = ",".join(f"lib/{target.triple}" for target in succeeded)
            return f"A library was created at {places} with a {report.profile} profile"
        if report.operation == "export":
            places = ",".join(f"bin/{target.triple}" for target in succeeded)
            return f"A game was created at {places} with a {report.profile} profile"
        if report.operation == "clean":
            return "The project is now clean from excess artifacts"
        if report.operation == "run":
            return f"The game was run as a {report.detail} application"
        return f"{report.operation} finished"


class ErrorFormatter:
    """Formats and displays messages with ANSI color codes."""

    # ANSI color codes
    RED = "\033[1;31m"
    GREEN = "\033[1;32m"
    YELLOW = "\033[1;33m"
    RESET = "\033[0m"

    @staticmethod
    def print_error(title: str, message: str) -> None:
        """Print formatted error message.

        Args:
            title: Error title (e.g., "Build failed")
            message: Error message details
        """
        print(f"{ErrorFormatter.RED}✗ {title}{ErrorFormatter.RESET} {message}", file=sys.stderr)

    @staticmethod
    def print_success(message: str) -> None:
        """Print formatted success message."""
        print(f"{ErrorFormatter.GREEN}✓ SUCCESS:{ErrorFormatter.RESET} {message}")

    @staticmethod
    def print_warning(message: str) -> None:
        """Print formatted warning message."""
        print(f"{ErrorFormatter.YELLOW}! {message}{ErrorFormatter.RESET}", file=sys.stderr)

    @staticmethod
    def print_report_failures(report: CommandReport) -> None:
        """Print one line per failed target of a best-effort report."""
        for result in report.failures:
            ErrorFormatter.print_error("ERROR:", str(result.error))

    @staticmethod
    def handle_gdforge_error(error: GdforgeError) -> None:
        """Handle a typed gdforge error with a one-line diagnostic and exit 1."""
        ErrorFormatter.print_error("ERROR:", str(error))
        if isinstance(error, InvalidProjectError):
            print("Make sure you're in a gdforge project directory.", file=sys.stderr)
        elif isinstance(error, TargetOperationError):
            logging.getLogger(__name__).debug("Caused by %r", error.cause)
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

            print("Traceback:", file=sys.stderr)
            print(traceback.format_exc(), file=sys.stderr)

        sys.exit(1)


class PathValidator:
    """Validates project paths and directories."""

    @staticmethod
    def validate_project_dir(project_dir: Path) -> None:
        """Validate that project directory exists and is a directory.

        Raises:
            SystemExit: If path doesn't exist or isn't a directory
        """
        if not project_dir.exists():
            ErrorFormatter.print_error("Error:", f"Path does not exist: {project_dir}")
            sys.exit(2)
        if not project_dir.is_dir():
            ErrorFormatter.print_error("Error:", f"Path is not a directory: {project_dir}")
            sys.exit(2)
