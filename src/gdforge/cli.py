"""
Command-line interface for gdforge.

This module provides the `gdforge` CLI tool for building, exporting and
running Godot games whose native code is written in Rust.
"""

import argparse
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from gdforge.cli_utils import (
    ErrorFormatter,
    MessageFormatter,
    PathValidator,
    setup_logging,
)
from gdforge.commands import CommandReport, ProjectCommands
from gdforge.config import (
    BuildProfile,
    MachineType,
    load_configuration,
    parse_target_list,
)
from gdforge.errors import GdforgeError


@dataclass
class TargetArgs:
    """Arguments for the build and export commands."""

    project_dir: Path
    targets: Optional[str] = None
    build_type: Optional[str] = None
    keep_going: bool = False
    verbose: bool = False


@dataclass
class CleanArgs:
    """Arguments for the clean command."""

    project_dir: Path
    verbose: bool = False


@dataclass
class RunArgs:
    """Arguments for the run command."""

    project_dir: Path
    machine_type: Optional[str] = None
    verbose: bool = False


def _finish(report: CommandReport, verbose: bool) -> None:
    if report.failures:
        ErrorFormatter.print_report_failures(report)
        succeeded = [result for result in report.results if result.success]
        if succeeded:
            ErrorFormatter.print_warning(f"{len(succeeded)} of {len(report.results)} targets succeeded")
        sys.exit(1)

    ErrorFormatter.print_success(MessageFormatter.describe(report))
    if verbose:
        print(f"Time: {report.build_time:.2f}s")
    sys.exit(0)


def _target_command(operation: str, args: TargetArgs) -> None:
    setup_logging(args.verbose)

    try:
        config = load_configuration(args.project_dir)
        targets = parse_target_list(args.targets or "")
        profile = BuildProfile.parse(args.build_type or "")

        if args.verbose:
            print(f"Project: {args.project_dir}")
            print(f"Targets: {', '.join(target.value for target in targets)}")
            print(f"Profile: {profile}")
            print()

        commands = ProjectCommands(args.project_dir, config, fail_fast=not args.keep_going)
        if operation == "export":
            report = commands.export(targets, profile)
        else:
            report = commands.build(targets, profile)
        _finish(report, args.verbose)

    except GdforgeError as e:
        ErrorFormatter.handle_gdforge_error(e)
    except KeyboardInterrupt:
        ErrorFormatter.handle_keyboard_interrupt()
    except Exception as e:
        ErrorFormatter.handle_unexpected_error(e, args.verbose)


def build_command(args: TargetArgs) -> None:
    """Build the native library for one or more targets.

    Examples:
        gdforge build                                  # Debug build for this machine
        gdforge build linux-x86_64 release             # Release build for Linux
        gdforge build linux-x86_64,windows-x86_64      # Several targets
        gdforge build android-aarch64 --keep-going     # Report every failing target
    """
    _target_command("build", args)


def export_command(args: TargetArgs) -> None:
    """Build and export the game for one or more targets.

    Examples:
        gdforge export                                 # Debug export for this machine
        gdforge export macos-x86_64,ios-aarch64 release
    """
    _target_command("export", args)


def clean_command(args: CleanArgs) -> None:
    """Remove build artifacts from the project."""
    setup_logging(args.verbose)

    try:
        config = load_configuration(args.project_dir)
        report = ProjectCommands(args.project_dir, config).clean()
        _finish(report, args.verbose)

    except GdforgeError as e:
        ErrorFormatter.handle_gdforge_error(e)
    except KeyboardInterrupt:
        ErrorFormatter.handle_keyboard_interrupt()
    except Exception as e:
        ErrorFormatter.handle_unexpected_error(e, args.verbose)


def run_command(args: RunArgs) -> None:
    """Build the debug library for this machine and run the game.

    Examples:
        gdforge run                # Run as a desktop application
        gdforge run server         # Run the headless server (linux-x86_64 only)
    """
    setup_logging(args.verbose)

    try:
        config = load_configuration(args.project_dir)
        machine_type = MachineType.parse(args.machine_type or "")
        report = ProjectCommands(args.project_dir, config).run(machine_type)
        _finish(report, args.verbose)

    except GdforgeError as e:
        ErrorFormatter.handle_gdforge_error(e)
    except KeyboardInterrupt:
        ErrorFormatter.handle_keyboard_interrupt()
    except Exception as e:
        ErrorFormatter.handle_unexpected_error(e, args.verbose)


def _add_common_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "-C",
        "--project-dir",
        type=Path,
        default=Path.cwd(),
        help="Project directory (default: current directory)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Show verbose output",
    )


def _add_target_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "targets",
        nargs="?",
        default=None,
        help="Comma-separated platform targets (default: this machine)",
    )
    parser.add_argument(
        "build_type",
        nargs="?",
        default=None,
        help="Build profile: debug or release (default: debug)",
    )
    parser.add_argument(
        "--keep-going",
        action="store_true",
        help="Attempt every target and report all failures instead of stopping at the first",
    )
    _add_common_arguments(parser)


def main() -> None:
    """gdforge - Build, export and run Godot games with Rust native code."""
    parser = argparse.ArgumentParser(
        prog="gdforge",
        description="gdforge - Build, export and run Godot games with Rust native code",
    )
    parser.add_argument(
        "--version",
        action="version",
        version="gdforge 0.1.0",
    )

    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    build_parser = subparsers.add_parser(
        "build",
        help="Build the native library",
    )
    _add_target_arguments(build_parser)

    export_parser = subparsers.add_parser(
        "export",
        help="Build and export the game",
    )
    _add_target_arguments(export_parser)

    clean_parser = subparsers.add_parser(
        "clean",
        help="Remove build artifacts",
    )
    _add_common_arguments(clean_parser)

    run_parser = subparsers.add_parser(
        "run",
        help="Build and run the game on this machine",
    )
    run_parser.add_argument(
        "machine_type",
        nargs="?",
        default=None,
        help="desktop or server (default: desktop)",
    )
    _add_common_arguments(run_parser)

    # Parse arguments
    parsed_args = parser.parse_args()

    # If no command specified, show help
    if not parsed_args.command:
        parser.print_help()
        sys.exit(0)

    PathValidator.validate_project_dir(parsed_args.project_dir)

    if parsed_args.command in ("build", "export"):
        target_args = TargetArgs(
            project_dir=parsed_args.project_dir,
            targets=parsed_args.targets,
            build_type=parsed_args.build_type,
            keep_going=parsed_args.keep_going,
            verbose=parsed_args.verbose,
        )
        if parsed_args.command == "build":
            build_command(target_args)
        else:
            export_command(target_args)
    elif parsed_args.command == "clean":
        clean_command(CleanArgs(project_dir=parsed_args.project_dir, verbose=parsed_args.verbose))
    elif parsed_args.command == "run":
        run_args = RunArgs(
            project_dir=parsed_args.project_dir,
            machine_type=parsed_args.machine_type,
            verbose=parsed_args.verbose,
        )
        run_command(run_args)


if __name__ == "__main__":
    main()
