"""Command-line entry point for diagnosing Linux audio."""

from __future__ import annotations

import argparse
from pathlib import Path
import sys

from why_no_sound import __version__
from why_no_sound.checks import CHECKS
from why_no_sound.config.controller import ConfigController, ConfigError, Settings
from why_no_sound.core.command_hal import CommandRunner, SubprocessCommandRunner
from why_no_sound.core.logging import (
    disable_file_logging,
    enable_file_logging,
    log_error,
    log_warning,
    set_verbosity,
)
from why_no_sound.diagnostics.models import DiagnosticReport
from why_no_sound.diagnostics.report import build_report, strip_evidence
from why_no_sound.diagnostics.runner import format_report, report_to_json, run_diagnostics


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""

    parser = argparse.ArgumentParser(
        prog="why-no-sound",
        description="Diagnose why Linux audio isn't working.",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Output results as JSON.",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Include the raw command output each check was based on.",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log every command and check outcome to stderr.",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Exit with status 1 when any check reports an error.",
    )
    parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help="Optional file receiving a debug log of the run.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser.parse_args(argv)


def diagnose(runner: CommandRunner, settings: Settings, debug: bool = False) -> DiagnosticReport:
    """Run every check in order and aggregate the results."""

    report = build_report(run_diagnostics(CHECKS, runner, settings))
    return report if debug else strip_evidence(report)


def main(argv: list[str] | None = None, runner: CommandRunner | None = None) -> int:
    """Run diagnostics and return an exit code."""

    args = parse_args(argv)
    set_verbosity(args.verbose)

    try:
        settings = ConfigController.get_instance().get_settings()
    except ConfigError as exc:
        log_error(str(exc))
        return 2

    log_file = args.log_file or settings.log_file
    file_logging = False
    if log_file is not None:
        try:
            enable_file_logging(log_file)
            file_logging = True
        except OSError as exc:
            log_warning(f"Cannot open log file {log_file}: {exc}")

    try:
        report = diagnose(runner or SubprocessCommandRunner(), settings, debug=args.debug)
    finally:
        if file_logging:
            disable_file_logging()

    if args.json:
        sys.stdout.write(report_to_json(report) + "\n")
    else:
        sys.stdout.write(format_report(report, debug=args.debug) + "\n")

    if args.strict and report.has_errors:
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
