"""CLI application entry point and command routing for buildcli.

This module is the **sole error boundary** for the entire application.
It catches :class:`~buildcli.exceptions.BuildCLIError`, ``KeyboardInterrupt``,
and any unexpected ``Exception``, rendering user-friendly messages via Rich
and returning well-defined exit codes.

Architecture notes
------------------
* No business logic lives here — the update check is delegated to
  :class:`~buildcli.core.orchestrator.UpdateOrchestrator`, wired to its
  infrastructure collaborators by :func:`build_orchestrator`.
* The banner goes to plain stdout; update-flow messages go through the
  ``buildcli`` logger.
* This module is the only place that translates between the domain world
  and the OS process exit code.
"""

from __future__ import annotations

import argparse
import sys
from typing import TYPE_CHECKING

from buildcli.cli import exit_codes
from buildcli.cli.console import console
from buildcli.exceptions import BuildCLIError
from buildcli.version import __version__

if TYPE_CHECKING:
    from buildcli.config import BuildCLIConfig
    from buildcli.core.models import UpdateReport
    from buildcli.core.orchestrator import UpdateOrchestrator
    from buildcli.core.protocols import Confirm


# ---------------------------------------------------------------------------
# Argument parser
# ---------------------------------------------------------------------------

def _build_parser() -> argparse.ArgumentParser:
    """Construct the top-level argument parser.

    * ``buildcli``          — banner, startup update check, help
    * ``buildcli update``   — banner and an explicit update check
    * ``buildcli doctor``   — environment diagnostics
    * ``buildcli --version``
    """
    parser = argparse.ArgumentParser(
        prog="buildcli",
        description="Project build tooling with self-update.",
    )
    parser.add_argument(
        "-V",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "-c",
        "--config",
        default=None,
        help="Path to a YAML configuration file.",
    )
    parser.add_argument(
        "--no-update-check",
        action="store_true",
        help="Skip the startup update check.",
    )
    parser.add_argument(
        "target",
        nargs="?",
        default=None,
        help="'update' to check for a newer BuildCLI, or 'doctor' to run diagnostics.",
    )
    return parser


# ---------------------------------------------------------------------------
# Wiring
# ---------------------------------------------------------------------------

def build_orchestrator(
    config: BuildCLIConfig,
    confirm: Confirm | None = None,
) -> UpdateOrchestrator:
    """Assemble the update orchestrator with its production collaborators."""
    from buildcli.cli.confirm_prompt import confirm as questionary_confirm
    from buildcli.core.orchestrator import UpdateOrchestrator
    from buildcli.core.probe import RepositoryProbe
    from buildcli.infra.build_runner import SubprocessBuildRunner
    from buildcli.infra.filesystem import FileInstaller
    from buildcli.infra.git_executor import GitCommandExecutor
    from buildcli.infra.locator import InstallationLocator

    return UpdateOrchestrator(
        locator=InstallationLocator(),
        probe=RepositoryProbe(GitCommandExecutor()),
        builder=SubprocessBuildRunner(config.update.build_command),
        installer=FileInstaller(),
        confirm=confirm or questionary_confirm,
        settings=config.update.to_settings(),
    )


# ---------------------------------------------------------------------------
# Command dispatch
# ---------------------------------------------------------------------------

def _run_update_check(config: BuildCLIConfig) -> UpdateReport:
    return build_orchestrator(config).run()


def _handle_update(config: BuildCLIConfig) -> int:
    """Print the banner, run the update check, map the outcome to an exit code."""
    from buildcli.cli.banner import print_welcome

    print_welcome(config.banner)
    report = _run_update_check(config)
    if report.failed:
        return exit_codes.UPDATE_FAILED
    return exit_codes.SUCCESS


def _handle_doctor(config: BuildCLIConfig) -> int:
    """Dispatch the ``doctor`` diagnostics command."""
    from buildcli.cli.doctor import run_doctor

    return run_doctor(config)


def _handle_default(
    config: BuildCLIConfig,
    parser: argparse.ArgumentParser,
    *,
    check_updates: bool,
) -> int:
    from buildcli.cli.banner import print_welcome

    print_welcome(config.banner)
    if check_updates and config.update.check_on_startup:
        _run_update_check(config)
    parser.print_help()
    return exit_codes.SUCCESS


# ---------------------------------------------------------------------------
# Main entry point
# ---------------------------------------------------------------------------

def main(argv: list[str] | None = None) -> int:
    """Run the buildcli CLI.

    Parameters
    ----------
    argv:
        Explicit argument list.  When ``None`` (default), ``sys.argv[1:]``
        is used.

    Returns
    -------
    int
        OS process exit code.
    """
    from buildcli.config import load_config
    from buildcli.logging import setup_logging

    parser = _build_parser()
    args = parser.parse_args(argv)

    config = load_config(args.config)
    setup_logging(config.logging)

    if args.target is None:
        return _handle_default(config, parser, check_updates=not args.no_update_check)

    target: str = args.target.lower()

    if target == "update":
        return _handle_update(config)

    if target == "doctor":
        return _handle_doctor(config)

    parser.error(f"unknown command: {args.target}")
    return exit_codes.GENERAL_ERROR  # pragma: no cover


# ---------------------------------------------------------------------------
# Script-level error boundary
# ---------------------------------------------------------------------------

def cli() -> None:
    """Top-level error boundary invoked by the console-script entry point.

    This function wraps :func:`main` and guarantees the process never
    exits with a raw stack trace during normal usage.
    """
    try:
        code = main()
        sys.exit(code)
    except BuildCLIError as exc:
        console.error(exc)
        sys.exit(exit_codes.GENERAL_ERROR)
    except KeyboardInterrupt:
        console.print("\n[yellow]Aborted by user.[/yellow]")
        sys.exit(exit_codes.KEYBOARD_INTERRUPT)
    except Exception as exc:  # noqa: BLE001
        console.print(
            "[bold red]Unexpected error.[/bold red] "
            "Please report this issue.\n"
            f"  {type(exc).__name__}: {exc}"
        )
        sys.exit(exit_codes.UNEXPECTED_ERROR)
