"""``buildcli doctor`` — self-update environment diagnostics.

Gathers what the update check depends on (git, the build tool, the
installation directory and its working copy) and renders a Rich table
summarising it.

This module lives in the CLI layer — it may import from ``infra``
and ``core``, and it renders via Rich.  It only collects and displays
diagnostic data; it never pulls, builds or installs.
"""

from __future__ import annotations

import platform
import shutil
import sys
from pathlib import Path

from buildcli.cli import exit_codes
from buildcli.cli.console import console
from buildcli.config import BuildCLIConfig
from buildcli.exceptions import ManifestReadError, VcsCommandError
from buildcli.infra.git_executor import GitCommandExecutor
from buildcli.infra.locator import InstallationLocator
from buildcli.version import __version__

Row = tuple[str, str, str]


# ---------------------------------------------------------------------------
# Diagnostic collectors
# ---------------------------------------------------------------------------

def _buildcli_version_check() -> Row:
    """Return (label, value, status) for the buildcli version row."""
    return "buildcli", __version__, "[green]OK[/green]"


def _python_version_check() -> Row:
    """Return (label, value, status) for the Python version row."""
    version = platform.python_version()
    ok = sys.version_info[:2] >= (3, 11)
    status = "[green]OK[/green]" if ok else "[red]FAIL (>=3.11 required)[/red]"
    return "Python", version, status


def _tool_check(label: str, executable: str) -> Row:
    """Return a row for an executable looked up on PATH.

    Missing tools only disable updating, so they warn rather than fail.
    """
    found = shutil.which(executable)
    if found is None:
        return label, f"{executable}: not found", "[yellow]WARN[/yellow]"
    return label, found, "[green]OK[/green]"


def _installation_checks(
    locator: InstallationLocator,
    upstream: str,
) -> tuple[Row, Row]:
    """Return the installation-directory and working-copy rows.

    A working copy only counts when one of its remotes is *upstream*.
    """
    try:
        installation = locator.locate()
    except ManifestReadError as exc:
        return (
            ("Install dir", str(exc), "[red]FAIL[/red]"),
            ("Working copy", "unknown", "[yellow]WARN[/yellow]"),
        )

    if installation is None:
        return (
            ("Install dir", "unknown", "[yellow]WARN[/yellow]"),
            ("Working copy", "unknown", "[yellow]WARN[/yellow]"),
        )

    install_row = ("Install dir", str(installation), "[green]OK[/green]")
    executor = GitCommandExecutor()
    repository: Path | None = executor.find_working_copy(installation)
    if repository is None:
        return install_row, ("Working copy", "none (updates disabled)", "[yellow]WARN[/yellow]")

    try:
        tracks = executor.tracks_remote(repository, upstream)
    except VcsCommandError as exc:
        return install_row, ("Working copy", f"{repository} ({exc})", "[yellow]WARN[/yellow]")
    if not tracks:
        return install_row, (
            "Working copy",
            f"{repository} (not a clone of {upstream}; updates disabled)",
            "[yellow]WARN[/yellow]",
        )
    return install_row, ("Working copy", str(repository), "[green]OK[/green]")


def _status_plain(status: str) -> str:
    """Convert rich-markup status to plain text."""
    for word in ("FAIL", "WARN", "OK"):
        if word in status:
            return word
    return status


def _print_plain_doctor_table(checks: list[Row]) -> None:
    """Render doctor output without Rich."""
    print("\nbuildcli doctor", file=sys.stderr)
    print("=" * 72, file=sys.stderr)
    print(f"{'Component':<14} {'Value':<48} {'Status':<8}", file=sys.stderr)
    print("-" * 72, file=sys.stderr)
    for label, value, status in checks:
        print(f"{label:<14} {value:<48} {_status_plain(status):<8}", file=sys.stderr)
    print(file=sys.stderr)


# ---------------------------------------------------------------------------
# Public entry point
# ---------------------------------------------------------------------------

def run_doctor(
    config: BuildCLIConfig,
    locator: InstallationLocator | None = None,
) -> int:
    """Execute all diagnostic checks and render a summary table.

    Returns
    -------
    int
        :data:`exit_codes.SUCCESS` when no critical check fails,
        :data:`exit_codes.GENERAL_ERROR` otherwise.
    """
    locator = locator or InstallationLocator()
    install_row, copy_row = _installation_checks(locator, config.update.upstream_url)
    checks = [
        _buildcli_version_check(),
        _python_version_check(),
        _tool_check("git", "git"),
        _tool_check("Build tool", config.update.build_command[0]),
        install_row,
        copy_row,
    ]

    has_failure = any("FAIL" in status for _, _, status in checks)

    rich_available = True
    try:
        from rich.table import Table
    except ModuleNotFoundError:
        rich_available = False

    if rich_available:
        table = Table(
            title="buildcli doctor",
            show_header=True,
            header_style="bold cyan",
            border_style="dim",
        )
        table.add_column("Component", style="bold", min_width=12)
        table.add_column("Value", min_width=20)
        table.add_column("Status", justify="center", min_width=8)
        for label, value, status in checks:
            table.add_row(label, value, status)

        console.print()
        console.print(table)
        console.print()
    else:
        _print_plain_doctor_table(checks)

    if has_failure:
        if rich_available:
            console.print("[bold red]Some checks failed.[/bold red]")
        else:
            print("Some checks failed.", file=sys.stderr)
        return exit_codes.GENERAL_ERROR

    if rich_available:
        console.print("[bold green]All checks passed.[/bold green]")
    else:
        print("All checks passed.", file=sys.stderr)
    return exit_codes.SUCCESS
