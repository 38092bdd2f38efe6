"""Subprocess implementation of :class:`~buildcli.core.protocols.BuildRunner`."""

from __future__ import annotations

import subprocess
from collections.abc import Sequence
from pathlib import Path

from buildcli.logging import get_logger

logger = get_logger(__name__)

DEFAULT_BUILD_COMMAND: tuple[str, ...] = ("mvn", "clean", "package", "-DskipTests")

COMMAND_NOT_FOUND: int = 127
"""Exit status reported when the build tool binary is missing (shell convention)."""


class SubprocessBuildRunner:
    """Runs the project's package command inside the installation directory.

    The build inherits the terminal so the user sees the build tool's own
    output while it blocks.
    """

    def __init__(self, command: Sequence[str] = DEFAULT_BUILD_COMMAND) -> None:
        self._command: tuple[str, ...] = tuple(command)

    @property
    def command(self) -> tuple[str, ...]:
        return self._command

    def run(self, project_dir: Path) -> int:
        """Build *project_dir* and return the exit status (``0`` = success)."""
        logger.info("Running %s in %s", " ".join(self._command), project_dir)
        try:
            completed = subprocess.run(self._command, cwd=project_dir, check=False)
        except FileNotFoundError:
            logger.error("Build tool %r is not installed or not on PATH.", self._command[0])
            return COMMAND_NOT_FOUND
        return completed.returncode
