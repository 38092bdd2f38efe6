"""Protocols (interfaces) consumed by the core layer.

These define the contracts that infrastructure adapters must satisfy.
Core code depends ONLY on these protocols — never on concrete
implementations — so tests can substitute any collaborator.
"""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from typing import Protocol

Confirm = Callable[[str], bool]
"""Blocking yes/no prompt: returns ``True`` when the user confirms."""


class Locator(Protocol):
    """Contract for resolving the running tool's build directory."""

    def locate(self) -> Path | None:
        """Return the installation directory, or ``None`` when unknown.

        Raises
        ------
        ManifestReadError
            When an embedded build manifest exists but cannot be read.
        """
        ...  # pragma: no cover


class VcsExecutor(Protocol):
    """Contract for the version-control backend.

    Implementations must map backend failures to
    :class:`~buildcli.exceptions.VcsCommandError`.
    """

    def find_working_copy(self, path: Path) -> Path | None:
        """Return the root of the working copy enclosing *path*, if any."""
        ...  # pragma: no cover

    def tracks_remote(self, handle: Path, remote_url: str) -> bool:
        """Return whether *handle* has a remote pointing at *remote_url*."""
        ...  # pragma: no cover

    def is_current(self, handle: Path, remote_url: str) -> bool:
        """Return whether *handle* already contains the upstream head."""
        ...  # pragma: no cover

    def pull_latest(self, handle: Path, remote_url: str) -> None:
        """Bring *handle* up to date with *remote_url*."""
        ...  # pragma: no cover


class BuildRunner(Protocol):
    """Contract for the external build tool."""

    def run(self, project_dir: Path) -> int:
        """Build *project_dir* and return the process exit status."""
        ...  # pragma: no cover


class Installer(Protocol):
    """Contract for filesystem install primitives.

    Implementations must map ``OSError`` to
    :class:`~buildcli.exceptions.InstallError`.
    """

    def copy(self, source: Path, destination: Path) -> Path:
        """Copy *source* to *destination*, replacing it; return *destination*."""
        ...  # pragma: no cover

    def make_executable(self, path: Path) -> None:
        """Add execute permission bits to *path*."""
        ...  # pragma: no cover
