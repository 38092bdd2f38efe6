"""Infrastructure: artifact copy and permission helpers.

Implements :class:`~buildcli.core.protocols.Installer`.  Every
``OSError`` is mapped to :class:`~buildcli.exceptions.InstallError`.
"""

from __future__ import annotations

import os
import shutil
import stat
from pathlib import Path

from buildcli.exceptions import InstallError

_EXECUTE_BITS = stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH


def home_bin_directory() -> Path:
    """Return the per-user binary directory (``~/bin``)."""
    return Path.home() / "bin"


class FileInstaller:
    """Copies rebuilt artifacts over the installed ones."""

    def copy(self, source: Path, destination: Path) -> Path:
        """Copy *source* to *destination*, replacing whatever is there.

        Files are staged next to *destination* and moved into place with
        :func:`os.replace`, so a failed copy never leaves a truncated
        artifact behind.  Directories are copied recursively.

        Raises
        ------
        InstallError
            When *source* is missing or the copy fails.
        """
        source = Path(source)
        destination = Path(destination)
        if not source.exists():
            raise InstallError(
                f"Built artifact not found: {source}",
                hint="Check that the build produced the configured artifact_path.",
            )

        try:
            destination.parent.mkdir(parents=True, exist_ok=True)
            if source.is_dir():
                shutil.copytree(source, destination, dirs_exist_ok=True)
                return destination

            staging = destination.with_name(f".{destination.name}.tmp")
            shutil.copy2(source, staging)
            os.replace(staging, destination)
        except OSError as exc:
            raise InstallError(f"Could not copy {source} to {destination}: {exc}") from exc
        return destination

    def make_executable(self, path: Path) -> None:
        """Add user, group and other execute bits to *path*.

        Raises
        ------
        InstallError
            When the permissions cannot be changed.
        """
        try:
            mode = os.stat(path).st_mode
            os.chmod(path, mode | _EXECUTE_BITS)
        except OSError as exc:
            raise InstallError(f"Could not mark {path} executable: {exc}") from exc
