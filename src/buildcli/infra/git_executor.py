"""git backed implementation of :class:`~buildcli.core.protocols.VcsExecutor`.

This module is the **only** place in the codebase that runs ``git``.
Missing binaries and nonzero exits are re-raised as
:class:`~buildcli.exceptions.VcsCommandError` — nothing raw escapes the
infrastructure boundary.
"""

from __future__ import annotations

import subprocess
from collections.abc import Sequence
from pathlib import Path

from buildcli.exceptions import VcsCommandError
from buildcli.logging import get_logger

logger = get_logger(__name__)

GIT_MARKER = ".git"

_URL_SCHEMES = ("https://", "http://", "ssh://", "git://", "git+ssh://")


def normalise_remote_url(url: str) -> str:
    """Reduce a git remote URL to ``host/path`` for comparison.

    ``https://github.com/BuildCLI/BuildCLI.git``,
    ``git@github.com:BuildCLI/BuildCLI.git`` and
    ``ssh://git@github.com/BuildCLI/BuildCLI`` all become
    ``github.com/buildcli/buildcli``.
    """
    text = url.strip()
    lowered = text.lower()
    scheme = next((s for s in _URL_SCHEMES if lowered.startswith(s)), None)
    if scheme is not None:
        text = text[len(scheme):]
        text = text.split("@", 1)[-1] if "@" in text.split("/", 1)[0] else text
    else:
        # scp-like syntax: [user@]host:path
        host, sep, path = text.partition(":")
        if sep:
            text = f"{host.split('@', 1)[-1]}/{path}"
    text = text.rstrip("/")
    if text.endswith(".git"):
        text = text[: -len(".git")]
    return text.lower()


class GitCommandExecutor:
    """Concrete :class:`VcsExecutor` driving the ``git`` command line.

    Every call is a single blocking ``git`` invocation; no retries and
    no timeouts are applied here.
    """

    def __init__(self, git: str = "git") -> None:
        self._git = git

    # ------------------------------------------------------------------
    # Protocol methods
    # ------------------------------------------------------------------

    def find_working_copy(self, path: Path) -> Path | None:
        """Walk upward from *path* to the first directory holding ``.git``.

        ``.git`` may be a directory or, for worktrees and submodules, a file.
        """
        start = Path(path).absolute()
        for candidate in (start, *start.parents):
            if (candidate / GIT_MARKER).exists():
                return candidate
        return None

    def is_current(self, handle: Path, remote_url: str) -> bool:
        """Return whether local ``HEAD`` already contains the remote ``HEAD``.

        Raises
        ------
        VcsCommandError
            When the remote cannot be queried or git fails.
        """
        remote_head = self._remote_head(handle, remote_url)
        local_head = self._run(["rev-parse", "HEAD"], cwd=handle).strip()
        if remote_head == local_head:
            return True

        # Local may be ahead; an unknown remote commit means we are behind.
        return self._succeeds(
            ["merge-base", "--is-ancestor", remote_head, "HEAD"],
            cwd=handle,
        )

    def tracks_remote(self, handle: Path, remote_url: str) -> bool:
        """Return whether any remote configured in *handle* points at *remote_url*.

        URLs are compared after normalisation, so the HTTPS, SSH and
        scp-style spellings of one repository match.

        Raises
        ------
        VcsCommandError
            When git cannot read the repository configuration.
        """
        completed = self._invoke(
            ["config", "--get-regexp", r"^remote\..*\.url$"], cwd=handle,
        )
        # Exit status 1 means no remote is configured at all.
        if completed.returncode == 1:
            return False
        if completed.returncode != 0:
            stderr = (completed.stderr or "").strip()
            raise VcsCommandError(
                f"git config exited with {completed.returncode}"
                + (f": {stderr}" if stderr else ""),
            )

        wanted = normalise_remote_url(remote_url)
        for line in completed.stdout.splitlines():
            _key, _, url = line.partition(" ")
            if url and normalise_remote_url(url) == wanted:
                return True
        return False

    def pull_latest(self, handle: Path, remote_url: str) -> None:
        """Pull the remote's default branch into *handle*.

        Raises
        ------
        VcsCommandError
            When the pull fails (conflicts, network, missing git).
        """
        logger.debug("Pulling %s into %s", remote_url, handle)
        self._run(["pull", remote_url, "HEAD"], cwd=handle)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _remote_head(self, handle: Path, remote_url: str) -> str:
        output = self._run(["ls-remote", remote_url, "HEAD"], cwd=handle)
        fields = output.split()
        if not fields:
            raise VcsCommandError(f"Remote {remote_url} reported no HEAD.")
        return fields[0]

    def _run(self, args: Sequence[str], *, cwd: Path) -> str:
        """Run ``git <args>`` in *cwd* and return stdout."""
        completed = self._invoke(args, cwd=cwd)
        if completed.returncode != 0:
            stderr = (completed.stderr or "").strip()
            raise VcsCommandError(
                f"git {' '.join(args)} exited with {completed.returncode}"
                + (f": {stderr}" if stderr else ""),
            )
        return completed.stdout

    def _succeeds(self, args: Sequence[str], *, cwd: Path) -> bool:
        return self._invoke(args, cwd=cwd).returncode == 0

    def _invoke(
        self, args: Sequence[str], *, cwd: Path,
    ) -> subprocess.CompletedProcess[str]:
        command = [self._git, *args]
        try:
            completed = subprocess.run(
                command,
                cwd=cwd,
                capture_output=True,
                text=True,
                check=False,
            )
        except FileNotFoundError as exc:
            raise VcsCommandError(
                "git is not installed or not on PATH.",
                hint="Install git to enable update checks.",
            ) from exc
        except OSError as exc:
            raise VcsCommandError(f"Could not run {' '.join(command)}: {exc}") from exc

        return completed
