"""Repository probe — the single authority on installation staleness."""

from __future__ import annotations

from pathlib import Path

from buildcli.core.protocols import VcsExecutor


class RepositoryProbe:
    """Locates the working copy of an installation and checks its freshness.

    Parameters
    ----------
    executor:
        Any object satisfying the :class:`VcsExecutor` protocol.
    """

    def __init__(self, executor: VcsExecutor) -> None:
        self._executor: VcsExecutor = executor

    def find_repository(self, path: Path) -> Path | None:
        """Return the working copy enclosing *path*, or ``None``.

        Most end-user installations are not source checkouts, so a
        missing working copy is a normal result rather than an error.
        """
        return self._executor.find_working_copy(path)

    def is_checkout_of(self, handle: Path, upstream: str) -> bool:
        """Return whether *handle* is a clone of *upstream*.

        A working copy found by walking upward may belong to an unrelated
        project (a virtualenv inside someone else's repository), so it
        only counts when one of its remotes is the upstream.

        Raises
        ------
        VcsCommandError
            When git cannot read the working copy's configuration.
        """
        return self._executor.tracks_remote(handle, upstream)

    def is_up_to_date(self, handle: Path, upstream: str) -> bool:
        """Return whether *handle* already reflects the latest *upstream* commit.

        Raises
        ------
        VcsCommandError
            When the executor cannot reach the upstream or run git.
        """
        return self._executor.is_current(handle, upstream)

    def pull(self, handle: Path, upstream: str) -> None:
        """Update *handle* from *upstream*."""
        self._executor.pull_latest(handle, upstream)
