"""Update orchestrator — the self-update state machine.

Every non-terminal :class:`~buildcli.core.models.UpdateState` has exactly
one handler method.  A handler performs that state's side effect and
returns the next state; :meth:`UpdateOrchestrator._transition` validates
the step against ``_VALID_TRANSITIONS`` before it is taken.

Silence policy
--------------
The "not applicable" branches (no installation directory, no working
copy, a working copy of some other project, upstream unreachable) and
the up-to-date branch produce no output at all.  Only a detected, stale
development checkout talks to the user.

Guarantees
----------
* No pull, build or install unless both an installation directory and a
  working copy that tracks the upstream were found.
* The probe's staleness query runs exactly once per :meth:`run`.
* The installed artifact is only touched after a build exits with ``0``.
* Only :class:`~buildcli.exceptions.ManifestReadError` escapes
  :meth:`run`; every other collaborator failure ends in a terminal state.
"""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

from buildcli.core.models import UpdateReport, UpdateSettings, UpdateState
from buildcli.core.probe import RepositoryProbe
from buildcli.core.protocols import BuildRunner, Confirm, Installer, Locator
from buildcli.exceptions import (
    BuildCLIError,
    InstallError,
    InvalidTransitionError,
    VcsCommandError,
)
from buildcli.logging import get_logger

logger = get_logger(__name__)

OUTDATED_MESSAGE = "ATTENTION: Your BuildCLI is outdated!"
CONFIRM_MESSAGE = "Do you want to update BuildCLI?"
CANCELED_MESSAGE = "BuildCLI update canceled!"
UPDATED_MESSAGE = "BuildCLI updated successfully!"

_VALID_TRANSITIONS: dict[UpdateState, frozenset[UpdateState]] = {
    UpdateState.IDLE: frozenset({UpdateState.CHECKING}),
    UpdateState.CHECKING: frozenset({
        UpdateState.NOT_APPLICABLE,
        UpdateState.UP_TO_DATE,
        UpdateState.STALE,
    }),
    UpdateState.STALE: frozenset({UpdateState.DECLINED, UpdateState.UPDATING}),
    UpdateState.UPDATING: frozenset({
        UpdateState.BUILT,
        UpdateState.BUILD_FAILED,
        UpdateState.PULL_FAILED,
    }),
    UpdateState.BUILT: frozenset({UpdateState.INSTALLED, UpdateState.INSTALL_FAILED}),
}


class UpdateOrchestrator:
    """Drives one self-update check from ``idle`` to a terminal state.

    Parameters
    ----------
    locator:
        Resolves the installation directory.
    probe:
        Finds the working copy and answers the staleness question.
    builder:
        Rebuilds the project inside the installation directory.
    installer:
        Copies the rebuilt artifact and marks it executable.
    confirm:
        Blocking yes/no prompt.
    settings:
        Upstream URL and artifact locations.
    """

    def __init__(
        self,
        locator: Locator,
        probe: RepositoryProbe,
        builder: BuildRunner,
        installer: Installer,
        confirm: Confirm,
        settings: UpdateSettings,
    ) -> None:
        self._locator = locator
        self._probe = probe
        self._builder = builder
        self._installer = installer
        self._confirm = confirm
        self._settings = settings

        self._handlers: dict[UpdateState, Callable[[], UpdateState]] = {
            UpdateState.CHECKING: self._check,
            UpdateState.STALE: self._prompt,
            UpdateState.UPDATING: self._update,
            UpdateState.BUILT: self._install,
        }
        self._reset()

    @property
    def state(self) -> UpdateState:
        return self._state

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def run(self) -> UpdateReport:
        """Run a full check and return its :class:`UpdateReport`.

        Raises
        ------
        ManifestReadError
            When the embedded build manifest exists but cannot be read.
        """
        self._reset()
        self._transition(UpdateState.CHECKING)
        while not self._state.is_terminal:
            self._transition(self._handlers[self._state]())

        return UpdateReport(
            state=self._state,
            history=tuple(self._history),
            installation=self._installation,
            repository=self._repository,
            build_exit_code=self._build_exit_code,
            installed_artifact=self._installed_artifact,
        )

    # ------------------------------------------------------------------
    # Transition bookkeeping
    # ------------------------------------------------------------------

    def _reset(self) -> None:
        self._state = UpdateState.IDLE
        self._history: list[UpdateState] = [UpdateState.IDLE]
        self._installation: Path | None = None
        self._repository: Path | None = None
        self._build_exit_code: int | None = None
        self._installed_artifact: Path | None = None

    def _transition(self, target: UpdateState) -> None:
        allowed = _VALID_TRANSITIONS.get(self._state, frozenset())
        if target not in allowed:
            raise InvalidTransitionError(
                f"Invalid update transition: {self._state.value} -> {target.value}",
            )
        self._state = target
        self._history.append(target)

    # ------------------------------------------------------------------
    # State handlers
    # ------------------------------------------------------------------

    def _check(self) -> UpdateState:
        installation = self._locator.locate()
        if installation is None:
            return UpdateState.NOT_APPLICABLE
        self._installation = installation

        repository = self._probe.find_repository(installation)
        if repository is None:
            return UpdateState.NOT_APPLICABLE

        upstream = self._settings.upstream_url
        try:
            if not self._probe.is_checkout_of(repository, upstream):
                logger.debug("%s does not track %s; skipping update check", repository, upstream)
                return UpdateState.NOT_APPLICABLE
            self._repository = repository
            current = self._probe.is_up_to_date(repository, upstream)
        except VcsCommandError as exc:
            logger.debug("Update check skipped: %s", exc)
            return UpdateState.NOT_APPLICABLE

        return UpdateState.UP_TO_DATE if current else UpdateState.STALE

    def _prompt(self) -> UpdateState:
        logger.warning(OUTDATED_MESSAGE, extra={"style": "bold yellow"})

        try:
            confirmed = self._confirm(CONFIRM_MESSAGE)
        except BuildCLIError as exc:
            logger.error("Cannot ask for confirmation: %s", exc)
            confirmed = False

        if not confirmed:
            logger.info(CANCELED_MESSAGE, extra={"style": "yellow"})
            return UpdateState.DECLINED
        return UpdateState.UPDATING

    def _update(self) -> UpdateState:
        if self._installation is None or self._repository is None:
            raise InvalidTransitionError(
                "Cannot update before an installation and working copy were found.",
            )

        try:
            self._probe.pull(self._repository, self._settings.upstream_url)
        except VcsCommandError as exc:
            logger.error(
                "Could not pull %s: %s",
                self._settings.upstream_url,
                exc,
                extra={"style": "red"},
            )
            return UpdateState.PULL_FAILED

        exit_code = self._builder.run(self._installation)
        self._build_exit_code = exit_code
        if exit_code != 0:
            logger.error(
                "Build failed with exit code %d; installed artifact left unchanged.",
                exit_code,
                extra={"style": "bold red"},
            )
            return UpdateState.BUILD_FAILED

        logger.info("Build succeeded.", extra={"style": "green"})
        return UpdateState.BUILT

    def _install(self) -> UpdateState:
        if self._installation is None:
            raise InvalidTransitionError("Cannot install before an installation was found.")

        source = self._installation / self._settings.artifact_path
        target = self._settings.installed_artifact
        try:
            self._installer.copy(source, target)
            self._installer.make_executable(target)
        except InstallError as exc:
            logger.error("Could not install %s: %s", target, exc, extra={"style": "red"})
            return UpdateState.INSTALL_FAILED

        self._installed_artifact = target
        logger.info(UPDATED_MESSAGE, extra={"style": "bold green"})
        return UpdateState.INSTALLED
