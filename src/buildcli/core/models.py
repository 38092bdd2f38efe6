"""Domain models for the buildcli self-update check.

All value objects are **frozen** dataclasses with no behaviour beyond
data access.  They carry zero I/O and no dependencies on external
packages.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path


# ---------------------------------------------------------------------------
# Settings
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class UpdateSettings:
    """Explicit configuration handed to the update orchestrator."""

    upstream_url: str
    """Canonical repository the local checkout is compared against."""

    install_dir: Path
    """Directory that holds the installed artifact (e.g. ``~/bin``)."""

    artifact_path: Path
    """Rebuilt artifact, relative to the installation directory."""

    artifact_name: str
    """File name of the installed artifact inside :attr:`install_dir`."""

    @property
    def installed_artifact(self) -> Path:
        return self.install_dir / self.artifact_name


# ---------------------------------------------------------------------------
# State machine
# ---------------------------------------------------------------------------

class UpdateState(str, Enum):
    """States of one update check.

    Transitions:
    - idle → checking
    - checking → not_applicable | up_to_date | stale
    - stale → declined | updating
    - updating → built | build_failed | pull_failed
    - built → installed | install_failed
    """

    IDLE = "idle"
    CHECKING = "checking"
    NOT_APPLICABLE = "not_applicable"
    UP_TO_DATE = "up_to_date"
    STALE = "stale"
    DECLINED = "declined"
    UPDATING = "updating"
    BUILT = "built"
    INSTALLED = "installed"
    BUILD_FAILED = "build_failed"
    PULL_FAILED = "pull_failed"
    INSTALL_FAILED = "install_failed"

    @property
    def is_terminal(self) -> bool:
        return self in TERMINAL_STATES


TERMINAL_STATES: frozenset[UpdateState] = frozenset({
    UpdateState.NOT_APPLICABLE,
    UpdateState.UP_TO_DATE,
    UpdateState.DECLINED,
    UpdateState.INSTALLED,
    UpdateState.BUILD_FAILED,
    UpdateState.PULL_FAILED,
    UpdateState.INSTALL_FAILED,
})

FAILURE_STATES: frozenset[UpdateState] = frozenset({
    UpdateState.BUILD_FAILED,
    UpdateState.PULL_FAILED,
    UpdateState.INSTALL_FAILED,
})


# ---------------------------------------------------------------------------
# Result
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class UpdateReport:
    """Outcome of a single update check."""

    state: UpdateState
    """Terminal state reached."""

    history: tuple[UpdateState, ...] = field(default=())
    """Every state visited, in order, ending with :attr:`state`."""

    installation: Path | None = None
    repository: Path | None = None
    build_exit_code: int | None = None
    installed_artifact: Path | None = None

    @property
    def failed(self) -> bool:
        return self.state in FAILURE_STATES
