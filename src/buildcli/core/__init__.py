"""Core layer — the update state machine, its models and contracts.

Rules
-----
* No ``print()`` calls.
* No direct filesystem, subprocess or network I/O.
* No imports from ``cli`` or ``infra``.
"""

from buildcli.core.models import UpdateReport, UpdateSettings, UpdateState
from buildcli.core.orchestrator import UpdateOrchestrator
from buildcli.core.probe import RepositoryProbe
from buildcli.core.protocols import BuildRunner, Confirm, Installer, Locator, VcsExecutor

__all__: list[str] = [
    "BuildRunner",
    "Confirm",
    "Installer",
    "Locator",
    "RepositoryProbe",
    "UpdateOrchestrator",
    "UpdateReport",
    "UpdateSettings",
    "UpdateState",
    "VcsExecutor",
]
