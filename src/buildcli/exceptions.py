"""Custom exception hierarchy for buildcli.

All exceptions that cross layer boundaries must inherit from
:class:`BuildCLIError`.  Raw ``OSError`` / ``subprocess`` failures must
NEVER propagate beyond the infrastructure layer — they are caught there
and re-raised as a typed subclass defined here.

Hierarchy
---------
BuildCLIError
├── ManifestReadError
├── VcsCommandError
├── InstallError
├── ConfigError
├── EnvironmentError
└── InvalidTransitionError
"""

from __future__ import annotations


class BuildCLIError(Exception):
    """Base exception for all buildcli errors.

    Every user-visible error condition must map to a subclass of this
    exception so that the CLI error boundary can render a clean message
    without leaking internal stack traces.
    """

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint: str | None = hint
        """Optional actionable guidance shown below the error message."""


# --- Installation lookup ---------------------------------------------------

class ManifestReadError(BuildCLIError):
    """Raised when the embedded build manifest exists but cannot be read.

    This is the only failure allowed to abort an update check.
    """


# --- Version control -------------------------------------------------------

class VcsCommandError(BuildCLIError):
    """Raised when a git invocation fails or git is not available."""


# --- Artifact installation -------------------------------------------------

class InstallError(BuildCLIError):
    """Raised when the rebuilt artifact cannot be copied or made executable."""


# --- Configuration ---------------------------------------------------------

class ConfigError(BuildCLIError):
    """Raised for invalid or unreadable configuration and banner files."""


# --- Environment / tooling -------------------------------------------------

class EnvironmentError(BuildCLIError):
    """Raised when an optional runtime dependency is not available."""


# --- State machine ---------------------------------------------------------

class InvalidTransitionError(BuildCLIError):
    """Raised when the update state machine is driven into an illegal step."""
