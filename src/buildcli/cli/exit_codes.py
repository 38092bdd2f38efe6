"""Exit-code constants used by the CLI layer.

Every exit path uses one of these well-known values rather than
magic integers scattered across the codebase.
"""

from __future__ import annotations

SUCCESS: int = 0
"""Command completed; includes declined and not-applicable update checks."""

GENERAL_ERROR: int = 1
"""A known BuildCLIError was caught. User-facing message was displayed."""

UNEXPECTED_ERROR: int = 2
"""An unhandled exception escaped all known error boundaries."""

UPDATE_FAILED: int = 3
"""The user accepted an update but pull, build or install failed."""

KEYBOARD_INTERRUPT: int = 130
"""User pressed Ctrl+C.  Follows POSIX convention (128 + SIGINT=2)."""
