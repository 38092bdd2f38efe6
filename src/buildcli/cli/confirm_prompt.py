"""Interactive yes/no confirmation for the update flow.

questionary is imported lazily so that bootstrap paths (``--help``,
``--version``) keep working without it.
"""

from __future__ import annotations

from typing import Any

from buildcli.exceptions import EnvironmentError


def _import_questionary() -> Any:
    """Import questionary lazily for interactive confirmation."""
    try:
        import questionary
    except ModuleNotFoundError as exc:
        raise EnvironmentError(
            "questionary is not installed. Install with: pip install questionary",
        ) from exc
    return questionary


def confirm(message: str) -> bool:
    """Ask *message* as a yes/no question and block for the answer.

    Ctrl+C or Esc (questionary returns ``None``) counts as "no".

    Raises
    ------
    EnvironmentError
        If questionary is not installed.
    """
    questionary = _import_questionary()
    answer: bool | None = questionary.confirm(message, default=True).ask()
    return bool(answer)
