"""Shared pytest fixtures and configuration for the buildcli test suite.

Guidelines
----------
* No internet access in any test.
* git and the build tool are mocked at the subprocess boundary.
* Core tests use fake collaborators — no side effects.
* Tests must not depend on the user's home directory or environment.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Iterator
from pathlib import Path

import pytest

from buildcli.logging import ROOT_LOGGER_NAME


@pytest.fixture(autouse=True)
def isolated_environment(
    tmp_path_factory: pytest.TempPathFactory, monkeypatch: pytest.MonkeyPatch
) -> None:
    """Point ``~`` at a temp dir and drop ``BUILDCLI_*`` overrides."""
    home = tmp_path_factory.mktemp("home")
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv("USERPROFILE", str(home))
    for key in list(os.environ):
        if key.startswith("BUILDCLI_"):
            monkeypatch.delenv(key)


@pytest.fixture(autouse=True)
def reset_buildcli_logger() -> Iterator[None]:
    """Undo ``setup_logging`` so caplog keeps receiving records."""
    yield
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)
    logger.propagate = True
