"""Infrastructure layer — external system integration.

This layer wraps all interaction with git, the build tool, the
filesystem and the import system.  Every raw ``OSError`` or subprocess
failure must be caught here and re-raised as a
:class:`~buildcli.exceptions.BuildCLIError` subclass.

Rules
-----
* No imports from ``cli``.
* No user-facing output (no ``print()``, no Rich rendering).
* Must expose clean, typed interfaces consumed by the core layer.
"""

from buildcli.infra.build_runner import SubprocessBuildRunner
from buildcli.infra.filesystem import FileInstaller, home_bin_directory
from buildcli.infra.git_executor import GitCommandExecutor
from buildcli.infra.locator import InstallationLocator, parse_manifest

__all__: list[str] = [
    "FileInstaller",
    "GitCommandExecutor",
    "InstallationLocator",
    "SubprocessBuildRunner",
    "home_bin_directory",
    "parse_manifest",
]
