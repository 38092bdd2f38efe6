"""buildcli — project build tooling with an in-place self-update check.

The self-update protocol detects whether the running installation is
behind its upstream repository and, with the user's consent, rebuilds
and reinstalls it.
"""

from buildcli.version import __version__

__all__: list[str] = ["__version__"]
