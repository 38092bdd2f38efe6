"""Allow ``python -m buildcli`` invocation.

Delegates to the CLI error-boundary entry point so that
``python -m buildcli`` behaves identically to the ``buildcli``
console script.
"""

from __future__ import annotations

from buildcli.cli.app import cli

if __name__ == "__main__":
    cli()
