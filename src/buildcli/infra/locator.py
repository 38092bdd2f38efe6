"""Infrastructure: resolve the directory buildcli was built from.

Resolution is an ordered fallback:

1. The ``Build-Directory`` attribute of the ``BUILD-MANIFEST`` resource
   embedded in the package.  ``hatch_build.py`` writes it into wheels
   built from a git checkout, pointing back at that checkout.
2. Introspection of the package's import root.  A root that ends in a
   build-output segment (``src``, ``build/lib``) points back at the
   project root; anything else is a packaged artifact whose parent
   directory is returned.

Rules
-----
* Reading an existing manifest that fails is fatal (:class:`ManifestReadError`).
* Every other failure degrades to ``None``.
* No ``print()`` — diagnostics go to the logger.
"""

from __future__ import annotations

import importlib.util
from collections.abc import Sequence
from importlib import resources
from pathlib import Path
from typing import TYPE_CHECKING

from buildcli.exceptions import ManifestReadError
from buildcli.logging import get_logger

if TYPE_CHECKING:
    from importlib.resources.abc import Traversable

logger = get_logger(__name__)

MANIFEST_RESOURCE = "BUILD-MANIFEST"
BUILD_DIRECTORY_ATTRIBUTE = "Build-Directory"

DEFAULT_OUTPUT_MARKERS: tuple[tuple[str, ...], ...] = (
    ("build", "lib"),
    ("src",),
)


# ---------------------------------------------------------------------------
# Manifest parsing (pure)
# ---------------------------------------------------------------------------

def parse_manifest(text: str) -> dict[str, str]:
    """Parse the main section of a Java-style manifest.

    ``Name: value`` lines, continuation lines beginning with a single
    space, main section terminated by the first blank line.  Malformed
    lines are skipped.
    """
    attributes: dict[str, str] = {}
    last_key: str | None = None

    for line in text.splitlines():
        if not line.strip():
            break
        if line.startswith(" ") and last_key is not None:
            attributes[last_key] += line[1:]
            continue
        name, sep, value = line.partition(":")
        if not sep or not name.strip():
            last_key = None
            continue
        last_key = name.strip()
        attributes[last_key] = value.strip()

    return attributes


def strip_output_segment(
    location: Path,
    markers: Sequence[tuple[str, ...]] = DEFAULT_OUTPUT_MARKERS,
) -> Path | None:
    """Return the project root above a trailing build-output segment.

    ``/work/buildcli/build/lib`` → ``/work/buildcli``.  Returns ``None``
    when *location* does not end with any of *markers*.
    """
    parts = location.parts
    for marker in markers:
        size = len(marker)
        if len(parts) > size and parts[-size:] == marker:
            return Path(*parts[:-size])
    return None


# ---------------------------------------------------------------------------
# Locator
# ---------------------------------------------------------------------------

class InstallationLocator:
    """Concrete :class:`~buildcli.core.protocols.Locator`.

    Parameters
    ----------
    package:
        Import name whose resources and location are inspected.
    markers:
        Build-output segment sequences recognised during introspection.
    """

    def __init__(
        self,
        package: str = "buildcli",
        markers: Sequence[tuple[str, ...]] = DEFAULT_OUTPUT_MARKERS,
    ) -> None:
        self._package = package
        self._markers = tuple(markers)

    def locate(self) -> Path | None:
        """Return the installation directory, or ``None``.

        Raises
        ------
        ManifestReadError
            When the manifest resource exists but cannot be read.
        """
        resource = self._manifest_resource()
        if resource is None:
            return self._fallback_directory()

        try:
            text = resource.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise ManifestReadError(
                f"Error while reading the {MANIFEST_RESOURCE} resource: {exc}",
            ) from exc

        build_directory = parse_manifest(text).get(BUILD_DIRECTORY_ATTRIBUTE)
        if not build_directory:
            return self._fallback_directory()
        return Path(build_directory)

    # ------------------------------------------------------------------
    # Sources
    # ------------------------------------------------------------------

    def _manifest_resource(self) -> Traversable | None:
        try:
            resource = resources.files(self._package).joinpath(MANIFEST_RESOURCE)
        except ModuleNotFoundError:
            return None
        return resource if resource.is_file() else None

    def _code_location(self) -> Path:
        """Return the import root containing the package.

        Raises
        ------
        LookupError
            When the import system reports no file origin for the package.
        """
        spec = importlib.util.find_spec(self._package)
        if spec is None or not spec.has_location or not spec.origin:
            raise LookupError(f"no code location reported for {self._package!r}")
        # origin is <root>/<package>/__init__.py
        return Path(spec.origin).absolute().parent.parent

    def _fallback_directory(self) -> Path | None:
        try:
            location = self._code_location()
        except (LookupError, ValueError, OSError) as exc:
            logger.error("Could not determine build directory: %s", exc)
            return None

        project_root = strip_output_segment(location, self._markers)
        if project_root is not None:
            return project_root
        return location.parent
