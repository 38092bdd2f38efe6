"""Hatch build hook that embeds ``BUILD-MANIFEST`` in the wheel.

The manifest records the checkout a wheel was built from as its
``Build-Directory`` so an installed buildcli can find the working copy it
should keep up to date.  Wheels built outside a git checkout (for example
from an unpacked sdist) carry no manifest and fall back to introspection.
"""

from __future__ import annotations

import shutil
import tempfile
from pathlib import Path
from typing import Any

from hatchling.builders.hooks.plugin.interface import BuildHookInterface

MANIFEST_RESOURCE = "BUILD-MANIFEST"
MAX_LINE_LENGTH = 72


def _wrap(line: str) -> list[str]:
    """Split *line* into manifest lines, continuations prefixed by one space."""
    lines = [line[:MAX_LINE_LENGTH]]
    rest = line[MAX_LINE_LENGTH:]
    while rest:
        lines.append(" " + rest[: MAX_LINE_LENGTH - 1])
        rest = rest[MAX_LINE_LENGTH - 1:]
    return lines


def render_manifest(attributes: dict[str, str]) -> str:
    """Render the main section of a Java-style manifest."""
    lines: list[str] = []
    for name, value in attributes.items():
        lines.extend(_wrap(f"{name}: {value}"))
    return "\n".join(lines) + "\n\n"


def write_build_manifest(project_root: Path, destination: Path) -> Path:
    """Write a manifest pointing at *project_root* into *destination*."""
    destination.mkdir(parents=True, exist_ok=True)
    manifest = destination / MANIFEST_RESOURCE
    manifest.write_text(
        render_manifest({
            "Manifest-Version": "1.0",
            "Build-Directory": str(project_root.resolve()),
        }),
        encoding="utf-8",
    )
    return manifest


class BuildManifestHook(BuildHookInterface):
    PLUGIN_NAME = "custom"

    def initialize(self, version: str, build_data: dict[str, Any]) -> None:
        root = Path(self.root)
        # Editable installs run from src/, which introspection already handles.
        if version == "editable" or not (root / ".git").exists():
            return

        self._staging = Path(tempfile.mkdtemp(prefix="buildcli-manifest-"))
        manifest = write_build_manifest(root, self._staging)
        build_data["force_include"][str(manifest)] = f"buildcli/{MANIFEST_RESOURCE}"
        self.app.display_info(f"Embedded {MANIFEST_RESOURCE} for {root}")

    def finalize(self, version: str, build_data: dict[str, Any], artifact_path: str) -> None:
        staging = getattr(self, "_staging", None)
        if staging is not None:
            shutil.rmtree(staging, ignore_errors=True)
