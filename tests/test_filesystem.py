"""Tests for artifact install helpers (infra/filesystem.py).

All tests work inside ``tmp_path``.
"""

from __future__ import annotations

import stat
import sys
from pathlib import Path
from unittest.mock import patch

import pytest

from buildcli.exceptions import InstallError
from buildcli.infra.filesystem import FileInstaller, home_bin_directory


class TestCopy:
    def test_copies_into_new_directory(self, tmp_path: Path) -> None:
        source = tmp_path / "buildcli.jar"
        source.write_bytes(b"jar")
        destination = tmp_path / "bin" / "buildcli.jar"

        result = FileInstaller().copy(source, destination)

        assert result == destination
        assert destination.read_bytes() == b"jar"

    def test_replaces_existing_artifact(self, tmp_path: Path) -> None:
        source = tmp_path / "new.jar"
        source.write_bytes(b"new")
        destination = tmp_path / "buildcli.jar"
        destination.write_bytes(b"old")

        FileInstaller().copy(source, destination)

        assert destination.read_bytes() == b"new"
        assert sorted(p.name for p in tmp_path.iterdir()) == ["buildcli.jar", "new.jar"]

    def test_copies_directories(self, tmp_path: Path) -> None:
        source = tmp_path / "dist"
        (source / "lib").mkdir(parents=True)
        (source / "lib" / "a.jar").write_bytes(b"a")

        FileInstaller().copy(source, tmp_path / "installed")

        assert (tmp_path / "installed" / "lib" / "a.jar").read_bytes() == b"a"

    def test_missing_source_raises(self, tmp_path: Path) -> None:
        with pytest.raises(InstallError, match="not found") as exc_info:
            FileInstaller().copy(tmp_path / "missing.jar", tmp_path / "bin" / "buildcli.jar")
        assert exc_info.value.hint is not None

    def test_os_error_is_mapped(self, tmp_path: Path) -> None:
        source = tmp_path / "buildcli.jar"
        source.write_bytes(b"jar")
        with patch("buildcli.infra.filesystem.shutil.copy2", side_effect=PermissionError("denied")):
            with pytest.raises(InstallError, match="denied"):
                FileInstaller().copy(source, tmp_path / "bin" / "buildcli.jar")


@pytest.mark.skipif(sys.platform == "win32", reason="POSIX permission bits")
class TestMakeExecutable:
    def test_sets_execute_bits(self, tmp_path: Path) -> None:
        target = tmp_path / "buildcli.jar"
        target.write_bytes(b"jar")
        target.chmod(0o644)

        FileInstaller().make_executable(target)

        mode = target.stat().st_mode
        assert mode & stat.S_IXUSR
        assert mode & stat.S_IXGRP
        assert mode & stat.S_IXOTH
        assert mode & stat.S_IRUSR

    def test_missing_file_raises(self, tmp_path: Path) -> None:
        with pytest.raises(InstallError, match="executable"):
            FileInstaller().make_executable(tmp_path / "missing.jar")


class TestHomeBinDirectory:
    def test_is_bin_under_home(self) -> None:
        assert home_bin_directory() == Path.home() / "bin"
