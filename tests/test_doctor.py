"""Tests for the ``buildcli doctor`` command (cli/doctor.py).

git and the build tool are looked up via a mocked ``shutil.which`` and
the locator and the remote lookup are mocks — nothing is executed.

Coverage:
* Individual check functions return (label, value, status) rows.
* Missing tools warn; an unreadable manifest fails.
* Plain output when Rich is missing.
* CLI routing dispatches to ``run_doctor``.
"""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from buildcli.cli import exit_codes
from buildcli.config import BuildCLIConfig, UpdateConfig
from buildcli.exceptions import ManifestReadError, VcsCommandError

UPSTREAM = "https://github.com/BuildCLI/BuildCLI.git"


def _locator(result: Path | None = None, error: Exception | None = None) -> MagicMock:
    locator = MagicMock()
    locator.locate.return_value = result
    if error is not None:
        locator.locate.side_effect = error
    return locator


def _checkout(tmp_path: Path) -> Path:
    (tmp_path / "buildcli" / ".git").mkdir(parents=True)
    return tmp_path / "buildcli"


@pytest.fixture(autouse=True)
def tracks_remote() -> Iterator[MagicMock]:
    """Treat every working copy as a clone of the upstream unless a test says otherwise."""
    with patch(
        "buildcli.cli.doctor.GitCommandExecutor.tracks_remote", return_value=True,
    ) as mock_tracks:
        yield mock_tracks


# ---------------------------------------------------------------------------
# Individual check functions
# ---------------------------------------------------------------------------

class TestPythonVersionCheck:
    def test_returns_tuple(self) -> None:
        from buildcli.cli.doctor import _python_version_check

        label, value, status = _python_version_check()
        assert label == "Python"
        assert isinstance(value, str)
        assert "OK" in status


class TestBuildCLIVersionCheck:
    def test_returns_current_version(self) -> None:
        from buildcli.cli.doctor import _buildcli_version_check
        from buildcli.version import __version__

        label, value, status = _buildcli_version_check()
        assert label == "buildcli"
        assert value == __version__
        assert "OK" in status


class TestToolCheck:
    @patch("buildcli.cli.doctor.shutil.which", return_value="/usr/bin/git")
    def test_found(self, _mock_which: MagicMock) -> None:
        from buildcli.cli.doctor import _tool_check

        assert _tool_check("git", "git") == ("git", "/usr/bin/git", "[green]OK[/green]")

    @patch("buildcli.cli.doctor.shutil.which", return_value=None)
    def test_missing_warns(self, _mock_which: MagicMock) -> None:
        from buildcli.cli.doctor import _tool_check

        label, value, status = _tool_check("Build tool", "mvn")
        assert label == "Build tool"
        assert "mvn: not found" in value
        assert "WARN" in status


class TestInstallationChecks:
    def test_checkout_found(self, tmp_path: Path) -> None:
        from buildcli.cli.doctor import _installation_checks

        checkout = _checkout(tmp_path)
        install_row, copy_row = _installation_checks(
            _locator(checkout / "cli" / "target"), UPSTREAM,
        )

        assert install_row[2] == "[green]OK[/green]"
        assert copy_row == ("Working copy", str(checkout), "[green]OK[/green]")

    def test_not_a_checkout_warns(self, tmp_path: Path) -> None:
        from buildcli.cli.doctor import _installation_checks

        with patch.object(Path, "exists", return_value=False):
            _install_row, copy_row = _installation_checks(_locator(tmp_path), UPSTREAM)

        assert "updates disabled" in copy_row[1]
        assert "WARN" in copy_row[2]

    def test_clone_of_other_project_warns(
        self, tmp_path: Path, tracks_remote: MagicMock,
    ) -> None:
        from buildcli.cli.doctor import _installation_checks

        tracks_remote.return_value = False
        checkout = _checkout(tmp_path)

        _install_row, copy_row = _installation_checks(_locator(checkout), UPSTREAM)

        assert "not a clone of" in copy_row[1]
        assert "WARN" in copy_row[2]
        tracks_remote.assert_called_once_with(checkout, UPSTREAM)

    def test_unreadable_remotes_warn(self, tmp_path: Path, tracks_remote: MagicMock) -> None:
        from buildcli.cli.doctor import _installation_checks

        tracks_remote.side_effect = VcsCommandError("git is not installed or not on PATH.")

        _install_row, copy_row = _installation_checks(_locator(_checkout(tmp_path)), UPSTREAM)

        assert "not installed" in copy_row[1]
        assert "WARN" in copy_row[2]

    def test_unknown_location_warns(self) -> None:
        from buildcli.cli.doctor import _installation_checks

        install_row, copy_row = _installation_checks(_locator(None), UPSTREAM)
        assert "WARN" in install_row[2]
        assert "WARN" in copy_row[2]

    def test_unreadable_manifest_fails(self) -> None:
        from buildcli.cli.doctor import _installation_checks

        error = ManifestReadError("Cannot read build manifest BUILD-MANIFEST")
        install_row, _copy_row = _installation_checks(_locator(error=error), UPSTREAM)
        assert "FAIL" in install_row[2]
        assert "BUILD-MANIFEST" in install_row[1]


# ---------------------------------------------------------------------------
# run_doctor integration
# ---------------------------------------------------------------------------

class TestRunDoctor:
    @patch("buildcli.cli.doctor.shutil.which", side_effect=lambda exe: f"/usr/bin/{exe}")
    def test_all_pass_returns_success(self, _mock_which: MagicMock, tmp_path: Path) -> None:
        from buildcli.cli.doctor import run_doctor

        code = run_doctor(BuildCLIConfig(), _locator(_checkout(tmp_path)))
        assert code == exit_codes.SUCCESS

    @patch("buildcli.cli.doctor.shutil.which", return_value=None)
    def test_missing_tools_still_succeed(self, _mock_which: MagicMock, tmp_path: Path) -> None:
        """Missing git or build tool is a WARN, not a FAIL."""
        from buildcli.cli.doctor import run_doctor

        code = run_doctor(BuildCLIConfig(), _locator(_checkout(tmp_path)))
        assert code == exit_codes.SUCCESS

    def test_manifest_failure_returns_general_error(self) -> None:
        from buildcli.cli.doctor import run_doctor

        locator = _locator(error=ManifestReadError("Cannot read build manifest"))
        assert run_doctor(BuildCLIConfig(), locator) == exit_codes.GENERAL_ERROR

    def test_checks_configured_build_tool(self, tmp_path: Path) -> None:
        from buildcli.cli.doctor import run_doctor

        config = BuildCLIConfig(update=UpdateConfig(build_command=["gradle", "build"]))
        with patch("buildcli.cli.doctor.shutil.which", return_value="/x") as mock_which:
            run_doctor(config, _locator(_checkout(tmp_path)))

        looked_up = [call.args[0] for call in mock_which.call_args_list]
        assert looked_up == ["git", "gradle"]

    @patch("buildcli.cli.doctor.shutil.which", return_value=None)
    @patch.dict("sys.modules", {"rich": None, "rich.table": None, "rich.console": None})
    def test_plain_output_without_rich(
        self,
        _mock_which: MagicMock,
        tmp_path: Path,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        from buildcli.cli.doctor import run_doctor

        code = run_doctor(BuildCLIConfig(), _locator(_checkout(tmp_path)))

        captured = capsys.readouterr()
        assert code == exit_codes.SUCCESS
        assert "buildcli doctor" in captured.err
        assert "mvn: not found" in captured.err
        assert "WARN" in captured.err
        assert "[yellow]" not in captured.err
        assert "All checks passed." in captured.err


# ---------------------------------------------------------------------------
# CLI routing
# ---------------------------------------------------------------------------

class TestDoctorRouting:
    @patch("buildcli.cli.doctor.run_doctor", return_value=exit_codes.SUCCESS)
    def test_doctor_dispatches(self, mock_run: MagicMock) -> None:
        from buildcli.cli.app import main

        code = main(["doctor"])
        assert code == exit_codes.SUCCESS
        mock_run.assert_called_once()
        assert isinstance(mock_run.call_args.args[0], BuildCLIConfig)

    @patch("buildcli.cli.doctor.run_doctor", return_value=exit_codes.GENERAL_ERROR)
    def test_doctor_failure_propagates(self, _mock_run: MagicMock) -> None:
        from buildcli.cli.app import main

        assert main(["doctor"]) == exit_codes.GENERAL_ERROR

    @patch("buildcli.cli.doctor.run_doctor", return_value=exit_codes.SUCCESS)
    def test_doctor_skips_update_check(self, _mock_run: MagicMock) -> None:
        from buildcli.cli.app import main

        with patch("buildcli.cli.app._run_update_check") as mock_check:
            main(["doctor"])
        mock_check.assert_not_called()
