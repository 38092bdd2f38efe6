"""Tests for the stderr console (cli/console.py)."""

from __future__ import annotations

import sys

import pytest

from buildcli.cli.console import console, get_rich_console, strip_markup
from buildcli.exceptions import ConfigError, EnvironmentError


def _hide_rich(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setitem(sys.modules, "rich", None)
    monkeypatch.setitem(sys.modules, "rich.console", None)


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("[bold red]Error:[/bold red] boom", "Error: boom"),
        ("[yellow]Hint:[/yellow] reinstall", "Hint: reinstall"),
        ("no markup here", "no markup here"),
        ("values [1, 2] stay", "values [1, 2] stay"),
    ],
)
def test_strip_markup(text: str, expected: str) -> None:
    assert strip_markup(text) == expected


class TestError:
    def test_renders_message_and_hint(self, capsys: pytest.CaptureFixture[str]) -> None:
        console.error(ConfigError("Invalid buildcli configuration.", hint="Check logging.level."))

        err = capsys.readouterr().err
        assert "Error: Invalid buildcli configuration." in err
        assert "Hint: Check logging.level." in err

    def test_no_hint_line_without_hint(self, capsys: pytest.CaptureFixture[str]) -> None:
        console.error(ConfigError("Configuration file not found: x.yml"))
        assert "Hint" not in capsys.readouterr().err

    def test_plain_fallback_drops_markup(
        self, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str],
    ) -> None:
        _hide_rich(monkeypatch)

        console.error(ConfigError("bad banner", hint="Fix banner.path."))

        err = capsys.readouterr().err
        assert err == "Error: bad banner\nHint: Fix banner.path.\n"


def test_get_rich_console_requires_rich(monkeypatch: pytest.MonkeyPatch) -> None:
    _hide_rich(monkeypatch)

    with pytest.raises(EnvironmentError, match="rich is not installed"):
        get_rich_console()
