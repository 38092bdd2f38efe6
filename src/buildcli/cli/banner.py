"""Welcome banner written to plain stdout at startup."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import TextIO

from buildcli.config import BannerConfig
from buildcli.exceptions import ConfigError
from buildcli.utils.style import ansi

TAGLINE = "Built by the community, for the community"

_BANNER_LINES: tuple[str, ...] = (
    ",-----.          ,--.,--.   ,--. ,-----.,--.   ,--.",
    "|  |) /_ ,--.,--.`--'|  | ,-|  |'  .--./|  |   |  |",
    "|  .-.  \\|  ||  |,--.|  |' .-. ||  |    |  |   |  |       {tagline}",
    "|  '--' /'  ''  '|  ||  |\\ `-' |'  '--'\\|  '--.|  |",
    "`------'  `----' `--'`--' `---'  `-----'`-----'`--'",
)


def print_official_banner(out: TextIO) -> None:
    """Write the five-line BuildCLI banner followed by a blank line."""
    tagline = ansi(TAGLINE, "blue italic")
    for line in _BANNER_LINES:
        print(line.format(tagline=tagline), file=out)
    print(file=out)


def print_welcome(config: BannerConfig, out: TextIO | None = None) -> None:
    """Print the configured banner to *out* (stdout by default).

    A custom ``path`` replaces the official banner only when it names an
    existing regular file.

    Raises
    ------
    ConfigError
        When the custom banner file exists but cannot be read.
    """
    out = out if out is not None else sys.stdout
    if not config.enabled:
        return

    if config.path is None:
        print_official_banner(out)
        return

    path = Path(config.path).expanduser()
    if not path.is_file():
        print_official_banner(out)
        return

    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigError(f"Cannot read banner file {path}: {exc}") from exc
    print(text, file=out)
