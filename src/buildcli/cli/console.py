"""stderr console used by ``doctor`` and the ``cli()`` error boundary.

Messages are written with Rich markup.  Rich is imported lazily so that
bootstrap paths (``--help``, ``--version``) keep working without it; the
plain fallback removes the markup tags instead of printing them.
"""

from __future__ import annotations

import re
import sys
from typing import Any

from buildcli.exceptions import BuildCLIError, EnvironmentError

_MARKUP_TAG = re.compile(r"\[/?[a-z][a-z ]*\]")


def get_rich_console() -> Any:
	"""Create a Rich console targeting stderr or raise ``EnvironmentError``."""
	try:
		from rich.console import Console
	except ModuleNotFoundError as exc:
		raise EnvironmentError(
			"rich is not installed. Install with: pip install rich",
		) from exc
	return Console(stderr=True)


def strip_markup(text: str) -> str:
	"""Remove Rich style tags such as ``[bold red]`` and ``[/yellow]``."""
	return _MARKUP_TAG.sub("", text)


class _ConsoleProxy:
	"""``print``-compatible proxy over Rich with a plain stderr fallback."""

	def print(self, *objects: object) -> None:
		try:
			rich_console = get_rich_console()
		except EnvironmentError:
			print(
				*(strip_markup(o) if isinstance(o, str) else o for o in objects),
				file=sys.stderr,
			)
			return
		rich_console.print(*objects)

	def error(self, exc: BuildCLIError) -> None:
		"""Render a known error and its hint, if any."""
		self.print(f"[bold red]Error:[/bold red] {exc}")
		if exc.hint:
			self.print(f"[yellow]Hint:[/yellow] {exc.hint}")


console = _ConsoleProxy()
