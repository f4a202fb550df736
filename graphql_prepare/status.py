"""
Progress output of the prepare command.
"""

from __future__ import annotations

import logging
from typing import IO

import click

logger = logging.getLogger("graphql_prepare")


class StatusReporter:
    """Prints one colored status line per step event.

    `start` lines are only shown in verbose mode; the outcome of a step
    (`succeed`, `fail`) is always shown.
    """

    def __init__(self, verbose: bool = False, stream: IO[str] | None = None):
        self.verbose = verbose
        self.stream = stream

    def _echo(self, symbol: str, color: str, text: str) -> None:
        click.secho(f"{symbol} ", fg=color, nl=False, file=self.stream, err=self.stream is None)
        click.echo(text, file=self.stream, err=self.stream is None)

    def start(self, text: str) -> None:
        logger.debug(text)
        if self.verbose:
            self._echo("…", "cyan", text)

    def succeed(self, text: str) -> None:
        logger.debug(text)
        self._echo("✔", "green", text)

    def info(self, text: str) -> None:
        logger.debug(text)
        self._echo("ℹ", "blue", text)

    def warn(self, text: str) -> None:
        logger.debug(text)
        self._echo("⚠", "yellow", text)

    def fail(self, text: str) -> None:
        logger.debug(text)
        self._echo("✖", "red", text)


def highlight(text: str) -> str:
    """Emphasize a project name or path inside a status line."""
    return click.style(text, fg="green")
