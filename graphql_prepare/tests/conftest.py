from __future__ import annotations

import json
from pathlib import Path

import click
import pytest

from graphql_prepare.status import StatusReporter

SCHEMA = """type Query {
  posts: [Post!]!
}

type Post {
  id: ID!
  title: String!
}
"""


def _write_config(directory: Path, document: dict, filename: str = ".graphqlconfig") -> Path:
    path = directory / filename
    path.write_text(json.dumps(document, indent=2), encoding="utf-8")
    return path


class RecordingReporter(StatusReporter):
    """Status reporter keeping (event, text) pairs instead of printing them."""

    def __init__(self, verbose: bool = False):
        super().__init__(verbose=verbose)
        self.events: list[tuple[str, str]] = []

    def _record(self, event: str, text: str) -> None:
        self.events.append((event, click.unstyle(text)))

    def start(self, text: str) -> None:
        self._record("start", text)

    def succeed(self, text: str) -> None:
        self._record("succeed", text)

    def info(self, text: str) -> None:
        self._record("info", text)

    def warn(self, text: str) -> None:
        self._record("warn", text)

    def fail(self, text: str) -> None:
        self._record("fail", text)

    def texts(self, event: str) -> list[str]:
        return [text for e, text in self.events if e == event]


@pytest.fixture
def workdir(tmp_path, monkeypatch):
    """Temporary working directory holding a schema.graphql file."""
    monkeypatch.chdir(tmp_path)
    (tmp_path / "schema.graphql").write_text(SCHEMA, encoding="utf-8")
    return tmp_path


@pytest.fixture
def write_config():
    """Writes a JSON config document and returns its path."""
    return _write_config


@pytest.fixture
def reporter():
    return RecordingReporter(verbose=True)
