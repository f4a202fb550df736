"""
Parsing of schema import directives.

An import directive is a comment line in a schema file::

    # import Post, User from "types.graphql"
    # import * from 'common.graphql'
    # import Query.posts, Mutation.* from "posts.graphql"
"""

from __future__ import annotations

import re
from dataclasses import dataclass

IMPORT_PATTERN = re.compile(r"""^\s*#\s*import\s+(?P<names>.+?)\s+from\s+(?P<quote>["'])(?P<path>.+?)(?P=quote)\s*;?\s*$""")

ALL = "*"


@dataclass(frozen=True)
class ImportDirective:
    """An import of some definitions from another schema file."""

    names: tuple[str, ...]
    path: str

    @property
    def imports_all(self) -> bool:
        return ALL in self.names


def parse_import_line(line: str) -> ImportDirective | None:
    """Parse one line, returning None when it is not an import directive."""
    match = IMPORT_PATTERN.match(line)
    if match is None:
        return None
    names = tuple(name.strip() for name in match.group("names").split(",") if name.strip())
    if not names:
        return None
    return ImportDirective(names, match.group("path"))


def parse_imports(text: str) -> list[ImportDirective]:
    """All import directives of a schema file, in file order."""
    directives = []
    for line in text.splitlines():
        directive = parse_import_line(line)
        if directive is not None:
            directives.append(directive)
    return directives
