"""
Atomic file writer for bundles and bindings.

Ensures that an interrupted run never leaves a half-written output file.
"""

from __future__ import annotations

import logging
import tempfile
from collections.abc import Callable
from pathlib import Path

from graphql import GraphQLError, parse

from .errors import WriteValidationError

logger = logging.getLogger(__name__)


class AtomicWriter:
    """Writes files through a temporary file in the target directory.

    1. Validate the content (GraphQL output must parse)
    2. Write it to a temporary file next to the target
    3. Atomically replace the target file

    The target directory must already exist.
    """

    def __init__(self, validate_graphql: Callable[[str], None] | None = None):
        """Initialize the atomic writer.

        Args:
            validate_graphql: Optional validation function for GraphQL SDL
        """
        self._validate_graphql = validate_graphql or self._default_validate_graphql

    def write(self, path: str | Path, content: str, validate: bool = True) -> None:
        """Write content to file atomically, overwriting any existing file.

        Args:
            path: Target file path
            content: Content to write
            validate: Whether to validate before writing

        Raises:
            WriteValidationError: If validation fails
            OSError: If file operations fail
        """
        path = Path(path)
        if validate and path.suffix == ".graphql":
            self._validate_graphql(content)

        # Same directory ensures atomic rename on the same filesystem
        temp_fd, temp_path_str = tempfile.mkstemp(
            dir=path.parent,
            prefix=f".{path.name}.",
            suffix=".tmp",
            text=True,
        )
        temp_path = Path(temp_path_str)

        try:
            with open(temp_fd, "w", encoding="utf-8") as f:
                f.write(content)
            temp_path.replace(path)
        except Exception:
            temp_path.unlink(missing_ok=True)
            raise
        logger.debug("Wrote %d characters to %s", len(content), path)

    def _default_validate_graphql(self, content: str) -> None:
        """Default GraphQL validation.

        Raises:
            WriteValidationError: If the content is not valid SDL
        """
        try:
            parse(content)
        except GraphQLError as e:
            raise WriteValidationError(f"Generated schema is not valid GraphQL: {e.message}") from e
