"""
Errors raised while preparing GraphQL projects.

Every error is fatal for the run: nothing is retried and files already
written are left in place.
"""

from __future__ import annotations


class PrepareError(Exception):
    """Base class for errors raised by the prepare command."""

    pass


class ConfigurationMissingError(PrepareError):
    """Raised when a required setting cannot be determined.

    This can happen when:
    - The config file defines no projects
    - A project has no schemaPath
    - No generator is configured or given on the command line
    - No output path is configured or given on the command line
    """

    pass


class ConfigNotFoundError(PrepareError):
    """Raised when no GraphQL config file can be found or read."""

    pass


class ResourceMissingError(PrepareError):
    """Raised when a file or directory needed by a step is not available."""

    pass


class SchemaNotFoundError(ResourceMissingError):
    """Raised when the input schema file does not exist."""

    pass


class SchemaReadError(ResourceMissingError):
    """Raised when the input schema file is not valid UTF-8 text."""

    pass


class OutputDirectoryError(ResourceMissingError):
    """Raised when the directory of an output path is missing and cannot be created."""

    pass


class WriteValidationError(PrepareError):
    """Raised when generated content is rejected before it is written."""

    pass
