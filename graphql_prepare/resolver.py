"""
Resolution of the inputs and outputs of the prepare steps.

Command line arguments win over settings stored by previous runs, which win
over the project's declared schema. Stored settings are looked up through
ordered candidate keys (see `config`), so deprecated keys are only used
when the current key is missing.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path, PurePosixPath
from typing import Any

from .config import BUNDLE_OUTPUT_KEYS, GENERATOR_KEYS, ExtensionKey, PrepareArguments
from .errors import ConfigurationMissingError, OutputDirectoryError, SchemaNotFoundError
from .graphql_config import GraphQLProjectConfig

logger = logging.getLogger(__name__)

BUNDLE_EXTENSION = "graphql"


@dataclass(frozen=True)
class Resolution:
    """A resolved value and the extension key it was read from, if any."""

    value: str
    key: ExtensionKey | None = None

    @property
    def deprecated(self) -> bool:
        return self.key is not None and self.key.deprecated


def lookup(extensions: dict[str, Any] | None, candidates: tuple[ExtensionKey, ...]) -> Resolution | None:
    """Return the first candidate key holding a string value."""
    for key in candidates:
        value = key.get(extensions)
        if isinstance(value, str) and value:
            return Resolution(value, key)
    return None


def to_config_path(path: str | Path) -> str:
    """Path as stored in config files (forward slashes)."""
    return str(path).replace("\\", "/")


def binding_extension(generator: str) -> str:
    """File extension of the code written by a generator."""
    return "ts" if generator.endswith("ts") else "js"


def determine_schema_path(project: GraphQLProjectConfig) -> Resolution:
    """Input schema for bundling."""
    if project.schema_path:
        return Resolution(project.schema_path)
    raise ConfigurationMissingError(f"No schemaPath defined for project '{project.name}' in config file.")


def determine_generator(project: GraphQLProjectConfig, args: PrepareArguments) -> Resolution:
    """Generator name; the command line argument takes precedence over the config file."""
    if args.generator:
        return Resolution(args.generator)
    found = lookup(project.extensions, GENERATOR_KEYS)
    if found is not None:
        return found
    raise ConfigurationMissingError("Generator cannot be determined. No existing configuration found and no generator parameter specified.")


def ensure_output_directory(output_path: str, create_dirs: bool = True) -> None:
    """Make sure the directory of `output_path` exists.

    Raises:
        OutputDirectoryError: If the directory is missing and may not or cannot be created
    """
    directory = Path(output_path).parent
    if directory.is_dir():
        return
    if not create_dirs:
        raise OutputDirectoryError(f"Output path '{to_config_path(directory)}' does not exist.")
    try:
        directory.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise OutputDirectoryError(f"Output path '{to_config_path(directory)}' does not exist and cannot be created: {e.strerror or e}") from e
    logger.debug("Created output directory %s", directory)


def determine_output_path(
    project: GraphQLProjectConfig,
    args: PrepareArguments,
    extension: str,
    candidates: tuple[ExtensionKey, ...],
) -> Resolution:
    """Output path for a step; the output folder argument takes precedence over the config file.

    Args:
        project: Project being processed
        args: Run arguments
        extension: File extension used with the output folder argument
        candidates: Extension keys holding a previous output path

    Returns:
        The output path, whose directory exists once this returns
    """
    if args.output:
        resolution = Resolution(str(PurePosixPath(to_config_path(args.output)) / f"{project.name}.{extension}"))
    else:
        resolution = lookup(project.extensions, candidates)
        if resolution is None:
            raise ConfigurationMissingError("Output path cannot be determined. No existing configuration found and no output parameter specified.")

    ensure_output_directory(resolution.value, args.create_dirs)
    logger.debug("Output path for project %s: %s", project.name, resolution.value)
    return resolution


def determine_input_schema(project: GraphQLProjectConfig, bundle_output: str | None = None) -> Resolution:
    """Input schema for bindings.

    Uses the bundle written in this run, then the bundle output of a
    previous run, then the project schema.

    Raises:
        ConfigurationMissingError: If no input schema is known
        SchemaNotFoundError: If the input schema file does not exist
    """
    stored_bundle = lookup(project.extensions, BUNDLE_OUTPUT_KEYS)

    if bundle_output:
        resolution = Resolution(bundle_output)
    elif stored_bundle is not None:
        resolution = stored_bundle
    elif project.schema_path:
        resolution = Resolution(project.schema_path)
    else:
        raise ConfigurationMissingError("Input schema cannot be determined.")

    if not os.path.exists(resolution.value):
        hint = " Did you run bundle first?" if stored_bundle is not None else ""
        raise SchemaNotFoundError(f"Schema '{resolution.value}' not found.{hint}")
    return resolution
