"""
Bundle and binding steps.

Each step resolves its inputs and outputs, calls an external operation
(schema flattening or binding generation), writes the result and returns
an immutable fragment of extension settings. Merging fragments into the
project is left to the caller.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from .atomic_writer import AtomicWriter
from .bindings import generate_code
from .config import BINDING_KEY, BINDING_OUTPUT_KEYS, BUNDLE_KEY, BUNDLE_OUTPUT_KEYS, ExtensionKey, PrepareArguments
from .errors import SchemaReadError
from .graphql_config import GraphQLProjectConfig
from .importer import import_schema
from .resolver import (
    BUNDLE_EXTENSION,
    binding_extension,
    determine_generator,
    determine_input_schema,
    determine_output_path,
    determine_schema_path,
    to_config_path,
)

logger = logging.getLogger(__name__)

Flatten = Callable[[str], str]
Generate = Callable[[str, str], str]


@dataclass(frozen=True)
class BundleFragment:
    """Extension settings produced by the bundle step."""

    output: str
    deprecated_keys: tuple[ExtensionKey, ...] = ()

    def to_extensions(self) -> dict[str, Any]:
        return {BUNDLE_KEY: self.output}


@dataclass(frozen=True)
class BindingFragment:
    """Extension settings produced by the binding step."""

    output: str
    generator: str
    deprecated_keys: tuple[ExtensionKey, ...] = ()

    def to_extensions(self) -> dict[str, Any]:
        return {BINDING_KEY: {"output": self.output, "generator": self.generator}}


def is_configured(project: GraphQLProjectConfig, candidates: tuple[ExtensionKey, ...]) -> bool:
    """Whether any of the candidate keys is present in the project extensions."""
    return any(key.is_set(project.extensions) for key in candidates)


def run_bundle(
    project: GraphQLProjectConfig,
    args: PrepareArguments,
    flatten: Flatten = import_schema,
    writer: AtomicWriter | None = None,
) -> BundleFragment:
    """Flatten the project schema and write it to the bundle output path."""
    output = determine_output_path(project, args, BUNDLE_EXTENSION, BUNDLE_OUTPUT_KEYS)
    schema_path = determine_schema_path(project)

    logger.debug("Bundling %s into %s", schema_path.value, output.value)
    schema = flatten(schema_path.value)
    (writer or AtomicWriter()).write(output.value, schema)

    deprecated = (output.key,) if output.deprecated else ()
    return BundleFragment(to_config_path(output.value), deprecated)


def run_bindings(
    project: GraphQLProjectConfig,
    args: PrepareArguments,
    bundle_output: str | None = None,
    generate: Generate = generate_code,
    writer: AtomicWriter | None = None,
) -> BindingFragment:
    """Generate bindings for the project and write them to the binding output path.

    Args:
        project: Project being processed
        args: Run arguments
        bundle_output: Bundle written earlier in this run, used as input schema
        generate: Binding code generation operation
        writer: Writer for the generated file

    Returns:
        The binding output path and the generator used
    """
    generator = determine_generator(project, args)
    output = determine_output_path(project, args, binding_extension(generator.value), BINDING_OUTPUT_KEYS)
    schema_path = determine_input_schema(project, bundle_output)

    logger.debug("Generating %s bindings from %s into %s", generator.value, schema_path.value, output.value)
    try:
        with open(schema_path.value, encoding="utf-8") as f:
            schema = f.read()
    except UnicodeDecodeError as e:
        raise SchemaReadError(f"Schema '{schema_path.value}' is not valid UTF-8: {e.reason}") from e
    code = generate(schema, generator.value)
    (writer or AtomicWriter()).write(output.value, code)

    deprecated = tuple(r.key for r in (generator, output, schema_path) if r.deprecated)
    return BindingFragment(to_config_path(output.value), generator.value, deprecated)
