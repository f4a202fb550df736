"""
Schema import flattening.

Resolves the import directives of a schema file transitively and returns a
single self-contained schema document.

1. The root file contributes every definition it declares
2. `*` imports every definition visible in the imported file
3. Named imports bring the named types and everything they reference
4. `Type.field` imports a single field of an object type
"""

from __future__ import annotations

import logging
from copy import copy
from dataclasses import dataclass, field
from pathlib import Path

from graphql import (
    DirectiveDefinitionNode,
    DocumentNode,
    GraphQLError,
    Node,
    TypeDefinitionNode,
    TypeSystemDefinitionNode,
    TypeSystemExtensionNode,
    parse,
    print_ast,
)

from .directives import ImportDirective, parse_imports

logger = logging.getLogger(__name__)

BUILTIN_SCALARS = frozenset({"String", "Int", "Float", "Boolean", "ID"})


class SchemaImportError(Exception):
    """Raised when a schema and its imports cannot be flattened."""

    pass


def _has_definitions(text: str) -> bool:
    """Whether a file holds anything besides comments and blank lines."""
    return any(line.strip() and not line.strip().startswith("#") for line in text.splitlines())


def _key(definition: Node) -> str:
    """Scope key of a definition; directives are prefixed with @."""
    if isinstance(definition, DirectiveDefinitionNode):
        return f"@{definition.name.value}"
    return definition.name.value


def _named_type(type_node: Node) -> str:
    while not hasattr(type_node, "name"):
        type_node = type_node.type
    return type_node.name.value


def _directive_names(node: Node) -> list[str]:
    return [f"@{d.name.value}" for d in getattr(node, "directives", None) or ()]


def referenced_names(definition: Node) -> list[str]:
    """Names of the types and directives a definition refers to."""
    names = _directive_names(definition)
    for field_node in getattr(definition, "fields", None) or ():
        names.append(_named_type(field_node.type))
        names.extend(_directive_names(field_node))
        for argument in getattr(field_node, "arguments", None) or ():
            names.append(_named_type(argument.type))
            names.extend(_directive_names(argument))
    for argument in getattr(definition, "arguments", None) or ():
        names.append(_named_type(argument.type))
    for interface in getattr(definition, "interfaces", None) or ():
        names.append(interface.name.value)
    for member in getattr(definition, "types", None) or ():
        names.append(member.name.value)
    for value in getattr(definition, "values", None) or ():
        names.extend(_directive_names(value))
    return names


def _merge_fields(existing: Node, addition: Node) -> Node:
    """Object, interface or input type with the fields of both definitions (first one wins)."""
    if getattr(existing, "fields", None) is None or getattr(addition, "fields", None) is None:
        return existing
    known = {f.name.value for f in existing.fields}
    new_fields = [f for f in addition.fields if f.name.value not in known]
    interfaces = getattr(existing, "interfaces", None)
    extra_interfaces = []
    if interfaces is not None:
        known_interfaces = {i.name.value for i in interfaces}
        extra_interfaces = [i for i in addition.interfaces or () if i.name.value not in known_interfaces]
    if not new_fields and not extra_interfaces:
        return existing
    merged = copy(existing)
    merged.fields = (*existing.fields, *new_fields)
    if extra_interfaces:
        merged.interfaces = (*interfaces, *extra_interfaces)
    return merged


def _with_fields(definition: Node, field_names: set[str]) -> Node:
    selected = copy(definition)
    selected.fields = tuple(f for f in definition.fields if f.name.value in field_names)
    return selected


@dataclass
class Scope:
    """Definitions visible in one schema file: its own plus everything it imports."""

    types: dict[str, Node] = field(default_factory=dict)
    others: list[Node] = field(default_factory=list)

    def add(self, definition: Node) -> None:
        key = _key(definition)
        if key in self.types:
            self.types[key] = _merge_fields(self.types[key], definition)
        else:
            self.types[key] = definition


class SchemaImporter:
    """Flattens schema files, caching parsed documents for the importer's lifetime."""

    def __init__(self):
        self._documents: dict[Path, tuple[DocumentNode, list[ImportDirective]]] = {}

    def import_schema(self, path: str | Path) -> str:
        """Flatten the schema at `path` into a single SDL document.

        Raises:
            SchemaImportError: If a file is missing or invalid, or a type cannot be found
        """
        root = Path(path).resolve()
        scope = self._scope(root, ())
        definitions = [*scope.types.values(), *scope.others]
        self._check_references(definitions)
        logger.debug("Flattened %s into %d definitions", root, len(definitions))
        if not definitions:
            return ""
        return print_ast(DocumentNode(definitions=tuple(definitions))) + "\n"

    def _load(self, path: Path) -> tuple[DocumentNode, list[ImportDirective]]:
        if path not in self._documents:
            try:
                text = path.read_text(encoding="utf-8")
            except FileNotFoundError as e:
                raise SchemaImportError(f"Schema file '{path}' not found.") from e
            except UnicodeDecodeError as e:
                raise SchemaImportError(f"Schema file '{path}' is not valid UTF-8: {e.reason}") from e
            try:
                document = parse(text) if _has_definitions(text) else DocumentNode(definitions=())
            except GraphQLError as e:
                raise SchemaImportError(f"Schema file '{path}' is not valid GraphQL: {e.message}") from e
            self._documents[path] = (document, parse_imports(text))
        return self._documents[path]

    def _scope(self, path: Path, stack: tuple[Path, ...]) -> Scope:
        document, imports = self._load(path)
        scope = Scope()
        for definition in document.definitions:
            if isinstance(definition, (TypeDefinitionNode, DirectiveDefinitionNode)):
                scope.add(definition)
            elif isinstance(definition, (TypeSystemDefinitionNode, TypeSystemExtensionNode)):
                scope.others.append(definition)
            else:
                logger.debug("Ignoring %s in %s", definition.kind, path)

        if path in stack:
            # Cyclic import: only the file's own definitions are visible
            return scope

        for directive in imports:
            imported_path = (path.parent / directive.path).resolve()
            imported = self._scope(imported_path, (*stack, path))
            for definition in self._select(imported, directive, imported_path):
                scope.add(definition)
        return scope

    def _select(self, scope: Scope, directive: ImportDirective, path: Path) -> list[Node]:
        """Definitions of `scope` requested by an import directive, with their dependencies."""
        if directive.imports_all:
            return list(scope.types.values())

        selected: dict[str, Node] = {}
        for name in directive.names:
            type_name, _, field_name = name.partition(".")
            if type_name not in scope.types:
                raise SchemaImportError(f"Couldn't find type {type_name} in any of the schemas.")
            definition = scope.types[type_name]
            if field_name and field_name != "*":
                if getattr(definition, "fields", None) is None:
                    raise SchemaImportError(f"Type {type_name} in '{path}' has no fields to import.")
                if field_name not in {f.name.value for f in definition.fields}:
                    raise SchemaImportError(f"Couldn't find field {type_name}.{field_name} in '{path}'.")
                definition = _with_fields(definition, {field_name})
            if type_name in selected:
                selected[type_name] = _merge_fields(selected[type_name], definition)
            else:
                selected[type_name] = definition

        pending = [ref for definition in selected.values() for ref in referenced_names(definition)]
        while pending:
            ref = pending.pop()
            if ref in selected or ref not in scope.types:
                continue
            selected[ref] = scope.types[ref]
            pending.extend(referenced_names(selected[ref]))
        return list(selected.values())

    def _check_references(self, definitions: list[Node]) -> None:
        defined = {_key(d) for d in definitions if isinstance(d, (TypeDefinitionNode, DirectiveDefinitionNode))}
        for definition in definitions:
            for ref in referenced_names(definition):
                if ref.startswith("@") or ref in BUILTIN_SCALARS or ref in defined:
                    continue
                raise SchemaImportError(f"Couldn't find type {ref} in any of the schemas.")


def import_schema(path: str | Path) -> str:
    """Flatten the schema at `path` and its imports into one schema document."""
    return SchemaImporter().import_schema(path)
