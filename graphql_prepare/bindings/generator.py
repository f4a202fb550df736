"""
Binding code generation.

Renders client bindings for a schema with jinja2 templates. A generator name
selects the binding library (graphql-binding or prisma-binding) and the
language; names ending in `-ts` produce TypeScript, the others JavaScript.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

import jinja2
from graphql import (
    GraphQLEnumType,
    GraphQLError,
    GraphQLField,
    GraphQLInputObjectType,
    GraphQLInterfaceType,
    GraphQLObjectType,
    GraphQLScalarType,
    GraphQLSchema,
    GraphQLUnionType,
    build_schema,
)
from graphql.pyutils import Undefined

from . import typescript

logger = logging.getLogger(__name__)

CURRENT_DIR = Path(__file__).parent.resolve().absolute()
TEMPLATES_DIR = CURRENT_DIR.parent / "templates" / "binding"

SPECIFIED_SCALARS = frozenset(typescript.SCALAR_TYPES)


class BindingGenerationError(Exception):
    """Raised when bindings cannot be generated for a schema."""

    pass


@dataclass(frozen=True)
class Generator:
    """A binding generator: a template and the class it exports."""

    name: str
    template: str
    class_name: str


GENERATORS = {
    "binding": Generator("binding", "binding.js.jinja2", "Binding"),
    "binding-ts": Generator("binding-ts", "binding.ts.jinja2", "Binding"),
    "prisma": Generator("prisma", "prisma.js.jinja2", "Prisma"),
    "prisma-ts": Generator("prisma-ts", "prisma.ts.jinja2", "Prisma"),
}


@dataclass
class ArgumentInfo:
    name: str
    ts_type: str
    required: bool


@dataclass
class FieldInfo:
    name: str
    ts_type: str
    required: bool
    description: str | None = None
    args: list[ArgumentInfo] = field(default_factory=list)

    @property
    def all_args_optional(self) -> bool:
        return not any(arg.required for arg in self.args)


@dataclass
class TypeInfo:
    """A named schema type prepared for the templates."""

    name: str
    kind: str  # "object", "interface", "input", "enum", "union" or "scalar"
    description: str | None = None
    fields: list[FieldInfo] = field(default_factory=list)
    interfaces: list[str] = field(default_factory=list)
    values: list[str] = field(default_factory=list)
    members: list[str] = field(default_factory=list)


@dataclass
class BindingModel:
    """Everything a binding template needs."""

    type_defs: str
    query: list[FieldInfo]
    mutation: list[FieldInfo]
    subscription: list[FieldInfo]
    types: list[TypeInfo]
    exists: list[str]


def _field_info(name: str, graphql_field: GraphQLField) -> FieldInfo:
    args = [
        ArgumentInfo(arg_name, typescript.ts_type(arg.type), typescript.is_required(arg.type) and arg.default_value is Undefined)
        for arg_name, arg in (getattr(graphql_field, "args", None) or {}).items()
    ]
    return FieldInfo(
        name=name,
        ts_type=typescript.ts_type(graphql_field.type),
        required=typescript.is_required(graphql_field.type),
        description=graphql_field.description,
        args=args,
    )


def _root_fields(root_type: GraphQLObjectType | None) -> list[FieldInfo]:
    if root_type is None:
        return []
    return [_field_info(name, f) for name, f in root_type.fields.items()]


def _type_info(graphql_type) -> TypeInfo | None:
    info = TypeInfo(name=graphql_type.name, kind="", description=graphql_type.description)
    if isinstance(graphql_type, GraphQLObjectType):
        info.kind = "object"
        info.fields = [_field_info(name, f) for name, f in graphql_type.fields.items()]
        info.interfaces = [i.name for i in graphql_type.interfaces]
    elif isinstance(graphql_type, GraphQLInterfaceType):
        info.kind = "interface"
        info.fields = [_field_info(name, f) for name, f in graphql_type.fields.items()]
    elif isinstance(graphql_type, GraphQLInputObjectType):
        info.kind = "input"
        info.fields = [_field_info(name, f) for name, f in graphql_type.fields.items()]
    elif isinstance(graphql_type, GraphQLEnumType):
        info.kind = "enum"
        info.values = list(graphql_type.values)
    elif isinstance(graphql_type, GraphQLUnionType):
        info.kind = "union"
        info.members = [t.name for t in graphql_type.types]
    elif isinstance(graphql_type, GraphQLScalarType):
        if graphql_type.name in SPECIFIED_SCALARS:
            return None
        info.kind = "scalar"
    else:
        return None
    return info


def build_model(schema_text: str, schema: GraphQLSchema) -> BindingModel:
    """Collect the operations and types of a schema for the templates."""
    root_types = {t.name for t in (schema.query_type, schema.mutation_type, schema.subscription_type) if t is not None}
    types = []
    for name, graphql_type in schema.type_map.items():
        if name.startswith("__") or name in root_types:
            continue
        info = _type_info(graphql_type)
        if info is not None:
            types.append(info)

    inputs = {t.name for t in types if t.kind == "input"}
    exists = [t.name for t in types if t.kind == "object" and f"{t.name}WhereInput" in inputs]

    return BindingModel(
        type_defs=schema_text,
        query=_root_fields(schema.query_type),
        mutation=_root_fields(schema.mutation_type),
        subscription=_root_fields(schema.subscription_type),
        types=types,
        exists=exists,
    )


class BindingGenerator:
    """Renders bindings for one generator."""

    def __init__(self, generator: str):
        if generator not in GENERATORS:
            available = ", ".join(sorted(GENERATORS))
            raise BindingGenerationError(f"Generator '{generator}' is not supported. Available generators: {available}.")
        self.generator = GENERATORS[generator]
        self.jinja_env = jinja2.Environment(
            loader=jinja2.FileSystemLoader(TEMPLATES_DIR),
            lstrip_blocks=True,
            trim_blocks=True,
            keep_trailing_newline=True,
        )
        self.jinja_env.filters["template_literal"] = typescript.template_literal
        self.jinja_env.filters["string_literal"] = typescript.string_literal
        self.template = self.jinja_env.get_template(self.generator.template)

    def generate(self, schema_text: str) -> str:
        try:
            schema = build_schema(schema_text)
        except GraphQLError as e:
            raise BindingGenerationError(f"Schema is not valid: {e.message}") from e
        except TypeError as e:
            raise BindingGenerationError(f"Schema is not valid: {e}") from e

        model = build_model(schema_text, schema)
        logger.debug(
            "Generating %s bindings for %d queries, %d mutations, %d subscriptions and %d types",
            self.generator.name,
            len(model.query),
            len(model.mutation),
            len(model.subscription),
            len(model.types),
        )
        return self.template.render(
            model=model,
            class_name=self.generator.class_name,
            custom_scalar_type=typescript.CUSTOM_SCALAR_TYPE,
        )


def generate_code(schema_text: str, generator: str) -> str:
    """Generate binding source code for a schema with the named generator."""
    return BindingGenerator(generator).generate(schema_text)
