"""
Mapping of GraphQL types to TypeScript types.
"""

from __future__ import annotations

from graphql import (
    GraphQLNamedType,
    GraphQLNonNull,
    GraphQLType,
    is_list_type,
    is_non_null_type,
)

SCALAR_TYPES = {
    "String": "string",
    "ID": "string | number",
    "Int": "number",
    "Float": "number",
    "Boolean": "boolean",
}

# Type of custom scalars when the schema gives no better hint
CUSTOM_SCALAR_TYPE = "string"


def named_type(graphql_type: GraphQLNamedType) -> str:
    return SCALAR_TYPES.get(graphql_type.name, graphql_type.name)


def ts_type(graphql_type: GraphQLType) -> str:
    """TypeScript type of a GraphQL type, nullable types included.

    Examples:
        String! -> "string"
        [Post]! -> "Array<Post | null>"
        Int -> "number | null"
    """
    if is_non_null_type(graphql_type):
        return _ts_non_null(graphql_type.of_type)
    return f"{_ts_non_null(graphql_type)} | null"


def _ts_non_null(graphql_type: GraphQLType) -> str:
    if isinstance(graphql_type, GraphQLNonNull):
        return _ts_non_null(graphql_type.of_type)
    if is_list_type(graphql_type):
        return f"Array<{ts_type(graphql_type.of_type)}>"
    return named_type(graphql_type)


def is_required(graphql_type: GraphQLType) -> bool:
    return is_non_null_type(graphql_type)


def string_literal(value: str) -> str:
    """Single-quoted TypeScript string literal."""
    return "'" + value.replace("\\", "\\\\").replace("'", "\\'") + "'"


def template_literal(text: str) -> str:
    """Escape text for use inside a JavaScript template literal."""
    return text.replace("\\", "\\\\").replace("`", "\\`").replace("${", "\\${")
