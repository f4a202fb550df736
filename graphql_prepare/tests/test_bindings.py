from __future__ import annotations

import pytest
from graphql import GraphQLList, GraphQLNonNull, GraphQLString

from graphql_prepare.bindings import GENERATORS, BindingGenerationError, generate_code
from graphql_prepare.bindings.typescript import string_literal, template_literal, ts_type

SCHEMA = '''
"""A blog post"""
type Post implements Node {
  id: ID!
  title: String!
  body: String
  status: Status!
  tags: [String!]
}

interface Node {
  id: ID!
}

enum Status {
  DRAFT
  PUBLISHED
}

scalar DateTime

union SearchResult = Post

input PostWhereInput {
  id: ID
  title_contains: String
}

type Query {
  posts(where: PostWhereInput, first: Int): [Post!]!
  post(id: ID!): Post
  search(text: String!): [SearchResult]
  now: DateTime!
}

type Mutation {
  publish(id: ID!): Post
}

type Subscription {
  postPublished: Post!
}
'''


class TestTsType:
    def test_non_null_scalar(self):
        assert ts_type(GraphQLNonNull(GraphQLString)) == "string"

    def test_nullable_scalar(self):
        assert ts_type(GraphQLString) == "string | null"

    def test_list(self):
        assert ts_type(GraphQLNonNull(GraphQLList(GraphQLNonNull(GraphQLString)))) == "Array<string>"
        assert ts_type(GraphQLList(GraphQLString)) == "Array<string | null> | null"


def test_string_literal():
    assert string_literal("it's") == "'it\\'s'"


def test_template_literal_escapes_backticks_and_placeholders():
    assert template_literal("a `b` ${c}") == "a \\`b\\` \\${c}"


def test_available_generators():
    assert set(GENERATORS) == {"binding", "binding-ts", "prisma", "prisma-ts"}


def test_unknown_generator():
    with pytest.raises(BindingGenerationError, match="Generator 'apollo' is not supported"):
        generate_code(SCHEMA, "apollo")


def test_invalid_schema():
    with pytest.raises(BindingGenerationError, match="Schema is not valid"):
        generate_code("type Query { post: Post }", "binding")


class TestJavaScriptBindings:
    def test_binding(self):
        code = generate_code(SCHEMA, "binding")
        assert "const { makeBindingClass } = require('graphql-binding')" in code
        assert "module.exports.Binding = makeBindingClass({ schema })" in code
        assert "type Post implements Node {" in code
        assert "interface Binding" not in code

    def test_prisma(self):
        code = generate_code(SCHEMA, "prisma")
        assert "require('prisma-binding')" in code
        assert "module.exports.Prisma = makePrismaBindingClass({ typeDefs })" in code

    def test_type_defs_are_escaped(self):
        schema = 'type Query {\n  """Uses `markdown`"""\n  hello: String\n}\n'
        code = generate_code(schema, "binding")
        assert "Uses \\`markdown\\`" in code


class TestTypeScriptBindings:
    def test_operations(self):
        code = generate_code(SCHEMA, "binding-ts")
        assert (
            "  posts: <T = Array<Post>>(args?: { where?: PostWhereInput | null, first?: number | null }, "
            "info?: GraphQLResolveInfo | string, options?: Options) => Promise<T>"
        ) in code
        assert "  post: <T = Post | null>(args: { id: string | number }," in code
        assert "  now: <T = DateTime>(args?: {}," in code
        assert "  postPublished: <T = Post>(args?: {}, info?: GraphQLResolveInfo | string, options?: Options) => Promise<AsyncIterator<T>>" in code

    def test_types(self):
        code = generate_code(SCHEMA, "binding-ts")
        assert "export interface Post extends Node {" in code
        assert "  title: string\n" in code
        assert "  body?: string | null\n" in code
        assert "  tags?: Array<string> | null\n" in code
        assert "export type Status = 'DRAFT' | 'PUBLISHED'" in code
        assert "export type SearchResult = Post" in code
        assert "export type DateTime = string" in code
        assert "export interface PostWhereInput {" in code
        assert " * A blog post" in code

    def test_root_types_are_not_repeated_as_types(self):
        code = generate_code(SCHEMA, "binding-ts")
        assert code.count("export interface Query {") == 1

    def test_binding_class(self):
        code = generate_code(SCHEMA, "binding-ts")
        assert "export const Binding = makeBindingClass<BindingConstructor<BindingInstance>>" in code

    def test_prisma_exists(self):
        code = generate_code(SCHEMA, "prisma-ts")
        assert "export interface Exists {\n  Post: (where?: PostWhereInput) => Promise<boolean>\n}" in code
        assert "export const Prisma = makePrismaBindingClass<BindingConstructor<Prisma>>({ typeDefs })" in code

    def test_schema_without_mutations(self):
        code = generate_code("type Query {\n  hello: String\n}\n", "binding-ts")
        assert "export interface Mutation {\n}" in code
