"""Tests for the SDL schema parser."""

import dataclasses

import pytest

from selectql.core.errors import (
    SchemaNotFoundError,
    SchemaSyntaxError,
    UnsupportedTypeConstructError,
)
from selectql.core.parser import SchemaParser

SCHEMA = """
schema {
  query: Query
  mutation: Mutation
}

scalar DateTime

"Account state"
enum Status {
  ACTIVE
  INACTIVE
}

type Query {
  user(id: ID!): User
}

type Mutation {
  createUser(input: CreateUserInput!): User
}

type User {
  id: ID!
  status: Status
  createdAt: DateTime
}

input CreateUserInput {
  name: String!
  status: Status = ACTIVE
}
"""


def field_names(definition):
    return [f.name.value for f in definition.fields]


# =============================================================================
# Tests: Extraction
# =============================================================================


class TestExtraction:
    """Top-level definitions are collected in source order."""

    def test_roots(self):
        document = SchemaParser(SCHEMA).parse()
        assert document.query_type == "Query"
        assert document.mutation_type == "Mutation"

    def test_objects_in_order(self):
        document = SchemaParser(SCHEMA).parse()
        assert [o.name for o in document.objects] == ["Query", "Mutation", "User"]
        assert field_names(document.objects[2]) == ["id", "status", "createdAt"]

    def test_inputs(self):
        document = SchemaParser(SCHEMA).parse()
        assert [i.name for i in document.inputs] == ["CreateUserInput"]
        assert document.inputs[0].is_input
        assert document.inputs[0].fields[1].default_value is not None

    def test_enums_and_scalars(self):
        document = SchemaParser(SCHEMA).parse()
        assert [e.name for e in document.enums] == ["Status"]
        assert [v.name.value for v in document.enums[0].values] == ["ACTIVE", "INACTIVE"]
        assert document.enums[0].description == "Account state"
        assert document.scalars == ("DateTime",)

    def test_mutation_root_is_optional(self):
        document = SchemaParser("schema { query: Q } type Q { a: Int }").parse()
        assert document.query_type == "Q"
        assert document.mutation_type is None

    def test_subscription_root_is_ignored(self):
        sdl = "schema { query: Q subscription: S } type Q { a: Int } type S { b: Int }"
        document = SchemaParser(sdl).parse()
        assert document.query_type == "Q"
        assert document.mutation_type is None

    def test_declaration_order_preserved(self):
        sdl = "schema { query: B } type B { a: A } type A { c: C } type C { x: Int }"
        document = SchemaParser(sdl).parse()
        assert [o.name for o in document.objects] == ["B", "A", "C"]

    def test_document_is_immutable(self):
        document = SchemaParser(SCHEMA).parse()
        user = document.objects[2]
        assert isinstance(user.fields, tuple)
        assert isinstance(document.enums[0].values, tuple)
        with pytest.raises(dataclasses.FrozenInstanceError):
            user.fields = ()
        with pytest.raises(dataclasses.FrozenInstanceError):
            document.enums[0].description = "changed"
        with pytest.raises(AttributeError):
            user.fields.append(None)


# =============================================================================
# Tests: Extensions
# =============================================================================


class TestExtensions:
    """``extend`` blocks merge into existing definitions."""

    def test_extend_type_appends_fields(self):
        sdl = """
        schema { query: Query }
        type Query { a: Int }
        extend type Query { b: String a: Int }
        """
        document = SchemaParser(sdl).parse()
        assert field_names(document.objects[0]) == ["a", "b"]

    def test_extension_before_definition(self):
        sdl = """
        schema { query: Query }
        extend type Query { b: String }
        type Query { a: Int }
        """
        document = SchemaParser(sdl).parse()
        assert len(document.objects) == 1
        assert field_names(document.objects[0]) == ["b", "a"]

    def test_extend_enum(self):
        sdl = "schema { query: Q } type Q { a: Int } enum E { A } extend enum E { B A }"
        document = SchemaParser(sdl).parse()
        assert [v.name.value for v in document.enums[0].values] == ["A", "B"]

    def test_extend_input(self):
        sdl = "schema { query: Q } type Q { a: Int } input I { a: Int } extend input I { b: Int }"
        document = SchemaParser(sdl).parse()
        assert field_names(document.inputs[0]) == ["a", "b"]

    def test_extend_schema_adds_mutation(self):
        sdl = "schema { query: Q } extend schema { mutation: M } type Q { a: Int } type M { b: Int }"
        document = SchemaParser(sdl).parse()
        assert document.mutation_type == "M"


# =============================================================================
# Tests: Errors
# =============================================================================


class TestErrors:
    def test_missing_schema_definition(self):
        with pytest.raises(SchemaNotFoundError):
            SchemaParser("type Query { a: Int }").parse()

    def test_blank_document(self):
        with pytest.raises(SchemaNotFoundError):
            SchemaParser("  \n").parse()

    def test_syntax_error(self):
        with pytest.raises(SchemaSyntaxError):
            SchemaParser("type Query {").parse()

    @pytest.mark.parametrize(
        "definition, construct",
        [
            ("interface Node { id: ID! }", "interface"),
            ("union Result = Query", "union"),
            ("directive @cached on FIELD_DEFINITION", "directive"),
        ],
    )
    def test_unsupported_definitions(self, definition, construct):
        sdl = f"schema {{ query: Query }} type Query {{ a: Int }} {definition}"
        with pytest.raises(UnsupportedTypeConstructError) as exc_info:
            SchemaParser(sdl).parse()
        assert exc_info.value.construct == construct

    def test_interface_implementation_rejected(self):
        sdl = "schema { query: Query } type Query implements Node { id: ID! }"
        with pytest.raises(UnsupportedTypeConstructError):
            SchemaParser(sdl).parse()

    def test_directive_usage_is_allowed(self):
        sdl = 'schema { query: Query } type Query { a: Int @deprecated(reason: "old") }'
        document = SchemaParser(sdl).parse()
        assert field_names(document.objects[0]) == ["a"]
