"""Resolution of GraphQL type references into type descriptors."""

from collections.abc import Iterable

from graphql import ListTypeNode, NamedTypeNode, NonNullTypeNode, TypeNode

from .errors import UnsupportedTypeConstructError
from .ir import EnumType, ListType, ObjectType, ScalarType, SchemaDocument, TypeDescriptor

BUILTIN_SCALARS = ("String", "Int", "Float", "Boolean", "ID")


class TypeResolver:
    """Classifies type references against the known enum and scalar names.

    Named types that are neither enums nor scalars resolve to ``ObjectType``,
    which covers input objects as well. Descriptors only carry names, so
    recursive object graphs never need expanding.

    Example:
        resolver = TypeResolver(enum_names={"Status"}, scalar_names={"String"})
        resolver.resolve(parse_type("[Status!]"))
        # ListType(element=EnumType("Status", nullable=False), nullable=True)
    """

    def __init__(self, enum_names: Iterable[str], scalar_names: Iterable[str]):
        self.enum_names = frozenset(enum_names)
        self.scalar_names = frozenset(scalar_names)

    @classmethod
    def for_document(cls, document: SchemaDocument) -> "TypeResolver":
        """Create a resolver for a parsed schema, including the built-in scalars."""
        return cls(
            enum_names=document.enum_names,
            scalar_names=set(BUILTIN_SCALARS) | set(document.scalars),
        )

    def resolve(self, type_node: TypeNode, nullable: bool = True) -> TypeDescriptor:
        """Resolve a type reference.

        Args:
            type_node: A named, list or non-null type node
            nullable: Nullability of this level; cleared by a non-null wrapper

        Raises:
            UnsupportedTypeConstructError: for any other node shape
        """
        if isinstance(type_node, NonNullTypeNode):
            return self.resolve(type_node.type, nullable=False)
        if isinstance(type_node, ListTypeNode):
            return ListType(element=self.resolve(type_node.type), nullable=nullable)
        if isinstance(type_node, NamedTypeNode):
            return self.resolve_named(type_node.name.value, nullable)
        raise UnsupportedTypeConstructError("type reference", type(type_node).__name__)

    def resolve_named(self, name: str, nullable: bool = True) -> TypeDescriptor:
        """Classify a type name as enum, scalar or object."""
        if name in self.enum_names:
            return EnumType(name=name, nullable=nullable)
        if name in self.scalar_names:
            return ScalarType(name=name, nullable=nullable)
        return ObjectType(name=name, nullable=nullable)
