"""Intermediate Representation (IR) for GraphQL schemas.

Three layers live here:

* the parsed ``SchemaDocument`` (definitions extracted from the SDL AST),
* resolved type descriptors (``ScalarType``, ``EnumType``, ``ObjectType``,
  ``ListType``), and
* the generation model handed to the code generator (``ClientModel`` with its
  ``ClassDefinition`` and ``EnumDefinition`` entries).
"""

from dataclasses import dataclass, field
from typing import Union

from graphql import EnumValueDefinitionNode, FieldDefinitionNode, InputValueDefinitionNode

from .errors import UnsupportedTypeConstructError

# Prefix of the pydantic fields backing accessor methods
BACKING_FIELD_PREFIX = "raw_"


# =============================================================================
# Parsed schema
# =============================================================================


@dataclass(frozen=True)
class SchemaTypeDefinition:
    """An object or input type as declared in the SDL, extensions merged."""
    name: str
    fields: tuple[FieldDefinitionNode | InputValueDefinitionNode, ...] = ()
    description: str | None = None
    is_input: bool = False


@dataclass(frozen=True)
class SchemaEnumDefinition:
    """An enum type as declared in the SDL, extensions merged."""
    name: str
    values: tuple[EnumValueDefinitionNode, ...] = ()
    description: str | None = None


@dataclass(frozen=True)
class SchemaDocument:
    """Top-level definitions of one SDL document, in source order."""
    objects: tuple[SchemaTypeDefinition, ...] = ()
    inputs: tuple[SchemaTypeDefinition, ...] = ()
    enums: tuple[SchemaEnumDefinition, ...] = ()
    scalars: tuple[str, ...] = ()
    query_type: str | None = None
    mutation_type: str | None = None

    @property
    def enum_names(self) -> set[str]:
        return {e.name for e in self.enums}


# =============================================================================
# Resolved type descriptors
# =============================================================================


@dataclass(frozen=True)
class ScalarType:
    name: str
    nullable: bool = True


@dataclass(frozen=True)
class EnumType:
    name: str
    nullable: bool = True


@dataclass(frozen=True)
class ObjectType:
    """Reference to an object or input type, by name only."""
    name: str
    nullable: bool = True


@dataclass(frozen=True)
class ListType:
    """A list whose own nullability is independent of its element's."""
    element: "TypeDescriptor"
    nullable: bool = True


TypeDescriptor = Union[ScalarType, EnumType, ObjectType, ListType]


def requires_selector(descriptor: TypeDescriptor) -> bool:
    """Return True if values of this type must be projected by a selector.

    Objects always need one; lists need one when their innermost element is
    an object; scalars and enums never do.
    """
    if isinstance(descriptor, ObjectType):
        return True
    if isinstance(descriptor, (ScalarType, EnumType)):
        return False
    if isinstance(descriptor, ListType):
        return requires_selector(descriptor.element)
    raise UnsupportedTypeConstructError("type descriptor", type(descriptor).__name__)


def innermost_type(descriptor: TypeDescriptor) -> ScalarType | EnumType | ObjectType:
    """Strip every list level and return the named element type."""
    while isinstance(descriptor, ListType):
        descriptor = descriptor.element
    return descriptor


# =============================================================================
# Generation model
# =============================================================================


@dataclass
class ArgumentDefinition:
    """An argument of an object field, as a Python parameter."""
    name: str
    wire_name: str
    type_name: str
    type: TypeDescriptor | None = None


@dataclass
class FieldDefinition:
    """A member of a generated class."""
    name: str
    wire_name: str
    type: TypeDescriptor
    arguments: list[ArgumentDefinition] = field(default_factory=list)
    # Python expression for an input field default, None when absent
    default_value: str | None = None
    description: str | None = None

    @property
    def backing_name(self) -> str:
        """Name of the pydantic field holding the value of an accessor."""
        return f"{BACKING_FIELD_PREFIX}{self.name}"

    @property
    def requires_selector(self) -> bool:
        return requires_selector(self.type)

    @property
    def is_accessor(self) -> bool:
        """True if the field is exposed through a method instead of a plain field."""
        return self.requires_selector or bool(self.arguments)

    def referenced_types(self) -> set[str]:
        """Names of the object, input and enum types this field mentions."""
        names = set()
        for descriptor in [self.type] + [a.type for a in self.arguments if a.type is not None]:
            named = innermost_type(descriptor)
            if not isinstance(named, ScalarType):
                names.add(named.name)
        return names


@dataclass
class EnumValueDefinition:
    wire_name: str
    member_name: str
    description: str | None = None


@dataclass
class EnumDefinition:
    name: str
    values: list[EnumValueDefinition] = field(default_factory=list)
    description: str | None = None

    @property
    def wire_to_member(self) -> dict[str, str]:
        return {v.wire_name: v.member_name for v in self.values}

    @property
    def member_to_wire(self) -> dict[str, str]:
        return {v.member_name: v.wire_name for v in self.values}


@dataclass
class ClassDefinition:
    """A generated model class for a GraphQL object or input type."""
    name: str
    fields: list[FieldDefinition] = field(default_factory=list)
    is_input: bool = False
    description: str | None = None


@dataclass
class ClientModel:
    """Complete generation model for one client module."""
    namespace: str
    client_name: str
    query_type: str | None = None
    mutation_type: str | None = None
    types: list[ClassDefinition] = field(default_factory=list)
    inputs: list[ClassDefinition] = field(default_factory=list)
    enums: list[EnumDefinition] = field(default_factory=list)
    scalar_imports: list[str] = field(default_factory=list)
