"""Core modules for GraphQL client generation."""

from .compiler import SCHEMA_NOT_FOUND_PLACEHOLDER, generate_client
from .errors import (
    GeneratedCodeError,
    NameConflictError,
    SchemaNotFoundError,
    SchemaSyntaxError,
    SelectQLError,
    UnsupportedDefaultValueError,
    UnsupportedTypeConstructError,
)
from .generator import ClientCodeGenerator
from .hooks import (
    AddHeaderHook,
    FilterTypesHook,
    HookRunner,
    PostGenerateHook,
    PreGenerateHook,
)
from .ir import (
    ArgumentDefinition,
    ClassDefinition,
    ClientModel,
    EnumDefinition,
    EnumType,
    EnumValueDefinition,
    FieldDefinition,
    ListType,
    ObjectType,
    ScalarType,
    SchemaDocument,
    TypeDescriptor,
    requires_selector,
)
from .model_builder import ClientModelBuilder
from .parser import SchemaParser
from .scalars import (
    DateMapping,
    DateTimeMapping,
    JSONMapping,
    ScalarMapping,
    ScalarRegistry,
    UUIDMapping,
)
from .type_resolver import TypeResolver

__all__ = [
    # Pipeline
    "generate_client",
    "SCHEMA_NOT_FOUND_PLACEHOLDER",
    # Errors
    "SelectQLError",
    "SchemaNotFoundError",
    "SchemaSyntaxError",
    "UnsupportedTypeConstructError",
    "UnsupportedDefaultValueError",
    "GeneratedCodeError",
    "NameConflictError",
    # Scalars
    "ScalarMapping",
    "ScalarRegistry",
    "DateTimeMapping",
    "DateMapping",
    "UUIDMapping",
    "JSONMapping",
    # Hooks
    "PreGenerateHook",
    "PostGenerateHook",
    "AddHeaderHook",
    "FilterTypesHook",
    "HookRunner",
    # IR types
    "SchemaDocument",
    "ScalarType",
    "EnumType",
    "ObjectType",
    "ListType",
    "TypeDescriptor",
    "requires_selector",
    "ArgumentDefinition",
    "FieldDefinition",
    "ClassDefinition",
    "EnumDefinition",
    "EnumValueDefinition",
    "ClientModel",
    # Pipeline stages
    "SchemaParser",
    "TypeResolver",
    "ClientModelBuilder",
    "ClientCodeGenerator",
]
