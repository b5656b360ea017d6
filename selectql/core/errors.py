"""Exceptions raised while compiling a GraphQL schema into a client module."""


class SelectQLError(Exception):
    """Base class for all code generation errors."""


class SchemaNotFoundError(SelectQLError):
    """Raised when the SDL document has no ``schema { ... }`` block."""

    def __init__(self, message: str = "Schema definition not found"):
        self.message = message
        super().__init__(message)


class SchemaSyntaxError(SelectQLError):
    """Raised when graphql-core cannot parse the SDL text."""


class UnsupportedTypeConstructError(SelectQLError):
    """Raised for type constructs the generator does not model.

    Covers interfaces, unions, directive definitions and any type reference
    that is not a named, list or non-null type.
    """

    def __init__(self, construct: str, name: str | None = None):
        self.construct = construct
        self.name = name
        if name:
            message = f"Unsupported GraphQL construct: {construct} '{name}'"
        else:
            message = f"Unsupported GraphQL construct: {construct}"
        super().__init__(message)


class UnsupportedDefaultValueError(SelectQLError):
    """Raised when an input field default literal cannot be inlined."""

    def __init__(self, type_name: str, field_name: str, reason: str):
        self.type_name = type_name
        self.field_name = field_name
        self.reason = reason
        super().__init__(f"Cannot inline default value of {type_name}.{field_name}: {reason}")


class GeneratedCodeError(SelectQLError):
    """Raised when the rendered module is not valid Python."""


class NameConflictError(SelectQLError):
    """Raised when a schema type name clashes with a name the generated module binds."""

    def __init__(self, name: str, conflict: str):
        self.name = name
        self.conflict = conflict
        super().__init__(f"Type name '{name}' conflicts with {conflict}")
