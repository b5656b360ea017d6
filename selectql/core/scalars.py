"""Custom scalar mappings for GraphQL code generation.

Provides a protocol for defining which Python type a GraphQL custom scalar
is annotated with in generated models, and what import that type needs.

Example usage:
    from selectql.core.scalars import ScalarMapping, ScalarRegistry

    registry = ScalarRegistry()

    class MoneyMapping:
        python_type = "Decimal"
        import_statement = "from decimal import Decimal"

    registry.register("Money", MoneyMapping())
"""

from typing import Protocol, runtime_checkable

# GraphQL built-in scalars and their Python counterparts
BUILTIN_SCALAR_TYPES = {
    "String": "str",
    "Int": "int",
    "Float": "float",
    "Boolean": "bool",
    "ID": "str",
}

# Fallback annotation for custom scalars without a mapping; generated modules import typing
UNMAPPED_SCALAR_TYPE = "typing.Any"


@runtime_checkable
class ScalarMapping(Protocol):
    """Protocol for custom scalar mappings.

    Attributes:
        python_type: The Python type name (e.g., "datetime", "Decimal")
        import_statement: The import needed for this type (e.g., "from datetime import datetime"),
            or None when the generated module already provides it
    """

    python_type: str
    import_statement: str | None


class DateTimeMapping:
    """DateTime scalars as ``datetime`` (ISO 8601 on the wire)."""

    python_type = "datetime"
    import_statement = "from datetime import datetime"


class DateMapping:
    """Date scalars as ``date``."""

    python_type = "date"
    import_statement = "from datetime import date"


class UUIDMapping:
    python_type = "UUID"
    import_statement = "from uuid import UUID"


class JSONMapping:
    """JSON scalars are passed through untyped."""

    python_type = UNMAPPED_SCALAR_TYPE
    import_statement = None


class ScalarRegistry:
    """Registry for custom scalar mappings.

    Manages the mapping between GraphQL scalar names and Python types.

    Example:
        registry = ScalarRegistry()
        registry.python_type("DateTime")  # "datetime"
        registry.python_type("Int")       # "int"
        registry.python_type("Money")     # "typing.Any" until registered
    """

    def __init__(self):
        self._mappings: dict[str, ScalarMapping] = {}
        # Register default mappings
        self._register_defaults()

    def _register_defaults(self):
        """Register built-in default mappings."""
        self.register("DateTime", DateTimeMapping())
        self.register("Date", DateMapping())
        self.register("UUID", UUIDMapping())
        self.register("JSON", JSONMapping())
        self.register("JSONObject", JSONMapping())

    def register(self, scalar_name: str, mapping: ScalarMapping):
        """Register a mapping for a scalar type."""
        self._mappings[scalar_name] = mapping

    def get(self, scalar_name: str) -> ScalarMapping | None:
        """Get the mapping for a scalar type, or None if not registered."""
        return self._mappings.get(scalar_name)

    def has(self, scalar_name: str) -> bool:
        """Check if a mapping is registered for a scalar type."""
        return scalar_name in self._mappings

    def python_type(self, scalar_name: str) -> str:
        """Return the Python annotation for a scalar name."""
        if scalar_name in BUILTIN_SCALAR_TYPES:
            return BUILTIN_SCALAR_TYPES[scalar_name]
        mapping = self.get(scalar_name)
        if mapping is None:
            return UNMAPPED_SCALAR_TYPE
        return mapping.python_type

    def imports_for(self, scalar_names) -> list[str]:
        """Return the sorted import statements needed for the given scalars."""
        imports = set()
        for name in scalar_names:
            mapping = self.get(name)
            if mapping is None or mapping.import_statement is None:
                continue
            if name not in BUILTIN_SCALAR_TYPES:
                imports.add(mapping.import_statement)
        return sorted(imports)
