"""Naming and type annotation helpers shared by the model builder and generator."""

import json
import keyword
import re

from .errors import UnsupportedTypeConstructError
from .ir import EnumType, ListType, ObjectType, ScalarType, TypeDescriptor
from .scalars import UNMAPPED_SCALAR_TYPE, ScalarRegistry

# Names bound at module level by the client template
GENERATED_MODULE_NAMES = frozenset(
    {
        "annotations",
        "enum",
        "typing",
        "httpx",
        "pydantic",
        "runtime",
        "T",
        "register_enum_converters",
        "_model",
    }
)

# Builtins that appear in generated annotations and enum bases
BUILTIN_ANNOTATION_NAMES = frozenset({"str", "int", "float", "bool", "list"})


def to_snake_case(name: str) -> str:
    """Convert camelCase or PascalCase to snake_case."""
    s1 = re.sub("(.)([A-Z][a-z]+)", r"\1_\2", name)
    return re.sub("([a-z0-9])([A-Z])", r"\1_\2", s1).lower()


def to_pascal_case(name: str) -> str:
    """Convert snake_case or camelCase to PascalCase."""
    snake = to_snake_case(name)
    return "".join(word.capitalize() for word in snake.split("_"))


def _move_leading_underscores(name: str, fallback: str) -> str:
    # ``_id`` -> ``id_``; pydantic and Enum both treat leading underscores as private
    stripped = name.lstrip("_")
    if stripped == name:
        return name
    return f"{stripped or fallback}_"


def to_enum_member_name(wire_name: str) -> str:
    """Convert an enum value to an UPPER_SNAKE member name.

    ``ACTIVE`` stays ``ACTIVE``, ``inProgress`` becomes ``IN_PROGRESS`` and
    ``_hidden`` becomes ``HIDDEN_``.
    """
    if wire_name.isupper() or not any(c.isupper() for c in wire_name):
        name = wire_name.upper()
    else:
        name = to_snake_case(wire_name).upper()
    return _move_leading_underscores(name, "VALUE")


def safe_identifier(name: str) -> str:
    """Suffix Python keywords with an underscore."""
    if keyword.iskeyword(name) or keyword.issoftkeyword(name):
        return f"{name}_"
    return name


def to_member_name(wire_name: str) -> str:
    """Public Python member name for a GraphQL field or argument.

    ``createdAt`` becomes ``created_at``, ``from`` becomes ``from_`` and
    ``_id`` becomes ``id_``.
    """
    return safe_identifier(_move_leading_underscores(to_snake_case(wire_name), "field"))


def unique_name(name: str, taken) -> str:
    """Return ``name``, or ``name_2``, ``name_3``... if it is already taken."""
    if name not in taken:
        return name
    base = name.rstrip("_")
    counter = 2
    while f"{base}_{counter}" in taken:
        counter += 1
    return f"{base}_{counter}"


def annotation_root(python_type: str) -> str:
    """The module-level name an annotation depends on, e.g. ``typing`` for ``typing.Any``."""
    match = re.match(r"[A-Za-z_]\w*", python_type)
    return match.group(0) if match else python_type


def string_literal(value: str) -> str:
    """Render a double-quoted Python string literal."""
    return json.dumps(value)


def safe_docstring(text: str | None) -> str:
    """Escape text for use in docstrings."""
    if not text:
        return ""
    text = text.replace("\\", "\\\\").replace('"""', '\\"\\"\\"')
    if text.endswith('"'):
        text += " "
    return text.strip()


class TypeAnnotator:
    """Renders type descriptors as Python annotations."""

    def __init__(self, scalars: ScalarRegistry | None = None):
        self.scalars = scalars or ScalarRegistry()

    def annotation(self, descriptor: TypeDescriptor) -> str:
        """Full annotation, e.g. ``list[str] | None`` for ``[String!]``."""
        if isinstance(descriptor, ScalarType):
            inner = self.scalars.python_type(descriptor.name)
        elif isinstance(descriptor, (EnumType, ObjectType)):
            inner = descriptor.name
        elif isinstance(descriptor, ListType):
            inner = f"list[{self.annotation(descriptor.element)}]"
        else:
            raise UnsupportedTypeConstructError("type descriptor", type(descriptor).__name__)
        return self._with_nullability(inner, descriptor.nullable)

    def selector_return(self, descriptor: TypeDescriptor, result: str = "T") -> str:
        """Return annotation of an accessor, with objects replaced by ``result``."""
        if isinstance(descriptor, ObjectType):
            inner = result
        elif isinstance(descriptor, (ScalarType, EnumType)):
            return self.annotation(descriptor)
        elif isinstance(descriptor, ListType):
            inner = f"list[{self.selector_return(descriptor.element, result)}]"
        else:
            raise UnsupportedTypeConstructError("type descriptor", type(descriptor).__name__)
        return self._with_nullability(inner, descriptor.nullable)

    @staticmethod
    def _with_nullability(annotation: str, nullable: bool) -> str:
        if nullable and annotation != UNMAPPED_SCALAR_TYPE:
            return f"{annotation} | None"
        return annotation
