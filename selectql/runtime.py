"""Runtime support imported by generated client modules.

Generated code relies on four things from here:

* ``GraphQLClient`` - the base class of every generated root client,
* ``GraphQLModel`` (and the ``QueryRoot`` / ``MutationRoot`` markers) - the
  pydantic base of every generated object and input class,
* ``graphql_selector`` - the marker put on every generated accessor method,
  which call-site analyzers use to tell selectors from ordinary members,
* ``EnumConverterRegistry`` - the table store filled by the generated
  ``register_enum_converters`` routine.

Usage:
    from my_app import client as generated

    registry = EnumConverterRegistry()
    generated.register_enum_converters(registry)

    async with generated.GraphQLClient(httpx.AsyncClient(base_url=url)) as client:
        ...
"""

from enum import Enum
from typing import Any, Callable, Generic, Protocol, TypeVar, runtime_checkable

import httpx
from pydantic import BaseModel, ConfigDict

TQuery = TypeVar("TQuery")
TMutation = TypeVar("TMutation")
F = TypeVar("F", bound=Callable[..., Any])

# Attribute set on generated accessor methods
SELECTOR_MARKER = "__graphql_selector__"


def graphql_selector(func: F) -> F:
    """Mark a generated method as a GraphQL field selector."""
    setattr(func, SELECTOR_MARKER, True)
    return func


def is_graphql_selector(obj: Any) -> bool:
    """Check whether a function or bound method carries the selector marker."""
    return getattr(obj, SELECTOR_MARKER, False) is True


class GraphQLModel(BaseModel):
    """Base class for generated object and input types.

    Fields are bound to their GraphQL names through aliases, and may also be
    populated by their Python names.
    """

    model_config = ConfigDict(populate_by_name=True, protected_namespaces=())


class QueryRoot(GraphQLModel):
    """Marker base for the schema's query root type."""


class MutationRoot(GraphQLModel):
    """Marker base for the schema's mutation root type."""


class Unit(GraphQLModel):
    """Neutral root used when the schema does not declare a query or mutation type."""


@runtime_checkable
class QueryPipeline(Protocol):
    """Hook between a client and its transport.

    Example:
        class LoggingPipeline:
            async def send(self, http_client, request):
                logger.info("query: %s", request["query"])
                response = await http_client.post("", json=request)
                return response.json()
    """

    async def send(self, http_client: httpx.AsyncClient, request: dict[str, Any]) -> dict[str, Any]:
        """Send a GraphQL request document and return the decoded response."""
        ...


class GraphQLClient(Generic[TQuery, TMutation]):
    """Base class of generated clients, parameterized by the root types.

    Holds the transport handle and the optional query pipeline; executing
    operations is left to the host application.
    """

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        query_pipeline: QueryPipeline | None = None,
    ):
        self.http_client = http_client
        self.query_pipeline = query_pipeline

    async def close(self):
        """Close the underlying transport."""
        await self.http_client.aclose()

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()


class UnknownEnumValueError(ValueError):
    """Raised when a value has no entry in a registered conversion table."""

    def __init__(self, enum_type: type, value: Any):
        self.enum_type = enum_type
        self.value = value
        super().__init__(f"{value!r} is not a known value of {enum_type.__name__}")


class EnumConverter:
    """Bidirectional wire-name table for one enum type."""

    def __init__(self, enum_type: type[Enum], wire_to_member: dict[str, Enum], member_to_wire: dict[Enum, str]):
        self.enum_type = enum_type
        self.wire_to_member = dict(wire_to_member)
        self.member_to_wire = dict(member_to_wire)

    def to_member(self, wire_name: str) -> Enum:
        try:
            return self.wire_to_member[wire_name]
        except KeyError:
            raise UnknownEnumValueError(self.enum_type, wire_name) from None

    def to_wire(self, member: Enum) -> str:
        try:
            return self.member_to_wire[member]
        except KeyError:
            raise UnknownEnumValueError(self.enum_type, member) from None


class EnumConverterRegistry:
    """Process-wide store of enum conversion tables, keyed by enum type.

    Registering the same enum again replaces its tables, so running a
    generated ``register_enum_converters`` routine twice is harmless.
    """

    def __init__(self):
        self._converters: dict[type[Enum], EnumConverter] = {}

    def register(
        self,
        enum_type: type[Enum],
        wire_to_member: dict[str, Enum],
        member_to_wire: dict[Enum, str],
    ):
        """Register both lookup tables for an enum type."""
        self._converters[enum_type] = EnumConverter(enum_type, wire_to_member, member_to_wire)

    def get(self, enum_type: type[Enum]) -> EnumConverter | None:
        """Get the converter of an enum type, or None if not registered."""
        return self._converters.get(enum_type)

    def __contains__(self, enum_type: object) -> bool:
        return enum_type in self._converters

    def __len__(self) -> int:
        return len(self._converters)

    def _require(self, enum_type: type[Enum]) -> EnumConverter:
        converter = self.get(enum_type)
        if converter is None:
            raise KeyError(f"No converter registered for {enum_type.__name__}")
        return converter

    def from_wire(self, enum_type: type[Enum], wire_name: str) -> Enum:
        """Convert a GraphQL enum value into its Python member."""
        return self._require(enum_type).to_member(wire_name)

    def to_wire(self, member: Enum) -> str:
        """Convert a Python enum member into its GraphQL value."""
        return self._require(type(member)).to_wire(member)
