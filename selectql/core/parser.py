"""GraphQL schema parser using graphql-core.

Parses SDL text and produces a SchemaDocument.
"""

import logging
from dataclasses import dataclass, field

from graphql import (
    DirectiveDefinitionNode,
    DocumentNode,
    EnumTypeDefinitionNode,
    EnumTypeExtensionNode,
    ExecutableDefinitionNode,
    GraphQLSyntaxError,
    InputObjectTypeDefinitionNode,
    InputObjectTypeExtensionNode,
    InterfaceTypeDefinitionNode,
    InterfaceTypeExtensionNode,
    ObjectTypeDefinitionNode,
    ObjectTypeExtensionNode,
    OperationType,
    ScalarTypeDefinitionNode,
    SchemaDefinitionNode,
    SchemaExtensionNode,
    UnionTypeDefinitionNode,
    UnionTypeExtensionNode,
    parse,
)

from .errors import SchemaNotFoundError, SchemaSyntaxError, UnsupportedTypeConstructError
from .ir import SchemaDocument, SchemaEnumDefinition, SchemaTypeDefinition

logger = logging.getLogger(__name__)


@dataclass
class _PendingDefinition:
    """A definition still collecting members from extensions."""
    name: str
    members: list = field(default_factory=list)
    description: str | None = None

    def add_members(self, nodes):
        """Append member nodes, skipping names already present."""
        existing_names = {m.name.value for m in self.members}
        for node in nodes or ():
            if node.name.value not in existing_names:
                self.members.append(node)
                existing_names.add(node.name.value)


class SchemaParser:
    """Parses GraphQL SDL text into a SchemaDocument."""

    def __init__(self, sdl: str):
        """Initialize a parser with the SDL text of one schema document."""
        self.sdl = sdl
        self._objects: dict[str, _PendingDefinition] = {}
        self._inputs: dict[str, _PendingDefinition] = {}
        self._enums: dict[str, _PendingDefinition] = {}
        self._scalars: list[str] = []
        self._operation_types: dict[OperationType, str] = {}
        self._has_schema_definition = False

    def parse(self) -> SchemaDocument:
        """Parse the SDL and return the complete document.

        Raises:
            SchemaSyntaxError: the text is not valid SDL
            SchemaNotFoundError: there is no ``schema { ... }`` block
            UnsupportedTypeConstructError: interfaces, unions or directive
                definitions are declared
        """
        if not self.sdl.strip():
            raise SchemaNotFoundError()

        try:
            ast = parse(self.sdl, no_location=True)
        except GraphQLSyntaxError as e:
            logger.error("Error parsing schema: %s", e.message)
            raise SchemaSyntaxError(str(e)) from e

        self._process_ast(ast)

        if not self._has_schema_definition:
            raise SchemaNotFoundError()

        return SchemaDocument(
            objects=tuple(
                SchemaTypeDefinition(p.name, tuple(p.members), p.description)
                for p in self._objects.values()
            ),
            inputs=tuple(
                SchemaTypeDefinition(p.name, tuple(p.members), p.description, is_input=True)
                for p in self._inputs.values()
            ),
            enums=tuple(
                SchemaEnumDefinition(p.name, tuple(p.members), p.description)
                for p in self._enums.values()
            ),
            scalars=tuple(self._scalars),
            query_type=self._operation_types.get(OperationType.QUERY),
            mutation_type=self._operation_types.get(OperationType.MUTATION),
        )

    def _process_ast(self, ast: DocumentNode):
        """Process GraphQL AST definitions in source order."""
        for definition in ast.definitions:
            if isinstance(definition, SchemaDefinitionNode):
                self._process_schema_definition(definition)
            elif isinstance(definition, SchemaExtensionNode):
                self._process_operation_types(definition)
            elif isinstance(definition, ScalarTypeDefinitionNode):
                self._process_scalar(definition)
            elif isinstance(definition, (EnumTypeDefinitionNode, EnumTypeExtensionNode)):
                self._process_enum(definition)
            elif isinstance(definition, (ObjectTypeDefinitionNode, ObjectTypeExtensionNode)):
                self._process_object_type(definition)
            elif isinstance(
                definition, (InputObjectTypeDefinitionNode, InputObjectTypeExtensionNode)
            ):
                self._process_input_type(definition)
            elif isinstance(definition, (InterfaceTypeDefinitionNode, InterfaceTypeExtensionNode)):
                raise UnsupportedTypeConstructError("interface", definition.name.value)
            elif isinstance(definition, (UnionTypeDefinitionNode, UnionTypeExtensionNode)):
                raise UnsupportedTypeConstructError("union", definition.name.value)
            elif isinstance(definition, DirectiveDefinitionNode):
                raise UnsupportedTypeConstructError("directive", definition.name.value)
            elif isinstance(definition, ExecutableDefinitionNode):
                logger.warning("Skipping executable definition %s in schema", definition.kind)
            else:
                logger.debug("Skipping %s", definition.kind)

    def _process_schema_definition(self, node: SchemaDefinitionNode):
        if self._has_schema_definition:
            logger.warning("Multiple schema definitions found, using the first one")
            return
        self._has_schema_definition = True
        self._process_operation_types(node)

    def _process_operation_types(self, node: SchemaDefinitionNode | SchemaExtensionNode):
        for operation_type in node.operation_types or ():
            if operation_type.operation == OperationType.SUBSCRIPTION:
                logger.debug("Ignoring subscription root %s", operation_type.type.name.value)
                continue
            self._operation_types.setdefault(
                operation_type.operation, operation_type.type.name.value
            )

    def _process_scalar(self, node: ScalarTypeDefinitionNode):
        name = node.name.value
        if name not in self._scalars:
            self._scalars.append(name)

    def _process_enum(self, node: EnumTypeDefinitionNode | EnumTypeExtensionNode):
        pending = self._pending(self._enums, node)
        pending.add_members(node.values)

    def _process_object_type(self, node: ObjectTypeDefinitionNode | ObjectTypeExtensionNode):
        name = node.name.value
        if node.interfaces:
            raise UnsupportedTypeConstructError(
                "interface implementation", f"{name} implements {node.interfaces[0].name.value}"
            )
        self._pending(self._objects, node).add_members(node.fields)

    def _process_input_type(
        self, node: InputObjectTypeDefinitionNode | InputObjectTypeExtensionNode
    ):
        self._pending(self._inputs, node).add_members(node.fields)

    @staticmethod
    def _pending(registry: dict[str, _PendingDefinition], node) -> _PendingDefinition:
        """Get the named definition, creating it if needed.

        Plain definitions and ``extend`` blocks both land here, in whichever
        order they appear; only a definition carries a description.
        """
        name = node.name.value
        pending = registry.get(name)
        if pending is None:
            pending = registry[name] = _PendingDefinition(name=name)
        if getattr(node, "description", None):
            pending.description = node.description.value
        return pending
