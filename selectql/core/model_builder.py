"""Builds the generation model from a parsed schema document."""

import logging

from graphql import (
    BooleanValueNode,
    EnumValueNode,
    FieldDefinitionNode,
    FloatValueNode,
    InputValueDefinitionNode,
    IntValueNode,
    ListValueNode,
    NullValueNode,
    StringValueNode,
    ValueNode,
)

from ..runtime import GraphQLModel
from .errors import NameConflictError, UnsupportedDefaultValueError
from .ir import (
    BACKING_FIELD_PREFIX,
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
    SchemaEnumDefinition,
    SchemaTypeDefinition,
    TypeDescriptor,
    requires_selector,
)
from .naming import (
    BUILTIN_ANNOTATION_NAMES,
    GENERATED_MODULE_NAMES,
    TypeAnnotator,
    annotation_root,
    string_literal,
    to_enum_member_name,
    to_member_name,
    unique_name,
)
from .scalars import ScalarRegistry
from .type_resolver import TypeResolver

logger = logging.getLogger(__name__)

DEFAULT_CLIENT_NAME = "GraphQLClient"

# Public attributes of the generated models' base class
MODEL_ATTRIBUTE_NAMES = frozenset(name for name in dir(GraphQLModel) if not name.startswith("_"))


class ClientModelBuilder:
    """Turns a SchemaDocument into a ClientModel.

    Field and argument names become snake_case Python members, enum values
    become UPPER_SNAKE members, and input field defaults are converted into
    Python expressions. Source order is kept at every level.

    Member names are unique within their class. A name that is taken (by an
    earlier field, by the ``raw_`` field backing an accessor, by a type the
    annotations refer to, or by a pydantic model attribute) gets a numeric
    or ``_`` suffix, so renaming never merges two GraphQL fields.
    """

    def __init__(
        self,
        document: SchemaDocument,
        resolver: TypeResolver | None = None,
        scalars: ScalarRegistry | None = None,
    ):
        self.document = document
        self.resolver = resolver or TypeResolver.for_document(document)
        self.scalars = scalars or ScalarRegistry()
        self.annotator = TypeAnnotator(self.scalars)
        self._reserved_members: frozenset[str] = frozenset()
        self._enums: dict[str, EnumDefinition] = {}

    def build(self, namespace: str, client_name: str | None = None) -> ClientModel:
        """Build the complete generation model.

        Raises:
            NameConflictError: a type is named like something the generated
                module itself defines or imports
            UnsupportedDefaultValueError: an input default cannot be inlined
        """
        client_name = client_name or DEFAULT_CLIENT_NAME
        module_names = self._module_names()
        type_names = self._check_type_names(client_name, module_names)
        self._reserved_members = module_names | type_names | MODEL_ATTRIBUTE_NAMES

        object_names = {t.name for t in self.document.objects}
        for root in (self.document.query_type, self.document.mutation_type):
            if root is not None and root not in object_names:
                logger.warning("Root type %s is not defined in the schema", root)

        self._enums = {e.name: self._build_enum(e) for e in self.document.enums}
        model = ClientModel(
            namespace=namespace,
            client_name=client_name,
            query_type=self.document.query_type,
            mutation_type=self.document.mutation_type,
            types=[self._build_object(t) for t in self.document.objects],
            inputs=[self._build_input(t) for t in self.document.inputs],
            enums=list(self._enums.values()),
            scalar_imports=self.scalars.imports_for(self.document.scalars),
        )
        logger.debug(
            "Built model with %d types, %d inputs, %d enums",
            len(model.types), len(model.inputs), len(model.enums),
        )
        return model

    # -------------------------------------------------------------------------
    # Names
    # -------------------------------------------------------------------------

    def _module_names(self) -> frozenset[str]:
        """Names the generated module binds besides the schema's own types."""
        scalar_roots = {
            annotation_root(self.scalars.python_type(name)) for name in self.document.scalars
        }
        return GENERATED_MODULE_NAMES | BUILTIN_ANNOTATION_NAMES | scalar_roots

    def _check_type_names(self, client_name: str, module_names: frozenset[str]) -> frozenset[str]:
        if client_name in module_names:
            raise NameConflictError(client_name, "a name used by the generated module")
        names = [t.name for t in self.document.objects + self.document.inputs]
        names += [e.name for e in self.document.enums]
        for name in names:
            if name in module_names:
                raise NameConflictError(name, "a name used by the generated module")
            if name == client_name:
                raise NameConflictError(name, "the client class name")
        return frozenset(names)

    def _member_name(self, wire_name: str, taken: set[str], with_backing: bool = False) -> str:
        """Allocate a unique member name, plus its backing name for accessors."""
        preferred = to_member_name(wire_name)
        name = f"{preferred}_" if preferred in self._reserved_members else preferred

        base = name.rstrip("_")
        counter = 1
        while name in taken or (with_backing and f"{BACKING_FIELD_PREFIX}{name}" in taken):
            counter += 1
            name = f"{base}_{counter}"

        taken.add(name)
        if with_backing:
            taken.add(f"{BACKING_FIELD_PREFIX}{name}")
        if name != preferred:
            logger.debug("Renamed member %s to %s", wire_name, name)
        return name

    # -------------------------------------------------------------------------
    # Classes
    # -------------------------------------------------------------------------

    def _build_object(self, definition: SchemaTypeDefinition) -> ClassDefinition:
        taken: set[str] = set()
        fields = [self._build_object_field(node, taken) for node in definition.fields]
        return ClassDefinition(
            name=definition.name,
            fields=fields,
            description=definition.description,
        )

    def _build_object_field(self, node: FieldDefinitionNode, taken: set[str]) -> FieldDefinition:
        descriptor = self.resolver.resolve(node.type)
        arguments = self._build_arguments(node)
        with_backing = requires_selector(descriptor) or bool(arguments)
        return FieldDefinition(
            name=self._member_name(node.name.value, taken, with_backing),
            wire_name=node.name.value,
            type=descriptor,
            arguments=arguments,
            description=node.description.value if node.description else None,
        )

    def _build_arguments(self, node: FieldDefinitionNode) -> list[ArgumentDefinition]:
        parameter_names = {"self"}
        arguments = []
        for arg in node.arguments or ():
            name = to_member_name(arg.name.value)
            if name == "self":
                name = "self_"
            name = unique_name(name, parameter_names)
            parameter_names.add(name)
            descriptor = self.resolver.resolve(arg.type)
            arguments.append(
                ArgumentDefinition(
                    name=name,
                    wire_name=arg.name.value,
                    type_name=self.annotator.annotation(descriptor),
                    type=descriptor,
                )
            )
        return arguments

    def _build_input(self, definition: SchemaTypeDefinition) -> ClassDefinition:
        taken: set[str] = set()
        fields = []
        for node in definition.fields:
            descriptor = self.resolver.resolve(node.type)
            default_value = None
            if node.default_value is not None:
                default_value = self._default_literal(
                    node.default_value, descriptor, definition.name, node
                )
            fields.append(
                FieldDefinition(
                    name=self._member_name(node.name.value, taken),
                    wire_name=node.name.value,
                    type=descriptor,
                    default_value=default_value,
                    description=node.description.value if node.description else None,
                )
            )
        return ClassDefinition(
            name=definition.name,
            fields=fields,
            is_input=True,
            description=definition.description,
        )

    def _build_enum(self, definition: SchemaEnumDefinition) -> EnumDefinition:
        taken: set[str] = set()
        values = []
        for value in definition.values:
            member_name = unique_name(to_enum_member_name(value.name.value), taken)
            taken.add(member_name)
            values.append(
                EnumValueDefinition(
                    wire_name=value.name.value,
                    member_name=member_name,
                    description=value.description.value if value.description else None,
                )
            )
        return EnumDefinition(
            name=definition.name,
            values=values,
            description=definition.description,
        )

    def _default_literal(
        self,
        value: ValueNode,
        descriptor: TypeDescriptor,
        type_name: str,
        node: InputValueDefinitionNode,
    ) -> str:
        """Convert an SDL default literal into a Python expression.

        Raises:
            UnsupportedDefaultValueError: the literal does not fit the field type
        """
        field_name = node.name.value

        def fail(reason: str) -> UnsupportedDefaultValueError:
            return UnsupportedDefaultValueError(type_name, field_name, reason)

        if isinstance(value, NullValueNode):
            if not descriptor.nullable:
                raise fail("null default on a non-null field")
            return "None"

        if isinstance(descriptor, ListType):
            if isinstance(value, ListValueNode):
                items = [
                    self._default_literal(item, descriptor.element, type_name, node)
                    for item in value.values
                ]
                return f"[{', '.join(items)}]"
            # A single literal is coerced to a one-element list
            return f"[{self._default_literal(value, descriptor.element, type_name, node)}]"

        if isinstance(value, ListValueNode):
            raise fail("list literal on a non-list field")

        if isinstance(descriptor, EnumType):
            if not isinstance(value, EnumValueNode):
                raise fail(f"expected a {descriptor.name} value, got {value.kind}")
            enum = self._enums.get(descriptor.name)
            member_name = enum.wire_to_member.get(value.value) if enum is not None else None
            if member_name is None:
                raise fail(f"'{value.value}' is not a value of {descriptor.name}")
            return f"{descriptor.name}.{member_name}"

        if isinstance(descriptor, ObjectType):
            raise fail(f"{value.kind} default for input object {descriptor.name}")

        if isinstance(descriptor, ScalarType):
            if isinstance(value, (IntValueNode, FloatValueNode)):
                return value.value
            if isinstance(value, StringValueNode):
                return string_literal(value.value)
            if isinstance(value, BooleanValueNode):
                return "True" if value.value else "False"
            raise fail(f"{value.kind} literal for scalar {descriptor.name}")

        raise fail(f"unsupported type {type(descriptor).__name__}")
