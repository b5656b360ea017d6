"""Code generator for GraphQL client modules.

Renders a Jinja2 template to produce Python code from the generation model.
Class bodies (fields, backing fields and selector methods) are synthesized
here; the template lays out the module around them.

Supports custom templates via the template_dir parameter:
    generator = ClientCodeGenerator(model, template_dir="./my_templates")

Template lookup order:
1. User's template directory (if provided)
2. Package default templates
"""

import ast
import copy
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional

from jinja2 import ChoiceLoader, Environment, FileSystemLoader, PackageLoader, select_autoescape

from .errors import GeneratedCodeError, UnsupportedTypeConstructError
from .hooks import HookRunner
from .ir import (
    ClassDefinition,
    ClientModel,
    EnumType,
    FieldDefinition,
    ListType,
    ObjectType,
    ScalarType,
    TypeDescriptor,
    innermost_type,
    requires_selector,
)
from .naming import (
    TypeAnnotator,
    safe_docstring,
    string_literal,
    to_pascal_case,
    to_snake_case,
    unique_name,
)
from .scalars import ScalarRegistry

logger = logging.getLogger(__name__)

# Decorator that marks accessor methods for call-site analyzers
SELECTOR_DECORATOR = "@runtime.graphql_selector"
# Lines longer than this get one parameter per line
MAX_SIGNATURE_LENGTH = 99

INDENT = "    "


@dataclass
class RenderedClass:
    """A class ready to be laid out by the module template."""
    name: str
    base: str
    docstring: str
    body: str


class ClientCodeGenerator:
    """Generates a Python client module from a ClientModel.

    Supports custom templates via the template_dir parameter.
    Templates in template_dir take precedence over built-in templates.

    Available templates to override:
        - client.py.j2: module layout (root client, classes, enums, registration)

    Example:
        generator = ClientCodeGenerator(model, template_dir="./my_templates")
        source = generator.render()
    """

    TEMPLATE_NAME = "client.py.j2"

    def __init__(
        self,
        model: ClientModel,
        template_dir: Optional[str] = None,
        hooks: Optional[HookRunner] = None,
        scalars: Optional[ScalarRegistry] = None,
    ):
        """Initialize the code generator.

        Args:
            model: Generation model to render; it is not modified
            template_dir: Optional directory with template overrides
            hooks: Optional pre/post generation hooks
            scalars: Scalar mappings used for annotations
        """
        self.model = model
        self.hooks = hooks or HookRunner()
        self.annotator = TypeAnnotator(scalars)

        # Build template loader - custom templates take precedence
        loaders = []
        if template_dir:
            template_path = Path(template_dir)
            if template_path.is_dir():
                loaders.append(FileSystemLoader(str(template_path)))
            else:
                logger.warning("Template directory %s not found, using defaults", template_dir)
        loaders.append(PackageLoader("selectql", "templates"))

        self.env = Environment(
            loader=ChoiceLoader(loaders),
            autoescape=select_autoescape(),
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
        )
        # Register custom filters
        self.env.filters["snake_case"] = to_snake_case
        self.env.filters["pascal_case"] = to_pascal_case
        self.env.filters["string_literal"] = string_literal
        self.env.filters["safe_docstring"] = safe_docstring

    def render(self, filename: str = "client.py") -> str:
        """Render the complete client module.

        Raises:
            GeneratedCodeError: the rendered text is not valid Python
        """
        model = self.model
        if self.hooks.pre_hooks:
            model = self.hooks.run_pre_hooks(copy.deepcopy(model))

        template = self.env.get_template(self.TEMPLATE_NAME)
        content = template.render(self._build_context(model))
        content = self.hooks.run_post_hooks(filename, content)

        # Validate Python syntax
        try:
            ast.parse(content)
        except SyntaxError as e:
            raise GeneratedCodeError(
                f"Generated invalid Python for {filename}: {e}\n"
                f"Template: {self.TEMPLATE_NAME}"
            ) from e
        return content

    def _build_context(self, model: ClientModel) -> Dict[str, Any]:
        classes = model.types + model.inputs
        rebuild_targets = ", ".join(c.name for c in classes)
        if len(classes) == 1:
            rebuild_targets += ","
        return {
            "namespace": model.namespace,
            "client_name": model.client_name,
            "query_root": self._root_reference(model.query_type),
            "mutation_root": self._root_reference(model.mutation_type),
            "scalar_imports": model.scalar_imports,
            "types": [self._render_class(t, model) for t in model.types],
            "inputs": [self._render_class(t, model) for t in model.inputs],
            "enums": model.enums,
            "rebuild_targets": rebuild_targets,
        }

    @staticmethod
    def _root_reference(type_name: Optional[str]) -> str:
        if type_name is None:
            return "runtime.Unit"
        return string_literal(type_name)

    # -------------------------------------------------------------------------
    # Classes
    # -------------------------------------------------------------------------

    def _render_class(self, definition: ClassDefinition, model: ClientModel) -> RenderedClass:
        if definition.is_input:
            base = "runtime.GraphQLModel"
        elif definition.name == model.query_type:
            base = "runtime.QueryRoot"
        elif definition.name == model.mutation_type:
            base = "runtime.MutationRoot"
        else:
            base = "runtime.GraphQLModel"

        declarations: List[str] = []
        methods: List[str] = []
        for field in definition.fields:
            if definition.is_input:
                declarations.append(self._input_field(field))
            elif field.is_accessor:
                declarations.append(self._backing_field(field))
                methods.append(self._accessor_method(field))
            else:
                declarations.append(self._plain_field(field))

        body = "\n".join(declarations)
        if methods:
            body = "\n\n".join([body] + methods) if body else "\n\n".join(methods)
        if not body:
            body = f"{INDENT}pass"

        return RenderedClass(
            name=definition.name,
            base=base,
            docstring=safe_docstring(definition.description),
            body=body,
        )

    def _plain_field(self, field: FieldDefinition) -> str:
        """Object fields default to None since a response holds only selected fields."""
        annotation = self.annotator.annotation(field.type)
        options = ["default=None", f"alias={string_literal(field.wire_name)}"]
        if field.description:
            options.append(f"description={string_literal(field.description)}")
        return f"{INDENT}{field.name}: {annotation} = pydantic.Field({', '.join(options)})"

    def _backing_field(self, field: FieldDefinition) -> str:
        annotation = self.annotator.annotation(field.type)
        return (
            f"{INDENT}{field.backing_name}: {annotation} = "
            f"pydantic.Field(default=None, alias={string_literal(field.wire_name)}, repr=False)"
        )

    def _input_field(self, field: FieldDefinition) -> str:
        annotation = self.annotator.annotation(field.type)
        options = []
        if field.default_value is not None:
            if field.default_value != "None" and (
                isinstance(field.type, ListType) or isinstance(innermost_type(field.type), EnumType)
            ):
                # Enums are declared after inputs, and list defaults must not be shared
                options.append(f"default_factory=lambda: {field.default_value}")
            else:
                options.append(f"default={field.default_value}")
        elif field.type.nullable:
            options.append("default=None")
        options.append(f"alias={string_literal(field.wire_name)}")
        if field.description:
            options.append(f"description={string_literal(field.description)}")
        return f"{INDENT}{field.name}: {annotation} = pydantic.Field({', '.join(options)})"

    # -------------------------------------------------------------------------
    # Accessor methods
    # -------------------------------------------------------------------------

    def _accessor_method(self, field: FieldDefinition) -> str:
        """Generate a selector method (or an argument accessor for scalar fields)."""
        params = ["self"] + [f"{arg.name}: {arg.type_name}" for arg in field.arguments]
        argument_names = {arg.name for arg in field.arguments}

        backing = f"self.{field.backing_name}"
        if requires_selector(field.type):
            selector = "selector" if "selector" not in argument_names else unique_name(
                "field_selector", argument_names
            )
            element = innermost_type(field.type).name
            params.append(f"{selector}: typing.Callable[[{element}], T]")
            return_type = self.annotator.selector_return(field.type)
            body = self._projection(backing, field.type, selector)
        else:
            return_type = self.annotator.annotation(field.type)
            body = backing

        lines = [f"{INDENT}{SELECTOR_DECORATOR}"]
        lines.extend(self._signature(field.name, params, return_type))
        if field.description:
            lines.append(f'{INDENT * 2}"""{safe_docstring(field.description)}"""')
        lines.append(f"{INDENT * 2}return {body}")
        return "\n".join(lines)

    @staticmethod
    def _signature(name: str, params: List[str], return_type: str) -> List[str]:
        single_line = f"{INDENT}def {name}({', '.join(params)}) -> {return_type}:"
        if len(single_line) <= MAX_SIGNATURE_LENGTH:
            return [single_line]
        lines = [f"{INDENT}def {name}("]
        for param in params:
            lines.append(f"{INDENT * 2}{param},")
        lines.append(f"{INDENT}) -> {return_type}:")
        return lines

    def _projection(self, expr: str, descriptor: TypeDescriptor, selector: str, depth: int = 0) -> str:
        """Expression applying the selector to ``expr`` according to its type.

        Nullable levels short-circuit to None; lists are projected element-wise.
        """
        if isinstance(descriptor, (ScalarType, EnumType)):
            return expr
        if isinstance(descriptor, ObjectType):
            if descriptor.nullable:
                return f"{selector}({expr}) if {expr} is not None else None"
            return f"{selector}({expr})"
        if isinstance(descriptor, ListType):
            if not requires_selector(descriptor):
                return expr
            var = "item" if depth == 0 else f"item{depth}"
            inner = self._projection(var, descriptor.element, selector, depth + 1)
            comprehension = f"[{inner} for {var} in {expr}]"
            if descriptor.nullable:
                return f"{comprehension} if {expr} is not None else None"
            return comprehension
        raise UnsupportedTypeConstructError("type descriptor", type(descriptor).__name__)
