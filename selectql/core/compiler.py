"""Schema-to-client compilation pipeline.

Runs parse -> resolve -> build model -> render for one SDL document.
"""

import logging

from .errors import SchemaNotFoundError
from .generator import ClientCodeGenerator
from .hooks import HookRunner
from .model_builder import ClientModelBuilder
from .parser import SchemaParser
from .scalars import ScalarRegistry
from .type_resolver import TypeResolver

logger = logging.getLogger(__name__)

SCHEMA_NOT_FOUND_PLACEHOLDER = "# Schema definition not found\n"


def generate_client(
    sdl: str,
    namespace: str,
    client_name: str | None = None,
    *,
    scalars: ScalarRegistry | None = None,
    template_dir: str | None = None,
    hooks: HookRunner | None = None,
    filename: str = "client.py",
) -> str:
    """Compile SDL text into the source of a typed client module.

    A document without a ``schema { ... }`` block yields a placeholder comment
    instead of a module. Every other error propagates to the caller.

    Args:
        sdl: GraphQL SDL text
        namespace: Namespace named in the generated module
        client_name: Name of the root client class (default: GraphQLClient)
        scalars: Custom scalar mappings
        template_dir: Directory with template overrides
        hooks: Pre/post generation hooks
        filename: File name passed to post-generation hooks

    Returns:
        The generated Python source text
    """
    try:
        document = SchemaParser(sdl).parse()
    except SchemaNotFoundError as e:
        logger.warning("%s, emitting placeholder", e.message)
        return SCHEMA_NOT_FOUND_PLACEHOLDER

    scalars = scalars or ScalarRegistry()
    resolver = TypeResolver.for_document(document)
    model = ClientModelBuilder(document, resolver, scalars).build(namespace, client_name)
    generator = ClientCodeGenerator(model, template_dir=template_dir, hooks=hooks, scalars=scalars)
    return generator.render(filename)
