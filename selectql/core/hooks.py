"""Generation hooks.

A pre-generation hook edits the ``ClientModel`` before it is rendered; a
post-generation hook rewrites the rendered module text. ``ClientCodeGenerator``
runs pre hooks on a deep copy, so the caller's model is never modified, and
checks the syntax of the text after post hooks have run.

Example:
    class DropDeprecated:
        def pre_generate(self, model):
            for cls in model.types:
                cls.fields = [f for f in cls.fields if "deprecated" not in (f.description or "")]
            return model

    hooks = HookRunner(post_hooks=[AddHeaderHook("# Copyright Example")])
    hooks.add_pre_hook(DropDeprecated())
"""

import logging
from collections.abc import Iterable
from typing import Protocol, runtime_checkable

from .ir import ClassDefinition, ClientModel

logger = logging.getLogger(__name__)


@runtime_checkable
class PreGenerateHook(Protocol):
    """Receives the generation model and returns the model to render."""

    def pre_generate(self, model: ClientModel) -> ClientModel:
        ...


@runtime_checkable
class PostGenerateHook(Protocol):
    """Receives the rendered module text and returns the text to emit.

    ``filename`` is the output file name, e.g. ``"client.py"``.
    """

    def post_generate(self, filename: str, content: str) -> str:
        ...


class AddHeaderHook:
    """Prepend a header, separated from the module by one blank line.

    Example:
        AddHeaderHook("# Copyright Example")
    """

    def __init__(self, header: str):
        self.header = header.rstrip("\n")

    def post_generate(self, _filename: str, content: str) -> str:
        return f"{self.header}\n\n{content}"


class FilterTypesHook:
    """Drop object classes, input classes and enums by name prefix or suffix.

    The query and mutation roots are always kept. Fields of the remaining
    classes that mention a dropped type (as their type or through an
    argument) are dropped as well, so the module never refers to a class
    it does not define.

    Example:
        # Leave out everything named _Something
        FilterTypesHook(exclude_prefix="_")
    """

    def __init__(
        self,
        exclude_prefix: str | None = None,
        exclude_suffix: str | None = None,
        include_prefix: str | None = None,
        include_suffix: str | None = None,
    ):
        self.exclude_prefix = exclude_prefix
        self.exclude_suffix = exclude_suffix
        self.include_prefix = include_prefix
        self.include_suffix = include_suffix

    def keeps(self, name: str) -> bool:
        """Check a type name against the configured filters."""
        if self.exclude_prefix and name.startswith(self.exclude_prefix):
            return False
        if self.exclude_suffix and name.endswith(self.exclude_suffix):
            return False
        if self.include_prefix and not name.startswith(self.include_prefix):
            return False
        if self.include_suffix and not name.endswith(self.include_suffix):
            return False
        return True

    def pre_generate(self, model: ClientModel) -> ClientModel:
        roots = {model.query_type, model.mutation_type}
        dropped = set()

        def partition(definitions, keep_roots=False):
            kept = []
            for definition in definitions:
                if (keep_roots and definition.name in roots) or self.keeps(definition.name):
                    kept.append(definition)
                else:
                    dropped.add(definition.name)
            return kept

        model.types = partition(model.types, keep_roots=True)
        model.inputs = partition(model.inputs)
        model.enums = partition(model.enums)
        if dropped:
            logger.debug("Filtered out types: %s", ", ".join(sorted(dropped)))
            for definition in model.types + model.inputs:
                self._drop_dangling_fields(definition, dropped)
        return model

    @staticmethod
    def _drop_dangling_fields(definition: ClassDefinition, dropped: set[str]):
        kept = []
        for field in definition.fields:
            missing = field.referenced_types() & dropped
            if missing:
                logger.debug(
                    "Dropping %s.%s, which refers to %s",
                    definition.name, field.wire_name, ", ".join(sorted(missing)),
                )
            else:
                kept.append(field)
        definition.fields = kept


class HookRunner:
    """Runs pre and post hooks in registration order."""

    def __init__(
        self,
        pre_hooks: Iterable[PreGenerateHook] = (),
        post_hooks: Iterable[PostGenerateHook] = (),
    ):
        self.pre_hooks: list[PreGenerateHook] = list(pre_hooks)
        self.post_hooks: list[PostGenerateHook] = list(post_hooks)

    def add_pre_hook(self, hook: PreGenerateHook):
        self.pre_hooks.append(hook)

    def add_post_hook(self, hook: PostGenerateHook):
        self.post_hooks.append(hook)

    def run_pre_hooks(self, model: ClientModel) -> ClientModel:
        for hook in self.pre_hooks:
            model = hook.pre_generate(model)
        return model

    def run_post_hooks(self, filename: str, content: str) -> str:
        for hook in self.post_hooks:
            content = hook.post_generate(filename, content)
        return content
