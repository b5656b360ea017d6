"""Tests for generation hooks."""

import pytest

from selectql.core.hooks import (
    AddHeaderHook,
    FilterTypesHook,
    HookRunner,
    PostGenerateHook,
    PreGenerateHook,
)
from selectql.core.ir import (
    ArgumentDefinition,
    ClassDefinition,
    ClientModel,
    EnumDefinition,
    EnumType,
    FieldDefinition,
    ListType,
    ObjectType,
    ScalarType,
)


@pytest.fixture
def sample_model():
    """A model with underscore-prefixed types mixed into every section."""
    return ClientModel(
        namespace="Demo",
        client_name="GraphQLClient",
        query_type="Query",
        mutation_type="_Mutation",
        enums=[
            EnumDefinition(name="Status"),
            EnumDefinition(name="_Internal"),
        ],
        types=[
            ClassDefinition(name="Query"),
            ClassDefinition(name="_Mutation"),
            ClassDefinition(name="User"),
            ClassDefinition(name="_Meta"),
            ClassDefinition(name="Product"),
        ],
        inputs=[
            ClassDefinition(name="CreateUserInput", is_input=True),
            ClassDefinition(name="_DebugInput", is_input=True),
        ],
    )


@pytest.fixture
def linked_model():
    """A model whose kept classes point at types a filter removes."""
    query = ClassDefinition(
        name="Query",
        fields=[
            FieldDefinition("ok", "ok", ScalarType("Int")),
            FieldDefinition("meta", "meta", ObjectType("_Meta")),
            FieldDefinition("metas", "metas", ListType(ListType(ObjectType("_Meta")))),
            FieldDefinition("state", "state", EnumType("_Internal")),
            FieldDefinition(
                "users",
                "users",
                ListType(ObjectType("User")),
                arguments=[
                    ArgumentDefinition("debug", "debug", "_DebugInput | None", ObjectType("_DebugInput")),
                ],
            ),
            FieldDefinition("user", "user", ObjectType("User")),
        ],
    )
    create_input = ClassDefinition(
        name="CreateUserInput",
        is_input=True,
        fields=[
            FieldDefinition("name", "name", ScalarType("String", nullable=False)),
            FieldDefinition("debug", "debug", ObjectType("_DebugInput")),
        ],
    )
    return ClientModel(
        namespace="Demo",
        client_name="GraphQLClient",
        query_type="Query",
        types=[query, ClassDefinition(name="User"), ClassDefinition(name="_Meta")],
        inputs=[create_input, ClassDefinition(name="_DebugInput", is_input=True)],
        enums=[EnumDefinition(name="_Internal")],
    )


def field_names(definition):
    return [f.name for f in definition.fields]


# =============================================================================
# Tests: AddHeaderHook
# =============================================================================


class TestAddHeaderHook:
    def test_adds_header(self):
        hook = AddHeaderHook("# Auto-generated")
        result = hook.post_generate("client.py", "class User:\n    pass")
        assert result == "# Auto-generated\n\nclass User:\n    pass"

    def test_trailing_newlines_collapse(self):
        hook = AddHeaderHook("# Header\n\n")
        assert hook.post_generate("client.py", "code") == "# Header\n\ncode"


# =============================================================================
# Tests: FilterTypesHook
# =============================================================================


class TestFilterTypesHook:
    def test_exclude_prefix(self, sample_model):
        result = FilterTypesHook(exclude_prefix="_").pre_generate(sample_model)
        assert [t.name for t in result.types] == ["Query", "_Mutation", "User", "Product"]
        assert [i.name for i in result.inputs] == ["CreateUserInput"]
        assert [e.name for e in result.enums] == ["Status"]

    def test_exclude_suffix(self, sample_model):
        result = FilterTypesHook(exclude_suffix="Input").pre_generate(sample_model)
        assert result.inputs == []
        assert len(result.types) == 5

    def test_include_prefix_keeps_roots(self, sample_model):
        result = FilterTypesHook(include_prefix="Create").pre_generate(sample_model)
        assert [i.name for i in result.inputs] == ["CreateUserInput"]
        assert [t.name for t in result.types] == ["Query", "_Mutation"]
        assert result.enums == []

    def test_include_suffix(self, sample_model):
        result = FilterTypesHook(include_suffix="Input").pre_generate(sample_model)
        assert [i.name for i in result.inputs] == ["CreateUserInput", "_DebugInput"]

    def test_no_filters_keeps_everything(self, sample_model):
        result = FilterTypesHook().pre_generate(sample_model)
        assert len(result.types) == 5
        assert len(result.inputs) == 2
        assert len(result.enums) == 2

    def test_keeps(self):
        hook = FilterTypesHook(exclude_prefix="Internal", include_suffix="Type")
        assert hook.keeps("UserType")
        assert not hook.keeps("InternalType")
        assert not hook.keeps("User")


class TestFilterTypesHookReferences:
    """Fields that mention a removed type go with it."""

    def test_object_enum_and_list_fields_dropped(self, linked_model):
        result = FilterTypesHook(exclude_prefix="_").pre_generate(linked_model)
        query = result.types[0]
        assert field_names(query) == ["ok", "user"]

    def test_argument_reference_drops_field(self, linked_model):
        result = FilterTypesHook(exclude_prefix="_").pre_generate(linked_model)
        assert "users" not in field_names(result.types[0])

    def test_input_fields_dropped(self, linked_model):
        result = FilterTypesHook(exclude_prefix="_").pre_generate(linked_model)
        assert [i.name for i in result.inputs] == ["CreateUserInput"]
        assert field_names(result.inputs[0]) == ["name"]

    def test_untouched_when_nothing_filtered(self, linked_model):
        result = FilterTypesHook(exclude_prefix="Missing").pre_generate(linked_model)
        assert len(result.types[0].fields) == 6


# =============================================================================
# Tests: HookRunner
# =============================================================================


class TestHookRunner:
    def test_hooks_from_constructor(self, sample_model):
        runner = HookRunner(
            pre_hooks=[FilterTypesHook(exclude_prefix="_")],
            post_hooks=[AddHeaderHook("# Header")],
        )
        assert "_Meta" not in [t.name for t in runner.run_pre_hooks(sample_model).types]
        assert runner.run_post_hooks("client.py", "code") == "# Header\n\ncode"

    def test_pre_hooks_run_in_order(self, sample_model):
        runner = HookRunner()
        runner.add_pre_hook(FilterTypesHook(exclude_prefix="_"))

        class RenameClientHook:
            def pre_generate(self, model):
                model.client_name = f"{model.namespace}Client{len(model.types)}"
                return model

        runner.add_pre_hook(RenameClientHook())

        assert runner.run_pre_hooks(sample_model).client_name == "DemoClient4"

    def test_post_hooks_run_in_order(self):
        runner = HookRunner()
        runner.add_post_hook(AddHeaderHook("# Line 1"))
        runner.add_post_hook(AddHeaderHook("# Line 0"))

        result = runner.run_post_hooks("client.py", "code")
        assert result == "# Line 0\n\n# Line 1\n\ncode"

    def test_post_hook_receives_filename(self):
        seen = []

        class RecordingHook:
            def post_generate(self, filename, content):
                seen.append(filename)
                return content

        HookRunner(post_hooks=[RecordingHook()]).run_post_hooks("api.py", "code")
        assert seen == ["api.py"]


# =============================================================================
# Tests: Protocols
# =============================================================================


class TestProtocolCompliance:
    def test_builtin_hooks(self):
        assert isinstance(AddHeaderHook("header"), PostGenerateHook)
        assert isinstance(FilterTypesHook(), PreGenerateHook)

    def test_custom_hooks(self):
        class CustomHook:
            def pre_generate(self, model):
                return model

            def post_generate(self, filename, content):
                return content

        assert isinstance(CustomHook(), PreGenerateHook)
        assert isinstance(CustomHook(), PostGenerateHook)
