"""Tests for the visitors that write Go declarations."""

import pytest

from idl_codegen.codegen.core.config import load_config
from idl_codegen.codegen.core.generator import GeneratorError
from idl_codegen.codegen.core.model import (
    Alias,
    Annotation,
    Enum,
    EnumValue,
    Field,
    List,
    Namespace,
    Operation,
    Optional,
    Primitive,
    Role,
    Type,
    Union,
)
from idl_codegen.codegen.core.visitor import Context, Writer
from idl_codegen.codegen.languages.go.aliases import AliasVisitor
from idl_codegen.codegen.languages.go.enums import EnumVisitor
from idl_codegen.codegen.languages.go.imports import ImportsVisitor
from idl_codegen.codegen.languages.go.interfaces import (
    HandlerVisitor,
    InterfacesVisitor,
    ProviderVisitor,
    operation_signature,
)
from idl_codegen.codegen.languages.go.structs import (
    StructVisitor,
    default_literal,
    struct_tag,
)
from idl_codegen.codegen.languages.go.types import GoTypeConfig, GoTypeMapper
from idl_codegen.codegen.languages.go.unions import UnionVisitor, member_name


def render_namespace(namespace, config):
    writer = Writer()
    namespace.accept(Context(config, namespace), InterfacesVisitor(writer))
    return writer.string()


def render_role(context, name, visitor_class, **kwargs):
    writer = Writer()
    role = context.namespace.roles[name]
    role.accept(context, visitor_class(writer, **kwargs))
    return writer.string()


def collect_imports(context):
    visitor = ImportsVisitor(Writer())
    context.namespace.accept(context, visitor)
    return visitor.imports


class TestAliasVisitor:
    def test_alias(self, context):
        writer = Writer()
        alias = context.namespace.aliases["UUID"]
        alias.accept(context, AliasVisitor(writer))
        assert writer.string() == "// Unique identifier.\ntype UUID string\n\n"

    def test_translated_alias_is_skipped(self, namespace):
        config = load_config("go", {"aliases": {"UUID": {"type": "uuid.UUID"}}})
        context = Context(config, namespace)
        writer = Writer()
        namespace.aliases["UUID"].accept(context, AliasVisitor(writer))
        assert writer.string() == ""


class TestHandlerVisitor:
    def test_service_interface(self, context):
        assert render_role(context, "Greeter", HandlerVisitor) == (
            "// Greets people.\n"
            "type Greeter interface {\n"
            "\t// Say hello to someone.\n"
            "\tSayHello(ctx context.Context, to *Person) (string, error)\n"
            "\tWave(ctx context.Context, type_ string) error\n"
            "}\n\n"
        )

    def test_no_comments(self, namespace):
        context = Context(load_config("go", {"add_comments": False}), namespace)
        output = render_role(context, "Greeter", HandlerVisitor)
        assert "//" not in output

    def test_renamed_operation(self, context):
        operation = context.namespace.roles["Greeter"].operations[1]
        operation.annotations.append(Annotation("rename", {"value": {"go": "WaveHand"}}))
        signature = operation_signature(context.clone(operation=operation), operation, "context.")
        assert signature == "WaveHand(ctx context.Context, type_ string) error"


class TestProviderVisitor:
    def test_provider_interface_keeps_nocode(self, context):
        assert render_role(context, "Repository", ProviderVisitor) == (
            "type Repository interface {\n"
            "\tLoad(ctx context.Context, id UUID) (*Person, error)\n"
            "\tList(ctx context.Context) ([]Person, error)\n"
            "\tPurge(ctx context.Context) error\n"
            "}\n\n"
        )

    def test_explicit_context_package(self, context):
        output = render_role(context, "Repository", ProviderVisitor, context_package="workflow.")
        assert "\tLoad(ctx workflow.Context, id UUID) (*Person, error)\n" in output

    def test_configured_context_package(self, namespace):
        config = load_config(
            "go", {"context_package": "activity.", "context_import": "go.temporal.io/sdk/activity"}
        )
        context = Context(config, namespace)
        output = render_role(context, "Repository", ProviderVisitor)
        assert "\tList(ctx activity.Context) ([]Person, error)\n" in output

    def test_empty_context_package(self, namespace):
        config = load_config("go", {"context_package": ""})
        context = Context(config, namespace)
        output = render_role(context, "Repository", ProviderVisitor)
        assert "\tPurge(ctx Context) error\n" in output


class TestImportsVisitor:
    def test_sample_imports(self, context):
        assert collect_imports(context) == {"context", "encoding/json", "fmt", "time"}

    def test_writes_import_block(self, context):
        writer = Writer()
        context.namespace.accept(context, ImportsVisitor(writer))
        assert writer.string() == (
            'import (\n\t"context"\n\t"encoding/json"\n\t"fmt"\n\t"time"\n)\n\n'
        )

    def test_workflow_context_import(self, namespace):
        config = load_config(
            "go",
            {"context_package": "workflow.", "context_import": "go.temporal.io/sdk/workflow"},
        )
        imports = collect_imports(Context(config, namespace))
        assert "go.temporal.io/sdk/workflow" in imports
        assert "context" in imports

    def test_no_context_without_roles(self, namespace):
        namespace.roles.clear()
        imports = collect_imports(Context(load_config("go"), namespace))
        assert "context" not in imports

    def test_empty_context_package_needs_no_import(self, namespace):
        del namespace.roles["Greeter"]
        config = load_config("go", {"context_package": ""})
        assert "context" not in collect_imports(Context(config, namespace))

    def test_translated_alias_import(self, namespace):
        config = load_config(
            "go", {"aliases": {"UUID": {"type": "uuid.UUID", "import": "github.com/google/uuid"}}}
        )
        assert "github.com/google/uuid" in collect_imports(Context(config, namespace))

    def test_handler_nocode_operation_is_ignored(self):
        namespace = Namespace("ns")
        namespace.add(
            Role(
                "Svc",
                [
                    Operation("ping"),
                    Operation(
                        "stamp",
                        type=Primitive("datetime"),
                        annotations=[Annotation("nocode")],
                    ),
                ],
                annotations=[Annotation("service")],
            )
        )
        assert collect_imports(Context(load_config("go"), namespace)) == {"context"}


class TestStructVisitor:
    def render(self, context, t, **kwargs):
        writer = Writer()
        t.accept(context, StructVisitor(writer, **kwargs))
        return writer.string()

    def test_person(self, context):
        output = self.render(context, context.namespace.types["Person"])
        assert output.startswith(
            "// A person to greet.\n"
            "type Person struct {\n"
            "\tns\n"
            '\tId UUID `json:"id"`\n'
            '\tName string `json:"name"`\n'
            '\tAge *uint8 `json:"age,omitempty"`\n'
            '\tTags []string `json:"tags"`\n'
            '\tBorn *time.Time `json:"born,omitempty"`\n'
            '\tMood Mood `json:"mood"`\n'
            "}\n\n"
            "func (x *Person) Type() string {\n"
            '\treturn "Person"\n'
            "}\n\n"
        )
        assert (
            "// DefaultPerson returns a Person populated with default values.\n"
            "func DefaultPerson() Person {\n"
            "\treturn Person{\n"
            '\t\tName: "World",\n'
            "\t\tMood: MoodHappy,\n"
            "\t}\n"
            "}\n"
        ) in output

    def test_without_type_info(self, context):
        output = self.render(context, context.namespace.types["Person"], write_type_info=False)
        assert "\tns\n" not in output
        assert "Type() string" not in output

    def test_field_comments(self, context):
        t = Type("Note", [Field("text", Primitive("string"), description="Body text.")])
        assert '\t// Body text.\n\tText string `json:"text"`\n' in self.render(context, t)

    def test_reference_field_is_pointer(self, context):
        person = context.namespace.types["Person"]
        t = Type("Friendship", [Field("friend", person, annotations=[Annotation("ref")])])
        assert '\tFriend *Person `json:"friend"`\n' in self.render(context, t)

    def test_renamed_field(self, context):
        field = Field("id", Primitive("string"), annotations=[Annotation("rename", {"value": {"go": "ID"}})])
        assert '\tID string `json:"id"`\n' in self.render(context, Type("Item", [field]))

    def test_unrepresentable_default_is_skipped(self, context):
        t = Type("Bag", [Field("items", List(Primitive("string")), default=["a"])])
        assert "DefaultBag" not in self.render(context, t)

    def test_no_json_tags(self, namespace):
        context = Context(load_config("go", {"generate_json_tags": False}), namespace)
        output = self.render(context, namespace.types["Person"])
        assert "\tId UUID\n" in output
        assert "`" not in output


class TestStructTag:
    def test_omitempty_only_for_optional(self, go_config):
        assert struct_tag(go_config, Field("n", Primitive("string"))) == '`json:"n"`'
        assert struct_tag(go_config, Field("n", Optional(Primitive("string")))) == '`json:"n,omitempty"`'

    def test_omitempty_disabled(self):
        config = load_config("go", {"json_tag_omitempty": False})
        assert struct_tag(config, Field("n", Optional(Primitive("string")))) == '`json:"n"`'

    def test_tag_case(self):
        config = load_config("go", {"json_tag_case": "pascal"})
        assert struct_tag(config, Field("user_id", Primitive("string"))) == '`json:"UserId"`'

    def test_extra_tags(self):
        config = load_config("go", {"extra_struct_tags": ["yaml", "msgpack"]})
        tag = struct_tag(config, Field("name", Optional(Primitive("string"))))
        assert tag == '`json:"name,omitempty" yaml:"name,omitempty" msgpack:"name,omitempty"`'

    def test_disabled(self):
        config = load_config("go", {"generate_json_tags": False})
        assert struct_tag(config, Field("n", Primitive("string"))) == ""


class TestDefaultLiteral:
    @pytest.mark.parametrize(
        "primitive, value, expected",
        [
            ("bool", True, "true"),
            ("bool", False, "false"),
            ("string", 'say "hi"', '"say \\"hi\\""'),
            ("i32", 42, "42"),
            ("f64", 1.5, "1.5"),
            ("i32", 1.5, None),
            ("i32", True, None),
            ("bool", "yes", None),
            ("string", 3, None),
            ("datetime", "2024-01-01", None),
        ],
    )
    def test_primitives(self, primitive, value, expected):
        assert default_literal(Primitive(primitive), value, GoTypeMapper()) == expected

    def test_enum(self):
        color = Enum("Color", [EnumValue("red", 0), EnumValue("dark_blue", 1)])
        assert default_literal(color, "red", GoTypeMapper()) == "ColorRed"
        assert default_literal(color, "dark_blue", GoTypeMapper()) == "ColorDark_blue"
        assert default_literal(color, "green", GoTypeMapper()) is None

    def test_alias_is_unwrapped(self):
        alias = Alias("Count", Primitive("u32"))
        assert default_literal(alias, 7, GoTypeMapper()) == "7"

    def test_translated_alias(self):
        mapper = GoTypeMapper(GoTypeConfig(aliases={"Count": {"type": "big.Int"}}))
        assert default_literal(Alias("Count", Primitive("u32")), 7, mapper) is None


class TestEnumVisitor:
    def test_mood(self, context):
        writer = Writer()
        context.namespace.enums["Mood"].accept(context, EnumVisitor(writer))
        output = writer.string()
        assert output.startswith("type Mood int32\n\nconst (\n")
        assert "\tMoodHappy Mood = 0\n\tMoodSad Mood = 5\n)\n" in output
        assert '\tMoodHappy: "Happy",\n\tMoodSad: "sad",\n' in output
        assert '\t"Happy": MoodHappy,\n\t"sad": MoodSad,\n' in output
        assert "func (e Mood) Type() string {" in output
        assert "func (e Mood) MarshalJSON() ([]byte, error) {" in output
        assert "func (e *Mood) UnmarshalJSON(b []byte) error {" in output
        assert 'return fmt.Errorf("unknown value %q for Mood", str)' in output

    def test_value_comments(self, context):
        enum = Enum("Level", [EnumValue("low", 1, description="Barely.")], description="How much.")
        writer = Writer()
        enum.accept(context, EnumVisitor(writer))
        output = writer.string()
        assert output.startswith("// How much.\ntype Level int32\n")
        assert "\t// Barely.\n\tLevelLow Level = 1\n" in output


class TestUnionVisitor:
    def test_animal(self, context):
        writer = Writer()
        context.namespace.unions["Animal"].accept(context, UnionVisitor(writer))
        assert writer.string().startswith(
            "type Animal struct {\n"
            "\tns\n"
            '\tPerson *Person `json:"Person,omitempty"`\n'
            '\tString *string `json:"string,omitempty"`\n'
            "}\n\n"
            "func (x *Animal) Type() string {\n"
        )

    def test_member_name(self):
        assert member_name(Type("Person")) == "Person"
        assert member_name(Primitive("i64")) == "i64"
        with pytest.raises(GeneratorError):
            member_name(List(Primitive("string")))

    def test_invalid_member(self, context):
        union = Union("Bad", [Optional(Primitive("string"))])
        with pytest.raises(GeneratorError):
            union.accept(context, UnionVisitor(Writer()))


class TestInterfacesVisitor:
    def test_header(self, context):
        output = render_namespace(context.namespace, context.config)
        assert output.startswith(
            "// Code generated by idl-codegen. DO NOT EDIT.\n"
            "\n"
            "// Greeting service.\n"
            "package module\n"
            "\n"
            "import (\n"
            '\t"context"\n'
            '\t"encoding/json"\n'
            '\t"fmt"\n'
            '\t"time"\n'
            ")\n"
            "\n"
            "type ns struct{}\n"
            "\n"
            "func (n *ns) Namespace() string {\n"
            '\treturn "greeting.v1"\n'
            "}\n"
            "\n"
            "func (n *ns) Version() string {\n"
            '\treturn "1.0.0"\n'
            "}\n"
        )

    def test_header_without_version(self, namespace):
        namespace.annotations.clear()
        output = render_namespace(namespace, load_config("go", {"package_name": "greeting"}))
        assert "package greeting\n" in output
        assert "Version()" not in output

    def test_definition_order(self, context):
        output = render_namespace(context.namespace, context.config)
        positions = [
            output.index("type UUID string"),
            output.index("type Greeter interface"),
            output.index("type Repository interface"),
            output.index("type Person struct"),
            output.index("type Mood int32"),
            output.index("type Animal struct"),
        ]
        assert positions == sorted(positions)

    def test_unclassified_role_generates_nothing(self, context):
        output = render_namespace(context.namespace, context.config)
        assert "Notes" not in output
        assert "Note(" not in output

    def test_args_types(self, namespace):
        config = load_config("go", {"operation_args_types": True})
        output = render_namespace(namespace, config)
        assert 'type greeterSayHelloArgs struct {\n\tTo Person `json:"to"`\n}\n\n' in output
        assert 'type greeterWaveArgs struct {\n\tType string `json:"type"`\n}\n\n' in output
        assert "greeterInternalArgs" not in output
        assert "repositoryLoadArgs" not in output

    def test_no_args_types_by_default(self, context):
        assert "Args struct" not in render_namespace(context.namespace, context.config)

    def test_empty_namespace(self):
        namespace = Namespace("empty")
        output = render_namespace(namespace, load_config("go"))
        assert "import" not in output
        assert 'return "empty"' in output

    def test_translated_alias(self, namespace):
        config = load_config(
            "go", {"aliases": {"UUID": {"type": "uuid.UUID", "import": "github.com/google/uuid"}}}
        )
        output = render_namespace(namespace, config)
        assert "type UUID string" not in output
        assert '\tId uuid.UUID `json:"id"`\n' in output
        assert "\tLoad(ctx context.Context, id uuid.UUID) (*Person, error)\n" in output
        assert '\t"time"\n\n\t"github.com/google/uuid"\n)' in output
