"""Tests for the Go generator and the top-level generation helpers."""

import json

import pytest

from idl_codegen.codegen import (
    GeneratorError,
    generate_from_document,
    generate_from_namespace,
    quick_generate,
)
from idl_codegen.codegen.core.config import ConfigError, GeneratorConfig
from idl_codegen.codegen.core.document import convert_document
from idl_codegen.codegen.core.generator import generate_code
from idl_codegen.codegen.core.model import List, Namespace, Primitive, Union
from idl_codegen.codegen.languages.go import (
    GoConfig,
    GoGenerator,
    create_generator,
    create_go_generator,
    create_modern_go_generator,
    create_workflow_generator,
)


class TestGoGenerator:
    def test_properties(self):
        generator = GoGenerator()
        assert generator.language_name == "go"
        assert generator.file_extension == ".go"
        assert isinstance(generator.config, GoConfig)
        assert generator.template_exists("struct.go.j2")

    def test_dict_config(self):
        generator = GoGenerator({"package_name": "greeting", "any_type": "any"})
        assert generator.config.package_name == "greeting"
        assert generator.config.any_type == "any"
        assert generator.config.context_package == "context."

    def test_base_config_is_promoted(self):
        generator = GoGenerator(GeneratorConfig(package_name="pets"))
        assert isinstance(generator.config, GoConfig)
        assert generator.config.package_name == "pets"

    def test_context_package_needs_import(self):
        with pytest.raises(ConfigError, match="context_import"):
            GoGenerator({"context_package": "workflow."})

    def test_generate(self, namespace):
        code = GoGenerator().generate(namespace)
        assert code.startswith("// Code generated by idl-codegen. DO NOT EDIT.\n")
        assert "type Greeter interface {" in code
        assert "type Repository interface {" in code


class TestGenerateCode:
    def test_success(self, namespace):
        result = generate_code(GoGenerator({"package_name": "greeting"}), namespace)
        assert result.success
        assert result.error_message is None
        assert "package greeting\n" in result.code
        assert result.code.endswith("}\n")
        assert "\n\n\n" not in result.code

    def test_warnings(self, namespace):
        result = generate_code(GoGenerator(), namespace)
        assert result.warnings == [
            "Parameter Greeter.wave(type) renamed to type_",
            "Role 'Notes' generates no code",
        ]

    def test_metadata(self, namespace):
        metadata = generate_code(GoGenerator(), namespace).metadata
        assert metadata["language"] == "go"
        assert metadata["namespace"] == "greeting.v1"
        assert metadata["role_count"] == 3
        assert metadata["type_count"] == 1
        assert metadata["package_name"] == "module"
        assert metadata["has_service_code"] is True
        assert metadata["handler_roles"] == ["Greeter"]
        assert metadata["provider_roles"] == ["Repository"]
        assert metadata["referenced_types"] == ["Person"]

    def test_invalid_package_name(self, namespace):
        result = generate_code(GoGenerator({"package_name": "My_Pkg"}), namespace)
        assert "Invalid Go package name: Package names should be lowercase" in result.warnings
        assert "Invalid Go package name: Package names should not contain underscores" in result.warnings

    def test_undefined_configured_alias(self, namespace):
        generator = GoGenerator({"aliases": {"Money": {"type": "decimal.Decimal"}}})
        result = generate_code(generator, namespace)
        assert "Configured alias 'Money' is not defined" in result.warnings

    def test_structural_warnings(self):
        namespace = Namespace("ns")
        namespace.add(Union("Empty"))
        result = generate_code(GoGenerator(), namespace)
        assert result.success
        assert "Union 'Empty' has no member types" in result.warnings

    def test_recursive_alias(self):
        namespace = convert_document(
            {"namespace": "ns", "aliases": [{"name": "Tree", "type": "{string: Tree}"}]}
        )
        result = generate_code(GoGenerator(), namespace)
        assert result.success
        assert "type Tree map[string]Tree\n" in result.code

    def test_mutually_recursive_aliases(self):
        namespace = convert_document(
            {
                "namespace": "ns",
                "aliases": [
                    {"name": "Forest", "type": "[Tree]"},
                    {"name": "Tree", "type": "{string: Forest}"},
                ],
                "types": [{"name": "Park", "fields": [{"name": "woods", "type": "Forest?"}]}],
            }
        )
        result = generate_code(GoGenerator(), namespace)
        assert result.success
        assert "type Forest []Tree\n" in result.code
        assert "type Tree map[string]Forest\n" in result.code
        assert '\tWoods Forest `json:"woods,omitempty"`\n' in result.code

    def test_failure_is_reported(self):
        namespace = Namespace("ns")
        namespace.add(Union("Bad", [List(Primitive("string"))]))
        result = generate_code(GoGenerator(), namespace)
        assert not result.success
        assert result.code == ""
        assert result.error_message.startswith("Code generation failed:")
        assert isinstance(result.exception, GeneratorError)


class TestFactories:
    def test_create_go_generator(self):
        assert create_go_generator().config.package_name == "module"

    def test_modern_generator(self):
        generator = create_modern_go_generator("pets")
        assert generator.config.package_name == "pets"
        assert generator.config.any_type == "any"

    def test_workflow_generator(self, namespace):
        generator = create_workflow_generator("greeting")
        code = generator.generate(namespace)
        assert "\tLoad(ctx workflow.Context, id UUID) (*Person, error)\n" in code
        assert "\tSayHello(ctx context.Context, to *Person) (string, error)\n" in code
        assert '\t"go.temporal.io/sdk/workflow"\n' in code

    def test_create_generator_from_keywords(self):
        generator = create_generator(package_name="greeting", generate_json_tags=False)
        assert generator.config.package_name == "greeting"
        assert generator.config.generate_json_tags is False


class TestConvenienceFunctions:
    def test_generate_from_namespace(self, namespace):
        result = generate_from_namespace(namespace, "golang", {"package_name": "greeting"})
        assert result.success
        assert "package greeting\n" in result.code

    def test_generate_from_document(self, sample_document):
        result = generate_from_document(sample_document)
        assert result.success
        assert "type Person struct {" in result.code

    def test_quick_generate_from_string(self, sample_document):
        code = quick_generate(json.dumps(sample_document), package_name="greeting")
        assert "package greeting\n" in code

    def test_quick_generate_failure(self):
        document = {"namespace": "ns", "unions": [{"name": "Bad", "types": ["[string]"]}]}
        with pytest.raises(GeneratorError, match="Code generation failed"):
            quick_generate(document)
