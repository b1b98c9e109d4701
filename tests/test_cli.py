"""Tests for the command-line interface."""

import io
import json

import pytest

from idl_codegen.main import build_parser, main


@pytest.fixture
def model_file(tmp_path, sample_document):
    path = tmp_path / "model.json"
    path.write_text(json.dumps(sample_document), encoding="utf-8")
    return path


class TestParser:
    def test_defaults(self):
        args = build_parser().parse_args(["codegen", "model.json"])
        assert args.command == "codegen"
        assert args.file == "model.json"
        assert args.language == "go"
        assert args.log_level == "WARNING"

    def test_inputs_are_exclusive(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args(["codegen", "model.json", "--stdin"])

    def test_json_tag_case_choices(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args(["codegen", "model.json", "--json-tag-case", "kebab"])


class TestMain:
    def test_no_command_prints_help(self, capsys):
        assert main([]) == 1
        assert "usage:" in capsys.readouterr().out

    def test_writes_output_file(self, model_file, tmp_path, capsys):
        output = tmp_path / "greeting.go"
        code = main(["codegen", str(model_file), "--package", "greeting", "-o", str(output)])

        assert code == 0
        generated = output.read_text(encoding="utf-8")
        assert generated.startswith("// Code generated by idl-codegen. DO NOT EDIT.\n")
        assert "package greeting\n" in generated
        assert "type Greeter interface {" in generated
        assert "saved to" in capsys.readouterr().out

    def test_generation_options(self, model_file, tmp_path):
        output = tmp_path / "greeting.go"
        code = main(
            [
                "codegen",
                str(model_file),
                "-o",
                str(output),
                "--no-comments",
                "--no-json-tags",
                "--args-types",
            ]
        )

        assert code == 0
        generated = output.read_text(encoding="utf-8")
        assert "// Greets people." not in generated
        assert "\tId UUID\n" in generated
        assert "type greeterSayHelloArgs struct {" in generated

    def test_config_file(self, model_file, tmp_path):
        config = tmp_path / "codegen.json"
        config.write_text(json.dumps({"package_name": "configured", "extra_struct_tags": ["yaml"]}))
        output = tmp_path / "out.go"

        assert main(["codegen", str(model_file), "--config", str(config), "-o", str(output)]) == 0
        generated = output.read_text(encoding="utf-8")
        assert "package configured\n" in generated
        assert '`json:"id" yaml:"id"`' in generated

    def test_prints_code_to_stdout(self, model_file, capsys):
        assert main(["codegen", str(model_file)]) == 0
        assert "type Greeter interface" in capsys.readouterr().out

    def test_reads_stdin(self, monkeypatch, sample_document, tmp_path):
        monkeypatch.setattr("sys.stdin", io.StringIO(json.dumps(sample_document)))
        output = tmp_path / "out.go"
        assert main(["codegen", "--stdin", "-o", str(output)]) == 0
        assert "type Person struct {" in output.read_text(encoding="utf-8")

    def test_verbose_shows_warnings(self, model_file, tmp_path, capsys):
        output = tmp_path / "out.go"
        assert main(["codegen", str(model_file), "-o", str(output), "--verbose"]) == 0
        out = capsys.readouterr().out
        assert "Generation Metadata" in out
        assert "Notes" in out

    def test_missing_input(self, capsys):
        assert main(["codegen"]) == 1
        assert "Input source required" in capsys.readouterr().out

    def test_missing_file(self, tmp_path, capsys):
        assert main(["codegen", str(tmp_path / "missing.json")]) == 1
        assert "File not found" in capsys.readouterr().out

    def test_invalid_model(self, tmp_path, capsys):
        path = tmp_path / "model.json"
        path.write_text(json.dumps({"types": []}))
        assert main(["codegen", str(path)]) == 1
        assert "Invalid model document" in capsys.readouterr().out

    def test_invalid_json(self, tmp_path, capsys):
        path = tmp_path / "model.json"
        path.write_text("{")
        assert main(["codegen", str(path)]) == 1
        assert "Failed to load input" in capsys.readouterr().out

    def test_missing_config_file(self, model_file, tmp_path, capsys):
        assert main(["codegen", str(model_file), "--config", str(tmp_path / "none.json")]) == 1
        assert "Configuration error" in capsys.readouterr().out

    def test_unsupported_language(self, model_file, capsys):
        assert main(["codegen", str(model_file), "--language", "cobol"]) == 1
        assert "Unsupported language" in capsys.readouterr().out

    def test_generation_failure(self, tmp_path, capsys):
        path = tmp_path / "model.json"
        path.write_text(json.dumps({"namespace": "ns", "unions": [{"name": "Bad", "types": ["[string]"]}]}))
        assert main(["codegen", str(path)]) == 1
        assert "Code generation failed" in capsys.readouterr().out


class TestInformation:
    def test_list_languages(self, capsys):
        assert main(["codegen", "--list-languages"]) == 0
        out = capsys.readouterr().out
        assert "go" in out
        assert "golang" in out

    def test_language_info(self, capsys):
        assert main(["codegen", "--language-info", "golang"]) == 0
        assert "GoGenerator" in capsys.readouterr().out

    def test_unknown_language_info(self, capsys):
        assert main(["codegen", "--language-info", "cobol"]) == 1
        assert "not supported" in capsys.readouterr().out
