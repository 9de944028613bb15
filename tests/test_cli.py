"""Tests for the CLI interface."""

import json

import pytest
from click.testing import CliRunner

from prompt_recipe.cli import cli

COMPLETION_YAML = """
type: completion
vendor: google
model: text-bison
prompt: Write a hello world in java
parameters:
  - name: maxOutputTokens
    value: 256
  - name: temperature
    value: 0.4
  - name: stream
    value: true
examples:
  - name: input
    values: [a, b]
    test: c
  - name: output
    values: [x, y]
"""

CHAT_YAML = """
type: chat
vendor: google
model: chat-bison
context: You are a helpful assistant
examples:
  - input: who are u?
    output: I'm google
messages:
  - input: what's your name?
"""


class TestCLI:
    """Tests for CLI commands."""

    @pytest.fixture
    def runner(self):
        """Create a CLI runner."""
        return CliRunner()

    @pytest.fixture
    def templates(self, tmp_path):
        """Write one template file of each kind."""
        paths = {
            "completion": tmp_path / "completion.yaml",
            "chat": tmp_path / "chat.yaml",
            "unknown": tmp_path / "unknown.yaml",
            "broken": tmp_path / "broken.yaml",
        }
        paths["completion"].write_text(COMPLETION_YAML, encoding="utf-8")
        paths["chat"].write_text(CHAT_YAML, encoding="utf-8")
        paths["unknown"].write_text("type: embedding\n", encoding="utf-8")
        paths["broken"].write_text("type: completion\nvendor: google\n", encoding="utf-8")
        return {name: str(path) for name, path in paths.items()}

    def test_version(self, runner):
        """Test --version flag."""
        result = runner.invoke(cli, ["--version"])

        assert result.exit_code == 0
        assert "0.1.0" in result.output

    def test_help(self, runner):
        """Test --help flag."""
        result = runner.invoke(cli, ["--help"])

        assert result.exit_code == 0
        assert "Prompt Recipe" in result.output
        assert "render" in result.output
        assert "show" in result.output
        assert "param" in result.output

    def test_render_raw(self, runner, templates):
        """Test rendering prints the final prompt exactly."""
        result = runner.invoke(cli, ["render", templates["completion"]])

        assert result.exit_code == 0
        assert result.output == (
            "Write a hello world in java\n\n"
            "input: a\noutput: x\n\n"
            "input: b\noutput: y\n\n"
            "input: c\noutput: \n"
        )

    def test_render_json(self, runner, templates):
        """Test rendering as JSON."""
        result = runner.invoke(cli, ["render", templates["completion"], "-f", "json"])

        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["metadata"]["model"] == "text-bison"
        assert data["prompt"].endswith("output: \n")

    def test_render_to_file(self, runner, templates, tmp_path):
        """Test writing the rendered prompt to a file."""
        output = tmp_path / "prompt.txt"

        result = runner.invoke(
            cli, ["render", templates["completion"], "-o", str(output)]
        )

        assert result.exit_code == 0
        assert output.read_text(encoding="utf-8").startswith(
            "Write a hello world in java\n\ninput: a\n"
        )

    def test_render_chat_rejected(self, runner, templates):
        """Test chat templates cannot be rendered."""
        result = runner.invoke(cli, ["render", templates["chat"]])

        assert result.exit_code == 2
        assert "Only completion templates" in result.output

    def test_render_broken(self, runner, templates):
        """Test schema errors are reported."""
        result = runner.invoke(cli, ["render", templates["broken"]])

        assert result.exit_code == 1
        assert "Error" in result.output

    def test_show_completion(self, runner, templates):
        """Test showing a completion template."""
        result = runner.invoke(cli, ["show", templates["completion"]])

        assert result.exit_code == 0
        assert "google/text-bison" in result.output
        assert "maxOutputTokens" in result.output
        assert "Examples (2)" in result.output

    def test_show_chat(self, runner, templates):
        """Test showing a chat template."""
        result = runner.invoke(cli, ["show", templates["chat"]])

        assert result.exit_code == 0
        assert "google/chat-bison" in result.output
        assert "helpful assistant" in result.output
        assert "Messages" in result.output

    def test_show_json(self, runner, templates):
        """Test showing the parsed template as JSON."""
        result = runner.invoke(cli, ["show", templates["chat"], "--json"])

        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["kind"] == "chat"
        assert data["messages"] == [{"input": "what's your name?"}]

    def test_show_unrecognized(self, runner, templates):
        """Test showing a template of an unknown type."""
        result = runner.invoke(cli, ["show", templates["unknown"]])

        assert result.exit_code == 0
        assert "Unrecognized" in result.output

    def test_param_int(self, runner, templates):
        """Test reading an integer parameter."""
        result = runner.invoke(
            cli, ["param", templates["completion"], "maxOutputTokens", "--as", "int"]
        )

        assert result.exit_code == 0
        assert result.output.strip() == "256"

    def test_param_float(self, runner, templates):
        """Test reading a float parameter."""
        result = runner.invoke(
            cli, ["param", templates["completion"], "temperature", "--as", "float"]
        )

        assert result.exit_code == 0
        assert result.output.strip() == "0.4"

    def test_param_bool(self, runner, templates):
        """Test reading a boolean parameter."""
        result = runner.invoke(
            cli, ["param", templates["completion"], "stream", "--as", "bool"]
        )

        assert result.exit_code == 0
        assert result.output.strip() == "true"

    def test_param_missing(self, runner, templates):
        """Test a missing parameter exits with an error code."""
        result = runner.invoke(cli, ["param", templates["completion"], "topK"])

        assert result.exit_code == 1
        assert "not set" in result.output

    def test_param_type_mismatch(self, runner, templates):
        """Test reading a parameter as the wrong kind."""
        result = runner.invoke(
            cli, ["param", templates["completion"], "maxOutputTokens", "--as", "bool"]
        )

        assert result.exit_code == 1
        assert "Error" in result.output
        assert "maxOutputTokens" in result.output

    def test_validate_valid(self, runner, templates):
        """Test validating a valid template."""
        result = runner.invoke(cli, ["validate", templates["completion"]])

        assert result.exit_code == 0
        assert "Valid completion template" in result.output

    def test_validate_unrecognized(self, runner, templates):
        """Test validating a template of an unknown type."""
        result = runner.invoke(cli, ["validate", templates["unknown"]])

        assert result.exit_code == 0
        assert "ignored" in result.output

    def test_validate_invalid(self, runner, templates):
        """Test validating an invalid template."""
        result = runner.invoke(cli, ["validate", templates["broken"]])

        assert result.exit_code == 1
        assert "Invalid completion template" in result.output

    def test_missing_file(self, runner):
        """Test a missing file is a usage error."""
        result = runner.invoke(cli, ["show", "/nonexistent/template.yaml"])

        assert result.exit_code == 2

    def test_verbose(self, runner, templates):
        """Test --verbose still renders."""
        result = runner.invoke(cli, ["-v", "render", templates["completion"]])

        assert result.exit_code == 0
        assert "input: c" in result.output
