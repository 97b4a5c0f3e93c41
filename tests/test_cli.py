"""
Tests for the command-line interface.

Tests exit codes, output formats and reproducibility through the CLI.
"""

from typer.testing import CliRunner

import cli.main
from cli.main import EXIT_CONFIG_ERROR, app

runner = CliRunner()


class TestGenerateCommand:
    """Tests for `famtree generate`."""

    def test_dot_to_stdout(self):
        """Test the default run with an explicit seed."""
        result = runner.invoke(app, ["generate", "--seed", "42"])

        assert result.exit_code == 0, result.output
        assert 'digraph "output" {' in result.output
        assert "Seed: 42" in result.output
        assert "Validation passed" in result.output

    def test_mermaid_to_file(self, tmp_path):
        """Test writing Mermaid output to a file."""
        target = tmp_path / "out" / "tree.mmd"

        result = runner.invoke(
            app,
            ["generate", "--seed", "7", "--format", "mermaid", "--name", "fam", "-o", str(target)],
        )

        assert result.exit_code == 0, result.output
        text = target.read_text(encoding="utf-8")
        assert text.startswith('---\ntitle: "fam"\n---\nflowchart TB\n')

    def test_same_seed_same_file(self, tmp_path):
        """Test that a seed fully determines the rendered output."""
        outputs = []
        for i in range(2):
            target = tmp_path / f"run{i}.dot"
            result = runner.invoke(
                app,
                ["generate", "--seed", "123", "--depth-max", "5", "--no-validate", "-o", str(target)],
            )
            assert result.exit_code == 0, result.output
            outputs.append(target.read_text(encoding="utf-8"))

        assert outputs[0] == outputs[1]

    def test_invalid_deviation(self):
        """Test that a zero deviation is a configuration error."""
        result = runner.invoke(app, ["generate", "--width-std", "0"])

        assert result.exit_code == EXIT_CONFIG_ERROR
        assert "Error" in result.output

    def test_depth_must_be_positive(self):
        """Test that option parsing refuses a zero depth."""
        result = runner.invoke(app, ["generate", "--depth-max", "0"])

        assert result.exit_code != 0

    def test_single_level(self):
        """Test that depth 1 renders just the root."""
        result = runner.invoke(app, ["generate", "--seed", "1", "--depth-max", "1"])

        assert result.exit_code == 0, result.output
        assert '[label = "Root"];' in result.output
        assert "->" not in result.output

    def test_version(self):
        """Test the version flag."""
        result = runner.invoke(app, ["--version"])

        assert result.exit_code == 0
        assert "famtree" in result.output

    def test_internal_value_error_is_not_a_config_error(self, monkeypatch):
        """Test that a ValueError raised inside generation is not reported as bad input."""

        def broken(config):
            raise ValueError("internal bug")

        monkeypatch.setattr(cli.main, "generate_tree", broken)

        result = runner.invoke(app, ["generate", "--seed", "1"])

        assert result.exit_code != EXIT_CONFIG_ERROR
        assert isinstance(result.exception, ValueError)
        assert str(result.exception) == "internal bug"
