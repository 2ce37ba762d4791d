"""Tests for the gramtypes command line."""

import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from gramtypes.cli import app


@pytest.fixture
def cli_runner():
    """Return a CLI test runner."""
    return CliRunner()


@pytest.fixture
def field_grammar(tmp_path: Path) -> Path:
    """Grammar using a FIELD label."""
    path = tmp_path / "grammar.json"
    path.write_text(
        json.dumps(
            {
                "name": "fields",
                "rules": {
                    "binary": {
                        "type": "SEQ",
                        "members": [
                            {
                                "type": "FIELD",
                                "name": "left",
                                "content": {"type": "SYMBOL", "name": "number"},
                            },
                            {"type": "STRING", "value": "+"},
                        ],
                    },
                    "number": {"type": "PATTERN", "value": "\\d+"},
                },
            }
        )
    )
    return path


def test_prints_declarations(cli_runner, arithmetic_grammar_path, arithmetic_expected):
    result = cli_runner.invoke(app, [str(arithmetic_grammar_path)])

    assert result.exit_code == 0
    assert result.stdout == arithmetic_expected


def test_writes_output_file(cli_runner, arithmetic_grammar_path, arithmetic_expected, tmp_path):
    out = tmp_path / "types.txt"
    result = cli_runner.invoke(app, [str(arithmetic_grammar_path), "--output", str(out)])

    assert result.exit_code == 0
    assert result.stdout == ""
    assert out.read_text(encoding="utf-8") == arithmetic_expected


def test_unsupported_construct_exits_nonzero(cli_runner, field_grammar, tmp_path):
    out = tmp_path / "types.txt"
    result = cli_runner.invoke(app, [str(field_grammar), "-o", str(out)])

    assert result.exit_code == 1
    assert "error[UnsupportedConstruct]" in result.output
    assert "rule 'binary'" in result.output
    assert not out.exists()


def test_missing_grammar_file(cli_runner, tmp_path):
    result = cli_runner.invoke(app, [str(tmp_path / "missing.json")])

    assert result.exit_code == 1
    assert "error[DecodeError]" in result.output


def test_non_utf8_grammar_file(cli_runner, tmp_path):
    path = tmp_path / "grammar.json"
    path.write_bytes(b'{"name": "g", "rules": {"a": {"type": "STRING", "value": "\xff"}}}')
    result = cli_runner.invoke(app, [str(path)])

    assert result.exit_code == 1
    assert "error[DecodeError]" in result.output
    assert "Cannot read grammar file" in result.output


def test_config_file(cli_runner, arithmetic_grammar_path, tmp_path):
    config = tmp_path / "gramtypes.toml"
    config.write_text('[output]\nprimitive_type = "text"\nconstructor_infix = "_C"\n')
    result = cli_runner.invoke(app, [str(arithmetic_grammar_path), "--config", str(config)])

    assert result.exit_code == 0
    assert "and variable = text\n" in result.stdout
    assert " | EXPRESSION_C0 (variable)\n" in result.stdout


def test_invalid_config(cli_runner, arithmetic_grammar_path, tmp_path):
    config = tmp_path / "gramtypes.toml"
    config.write_text("[render]\n")
    result = cli_runner.invoke(app, [str(arithmetic_grammar_path), "-c", str(config)])

    assert result.exit_code == 1
    assert "error[ConfigError]" in result.output


def test_version(cli_runner):
    result = cli_runner.invoke(app, ["--version"])

    assert result.exit_code == 0
    assert "gramtypes version" in result.stdout
