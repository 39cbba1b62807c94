"""Tests for the command line interface."""

import json
from pathlib import Path

import click
import polib
import pytest
from click.testing import CliRunner

from potextract import __version__
from potextract.cli import cli, parse_call_option, parse_header


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


class TestParseCallOption:
    """The NAME[:TEXT[,PLURAL[,CONTEXT]]] format of --call."""

    def test_name_only(self) -> None:
        call = parse_call_option("_")

        assert call.callee == "_"
        assert call.options.arguments.text == 0
        assert call.options.arguments.text_plural is None

    def test_plural_and_context(self) -> None:
        call = parse_call_option("i18n.npgettext:1,2,0")

        assert call.callee == "i18n.npgettext"
        assert call.options.arguments.text == 1
        assert call.options.arguments.text_plural == 2
        assert call.options.arguments.context == 0

    def test_skipped_position(self) -> None:
        call = parse_call_option("_p:0,,1")

        assert call.options.arguments.text_plural is None
        assert call.options.arguments.context == 1

    @pytest.mark.parametrize("value", ["_:a", "_:0,1,2,3", "_:,1", ":0", "_:-1"])
    def test_invalid_call_option(self, value: str) -> None:
        with pytest.raises(click.BadParameter):
            parse_call_option(value)


class TestParseHeader:
    def test_header(self) -> None:
        assert parse_header("Project-Id-Version: demo 1.0") == ("Project-Id-Version", "demo 1.0")

    @pytest.mark.parametrize("value", ["no separator", ": value"])
    def test_invalid_header(self, value: str) -> None:
        with pytest.raises(click.BadParameter):
            parse_header(value)


class TestExtractCommand:
    """The extract command."""

    def test_prints_pot_to_stdout(self, runner: CliRunner, sample_project: Path) -> None:
        result = runner.invoke(
            cli,
            ["extract", str(sample_project / "src" / "*.js"), "--call", "_", "--no-stats"],
        )

        assert result.exit_code == 0, result.output
        assert 'msgid "Welcome"' in result.output
        assert "app.js:4" in result.output

    def test_writes_output_file(self, runner: CliRunner, sample_project: Path) -> None:
        output = sample_project / "out" / "messages.pot"

        result = runner.invoke(
            cli,
            [
                "extract",
                str(sample_project / "src" / "*.*"),
                str(sample_project / "templates" / "*.html"),
                "--call", "_",
                "--call", "_n:0,1",
                "--element", "[translate]",
                "--header", "Project-Id-Version: demo 1.0",
                "-o", str(output),
            ],
        )

        assert result.exit_code == 0, result.output
        catalog = polib.pofile(str(output))
        assert sorted(entry.msgid for entry in catalog) == ["Goodbye", "One file", "Welcome"]
        assert catalog.find("One file").msgid_plural == "Many files"
        assert catalog.metadata["Project-Id-Version"] == "demo 1.0"
        assert "3 messages extracted" in result.output

    def test_config_file(self, runner: CliRunner, sample_project: Path) -> None:
        config = sample_project / "potextract.json"
        config.write_text(
            json.dumps(
                {
                    "html_elements": [
                        {
                            "selector": "[translate]",
                            "options": {"attributes": {"context": "translate-context"}},
                        }
                    ],
                }
            ),
            encoding="utf-8",
        )

        result = runner.invoke(
            cli,
            ["extract", "--config", str(config), "--no-stats", str(sample_project / "templates" / "*.html")],
        )

        assert result.exit_code == 0, result.output
        assert 'msgctxt "footer"' in result.output

    def test_no_patterns(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["extract", "--call", "_"])

        assert result.exit_code == 1
        assert "No file patterns" in result.output

    def test_missing_extractors_for_files(self, runner: CliRunner, sample_project: Path) -> None:
        result = runner.invoke(cli, ["extract", str(sample_project / "templates" / "*.html"), "--call", "_"])

        assert result.exit_code == 1
        assert "Extraction failed" in result.output

    def test_syntax_error(self, runner: CliRunner, temp_dir: Path) -> None:
        (temp_dir / "broken.js").write_text("const = ;\n", encoding="utf-8")

        result = runner.invoke(cli, ["extract", str(temp_dir / "*.js"), "--call", "_"])

        assert result.exit_code == 1
        assert "broken.js" in result.output

    def test_invalid_config(self, runner: CliRunner, temp_dir: Path) -> None:
        config = temp_dir / "bad.json"
        config.write_text('{"unknown": true}', encoding="utf-8")

        result = runner.invoke(cli, ["extract", "--config", str(config), "a.js"])

        assert result.exit_code == 1
        assert "Invalid config" in result.output

    def test_invalid_call(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["extract", "a.js", "--call", "_:x"])

        assert result.exit_code == 2

    def test_version(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["--version"])

        assert result.exit_code == 0
        assert __version__ in result.output
