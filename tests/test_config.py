"""Tests for JSON configuration and configured extraction runs."""

import json
from pathlib import Path

import polib
import pytest

from potextract.config import (
    ExtractionConfig,
    build_extractor,
    load_config,
    run_extraction,
)
from potextract.errors import ConfigurationError, SelectorError


def write_config(directory: Path, data: dict) -> Path:
    path = directory / "potextract.json"
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


class TestLoadConfig:
    """Reading and validating config files."""

    def test_full_config(self, temp_dir: Path) -> None:
        path = write_config(
            temp_dir,
            {
                "js_calls": [
                    {"callee": ["_", "i18n.gettext"], "options": {"arguments": {"text": 0}}},
                    {
                        "callee": "_n",
                        "options": {
                            "arguments": {"text": 0, "text_plural": 1},
                            "comments": {"regex": "^TRANSLATORS: (.*)$"},
                        },
                    },
                ],
                "html_elements": [
                    {"selector": "[translate]"},
                    {"selector": "img", "attribute": "alt"},
                ],
                "embedded_js": ["script"],
                "headers": {"Project-Id-Version": "demo 1.0"},
                "output": "messages.pot",
            },
        )

        config = load_config(path)

        assert len(config.js_calls) == 2
        assert config.js_calls[1].options.arguments.text_plural == 1
        assert config.js_calls[1].options.comments.regex.pattern == "^TRANSLATORS: (.*)$"
        assert config.html_elements[1].attribute == "alt"
        assert config.strict is True
        assert config.output == "messages.pot"

    def test_invalid_json(self, temp_dir: Path) -> None:
        path = temp_dir / "bad.json"
        path.write_text("{not json", encoding="utf-8")

        with pytest.raises(ConfigurationError, match="Invalid JSON"):
            load_config(path)

    @pytest.mark.parametrize(
        "data",
        [
            {"unknown": 1},
            {"js_calls": [{"callee": "_"}]},
            {"js_calls": [{"callee": "_", "options": {"arguments": {"text": "0"}}}]},
            {"html_elements": [{"attribute": "alt"}]},
            {"html_templates": "yes"},
            {"strict": 1},
            [],
        ],
    )
    def test_invalid_config(self, temp_dir: Path, data) -> None:
        with pytest.raises(ConfigurationError):
            load_config(write_config(temp_dir, data))

    def test_missing_file(self, temp_dir: Path) -> None:
        with pytest.raises(FileNotFoundError):
            load_config(temp_dir / "missing.json")


class TestBuildExtractor:
    """Wiring parsers from a config."""

    def test_parsers_are_created_on_demand(self) -> None:
        session = build_extractor(ExtractionConfig())

        assert session.js_parser is None
        assert session.html_parser is None

    def test_embedded_js_needs_js_calls(self) -> None:
        config = ExtractionConfig(embedded_js=["script"])

        with pytest.raises(ConfigurationError, match="js_calls"):
            build_extractor(config)

    def test_html_templates_need_both_parsers(self) -> None:
        config = ExtractionConfig.model_validate(
            {"js_calls": [{"callee": "_", "options": {"arguments": {"text": 0}}}], "html_templates": True}
        )

        with pytest.raises(ConfigurationError, match="html_templates"):
            build_extractor(config)

    def test_invalid_selector(self) -> None:
        config = ExtractionConfig.model_validate({"html_elements": [{"selector": "div p"}]})

        with pytest.raises(SelectorError):
            build_extractor(config)

    def test_embedded_js_and_templates(self) -> None:
        config = ExtractionConfig.model_validate(
            {
                "js_calls": [{"callee": "_", "options": {"arguments": {"text": 0}}}],
                "html_elements": [{"selector": "[translate]"}],
                "embedded_js": ["script"],
                "embedded_attribute_js": "^:",
                "html_templates": True,
            }
        )

        session = build_extractor(config)
        session.html_parser.parse_string(
            "<p translate>Markup</p>\n<script>_('Script');</script>\n<b :title=\"_('Bound')\">x</b>",
            "page.html",
        )
        session.js_parser.parse_string("const t = `<p translate>Template</p>`;", "app.js")

        messages = {m.text: m.references for m in session.extractor.get_messages()}
        assert messages == {
            "Bound": ["page.html:3"],
            "Markup": ["page.html:1"],
            "Script": ["page.html:2"],
            "Template": ["app.js:1"],
        }


class TestRunExtraction:
    """Complete runs over files on disk."""

    def test_run_writes_output(self, sample_project: Path) -> None:
        output = sample_project / "locale" / "messages.pot"
        config = ExtractionConfig.model_validate(
            {
                "js_calls": [{"callee": "_", "options": {"arguments": {"text": 0}}}],
                "html_elements": [
                    {
                        "selector": "[translate]",
                        "options": {"attributes": {"context": "translate-context"}},
                    }
                ],
                "js_patterns": [str(sample_project / "src" / "**" / "*.js")],
                "html_patterns": [str(sample_project / "templates" / "*.html")],
                "headers": {"Project-Id-Version": "demo 1.0"},
                "output": str(output),
            }
        )

        extractor = run_extraction(config)

        catalog = polib.pofile(str(output))
        assert [(e.msgctxt, e.msgid) for e in catalog] == [(None, "Welcome"), ("footer", "Goodbye")]
        assert catalog.metadata["Project-Id-Version"] == "demo 1.0"
        assert extractor.get_stats().number_of_parsed_files == 2

    def test_patterns_without_parser(self, temp_dir: Path) -> None:
        config = ExtractionConfig(js_patterns=[str(temp_dir / "*.js")])

        with pytest.raises(ConfigurationError, match="js_patterns"):
            run_extraction(config)

    def test_run_without_output(self, sample_project: Path) -> None:
        config = ExtractionConfig.model_validate(
            {
                "js_calls": [{"callee": "_", "options": {"arguments": {"text": 0}}}],
                "js_patterns": [str(sample_project / "src" / "view.ts")],
            }
        )

        extractor = run_extraction(config)

        assert [m.text for m in extractor.get_messages()] == ["Welcome"]
        assert not list(sample_project.glob("**/*.pot"))
