"""Tests for the GettextExtractor session facade."""

import asyncio
from pathlib import Path

import polib
import pytest

from potextract import GettextExtractor, html_extractors, js_extractors
from potextract.errors import ConfigurationError, MergeConflictError
from potextract.models.messages import Fragment
from potextract.parsers.regex import add_condition


class TestGettextExtractor:
    """End-to-end extraction through one session."""

    def test_js_end_to_end(self, extractor: GettextExtractor) -> None:
        extractor.create_js_parser([
            js_extractors.call_expression("getText", {"arguments": {"text": 0, "context": 1}}),
        ]).parse_string("getText('Foo', 'Context');", "test.js")

        [message] = extractor.get_messages()
        assert message.text == "Foo"
        assert message.context == "Context"
        assert message.references == ["test.js:1"]

        stats = extractor.get_stats()
        assert stats.number_of_messages == 1
        assert stats.number_of_message_usages == 1
        assert stats.number_of_contexts == 1
        assert stats.number_of_parsed_files == 1
        assert stats.number_of_parsed_files_with_messages == 1

    def test_parsers_share_one_catalog(self, extractor: GettextExtractor, sample_project: Path) -> None:
        extractor.create_js_parser([
            js_extractors.call_expression("_", {"arguments": {"text": 0}}),
            js_extractors.call_expression(
                "_n",
                {"arguments": {"text": 0, "text_plural": 1}, "comments": {"same_line_trailing": True}},
            ),
        ]).parse_files_glob(str(sample_project / "src" / "*.*"))
        extractor.create_html_parser([
            html_extractors.element_content(
                "[translate]", {"attributes": {"context": "translate-context"}}
            ),
        ]).parse_files_glob(str(sample_project / "templates" / "**" / "*.html"))

        contexts = extractor.get_contexts()
        assert [c.name for c in contexts] == ["", "footer"]
        assert [m.text for m in contexts[0].messages] == ["One file", "Welcome"]

        welcome = extractor.get_messages_by_context("")[1]
        assert len(welcome.references) == 3
        assert welcome.comments == []

        one_file = extractor.get_messages_by_context("")[0]
        assert one_file.text_plural == "Many files"
        assert one_file.comments == ["file counter"]

        assert extractor.get_stats().number_of_parsed_files == 3

    def test_regex_parser(self, extractor: GettextExtractor) -> None:
        extractor.create_regex_parser([add_condition(r"T\[(\w+)\]", 1)]).parse_string("T[key]", "a.txt")

        assert [m.text for m in extractor.get_messages()] == ["key"]

    def test_parser_options_are_forwarded(self, extractor: GettextExtractor) -> None:
        parser = extractor.create_js_parser(
            [js_extractors.call_expression("_", {"arguments": {"text": 0}})], strict=False
        )

        parser.parse_string("_('ok');\nconst = ;", "a.js")

        assert [m.text for m in extractor.get_messages()] == ["ok"]

    def test_conflict_surfaces_from_parser(self, extractor: GettextExtractor) -> None:
        parser = extractor.create_js_parser([
            js_extractors.call_expression("_n", {"arguments": {"text": 0, "text_plural": 1}}),
        ])

        with pytest.raises(MergeConflictError, match="Foos"):
            parser.parse_string("_n('Foo', 'Foos');\n_n('Foo', 'Bars');", "a.js")


class TestAddMessage:
    """Adding messages by hand."""

    def test_add_dict(self, extractor: GettextExtractor) -> None:
        extractor.add_message({"text": "Foo", "context": "Ctx", "references": ["manual:1"]})

        [message] = extractor.get_messages_by_context("Ctx")
        assert message.text == "Foo"
        assert message.references == ["manual:1"]

    def test_add_fragment(self, extractor: GettextExtractor) -> None:
        extractor.add_message(Fragment("Foo", text_plural="Foos", comments=["hand made"]))

        [message] = extractor.get_messages()
        assert message.text_plural == "Foos"
        assert message.comments == ["hand made"]
        assert extractor.get_stats().number_of_plural_messages == 1

    @pytest.mark.parametrize(
        "message",
        [
            {},
            {"text": 42},
            {"text": "Foo", "references": "a.js:1"},
            {"text": "Foo", "unknown": True},
            None,
        ],
    )
    def test_invalid_message(self, extractor: GettextExtractor, message) -> None:
        with pytest.raises(ConfigurationError):
            extractor.add_message(message)

    def test_conflict(self, extractor: GettextExtractor) -> None:
        extractor.add_message({"text": "Foo", "text_plural": "Foos"})

        with pytest.raises(MergeConflictError):
            extractor.add_message({"text": "Foo", "text_plural": "Bars"})


class TestOutput:
    """POT output and statistics."""

    def test_get_pot_string(self, extractor: GettextExtractor) -> None:
        extractor.add_message({"text": "Foo", "references": ["a.js:1"]})

        output = extractor.get_pot_string({"Project-Id-Version": "demo"})

        assert 'msgid "Foo"' in output
        assert "#: a.js:1" in output
        assert '"Project-Id-Version: demo\\n"' in output

    def test_save_pot_file(self, extractor: GettextExtractor, temp_dir: Path) -> None:
        extractor.add_message({"text": "Foo"})
        path = temp_dir / "out" / "messages.pot"

        extractor.save_pot_file(path)

        assert [entry.msgid for entry in polib.pofile(str(path))] == ["Foo"]

    def test_save_pot_file_async(self, extractor: GettextExtractor, temp_dir: Path) -> None:
        extractor.add_message({"text": "Foo"})
        path = temp_dir / "messages.pot"

        asyncio.run(extractor.save_pot_file_async(str(path)))

        assert 'msgid "Foo"' in path.read_text(encoding="utf-8")

    @pytest.mark.parametrize("file_name", [None, ""])
    def test_save_without_file_name(self, extractor: GettextExtractor, file_name) -> None:
        with pytest.raises(ConfigurationError):
            extractor.save_pot_file(file_name)

    def test_print_stats(self, extractor: GettextExtractor, capsys: pytest.CaptureFixture[str]) -> None:
        extractor.add_message({"text": "Foo"})
        extractor.add_message({"text": "Foo"})
        extractor.add_message({"text": "Bar"})

        extractor.print_stats()

        output = capsys.readouterr().out
        assert "2 messages extracted" in output
        assert "3 total usages" in output
        assert "0 files (0 with messages)" in output
        assert "1 message context" in output
