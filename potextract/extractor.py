"""GettextExtractor: one extraction session.

A session owns a CatalogBuilder and its statistics. Parsers created through
the session share both, so every file they parse lands in the same catalog.

Example:
    extractor = GettextExtractor()
    extractor.create_js_parser([
        js_extractors.call_expression("_", {"arguments": {"text": 0}}),
    ]).parse_files_glob("src/**/*.ts")
    extractor.save_pot_file("messages.pot")
"""

import asyncio
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, StrictStr

from potextract.catalog.builder import CatalogBuilder
from potextract.catalog.serializer import save_pot_file, to_pot_string
from potextract.models.messages import Context, ExtractorStats, Fragment, Message
from potextract.models.options import require_non_empty_string, validate_options
from potextract.parsers.html.extractors import HtmlExtractor
from potextract.parsers.html.parser import HtmlParser
from potextract.parsers.js.extractors import JsExtractor
from potextract.parsers.js.parser import JsParser
from potextract.parsers.regex import RegexExtractor, RegexParser
from potextract.utils.output import StatsOutput


class FragmentInput(BaseModel):
    """Validation model for messages added by hand."""

    model_config = ConfigDict(extra="forbid")

    text: StrictStr
    text_plural: StrictStr | None = None
    context: StrictStr | None = None
    references: list[StrictStr] = Field(default_factory=list)
    comments: list[StrictStr] = Field(default_factory=list)


class GettextExtractor:
    """Collects messages from any number of parsers into one catalog."""

    def __init__(self) -> None:
        self.stats = ExtractorStats()
        self.builder = CatalogBuilder(self.stats)

    def create_js_parser(self, extractors: list[JsExtractor] | None = None, **kwargs: Any) -> JsParser:
        """Create a JS/TS parser bound to this session (kwargs go to JsParser)."""
        return JsParser(self.builder, extractors, self.stats, **kwargs)

    def create_html_parser(
        self, extractors: list[HtmlExtractor] | None = None, **kwargs: Any
    ) -> HtmlParser:
        return HtmlParser(self.builder, extractors, self.stats, **kwargs)

    def create_regex_parser(self, extractors: list[RegexExtractor] | None = None) -> RegexParser:
        return RegexParser(self.builder, extractors, self.stats)

    def add_message(self, message: Fragment | dict[str, Any]) -> None:
        """Add a message directly, bypassing the parsers.

        Raises:
            ConfigurationError: If `message` does not have the fragment shape.
            MergeConflictError: If its plural conflicts with the catalog.
        """
        if isinstance(message, Fragment):
            message = {
                "text": message.text,
                "text_plural": message.text_plural,
                "context": message.context,
                "references": message.references,
                "comments": message.comments,
            }
        data = validate_options(FragmentInput, message, "message")
        self.builder.add_message(Fragment(**data.model_dump()))

    def get_messages(self) -> list[Message]:
        return self.builder.get_messages()

    def get_contexts(self) -> list[Context]:
        return self.builder.get_contexts()

    def get_messages_by_context(self, context: str) -> list[Message]:
        return self.builder.get_messages_by_context(context)

    def get_pot_string(self, headers: dict[str, str] | None = None) -> str:
        """Render the catalog as POT text."""
        return to_pot_string(self.get_messages(), headers)

    def save_pot_file(self, file_name: str | Path, headers: dict[str, str] | None = None) -> None:
        require_non_empty_string(str(file_name) if file_name else file_name, "file_name")
        save_pot_file(file_name, self.get_messages(), headers)

    async def save_pot_file_async(
        self, file_name: str | Path, headers: dict[str, str] | None = None
    ) -> None:
        """Like save_pot_file, with the write done in a worker thread."""
        require_non_empty_string(str(file_name) if file_name else file_name, "file_name")
        messages = self.get_messages()
        await asyncio.to_thread(save_pot_file, file_name, messages, headers)

    def get_stats(self) -> ExtractorStats:
        return self.stats

    def print_stats(self) -> None:
        StatsOutput(self.stats).print()
