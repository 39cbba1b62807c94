"""Regex based extraction for sources without a usable grammar.

Extractors here get the raw text instead of a syntax tree:
`extractor(source, document, add_message)`.
"""

import re
from collections.abc import Callable
from typing import Any

from potextract.errors import ConfigurationError
from potextract.models.messages import Fragment, MessageData
from potextract.parsers.base import (
    AddMessageCallback,
    ParsedDocument,
    Parser,
    create_add_message_callback,
)

RegexExtractor = Callable[[str, ParsedDocument, AddMessageCallback], None]
GroupRef = int | str


def _check_group(value: Any, name: str, required: bool) -> GroupRef | None:
    if value is None:
        if required:
            raise ConfigurationError(f"Missing argument '{name}'")
        return None
    if isinstance(value, bool) or not isinstance(value, (int, str)):
        raise ConfigurationError(f"Argument '{name}' must be a group number or group name")
    if isinstance(value, int) and value < 0:
        raise ConfigurationError(f"Argument '{name}' must not be negative")
    return value


def add_condition(
    regex: re.Pattern[str] | str,
    text: GroupRef,
    text_plural: GroupRef | None = None,
) -> RegexExtractor:
    r"""Emit a message for every match of `regex`.

    Args:
        regex: Pattern, or a string compiled with ``re.MULTILINE``.
        text: Group holding the message text.
        text_plural: Group holding the plural, if any.

    Example:
        add_condition(r"\$t\('([^']+)'\)", 1)
    """
    if isinstance(regex, str):
        regex = re.compile(regex, re.MULTILINE)
    if not isinstance(regex, re.Pattern):
        raise ConfigurationError("Argument 'regex' must be a regular expression")
    text = _check_group(text, "text", required=True)
    text_plural = _check_group(text_plural, "text_plural", required=False)

    for group in (text, text_plural):
        if isinstance(group, str) and group not in regex.groupindex:
            raise ConfigurationError(f"Pattern has no group named '{group}'")
        if isinstance(group, int) and group > regex.groups:
            raise ConfigurationError(f"Pattern has no group {group}")

    def extractor(source: str, document: ParsedDocument, add_message: AddMessageCallback) -> None:
        for match in regex.finditer(source):
            value = match.group(text)
            if value is None:
                continue
            message = MessageData(
                text=value,
                line_number=document.line_number_start + source.count("\n", 0, match.start()),
            )
            if text_plural is not None:
                message.text_plural = match.group(text_plural)
            add_message(message)

    return extractor


class RegexParser(Parser[RegexExtractor]):
    """Runs regex extractors over the raw source text."""

    def _parse(
        self,
        source: str,
        file_name: str,
        line_number_start: int,
        **options: Any,
    ) -> list[Fragment]:
        if options:
            raise ConfigurationError(f"Unknown regex parser options: {', '.join(sorted(options))}")

        source = source.replace("\r\n", "\n")
        document = ParsedDocument(file_name, source.encode("utf-8"), line_number_start)
        messages: list[Fragment] = []
        add_message = create_add_message_callback(messages, file_name, lambda: None)

        for extractor in self.extractors:
            extractor(source, document, add_message)

        return messages
