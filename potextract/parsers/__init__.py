"""Parsers that walk source documents and feed extracted messages to a catalog."""

from potextract.parsers.base import (
    STRING_LITERAL_FILENAME,
    ParsedDocument,
    Parser,
)
from potextract.parsers.html import HtmlParser
from potextract.parsers.js import JsParser
from potextract.parsers.regex import RegexParser

__all__ = [
    "HtmlParser",
    "JsParser",
    "ParsedDocument",
    "Parser",
    "RegexParser",
    "STRING_LITERAL_FILENAME",
]
