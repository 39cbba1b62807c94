"""Parser for JavaScript, JSX, TypeScript and TSX sources."""

from typing import Any

from potextract.catalog.builder import CatalogBuilder
from potextract.errors import ConfigurationError, SourceError
from potextract.models.messages import ExtractorStats, Fragment
from potextract.parsers.base import ParsedDocument, Parser, first_error_line
from potextract.parsers.js.extractors import JsExtractor
from potextract.parsers.languages import JS_LANGUAGES, detect_js_language, parse_tree


class JsParser(Parser[JsExtractor]):
    """Walks tree-sitter JS/TS trees and runs the registered extractors.

    Args:
        builder: Catalog that receives the extracted messages.
        extractors: Initial extractor callbacks.
        stats: Shared session statistics.
        strict: Raise SourceError when the tree contains syntax errors.
        max_nodes: Optional budget on visited nodes per parse call.
    """

    def __init__(
        self,
        builder: CatalogBuilder,
        extractors: list[JsExtractor] | None = None,
        stats: ExtractorStats | None = None,
        strict: bool = True,
        max_nodes: int | None = None,
    ) -> None:
        super().__init__(builder, extractors, stats, max_nodes)
        self.strict = strict

    def _parse(
        self,
        source: str,
        file_name: str,
        line_number_start: int,
        language: str | None = None,
        **options: Any,
    ) -> list[Fragment]:
        if options:
            raise ConfigurationError(f"Unknown JS parser options: {', '.join(sorted(options))}")
        if language is None:
            language = detect_js_language(file_name)
        elif language not in JS_LANGUAGES:
            raise ConfigurationError(
                f"Option 'language' must be one of {', '.join(JS_LANGUAGES)}, got '{language}'"
            )

        data = source.encode("utf-8")
        tree = parse_tree(language, data)

        if self.strict and tree.root_node.has_error:
            row = first_error_line(tree.root_node)
            line = line_number_start + row if row is not None else None
            raise SourceError(
                f"Syntax error in {file_name}" + (f" at line {line}" if line else ""),
                file_name=file_name,
                line=line,
            )

        document = ParsedDocument(file_name, data, line_number_start)
        return self.walk(tree.root_node, document)
