"""Parser for HTML documents and fragments."""

from typing import Any

from potextract.catalog.builder import CatalogBuilder
from potextract.errors import ConfigurationError, SourceError
from potextract.models.messages import ExtractorStats, Fragment
from potextract.parsers.base import ParsedDocument, Parser, first_error_line
from potextract.parsers.html.extractors import HtmlExtractor
from potextract.parsers.languages import parse_tree


class HtmlParser(Parser[HtmlExtractor]):
    """Walks tree-sitter HTML trees and runs the registered extractors.

    HTML recovers from most markup errors, so by default a tree with error
    nodes is walked as is; pass `strict=True` to reject it instead.
    """

    def __init__(
        self,
        builder: CatalogBuilder,
        extractors: list[HtmlExtractor] | None = None,
        stats: ExtractorStats | None = None,
        strict: bool = False,
        max_nodes: int | None = None,
    ) -> None:
        super().__init__(builder, extractors, stats, max_nodes)
        self.strict = strict

    def _parse(
        self,
        source: str,
        file_name: str,
        line_number_start: int,
        **options: Any,
    ) -> list[Fragment]:
        if options:
            raise ConfigurationError(f"Unknown HTML parser options: {', '.join(sorted(options))}")

        data = source.encode("utf-8")
        tree = parse_tree("html", data)

        if self.strict and tree.root_node.has_error:
            row = first_error_line(tree.root_node)
            line = line_number_start + row if row is not None else None
            raise SourceError(
                f"Malformed markup in {file_name}" + (f" at line {line}" if line else ""),
                file_name=file_name,
                line=line,
            )

        document = ParsedDocument(file_name, data, line_number_start)
        return self.walk(tree.root_node, document)
