"""Shared parser machinery: documents, the add-message callback, tree walking.

Concrete parsers (JS, HTML, regex) build a syntax tree and hand it to
`Parser.walk`, which visits every named node in pre-order and calls each
registered extractor with `(node, document, add_message)`.
"""

import glob
from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Generic, Self, TypeVar

from tree_sitter import Node

from potextract.catalog.builder import CatalogBuilder
from potextract.errors import ConfigurationError, SourceError
from potextract.logging import logger, progress_bar
from potextract.models.messages import ExtractorStats, Fragment, MessageData

# File name used for in-memory strings; such messages get no reference.
STRING_LITERAL_FILENAME = "gettext-extractor-string-literal"

AddMessageCallback = Callable[[MessageData], None]

E = TypeVar("E", bound=Callable[..., Any])


@dataclass
class ParsedDocument:
    """One parsed source unit as seen by extractors.

    Attributes:
        file_name: Name used in references.
        source: Source bytes the tree offsets refer to.
        line_number_start: Line of the enclosing file where `source` begins.
    """

    file_name: str
    source: bytes
    line_number_start: int = 1

    def line_of(self, node: Node) -> int:
        """1-based line of `node` in the enclosing file."""
        return self.line_number_start + node.start_point[0]

    def text_of(self, node: Node) -> str:
        """Source text spanned by `node`."""
        return self.source[node.start_byte:node.end_byte].decode("utf-8")


def create_add_message_callback(
    messages: list[Fragment],
    file_name: str,
    get_line_number: Callable[[], int | None],
) -> AddMessageCallback:
    """Build the callback extractors use to emit a message for the current node."""

    def add_message(data: MessageData) -> None:
        line_number = data.line_number
        if line_number is None:
            line_number = get_line_number()
        name = data.file_name or file_name

        references = []
        if name and line_number and name != STRING_LITERAL_FILENAME:
            references.append(f"{name}:{line_number}")

        messages.append(
            Fragment(
                text=data.text,
                text_plural=data.text_plural or None,
                context=data.context or None,
                references=references,
                comments=list(data.comments or []),
            )
        )

    return add_message


class Parser(ABC, Generic[E]):
    """Base class for all parsers.

    A parser feeds every fragment its extractors emit into a shared
    CatalogBuilder and keeps the per-file statistics.
    """

    def __init__(
        self,
        builder: CatalogBuilder,
        extractors: list[E] | None = None,
        stats: ExtractorStats | None = None,
        max_nodes: int | None = None,
    ) -> None:
        self.builder = builder
        self.stats = stats
        self.max_nodes = max_nodes
        self.extractors: list[E] = []
        for extractor in extractors or []:
            self.add_extractor(extractor)

    def add_extractor(self, extractor: E) -> Self:
        """Register another extractor callback."""
        if extractor is None:
            raise ConfigurationError("Missing argument 'extractor'")
        if not callable(extractor):
            raise ConfigurationError(
                f"Invalid extractor function provided. '{extractor!r}' is not a function"
            )
        self.extractors.append(extractor)
        return self

    def parse_string(
        self,
        source: str,
        file_name: str | None = None,
        *,
        line_number_start: int = 1,
        transform_source: Callable[[str], str] | None = None,
        **options: Any,
    ) -> Self:
        """Parse `source` and add every extracted message to the catalog.

        Args:
            source: Text to parse.
            file_name: Name used in references; in-memory strings get none.
            line_number_start: Line of the enclosing file where `source` starts.
            transform_source: Optional hook applied to `source` before parsing.
            **options: Parser-specific options.

        Raises:
            ConfigurationError: On invalid arguments or when no extractors
                are registered.
            SourceError: If the source cannot be parsed.
            MergeConflictError: If a message conflicts with the catalog.
        """
        if not isinstance(source, str):
            raise ConfigurationError("Argument 'source' must be a string")
        if file_name is not None and (not isinstance(file_name, str) or not file_name):
            raise ConfigurationError("Argument 'file_name' must be a non-empty string")
        if isinstance(line_number_start, bool) or not isinstance(line_number_start, int):
            raise ConfigurationError("Option 'line_number_start' must be an integer")
        if transform_source is not None and not callable(transform_source):
            raise ConfigurationError("Option 'transform_source' must be callable")

        if not self.extractors:
            raise ConfigurationError(
                "Missing extractor functions. Provide them when creating the parser "
                "or dynamically add extractors using 'add_extractor()'"
            )

        if transform_source is not None:
            source = transform_source(source)

        name = file_name or STRING_LITERAL_FILENAME
        messages = self._parse(source, name, line_number_start, **options)
        logger.debug("Parsed %s: %d messages", name, len(messages))

        for message in messages:
            self.builder.add_message(message)

        if self.stats is not None:
            self.stats.number_of_parsed_files += 1
            if messages:
                self.stats.number_of_parsed_files_with_messages += 1

        return self

    def parse_file(self, file_name: str | Path, **options: Any) -> Self:
        """Read a UTF-8 file and parse it."""
        if not file_name:
            raise ConfigurationError("Argument 'file_name' must be a non-empty string")
        source = Path(file_name).read_text(encoding="utf-8")
        return self.parse_string(source, str(file_name), **options)

    def parse_files_glob(self, pattern: str, **options: Any) -> Self:
        """Parse every file matching a glob pattern (``**`` recurses)."""
        if not isinstance(pattern, str) or not pattern:
            raise ConfigurationError("Argument 'pattern' must be a non-empty string")

        file_names = sorted(
            name for name in glob.glob(pattern, recursive=True) if Path(name).is_file()
        )
        logger.info("Pattern %s matched %d files", pattern, len(file_names))

        for file_name in progress_bar(file_names, desc="Parsing", total=len(file_names), unit="files"):
            self.parse_file(file_name, **options)
        return self

    def walk(self, root: Node, document: ParsedDocument) -> list[Fragment]:
        """Visit `root` and its named descendants in pre-order.

        Returns:
            All fragments emitted by the extractors, in visiting order.

        Raises:
            SourceError: If the tree exceeds the `max_nodes` budget.
        """
        messages: list[Fragment] = []
        stack = [root]
        visited = 0

        while stack:
            node = stack.pop()
            visited += 1
            if self.max_nodes is not None and visited > self.max_nodes:
                raise SourceError(
                    f"Node budget of {self.max_nodes} exceeded while walking {document.file_name}",
                    file_name=document.file_name,
                )

            add_message = create_add_message_callback(
                messages,
                document.file_name,
                lambda node=node: document.line_of(node),
            )
            for extractor in self.extractors:
                extractor(node, document, add_message)

            stack.extend(reversed(node.named_children))

        return messages

    @abstractmethod
    def _parse(
        self,
        source: str,
        file_name: str,
        line_number_start: int,
        **options: Any,
    ) -> list[Fragment]:
        """Parse `source` and return the fragments the extractors produced."""


def first_error_line(root: Node) -> int | None:
    """0-based row of the first ERROR or MISSING node below `root`."""
    stack = [root]
    while stack:
        node = stack.pop()
        if node.is_error or node.is_missing:
            return node.start_point[0]
        if node.has_error:
            stack.extend(reversed(node.children))
    return None
