"""Error types raised during message extraction.

Three families, mirroring when they can happen:
- ConfigurationError: bad extractor options, invalid selectors, missing
  extractors. Raised at setup or before any traversal starts.
- MergeConflictError: the catalog was asked to merge two different plural
  forms for the same message. Raised by CatalogBuilder.add_message.
- SourceError: the parsed document could not be turned into a usable tree.
"""


class ExtractionError(Exception):
    """Base class for all extraction errors."""

    pass


class ConfigurationError(ExtractionError, ValueError):
    """Invalid extractor, parser, or selector configuration."""

    pass


class SelectorError(ConfigurationError):
    """Selector string could not be parsed or uses unsupported syntax."""

    pass


class MergeConflictError(ExtractionError):
    """Two fragments for the same message disagree on the plural form.

    Attributes:
        text: The message text both fragments share.
        context: The message context ("" for the default context).
        existing_plural: Plural already stored in the catalog.
        incoming_plural: Plural carried by the rejected fragment.
    """

    def __init__(
        self,
        text: str,
        context: str,
        existing_plural: str,
        incoming_plural: str,
    ) -> None:
        self.text = text
        self.context = context
        self.existing_plural = existing_plural
        self.incoming_plural = incoming_plural
        super().__init__(
            f"Incompatible plurals found for '{text}' "
            f"('{existing_plural}' and '{incoming_plural}')"
        )


class SourceError(ExtractionError):
    """A source document could not be parsed.

    Attributes:
        file_name: Name of the document that failed.
        line: 1-based line of the first problem, if known.
    """

    def __init__(self, message: str, file_name: str | None = None, line: int | None = None) -> None:
        self.file_name = file_name
        self.line = line
        super().__init__(message)
