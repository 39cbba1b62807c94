"""Message data models shared by parsers, the catalog builder and serializers."""

from dataclasses import dataclass, field, replace

DEFAULT_CONTEXT = ""


@dataclass
class Fragment:
    """A single raw extraction event, before it is merged into the catalog.

    None means "absent". For context, absent and "" both land in the default
    context; for text_plural an empty string never overrides a stored plural.
    """

    text: str
    text_plural: str | None = None
    context: str | None = None
    references: list[str] = field(default_factory=list)
    comments: list[str] = field(default_factory=list)


@dataclass
class Message:
    """A catalog-resident message, unique per (context, text)."""

    text: str
    text_plural: str | None = None
    context: str = DEFAULT_CONTEXT
    references: list[str] = field(default_factory=list)
    comments: list[str] = field(default_factory=list)

    def copy(self) -> "Message":
        """Return a snapshot that does not share lists with this message."""
        return replace(self, references=list(self.references), comments=list(self.comments))


@dataclass
class Context:
    """A named partition of the catalog with its sorted messages."""

    name: str
    messages: list[Message] = field(default_factory=list)


@dataclass
class MessageData:
    """What an extractor callback hands to the walker's add-message callback.

    line_number and file_name are filled in by the walker when left empty.
    """

    text: str
    text_plural: str | None = None
    context: str | None = None
    line_number: int | None = None
    file_name: str | None = None
    comments: list[str] = field(default_factory=list)


@dataclass
class ExtractorStats:
    """Running counters for one extraction session."""

    number_of_messages: int = 0
    number_of_plural_messages: int = 0
    number_of_message_usages: int = 0
    number_of_contexts: int = 0
    number_of_parsed_files: int = 0
    number_of_parsed_files_with_messages: int = 0
