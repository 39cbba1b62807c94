"""potextract - gettext message extraction for JavaScript, TypeScript and HTML."""

# Keep in sync with pyproject.toml [project] version.
__version__ = "0.1.0"

from potextract.catalog.builder import CatalogBuilder  # noqa: E402
from potextract.errors import (  # noqa: E402
    ConfigurationError,
    ExtractionError,
    MergeConflictError,
    SelectorError,
    SourceError,
)
from potextract.extractor import GettextExtractor  # noqa: E402
from potextract.models.messages import (  # noqa: E402
    Context,
    ExtractorStats,
    Fragment,
    Message,
    MessageData,
)
from potextract.parsers.html import extractors as html_extractors  # noqa: E402
from potextract.parsers.js import extractors as js_extractors  # noqa: E402
from potextract.parsers.regex import add_condition  # noqa: E402

__all__ = [
    "CatalogBuilder",
    "ConfigurationError",
    "Context",
    "ExtractionError",
    "ExtractorStats",
    "Fragment",
    "GettextExtractor",
    "MergeConflictError",
    "Message",
    "MessageData",
    "SelectorError",
    "SourceError",
    "add_condition",
    "html_extractors",
    "js_extractors",
]
