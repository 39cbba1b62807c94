"""Data models for extracted messages and extractor options."""

from potextract.models.messages import (
    DEFAULT_CONTEXT,
    Context,
    ExtractorStats,
    Fragment,
    Message,
    MessageData,
)

__all__ = [
    "DEFAULT_CONTEXT",
    "Context",
    "ExtractorStats",
    "Fragment",
    "Message",
    "MessageData",
]
