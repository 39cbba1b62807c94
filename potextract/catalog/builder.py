"""Catalog builder: merges raw fragments into a deduplicated message catalog.

The catalog is a mapping context name -> message text -> Message. It only ever
grows during a session: fragments are merged in, nothing is removed. Read-out
methods return sorted snapshots.
"""

from potextract.errors import MergeConflictError
from potextract.logging import logger
from potextract.models.messages import (
    DEFAULT_CONTEXT,
    Context,
    ExtractorStats,
    Fragment,
    Message,
)


def _extend_unique(items: list[str], new_items: list[str]) -> None:
    """Append the items not yet present, keeping first-seen order."""
    seen = set(items)
    for item in new_items:
        if item not in seen:
            items.append(item)
            seen.add(item)


def _normalize_fragment(fragment: Fragment) -> Message:
    """Turn a fragment into a standalone Message with default fields filled in."""
    message = Message(
        text=fragment.text,
        text_plural=fragment.text_plural or None,
        context=fragment.context or DEFAULT_CONTEXT,
    )
    _extend_unique(message.references, fragment.references or [])
    _extend_unique(message.comments, fragment.comments or [])
    return message


def _merge_into(message: Message, incoming: Message) -> None:
    """Merge `incoming` into the stored `message` in place."""
    if incoming.text:
        message.text = incoming.text
    if incoming.text_plural:
        message.text_plural = incoming.text_plural
    if incoming.context:
        message.context = incoming.context
    _extend_unique(message.references, incoming.references)
    _extend_unique(message.comments, incoming.comments)


class CatalogBuilder:
    """Aggregates fragments for one extraction session.

    Not safe for concurrent mutation; a session has a single writer and is
    read out only after all fragments have been added.
    """

    def __init__(self, stats: ExtractorStats | None = None) -> None:
        self.stats = stats
        self._contexts: dict[str, dict[str, Message]] = {}

    def add_message(self, fragment: Fragment) -> None:
        """Merge one fragment into the catalog.

        Args:
            fragment: The extracted fragment. `text` is required.

        Raises:
            MergeConflictError: If the fragment's plural differs from the
                plural already stored for the same (context, text). The
                catalog is left untouched in that case.
        """
        incoming = _normalize_fragment(fragment)
        existing = self._contexts.get(incoming.context, {}).get(incoming.text)

        if existing is not None:
            if (
                incoming.text_plural
                and existing.text_plural
                and existing.text_plural != incoming.text_plural
            ):
                logger.debug(
                    "Rejecting plural %r for %r (already %r)",
                    incoming.text_plural,
                    incoming.text,
                    existing.text_plural,
                )
                raise MergeConflictError(
                    incoming.text,
                    incoming.context,
                    existing.text_plural,
                    incoming.text_plural,
                )

            if incoming.text_plural and not existing.text_plural and self.stats is not None:
                self.stats.number_of_plural_messages += 1

            _merge_into(existing, incoming)
        else:
            messages = self._get_or_create_context(incoming.context)
            messages[incoming.text] = incoming

            if self.stats is not None:
                self.stats.number_of_messages += 1
                if incoming.text_plural:
                    self.stats.number_of_plural_messages += 1

        if self.stats is not None:
            self.stats.number_of_message_usages += 1

    def get_messages(self) -> list[Message]:
        """Return all messages, grouped by sorted context, sorted by text."""
        messages: list[Message] = []
        for name in sorted(self._contexts):
            messages.extend(self.get_messages_by_context(name))
        return messages

    def get_contexts(self) -> list[Context]:
        """Return every context with its sorted messages, sorted by name."""
        return [
            Context(name=name, messages=self.get_messages_by_context(name))
            for name in sorted(self._contexts)
        ]

    def get_messages_by_context(self, context: str) -> list[Message]:
        """Return the sorted messages of one context, or [] if it is unknown."""
        messages = self._contexts.get(context)
        if not messages:
            return []
        return [messages[text].copy() for text in sorted(messages)]

    def _get_or_create_context(self, context: str) -> dict[str, Message]:
        if context not in self._contexts:
            self._contexts[context] = {}
            if self.stats is not None:
                self.stats.number_of_contexts += 1
        return self._contexts[context]
