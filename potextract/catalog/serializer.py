"""Render catalog messages as a gettext POT file."""

from collections.abc import Iterable
from pathlib import Path

import polib

from potextract.logging import logger
from potextract.models.messages import DEFAULT_CONTEXT, Message

DEFAULT_HEADERS = {
    "Content-Type": "text/plain; charset=UTF-8",
}


def _occurrence(reference: str) -> tuple[str, str]:
    """Split "file:line" on the last colon; other references keep no line."""
    path, sep, line = reference.rpartition(":")
    if sep and path and line.isdigit():
        return path, line
    return reference, ""


class ReferenceLinesEntry(polib.POEntry):
    """POEntry that writes each reference on its own "#:" line, unwrapped."""

    def __unicode__(self, wrapwidth=78):
        occurrences = self.occurrences
        self.occurrences = []
        try:
            lines = super().__unicode__(wrapwidth).split("\n")
        finally:
            self.occurrences = occurrences

        # References go after the extracted and translator comments
        position = 0
        while position < len(lines) and lines[position].startswith(("#.", "# ")):
            position += 1
        references = [f"#: {path}:{line}" if line else f"#: {path}" for path, line in occurrences]
        lines[position:position] = references
        return "\n".join(lines)

    def __str__(self):
        return self.__unicode__()


def to_po_entry(message: Message) -> polib.POEntry:
    entry = ReferenceLinesEntry(
        msgid=message.text,
        comment="\n".join(message.comments),
        occurrences=[_occurrence(reference) for reference in sorted(message.references)],
    )
    if message.text_plural:
        entry.msgid_plural = message.text_plural
        entry.msgstr_plural = {0: "", 1: ""}
    if message.context != DEFAULT_CONTEXT:
        entry.msgctxt = message.context
    return entry


def build_po_file(
    messages: Iterable[Message],
    headers: dict[str, str] | None = None,
    wrapwidth: int = 78,
) -> polib.POFile:
    """Build a POFile with one entry per message, in the given order.

    Args:
        messages: Sorted catalog messages.
        headers: Header fields merged over the default Content-Type header.
        wrapwidth: Line width polib wraps long strings at.
    """
    pofile = polib.POFile(wrapwidth=wrapwidth)
    pofile.metadata = {**DEFAULT_HEADERS, **(headers or {})}

    for message in messages:
        pofile.append(to_po_entry(message))
    return pofile


def to_pot_string(
    messages: Iterable[Message],
    headers: dict[str, str] | None = None,
    wrapwidth: int = 78,
) -> str:
    return str(build_po_file(messages, headers, wrapwidth))


def save_pot_file(
    path: str | Path,
    messages: Iterable[Message],
    headers: dict[str, str] | None = None,
    wrapwidth: int = 78,
) -> None:
    """Write the POT file to `path`, creating parent directories."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    pofile = build_po_file(messages, headers, wrapwidth)
    pofile.save(str(path))
    logger.info("Wrote %d messages to %s", len(pofile), path)
