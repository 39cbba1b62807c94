"""Normalization of raw extracted text (element content, literals, attributes)."""

import re

from potextract.models.options import ContentOptions

# Leading blank run (non-greedy), then the first content line with its
# indentation up to the last non-whitespace character, then trailing whitespace.
_INDENTED_CONTENT_RE = re.compile(r"^\s*?([ \t]*\S[\s\S]*?)\s*$")
_LINE_INDENT_RE = re.compile(r"^[ \t]+", re.MULTILINE)


def normalize_content(content: str, options: ContentOptions) -> str:
    """Normalize line endings, whitespace and indentation of `content`.

    Order: line endings, trimming, de-indentation, newline replacement.

    Args:
        content: Raw text as found in the source.
        options: Resolved content options.

    Returns:
        The normalized text.
    """
    content = content.replace("\r\n", "\n")

    if options.trim_white_space:
        if options.preserve_indentation:
            content = _INDENTED_CONTENT_RE.sub(r"\1", content)
        else:
            content = content.strip()

    if not options.preserve_indentation:
        content = _LINE_INDENT_RE.sub("", content)

    if isinstance(options.replace_new_lines, str):
        content = content.replace("\n", options.replace_new_lines)

    return content
