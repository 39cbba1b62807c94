"""Extractor factories for JavaScript / TypeScript trees.

Each factory validates its options once and returns a callback with the
walker signature `(node, document, add_message)`.
"""

from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from tree_sitter import Node

from potextract.errors import ConfigurationError
from potextract.models.messages import MessageData
from potextract.models.options import (
    ArgumentMapping,
    CallExpressionOptions,
    ContentOptions,
    get_content_options,
    validate_options,
)
from potextract.parsers.base import AddMessageCallback, ParsedDocument
from potextract.parsers.js.comments import extract_comments
from potextract.parsers.js.utils import (
    callee_name_matches,
    get_call_arguments,
    get_string_value,
)
from potextract.utils.content import normalize_content

if TYPE_CHECKING:
    from potextract.parsers.html.parser import HtmlParser

JsExtractor = Callable[[Node, ParsedDocument, AddMessageCallback], None]


def _argument_at(arguments: list[Node], index: int | None) -> Node | None:
    if index is None or index >= len(arguments):
        return None
    return arguments[index]


def extract_arguments(
    call: Node,
    mapping: ArgumentMapping,
    content_options: ContentOptions,
) -> MessageData | None:
    """Read text, plural and context from the mapped argument positions.

    Returns:
        The message data, or None when the text argument (or the plural
        argument, if one is mapped) is not a literal string.
    """
    arguments = get_call_arguments(call)

    text = get_string_value(_argument_at(arguments, mapping.text))
    text_plural = get_string_value(_argument_at(arguments, mapping.text_plural))
    context = get_string_value(_argument_at(arguments, mapping.context))

    if text is None:
        return None
    if mapping.text_plural is not None and text_plural is None:
        return None

    message = MessageData(text=normalize_content(text, content_options))
    if text_plural is not None:
        message.text_plural = normalize_content(text_plural, content_options)
    if context is not None:
        message.context = normalize_content(context, content_options)
    return message


def _callee_names(callee_name: str | list[str] | tuple[str, ...]) -> list[str]:
    if callee_name is None:
        raise ConfigurationError("Missing argument 'callee_name'")
    if isinstance(callee_name, str):
        names = [callee_name]
    elif isinstance(callee_name, (list, tuple)):
        names = list(callee_name)
    else:
        names = []
    if not names or any(not isinstance(name, str) or not name for name in names):
        raise ConfigurationError(
            "Argument 'callee_name' must be a non-empty string or a list containing non-empty strings"
        )
    return names


def call_expression(
    callee_name: str | list[str],
    options: CallExpressionOptions | dict[str, Any],
) -> JsExtractor:
    """Extract messages from calls to one of `callee_name`.

    Args:
        callee_name: Dotted callee path (``_``, ``i18n.gettext``,
            ``[this].translate``) or a list of alternatives.
        options: Argument positions plus optional comment and content options.

    Example:
        call_expression("_n", {"arguments": {"text": 0, "text_plural": 1}})
    """
    names = _callee_names(callee_name)
    if options is None:
        raise ConfigurationError("Missing argument 'options'")
    options = validate_options(CallExpressionOptions, options)
    content_options = get_content_options(
        options.content,
        trim_white_space=False,
        preserve_indentation=True,
        replace_new_lines=False,
    )

    def extractor(node: Node, document: ParsedDocument, add_message: AddMessageCallback) -> None:
        if node.type != "call_expression":
            return
        if not any(callee_name_matches(name, node) for name in names):
            return

        message = extract_arguments(node, options.arguments, content_options)
        if message is None:
            return

        message.comments = extract_comments(node, document.source, options.comments)
        add_message(message)

    return extractor


def html_template(html_parser: "HtmlParser") -> JsExtractor:
    """Parse substitution-free template literals as HTML.

    References of messages found in the template point at lines of the
    enclosing JS file.
    """
    if html_parser is None:
        raise ConfigurationError("Missing argument 'html_parser'")

    def extractor(node: Node, document: ParsedDocument, add_message: AddMessageCallback) -> None:
        if node.type != "template_string":
            return
        if any(child.type == "template_substitution" for child in node.named_children):
            return

        content = node.text.decode("utf-8")[1:-1]
        html_parser.parse_string(
            content,
            document.file_name,
            line_number_start=document.line_of(node),
        )

    return extractor
