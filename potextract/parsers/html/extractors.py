"""Extractor factories for HTML trees."""

import re
from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from tree_sitter import Node

from potextract.errors import ConfigurationError
from potextract.models.messages import MessageData
from potextract.models.options import (
    ContentOptions,
    ElementOptions,
    get_content_options,
    require_non_empty_string,
    validate_options,
)
from potextract.parsers.base import AddMessageCallback, ParsedDocument
from potextract.parsers.html.selector import ElementSelector, ElementSelectorSet
from potextract.parsers.html.utils import (
    HtmlAttribute,
    HtmlElement,
    get_element_content,
    get_normalized_attribute_value,
    get_raw_element_content,
)

if TYPE_CHECKING:
    from potextract.parsers.js.parser import JsParser

HtmlExtractor = Callable[[Node, ParsedDocument, AddMessageCallback], None]
TextExtractor = Callable[[HtmlElement, ParsedDocument], str | None]
AttributePredicate = Callable[[HtmlAttribute], bool]

SelectorArgument = str | list[ElementSelector | dict[str, Any]]


def _selector_set(selector: SelectorArgument) -> ElementSelectorSet:
    if selector is None:
        raise ConfigurationError("Missing argument 'selector'")
    if isinstance(selector, str):
        require_non_empty_string(selector, "selector")
    return ElementSelectorSet(selector)


def element_extractor(
    selector: SelectorArgument,
    text_extractor: TextExtractor,
    options: ElementOptions,
    content_options: ContentOptions,
) -> HtmlExtractor:
    """Shared body of the element content and element attribute extractors.

    Plural, context and comment attributes are normalized with
    `content_options`; empty values count as absent.
    """
    selectors = _selector_set(selector)
    attributes = options.attributes

    def extractor(node: Node, document: ParsedDocument, add_message: AddMessageCallback) -> None:
        element = HtmlElement.from_node(node)
        if element is None or not selectors.any_match(element):
            return

        context = None
        text_plural = None
        comments = []

        if attributes is not None:
            if attributes.context:
                context = get_normalized_attribute_value(element, attributes.context, content_options) or None
            if attributes.text_plural:
                text_plural = (
                    get_normalized_attribute_value(element, attributes.text_plural, content_options) or None
                )
            if attributes.comment:
                comment = get_normalized_attribute_value(element, attributes.comment, content_options)
                if comment:
                    comments.append(comment)

        text = text_extractor(element, document)
        if isinstance(text, str):
            add_message(
                MessageData(text=text, text_plural=text_plural, context=context, comments=comments)
            )

    return extractor


def element_content(
    selector: SelectorArgument,
    options: ElementOptions | dict[str, Any] | None = None,
) -> HtmlExtractor:
    """Use the content of matching elements as message text.

    Content is trimmed and de-indented unless `options.content` says otherwise.
    """
    options = validate_options(ElementOptions, options)
    content_options = get_content_options(
        options.content,
        trim_white_space=True,
        preserve_indentation=False,
        replace_new_lines=False,
    )

    def text_extractor(element: HtmlElement, document: ParsedDocument) -> str:
        return get_element_content(element.node, document.source, content_options)

    return element_extractor(selector, text_extractor, options, content_options)


def element_attribute(
    selector: SelectorArgument,
    text_attribute: str,
    options: ElementOptions | dict[str, Any] | None = None,
) -> HtmlExtractor:
    """Use the value of `text_attribute` on matching elements as message text.

    Elements without the attribute are skipped.
    """
    text_attribute = require_non_empty_string(text_attribute, "text_attribute")
    options = validate_options(ElementOptions, options)
    content_options = get_content_options(
        options.content,
        trim_white_space=False,
        preserve_indentation=True,
        replace_new_lines=False,
    )

    def text_extractor(element: HtmlElement, document: ParsedDocument) -> str | None:
        return get_normalized_attribute_value(element, text_attribute, content_options)

    return element_extractor(selector, text_extractor, options, content_options)


def embedded_js(selector: SelectorArgument, js_parser: "JsParser") -> HtmlExtractor:
    """Parse the content of matching elements (usually ``script``) as JS."""
    selectors = _selector_set(selector)
    if js_parser is None:
        raise ConfigurationError("Missing argument 'js_parser'")

    def extractor(node: Node, document: ParsedDocument, add_message: AddMessageCallback) -> None:
        element = HtmlElement.from_node(node)
        if element is None or not selectors.any_match(element):
            return

        source = get_raw_element_content(node, document.source)
        js_parser.parse_string(
            source,
            document.file_name,
            line_number_start=document.line_of(node),
        )

    return extractor


def embedded_attribute_js(
    filter: re.Pattern[str] | str | AttributePredicate,
    js_parser: "JsParser",
) -> HtmlExtractor:
    """Parse attribute values as JS, e.g. ``<b :title="__('Hi')">``.

    Args:
        filter: Regex searched in attribute names, or a predicate on attributes.
        js_parser: Parser that receives each attribute value.
    """
    if filter is None:
        raise ConfigurationError("Missing argument 'filter'")
    if js_parser is None:
        raise ConfigurationError("Missing argument 'js_parser'")

    if isinstance(filter, str):
        filter = re.compile(filter)
    if isinstance(filter, re.Pattern):
        pattern = filter
        test: AttributePredicate = lambda attribute: pattern.search(attribute.name) is not None
    elif callable(filter):
        test = filter
    else:
        raise ConfigurationError("Argument 'filter' must be a regular expression or a function")

    def extractor(node: Node, document: ParsedDocument, add_message: AddMessageCallback) -> None:
        element = HtmlElement.from_node(node)
        if element is None:
            return

        for attribute in element.attributes:
            if not test(attribute):
                continue
            line = document.line_of(attribute.node) if attribute.node is not None else document.line_of(node)
            js_parser.parse_string(attribute.value, document.file_name, line_number_start=line)

    return extractor
