"""Helpers for reading tree-sitter HTML trees."""

import html
import re
from dataclasses import dataclass, field

from tree_sitter import Node

from potextract.models.options import ContentOptions
from potextract.utils.content import normalize_content

ELEMENT_TYPES = frozenset({"element", "script_element", "style_element"})
_START_TAG_TYPES = frozenset({"start_tag", "self_closing_tag"})
_MARKUP_RE = re.compile(r"(<!--.*?-->|</?[A-Za-z][^>]*>)", re.DOTALL)


@dataclass
class HtmlAttribute:
    """An attribute with its entity-decoded value ("" when it has no value)."""

    name: str
    value: str = ""
    node: Node | None = None


@dataclass
class HtmlElement:
    """Tag name and attributes of one element, as matched by selectors."""

    tag_name: str
    attributes: list[HtmlAttribute] = field(default_factory=list)
    node: Node | None = None

    @classmethod
    def from_node(cls, node: Node) -> "HtmlElement | None":
        """Build an HtmlElement from an element node, or None for other nodes."""
        if node.type not in ELEMENT_TYPES:
            return None

        start_tag = get_start_tag(node)
        if start_tag is None:
            return None

        tag_name = ""
        attributes: list[HtmlAttribute] = []
        seen: set[str] = set()
        for child in start_tag.named_children:
            if child.type == "tag_name":
                tag_name = child.text.decode("utf-8").lower()
            elif child.type == "attribute":
                attribute = _read_attribute(child)
                # Repeated attributes are ignored, the first one wins
                if attribute is not None and attribute.name not in seen:
                    seen.add(attribute.name)
                    attributes.append(attribute)

        return cls(tag_name=tag_name, attributes=attributes, node=node)

    def get_attribute(self, name: str) -> str | None:
        """Value of attribute `name`, or None when the element lacks it."""
        name = name.lower()
        for attribute in self.attributes:
            if attribute.name == name:
                return attribute.value
        return None


def _read_attribute(node: Node) -> HtmlAttribute | None:
    name = None
    value = ""
    for child in node.named_children:
        if child.type == "attribute_name":
            name = child.text.decode("utf-8").lower()
        elif child.type == "attribute_value":
            value = child.text.decode("utf-8")
        elif child.type == "quoted_attribute_value":
            inner = [c for c in child.named_children if c.type == "attribute_value"]
            value = inner[0].text.decode("utf-8") if inner else ""
    if name is None:
        return None
    return HtmlAttribute(name=name, value=html.unescape(value), node=node)


def get_start_tag(element: Node) -> Node | None:
    for child in element.children:
        if child.type in _START_TAG_TYPES:
            return child
    return None


def get_raw_element_content(element: Node, source: bytes) -> str:
    """Source text between the start tag and the end tag of `element`."""
    start_tag = get_start_tag(element)
    if start_tag is None or start_tag.type == "self_closing_tag":
        return ""

    end = element.end_byte
    for child in element.children:
        if child.type == "end_tag":
            end = child.start_byte
            break

    return source[start_tag.end_byte:end].decode("utf-8")


def _decode_text(text: str) -> str:
    # Non-breaking spaces stay visible to translators as the entity
    return html.unescape(text).replace("\xa0", "&nbsp;")


def get_element_content(element: Node, source: bytes, options: ContentOptions) -> str:
    """Inner markup of `element`, normalized.

    Character references in text are decoded; nested tags, comments and
    their attributes are kept as written.
    """
    content = get_raw_element_content(element, source)
    parts = _MARKUP_RE.split(content)
    # Odd indices hold the markup captured by the split
    content = "".join(part if i % 2 else _decode_text(part) for i, part in enumerate(parts))
    return normalize_content(content, options)


def get_normalized_attribute_value(
    element: HtmlElement,
    name: str,
    options: ContentOptions,
) -> str | None:
    value = element.get_attribute(name)
    if value is None:
        return None
    return normalize_content(value, options)
