"""Element selectors: a single-level subset of CSS.

Supported: tag names, ``#id``, ``.class`` and attribute tests ``[name]``,
``[name=value]``, ``[name^=value]``, ``[name$=value]``, ``[name*=value]``.
A comma separated list forms a set. Selector strings are parsed with
cssselect; anything beyond the subset raises SelectorError.
"""

import re
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any

from cssselect import SelectorError as CssSelectorError
from cssselect import parse
from cssselect.parser import Attrib, Class, CombinedSelector, Element, Hash

from potextract.errors import SelectorError
from potextract.parsers.html.utils import HtmlElement

SUPPORTED_OPERATORS = ("=", "^=", "$=", "*=")


@dataclass
class AttributeCondition:
    """Attribute test; without a value (or regex) only presence is checked."""

    name: str
    operator: str | None = None
    value: str | None = None
    regex: re.Pattern[str] | None = None

    def __post_init__(self) -> None:
        self.name = self.name.lower()
        if self.operator is not None and self.operator not in SUPPORTED_OPERATORS:
            raise SelectorError(f"Unsupported attribute operator '{self.operator}'")

    def matches(self, element: HtmlElement) -> bool:
        actual = element.get_attribute(self.name)
        if actual is None:
            return False

        if self.value:
            if self.operator == "^=":
                return actual.startswith(self.value)
            if self.operator == "$=":
                return actual.endswith(self.value)
            if self.operator == "*=":
                return self.value in actual
            return actual == self.value

        if self.regex is not None:
            return self.regex.search(actual) is not None

        return True


@dataclass
class ElementSelector:
    """One single-level selector. Unset parts match anything."""

    tag_name: str | None = None
    id: str | None = None
    class_names: list[str] = field(default_factory=list)
    attributes: list[AttributeCondition] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.attributes = [
            a if isinstance(a, AttributeCondition) else AttributeCondition(**a)
            for a in self.attributes
        ]

    def matches(self, element: HtmlElement) -> bool:
        return (
            self._tag_name_matches(element)
            and self._id_matches(element)
            and self._class_names_match(element)
            and all(condition.matches(element) for condition in self.attributes)
        )

    def _tag_name_matches(self, element: HtmlElement) -> bool:
        if not self.tag_name:
            return True
        return element.tag_name == self.tag_name.lower()

    def _id_matches(self, element: HtmlElement) -> bool:
        if not self.id:
            return True
        return element.get_attribute("id") == self.id

    def _class_names_match(self, element: HtmlElement) -> bool:
        if not self.class_names:
            return True
        value = element.get_attribute("class")
        if value is None:
            return False
        element_class_names = value.split()
        return all(name in element_class_names for name in self.class_names)


def _token_value(value: Any) -> str | None:
    if value is None:
        return None
    return getattr(value, "value", value)


def _from_parsed_tree(tree: Any, selector_string: str) -> ElementSelector:
    selector = ElementSelector()
    node = tree

    while True:
        if isinstance(node, Element):
            if node.namespace is not None:
                raise SelectorError(f"Selector string '{selector_string}' is invalid. Namespaces are not supported.")
            if node.element and node.element != "*":
                selector.tag_name = node.element.lower()
            return selector

        if isinstance(node, CombinedSelector):
            raise SelectorError(
                f"Selector string '{selector_string}' is invalid. Multi-level rules are not supported."
            )

        if isinstance(node, Hash):
            if selector.id is None:
                selector.id = node.id
            else:
                selector.attributes.insert(0, AttributeCondition("id", "=", node.id))
        elif isinstance(node, Class):
            selector.class_names.insert(0, node.class_name)
        elif isinstance(node, Attrib):
            if node.namespace is not None:
                raise SelectorError(f"Selector string '{selector_string}' is invalid. Namespaces are not supported.")
            if node.operator == "exists":
                condition = AttributeCondition(node.attrib)
            elif node.operator in SUPPORTED_OPERATORS:
                condition = AttributeCondition(node.attrib, node.operator, _token_value(node.value))
            else:
                raise SelectorError(
                    f"Selector string '{selector_string}' is invalid. "
                    f"Attribute operator '{node.operator}' is not supported."
                )
            selector.attributes.insert(0, condition)
        else:
            raise SelectorError(
                f"Selector string '{selector_string}' is invalid. "
                f"'{type(node).__name__}' selectors are not supported."
            )

        node = node.selector


def parse_selectors(selector_string: str) -> list[ElementSelector]:
    """Parse a comma separated selector string.

    Raises:
        SelectorError: On syntax errors or syntax outside the supported subset.
    """
    try:
        parsed = parse(selector_string)
    except CssSelectorError as e:
        raise SelectorError(f"Error parsing selector string: {e}") from e

    selectors = []
    for item in parsed:
        if item.pseudo_element is not None:
            raise SelectorError(
                f"Selector string '{selector_string}' is invalid. Pseudo elements are not supported."
            )
        selectors.append(_from_parsed_tree(item.parsed_tree, selector_string))
    return selectors


class ElementSelectorSet:
    """A set of selectors matched with OR (`any_match`) or AND (`all_match`)."""

    def __init__(self, selectors: str | Iterable[ElementSelector | dict[str, Any]] = ()) -> None:
        self.selectors: list[ElementSelector] = []
        if isinstance(selectors, str):
            self.add_from_string(selectors)
        else:
            for selector in selectors:
                self.add(selector)

    def add(self, selector: ElementSelector | dict[str, Any]) -> None:
        if not isinstance(selector, ElementSelector):
            selector = ElementSelector(**selector)
        self.selectors.append(selector)

    def add_from_string(self, selector_string: str) -> None:
        self.selectors.extend(parse_selectors(selector_string))

    def any_match(self, element: HtmlElement) -> bool:
        return any(selector.matches(element) for selector in self.selectors)

    def all_match(self, element: HtmlElement) -> bool:
        return bool(self.selectors) and all(selector.matches(element) for selector in self.selectors)

    def __len__(self) -> int:
        return len(self.selectors)
