"""HTML parsing, selectors and extractors."""

from potextract.parsers.html import extractors
from potextract.parsers.html.parser import HtmlParser
from potextract.parsers.html.selector import (
    AttributeCondition,
    ElementSelector,
    ElementSelectorSet,
)

__all__ = [
    "AttributeCondition",
    "ElementSelector",
    "ElementSelectorSet",
    "HtmlParser",
    "extractors",
]
