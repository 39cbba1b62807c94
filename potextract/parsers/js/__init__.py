"""JavaScript / TypeScript parsing and extractors."""

from potextract.parsers.js import extractors
from potextract.parsers.js.parser import JsParser

__all__ = ["JsParser", "extractors"]
