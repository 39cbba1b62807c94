"""Tree-sitter grammars used by the parsers, loaded once per process."""

from pathlib import Path

import tree_sitter_html as ts_html
import tree_sitter_javascript as ts_javascript
import tree_sitter_typescript as ts_typescript
from tree_sitter import Language, Parser

from potextract.errors import ConfigurationError

_LANGUAGES: dict[str, Language] = {}

# File extension to language mapping
EXTENSION_TO_LANGUAGE: dict[str, str] = {
    ".ts": "typescript",
    ".mts": "typescript",
    ".cts": "typescript",
    ".tsx": "tsx",
    ".js": "javascript",
    ".jsx": "javascript",
    ".mjs": "javascript",
    ".cjs": "javascript",
    ".html": "html",
    ".htm": "html",
}

JS_LANGUAGES = ("typescript", "tsx", "javascript")


def get_language(name: str) -> Language:
    """Return the tree-sitter Language for `name`, loading it on first use.

    Raises:
        ConfigurationError: If the language is not supported.
    """
    if name in _LANGUAGES:
        return _LANGUAGES[name]

    if name == "typescript":
        _LANGUAGES[name] = Language(ts_typescript.language_typescript())
    elif name == "tsx":
        _LANGUAGES[name] = Language(ts_typescript.language_tsx())
    elif name == "javascript":
        _LANGUAGES[name] = Language(ts_javascript.language())
    elif name == "html":
        _LANGUAGES[name] = Language(ts_html.language())
    else:
        raise ConfigurationError(f"Unsupported language '{name}'")

    return _LANGUAGES[name]


def detect_js_language(file_name: str | None) -> str:
    """Pick the JS dialect from a file suffix; TypeScript when unknown."""
    if file_name:
        language = EXTENSION_TO_LANGUAGE.get(Path(file_name).suffix.lower())
        if language in JS_LANGUAGES:
            return language
    return "typescript"


def parse_tree(language: str, source: bytes):
    """Parse `source` with a fresh tree-sitter parser for `language`."""
    parser = Parser(get_language(language))
    return parser.parse(source)
