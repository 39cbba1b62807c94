"""JSON configuration for extraction runs.

A config file describes which calls and elements to extract from, which files
to parse and where to write the POT file:

    {
      "js_calls": [
        {"callee": ["_", "i18n.gettext"], "options": {"arguments": {"text": 0}}},
        {"callee": "_n", "options": {"arguments": {"text": 0, "text_plural": 1}}}
      ],
      "html_elements": [{"selector": "[translate]"}],
      "embedded_js": ["script"],
      "js_patterns": ["src/**/*.ts"],
      "html_patterns": ["templates/**/*.html"],
      "headers": {"Project-Id-Version": "demo 1.0"},
      "output": "messages.pot"
    }
"""

import json
from dataclasses import dataclass
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictStr

from potextract.errors import ConfigurationError
from potextract.extractor import GettextExtractor
from potextract.logging import log_operation, logger
from potextract.models.options import CallExpressionOptions, ElementOptions, validate_options
from potextract.parsers.html import extractors as html_extractors
from potextract.parsers.html.parser import HtmlParser
from potextract.parsers.js import extractors as js_extractors
from potextract.parsers.js.parser import JsParser


class JsCallConfig(BaseModel):
    """One call expression extractor."""

    model_config = ConfigDict(extra="forbid")

    callee: StrictStr | list[StrictStr] = Field(description="Dotted callee name(s)")
    options: CallExpressionOptions


class HtmlElementConfig(BaseModel):
    """One element extractor: content by default, an attribute when given."""

    model_config = ConfigDict(extra="forbid")

    selector: StrictStr
    attribute: StrictStr | None = Field(
        default=None, description="Attribute holding the text instead of the element content"
    )
    options: ElementOptions = Field(default_factory=ElementOptions)


class ExtractionConfig(BaseModel):
    """Everything needed for one extraction run."""

    model_config = ConfigDict(extra="forbid")

    js_calls: list[JsCallConfig] = Field(default_factory=list)
    html_elements: list[HtmlElementConfig] = Field(default_factory=list)
    embedded_js: list[StrictStr] = Field(
        default_factory=list, description="Selectors of elements whose content is JS"
    )
    embedded_attribute_js: StrictStr | None = Field(
        default=None, description="Regex for names of attributes whose value is JS"
    )
    html_templates: StrictBool = Field(
        default=False, description="Parse template literals in JS files as HTML"
    )
    strict: StrictBool = Field(default=True, description="Fail on JS syntax errors")
    js_patterns: list[StrictStr] = Field(default_factory=list)
    html_patterns: list[StrictStr] = Field(default_factory=list)
    headers: dict[StrictStr, StrictStr] = Field(default_factory=dict)
    output: StrictStr | None = None


@dataclass
class ExtractionSession:
    """A configured extractor with the parsers the config asked for."""

    extractor: GettextExtractor
    js_parser: JsParser | None = None
    html_parser: HtmlParser | None = None


def load_config(path: str | Path) -> ExtractionConfig:
    """Read and validate a JSON config file.

    Raises:
        ConfigurationError: If the file is not valid JSON or not a valid config.
    """
    path = Path(path)
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"Invalid JSON in {path}: {e}") from e
    return validate_options(ExtractionConfig, data, "config")


def build_extractor(config: ExtractionConfig) -> ExtractionSession:
    """Create a GettextExtractor and its parsers from `config`."""
    session = ExtractionSession(extractor=GettextExtractor())

    js_list = [js_extractors.call_expression(call.callee, call.options) for call in config.js_calls]
    html_list = []
    for element in config.html_elements:
        if element.attribute:
            html_list.append(
                html_extractors.element_attribute(element.selector, element.attribute, element.options)
            )
        else:
            html_list.append(html_extractors.element_content(element.selector, element.options))

    if js_list:
        session.js_parser = session.extractor.create_js_parser(js_list, strict=config.strict)
    if html_list:
        session.html_parser = session.extractor.create_html_parser(html_list)

    if config.embedded_js or config.embedded_attribute_js:
        if session.js_parser is None:
            raise ConfigurationError("Embedded JS extraction needs at least one entry in 'js_calls'")
        if session.html_parser is None:
            session.html_parser = session.extractor.create_html_parser()
        for selector in config.embedded_js:
            session.html_parser.add_extractor(html_extractors.embedded_js(selector, session.js_parser))
        if config.embedded_attribute_js:
            session.html_parser.add_extractor(
                html_extractors.embedded_attribute_js(config.embedded_attribute_js, session.js_parser)
            )

    if config.html_templates:
        if session.js_parser is None or session.html_parser is None:
            raise ConfigurationError("'html_templates' needs both 'js_calls' and HTML extractors")
        session.js_parser.add_extractor(js_extractors.html_template(session.html_parser))

    return session


def run_extraction(config: ExtractionConfig) -> GettextExtractor:
    """Parse every configured pattern and write the output file, if any."""
    session = build_extractor(config)

    if config.js_patterns and session.js_parser is None:
        raise ConfigurationError("'js_patterns' given but no 'js_calls' configured")
    if config.html_patterns and session.html_parser is None:
        raise ConfigurationError("'html_patterns' given but no HTML extractors configured")

    details = {"js_patterns": len(config.js_patterns), "html_patterns": len(config.html_patterns)}
    with log_operation("extract", details):
        for pattern in config.js_patterns:
            session.js_parser.parse_files_glob(pattern)
        for pattern in config.html_patterns:
            session.html_parser.parse_files_glob(pattern)

    if config.output:
        session.extractor.save_pot_file(config.output, config.headers)
    else:
        logger.debug("No output file configured")

    return session.extractor
