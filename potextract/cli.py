"""CLI interface for potextract.

Extract translatable messages from JS/TS and HTML sources into a POT file.
"""

import sys
from pathlib import Path

import click
from dotenv import load_dotenv

# Load .env before importing other potextract modules
# This ensures env vars are set before module-level code reads them
load_dotenv()

from potextract import __version__  # noqa: E402
from potextract.config import (  # noqa: E402
    ExtractionConfig,
    HtmlElementConfig,
    JsCallConfig,
    load_config,
    run_extraction,
)
from potextract.errors import ConfigurationError, ExtractionError  # noqa: E402
from potextract.logging import set_log_level  # noqa: E402
from potextract.models.options import validate_options  # noqa: E402
from potextract.utils.output import StatsOutput  # noqa: E402

HTML_SUFFIXES = frozenset({".html", ".htm", ".vue", ".svelte"})


def parse_call_option(value: str) -> JsCallConfig:
    """Turn ``NAME[:TEXT[,PLURAL[,CONTEXT]]]`` into a call extractor config.

    Example: ``_n:0,1`` extracts text from argument 0 and the plural from 1.
    """
    name, _, positions = value.partition(":")
    if not name:
        raise click.BadParameter(f"Missing callee name in '{value}'", param_hint="--call")
    keys = ("text", "text_plural", "context")
    arguments: dict[str, int] = {"text": 0}
    if positions:
        values = positions.split(",")
        if len(values) > len(keys):
            raise click.BadParameter(f"Too many argument positions in '{value}'", param_hint="--call")
        try:
            arguments = {key: int(position) for key, position in zip(keys, values) if position != ""}
        except ValueError as e:
            raise click.BadParameter(f"Invalid argument position in '{value}'", param_hint="--call") from e
        if "text" not in arguments:
            raise click.BadParameter(f"Missing text position in '{value}'", param_hint="--call")
    try:
        return validate_options(JsCallConfig, {"callee": name, "options": {"arguments": arguments}}, "call")
    except ConfigurationError as e:
        raise click.BadParameter(str(e), param_hint="--call") from e


def parse_header(value: str) -> tuple[str, str]:
    key, sep, header_value = value.partition(":")
    if not sep or not key.strip():
        raise click.BadParameter(f"Expected KEY:VALUE, got '{value}'", param_hint="--header")
    return key.strip(), header_value.strip()


@click.group()
@click.version_option(version=__version__, prog_name="potextract")
@click.option("-v", "--verbose", is_flag=True, help="Log progress to stderr")
def cli(verbose: bool) -> None:
    """potextract - gettext message extraction for JS/TS and HTML."""
    if verbose:
        set_log_level("INFO")


@cli.command()
@click.argument("patterns", nargs=-1)
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False),
    help="JSON config file",
)
@click.option(
    "--call",
    "calls",
    multiple=True,
    help="Callee to extract from, as NAME[:TEXT[,PLURAL[,CONTEXT]]] (repeatable)",
)
@click.option(
    "--element",
    "elements",
    multiple=True,
    help="Selector of elements whose content is a message (repeatable)",
)
@click.option(
    "--header",
    "headers",
    multiple=True,
    help="POT header as KEY:VALUE (repeatable)",
)
@click.option(
    "-o",
    "--output",
    type=click.Path(dir_okay=False),
    help="Output POT file (default: stdout)",
)
@click.option("--stats/--no-stats", default=True, help="Print statistics to stderr (default: on)")
def extract(
    patterns: tuple[str, ...],
    config_path: str | None,
    calls: tuple[str, ...],
    elements: tuple[str, ...],
    headers: tuple[str, ...],
    output: str | None,
    stats: bool,
) -> None:
    """Extract messages into a POT file.

    PATTERNS: Glob patterns of files to parse; HTML-like files go to the
    HTML parser, everything else to the JS parser.
    """
    try:
        config = load_config(config_path) if config_path else ExtractionConfig()
    except ExtractionError as e:
        click.echo(f"Invalid config: {e}", err=True)
        sys.exit(1)

    config.js_calls.extend(parse_call_option(value) for value in calls)
    config.html_elements.extend(HtmlElementConfig(selector=selector) for selector in elements)
    config.headers.update(parse_header(header) for header in headers)

    for pattern in patterns:
        if Path(pattern).suffix.lower() in HTML_SUFFIXES:
            config.html_patterns.append(pattern)
        else:
            config.js_patterns.append(pattern)

    if output:
        config.output = output

    if not config.js_patterns and not config.html_patterns:
        click.echo("No file patterns given", err=True)
        sys.exit(1)

    try:
        extractor = run_extraction(config)
    except (ExtractionError, OSError) as e:
        click.echo(f"Extraction failed: {e}", err=True)
        sys.exit(1)

    if not config.output:
        click.echo(extractor.get_pot_string(config.headers))

    if stats:
        StatsOutput(extractor.get_stats()).print(err=True)


def main() -> None:
    """Entry point for the CLI."""
    cli()


if __name__ == "__main__":
    main()
