"""Pytest configuration and shared fixtures."""

import tempfile
from pathlib import Path

import pytest

from potextract.catalog.builder import CatalogBuilder
from potextract.extractor import GettextExtractor
from potextract.models.messages import ExtractorStats


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def stats() -> ExtractorStats:
    return ExtractorStats()


@pytest.fixture
def builder(stats: ExtractorStats) -> CatalogBuilder:
    """A catalog builder wired to the `stats` fixture."""
    return CatalogBuilder(stats)


@pytest.fixture
def extractor() -> GettextExtractor:
    return GettextExtractor()


@pytest.fixture
def sample_project(temp_dir: Path) -> Path:
    """Create a small project with JS, TS and HTML sources."""
    (temp_dir / "src").mkdir()
    (temp_dir / "src" / "app.js").write_text(
        "import { _ } from './i18n';\n"
        "\n"
        "// Translators: shown on the start page\n"
        "const title = _('Welcome');\n"
        "const files = _n('One file', 'Many files', count); // file counter\n"
    )
    (temp_dir / "src" / "view.ts").write_text(
        "export function label(user: string): string {\n"
        "    return _('Welcome');\n"
        "}\n"
    )
    (temp_dir / "templates").mkdir()
    (temp_dir / "templates" / "index.html").write_text(
        "<html>\n"
        "<body>\n"
        "  <h1 translate>Welcome</h1>\n"
        "  <p translate translate-context=\"footer\">Goodbye</p>\n"
        "</body>\n"
        "</html>\n"
    )
    return temp_dir
