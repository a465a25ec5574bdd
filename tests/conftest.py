"""Shared pytest fixtures for front-router tests."""

import shutil
from collections.abc import Callable
from pathlib import Path

import pytest


# =============================================================================
# Path Fixtures
# =============================================================================


@pytest.fixture
def project_root() -> Path:
    """Return the project root directory."""
    return Path(__file__).parent.parent


@pytest.fixture
def fixtures_dir() -> Path:
    """Return the test fixtures directory."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def pages_dir(fixtures_dir: Path, tmp_path: Path) -> Path:
    """Return a writable copy of the sample pages (home, parent, partial)."""
    pages = tmp_path / "pages"
    shutil.copytree(fixtures_dir / "pages", pages)
    return pages


# =============================================================================
# Page Fixtures
# =============================================================================


@pytest.fixture
def make_page(tmp_path: Path) -> Callable[..., Path]:
    """Factory writing an HTML page with optional front matter under tmp_path."""

    def _make_page(
        name: str, front_matter: str | None = None, body: str = "<p>Body</p>\n"
    ) -> Path:
        page = tmp_path / "site" / name
        page.parent.mkdir(parents=True, exist_ok=True)
        if front_matter is None:
            page.write_text(body, encoding="utf-8")
        else:
            page.write_text(f"---\n{front_matter}---\n{body}", encoding="utf-8")
        return page

    return _make_page
