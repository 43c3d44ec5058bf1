import json
import os
from collections.abc import Generator
from typing import Any

import pytest

__all__ = [
    "sample_watchlist_page",
    "sample_watchlist_page_without_marker",
    "sample_title_data",
]

HTML_DIR = os.path.join(os.path.dirname(__file__), "html")


def open_html_file(filename: str) -> str:
    """Utility function to read an HTML file."""
    with open(os.path.join(HTML_DIR, filename), encoding="utf-8") as file:
        return file.read()


@pytest.fixture
def sample_watchlist_page() -> Generator[str, None, None]:
    """Watchlist page with two titles in its initial state."""
    yield open_html_file("imdb_watchlist_page.html")


@pytest.fixture
def sample_watchlist_page_without_marker() -> Generator[str, None, None]:
    """Watchlist page after a redesign dropped the initial state script."""
    yield open_html_file("imdb_watchlist_page_without_marker.html")


@pytest.fixture
def sample_title_data() -> dict[str, Any]:
    """Batched title metadata for the titles on the sample watchlist page."""
    with open(os.path.join(HTML_DIR, "imdb_title_data.json"), encoding="utf-8") as file:
        return json.load(file)
