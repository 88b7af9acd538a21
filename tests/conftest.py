"""Pytest configuration and fixtures for the test suite."""

from collections.abc import Generator

import pytest

from docsearch.app.app_config import AppConfig, build_registry
from docsearch.documents.text_document import CellDocument, TextDocument
from docsearch.events import clear_events
from docsearch.search.directory import ActiveSearchDirectory
from docsearch.search.registry import SearchProviderRegistry


@pytest.fixture(autouse=True)
def fresh_event_bus() -> Generator[None, None, None]:
    """Start every test with an empty event history."""
    clear_events()
    yield
    clear_events()


@pytest.fixture
def registry() -> SearchProviderRegistry:
    """Registry with the built-in providers."""
    return build_registry(AppConfig())


@pytest.fixture
def directory() -> ActiveSearchDirectory:
    """Empty search directory."""
    return ActiveSearchDirectory()


@pytest.fixture
def foo_document() -> TextDocument:
    """Plain text document with two occurrences of ``foo``."""
    return TextDocument("foo bar foo", doc_id="foo.txt")


@pytest.fixture
def notebook() -> CellDocument:
    """Three-cell document."""
    return CellDocument.from_texts(
        ["import foo\nfoo.run()", "print('bar')", "# Foo again\nx = foo"],
        doc_id="notebook.ipynb",
    )
