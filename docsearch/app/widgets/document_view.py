"""Widgets rendering open documents with their search decorations."""

from typing import Any

from rich.text import Text
from textual.app import ComposeResult
from textual.containers import VerticalScroll
from textual.widgets import Static

from ...documents.text_document import CellDocument, TextDocument

HIGHLIGHT_STYLE = "black on yellow"
CURRENT_STYLE = "black on dark_orange bold"


def render_document(document: TextDocument) -> Text:
    """Document text with match highlights applied."""
    text = Text(document.text)
    for span in document.highlights:
        text.stylize(HIGHLIGHT_STYLE, span.start, span.end)
    if document.current is not None:
        text.stylize(CURRENT_STYLE, document.current.start, document.current.end)
    return text


class TextDocumentView(Static):
    """Shows one text document and follows its changes."""

    def __init__(self, document: TextDocument, **kwargs: Any):
        """Initialize the view."""
        super().__init__(render_document(document), **kwargs)
        self.document = document

    def on_mount(self) -> None:
        """Follow the document."""
        self.document.changed.connect(self._on_document_changed)
        self.document.decorations_changed.connect(self._on_document_changed)

    def on_unmount(self) -> None:
        """Stop following the document."""
        self.document.changed.disconnect(self._on_document_changed)
        self.document.decorations_changed.disconnect(self._on_document_changed)

    def _on_document_changed(self, _: TextDocument) -> None:
        self.update(render_document(self.document))


class DocumentView(VerticalScroll):
    """Scrollable view of a text or cell document."""

    def __init__(self, document: TextDocument | CellDocument, **kwargs: Any):
        """Initialize the view."""
        super().__init__(**kwargs)
        self.document = document

    def compose(self) -> ComposeResult:
        """One text view per cell, or a single one for plain text."""
        if isinstance(self.document, CellDocument):
            for cell in self.document.cells:
                yield TextDocumentView(cell, classes="cell")
        else:
            yield TextDocumentView(self.document)
