"""In-memory text documents."""

import json
import uuid
from dataclasses import dataclass
from pathlib import Path

from ..common.signal import Signal


@dataclass(frozen=True, slots=True)
class Span:
    """Half-open character range ``[start, end)`` in a document's text."""

    start: int
    end: int


class TextDocument:
    """An open plain-text document.

    ``highlights`` and ``current`` are decorations owned by whoever searches
    the document; ``selection`` is the cursor selection and survives the
    decorations being cleared.
    """

    def __init__(self, text: str = "", doc_id: str | None = None, title: str = "") -> None:
        """Initialize the document."""
        self.id = doc_id or uuid.uuid4().hex
        self.title = title or self.id
        self._text = text
        self.highlights: list[Span] = []
        self.current: Span | None = None
        self.selection: Span | None = None
        self.closed = False
        self.changed: Signal[TextDocument] = Signal()
        self.decorations_changed: Signal[TextDocument] = Signal()

    def __repr__(self) -> str:
        return f"TextDocument(id={self.id!r}, title={self.title!r})"

    @classmethod
    def from_path(cls, path: Path) -> "TextDocument":
        """Open a text file."""
        return cls(path.read_text(errors="replace"), doc_id=str(path.resolve()), title=path.name)

    @property
    def text(self) -> str:
        """Document content."""
        return self._text

    @text.setter
    def text(self, value: str) -> None:
        if value == self._text:
            return
        self._text = value
        self.changed.emit(self)

    def set_decorations(self, highlights: list[Span], current: Span | None = None) -> None:
        """Replace the match decorations."""
        self.highlights = list(highlights)
        self.current = current
        self.decorations_changed.emit(self)

    def clear_decorations(self) -> None:
        """Remove all match decorations."""
        self.set_decorations([], None)

    def close(self) -> None:
        """Mark the document as closed."""
        self.closed = True


class CellDocument:
    """An open document made of an ordered list of text cells."""

    def __init__(self, cells: list[TextDocument] | None = None, doc_id: str | None = None, title: str = "") -> None:
        """Initialize the document."""
        self.id = doc_id or uuid.uuid4().hex
        self.title = title or self.id
        self._cells: list[TextDocument] = list(cells or [])
        self.closed = False
        self.changed: Signal[CellDocument] = Signal()

    def __repr__(self) -> str:
        return f"CellDocument(id={self.id!r}, cells={len(self._cells)})"

    @classmethod
    def from_texts(cls, texts: list[str], doc_id: str | None = None, title: str = "") -> "CellDocument":
        """Build a document with one cell per text."""
        doc_id = doc_id or uuid.uuid4().hex
        cells = [TextDocument(text, doc_id=f"{doc_id}#{i}") for i, text in enumerate(texts)]
        return cls(cells, doc_id=doc_id, title=title)

    @classmethod
    def from_notebook(cls, path: Path) -> "CellDocument":
        """Open a Jupyter notebook, one cell per notebook cell."""
        notebook = json.loads(path.read_text())
        texts = []
        for cell in notebook.get("cells", []):
            source = cell.get("source", "")
            texts.append("".join(source) if isinstance(source, list) else source)
        return cls.from_texts(texts, doc_id=str(path.resolve()), title=path.name)

    @property
    def cells(self) -> list[TextDocument]:
        """The cells, in order."""
        return list(self._cells)

    def add_cell(self, text: str = "", index: int | None = None) -> TextDocument:
        """Insert a new cell, at the end by default."""
        cell = TextDocument(text, doc_id=f"{self.id}#{uuid.uuid4().hex[:8]}")
        self._cells.insert(len(self._cells) if index is None else index, cell)
        self.changed.emit(self)
        return cell

    def remove_cell(self, index: int) -> TextDocument:
        """Remove and return the cell at ``index``."""
        cell = self._cells.pop(index)
        self.changed.emit(self)
        return cell

    def close(self) -> None:
        """Mark the document and its cells as closed."""
        self.closed = True
        for cell in self._cells:
            cell.close()


def open_document(path: Path) -> TextDocument | CellDocument:
    """Open a file as the document type matching its extension."""
    if path.suffix == ".ipynb":
        return CellDocument.from_notebook(path)
    return TextDocument.from_path(path)
