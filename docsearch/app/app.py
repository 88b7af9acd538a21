"""Application entry point."""

from typing import ClassVar

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.widgets import Header, TabbedContent, TabPane

from ..documents.text_document import CellDocument, TextDocument
from ..search.commands import highlight_next_in, highlight_previous_in, start_search_on
from ..search.directory import ActiveSearchDirectory
from ..search.registry import SearchProviderRegistry
from ..search.search_instance import SearchInstance
from .app_config import AppConfig, build_registry
from .commands.search_commands import SearchCommands
from .widgets.document_view import DocumentView
from .widgets.search_overlay import SearchOverlay
from .widgets.status_bar import StatusBar


class DocSearchApp(App):
    """Viewer for open documents, each with its own search box."""

    TITLE = "DocSearch"
    COMMANDS: ClassVar = {SearchCommands}
    BINDINGS: ClassVar = [
        Binding("ctrl+f", "start_search", "Find"),
        Binding("f3", "highlight_next", "Next match"),
        Binding("shift+f3", "highlight_previous", "Previous match"),
        Binding("ctrl+c", "close_app", "Close application", priority=True),
    ]

    CSS = """
    SearchOverlay {
        dock: top;
        height: auto;
        margin: 0 1;
    }

    #search_row {
        height: auto;
    }

    #search_input {
        width: 1fr;
    }

    #search_counter {
        width: 9;
        content-align: center middle;
    }

    #search_error {
        color: red;
    }

    .cell {
        border: round $accent;
        margin-bottom: 1;
    }

    StatusBar {
        dock: bottom;
        height: 1;
        padding: 0 1;
    }

    #status_spacer {
        width: 1fr;
    }

    #status_text {
        width: 25;
        content-align: right middle;
    }
    """

    def __init__(
        self,
        documents: list[TextDocument | CellDocument],
        config: AppConfig | None = None,
        registry: SearchProviderRegistry | None = None,
        directory: ActiveSearchDirectory | None = None,
    ):
        """Initialize the app."""
        super().__init__()
        self._config = config or AppConfig()
        self.documents = list(documents)
        self.registry = registry or build_registry(self._config)
        self.directory = directory or ActiveSearchDirectory()

    def compose(self) -> ComposeResult:
        """Create child widgets for the app."""
        yield Header()
        with TabbedContent():
            for i, document in enumerate(self.documents):
                with TabPane(document.title, id=f"document-{i}"):
                    yield DocumentView(document)
        yield StatusBar()

    def _current_pane(self) -> TabPane | None:
        return self.query_one(TabbedContent).active_pane

    def current_document(self) -> TextDocument | CellDocument | None:
        """Document shown in the active tab."""
        pane = self._current_pane()
        if pane is None:
            return None
        return pane.query_one(DocumentView).document

    def _update_status(self) -> None:
        self.query_one(StatusBar).active_searches = len(self.directory)

    async def _attach_overlay(self, instance: SearchInstance) -> None:
        """Mount the search box of a new session above its document."""
        pane = self._current_pane()
        if pane is None or pane.query(SearchOverlay):
            return
        instance.disposed.connect(lambda _: self._update_status())
        await pane.mount(SearchOverlay(instance, debounce_delay=self._config.debounce_delay), before=0)
        self._update_status()

    async def _open_search(self, document: TextDocument | CellDocument) -> SearchInstance | None:
        known = self.directory.lookup_document(document)
        instance = start_search_on(
            document,
            self.registry,
            self.directory,
            case_sensitive=self._config.case_sensitive,
            use_regex=self._config.use_regex,
        )
        if instance is None:
            self.notify("This document cannot be searched", severity="warning")
        elif known is None:
            await self._attach_overlay(instance)
        return instance

    async def action_start_search(self) -> None:
        """Open the search box of the current document, or focus it if open."""
        document = self.current_document()
        if document is not None:
            await self._open_search(document)

    async def action_highlight_next(self) -> None:
        """Select the next match in the current document."""
        document = self.current_document()
        if document is None:
            return
        if self.directory.lookup_document(document) is None:
            await self._open_search(document)
        else:
            await highlight_next_in(document, self.registry, self.directory)

    async def action_highlight_previous(self) -> None:
        """Select the previous match in the current document."""
        document = self.current_document()
        if document is None:
            return
        if self.directory.lookup_document(document) is None:
            await self._open_search(document)
        else:
            await highlight_previous_in(document, self.registry, self.directory)

    async def action_close_app(self) -> None:
        """Close every search, then the application."""
        await self.directory.dispose_all()
        self.exit()
