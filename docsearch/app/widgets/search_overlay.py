"""Search box attached to an open document."""

import logging
from typing import Any, ClassVar

from textual import work
from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.widgets import Button, Input, Label

from ...common.debounce import AsyncDebouncedRunner
from ...common.pydantic import DisplayState
from ...search.errors import SearchDisposedError
from ...search.search_instance import SearchInstance

logger = logging.getLogger(__name__)

DEBOUNCE_LATENCY = 0.1


def format_counter(state: DisplayState) -> str:
    """Match position text, e.g. ``3/10``."""
    if state.total_matches == 0:
        return "-/-" if state.query is None else "0/0"
    current = "-" if state.current_index < 0 else str(state.current_index + 1)
    return f"{current}/{state.total_matches}"


class SearchOverlay(Vertical):
    """Renders the display state of a search session and forwards user input to it."""

    BINDINGS: ClassVar = [
        Binding("escape", "close", "Close search"),
        Binding("shift+enter", "previous", "Previous match", show=False),
    ]

    def __init__(self, instance: SearchInstance, debounce_delay: float = DEBOUNCE_LATENCY, **kwargs: Any):
        """Initialize the overlay."""
        super().__init__(**kwargs)
        self.instance = instance
        state = instance.display_state
        self.input = Input(value=state.input_text, placeholder="Find", id="search_input", classes="search-input")
        self.case_button = Button("Aa", id="toggle_case", compact=True)
        self.regex_button = Button(".*", id="toggle_regex", compact=True)
        self.counter = Label(format_counter(state), id="search_counter")
        self.error_label = Label("", id="search_error")
        self._debounced = AsyncDebouncedRunner(debounce_delay)

    def compose(self) -> ComposeResult:
        """Create child widgets."""
        with Horizontal(id="search_row"):
            yield self.input
            yield self.case_button
            yield self.regex_button
            yield self.counter
            yield Button("↑", id="previous_match", compact=True)
            yield Button("↓", id="next_match", compact=True)
            yield Button("×", id="close_search", compact=True)
        yield self.error_label

    def on_mount(self) -> None:
        """Follow the search session."""
        self.instance.display_changed.connect(self.render_state)
        self.instance.disposed.connect(self._on_disposed)
        self.render_state(self.instance.display_state)

    def _on_disposed(self, _: SearchInstance) -> None:
        self._debounced.cancel()
        self.remove()

    def render_state(self, state: DisplayState) -> None:
        """Bring the widgets in line with ``state``."""
        self.counter.update(format_counter(state))
        self.error_label.update(state.error_message)
        self.error_label.display = bool(state.error_message)
        self.case_button.variant = "primary" if state.case_sensitive else "default"
        self.regex_button.variant = "primary" if state.use_regex else "default"
        if self.instance.consume_force_focus():
            self.input.focus()

    def on_input_changed(self, message: Input.Changed) -> None:
        """Rerun the query shortly after typing stops."""
        if message.input.id != "search_input":
            return
        value = message.value
        self._debounced.submit(lambda: self._update_input(value))

    @work(group="search_input")
    async def _update_input(self, value: str) -> None:
        if self.instance.is_disposed:
            return
        try:
            await self.instance.update_input(value)
        except SearchDisposedError:
            logger.debug("Search on %s closed before input %r was applied", self.instance.document_id, value)

    async def _execute(self, go_forward: bool) -> None:
        """Apply the current input, then run it or move through its matches."""
        self._debounced.cancel()
        await self.instance.update_input(self.input.value)
        await self.instance.execute_search(go_forward=go_forward)

    async def on_input_submitted(self, message: Input.Submitted) -> None:
        """Enter runs the query, or moves to the next match if it already ran."""
        message.stop()
        await self._execute(go_forward=True)

    async def on_button_pressed(self, message: Button.Pressed) -> None:
        """Dispatch the toolbar buttons."""
        message.stop()
        button_id = message.button.id
        if button_id == "toggle_case":
            await self.instance.toggle_case_sensitive()
        elif button_id == "toggle_regex":
            await self.instance.toggle_use_regex()
        elif button_id == "previous_match":
            await self._execute(go_forward=False)
        elif button_id == "next_match":
            await self._execute(go_forward=True)
        elif button_id == "close_search":
            await self.action_close()

    async def action_previous(self) -> None:
        """Move to the previous match."""
        await self._execute(go_forward=False)

    async def action_close(self) -> None:
        """Close the search session; the overlay removes itself when it is gone."""
        await self.instance.dispose()
