"""Textual application hosting the search screen."""

from typing import Optional

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.widgets import Footer, Header

from ...services.types import SearchService
from .search_screen import SearchScreen


class SearchApp(App[None]):
    """Full-screen GitHub user search."""

    TITLE = "incsearch"
    SUB_TITLE = "GitHub user search"

    CSS = """
    Screen { layout: vertical; }
    #search-screen { height: 1fr; }
    """

    BINDINGS = [
        Binding("ctrl+q", "quit", "Quit"),
    ]

    def __init__(
        self,
        service: Optional[SearchService] = None,
        debounce_seconds: Optional[float] = None,
    ) -> None:
        super().__init__()
        self._service = service
        self._debounce_seconds = debounce_seconds

    def compose(self) -> ComposeResult:
        yield Header()
        yield SearchScreen(
            self._service, debounce_seconds=self._debounce_seconds, id="search-screen"
        )
        yield Footer()
