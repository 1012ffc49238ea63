"""
Search Screen - live GitHub user search with paged results.

Features:
- Persistent search bar at top, debounced by the controller
- Results list that loads the next page when scrolled to the bottom
- Loading row and "shown/total" count while pages arrive
- Enter to view the selected user in a modal
"""

import logging
from typing import Any, Optional

from textual.app import ComposeResult
from textual.binding import Binding
from textual.widget import Widget
from textual.widgets import Input, OptionList, Static
from textual.widgets.option_list import Option

from ...config.settings import load_settings
from ...exceptions import IndexOutOfRangeError, TransientFetchFailure
from ...services.github_service import GitHubUserSearchService
from ...services.types import SearchService
from .scrolling import is_reached_bottom
from .search_controller import SearchController, SearchStateVM
from .user_modal import UserDetailScreen

logger = logging.getLogger(__name__)


class SearchScreen(Widget):
    """
    Search widget: an Input feeding a SearchController, and an OptionList
    showing whatever snapshot the controller last pushed.

    The widget holds no search state of its own.
    """

    BINDINGS = [
        Binding("ctrl+n", "load_more", "More"),
        Binding("down", "focus_results", "Results", show=False),
        Binding("slash", "focus_search", "Search"),
    ]

    DEFAULT_CSS = """
    SearchScreen {
        layout: grid;
        grid-size: 1;
        grid-rows: 3 1fr 1;
    }

    #search-input {
        width: 1fr;
        border: solid $primary-darken-1;
    }

    #search-input:focus {
        border: solid $primary;
    }

    #results-list {
        height: 1fr;
        width: 100%;
        scrollbar-gutter: stable;
    }

    #search-status {
        height: 1;
        background: $surface-darken-1;
        padding: 0 1;
    }
    """

    def __init__(
        self,
        service: Optional[SearchService] = None,
        *,
        debounce_seconds: Optional[float] = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(**kwargs)
        if service is None or debounce_seconds is None:
            settings = load_settings()
            if service is None:
                service = GitHubUserSearchService(
                    page_size=settings.page_size, timeout=settings.gh_timeout
                )
            if debounce_seconds is None:
                debounce_seconds = settings.debounce_seconds
        self._forward_scroll = False
        self._rendered_query = ""
        self._rendered_count = 0
        self._loading_shown = False
        self.controller = SearchController(
            service,
            self,
            debounce_seconds=debounce_seconds,
            subscriptions=[self._subscribe_scroll],
        )

    def compose(self) -> ComposeResult:
        yield Input(placeholder="Search GitHub users... (type:org, location:tokyo)", id="search-input")
        yield OptionList(id="results-list")
        yield Static("Type to search", id="search-status")

    def on_mount(self) -> None:
        logger.info("SearchScreen mounted")
        results = self.query_one("#results-list", OptionList)
        self.watch(results, "scroll_y", self._on_results_scrolled, init=False)
        self.controller.activate()
        self.query_one("#search-input", Input).focus()

    def on_unmount(self) -> None:
        self.controller.shutdown()

    def _subscribe_scroll(self):
        """Start forwarding bottom-reached signals; returns the disposer."""
        self._forward_scroll = True

        def dispose() -> None:
            self._forward_scroll = False

        return dispose

    # ------------------------------------------------------------------
    # Observer
    # ------------------------------------------------------------------

    def state_changed(self, state: SearchStateVM) -> None:
        if not self.is_mounted:
            return
        try:
            self._render_state(state)
        except Exception as e:
            logger.error(f"Error rendering search state: {e}")

    def show_record(self, record: Any) -> None:
        self.app.push_screen(UserDetailScreen(record))

    def auth_error(self) -> None:
        self.notify(
            "Not authenticated with GitHub. Run 'gh auth login' and search again.",
            title="Login required",
            severity="error",
            timeout=6,
        )

    def fetch_failed(self, reason: TransientFetchFailure) -> None:
        self.notify(f"Search failed: {reason.message}", severity="warning", timeout=3)

    def _render_state(self, state: SearchStateVM) -> None:
        results = self.query_one("#results-list", OptionList)

        # Items only grow within a query, so only new rows are appended.
        if state.query != self._rendered_query or len(state.items) < self._rendered_count:
            results.clear_options()
            self._rendered_query = state.query
            self._rendered_count = 0
            self._loading_shown = False

        if self._loading_shown:
            results.remove_option("loading")
            self._loading_shown = False

        new_items = state.items[self._rendered_count :]
        if new_items:
            start = self._rendered_count
            results.add_options(
                [
                    Option(self._format_record(record), id=str(start + offset))
                    for offset, record in enumerate(new_items)
                ]
            )
            self._rendered_count = len(state.items)

        if state.is_loading:
            results.add_option(Option("[dim]Loading...[/dim]", id="loading", disabled=True))
            self._loading_shown = True

        self.query_one("#search-status", Static).update(state.status_text)

        # The loading row is never "the bottom"; a page that leaves the list
        # short of the viewport counts as reaching it once laid out.
        if state.is_loading:
            self._forward_bottom(False)
        elif new_items:
            self.call_after_refresh(self._check_bottom)

    @staticmethod
    def _format_record(record: Any) -> str:
        login = getattr(record, "login", None)
        if login is None:
            return str(record)
        return f"[bold]{login}[/bold] [dim]{record.type}[/dim]"

    # ------------------------------------------------------------------
    # Input
    # ------------------------------------------------------------------

    def on_input_changed(self, event: Input.Changed) -> None:
        if event.input.id == "search-input":
            self.controller.on_input_changed(event.value)

    def on_input_submitted(self, event: Input.Submitted) -> None:
        if event.input.id == "search-input":
            self.action_focus_results()

    def on_option_list_option_selected(self, event: OptionList.OptionSelected) -> None:
        if event.option_list.id != "results-list" or not event.option.id:
            return
        if not event.option.id.isdigit():
            return
        try:
            self.controller.select_record(int(event.option.id))
        except IndexOutOfRangeError as e:
            logger.error(f"Stale selection: {e}")

    def _on_results_scrolled(self, scroll_y: float) -> None:
        self._check_bottom()

    def _check_bottom(self) -> None:
        if not self.is_mounted or self.controller.state.is_loading:
            return
        results = self.query_one("#results-list", OptionList)
        self._forward_bottom(
            is_reached_bottom(
                results.scroll_y, results.virtual_size.height, results.container_size.height
            )
        )

    def _forward_bottom(self, is_at_bottom: bool) -> None:
        if self._forward_scroll:
            self.controller.on_reached_bottom_changed(is_at_bottom)

    def action_load_more(self) -> None:
        self.controller.load_next_page()

    def action_focus_results(self) -> None:
        results = self.query_one("#results-list", OptionList)
        if results.option_count > 0:
            results.focus()

    def action_focus_search(self) -> None:
        self.query_one("#search-input", Input).focus()
