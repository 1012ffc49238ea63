"""
Search commands for incsearch
"""

import asyncio
from typing import Any, Optional

import typer
from rich.console import Console
from rich.table import Table

from incsearch.config.settings import load_settings
from incsearch.exceptions import ConfigurationError, TransientFetchFailure
from incsearch.services.github_service import GitHubUserSearchService
from incsearch.services.types import SearchService
from incsearch.ui.search.search_controller import (
    SearchController,
    SearchPhase,
    SearchStateVM,
)

console = Console()


class ConsoleObserver:
    """Collects controller output for a one-shot, non-interactive search."""

    def __init__(self) -> None:
        self.state = SearchStateVM()
        self.settled = asyncio.Event()
        self.auth_failed = False
        self.failure: Optional[TransientFetchFailure] = None
        self._was_loading = False

    def state_changed(self, state: SearchStateVM) -> None:
        self.state = state
        if self._was_loading and not state.is_loading:
            self.settled.set()
        self._was_loading = state.is_loading

    def show_record(self, record: Any) -> None:
        console.print(record)

    def auth_error(self) -> None:
        self.auth_failed = True
        self.settled.set()

    def fetch_failed(self, reason: TransientFetchFailure) -> None:
        self.failure = reason
        self.settled.set()


async def collect_pages(service: SearchService, query: str, pages: int) -> ConsoleObserver:
    """Run `query` through a controller and gather up to `pages` pages."""
    observer = ConsoleObserver()
    controller = SearchController(service, observer, debounce_seconds=0)
    try:
        controller.on_input_changed(query)
        for page_number in range(pages):
            if page_number > 0:
                observer.settled.clear()
                if not controller.load_next_page():
                    break
            await observer.settled.wait()
            if observer.auth_failed or observer.failure:
                break
    finally:
        controller.shutdown()
    return observer


def find(
    query: str = typer.Argument(..., help="GitHub user search query"),
    pages: int = typer.Option(1, "--pages", "-p", min=1, help="Number of pages to load"),
    page_size: Optional[int] = typer.Option(
        None, "--page-size", "-n", min=1, max=100, help="Users per page"
    ),
):
    """Search GitHub users and print the results"""
    if not query.strip():
        console.print("[red]Error: query must not be empty[/red]")
        raise typer.Exit(1)

    try:
        settings = load_settings()
    except ConfigurationError as e:
        console.print(f"[red]Configuration error: {e}[/red]")
        raise typer.Exit(1) from e

    service = GitHubUserSearchService(
        page_size=page_size or settings.page_size, timeout=settings.gh_timeout
    )
    observer = asyncio.run(collect_pages(service, query, pages))

    if observer.auth_failed:
        console.print("[red]Not authenticated with GitHub. Run 'gh auth login'[/red]")
        raise typer.Exit(1)
    if observer.failure:
        console.print(f"[yellow]Search failed: {observer.failure.message}[/yellow]")
        raise typer.Exit(1)

    state = observer.state
    if not state.items:
        console.print(f"[yellow]No users found for '{query}'[/yellow]")
        return

    table = Table(title=f"GitHub users matching '{query}'")
    table.add_column("#", justify="right", style="dim", no_wrap=True)
    table.add_column("Login", style="cyan")
    table.add_column("Type", style="magenta")
    table.add_column("URL", style="green")

    for index, user in enumerate(state.items, start=1):
        table.add_row(str(index), user.login, user.type, user.html_url)

    console.print(table)
    console.print(f"[dim]{state.count_label} users loaded[/dim]")
    if state.phase is SearchPhase.IDLE:
        console.print("[dim]More results available, use --pages to load them[/dim]")


def browse():
    """Open the interactive search screen"""
    from incsearch.ui.search.search_app import SearchApp

    try:
        load_settings()
    except ConfigurationError as e:
        console.print(f"[red]Configuration error: {e}[/red]")
        raise typer.Exit(1) from e

    SearchApp().run()
