"""Modal showing one GitHub user from the search results."""

import logging
from typing import Any

from textual.app import ComposeResult
from textual.containers import Grid
from textual.screen import ModalScreen
from textual.widgets import Button, Label

logger = logging.getLogger(__name__)


class UserDetailScreen(ModalScreen):
    """Details for the selected search result."""

    CSS = """
    UserDetailScreen {
        align: center middle;
    }

    #user-dialog {
        grid-size: 1;
        grid-rows: 1fr 3;
        padding: 0 2;
        width: 70;
        height: 12;
        border: thick $background 80%;
        background: $surface;
    }

    #user-details {
        height: 1fr;
    }

    Button {
        width: 100%;
    }
    """

    BINDINGS = [
        ("escape", "close", "Close"),
        ("q", "close", "Close"),
    ]

    def __init__(self, record: Any):
        super().__init__()
        self.record = record

    def compose(self) -> ComposeResult:
        with Grid(id="user-dialog"):
            yield Label(self._describe(self.record), id="user-details")
            yield Button("Close (esc)", variant="primary", id="close")

    @staticmethod
    def _describe(record: Any) -> str:
        login = getattr(record, "login", None)
        if login is None:
            return str(record)
        lines = [
            f"[bold]{login}[/bold]  [dim]#{record.id}[/dim]",
            f"Type: {record.type}",
            f"Score: {record.score:.1f}",
        ]
        if record.html_url:
            lines.append(f"[cyan]{record.html_url}[/cyan]")
        return "\n".join(lines)

    def on_button_pressed(self, event: Button.Pressed) -> None:
        self.dismiss(None)

    def action_close(self) -> None:
        self.dismiss(None)
