"""Help modal screen."""

from __future__ import annotations

from rich.text import Text
from textual.app import ComposeResult
from textual.containers import VerticalScroll
from textual.screen import ModalScreen
from textual.widgets import Static

from deliverybook.commands import ALL_COMMANDS


def format_help() -> Text:
    """List the usage of every command, one block per command."""
    content = Text(style="white")
    for idx, command_type in enumerate(ALL_COMMANDS):
        if idx > 0:
            content.append("\n\n")
        word, _, rest = command_type.MESSAGE_USAGE.partition(":")
        content.append(word, style="bold")
        content.append(f":{rest}")
    return content


class HelpModal(ModalScreen[None]):
    """Centered modal listing every command."""

    BINDINGS = [
        ("escape", "close", "Close"),
        ("q", "close", "Close"),
        ("ctrl+c", "close", "Close"),
    ]

    CSS = """
    HelpModal {
        align: center middle;
        background: $background 60%;
    }

    #help-dialog {
        width: 96;
        height: 80%;
        border: round $secondary;
        background: $panel;
        padding: 1 2;
    }

    #help-title {
        text-style: bold;
        margin-bottom: 1;
        color: white;
    }

    #help-footer {
        margin-top: 1;
        color: #dddddd;
    }
    """

    def compose(self) -> ComposeResult:
        with VerticalScroll(id="help-dialog"):
            yield Static("Commands", id="help-title")
            yield Static(format_help(), id="help-body")
            yield Static("Esc / q / Ctrl+C to close", id="help-footer")

    def action_close(self) -> None:
        self.dismiss()
