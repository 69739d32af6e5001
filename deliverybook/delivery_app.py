"""Main Textual app class."""

from __future__ import annotations

import logging

from rich.text import Text
from textual.app import App, ComposeResult
from textual.containers import Horizontal, Vertical, VerticalScroll
from textual.css.query import NoMatches
from textual.widgets import Header, Input, Static

from deliverybook.commands import CommandResult
from deliverybook.errors import DeliveryBookError
from deliverybook.help_modal import HelpModal
from deliverybook.logic import LogicManager
from deliverybook.models import EntityKind
from deliverybook.rendering import format_entity_list

logger = logging.getLogger(__name__)

_PANEL_TITLES: dict[EntityKind, str] = {
    EntityKind.CUSTOMER: "Customers",
    EntityKind.DRIVER: "Drivers",
    EntityKind.DISH: "Dishes",
    EntityKind.ORDER: "Orders",
}

_WELCOME = "Type a command and press Enter. Type help (or F1) for the command list."


def panel_id(kind: EntityKind) -> str:
    return f"{kind.value}-list"


class DeliveryBookApp(App):
    """A Textual app for managing customers, drivers, dishes and orders by command."""

    TITLE = "Delivery Book"
    SUB_TITLE = "Customers / Drivers / Dishes / Orders"

    CSS = """
    Screen {
        layout: vertical;
    }

    #main-layout {
        height: 1fr;
    }

    #left-column {
        width: 1fr;
    }

    #right-column {
        width: 1fr;
    }

    .pane {
        height: 1fr;
        border: round $primary;
        padding: 0 1;
    }

    .pane-title {
        text-style: bold;
    }

    .pane-scroll {
        height: 1fr;
    }

    .pane-list {
        height: auto;
    }

    #result-box {
        height: auto;
        min-height: 3;
        border: heavy $secondary;
        padding: 0 1;
    }

    #command-box {
        dock: bottom;
    }
    """

    BINDINGS = [
        ("f1", "show_help", "Help"),
        ("ctrl+q", "quit", "Quit"),
    ]

    def __init__(self, logic: LogicManager) -> None:
        super().__init__()
        self.logic = logic
        self.last_result: CommandResult | None = None
        self.last_error: str | None = None
        self.panel_text: dict[EntityKind, Text | str] = {}

    def compose(self) -> ComposeResult:
        yield Header()
        with Horizontal(id="main-layout"):
            with Vertical(id="left-column"):
                yield from self._compose_pane(EntityKind.CUSTOMER)
                yield from self._compose_pane(EntityKind.DRIVER)
            with Vertical(id="right-column"):
                yield from self._compose_pane(EntityKind.ORDER)
                yield from self._compose_pane(EntityKind.DISH)
        yield Static(_WELCOME, id="result-box")
        yield Input(placeholder="e.g. mark 1 s/DELIVERED", id="command-box")

    def _compose_pane(self, kind: EntityKind) -> ComposeResult:
        with Vertical(classes="pane"):
            yield Static(_PANEL_TITLES[kind], classes="pane-title")
            with VerticalScroll(classes="pane-scroll"):
                yield Static(id=panel_id(kind), classes="pane-list")

    def on_mount(self) -> None:
        logger.info("App mounted")
        self._refresh_panels(tuple(EntityKind))
        self.query_one("#command-box", Input).focus()

    def on_input_submitted(self, event: Input.Submitted) -> None:
        command_text = event.value
        if not command_text.strip():
            return

        try:
            result = self.logic.execute(command_text)
        except DeliveryBookError as exc:
            self.last_error = str(exc)
            self._show_feedback(str(exc), error=True)
            # A failed save leaves the change applied in memory.
            self._refresh_panels(tuple(EntityKind))
            return

        self.last_error = None
        self.last_result = result
        event.input.value = ""
        self._show_feedback(result.feedback)
        self._refresh_panels(result.refresh)

        if result.show_help:
            self.action_show_help()
        if result.exit:
            self.exit()

    def action_show_help(self) -> None:
        if isinstance(self.screen, HelpModal):
            return
        self.push_screen(HelpModal())

    def _show_feedback(self, message: str, error: bool = False) -> None:
        box = self.query_one("#result-box", Static)
        box.update(Text(message, style="#ffb3b3" if error else "white"))

    def _refresh_panels(self, kinds: tuple[EntityKind, ...] | frozenset[EntityKind]) -> None:
        for kind in kinds:
            try:
                widget = self.query_one(f"#{panel_id(kind)}", Static)
            except NoMatches:
                continue
            rendered = format_entity_list(self.logic.filtered(kind), empty=f"(no {_PANEL_TITLES[kind].lower()} yet)")
            self.panel_text[kind] = rendered
            widget.update(rendered)
