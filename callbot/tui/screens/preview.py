"""Command preview with Echo and Run confirmations."""

from __future__ import annotations

from rich.syntax import Syntax
from rich.text import Text
from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal
from textual.widgets import Button, Label, Static

from ...domain.catalog import ActionSpec
from ...services.process_runner import ExecutionMode
from ..navigation import Confirm, NavigationState
from .base import LauncherScreen


class PreviewScreen(LauncherScreen):
    """Shows the exact command; nothing runs until Echo or Run is confirmed."""

    BINDINGS = [
        Binding("e", "echo", "Echo"),
        Binding("r", "run", "Run"),
    ]

    def __init__(self, action: ActionSpec, command: str) -> None:
        super().__init__()
        self.action = action
        self.command = command

    def compose_body(self) -> ComposeResult:
        yield Label(self.action.label, id="screen-title")
        if self.action.description:
            yield Static(Text(self.action.description, style="grey66"), id="screen-help")
        yield Static(Syntax(self.command, "bash", word_wrap=True), id="command")
        yield Static("", id="mode-hint")
        with Horizontal(id="confirm-dock"):
            yield Button("Echo (e)", id="confirm-echo")
            yield Button("Run (r)", id="confirm-run", variant="warning")
        yield Static("", id="run-result")

    def action_echo(self) -> None:
        self.navigate(Confirm(ExecutionMode.ECHO))

    def action_run(self) -> None:
        self.navigate(Confirm(ExecutionMode.RUN))

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "confirm-echo":
            self.action_echo()
        elif event.button.id == "confirm-run":
            self.action_run()

    def refresh_state(self, state: NavigationState) -> None:
        super().refresh_state(state)
        hint = self.query_one("#mode-hint", Static)
        if self.launcher.machine.dry_run_forced:
            hint.update(Text("Dry run forced: Run only echoes the command.", style="yellow"))
        else:
            hint.update("")

        result = self.query_one("#run-result", Static)
        outcome = state.result
        if outcome is None:
            result.update("")
            return
        style = "green" if outcome.succeeded else "yellow"
        result.update(Text(outcome.message, style=style))
