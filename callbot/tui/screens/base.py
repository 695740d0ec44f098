"""Base screen wiring every launcher screen to the navigation state machine."""

from __future__ import annotations

from typing import TYPE_CHECKING, cast

from rich.text import Text
from textual.app import ComposeResult
from textual.containers import Container
from textual.screen import Screen
from textual.widgets import Footer, Header, Static

from ..navigation import Event, NavigationState
from ..widgets import Breadcrumb, StatusBar

if TYPE_CHECKING:
    from ..textual_app import CallbotApp


class LauncherScreen(Screen):
    """Screen whose content is derived from the current ``NavigationState``."""

    @property
    def launcher(self) -> "CallbotApp":
        return cast("CallbotApp", self.app)

    def compose(self) -> ComposeResult:
        yield Header()
        with Container(id="screen-body"):
            yield Breadcrumb(id="breadcrumb")
            yield from self.compose_body()
            yield Static("", id="screen-error")
            yield StatusBar(id="status-bar")
        yield Footer()

    def compose_body(self) -> ComposeResult:
        yield from ()

    def on_mount(self) -> None:
        self.refresh_state(self.launcher.machine.state)

    def navigate(self, event: Event) -> None:
        self.launcher.navigate(event)

    def refresh_state(self, state: NavigationState) -> None:
        machine = self.launcher.machine
        self.query_one("#breadcrumb", Breadcrumb).set_path(machine.breadcrumb())
        self.query_one("#screen-error", Static).update(Text(state.error, style="bold red"))
        self.query_one("#status-bar", StatusBar).set_states(
            dry_run=machine.dry_run_forced,
            action_count=len(machine.catalog.actions),
            broken_count=len(machine.catalog.broken),
            shell=machine.runner.shell,
        )
