"""Textual-based TUI runtime for Callbot."""

from __future__ import annotations

from contextlib import ExitStack, contextmanager
from typing import Iterator, Optional

from textual.app import App, ComposeResult, SuspendNotSupported
from textual.binding import Binding
from textual.screen import Screen
from textual.widgets import Footer, Header

from ..domain.catalog import Catalog
from ..services.argument_resolver import ArgumentResolver
from ..services.contracts import LastUsedStore
from ..services.process_runner import ProcessRunner, SpawnError
from .logging import log_tui_event
from .navigation import (
    ActionList,
    ArgumentForm,
    Back,
    Event,
    MainMenu,
    NavigationState,
    NavigationStateMachine,
    ToggleDryRun,
)
from .screens import (
    ActionListScreen,
    ArgumentFormScreen,
    LauncherScreen,
    MainMenuScreen,
    PreviewScreen,
)


class CallbotApp(App[None]):
    """Full-screen launcher; every screen change goes through the state machine."""

    CSS = """
    #screen-body {
        padding: 1 2;
    }

    #screen-title {
        text-style: bold;
        color: cyan;
        margin-bottom: 1;
    }

    #screen-help {
        color: $text-muted;
    }

    #screen-error {
        margin-top: 1;
    }

    #command {
        border: round $primary;
        padding: 0 1;
        margin: 1 0;
    }

    #confirm-dock {
        height: auto;
    }

    .field-label {
        margin-top: 1;
    }
    """

    BINDINGS = [
        Binding("escape", "back", "Back"),
        Binding("ctrl+d", "toggle_dry_run", "Dry run"),
        Binding("ctrl+q", "quit", "Quit"),
    ]

    def __init__(
        self,
        catalog: Catalog,
        *,
        last_used: Optional[LastUsedStore] = None,
        shell: str = "/bin/sh",
        force_dry_run: bool = False,
        runner: Optional[ProcessRunner] = None,
    ) -> None:
        super().__init__()
        self.catalog = catalog
        if runner is None:
            runner = ProcessRunner(
                shell=shell,
                force_dry_run=force_dry_run,
                terminal_guard=self._terminal_handover,
            )
        self.machine = NavigationStateMachine(
            catalog, ArgumentResolver(catalog, last_used), runner
        )
        self.title = catalog.app.title
        self.sub_title = catalog.app.subtitle

    def compose(self) -> ComposeResult:
        yield Header()
        yield Footer()

    def on_mount(self) -> None:
        self.push_screen(self._build_screen(self.machine.state))
        if self.catalog.broken:
            self.notify(
                f"{len(self.catalog.broken)} misconfigured action(s) in the catalog.",
                title="Catalog",
                severity="warning",
            )

    @contextmanager
    def _terminal_handover(self) -> Iterator[None]:
        with ExitStack() as stack:
            try:
                stack.enter_context(self.suspend())
            except SuspendNotSupported as exc:
                raise SpawnError("This terminal cannot be handed over to a child process") from exc
            log_tui_event("terminal_released")
            yield
        log_tui_event("terminal_restored")

    def _build_screen(self, state: NavigationState) -> Screen:
        screen = state.screen
        if isinstance(screen, MainMenu):
            return MainMenuScreen(self.catalog)
        if isinstance(screen, ActionList):
            return ActionListScreen(self.catalog, screen.kind)
        assert state.selected_action is not None
        if isinstance(screen, ArgumentForm):
            return ArgumentFormScreen(state.selected_action, self.machine.resolver, state.prefill)
        return PreviewScreen(state.selected_action, screen.command)

    def navigate(self, event: Event) -> NavigationState:
        """Feed ``event`` to the state machine and bring the display in line."""
        before = self.machine.state.screen
        state = self.machine.handle(event)
        if state.exit_requested:
            self.exit()
            return state
        if state.screen != before:
            self.switch_screen(self._build_screen(state))
        elif isinstance(self.screen, LauncherScreen):
            self.screen.refresh_state(state)
        return state

    def action_back(self) -> None:
        self.navigate(Back())

    def action_toggle_dry_run(self) -> None:
        self.navigate(ToggleDryRun())
        forced = self.machine.dry_run_forced
        self.notify("Dry run forced: Run will only echo." if forced else "Live mode: Run executes.")
