"""Line-oriented runtime built on Rich and questionary.

Drives the same ``NavigationStateMachine`` as the Textual app, one prompt per
screen. Questionary releases the terminal between prompts, so Run needs no
extra terminal handover here.
"""

from __future__ import annotations

from typing import Optional

from questionary import Choice
from rich import box
from rich.panel import Panel
from rich.syntax import Syntax
from rich.text import Text

from ..domain.catalog import ActionKind, Catalog
from ..services.argument_resolver import ArgumentResolver
from ..services.contracts import LastUsedStore
from ..services.process_runner import ExecutionMode, ProcessRunner
from .console import console
from .inputs import BACK, _autocomplete, _select_back, _text, back_choice
from .navigation import (
    ActionList,
    ArgumentForm,
    Back,
    CommitField,
    Confirm,
    Event,
    MainMenu,
    NavigationStateMachine,
    Preview,
    SelectAction,
    SelectCategory,
    SubmitForm,
    ToggleDryRun,
)
from .widgets.title_banner import banner_lines

_TOGGLE_DRY_RUN = "__dry_run__"


class PromptLauncher:
    """Prompt-per-screen launcher loop."""

    def __init__(
        self,
        catalog: Catalog,
        *,
        last_used: Optional[LastUsedStore] = None,
        shell: str = "/bin/sh",
        force_dry_run: bool = False,
        runner: Optional[ProcessRunner] = None,
    ) -> None:
        self.catalog = catalog
        runner = runner or ProcessRunner(shell=shell, force_dry_run=force_dry_run)
        self.machine = NavigationStateMachine(
            catalog, ArgumentResolver(catalog, last_used), runner
        )

    def display_banner(self) -> None:
        console.print(Text("\n".join(banner_lines(self.catalog.app.title)), style="bold #ffa500"))
        console.print(Text(self.catalog.app.subtitle, style="grey66"))
        if self.catalog.broken:
            console.print(
                Text(f"{len(self.catalog.broken)} misconfigured action(s) in the catalog.", style="yellow")
            )

    def run(self) -> None:
        self.display_banner()
        while not self.machine.state.exit_requested:
            self.step()

    def _send(self, event: Event) -> None:
        state = self.machine.handle(event)
        if state.error:
            console.print(Text(state.error, style="bold red"))

    def step(self) -> None:
        screen = self.machine.state.screen
        if isinstance(screen, MainMenu):
            self._main_menu()
        elif isinstance(screen, ActionList):
            self._action_list(screen.kind)
        elif isinstance(screen, ArgumentForm):
            self._argument_form()
        elif isinstance(screen, Preview):
            self._preview(screen.command)

    def _main_menu(self) -> None:
        mode = "dry run forced" if self.machine.dry_run_forced else "live"
        choices = [
            Choice(f"{kind.heading} ({len(self.catalog.actions_of(kind))})", value=kind.value)
            for kind in ActionKind
        ]
        choices.append(Choice(f"Toggle dry run (now: {mode})", value=_TOGGLE_DRY_RUN))
        choices.append(back_choice("Quit"))
        picked = _select_back(self.catalog.app.title, choices)
        if picked in (BACK, None):
            self._send(Back())
        elif picked == _TOGGLE_DRY_RUN:
            self._send(ToggleDryRun())
        else:
            self._send(SelectCategory(ActionKind(picked)))

    def _action_list(self, kind: ActionKind) -> None:
        choices = []
        for action in self.catalog.actions_of(kind):
            title = action.label
            if action.description:
                title = f"{title}: {action.description}"
            if self.catalog.problems_for(action.id):
                title = f"{title} (misconfigured)"
            choices.append(Choice(title, value=action.id))
        choices.append(back_choice())
        picked = _select_back(self.machine.breadcrumb(), choices)
        if picked in (BACK, None):
            self._send(Back())
        else:
            self._send(SelectAction(picked))

    def _argument_form(self) -> None:
        state = self.machine.state
        action = state.selected_action
        assert action is not None
        console.print(Text(self.machine.breadcrumb(), style="dim"))
        resolver = self.machine.resolver
        for arg in action.args:
            while True:
                committed = self.machine.state.value_for(arg.name)
                default = committed.value if committed else self.machine.state.prefill.get(arg.name, "")
                known = resolver.suggestions(action, arg.name)
                label = f"{arg.title}:"
                if known:
                    raw = _autocomplete(
                        label,
                        [candidate.name for candidate in known],
                        default=default,
                        meta_information={c.name: c.label for c in known if c.label},
                    )
                else:
                    raw = _text(label, default=default, instruction=arg.description or None)
                if raw is None:
                    self._send(Back())
                    return
                self._send(CommitField(arg.name, raw))
                current = self.machine.state
                if arg.name in current.field_errors:
                    console.print(Text(current.field_errors[arg.name], style="red"))
                    continue
                if arg.name in current.warnings:
                    console.print(Text(current.warnings[arg.name], style="yellow"))
                break
        self._send(SubmitForm())

    def _preview(self, command: str) -> None:
        state = self.machine.state
        action = state.selected_action
        assert action is not None
        console.print(
            Panel(
                Syntax(command, "bash", word_wrap=True),
                title=action.label,
                box=box.ROUNDED,
                border_style="cyan",
            )
        )
        run_label = "Run (dry run forced)" if self.machine.dry_run_forced else "Run"
        picked = _select_back(
            "Execute?",
            [
                Choice("Echo", value=ExecutionMode.ECHO.value),
                Choice(run_label, value=ExecutionMode.RUN.value),
                back_choice(),
            ],
        )
        if picked in (BACK, None):
            self._send(Back())
            return
        self._send(Confirm(ExecutionMode(picked)))
        outcome = self.machine.state.result
        if outcome is not None:
            console.print(Text(outcome.message, style="green" if outcome.succeeded else "yellow"))
