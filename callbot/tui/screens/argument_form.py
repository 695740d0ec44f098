"""Argument form with picklist typeahead and inline validation."""

from __future__ import annotations

from typing import Dict, Mapping

from rich.text import Text
from textual.app import ComposeResult
from textual.binding import Binding
from textual.suggester import SuggestFromList
from textual.widgets import Button, Input, Label, Static

from ...domain.catalog import ActionSpec
from ...services.argument_resolver import ArgumentResolver
from ..navigation import NavigationState, SubmitForm
from .base import LauncherScreen

_MAX_HINTS = 6


class ArgumentFormScreen(LauncherScreen):
    """Collects one value per declared argument of ``action``."""

    BINDINGS = [
        Binding("ctrl+s", "submit", "Preview"),
    ]

    def __init__(
        self,
        action: ActionSpec,
        resolver: ArgumentResolver,
        prefill: Mapping[str, str],
    ) -> None:
        super().__init__()
        self.action = action
        self.resolver = resolver
        self.prefill = dict(prefill)

    def compose_body(self) -> ComposeResult:
        yield Label(self.action.label, id="screen-title")
        if self.action.description:
            yield Static(Text(self.action.description, style="grey66"), id="screen-help")
        for arg in self.action.args:
            suggestions = [known.name for known in self.resolver.suggestions(self.action, arg.name)]
            yield Label(f"{arg.title} *", classes="field-label")
            yield Input(
                value=self.prefill.get(arg.name, ""),
                placeholder=arg.description or arg.title,
                suggester=SuggestFromList(suggestions, case_sensitive=False) if suggestions else None,
                id=f"arg-{arg.name}",
            )
            yield Static("", id=f"hint-{arg.name}", classes="field-hint")
            yield Static("", id=f"error-{arg.name}", classes="field-error")
        yield Button("Preview", id="submit-form", variant="primary")
        yield Static("[dim]Tab next field  → accept suggestion  Ctrl+S preview  Esc back[/dim]")

    def on_mount(self) -> None:
        for arg in self.action.args:
            self._render_hint(arg.name, self.prefill.get(arg.name, ""))

    def _values(self) -> Dict[str, str]:
        return {
            arg.name: self.query_one(f"#arg-{arg.name}", Input).value
            for arg in self.action.args
        }

    def _render_hint(self, name: str, typed: str) -> None:
        hint = self.query_one(f"#hint-{name}", Static)
        known = self.resolver.suggestions(self.action, name)
        if not known:
            hint.update("")
            return
        value = typed.strip()
        matches = self.resolver.matching(self.action, name, value)
        text = Text()
        if value and all(candidate.name != value for candidate in known):
            text.append("Custom value  ", style="yellow")
        if matches:
            shown = ", ".join(candidate.display for candidate in matches[:_MAX_HINTS])
            if len(matches) > _MAX_HINTS:
                shown += ", ..."
            text.append(f"Known: {shown}", style="grey66")
        hint.update(text)

    def action_submit(self) -> None:
        self.navigate(SubmitForm(self._values()))

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "submit-form":
            self.action_submit()

    def on_input_changed(self, event: Input.Changed) -> None:
        input_id = str(event.input.id or "")
        if input_id.startswith("arg-"):
            self._render_hint(input_id.removeprefix("arg-"), event.value)

    def on_input_submitted(self, event: Input.Submitted) -> None:
        names = list(self.action.arg_names)
        name = str(event.input.id or "").removeprefix("arg-")
        if name in names and names.index(name) < len(names) - 1:
            self.query_one(f"#arg-{names[names.index(name) + 1]}", Input).focus()
            return
        self.action_submit()

    def refresh_state(self, state: NavigationState) -> None:
        super().refresh_state(state)
        for arg in self.action.args:
            message = self.query_one(f"#error-{arg.name}", Static)
            if arg.name in state.field_errors:
                message.update(Text(state.field_errors[arg.name], style="red"))
            elif arg.name in state.warnings:
                message.update(Text(state.warnings[arg.name], style="yellow"))
            else:
                message.update("")
