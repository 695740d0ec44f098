"""Action list for one category."""

from __future__ import annotations

from rich.text import Text
from textual.app import ComposeResult
from textual.widgets import Label, ListItem, ListView, Static

from ...domain.catalog import ActionKind, ActionSpec, Catalog
from ..navigation import SelectAction
from .base import LauncherScreen


def _action_row(action: ActionSpec, broken: bool) -> Text:
    row = Text(action.label, style="bold")
    if action.description:
        row.append(f"  {action.description}", style="grey66")
    if broken:
        row.append("  (misconfigured)", style="bold red")
    return row


class ActionListScreen(LauncherScreen):
    """Shows the actions of one kind; misconfigured ones are flagged."""

    def __init__(self, catalog: Catalog, kind: ActionKind) -> None:
        super().__init__()
        self.catalog = catalog
        self.kind = kind
        self._actions = catalog.actions_of(kind)

    def compose_body(self) -> ComposeResult:
        yield Label(self.kind.heading, id="screen-title")
        if not self._actions:
            yield Static("No actions in this category.", id="screen-help")
            return
        yield ListView(
            *[
                ListItem(
                    Label(_action_row(action, bool(self.catalog.problems_for(action.id)))),
                    id=f"action-{index}",
                )
                for index, action in enumerate(self._actions)
            ],
            id="action-list",
        )
        yield Static("[dim]↑↓ move  Enter open  Esc back[/dim]", id="screen-help")

    def on_list_view_selected(self, event: ListView.Selected) -> None:
        item_id = str(event.item.id or "")
        if not item_id.startswith("action-"):
            return
        action = self._actions[int(item_id.removeprefix("action-"))]
        self.navigate(SelectAction(action.id))
