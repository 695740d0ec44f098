"""Category selection screen."""

from __future__ import annotations

from rich.text import Text
from textual.app import ComposeResult
from textual.widgets import Label, ListItem, ListView, Static

from ...domain.catalog import ActionKind, Catalog
from ..navigation import SelectCategory
from ..widgets import TitleBanner
from .base import LauncherScreen


class MainMenuScreen(LauncherScreen):
    """Lists the action categories with their action counts."""

    def __init__(self, catalog: Catalog) -> None:
        super().__init__()
        self.catalog = catalog

    def compose_body(self) -> ComposeResult:
        yield TitleBanner(self.catalog.app.title, id="title-banner")
        yield Static(Text(self.catalog.app.subtitle, style="grey66"), id="subtitle")
        yield ListView(
            *[
                ListItem(
                    Label(f"{kind.heading} ({len(self.catalog.actions_of(kind))})"),
                    id=f"category-{kind.value}",
                )
                for kind in ActionKind
            ],
            id="category-list",
        )
        yield Static(
            "[dim]↑↓ move  Enter select  Esc quit  Ctrl+D toggle dry run[/dim]",
            id="screen-help",
        )

    def on_list_view_selected(self, event: ListView.Selected) -> None:
        item_id = str(event.item.id or "")
        if item_id.startswith("category-"):
            self.navigate(SelectCategory(ActionKind(item_id.removeprefix("category-"))))
