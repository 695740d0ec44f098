"""Callbot prompt-runtime input helpers."""

from typing import List

import questionary
from prompt_toolkit.key_binding import KeyBindings, merge_key_bindings
from questionary import Choice

BACK = "__back__"


def _select_back(message, choices, instruction="(↑↓ move | Enter select | Esc back)"):
    """Arrow-key select where Esc (or q) returns ``BACK``. Ctrl+C also goes back."""
    kb = KeyBindings()

    @kb.add("escape", eager=True)
    def _back_on_escape(event):
        event.app.exit(result=BACK)

    @kb.add("q")
    def _back_on_q(event):
        event.app.exit(result=BACK)

    try:
        q = questionary.select(message, choices=choices, instruction=instruction)
        orig = q.application.key_bindings
        q.application.key_bindings = merge_key_bindings([orig, kb]) if orig else kb
        return q.unsafe_ask()
    except (KeyboardInterrupt, EOFError):
        return BACK


def _text(message, default="", instruction=None):
    """questionary text input with default; None on Ctrl+C."""
    try:
        return questionary.text(message, default=default, instruction=instruction).ask()
    except KeyboardInterrupt:
        return None


def _autocomplete(message, choices: List[str], default="", meta_information=None):
    """Typeahead input over known values; free text is still accepted."""
    try:
        return questionary.autocomplete(
            message,
            choices=choices,
            default=default,
            meta_information=meta_information or {},
            ignore_case=True,
            match_middle=True,
        ).ask()
    except KeyboardInterrupt:
        return None


def back_choice(label: str = "← Back") -> Choice:
    return Choice(label, value=BACK)
