"""Binding regression tests for the Textual app."""

from callbot.tui.screens import ArgumentFormScreen, PreviewScreen
from callbot.tui.textual_app import CallbotApp


def test_global_bindings_include_primary_shortcuts():
    keys = {binding.key for binding in CallbotApp.BINDINGS}

    assert "escape" in keys
    assert "ctrl+d" in keys
    assert "ctrl+q" in keys


def test_preview_bindings_confirm_echo_and_run():
    actions = {binding.key: binding.action for binding in PreviewScreen.BINDINGS}

    assert actions == {"e": "echo", "r": "run"}


def test_form_binding_submits():
    keys = {binding.key for binding in ArgumentFormScreen.BINDINGS}

    assert "ctrl+s" in keys
