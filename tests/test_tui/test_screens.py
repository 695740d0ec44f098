"""Textual screen unit tests for form hints and preview feedback."""

from types import SimpleNamespace
from typing import Any

from callbot.services.process_runner import ExecutionMode, RunOutcome
from callbot.tui.navigation import NavigationState, Preview, SubmitForm
from callbot.tui.screens import ArgumentFormScreen, PreviewScreen
from callbot.tui.screens.base import LauncherScreen


class _FakeStatic:
    def __init__(self, value=""):
        self.value = value

    def update(self, value):
        self.value = value


class _FakeInput:
    def __init__(self, value=""):
        self.value = value


def _plain(value) -> str:
    return getattr(value, "plain", value)


def test_form_hint_flags_custom_server(monkeypatch, catalog, resolver):
    screen = ArgumentFormScreen(catalog.get("restart"), resolver, {})
    widgets: dict[str, Any] = {"#hint-server": _FakeStatic()}
    monkeypatch.setattr(screen, "query_one", lambda selector, *_: widgets[selector])

    screen._render_hint("server", "och99")

    assert "Custom value" in _plain(widgets["#hint-server"].value)


def test_form_hint_lists_matching_known_values(monkeypatch, catalog, resolver):
    screen = ArgumentFormScreen(catalog.get("restart"), resolver, {})
    widgets: dict[str, Any] = {"#hint-env": _FakeStatic()}
    monkeypatch.setattr(screen, "query_one", lambda selector, *_: widgets[selector])

    screen._render_hint("env", "pp")

    hint = _plain(widgets["#hint-env"].value)
    assert "Custom value" in hint
    assert "pprod (Pre-production)" in hint
    assert "qlf" not in hint


def test_form_hint_is_empty_for_free_text_fields(monkeypatch, catalog, resolver):
    screen = ArgumentFormScreen(catalog.get("cmr"), resolver, {})
    widgets: dict[str, Any] = {"#hint-branch": _FakeStatic("stale")}
    monkeypatch.setattr(screen, "query_one", lambda selector, *_: widgets[selector])

    screen._render_hint("branch", "feature/xyz")

    assert widgets["#hint-branch"].value == ""


def test_form_submit_sends_every_field_value(monkeypatch, catalog, resolver):
    screen = ArgumentFormScreen(catalog.get("restart"), resolver, {})
    widgets: dict[str, Any] = {
        "#arg-env": _FakeInput("qlf"),
        "#arg-server": _FakeInput("och01"),
    }
    sent = []
    monkeypatch.setattr(screen, "query_one", lambda selector, *_: widgets[selector])
    monkeypatch.setattr(screen, "navigate", sent.append)

    screen.action_submit()

    assert sent == [SubmitForm({"env": "qlf", "server": "och01"})]


def test_form_shows_errors_before_warnings(monkeypatch, catalog, resolver):
    screen = ArgumentFormScreen(catalog.get("restart"), resolver, {})
    widgets: dict[str, Any] = {
        "#error-env": _FakeStatic(),
        "#error-server": _FakeStatic(),
    }
    monkeypatch.setattr(screen, "query_one", lambda selector, *_: widgets[selector])
    monkeypatch.setattr(LauncherScreen, "refresh_state", lambda self, state: None)

    state = NavigationState(
        field_errors={"env": "Env is required."},
        warnings={"env": "ignored", "server": "'och99' is not in the known servers"},
    )
    screen.refresh_state(state)

    assert _plain(widgets["#error-env"].value) == "Env is required."
    assert "och99" in _plain(widgets["#error-server"].value)


def test_preview_reports_outcome(monkeypatch, catalog):
    screen = PreviewScreen(catalog.get("cmr"), "./scripts/cmr.sh --branch main")
    widgets: dict[str, Any] = {
        "#mode-hint": _FakeStatic(),
        "#run-result": _FakeStatic(),
    }
    monkeypatch.setattr(screen, "query_one", lambda selector, *_: widgets[selector])
    monkeypatch.setattr(LauncherScreen, "refresh_state", lambda self, state: None)
    monkeypatch.setattr(
        PreviewScreen,
        "launcher",
        SimpleNamespace(machine=SimpleNamespace(dry_run_forced=True)),
    )

    state = NavigationState(
        screen=Preview("cmr", "./scripts/cmr.sh --branch main"),
        result=RunOutcome(mode=ExecutionMode.RUN, command="x", exit_code=1),
    )
    screen.refresh_state(state)

    assert "Dry run forced" in _plain(widgets["#mode-hint"].value)
    assert _plain(widgets["#run-result"].value) == "Command exited with status 1"


def test_preview_buttons_confirm_modes(monkeypatch, catalog):
    screen = PreviewScreen(catalog.get("cmr"), "./scripts/cmr.sh --branch main")
    sent = []
    monkeypatch.setattr(screen, "navigate", sent.append)

    screen.on_button_pressed(SimpleNamespace(button=SimpleNamespace(id="confirm-echo")))
    screen.on_button_pressed(SimpleNamespace(button=SimpleNamespace(id="confirm-run")))

    assert [event.mode for event in sent] == [ExecutionMode.ECHO, ExecutionMode.RUN]
