"""Navigation state machine shared by the Textual and prompt runtimes.

Screens and input events are small tagged dataclasses. ``handle`` is the
single dispatch point: it looks up the handler for the current screen and
the incoming event, so every transition and its invariants live here rather
than in the widgets.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Dict, List, Mapping, Optional, Tuple, Type, Union

from ..domain.catalog import ActionKind, ActionSpec, Catalog
from ..services.argument_resolver import (
    ArgumentResolver,
    ArgumentValidationError,
    ArgumentValue,
    as_mapping,
)
from ..services.error_mapper import map_exception
from ..services.process_runner import ExecutionMode, ProcessRunner, RunOutcome, SpawnError
from ..services.template_engine import MissingArgument, render
from .logging import log_tui_error, log_tui_event


@dataclass(frozen=True)
class MainMenu:
    pass


@dataclass(frozen=True)
class ActionList:
    kind: ActionKind


@dataclass(frozen=True)
class ArgumentForm:
    action_id: str


@dataclass(frozen=True)
class Preview:
    action_id: str
    command: str


ScreenState = Union[MainMenu, ActionList, ArgumentForm, Preview]


@dataclass(frozen=True)
class SelectCategory:
    kind: ActionKind


@dataclass(frozen=True)
class SelectAction:
    action_id: str


@dataclass(frozen=True)
class CommitField:
    name: str
    raw: str


@dataclass(frozen=True)
class SubmitForm:
    """Commit ``values`` (when given) then move on to the preview."""

    values: Optional[Mapping[str, str]] = None


@dataclass(frozen=True)
class Confirm:
    mode: ExecutionMode


@dataclass(frozen=True)
class ToggleDryRun:
    pass


@dataclass(frozen=True)
class Back:
    pass


Event = Union[SelectCategory, SelectAction, CommitField, SubmitForm, Confirm, ToggleDryRun, Back]


@dataclass
class NavigationState:
    """Single source of truth for what is on screen."""

    screen: ScreenState = field(default_factory=MainMenu)
    selected_action: Optional[ActionSpec] = None
    pending_values: List[ArgumentValue] = field(default_factory=list)
    prefill: Dict[str, str] = field(default_factory=dict)
    field_errors: Dict[str, str] = field(default_factory=dict)
    warnings: Dict[str, str] = field(default_factory=dict)
    error: str = ""
    result: Optional[RunOutcome] = None
    exit_requested: bool = False

    def value_for(self, name: str) -> Optional[ArgumentValue]:
        for item in self.pending_values:
            if item.name == name:
                return item
        return None

    def violations(self) -> List[str]:
        issues: List[str] = []
        names = [item.name for item in self.pending_values]
        if len(names) != len(set(names)):
            issues.append("duplicate pending values")
        in_session = isinstance(self.screen, (ArgumentForm, Preview))
        if in_session and self.selected_action is None:
            issues.append("no action selected")
        if not in_session and (self.selected_action is not None or self.pending_values):
            issues.append("action session outside of form/preview")
        if self.selected_action is not None:
            extra = set(names) - set(self.selected_action.arg_names)
            if extra:
                issues.append(f"values for unknown arguments: {', '.join(sorted(extra))}")
        return issues


Handler = Callable[[Event], None]


class NavigationStateMachine:
    """Routes input events to the active screen and performs transitions."""

    def __init__(
        self,
        catalog: Catalog,
        resolver: ArgumentResolver,
        runner: ProcessRunner,
    ) -> None:
        self.catalog = catalog
        self.resolver = resolver
        self.runner = runner
        self.state = NavigationState()
        self._handlers: Dict[Tuple[Type[ScreenState], Type[Event]], Handler] = {
            (MainMenu, SelectCategory): self._open_category,
            (ActionList, SelectAction): self._select_action,
            (ArgumentForm, CommitField): self._commit_field,
            (ArgumentForm, SubmitForm): self._submit_form,
            (Preview, Confirm): self._confirm,
        }

    @property
    def dry_run_forced(self) -> bool:
        return self.runner.force_dry_run

    def handle(self, event: Event) -> NavigationState:
        if isinstance(event, Back):
            self._back()
        elif isinstance(event, ToggleDryRun):
            self.runner.force_dry_run = not self.runner.force_dry_run
            log_tui_event("dry_run_toggled", forced=self.runner.force_dry_run)
        else:
            handler = self._handlers.get((type(self.state.screen), type(event)))
            if handler is None:
                log_tui_event(
                    "event_ignored",
                    screen=type(self.state.screen).__name__,
                    event_type=type(event).__name__,
                )
                return self.state
            handler(event)

        issues = self.state.violations()
        if issues:
            log_tui_error("navigation_invariant_violated", issues=issues)
        return self.state

    def breadcrumb(self) -> str:
        parts = ["Home"]
        screen = self.state.screen
        if isinstance(screen, ActionList):
            parts.append(screen.kind.heading)
        elif self.state.selected_action is not None:
            action = self.state.selected_action
            parts.extend([action.kind.heading, action.label])
            if isinstance(screen, Preview):
                parts.append("Preview")
        return " > ".join(parts)

    # -- transitions -----------------------------------------------------

    def _reset(self, screen: ScreenState) -> None:
        self.state = NavigationState(screen=screen)

    def _open_category(self, event: SelectCategory) -> None:
        self._reset(ActionList(event.kind))
        log_tui_event("screen_changed", screen="action_list", kind=event.kind.value)

    def _select_action(self, event: SelectAction) -> None:
        try:
            action = self.catalog.get(event.action_id)
        except KeyError:
            self.state.error = f"Unknown action '{event.action_id}'."
            return

        problems = self.catalog.problems_for(action.id)
        if problems:
            self.state.error = f"{action.label} is misconfigured: {'; '.join(problems)}"
            log_tui_error("action_misconfigured", action=action.id, problems=list(problems))
            return

        if action.args:
            self._open_form(action)
            return

        try:
            command = render(action.template, {})
        except MissingArgument as exc:
            self.state.error = map_exception(exc).message
            log_tui_error("render_failed", action=action.id, missing=exc.name)
            return
        self.state = NavigationState(screen=Preview(action.id, command), selected_action=action)
        log_tui_event("screen_changed", screen="preview", action=action.id)

    def _open_form(self, action: ActionSpec) -> None:
        self.state = NavigationState(
            screen=ArgumentForm(action.id),
            selected_action=action,
            prefill=self.resolver.prefill(action),
        )
        log_tui_event("screen_changed", screen="argument_form", action=action.id)

    def _commit(self, name: str, raw: Optional[str]) -> bool:
        action = self.state.selected_action
        assert action is not None
        try:
            resolution = self.resolver.resolve(action, name, raw)
        except ArgumentValidationError as exc:
            self.state.field_errors[exc.name] = exc.message
            self.state.warnings.pop(exc.name, None)
            self.state.pending_values = [v for v in self.state.pending_values if v.name != exc.name]
            return False

        self.state.field_errors.pop(name, None)
        if resolution.warning:
            self.state.warnings[name] = resolution.warning
        else:
            self.state.warnings.pop(name, None)
        committed = {v.name: v for v in self.state.pending_values}
        committed[name] = resolution.value
        self.state.pending_values = [
            committed[arg_name] for arg_name in action.arg_names if arg_name in committed
        ]
        return True

    def _commit_field(self, event: CommitField) -> None:
        self._commit(event.name, event.raw)

    def _submit_form(self, event: SubmitForm) -> None:
        action = self.state.selected_action
        assert action is not None
        if event.values is not None:
            for name in action.arg_names:
                self._commit(name, event.values.get(name))

        for arg in action.args:
            if self.state.value_for(arg.name) is None and arg.name not in self.state.field_errors:
                self.state.field_errors[arg.name] = f"{arg.title} is required."
        if self.state.field_errors:
            self.state.error = "Fix the highlighted fields."
            return

        try:
            command = render(action.template, as_mapping(self.state.pending_values))
        except MissingArgument as exc:
            self.state.error = map_exception(exc).message
            log_tui_error("render_failed", action=action.id, missing=exc.name)
            return

        self.state.screen = Preview(action.id, command)
        self.state.error = ""
        self.state.result = None
        log_tui_event(
            "screen_changed",
            screen="preview",
            action=action.id,
            unknown_values=[v.name for v in self.state.pending_values if not v.is_known],
        )

    def _confirm(self, event: Confirm) -> None:
        screen = self.state.screen
        action = self.state.selected_action
        assert isinstance(screen, Preview) and action is not None
        try:
            outcome = self.runner.execute(screen.command, event.mode)
        except SpawnError as exc:
            self.state.error = map_exception(exc).message
            log_tui_error("spawn_failed", action=action.id, error=str(exc))
            return

        self.state.result = outcome
        self.state.error = ""
        log_tui_event(
            "command_executed",
            action=action.id,
            mode=outcome.mode.value,
            forced_dry_run=outcome.forced_dry_run,
            exit_code=outcome.exit_code,
        )
        try:
            self.resolver.remember(action, self.state.pending_values)
        except OSError as exc:
            self.state.error = f"Could not save last-used values: {exc}"
            log_tui_error("last_used_save_failed", error=str(exc))
        self.state.pending_values = []

    def _back(self) -> None:
        screen = self.state.screen
        action = self.state.selected_action
        if isinstance(screen, MainMenu):
            self.state.exit_requested = True
            log_tui_event("exit_requested")
            return
        if isinstance(screen, ActionList):
            self._reset(MainMenu())
        elif isinstance(screen, ArgumentForm) and action is not None:
            self._reset(ActionList(action.kind))
        elif isinstance(screen, Preview) and action is not None:
            if not action.args:
                self._reset(ActionList(action.kind))
            else:
                kept = list(self.state.pending_values)
                self._open_form(action)
                self.state.pending_values = kept
                self.state.prefill.update({v.name: v.value for v in kept})
                return
        else:
            self._reset(MainMenu())
        log_tui_event("screen_changed", screen=type(self.state.screen).__name__)
