"""Action catalog models, loading and load-time validation."""

from __future__ import annotations

import tomllib
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from ..services.template_engine import placeholders

SERVER_ARGS: Tuple[str, ...] = ("env", "server")

# Argument names that pick their suggestions from a known-values category
# unless the catalog says otherwise.
DEFAULT_PICKLISTS: Dict[str, str] = {
    "env": "environments",
    "server": "servers",
}


class CatalogError(RuntimeError):
    """Raised when the catalog file cannot be read or is structurally invalid."""


class ActionKind(str, Enum):
    PROJECT = "project"
    SERVER = "server"

    @property
    def heading(self) -> str:
        return {"project": "Project actions", "server": "Server actions"}[self.value]


class KnownValue(BaseModel):
    """One entry of a known-values category (environment, server, ...)."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    name: str = Field(min_length=1)
    label: str = ""

    @property
    def display(self) -> str:
        if self.label and self.label != self.name:
            return f"{self.name} ({self.label})"
        return self.name


class ArgumentSpec(BaseModel):
    """A named argument of an action, substituted into its template."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    name: str = Field(min_length=1)
    label: str = ""
    description: str = ""
    default: Optional[str] = None
    picklist: Optional[str] = None
    options: Tuple[KnownValue, ...] = ()

    @model_validator(mode="before")
    @classmethod
    def apply_default_picklist(cls, value: Any) -> Any:
        if not isinstance(value, dict):
            return value
        name = value.get("name")
        if value.get("picklist") is None and not value.get("options") and name in DEFAULT_PICKLISTS:
            return {**value, "picklist": DEFAULT_PICKLISTS[name]}
        return value

    @property
    def title(self) -> str:
        return self.label or self.name.replace("_", " ").capitalize()

    @property
    def has_known_set(self) -> bool:
        return bool(self.options) or self.picklist is not None


class ActionSpec(BaseModel):
    """Describes one runnable action."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    id: str = Field(min_length=1)
    kind: ActionKind
    label: str = Field(min_length=1)
    description: str = ""
    args: Tuple[ArgumentSpec, ...] = ()
    template: str = Field(min_length=1)

    @field_validator("args", mode="before")
    @classmethod
    def expand_bare_names(cls, value: Any) -> Any:
        if not isinstance(value, (list, tuple)):
            return value
        return [{"name": item} if isinstance(item, str) else item for item in value]

    @property
    def arg_names(self) -> Tuple[str, ...]:
        return tuple(arg.name for arg in self.args)

    def argument(self, name: str) -> Optional[ArgumentSpec]:
        for arg in self.args:
            if arg.name == name:
                return arg
        return None

    def problems(self, known_categories: Iterable[str] = ()) -> List[str]:
        """Return every invariant this action violates; empty when well-formed."""
        issues: List[str] = []
        names = self.arg_names
        duplicates = sorted({name for name in names if names.count(name) > 1})
        if duplicates:
            issues.append(f"duplicate arguments: {', '.join(duplicates)}")

        tokens = placeholders(self.template)
        stray = [token for token in tokens if token not in names]
        unused = [name for name in names if name not in tokens]
        if stray:
            issues.append(f"template placeholders without an argument: {', '.join(stray)}")
        if unused:
            issues.append(f"arguments missing from the template: {', '.join(unused)}")

        if self.kind is ActionKind.SERVER:
            absent = [name for name in SERVER_ARGS if name not in names]
            if absent:
                issues.append(f"server actions require arguments: {', '.join(absent)}")

        categories = set(known_categories)
        for arg in self.args:
            if arg.picklist is not None and arg.picklist not in categories:
                issues.append(f"argument '{arg.name}' uses unknown picklist '{arg.picklist}'")
        return issues


class AppInfo(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    title: str = "CALLBOT"
    subtitle: str = "Handy scripts launcher for project, servers and tooling"


class Catalog(BaseModel):
    """Immutable, ordered collection of actions plus the known-values source."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    app: AppInfo = Field(default_factory=AppInfo)
    known: Dict[str, Tuple[KnownValue, ...]] = Field(default_factory=dict)
    actions: Tuple[ActionSpec, ...] = ()
    broken: Dict[str, Tuple[str, ...]] = Field(default_factory=dict)

    @field_validator("known", mode="before")
    @classmethod
    def expand_bare_known_values(cls, value: Any) -> Any:
        if not isinstance(value, dict):
            return value
        return {
            category: [{"name": item} if isinstance(item, str) else item for item in entries]
            if isinstance(entries, (list, tuple))
            else entries
            for category, entries in value.items()
        }

    @model_validator(mode="after")
    def check_unique_ids(self) -> "Catalog":
        seen = set()
        for action in self.actions:
            if action.id in seen:
                raise ValueError(f"duplicate action id '{action.id}'")
            seen.add(action.id)
        return self

    def actions_of(self, kind: ActionKind) -> Tuple[ActionSpec, ...]:
        return tuple(action for action in self.actions if action.kind is kind)

    def get(self, action_id: str) -> ActionSpec:
        for action in self.actions:
            if action.id == action_id:
                return action
        raise KeyError(f"Unknown action '{action_id}'")

    def problems_for(self, action_id: str) -> Tuple[str, ...]:
        return self.broken.get(action_id, ())

    def known_values(self, category: str) -> Tuple[KnownValue, ...]:
        return self.known.get(category, ())


def build_catalog(payload: Mapping[str, Any], *, strict: bool = False) -> Catalog:
    """Validate a raw catalog mapping and flag misconfigured actions."""
    try:
        catalog = Catalog.model_validate({**payload, "broken": {}})
    except ValidationError as exc:
        raise CatalogError(f"Invalid catalog: {exc}") from exc

    if not catalog.actions:
        raise CatalogError("Catalog must define at least one action")

    broken: Dict[str, Tuple[str, ...]] = {}
    for action in catalog.actions:
        issues = action.problems(catalog.known.keys())
        if issues:
            broken[action.id] = tuple(issues)

    if broken and strict:
        details = "; ".join(f"{key}: {', '.join(issues)}" for key, issues in broken.items())
        raise CatalogError(f"Misconfigured actions: {details}")
    return catalog.model_copy(update={"broken": broken})


def load_catalog(path: Union[str, Path], *, strict: bool = False) -> Catalog:
    """Load the TOML catalog file at ``path``."""
    catalog_path = Path(path).expanduser()
    try:
        raw = catalog_path.read_text(encoding="utf-8")
    except OSError as exc:
        raise CatalogError(f"Failed to read catalog file '{catalog_path}': {exc}") from exc
    try:
        payload = tomllib.loads(raw)
    except tomllib.TOMLDecodeError as exc:
        raise CatalogError(f"Failed to parse catalog file '{catalog_path}': {exc}") from exc
    return build_catalog(payload, strict=strict)
