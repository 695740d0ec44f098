"""Domain-level shared models and registries."""

from .catalog import (
    DEFAULT_PICKLISTS,
    SERVER_ARGS,
    ActionKind,
    ActionSpec,
    AppInfo,
    ArgumentSpec,
    Catalog,
    CatalogError,
    KnownValue,
    build_catalog,
    load_catalog,
)

__all__ = [
    "ActionKind",
    "ActionSpec",
    "AppInfo",
    "ArgumentSpec",
    "Catalog",
    "CatalogError",
    "KnownValue",
    "DEFAULT_PICKLISTS",
    "SERVER_ARGS",
    "build_catalog",
    "load_catalog",
]
