"""Runtime facade for selecting and bootstrapping Callbot interfaces."""

from __future__ import annotations

from typing import Optional

from ..config.settings import settings
from ..domain.catalog import Catalog, load_catalog
from ..services.startup_checks import ensure_catalog_file
from .logging import bind_session, log_tui_event
from .services.last_used_store import LastUsedStore


def load_configured_catalog(config_path: Optional[str] = None) -> Catalog:
    """Check and load the catalog named by ``config_path`` or the settings."""
    path = ensure_catalog_file(config_path or settings.catalog.path)
    catalog = load_catalog(path, strict=settings.catalog.strict)
    log_tui_event(
        "catalog_loaded",
        path=str(path),
        actions=len(catalog.actions),
        broken=sorted(catalog.broken),
    )
    return catalog


def _last_used_store() -> Optional[LastUsedStore]:
    if not settings.state.enabled:
        return None
    return LastUsedStore(settings.state.last_used_path)


def run_tui(catalog: Catalog, ui: str = "textual", *, dry_run: bool = False) -> None:
    """Run selected TUI runtime."""
    options = dict(
        last_used=_last_used_store(),
        shell=settings.runner.shell,
        force_dry_run=dry_run or settings.runner.force_dry_run,
    )
    bind_session(ui=ui)
    log_tui_event("runtime_started", force_dry_run=options["force_dry_run"])
    if ui == "prompt":
        from .prompt_app import PromptLauncher

        PromptLauncher(catalog, **options).run()
        return

    from .textual_app import CallbotApp

    CallbotApp(catalog, **options).run()


def run(
    *,
    ui: str = "textual",
    config_path: Optional[str] = None,
    dry_run: bool = False,
) -> None:
    """Load the catalog then hand over to the chosen runtime."""
    catalog = load_configured_catalog(config_path)
    run_tui(catalog, ui=ui, dry_run=dry_run)
