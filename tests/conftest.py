"""
Pytest configuration and fixtures for Callbot tests.
"""

from typing import Dict, Mapping, Optional

import pytest

from callbot.domain.catalog import build_catalog
from callbot.services.argument_resolver import ArgumentResolver
from callbot.services.process_runner import ProcessRunner


class FakeLastUsedStore:
    """In-memory stand-in for the JSON last-used store."""

    def __init__(self, values: Optional[Dict[str, str]] = None):
        self.values = dict(values or {})
        self.updates = []

    def get(self, key: str) -> Optional[str]:
        return self.values.get(key)

    def update(self, values: Mapping[str, str]) -> None:
        self.updates.append(dict(values))
        self.values.update(values)


class RecordingRunner(ProcessRunner):
    """Runner that records commands instead of spawning a shell."""

    def __init__(self, *, force_dry_run: bool = False, exit_code: int = 0):
        super().__init__(force_dry_run=force_dry_run)
        self.exit_code = exit_code
        self.spawned = []

    def _resolve_shell(self) -> str:
        return "/bin/sh"

    def run(self, command):
        from callbot.services.process_runner import ExecutionMode, RunOutcome

        self.spawned.append(command)
        return RunOutcome(mode=ExecutionMode.RUN, command=command, exit_code=self.exit_code)


@pytest.fixture
def catalog_payload():
    return {
        "app": {"title": "CALLBOT", "subtitle": "Test launcher"},
        "known": {
            "environments": [
                {"name": "qlf", "label": "Qualification"},
                {"name": "pprod", "label": "Pre-production"},
                {"name": "pprod_legacy"},
                {"name": "prod", "label": "Production"},
            ],
            "servers": ["och01", "och02", "batch01"],
        },
        "actions": [
            {
                "id": "cmr",
                "kind": "project",
                "label": "Create merge request",
                "args": ["branch"],
                "template": "./scripts/cmr.sh --branch {branch}",
            },
            {
                "id": "deploySnapshot",
                "kind": "project",
                "label": "Deploy snapshot",
                "args": ["branch"],
                "template": "./scripts/deploySnapshot.sh --branch {branch}",
            },
            {
                "id": "status",
                "kind": "project",
                "label": "Repository status",
                "template": "git status --short",
            },
            {
                "id": "restart",
                "kind": "server",
                "label": "Restart service",
                "args": ["env", "server"],
                "template": "./scripts/restart.sh --env {env} --server {server}",
            },
        ],
    }


@pytest.fixture
def catalog(catalog_payload):
    return build_catalog(catalog_payload)


@pytest.fixture
def last_used():
    return FakeLastUsedStore()


@pytest.fixture
def resolver(catalog, last_used):
    return ArgumentResolver(catalog, last_used)


@pytest.fixture
def runner():
    return RecordingRunner()


@pytest.fixture
def make_runner():
    return RecordingRunner


@pytest.fixture
def make_store():
    return FakeLastUsedStore
