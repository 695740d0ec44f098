"""Services package for Callbot."""

from .argument_resolver import (
    ArgumentResolver,
    ArgumentValidationError,
    ArgumentValue,
    Resolution,
)
from .error_mapper import ErrorMapping, map_exception
from .process_runner import ExecutionMode, ProcessRunner, RunOutcome, SpawnError
from .startup_checks import StartupCheckError, ensure_catalog_file
from .template_engine import MissingArgument, ResolutionError, render, shell_escape

__all__ = [
    "ArgumentResolver",
    "ArgumentValidationError",
    "ArgumentValue",
    "Resolution",
    "ErrorMapping",
    "map_exception",
    "ExecutionMode",
    "ProcessRunner",
    "RunOutcome",
    "SpawnError",
    "StartupCheckError",
    "ensure_catalog_file",
    "MissingArgument",
    "ResolutionError",
    "render",
    "shell_escape",
]
