"""
Shared helpers for CLI commands.
"""

import os
from pathlib import Path
from typing import Any, NoReturn

import typer

from modcompile.config.loader import Config, load_config
from modcompile.core.types import CompileOptions, Entry
from modcompile.exceptions import ModcompileError
from modcompile.utils.logging import get_logger, setup_logging_from_config

logger = get_logger("modcompile.cli")

ENTRIES_HELP = "Files to compile, in order. Prefix a file with 'script:' to load it as a script."
PROJECT_DIR_HELP = "Directory holding modcompile.yaml; relative entry and output paths are resolved against it"


def fail(message: str, cause: BaseException | None = None) -> NoReturn:
    """Report an error and exit with status 1."""
    logger.error(message)
    typer.echo(f"Error: {message}", err=True)
    raise typer.Exit(1) from cause


def load_project(project_dir: Path, env: str | None, verbose: bool) -> Config:
    """Load modcompile.yaml (if any) and configure logging from it."""
    try:
        config = load_config(project_dir, env=env or os.environ.get("MODCOMPILE_ENV"))
    except ModcompileError as e:
        fail(str(e), e)
    setup_logging_from_config(config.data, project_dir=project_dir, verbose=verbose)
    return config


def build_options(config: Config, **overrides: Any) -> CompileOptions:
    try:
        return CompileOptions.from_mapping(config.compile, **overrides)
    except ModcompileError as e:
        fail(str(e), e)


def parse_entries(specs: list[str]) -> list[Entry]:
    return [Entry.parse(spec) for spec in specs]
