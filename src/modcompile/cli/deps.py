"""
modcompile deps - List the files a target depends on.
"""

import asyncio
from functools import partial
from pathlib import Path

import typer

from modcompile.cli.common import ENTRIES_HELP, PROJECT_DIR_HELP, build_options, fail, load_project, parse_entries
from modcompile.core.paths import resolve_entries
from modcompile.core.writer import recursive_module_compile
from modcompile.exceptions import ModcompileError
from modcompile.loaders.source import SourceLoader
from modcompile.loaders.text import TextCompiler


def _echo_dependency(target: str, path: str) -> None:
    typer.echo(f"{target}: {path}")


def deps(
    target: str = typer.Argument(..., help="Make target the dependencies are listed for"),
    entries: list[str] = typer.Argument(..., help=ENTRIES_HELP),
    referrer: str | None = typer.Option(None, "--referrer", help="Referrer name used to normalize module names"),
    env: str | None = typer.Option(None, help="Environment (selects modcompile.{env}.yaml)"),
    verbose: bool = typer.Option(False, "--verbose", help="Verbose output"),
    project_dir: Path = typer.Option(Path.cwd(), "--project-dir", "-d", help=PROJECT_DIR_HELP),
) -> None:
    """
    Resolve entries and print 'TARGET: file' for every file read. Nothing is written.
    """
    config = load_project(project_dir, env, verbose)
    options = build_options(config, referrer=referrer, dependency_target=target)
    base_dir = project_dir.resolve()

    try:
        asyncio.run(
            recursive_module_compile(
                resolve_entries(parse_entries(entries), base_dir=base_dir),
                options,
                compiler=TextCompiler(options),
                base_dir=base_dir,
                loader_factory=partial(SourceLoader, reporter=_echo_dependency),
            )
        )
    except (ModcompileError, OSError) as e:
        fail(str(e), e)
