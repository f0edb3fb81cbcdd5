"""
modcompile bundle - Compile entries into one file.
"""

import asyncio
from pathlib import Path

import typer

from modcompile.cli.common import ENTRIES_HELP, PROJECT_DIR_HELP, build_options, fail, load_project, parse_entries
from modcompile.core.writer import compile_to_single_file
from modcompile.exceptions import ModcompileError


def bundle(
    output: Path = typer.Argument(..., help="Output file"),
    entries: list[str] = typer.Argument(..., help=ENTRIES_HELP),
    modules: str | None = typer.Option(None, "--modules", "-m", help="Module format (register, inline, bootstrap)"),
    referrer: str | None = typer.Option(None, "--referrer", help="Referrer name used to normalize module names"),
    env: str | None = typer.Option(None, help="Environment (selects modcompile.{env}.yaml)"),
    verbose: bool = typer.Option(False, "--verbose", help="Verbose output"),
    project_dir: Path = typer.Option(Path.cwd(), "--project-dir", "-d", help=PROJECT_DIR_HELP),
) -> None:
    """
    Compile entries and their dependencies, in order, into a single file.
    """
    config = load_project(project_dir, env, verbose)
    options = build_options(config, module_mode=modules, referrer=referrer)

    try:
        tree = asyncio.run(
            compile_to_single_file(output, parse_entries(entries), options, base_dir=project_dir.resolve())
        )
    except (ModcompileError, OSError) as e:
        fail(str(e), e)

    if tree is not None:
        typer.echo(f"Wrote {output} ({len(tree)} elements)")
