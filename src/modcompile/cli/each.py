"""
modcompile each - Compile every entry into its own file.
"""

import asyncio
from pathlib import Path

import typer

from modcompile.cli.common import ENTRIES_HELP, PROJECT_DIR_HELP, build_options, fail, load_project, parse_entries
from modcompile.core.writer import compile_each_to_directory
from modcompile.exceptions import ModcompileError


def each(
    output_dir: Path = typer.Argument(..., help="Directory the compiled tree is mirrored into"),
    entries: list[str] = typer.Argument(..., help=ENTRIES_HELP),
    modules: str | None = typer.Option(None, "--modules", "-m", help="Module format (register, inline, bootstrap)"),
    referrer: str | None = typer.Option(None, "--referrer", help="Referrer name used to normalize module names"),
    env: str | None = typer.Option(None, help="Environment (selects modcompile.{env}.yaml)"),
    verbose: bool = typer.Option(False, "--verbose", help="Verbose output"),
    project_dir: Path = typer.Option(Path.cwd(), "--project-dir", "-d", help=PROJECT_DIR_HELP),
) -> None:
    """
    Compile each entry separately, mirroring its path under OUTPUT_DIR.
    """
    config = load_project(project_dir, env, verbose)
    options = build_options(config, module_mode=modules, referrer=referrer)

    try:
        results = asyncio.run(
            compile_each_to_directory(output_dir, parse_entries(entries), options, base_dir=project_dir.resolve())
        )
    except (ModcompileError, OSError) as e:
        fail(str(e), e)

    failed = 0
    for result in results:
        if result.ok:
            typer.echo(f"ok     {result.entry.name} -> {result.output_path}")
        else:
            failed += 1
            typer.echo(f"failed {result.entry.name}: {result.error}", err=True)

    if failed:
        raise typer.Exit(1)
