"""
Main CLI entry point.
"""

import typer

from modcompile import __version__
from modcompile.cli import bundle, deps, each


def version_callback(value: bool):
    """Callback to display version and exit."""
    if value:
        typer.echo(f"modcompile version {__version__}")
        raise typer.Exit()


app = typer.Typer(
    name="modcompile",
    help="modcompile - compile modules and their dependencies into bundles or mirrored trees",
    add_completion=False,
)

app.command("bundle")(bundle.bundle)
app.command("each")(each.each)
app.command("deps")(deps.deps)


@app.callback(invoke_without_command=True)
def entrypoint(
    ctx: typer.Context,
    version: bool = typer.Option(
        False,
        "--version",
        "-v",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
):
    """
    modcompile - compile modules and their dependencies into bundles or mirrored trees.

    Run 'modcompile <command> --help' for help on a specific command.
    """
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()


def main():
    """Main CLI entry point."""
    app()


if __name__ == "__main__":
    main()
