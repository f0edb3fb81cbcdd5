"""
Programmatic API for modcompile.
"""

from __future__ import annotations

import os
from collections.abc import Iterable
from pathlib import Path
from typing import Any

from modcompile.config.loader import load_config
from modcompile.core.elements import Tree
from modcompile.core.interfaces import CompilerFactory, LoaderFactory
from modcompile.core.types import CompileOptions, Entry
from modcompile.core.writer import EntryResult, compile_each_to_directory, compile_to_single_file
from modcompile.utils.async_utils import dual


def to_entries(entries: Iterable[str | Entry] | str | Entry) -> list[Entry]:
    """Normalize entry specs; strings use the ``script:path`` convention of :meth:`Entry.parse`."""
    if isinstance(entries, (str, Entry)):
        entries = [entries]
    return [entry if isinstance(entry, Entry) else Entry.parse(entry) for entry in entries]


def build_options(
    project_dir: str | os.PathLike[str] | None = None,
    env: str | None = None,
    **overrides: Any,
) -> CompileOptions:
    """
    Build compile options from the project's modcompile.yaml ``compile`` section.

    Keyword overrides that are not None take precedence over the file.
    """
    config = load_config(Path(project_dir) if project_dir else None, env=env or os.environ.get("MODCOMPILE_ENV"))
    return CompileOptions.from_mapping(config.compile, **overrides)


@dual
async def bundle(
    output_file: str | os.PathLike[str],
    entries: Iterable[str | Entry] | str | Entry,
    *,
    options: CompileOptions | None = None,
    base_dir: str | os.PathLike[str] | None = None,
    loader_factory: LoaderFactory | None = None,
    compiler_factory: CompilerFactory | None = None,
    **overrides: Any,
) -> Tree | None:
    """
    Compile entries into a single file; works in both sync and async contexts.

    Args:
        output_file: File to write
        entries: Entry specs or Entry objects, in load order
        options: Ready-made options; when omitted they are built from the
            project's modcompile.yaml plus ``overrides``
        base_dir: Directory relative paths are resolved against
            (default: the directory the process started in)
        loader_factory: Custom loader (default: SourceLoader)
        compiler_factory: Custom compiler (default: TextCompiler)
        **overrides: module_mode, referrer, dependency_target, project_dir, env, or pass-through extras

    Returns:
        The written tree, or None in dependency-target mode

    Examples:
        bundle("out/app.js", ["src/main.js", "script:src/polyfill.js"], module_mode="register")
    """
    if options is None:
        options = build_options(**overrides)
    return await compile_to_single_file(
        output_file,
        to_entries(entries),
        options,
        base_dir=base_dir,
        loader_factory=loader_factory,
        compiler_factory=compiler_factory,
    )


@dual
async def compile_each(
    output_dir: str | os.PathLike[str],
    entries: Iterable[str | Entry] | str | Entry,
    *,
    options: CompileOptions | None = None,
    base_dir: str | os.PathLike[str] | None = None,
    loader_factory: LoaderFactory | None = None,
    compiler_factory: CompilerFactory | None = None,
    **overrides: Any,
) -> list[EntryResult]:
    """
    Compile each entry into its own file under ``output_dir``; works in both sync and async contexts.

    Returns one EntryResult per entry; failures are reported there, not raised.
    """
    if options is None:
        options = build_options(**overrides)
    return await compile_each_to_directory(
        output_dir,
        to_entries(entries),
        options,
        base_dir=base_dir,
        loader_factory=loader_factory,
        compiler_factory=compiler_factory,
    )
