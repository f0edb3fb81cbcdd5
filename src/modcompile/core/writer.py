"""
Compile pipelines and artifact emission.

Two strategies share one pipeline (:func:`recursive_module_compile`):

- :func:`compile_to_single_file` merges every entry, in order, into one file.
- :func:`compile_each_to_directory` compiles each entry on its own and mirrors
  the results under an output directory, running the entries concurrently.
"""

from __future__ import annotations

import asyncio
import os
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

from modcompile.core.elements import Tree
from modcompile.core.interfaces import Compiler, CompilerFactory, LoaderFactory
from modcompile.core.orchestrator import ModuleLoadOrchestrator
from modcompile.core.paths import INITIAL_CWD, mirror_path, resolve_absolute, resolve_entries
from modcompile.core.sequencer import run_all
from modcompile.core.session import LoaderSession
from modcompile.core.types import CompileOptions, Entry
from modcompile.core.workdir import working_directory
from modcompile.utils.logging import get_logger

logger = get_logger("modcompile.writer")


def _default_loader_factory() -> LoaderFactory:
    from modcompile.loaders.source import SourceLoader

    return SourceLoader


def _default_compiler_factory() -> CompilerFactory:
    from modcompile.loaders.text import TextCompiler

    return TextCompiler


@dataclass
class EntryResult:
    """Outcome of compiling one entry in fan-out mode."""

    entry: Entry
    output_path: Path
    tree: Tree | None = None
    error: BaseException | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


async def recursive_module_compile(
    entries: Sequence[Entry],
    options: CompileOptions,
    *,
    compiler: Compiler,
    base_dir: str | os.PathLike[str],
    loader_factory: LoaderFactory | None = None,
) -> Tree | None:
    """
    Load ``entries`` and their dependencies in order and assemble the result.

    Args:
        entries: Resolved entries, loaded strictly in this order
        options: Compile options; every load receives its own copy
        compiler: Compiler the loader hands source to
        base_dir: Directory entry and dependency names are resolved against
        loader_factory: Builds the loader for the new session (default: SourceLoader)

    Returns:
        The merged tree, or None in dependency-target mode
    """
    session = LoaderSession(base_dir)
    loader = (loader_factory or _default_loader_factory())(session, compiler)
    orchestrator = ModuleLoadOrchestrator(loader, session)

    await run_all(entries, options, orchestrator)
    return session.finish(options.dependency_target)


async def compile_to_single_file(
    output_file: str | os.PathLike[str],
    entries: Sequence[Entry],
    options: CompileOptions | None = None,
    *,
    base_dir: str | os.PathLike[str] | None = None,
    loader_factory: LoaderFactory | None = None,
    compiler_factory: CompilerFactory | None = None,
) -> Tree | None:
    """
    Compile ``entries`` into one file at ``output_file``.

    Entry names are resolved against ``base_dir`` (default: the directory the
    process started in) and then made relative to the output file's directory.
    Loading and writing happen with the working directory switched to that
    directory; it is restored whether the compile succeeds or fails.

    Returns:
        The written tree, or None in dependency-target mode (nothing is written)
    """
    base_dir = base_dir or INITIAL_CWD
    resolved_output = Path(resolve_absolute(os.fspath(output_file), base_dir))
    output_dir = resolved_output.parent

    resolved = resolve_entries(entries, output_dir=output_dir, base_dir=base_dir)
    options = (options or CompileOptions()).with_bundle(len(resolved) > 1)
    compiler = (compiler_factory or _default_compiler_factory())(options)

    async with working_directory(output_dir):
        tree = await recursive_module_compile(
            resolved, options, compiler=compiler, base_dir=output_dir, loader_factory=loader_factory
        )
        if tree is not None:
            await compiler.write_tree_to_file(tree, resolved_output)
            logger.info(f"Wrote {len(tree)} element(s) to {resolved_output}")
    return tree


async def compile_each_to_directory(
    output_dir: str | os.PathLike[str],
    entries: Sequence[Entry],
    options: CompileOptions | None = None,
    *,
    base_dir: str | os.PathLike[str] | None = None,
    loader_factory: LoaderFactory | None = None,
    compiler_factory: CompilerFactory | None = None,
) -> list[EntryResult]:
    """
    Compile every entry separately into a mirrored tree under ``output_dir``.

    Entries run concurrently, each in its own session; the working directory
    is never changed. One entry failing does not stop the others.

    Returns:
        One EntryResult per entry, in input order
    """
    base_dir = base_dir or INITIAL_CWD
    out = Path(resolve_absolute(os.fspath(output_dir), base_dir))
    options = (options or CompileOptions()).with_bundle(False)
    compiler = (compiler_factory or _default_compiler_factory())(options)

    async def compile_one(entry: Entry, output_path: Path) -> Tree | None:
        resolved = resolve_entries([entry], base_dir=base_dir)
        tree = await recursive_module_compile(
            resolved, options, compiler=compiler, base_dir=base_dir, loader_factory=loader_factory
        )
        if tree is not None:
            await compiler.write_tree_to_file(tree, output_path)
            logger.info(f"Wrote {entry.name} to {output_path}")
        return tree

    output_paths = [mirror_path(entry.name, out, base_dir) for entry in entries]
    outcomes = await asyncio.gather(
        *(compile_one(entry, path) for entry, path in zip(entries, output_paths)),
        return_exceptions=True,
    )

    results = []
    for entry, path, outcome in zip(entries, output_paths, outcomes):
        if isinstance(outcome, BaseException):
            if not isinstance(outcome, Exception):
                raise outcome
            logger.error(f"Failed to compile {entry.name}: {outcome}")
            results.append(EntryResult(entry, path, error=outcome))
        else:
            results.append(EntryResult(entry, path, tree=outcome))
    return results
