"""
Filesystem source loader.

Reads modules and scripts relative to the session's base directory, discovers
static dependencies and loads them depth-first, so every dependency is in the
session before the module that imports it.
"""

from __future__ import annotations

import asyncio
import posixpath
import re
from collections.abc import Callable
from pathlib import Path

from modcompile.core.interfaces import Compiler, Loader
from modcompile.core.paths import normalize_path
from modcompile.core.session import LoaderSession
from modcompile.core.types import CompileOptions, LoadOptions
from modcompile.exceptions import CompileError, ResolutionError
from modcompile.naming import normalize
from modcompile.utils.logging import get_logger

logger = get_logger("modcompile.loaders.source")

DEFAULT_EXTENSION = ".js"

# import x from "a"; import {x} from "a"; import "a"; export * from "a"; export {x} from "a"
_DEPENDENCY_RE = re.compile(
    r"""^[ \t]*(?:import\s*(?:[\w*{}\s,$]+?\s*from\s*)?|export\s*[\w*{}\s,$]+?\s*from\s*)(['"])(?P<spec>[^'"\n]+)\1""",
    re.MULTILINE,
)

#: Receives (dependency_target, path) for every file read in dependency-target mode
DependencyReporter = Callable[[str, str], None]


def extract_dependencies(source: str) -> list[str]:
    """Return the module specifiers statically imported by ``source``, first occurrence order."""
    seen: dict[str, None] = {}
    for match in _DEPENDENCY_RE.finditer(source):
        seen.setdefault(match.group("spec"), None)
    return list(seen)


class SourceLoader(Loader):
    """Loader reading source text from disk."""

    def __init__(self, session: LoaderSession, compiler: Compiler, reporter: DependencyReporter | None = None):
        super().__init__(session, compiler)
        self.reporter = reporter

    async def import_module(self, name: str, load_options: LoadOptions) -> None:
        options = load_options.options or CompileOptions()
        canonical = self.canonical_name(name, load_options.referrer_name, options)
        if not self.session.mark_loaded(canonical):
            return

        path = self._locate(canonical)
        source = await self._read(path, canonical, load_options.referrer_name)
        self._report(path, options)

        specifiers = extract_dependencies(source)
        dependencies = [self.canonical_name(spec, canonical, options) for spec in specifiers]
        # Dependencies inherit this load's options, with this module as referrer
        nested = LoadOptions(referrer_name=canonical, metadata=load_options.metadata)
        for spec in specifiers:
            await self.import_module(spec, nested)

        logger.debug(f"Compiling module {canonical} ({len(dependencies)} dependencies)")
        self.session.append(self.compiler.compile_module(canonical, source, dependencies, options))

    async def load_as_script(self, name: str, load_options: LoadOptions) -> None:
        options = load_options.options or CompileOptions()
        canonical = self.canonical_name(name, load_options.referrer_name, options)
        if not self.session.mark_loaded(canonical):
            return

        path = self._locate(canonical)
        source = await self._read(path, canonical, load_options.referrer_name)
        self._report(path, options)

        logger.debug(f"Compiling script {canonical}")
        self.session.append(self.compiler.compile_script(canonical, source, options))

    def canonical_name(self, name: str, referrer: str | None, options: CompileOptions) -> str:
        """Normalized name, with the default extension added when it has none."""
        canonical = normalize(name, referrer)
        if not posixpath.splitext(canonical)[1]:
            canonical += options.get("extension", DEFAULT_EXTENSION)
        return canonical

    def _locate(self, name: str) -> Path:
        path = Path(name)
        return path if path.is_absolute() else self.session.base_dir / path

    async def _read(self, path: Path, name: str, referrer: str | None) -> str:
        try:
            return await asyncio.to_thread(path.read_text, encoding="utf-8")
        except (FileNotFoundError, IsADirectoryError, NotADirectoryError):
            raise ResolutionError(name, f"no such file {path}", referrer=referrer) from None
        except UnicodeDecodeError as e:
            raise CompileError(name, f"{path} is not valid UTF-8 ({e.reason} at byte {e.start})") from e

    def _report(self, path: Path, options: CompileOptions) -> None:
        target = options.dependency_target
        if not target:
            return
        try:
            shown = normalize_path(path.relative_to(self.session.base_dir))
        except ValueError:
            shown = normalize_path(path)
        if self.reporter is not None:
            self.reporter(target, shown)
        else:
            logger.info(f"{target}: {shown}")
