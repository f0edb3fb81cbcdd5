"""
Shared fixtures: recording loader and compiler fakes.
"""

import asyncio
import os
from pathlib import Path

import pytest

from modcompile.core.elements import CompiledUnit, EvaluationStatement, Tree
from modcompile.core.interfaces import Compiler, Loader
from modcompile.core.session import LoaderSession
from modcompile.core.types import CompileOptions, LoadOptions


class FakeCompiler(Compiler):
    """Compiler that renders element names and records writes in memory."""

    def __init__(self, options: CompileOptions, writes: list | None = None):
        super().__init__(options)
        self.writes = writes if writes is not None else []

    def compile_module(self, name, source, dependencies, options):
        return CompiledUnit(name, kind="module", text=source, dependencies=tuple(dependencies))

    def compile_script(self, name, source, options):
        return CompiledUnit(name, kind="script", text=source)

    def render(self, tree: Tree) -> str:
        parts = []
        for element in tree:
            prefix = "eval" if isinstance(element, EvaluationStatement) else "unit"
            parts.append(f"{prefix}:{element.name}")
        return "\n".join(parts)

    async def write_tree_to_file(self, tree, path):
        await asyncio.sleep(0)
        self.writes.append((tree, Path(path)))


class RecordingLoader(Loader):
    """Loader that appends one unit per call and records what it saw."""

    def __init__(self, factory: "RecordingLoaderFactory", session: LoaderSession, compiler: Compiler):
        super().__init__(session, compiler)
        self.factory = factory

    async def _load(self, kind: str, name: str, load_options: LoadOptions) -> None:
        f = self.factory
        f.events.append(("start", name))
        f.calls.append(
            {
                "kind": kind,
                "name": name,
                "referrer": load_options.referrer_name,
                "options": load_options.options,
                "marker": load_options.options.get("marker") if load_options.options else None,
                "cwd": os.getcwd(),
            }
        )
        if load_options.options is not None and f.mutate_options:
            load_options.options.extras["marker"] = f"mutated-by-{name}"

        await asyncio.sleep(f.delays.get(name, 0))
        if name in f.failures:
            f.events.append(("fail", name))
            raise f.failures[name]

        for injected in f.injected.get(name, []):
            self.session.append(CompiledUnit(injected, kind="module"))
        self.session.append(CompiledUnit(name, kind=kind))
        f.events.append(("end", name))

    async def import_module(self, name, load_options):
        await self._load("module", name, load_options)

    async def load_as_script(self, name, load_options):
        await self._load("script", name, load_options)


class RecordingLoaderFactory:
    """Loader factory sharing one record across every session it serves."""

    def __init__(self):
        self.calls: list[dict] = []
        self.events: list[tuple[str, str]] = []
        self.sessions: list[LoaderSession] = []
        self.delays: dict[str, float] = {}
        self.failures: dict[str, Exception] = {}
        self.injected: dict[str, list[str]] = {}
        self.mutate_options = False

    def __call__(self, session: LoaderSession, compiler: Compiler) -> RecordingLoader:
        self.sessions.append(session)
        return RecordingLoader(self, session, compiler)

    def started(self) -> list[str]:
        return [name for event, name in self.events if event == "start"]


class RecordingCompilerFactory:
    """Compiler factory keeping every compiler built and every write made."""

    def __init__(self):
        self.compilers: list[FakeCompiler] = []
        self.writes: list[tuple[Tree, Path]] = []

    def __call__(self, options: CompileOptions) -> FakeCompiler:
        compiler = FakeCompiler(options, self.writes)
        self.compilers.append(compiler)
        return compiler


def element_names(elements) -> list[tuple[str, str]]:
    """(type, name) pairs for easy ordering assertions."""
    return [("eval" if isinstance(e, EvaluationStatement) else "unit", e.name) for e in elements]


@pytest.fixture
def loader_factory() -> RecordingLoaderFactory:
    return RecordingLoaderFactory()


@pytest.fixture
def compiler_factory() -> RecordingCompilerFactory:
    return RecordingCompilerFactory()


@pytest.fixture
def restore_cwd():
    """Put the working directory back even if a test leaves it changed."""
    before = os.getcwd()
    yield before
    os.chdir(before)


@pytest.fixture
def project(tmp_path: Path) -> Path:
    """Small source tree: main.js imports util.js and helper, util.js imports helper.js."""
    src = tmp_path / "src"
    (src / "lib").mkdir(parents=True)
    (src / "main.js").write_text('import {util} from "./lib/util.js";\nimport "./lib/helper";\nconsole.log(util);\n')
    (src / "lib" / "util.js").write_text('import "./helper.js";\nexport var util = 1;\n')
    (src / "lib" / "helper.js").write_text("export var helper = 2;\n")
    (src / "polyfill.js").write_text("var polyfilled = true;\n")
    return tmp_path
