"""
Pass-through text compiler.

Does not transform source. Modules compiled in register mode are wrapped in
a ``System.registerModule`` call; everything else is emitted verbatim under a
``// name`` banner.
"""

from __future__ import annotations

import asyncio
import json
import os
from collections.abc import Sequence
from pathlib import Path

from modcompile.core.elements import CompiledUnit, Element, EvaluationStatement, Tree
from modcompile.core.interfaces import Compiler
from modcompile.core.types import CompileOptions
from modcompile.exceptions import CompileError, OutputError


class TextCompiler(Compiler):
    """Compiler producing plain text output."""

    def compile_module(
        self, name: str, source: str, dependencies: Sequence[str], options: CompileOptions
    ) -> CompiledUnit:
        body = source.rstrip()
        if options.is_register:
            text = (
                f"System.registerModule({json.dumps(name)}, {json.dumps(list(dependencies))}, function() {{\n"
                f"{body}\n"
                f"}});"
            )
        else:
            text = f"// {name}\n{body}"
        return CompiledUnit(name, kind="module", text=text, dependencies=tuple(dependencies))

    def compile_script(self, name: str, source: str, options: CompileOptions) -> CompiledUnit:
        return CompiledUnit(name, kind="script", text=f"// {name}\n{source.rstrip()}")

    def render_element(self, element: Element) -> str:
        if isinstance(element, EvaluationStatement):
            return f"System.get({json.dumps(element.name)});"
        if isinstance(element, CompiledUnit):
            return element.text
        raise CompileError(element.name, f"cannot render element of type {type(element).__name__}")

    def render(self, tree: Tree) -> str:
        return "".join(self.render_element(element) + "\n" for element in tree)

    async def write_tree_to_file(self, tree: Tree, path: str | os.PathLike[str]) -> None:
        text = self.render(tree)
        target = Path(path)

        def write() -> None:
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(text, encoding="utf-8")

        try:
            await asyncio.to_thread(write)
        except OSError as e:
            raise OutputError(str(target), e.strerror or str(e)) from e
