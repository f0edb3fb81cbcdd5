"""
Interfaces for the collaborators driven by the compile pipeline.

A Loader resolves names to source and appends compiled elements to its
session; a Compiler turns source into elements and writes finished trees.
"""

from __future__ import annotations

import os
from abc import ABC, abstractmethod
from collections.abc import Callable, Sequence
from typing import TYPE_CHECKING

from modcompile.naming import normalize

if TYPE_CHECKING:
    from modcompile.core.elements import Element, Tree
    from modcompile.core.session import LoaderSession
    from modcompile.core.types import CompileOptions, LoadOptions


class Compiler(ABC):
    """Compiles single units and writes finished trees."""

    def __init__(self, options: "CompileOptions"):
        self.options = options

    @abstractmethod
    def compile_module(
        self, name: str, source: str, dependencies: Sequence[str], options: "CompileOptions"
    ) -> "Element":
        """Compile one module's source into an element."""
        ...

    @abstractmethod
    def compile_script(self, name: str, source: str, options: "CompileOptions") -> "Element":
        """Compile one script's source into an element."""
        ...

    @abstractmethod
    def render(self, tree: "Tree") -> str:
        """Render a tree to output text."""
        ...

    @abstractmethod
    async def write_tree_to_file(self, tree: "Tree", path: str | os.PathLike[str]) -> None:
        """Render ``tree`` and write it to ``path``, creating parent directories."""
        ...


class Loader(ABC):
    """Resolves entries and their dependencies into a session."""

    def __init__(self, session: "LoaderSession", compiler: Compiler):
        self.session = session
        self.compiler = compiler

    @abstractmethod
    async def import_module(self, name: str, load_options: "LoadOptions") -> None:
        """Load ``name`` as a module, dependencies included."""
        ...

    @abstractmethod
    async def load_as_script(self, name: str, load_options: "LoadOptions") -> None:
        """Load ``name`` as a plain script."""
        ...

    def canonical_name(self, name: str, referrer: str | None, options: "CompileOptions") -> str:
        """Name ``name`` is registered under when imported from ``referrer``."""
        return normalize(name, referrer)


#: Builds the loader for a fresh session
LoaderFactory = Callable[["LoaderSession", Compiler], Loader]

#: Builds the compiler for a compile request
CompilerFactory = Callable[["CompileOptions"], Compiler]
