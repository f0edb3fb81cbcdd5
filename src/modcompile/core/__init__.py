"""
Core compile pipeline: entry resolution, ordered loading and artifact emission.
"""

from modcompile.core.elements import CompiledUnit, Element, EvaluationStatement, Tree
from modcompile.core.session import LoaderSession
from modcompile.core.types import CompileOptions, Entry, EntryKind, LoadOptions, ModuleMode
from modcompile.core.writer import (
    EntryResult,
    compile_each_to_directory,
    compile_to_single_file,
    recursive_module_compile,
)

__all__ = [
    "CompileOptions",
    "CompiledUnit",
    "Element",
    "Entry",
    "EntryKind",
    "EntryResult",
    "EvaluationStatement",
    "LoadOptions",
    "LoaderSession",
    "ModuleMode",
    "Tree",
    "compile_each_to_directory",
    "compile_to_single_file",
    "recursive_module_compile",
]
