"""
Bundled loader and compiler implementations.
"""

from modcompile.loaders.source import SourceLoader, extract_dependencies
from modcompile.loaders.text import TextCompiler

__all__ = [
    "SourceLoader",
    "TextCompiler",
    "extract_dependencies",
]
