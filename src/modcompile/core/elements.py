"""
Compiled elements and the ordered tree assembled from them.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field


@dataclass(frozen=True)
class Element:
    """Base class for anything that can appear in a compiled tree."""

    name: str


@dataclass(frozen=True)
class CompiledUnit(Element):
    """Output of compiling one module or script."""

    kind: str = "module"
    text: str = ""
    dependencies: tuple[str, ...] = ()
    source_path: str | None = None


@dataclass(frozen=True)
class EvaluationStatement(Element):
    """Instruction to evaluate an already registered module by name."""


@dataclass(frozen=True)
class Tree:
    """Finished, ordered sequence of elements ready for rendering."""

    elements: tuple[Element, ...] = field(default_factory=tuple)

    def __iter__(self) -> Iterator[Element]:
        return iter(self.elements)

    def __len__(self) -> int:
        return len(self.elements)

    @property
    def names(self) -> list[str]:
        return [element.name for element in self.elements]
