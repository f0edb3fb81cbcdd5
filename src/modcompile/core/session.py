"""
Loader session: the ordered element collection for one compile request.
"""

from __future__ import annotations

import os
from pathlib import Path

from modcompile.core.elements import Element, Tree
from modcompile.exceptions import SessionClosedError


class LoaderSession:
    """
    Append-only, ordered collection of compiled elements.

    A session is created for a single compile request. Loaders append elements
    while resolving entries and their dependencies; once :meth:`finish` has been
    called the session rejects further changes.
    """

    def __init__(self, base_dir: str | os.PathLike[str]):
        self.base_dir = Path(base_dir)
        self._elements: list[Element] = []
        self._loaded: set[str] = set()
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def elements(self) -> tuple[Element, ...]:
        return tuple(self._elements)

    def append(self, element: Element) -> None:
        """Append an element after everything already collected."""
        if self._closed:
            raise SessionClosedError(f"Cannot append '{element.name}': session already finished")
        self._elements.append(element)

    def mark_loaded(self, name: str) -> bool:
        """
        Record that ``name`` is being loaded in this session.

        Returns False if it was already recorded, so loaders can skip shared
        dependencies and cycles.
        """
        if name in self._loaded:
            return False
        self._loaded.add(name)
        return True

    def finish(self, dependency_target: str | None = None) -> Tree | None:
        """
        Close the session and return its tree.

        Returns None in dependency-target mode, where the only wanted output is
        the dependency list the loader has already reported.
        """
        if self._closed:
            raise SessionClosedError("Session already finished")
        self._closed = True
        if dependency_target:
            return None
        return Tree(tuple(self._elements))
