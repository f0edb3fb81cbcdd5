"""
Entry path resolution.

Names are made absolute against the directory the process started in, never
against whatever the working directory is at call time, so resolution is
unaffected by the single-file writer switching directories.
"""

from __future__ import annotations

import os
from collections.abc import Iterable
from dataclasses import replace
from pathlib import Path

from modcompile.core.types import Entry

# Captured once at import, before any directory switch
INITIAL_CWD = os.getcwd()


def normalize_path(path: str | os.PathLike[str]) -> str:
    """Return ``path`` with forward slashes on every platform."""
    return os.fspath(path).replace("\\", "/")


def resolve_absolute(name: str, base_dir: str | os.PathLike[str] | None = None) -> str:
    """Make ``name`` absolute against ``base_dir`` (default: the initial cwd). Absolute names pass through."""
    if os.path.isabs(name):
        return os.path.normpath(name)
    return os.path.normpath(os.path.join(base_dir or INITIAL_CWD, name))


def resolve_relative_to(name: str, directory: str | os.PathLike[str]) -> str:
    """Rewrite an absolute ``name`` relative to ``directory``, with forward slashes."""
    return normalize_path(os.path.relpath(name, directory))


def resolve_entries(
    entries: Iterable[Entry],
    output_dir: str | os.PathLike[str] | None = None,
    base_dir: str | os.PathLike[str] | None = None,
) -> list[Entry]:
    """
    Resolve entry names for the compile pipeline.

    Every name is made absolute against ``base_dir`` (default: the initial
    cwd). When ``output_dir`` is given, the absolute name is then rewritten
    relative to it, which is what a merged artifact in ``output_dir`` needs.

    Returns new Entry objects; the inputs are not modified.
    """
    resolved = []
    for entry in entries:
        name = resolve_absolute(entry.name, base_dir)
        if output_dir is not None:
            name = resolve_relative_to(name, output_dir)
        resolved.append(replace(entry, name=name))
    return resolved


def mirror_path(entry_name: str, output_dir: str | os.PathLike[str], base_dir: str | os.PathLike[str] | None = None) -> Path:
    """
    Output location for ``entry_name`` in a mirrored tree under ``output_dir``.

    Relative names are kept as given; absolute names are first made relative
    to ``base_dir`` (default: the initial cwd). Names that would still climb
    out of ``output_dir`` are mirrored by their absolute path, root removed.
    """
    name = os.path.normpath(entry_name)
    if os.path.isabs(name):
        try:
            name = os.path.relpath(name, base_dir or INITIAL_CWD)
        except ValueError:
            # Different drive on Windows
            pass
    if os.path.isabs(name) or name == os.pardir or name.startswith(os.pardir + os.sep):
        absolute = Path(resolve_absolute(entry_name, base_dir))
        name = os.fspath(absolute.relative_to(absolute.anchor))
    return Path(output_dir) / name
